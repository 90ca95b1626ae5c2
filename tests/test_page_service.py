import pytest
from pytest_mock import MockerFixture
from sqlalchemy import func, select, text

from buzzinga.extensions import db
from buzzinga.models.page import Page
from buzzinga.models.user import User
from buzzinga.domain.exceptions import (
    DuplicateSlug,
    NotFound,
    StorageConflict,
    Unauthenticated,
    ValidationError,
)
from buzzinga.application.pages.create_page import create_page
from buzzinga.application.pages.update_page import update_page
from buzzinga.application.pages.delete_page import delete_page
from buzzinga.application.pages.queries import (
    get_home_page,
    get_page,
    get_published_page,
    list_pages,
)
import buzzinga.application.pages.update_page as update_page_module


def page_count(**filters) -> int:
    stmt = select(func.count(Page.id))
    for column, value in filters.items():
        stmt = stmt.where(getattr(Page, column) == value)
    return db.session.execute(stmt).scalar_one()


def home_count(author_id: str) -> int:
    return db.session.execute(
        select(func.count(Page.id)).where(
            Page.author_id == author_id,
            Page.is_home_page.is_(True),
        )
    ).scalar_one()


def test_create_page_defaults(author: User) -> None:
    page = create_page(author_id=author.id, data={"title": "About", "slug": "about"})

    assert page.id
    assert page.author_id == author.id
    assert page.status == "DRAFT"
    assert page.content == {}
    assert page.keywords == []
    assert page.is_home_page is False
    assert page.custom_css is None


def test_create_page_stores_all_fields(author: User) -> None:
    page = create_page(
        author_id=author.id,
        data={
            "title": "Landing",
            "slug": "landing",
            "content": {"blocks": [{"type": "heading"}]},
            "customCss": "body { color: red; }",
            "customJs": "console.log(1)",
            "status": "published",
            "description": "Landing page",
            "keywords": ["a", "b"],
            "ogImage": "https://cdn.example.com/og.png",
        },
    )

    stored = get_page(page_id=page.id)
    assert stored.status == "PUBLISHED"
    assert stored.content == {"blocks": [{"type": "heading"}]}
    assert stored.custom_css == "body { color: red; }"
    assert stored.custom_js == "console.log(1)"
    assert stored.keywords == ["a", "b"]
    assert stored.og_image == "https://cdn.example.com/og.png"


@pytest.mark.usefixtures("app")
def test_create_page_requires_author() -> None:
    with pytest.raises(Unauthenticated):
        create_page(author_id=None, data={"title": "T", "slug": "t"})

    assert page_count() == 0


@pytest.mark.parametrize(
    "data",
    [
        {"slug": "no-title"},
        {"title": "   ", "slug": "blank-title"},
        {"title": "No slug"},
        {"title": "Spaced", "slug": "has space"},
        {"title": "Bad status", "slug": "bad-status", "status": "ARCHIVED"},
        {"title": "Bad keywords", "slug": "bad-keywords", "keywords": "a,b"},
    ],
)
def test_create_page_rejects_invalid_input(author: User, data) -> None:
    with pytest.raises(ValidationError):
        create_page(author_id=author.id, data=data)

    assert page_count() == 0


def test_home_page_moves_to_newest_page(author: User) -> None:
    home = create_page(
        author_id=author.id,
        data={"title": "Home", "slug": "home", "isHomePage": True},
    )
    assert home.is_home_page is True

    about = create_page(
        author_id=author.id,
        data={"title": "About", "slug": "about", "isHomePage": True},
    )

    assert about.is_home_page is True
    assert get_page(page_id=home.id).is_home_page is False
    assert home_count(author.id) == 1
    assert get_home_page(author_id=author.id).id == about.id


def test_home_page_is_scoped_per_author(author: User, other_author: User) -> None:
    first = create_page(
        author_id=author.id,
        data={"title": "Home", "slug": "home-1", "isHomePage": True},
    )
    second = create_page(
        author_id=other_author.id,
        data={"title": "Home", "slug": "home-2", "isHomePage": True},
    )

    assert get_page(page_id=first.id).is_home_page is True
    assert get_page(page_id=second.id).is_home_page is True
    assert home_count(author.id) == 1
    assert home_count(other_author.id) == 1


def test_only_literal_true_sets_home_page_on_create(author: User) -> None:
    page = create_page(
        author_id=author.id,
        data={"title": "Home", "slug": "home", "isHomePage": "yes"},
    )
    assert page.is_home_page is False


def test_duplicate_slug_on_create(author: User) -> None:
    create_page(author_id=author.id, data={"title": "X", "slug": "x"})

    with pytest.raises(DuplicateSlug) as exc_info:
        create_page(author_id=author.id, data={"title": "X again", "slug": "x"})

    assert exc_info.value.message == "A page with this slug already exists"
    assert page_count(slug="x") == 1


def test_duplicate_slug_across_authors(author: User, other_author: User) -> None:
    create_page(author_id=author.id, data={"title": "X", "slug": "x"})

    with pytest.raises(DuplicateSlug):
        create_page(author_id=other_author.id, data={"title": "X", "slug": "x"})


def test_slugs_are_case_sensitive(author: User) -> None:
    create_page(author_id=author.id, data={"title": "Lower", "slug": "about"})
    create_page(author_id=author.id, data={"title": "Upper", "slug": "About"})

    assert page_count() == 2


def test_constraint_catches_slug_race(author: User, mocker: MockerFixture) -> None:
    create_page(author_id=author.id, data={"title": "X", "slug": "x"})

    # Both writers passed the read-side check; only the constraint is left
    mocker.patch("buzzinga.application.pages.create_page.assert_slug_available")

    with pytest.raises(DuplicateSlug):
        create_page(author_id=author.id, data={"title": "X again", "slug": "x"})

    assert page_count(slug="x") == 1


def test_constraint_catches_home_page_race(author: User, mocker: MockerFixture) -> None:
    create_page(author_id=author.id, data={"title": "Home", "slug": "home", "isHomePage": True})

    # The concurrent writer never saw the existing home page
    mocker.patch(
        "buzzinga.application.pages.create_page.clear_home_pages",
        return_value=0,
    )

    with pytest.raises(StorageConflict):
        create_page(
            author_id=author.id,
            data={"title": "About", "slug": "about", "isHomePage": True},
        )

    assert home_count(author.id) == 1
    assert page_count(slug="about") == 0


def test_partial_update_preserves_untouched_fields(author: User) -> None:
    page = create_page(
        author_id=author.id,
        data={
            "title": "Original",
            "slug": "original",
            "content": {"blocks": []},
            "customCss": ".a {}",
            "status": "PUBLISHED",
            "isHomePage": True,
        },
    )

    update_page(page_id=page.id, data={"title": "X"})

    stored = get_page(page_id=page.id)
    assert stored.title == "X"
    assert stored.slug == "original"
    assert stored.content == {"blocks": []}
    assert stored.custom_css == ".a {}"
    assert stored.status == "PUBLISHED"
    assert stored.is_home_page is True


def test_update_ignores_falsy_values_for_required_fields(author: User) -> None:
    page = create_page(author_id=author.id, data={"title": "Keep", "slug": "keep"})

    update_page(page_id=page.id, data={"title": "", "slug": None, "status": ""})

    stored = get_page(page_id=page.id)
    assert stored.title == "Keep"
    assert stored.slug == "keep"
    assert stored.status == "DRAFT"


def test_update_null_clears_optional_fields(author: User) -> None:
    page = create_page(
        author_id=author.id,
        data={"title": "T", "slug": "t", "customCss": ".a {}", "description": "d"},
    )

    update_page(page_id=page.id, data={"customCss": None, "description": None})

    stored = get_page(page_id=page.id)
    assert stored.custom_css is None
    assert stored.description is None


def test_update_with_unchanged_slug_skips_duplicate_check(
    author: User, mocker: MockerFixture
) -> None:
    page = create_page(author_id=author.id, data={"title": "A", "slug": "a"})
    spy = mocker.spy(update_page_module, "assert_slug_available")

    updated = update_page(page_id=page.id, data={"slug": "a", "title": "A2"})

    assert updated.slug == "a"
    assert updated.title == "A2"
    spy.assert_not_called()


def test_update_to_taken_slug_fails_without_changes(author: User) -> None:
    create_page(author_id=author.id, data={"title": "A", "slug": "a"})
    page = create_page(author_id=author.id, data={"title": "B", "slug": "b"})

    with pytest.raises(DuplicateSlug):
        update_page(page_id=page.id, data={"slug": "a", "title": "Renamed"})

    stored = get_page(page_id=page.id)
    assert stored.slug == "b"
    assert stored.title == "B"


def test_update_sets_home_page_and_clears_sibling(author: User) -> None:
    home = create_page(
        author_id=author.id,
        data={"title": "Home", "slug": "home", "isHomePage": True},
    )
    about = create_page(author_id=author.id, data={"title": "About", "slug": "about"})

    update_page(page_id=about.id, data={"isHomePage": True})

    assert get_page(page_id=about.id).is_home_page is True
    assert get_page(page_id=home.id).is_home_page is False
    assert home_count(author.id) == 1


def test_update_unsetting_home_page_touches_only_that_page(author: User) -> None:
    home = create_page(
        author_id=author.id,
        data={"title": "Home", "slug": "home", "isHomePage": True},
    )
    create_page(author_id=author.id, data={"title": "About", "slug": "about"})

    update_page(page_id=home.id, data={"isHomePage": False})

    assert home_count(author.id) == 0


def test_update_home_page_uses_owner_not_other_authors(
    author: User, other_author: User
) -> None:
    theirs = create_page(
        author_id=other_author.id,
        data={"title": "Theirs", "slug": "theirs", "isHomePage": True},
    )
    mine = create_page(author_id=author.id, data={"title": "Mine", "slug": "mine"})

    update_page(page_id=mine.id, data={"isHomePage": True})

    assert get_page(page_id=theirs.id).is_home_page is True
    assert home_count(author.id) == 1
    assert home_count(other_author.id) == 1


def test_update_missing_page_is_not_found(author: User) -> None:
    create_page(author_id=author.id, data={"title": "A", "slug": "a"})

    with pytest.raises(NotFound):
        update_page(page_id="zzz", data={"title": "X"})

    assert page_count(title="X") == 0


def test_update_of_page_deleted_mid_request_is_not_found(
    author: User, mocker: MockerFixture
) -> None:
    page_id = create_page(author_id=author.id, data={"title": "A", "slug": "a"}).id

    def delete_row(*args, **kwargs):
        db.session.execute(text("DELETE FROM pages WHERE id = :id"), {"id": page_id})

    # Another request removes the row after update_page has loaded it
    mocker.patch.object(update_page_module, "assert_slug_available", side_effect=delete_row)

    with pytest.raises(NotFound):
        update_page(page_id=page_id, data={"slug": "b"})


def test_update_rejects_slug_with_whitespace(author: User) -> None:
    page = create_page(author_id=author.id, data={"title": "A", "slug": "a"})

    with pytest.raises(ValidationError):
        update_page(page_id=page.id, data={"slug": "a b"})

    assert get_page(page_id=page.id).slug == "a"


def test_delete_page(author: User) -> None:
    page = create_page(author_id=author.id, data={"title": "A", "slug": "a"})

    delete_page(page_id=page.id)

    assert page_count() == 0
    with pytest.raises(NotFound):
        get_page(page_id=page.id)


def test_delete_unknown_page_removes_nothing(author: User) -> None:
    create_page(author_id=author.id, data={"title": "A", "slug": "a"})

    with pytest.raises(NotFound):
        delete_page(page_id="zzz")

    assert page_count() == 1


def test_delete_of_already_removed_page_is_not_found(author: User) -> None:
    page_id = create_page(author_id=author.id, data={"title": "A", "slug": "a"}).id
    get_page(page_id=page_id)

    # A concurrent delete removed the row while it was still in this session
    db.session.execute(text("DELETE FROM pages WHERE id = :id"), {"id": page_id})
    db.session.commit()

    with pytest.raises(NotFound):
        delete_page(page_id=page_id)


def test_second_delete_of_same_page_is_not_found(author: User) -> None:
    page_id = create_page(author_id=author.id, data={"title": "A", "slug": "a"}).id

    delete_page(page_id=page_id)

    with pytest.raises(NotFound):
        delete_page(page_id=page_id)


def test_deleting_home_page_leaves_author_without_one(author: User) -> None:
    home = create_page(
        author_id=author.id,
        data={"title": "Home", "slug": "home", "isHomePage": True},
    )

    delete_page(page_id=home.id)

    assert get_home_page(author_id=author.id) is None


def test_list_pages_is_scoped_to_author(author: User, other_author: User) -> None:
    create_page(author_id=author.id, data={"title": "A", "slug": "a"})
    create_page(author_id=author.id, data={"title": "B", "slug": "b", "status": "PUBLISHED"})
    create_page(author_id=other_author.id, data={"title": "C", "slug": "c"})

    assert {p.slug for p in list_pages(author_id=author.id)} == {"a", "b"}
    assert [p.slug for p in list_pages(author_id=author.id, status="PUBLISHED")] == ["b"]
    assert [p.slug for p in list_pages(author_id=other_author.id)] == ["c"]


def test_list_pages_requires_author() -> None:
    with pytest.raises(Unauthenticated):
        list_pages(author_id=None)


def test_get_published_page_hides_drafts(author: User) -> None:
    create_page(author_id=author.id, data={"title": "Draft", "slug": "draft"})
    create_page(author_id=author.id, data={"title": "Live", "slug": "live", "status": "PUBLISHED"})

    assert get_published_page(slug="live").title == "Live"
    with pytest.raises(NotFound):
        get_published_page(slug="draft")
