import logging
from typing import Any, Dict
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError
from buzzinga.extensions import db
from buzzinga.models.page import Page
from buzzinga.domain.exceptions import NotFound, ValidationError
from buzzinga.domain.invariants.page import assert_single_home_page
from buzzinga.domain.invariants.slug import assert_slug_available, assert_slug_value
from buzzinga.domain.lifecycle.page import normalize_page_status
from buzzinga.utils.transaction import transactional
from .errors import translate_page_integrity_error
from .home_page import clear_home_pages

logger = logging.getLogger(__name__)

# Applied only when the incoming value is truthy
TRUTHY_FIELDS = {
    "title": "title",
    "slug": "slug",
    "content": "content",
    "status": "status",
    "keywords": "keywords",
}

# Applied whenever the key is present; null clears the column
NULLABLE_FIELDS = {
    "customCss": "custom_css",
    "customJs": "custom_js",
    "description": "description",
    "ogImage": "og_image",
}


def _collect_changes(data: Dict[str, Any]) -> Dict[str, Any]:
    changes: Dict[str, Any] = {}

    for key, column in TRUTHY_FIELDS.items():
        if data.get(key):
            changes[column] = data[key]

    for key, column in NULLABLE_FIELDS.items():
        if key in data:
            changes[column] = data[key]

    if "isHomePage" in data:
        changes["is_home_page"] = bool(data["isHomePage"])

    if "title" in changes and not isinstance(changes["title"], str):
        raise ValidationError("Title must be a string")

    if "slug" in changes:
        assert_slug_value(changes["slug"])

    if "status" in changes:
        changes["status"] = normalize_page_status(changes["status"])

    if "keywords" in changes and not isinstance(changes["keywords"], list):
        raise ValidationError("Keywords must be a list")

    return changes


def update_page(
    *,
    page_id: str,
    data: Dict[str, Any],
) -> Page:
    """
    Partially update a page.

    Design rules:
    - Fields absent from ``data`` are never touched
    - Changing the slug re-checks uniqueness against other pages only
    - isHomePage=true clears the owner's other home page in the same
      transaction; isHomePage=false only affects this page
    """
    page = db.session.get(Page, page_id)
    if page is None:
        raise NotFound("page")

    changes = _collect_changes(data)
    new_slug = changes.get("slug")

    try:
        with transactional():
            if new_slug and new_slug != page.slug:
                assert_slug_available(Page, new_slug, resource="page", exclude_id=page.id)

            # Clear siblings before this row is dirtied so the flush that
            # sets the flag never races the partial unique index.
            if changes.get("is_home_page") is True:
                clear_home_pages(page.author_id, keep_id=page.id)

            changed_fields = []
            for column, value in changes.items():
                if getattr(page, column) != value:
                    setattr(page, column, value)
                    changed_fields.append(column)

            db.session.flush()

            if changes.get("is_home_page") is True:
                assert_single_home_page(page.author_id)

    except IntegrityError as exc:
        error = translate_page_integrity_error(exc, new_slug)
        if error is None:
            raise
        logger.warning("Page update rejected by storage constraint: %s", error.message)
        raise error from exc

    except StaleDataError as exc:
        # Row deleted by another request after it was loaded
        raise NotFound("page") from exc

    logger.info("Page updated id=%s fields=%s", page_id, ",".join(changed_fields) or "-")
    return page
