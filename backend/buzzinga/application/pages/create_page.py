import logging
from typing import Any, Dict, Optional
from sqlalchemy.exc import IntegrityError
from buzzinga.extensions import db
from buzzinga.models.page import Page
from buzzinga.domain.exceptions import Unauthenticated, ValidationError
from buzzinga.domain.invariants.page import assert_single_home_page
from buzzinga.domain.invariants.slug import assert_slug_available, assert_slug_value
from buzzinga.domain.lifecycle.page import DEFAULT_PAGE_STATUS, normalize_page_status
from buzzinga.utils.transaction import transactional
from .errors import translate_page_integrity_error
from .home_page import clear_home_pages

logger = logging.getLogger(__name__)


def create_page(
    *,
    author_id: Optional[str],
    data: Dict[str, Any],
) -> Page:
    """
    Create a new page owned by ``author_id``.

    Edge cases handled:
    - Missing caller identity
    - Missing title / slug, unknown status
    - Duplicate slug (read-side check and unique constraint)
    - isHomePage=true moves the author's home page to the new page
    """
    if not author_id:
        raise Unauthenticated()

    title = data.get("title")
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Title is required")

    slug = assert_slug_value(data.get("slug"))

    status = DEFAULT_PAGE_STATUS
    if data.get("status"):
        status = normalize_page_status(data["status"])

    keywords = data.get("keywords") or []
    if not isinstance(keywords, list):
        raise ValidationError("Keywords must be a list")

    is_home_page = data.get("isHomePage") is True

    page = Page()
    page.author_id = author_id
    page.title = title
    page.slug = slug
    page.content = data.get("content") or {}
    page.custom_css = data.get("customCss")
    page.custom_js = data.get("customJs")
    page.status = status
    page.description = data.get("description")
    page.keywords = keywords
    page.og_image = data.get("ogImage")
    page.is_home_page = is_home_page

    try:
        with transactional():
            assert_slug_available(Page, slug, resource="page")

            if is_home_page:
                cleared = clear_home_pages(author_id)
                if cleared:
                    logger.info("Home page moved for author=%s (%d cleared)", author_id, cleared)

            db.session.add(page)
            db.session.flush()  # ensures page.id exists

            if is_home_page:
                assert_single_home_page(author_id)

    except IntegrityError as exc:
        error = translate_page_integrity_error(exc, slug)
        if error is None:
            raise
        logger.warning("Page create rejected by storage constraint: %s", error.message)
        raise error from exc

    logger.info("Page created id=%s slug=%s author=%s", page.id, slug, author_id)
    return page
