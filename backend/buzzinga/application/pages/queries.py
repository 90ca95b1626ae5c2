from typing import List, Optional
from sqlalchemy import select
from buzzinga.extensions import db
from buzzinga.models.page import Page
from buzzinga.domain.exceptions import NotFound, Unauthenticated
from buzzinga.domain.lifecycle.page import normalize_page_status


def list_pages(*, author_id: Optional[str], status: Optional[str] = None) -> List[Page]:
    """Pages owned by ``author_id``, oldest first."""
    if not author_id:
        raise Unauthenticated()

    stmt = select(Page).where(Page.author_id == author_id)
    if status:
        stmt = stmt.where(Page.status == normalize_page_status(status))

    return list(db.session.execute(stmt.order_by(Page.created_at.asc(), Page.id.asc())).scalars())


def get_page(*, page_id: str) -> Page:
    page = db.session.get(Page, page_id)
    if page is None:
        raise NotFound("page")
    return page


def get_published_page(*, slug: str) -> Page:
    page = db.session.execute(
        select(Page).where(Page.slug == slug, Page.status == "PUBLISHED")
    ).scalar_one_or_none()

    if page is None:
        raise NotFound("page")
    return page


def get_home_page(*, author_id: str) -> Optional[Page]:
    return db.session.execute(
        select(Page).where(Page.author_id == author_id, Page.is_home_page.is_(True))
    ).scalar_one_or_none()
