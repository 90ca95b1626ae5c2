from typing import Optional
from sqlalchemy import select, update
from buzzinga.extensions import db
from buzzinga.models.page import Page


def clear_home_pages(author_id: str, *, keep_id: Optional[str] = None) -> int:
    """
    Unset ``is_home_page`` on every page of ``author_id`` (except ``keep_id``).

    Must run inside the same transaction that sets the new home page.
    The author's rows are locked first so two concurrent transfers for
    the same author serialize instead of interleaving.
    """
    db.session.execute(
        select(Page.id)
        .where(Page.author_id == author_id)
        .with_for_update()
    ).all()

    stmt = (
        update(Page)
        .where(Page.author_id == author_id, Page.is_home_page.is_(True))
        .values(is_home_page=False)
        .execution_options(synchronize_session="fetch")
    )
    if keep_id is not None:
        stmt = stmt.where(Page.id != keep_id)

    return db.session.execute(stmt).rowcount
