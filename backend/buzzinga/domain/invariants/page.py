from sqlalchemy import func, select
from buzzinga.extensions import db
from buzzinga.models.page import Page
from ..exceptions import StorageConflict


def assert_single_home_page(author_id: str) -> None:
    """
    Post-condition check run inside the write transaction, after flush.
    """
    count = db.session.execute(
        select(func.count(Page.id)).where(
            Page.author_id == author_id,
            Page.is_home_page.is_(True),
        )
    ).scalar_one()

    if count > 1:
        raise StorageConflict(
            "Another home page was set concurrently for this author, please retry"
        )
