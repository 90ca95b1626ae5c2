import logging
from sqlalchemy import delete
from buzzinga.extensions import db
from buzzinga.models.page import Page
from buzzinga.domain.exceptions import NotFound
from buzzinga.utils.transaction import transactional

logger = logging.getLogger(__name__)


def delete_page(*, page_id: str) -> None:
    """
    Permanently delete a page.

    The row count of the DELETE decides NotFound, so of two concurrent
    deletes only one succeeds. Removing an author's home page simply
    leaves them without one.
    """
    with transactional():
        deleted = db.session.execute(delete(Page).where(Page.id == page_id)).rowcount
        if not deleted:
            raise NotFound("page")

    logger.info("Page deleted id=%s", page_id)
