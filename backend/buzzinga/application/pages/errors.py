from typing import Optional
from sqlalchemy.exc import IntegrityError
from buzzinga.domain.exceptions import CmsError, StorageConflict
from buzzinga.utils.transaction import violated_constraint
from ..slugs import translate_slug_violation


def translate_page_integrity_error(exc: IntegrityError, slug: Optional[str]) -> Optional[CmsError]:
    error = translate_slug_violation(exc, resource="page", slug=slug)
    if error is not None:
        return error

    # uq_pages_home_per_author (SQLite reports it as "pages.author_id")
    constraint = violated_constraint(exc)
    if "home" in constraint or "pages.author_id" in constraint:
        return StorageConflict(
            "Another home page was set concurrently for this author, please retry"
        )

    return None
