from typing import Optional
from sqlalchemy.exc import IntegrityError
from buzzinga.domain.exceptions import CmsError, DuplicateSlug
from buzzinga.utils.transaction import violated_constraint


def translate_slug_violation(exc: IntegrityError, *, resource: str, slug: Optional[str]) -> Optional[CmsError]:
    """
    Map a unique-constraint failure on ``slug`` to DuplicateSlug.

    Two writers can both pass the read-side slug check; the constraint
    makes the second insert fail, and the caller sees the same error as
    if the check had caught it. Returns None for unrelated violations.
    """
    if "slug" in violated_constraint(exc):
        return DuplicateSlug(resource, slug or "")
    return None
