from typing import Set
from ..exceptions import ValidationError

PAGE_STATUSES: Set[str] = {"DRAFT", "PUBLISHED"}
DEFAULT_PAGE_STATUS = "DRAFT"


def normalize_page_status(status) -> str:
    """
    Validates a page status and returns its canonical (upper-case) form.
    """
    if not isinstance(status, str) or status.upper() not in PAGE_STATUSES:
        allowed = ", ".join(sorted(PAGE_STATUSES))
        raise ValidationError(f"Invalid page status: {status!r} (expected one of {allowed})")

    return status.upper()
