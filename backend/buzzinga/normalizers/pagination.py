# buzzinga/normalizers/pagination.py
from typing import Callable, Any, List, Dict

from .envelope import envelope


def normalize_pagination(
    items: List[Any],
    normalize_fn: Callable[[Any], Dict[str, Any]],
    *,
    total: int,
    limit: int,
    offset: int,
) -> Dict[str, Any]:
    """
    Normalize an offset-paginated list into the response envelope.
    """
    return envelope(
        [normalize_fn(item) for item in items],
        pagination={
            "total": total,
            "limit": limit,
            "offset": offset,
        },
    )
