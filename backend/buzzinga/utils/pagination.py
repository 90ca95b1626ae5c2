# buzzinga/utils/pagination.py
from __future__ import annotations

from typing import Any, Mapping, Tuple

from sqlalchemy import func, select
from sqlalchemy.sql import Select

from buzzinga.extensions import db
from buzzinga.domain.exceptions import ValidationError

DEFAULT_LIMIT = 50
MAX_LIMIT = 100


def _parse_int(args: Mapping[str, Any], name: str, default: int) -> int:
    raw = args.get(name)
    if raw is None or raw == "":
        return default

    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"'{name}' must be an integer")


def parse_offset_pagination(args: Mapping[str, Any]) -> Tuple[int, int]:
    """
    Read ``limit``/``offset`` from query args.

    - limit defaults to 50 and is clamped to 1..100
    - offset defaults to 0 and may not be negative
    """
    limit = _parse_int(args, "limit", DEFAULT_LIMIT)
    offset = _parse_int(args, "offset", 0)

    if offset < 0:
        raise ValidationError("'offset' must not be negative")

    return max(1, min(limit, MAX_LIMIT)), offset


def paginate_offset(stmt: Select, *, limit: int, offset: int) -> Tuple[list[Any], int]:
    """
    Execute an ordered select with limit/offset and count the full result set.

    Returns:
    - items: list of ORM objects
    - total: number of rows matching ``stmt`` without limit/offset
    """
    total = db.session.execute(
        select(func.count()).select_from(stmt.order_by(None).subquery())
    ).scalar_one()

    items = db.session.execute(stmt.limit(limit).offset(offset)).scalars().all()

    return list(items), total
