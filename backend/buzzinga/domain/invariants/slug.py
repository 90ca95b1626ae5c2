from typing import Optional
from sqlalchemy import select
from buzzinga.extensions import db
from ..exceptions import DuplicateSlug, ValidationError


def assert_slug_value(slug) -> str:
    if not isinstance(slug, str) or not slug.strip():
        raise ValidationError("Slug is required")

    if any(ch.isspace() for ch in slug):
        raise ValidationError("Slug must not contain whitespace")

    return slug


def assert_slug_available(model, slug: str, *, resource: str, exclude_id: Optional[str] = None) -> None:
    """
    Raise DuplicateSlug if another row of ``model`` already owns ``slug``.
    Slugs are compared case-sensitively.
    """
    stmt = select(model.id).where(model.slug == slug)
    if exclude_id is not None:
        stmt = stmt.where(model.id != exclude_id)

    if db.session.execute(stmt.limit(1)).first() is not None:
        raise DuplicateSlug(resource, slug)
