import logging
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError
from buzzinga.extensions import db
from buzzinga.models.collection import Collection, CollectionItem
from buzzinga.domain.exceptions import NotFound, Unauthenticated, ValidationError
from buzzinga.domain.invariants.slug import assert_slug_available, assert_slug_value
from buzzinga.utils.transaction import transactional
from .slugs import translate_slug_violation

logger = logging.getLogger(__name__)


def _require_name(data: Dict[str, Any]) -> str:
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Name is required")
    return name


def list_collections() -> List[Tuple[Collection, int]]:
    """Every collection with its item count, most recently updated first."""
    item_count = (
        select(func.count(CollectionItem.id))
        .where(CollectionItem.collection_id == Collection.id)
        .correlate(Collection)
        .scalar_subquery()
    )
    rows = db.session.execute(
        select(Collection, item_count).order_by(Collection.updated_at.desc())
    ).all()
    return [(collection, count) for collection, count in rows]


def get_collection(*, collection_id: str) -> Collection:
    collection = db.session.get(Collection, collection_id)
    if collection is None:
        raise NotFound("collection")
    return collection


def create_collection(*, author_id: Optional[str], data: Dict[str, Any]) -> Collection:
    if not author_id:
        raise Unauthenticated()

    name = _require_name(data)
    slug = assert_slug_value(data.get("slug"))

    fields = data.get("fields") or {}
    if not isinstance(fields, dict):
        raise ValidationError("Fields must be an object")

    collection = Collection()
    collection.author_id = author_id
    collection.name = name
    collection.slug = slug
    collection.description = data.get("description")
    collection.fields = fields

    try:
        with transactional():
            assert_slug_available(Collection, slug, resource="collection")
            db.session.add(collection)
            db.session.flush()

    except IntegrityError as exc:
        error = translate_slug_violation(exc, resource="collection", slug=slug)
        if error is None:
            raise
        raise error from exc

    logger.info("Collection created id=%s slug=%s", collection.id, slug)
    return collection


def update_collection(*, collection_id: str, data: Dict[str, Any]) -> Collection:
    collection = get_collection(collection_id=collection_id)

    slug = data.get("slug")
    if slug:
        assert_slug_value(slug)

    if data.get("fields") and not isinstance(data["fields"], dict):
        raise ValidationError("Fields must be an object")

    try:
        with transactional():
            if slug and slug != collection.slug:
                assert_slug_available(
                    Collection, slug, resource="collection", exclude_id=collection.id
                )

            for field in ("name", "slug", "fields"):
                if data.get(field):
                    setattr(collection, field, data[field])

            if "description" in data:
                collection.description = data["description"]

            db.session.flush()

    except IntegrityError as exc:
        error = translate_slug_violation(exc, resource="collection", slug=slug)
        if error is None:
            raise
        raise error from exc

    except StaleDataError as exc:
        raise NotFound("collection") from exc

    logger.info("Collection updated id=%s", collection_id)
    return collection


def delete_collection(*, collection_id: str) -> None:
    """Delete a collection and its items; NotFound if the row is already gone."""
    with transactional():
        db.session.execute(
            delete(CollectionItem).where(CollectionItem.collection_id == collection_id)
        )
        deleted = db.session.execute(
            delete(Collection).where(Collection.id == collection_id)
        ).rowcount
        if not deleted:
            raise NotFound("collection")

    logger.info("Collection deleted id=%s", collection_id)


def add_collection_item(*, collection_id: str, data: Dict[str, Any]) -> CollectionItem:
    collection = get_collection(collection_id=collection_id)

    payload = data.get("data") or {}
    if not isinstance(payload, dict):
        raise ValidationError("Item data must be an object")

    item = CollectionItem()
    item.collection_id = collection.id
    item.data = payload
    item.status = data.get("status") or "draft"

    with transactional():
        db.session.add(item)
        db.session.flush()

    logger.info("Collection item created id=%s collection=%s", item.id, collection_id)
    return item
