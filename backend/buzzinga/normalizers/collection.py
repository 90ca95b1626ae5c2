from .author import normalize_author
from .timestamps import isoformat


def normalize_collection_item(item):
    return {
        "id": item.id,
        "collectionId": item.collection_id,
        "data": item.data or {},
        "status": item.status,
        "createdAt": isoformat(item.created_at),
        "updatedAt": isoformat(item.updated_at),
    }


def normalize_collection(collection, include_items=False, item_count=None):
    data = {
        "id": collection.id,
        "name": collection.name,
        "slug": collection.slug,
        "description": collection.description,
        "fields": collection.fields or {},
        "authorId": collection.author_id,
        "author": normalize_author(collection.author),
        "createdAt": isoformat(collection.created_at),
        "updatedAt": isoformat(collection.updated_at),
    }

    if item_count is not None:
        data["itemCount"] = item_count

    if include_items:
        data["items"] = [normalize_collection_item(i) for i in collection.items]

    return data
