from .author import normalize_author
from .timestamps import isoformat


def normalize_menu(menu):
    return {
        "id": menu.id,
        "name": menu.name,
        "slug": menu.slug,
        "location": menu.location,
        "items": menu.items or [],
        "authorId": menu.author_id,
        "author": normalize_author(menu.author),
        "createdAt": isoformat(menu.created_at),
        "updatedAt": isoformat(menu.updated_at),
    }
