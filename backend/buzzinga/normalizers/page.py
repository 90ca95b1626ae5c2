from .author import normalize_author
from .timestamps import isoformat


def normalize_page(page, public=False):
    data = {
        "id": page.id,
        "title": page.title,
        "slug": page.slug,
        "content": page.content or {},
        "customCss": page.custom_css,
        "customJs": page.custom_js,
        "status": page.status,
        "description": page.description,
        "keywords": page.keywords or [],
        "ogImage": page.og_image,
        "isHomePage": bool(page.is_home_page),
        "createdAt": isoformat(page.created_at),
        "updatedAt": isoformat(page.updated_at),
    }

    if not public:
        data["authorId"] = page.author_id
        data["author"] = normalize_author(page.author)

    return data
