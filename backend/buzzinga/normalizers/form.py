from .author import normalize_author
from .timestamps import isoformat


def normalize_form(form, response_count=None):
    data = {
        "id": form.id,
        "name": form.name,
        "slug": form.slug,
        "description": form.description,
        "fields": form.fields or [],
        "settings": form.settings or {},
        "authorId": form.author_id,
        "author": normalize_author(form.author),
        "createdAt": isoformat(form.created_at),
        "updatedAt": isoformat(form.updated_at),
    }

    if response_count is not None:
        data["responseCount"] = response_count

    return data


def normalize_form_response(response):
    return {
        "id": response.id,
        "formId": response.form_id,
        "data": response.data or {},
        "ipAddress": response.ip_address,
        "userAgent": response.user_agent,
        "createdAt": isoformat(response.created_at),
    }
