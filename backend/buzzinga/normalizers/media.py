from .timestamps import isoformat


def normalize_media(media):
    return {
        "id": media.id,
        "filename": media.filename,
        "originalName": media.original_name,
        "mimeType": media.mime_type,
        "size": media.size,
        "url": media.url,
        "alt": media.alt,
        "caption": media.caption,
        "uploadedBy": media.uploaded_by,
        "createdAt": isoformat(media.created_at),
        "updatedAt": isoformat(media.updated_at),
    }
