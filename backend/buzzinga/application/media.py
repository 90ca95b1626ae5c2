import logging
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import select
from buzzinga.extensions import db
from buzzinga.models.media import Media
from buzzinga.domain.exceptions import NotFound
from buzzinga.utils.media import delete_file, save_file
from buzzinga.utils.pagination import paginate_offset
from buzzinga.utils.transaction import transactional

logger = logging.getLogger(__name__)


def list_media(*, mime_type: Optional[str] = None, limit: int, offset: int) -> Tuple[List[Media], int]:
    stmt = select(Media)
    if mime_type:
        stmt = stmt.where(Media.mime_type == mime_type)

    stmt = stmt.order_by(Media.created_at.desc(), Media.id.desc())
    return paginate_offset(stmt, limit=limit, offset=offset)


def get_media(*, media_id: str) -> Media:
    media = db.session.get(Media, media_id)
    if media is None:
        raise NotFound("media file")
    return media


def upload_media(
    *,
    file,
    uploaded_by: Optional[str],
    alt: Optional[str] = None,
    caption: Optional[str] = None,
) -> Media:
    stored = save_file(file)

    media = Media()
    media.filename = stored["filename"]
    media.original_name = stored["original_name"]
    media.mime_type = stored["mime_type"]
    media.size = stored["size"]
    media.path = stored["path"]
    media.url = stored["url"]
    media.alt = alt or None
    media.caption = caption or None
    media.uploaded_by = uploaded_by

    try:
        with transactional():
            db.session.add(media)
            db.session.flush()
    except Exception:
        # Don't leave an orphaned file behind
        delete_file(stored["path"])
        raise

    logger.info("Media uploaded id=%s file=%s size=%d", media.id, media.filename, media.size)
    return media


def update_media(*, media_id: str, data: Dict[str, Any]) -> Media:
    media = get_media(media_id=media_id)

    with transactional():
        for field in ("alt", "caption"):
            if field in data:
                setattr(media, field, data[field])

    logger.info("Media updated id=%s", media_id)
    return media


def delete_media(*, media_id: str) -> None:
    media = get_media(media_id=media_id)
    path = media.path

    with transactional():
        db.session.delete(media)

    # File cleanup happens outside the transaction
    if not delete_file(path):
        logger.warning("Stored file for media id=%s was already missing", media_id)

    logger.info("Media deleted id=%s", media_id)
