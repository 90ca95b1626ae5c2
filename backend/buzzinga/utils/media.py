import os
import uuid
import mimetypes
from werkzeug.utils import secure_filename
from flask import current_app
from buzzinga.domain.exceptions import ValidationError

ALLOWED_EXTENSIONS = {
    'png', 'jpg', 'jpeg', 'gif', 'webp', 'svg',
    'mp4', 'mov', 'avi', 'webm',
    'pdf',
}


def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def upload_folder():
    folder = current_app.config.get('UPLOAD_FOLDER', 'uploads')
    if not os.path.isabs(folder):
        folder = os.path.join(current_app.root_path, folder)
    return folder


def save_file(file):
    """
    Store an uploaded werkzeug FileStorage under UPLOAD_FOLDER.

    Returns the stored metadata: filename, original_name, mime_type,
    size, path and public url.
    """
    if not file or not file.filename:
        raise ValidationError("No file uploaded")

    if not allowed_file(file.filename):
        raise ValidationError("File type not allowed")

    filename = secure_filename(file.filename)
    ext = filename.rsplit('.', 1)[1].lower()
    unique_filename = f"{uuid.uuid4().hex}.{ext}"

    folder = upload_folder()
    os.makedirs(folder, exist_ok=True)
    file_path = os.path.join(folder, unique_filename)

    file.save(file_path)

    base_url = current_app.config.get('MEDIA_BASE_URL', '').rstrip('/')
    mime_type = file.mimetype or mimetypes.guess_type(filename)[0] or 'application/octet-stream'

    return {
        "filename": unique_filename,
        "original_name": file.filename,
        "mime_type": mime_type,
        "size": os.path.getsize(file_path),
        "path": file_path,
        "url": f"{base_url}/uploads/{unique_filename}",
    }


def delete_file(file_path):
    """
    Deletes a stored file given its path.
    Returns False when the file is already gone or cannot be removed.
    """
    if not file_path:
        return False

    if not os.path.isabs(file_path):
        file_path = os.path.join(upload_folder(), os.path.basename(file_path))

    if os.path.exists(file_path):
        try:
            os.remove(file_path)
            return True
        except OSError as e:
            current_app.logger.error(f"Failed to delete file {file_path}: {e}")
            return False
    return False
