"""
Image Storage

Stores product images on local disk under UPLOAD_FOLDER and maps them to
public ``/uploads/<name>`` paths.
"""

import logging
import os
import time

from flask import current_app
from werkzeug.utils import secure_filename

from storefront.errors import InvalidUpload

logger = logging.getLogger(__name__)

URL_PREFIX = '/uploads/'


def upload_folder():
    folder = current_app.config['UPLOAD_FOLDER']
    os.makedirs(folder, exist_ok=True)
    return folder


def save_image(file_storage):
    """Persist an uploaded image and return its public path, or None when no file was sent."""
    if file_storage is None or not file_storage.filename:
        return None
    if not (file_storage.mimetype or '').startswith('image/'):
        raise InvalidUpload()

    name = secure_filename(file_storage.filename) or 'image'
    stored_name = f'{int(time.time() * 1000)}-{name}'
    file_storage.save(os.path.join(upload_folder(), stored_name))
    return URL_PREFIX + stored_name


def delete_image(public_path):
    """Remove a stored image. A missing file is logged, not raised."""
    if not public_path or not public_path.startswith(URL_PREFIX):
        return False
    name = secure_filename(public_path[len(URL_PREFIX):])
    if not name:
        return False
    path = os.path.join(current_app.config['UPLOAD_FOLDER'], name)
    try:
        os.remove(path)
    except OSError as e:
        logger.error('Error deleting image file %s: %s', name, e)
        return False
    return True
