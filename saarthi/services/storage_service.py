import logging
import uuid

import firebase_admin
from firebase_admin import credentials, storage
from flask import current_app
from werkzeug.utils import secure_filename

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Upload to object storage failed."""


def _bucket():
    # Initialize Firebase Admin only once
    if not firebase_admin._apps:
        cred = credentials.Certificate(current_app.config["FIREBASE_CREDENTIALS_PATH"])
        firebase_admin.initialize_app(cred, {"storageBucket": current_app.config["FIREBASE_STORAGE_BUCKET"]})
        logger.info("Firebase Admin initialized for bucket %s", current_app.config["FIREBASE_STORAGE_BUCKET"])
    return storage.bucket()


def upload_file(file_storage, folder: str) -> str:
    """Store an uploaded file under ``folder`` and return its public URL."""
    filename = secure_filename(file_storage.filename or "") or "upload"
    blob_name = f"{folder}/{uuid.uuid4().hex}-{filename}"
    try:
        blob = _bucket().blob(blob_name)
        blob.upload_from_file(file_storage.stream, content_type=file_storage.mimetype)
        blob.make_public()
    except Exception as e:
        logger.exception("Upload of %s failed", blob_name)
        raise StorageError(str(e)) from e
    return blob.public_url
