# freshbite/services/storage_service.py
import os
import shutil
import time
import uuid

from fastapi import UploadFile

from freshbite.utils.settings import UPLOAD_DIR
from freshbite.utils.logging import get_logger

logger = get_logger(__name__)

UPLOAD_URL_PREFIX = "/uploads"


def public_url(filename: str | None) -> str | None:
    return f"{UPLOAD_URL_PREFIX}/{filename}" if filename else None


class StorageService:
    """Zdjecia profilowe na dysku, w bazie tylko nazwa pliku."""

    def __init__(self, upload_dir: str | None = None):
        self.upload_dir = upload_dir or UPLOAD_DIR

    def save(self, upload: UploadFile | None) -> str | None:
        if upload is None or not upload.filename:
            return None

        os.makedirs(self.upload_dir, exist_ok=True)
        _, ext = os.path.splitext(upload.filename)
        # znacznik czasu + uuid, dwa uploady w tej samej ms sie nie nadpisza
        filename = f"{int(time.time() * 1000)}-{uuid.uuid4().hex}{ext.lower()}"

        with open(os.path.join(self.upload_dir, filename), "wb") as out:
            shutil.copyfileobj(upload.file, out)

        logger.info(f"Stored upload {upload.filename} as {filename}")
        return filename

    def discard(self, filename: str | None):
        """Usuwa plik zapisany dla operacji, ktora sie nie powiodla."""
        if not filename:
            return

        try:
            os.remove(os.path.join(self.upload_dir, filename))
            logger.info(f"Discarded upload {filename}")
        except FileNotFoundError:
            logger.warning(f"Upload {filename} already gone")
