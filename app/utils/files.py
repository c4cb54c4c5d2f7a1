import logging
import os
import shutil
import uuid
from pathlib import Path
from fastapi import UploadFile

logger = logging.getLogger(__name__)


def save_upload(upload: UploadFile) -> Path:
    """Write an uploaded file into the upload directory under a generated name."""
    import app.config as _cfg
    upload_dir = Path(_cfg.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)

    suffix = Path(upload.filename or "").suffix or ".csv"
    path = upload_dir / f"{uuid.uuid4().hex}{suffix}"
    with path.open("wb") as out:
        shutil.copyfileobj(upload.file, out)
    return path


def delete_file(path) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        logger.warning("Upload %s already removed", path)
