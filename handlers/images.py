import os
import shutil
import time

from fastapi import UploadFile
from loguru import logger

IMAGES_ROUTE = "/images"


def image_url(backend_url: str, filename):
    if not filename:
        return filename
    return f"{backend_url.rstrip('/')}{IMAGES_ROUTE}/{filename}"


def image_filename(backend_url: str, value):
    """Reduces an image URL served by this backend back to its stored filename."""
    if not value:
        return value
    prefix = f"{backend_url.rstrip('/')}{IMAGES_ROUTE}/"
    if value.startswith(prefix):
        return value[len(prefix):]
    return value


def upload_basename(filename) -> str:
    return os.path.basename(filename or "")


def stored_name(original: str, now_ms: int = None) -> str:
    original = upload_basename(original)
    if not original:
        raise ValueError("Upload has no usable file name")
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    ext = os.path.splitext(original)[1]
    return f"{original}_{now_ms}{ext}"


def save_upload(upload: UploadFile, images_dir: str) -> str:
    filename = stored_name(upload.filename)
    path = os.path.join(images_dir, filename)
    with open(path, "wb") as f:
        shutil.copyfileobj(upload.file, f)
    logger.info(f"Stored upload {upload.filename} as {filename}")
    return filename


def remove_image(filename: str, images_dir: str):
    path = os.path.join(images_dir, filename)
    try:
        os.remove(path)
    except FileNotFoundError:
        logger.warning(f"Image {filename} already gone")
