# file: AGRICONNECT/media/upload.py
import base64
import binascii
import logging

import filetype

from AGRICONNECT.core.firebase import get_bucket

logger = logging.getLogger("media.upload")

MAX_FILE_SIZE_MB = 10
DEFAULT_CONTENT_TYPE = "image/jpeg"


class InvalidImageError(ValueError):
    pass


def decode_base64_image(payload: str) -> bytes:
    """
    Decode a base64 image, tolerating a data-URL prefix
    ("data:image/jpeg;base64,...").
    """
    if "," in payload and payload.lstrip().startswith("data:"):
        payload = payload.split(",", 1)[1]
    try:
        data = base64.b64decode(payload, validate=False)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageError("Invalid base64 image payload") from e
    if not data:
        raise InvalidImageError("Empty image payload")
    if len(data) > MAX_FILE_SIZE_MB * 1024 * 1024:
        raise InvalidImageError("Image too large")
    return data


def detect_content_type(data: bytes) -> str:
    kind = filetype.guess(data)
    if kind and kind.mime.startswith("image/"):
        return kind.mime
    return DEFAULT_CONTENT_TYPE


class MediaAdapter:
    """Stores images as public objects in the Firebase Storage bucket."""

    def __init__(self, bucket):
        self.bucket = bucket

    def public_url(self, name: str) -> str:
        return f"https://storage.googleapis.com/{self.bucket.name}/{name}"

    def upload_image(self, name: str, data: bytes) -> str:
        blob = self.bucket.blob(name)
        blob.upload_from_string(data, content_type=detect_content_type(data))
        blob.make_public()
        logger.info("upload_image: stored %s (%d bytes)", name, len(data))
        return self.public_url(name)


def get_media() -> MediaAdapter:
    return MediaAdapter(get_bucket())
