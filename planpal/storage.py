"""Object storage for uploaded images."""

from __future__ import annotations

import base64
import binascii
import os
import uuid

from flask import current_app, url_for
from werkzeug.utils import secure_filename

from .errors import ValidationError

CONTENT_TYPE_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


def decode_image_data(image_data: str) -> tuple[bytes, str]:
    """Decode a data URL (or bare base64) into bytes and a content type."""
    content_type = "image/jpeg"
    payload = image_data
    if image_data.startswith("data:"):
        header, _, payload = image_data.partition(",")
        content_type = header[5:].split(";")[0] or content_type
    if content_type not in CONTENT_TYPE_EXTENSIONS:
        raise ValidationError(f"Unsupported image type: {content_type}")
    try:
        return base64.b64decode(payload, validate=True), content_type
    except (binascii.Error, ValueError) as e:
        raise ValidationError("Image data is not valid base64.") from e


def upload_bytes(folder: str, data: bytes, content_type: str, name: str | None = None) -> str:
    """Save data under the upload folder and return a public URL for it."""
    extension = CONTENT_TYPE_EXTENSIONS.get(content_type, "")
    stem = secure_filename(os.path.splitext(name or "")[0]) or uuid.uuid4().hex
    filename = f"{secure_filename(folder)}_{stem}{extension}"

    upload_folder = current_app.config["UPLOAD_FOLDER"]
    os.makedirs(upload_folder, exist_ok=True)
    with open(os.path.join(upload_folder, filename), "wb") as f:
        f.write(data)

    return url_for("uploaded_file", filename=filename, _external=True)
