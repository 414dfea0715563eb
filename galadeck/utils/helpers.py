"""
Utility helper functions for GalaDeck.
"""

import base64
from datetime import datetime
from io import BytesIO
from pathlib import Path

from PIL import Image, UnidentifiedImageError

DATA_URL_PREFIX = "data:"


def image_to_data_url(image_bytes: bytes) -> str:
    """
    Encode an uploaded image as a data URL.

    Raises:
        ValueError: if the bytes are not an image Pillow understands
    """
    try:
        with Image.open(BytesIO(image_bytes)) as img:
            mime = Image.MIME.get(img.format, "application/octet-stream")
    except UnidentifiedImageError as e:
        raise ValueError("Uploaded file is not a supported image") from e
    encoded = base64.b64encode(image_bytes).decode('ascii')
    return f"{DATA_URL_PREFIX}{mime};base64,{encoded}"


def is_data_url(ref: str) -> bool:
    return ref.startswith(DATA_URL_PREFIX)


def data_url_to_bytes(data_url: str) -> bytes:
    """Decode the payload of a base64 data URL."""
    if not is_data_url(data_url) or ";base64," not in data_url:
        raise ValueError("Not a base64 data URL")
    return base64.b64decode(data_url.split(";base64,", 1)[1])


def save_uploaded_audio(audio_bytes: bytes, filename: str, audio_dir: Path) -> Path:
    """Store an uploaded music file and return where it was written."""
    audio_dir.mkdir(parents=True, exist_ok=True)
    target = audio_dir / f"{get_timestamp()}_{sanitize_filename(filename)}"
    target.write_bytes(audio_bytes)
    return target


def get_timestamp() -> str:
    """Get current timestamp string."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def sanitize_filename(filename: str) -> str:
    """Remove invalid characters from filename."""
    invalid_chars = '<>:"/\\|?*'
    for char in invalid_chars:
        filename = filename.replace(char, '_')
    return filename
