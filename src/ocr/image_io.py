from __future__ import annotations

import base64
import binascii
import io
import re
from pathlib import Path
from typing import Union

from PIL import Image, UnidentifiedImageError

DEFAULT_MAX_SIDE = 2048

_DATA_URL = re.compile(r"^data:image/[A-Za-z0-9.+-]+;base64,", re.IGNORECASE)

ImageSource = Union[str, bytes, Path]


def _encode(img: Image.Image) -> str:
    buf = io.BytesIO()
    if img.mode in ("RGBA", "LA", "P"):
        img.save(buf, format="PNG")
        mime = "image/png"
    else:
        img.convert("RGB").save(buf, format="JPEG", quality=90)
        mime = "image/jpeg"
    return f"data:{mime};base64,{base64.b64encode(buf.getvalue()).decode('ascii')}"


def _is_file(candidate: str) -> bool:
    try:
        return len(candidate) < 1024 and Path(candidate).is_file()
    except OSError:
        # e.g. base64 payloads longer than NAME_MAX
        return False


def _load_bytes(image: ImageSource) -> bytes:
    if isinstance(image, bytes):
        return image
    if isinstance(image, Path):
        return image.read_bytes()

    if _DATA_URL.match(image):
        payload = image.split(",", 1)[1]
    elif _is_file(image):
        return Path(image).read_bytes()
    else:
        payload = image

    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError("image is neither a data URL, base64 data, nor a readable file") from e


def ensure_data_url(image: ImageSource, max_side: int = DEFAULT_MAX_SIDE) -> str:
    """Return ``image`` as a data URL the vision backends accept.

    Data URLs that decode and already fit within ``max_side`` pass through
    untouched; anything else is decoded with Pillow, downscaled and re-encoded.
    """
    raw = _load_bytes(image)
    try:
        img = Image.open(io.BytesIO(raw))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"could not decode image: {e}") from e

    if isinstance(image, str) and _DATA_URL.match(image) and max(img.size) <= max_side:
        return image

    if max(img.size) > max_side:
        img.thumbnail((max_side, max_side))
    return _encode(img)
