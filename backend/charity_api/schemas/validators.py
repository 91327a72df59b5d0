"""Field validators shared across request schemas."""

import re
from urllib.parse import parse_qs, urlsplit

PHONE_PATTERN = re.compile(r"^[\d\s\-+()]+$")
PAN_PATTERN = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".webp", ".svg", ".bmp", ".ico")


def validate_phone(value: str | None) -> str | None:
    """Digits, spaces and ``+-()`` only, with at least 10 digits."""
    if value is None or value == "":
        return None
    value = value.strip()
    if not PHONE_PATTERN.match(value) or len(re.sub(r"\D", "", value)) < 10:
        raise ValueError("Please provide a valid phone number")
    return value


def validate_pan(value: str | None) -> str | None:
    if value is None or value == "":
        return None
    value = value.strip().upper()
    if not PAN_PATTERN.match(value):
        raise ValueError("Please provide a valid PAN number")
    return value


def validate_image_url(value: str | None) -> str | None:
    """An http(s) URL that looks like an image.

    Accepted: a path ending in a known image extension, a CDN-style ``/image/``
    or ``/img/`` path segment, or a ``format``/``f`` query parameter.
    """
    if value is None or value == "":
        return None
    value = value.strip()
    parts = urlsplit(value)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ValueError("Please provide a valid image URL")
    path = parts.path.lower()
    query = parse_qs(parts.query, keep_blank_values=True)
    if (
        path.endswith(IMAGE_EXTENSIONS)
        or "/image/" in path
        or "/img/" in path
        or "format" in query
        or "f" in query
    ):
        return value
    raise ValueError("Please provide a valid image URL")
