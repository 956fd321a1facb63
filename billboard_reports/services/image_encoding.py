"""Helpers for turning uploaded photos into self-contained references."""

import base64
from typing import Optional


def is_image_content_type(content_type: Optional[str]) -> bool:
    """Check the declared MIME type of an upload.

    Only the declared type is checked; the bytes are not sniffed.
    """
    return bool(content_type) and content_type.lower().startswith("image/")


def encode_data_url(content: bytes, content_type: str) -> str:
    """Encode image bytes as a ``data:`` URL.

    Args:
        content: Raw image bytes.
        content_type: MIME type recorded in the URL, e.g. ``image/jpeg``.

    Returns:
        ``data:<content_type>;base64,<payload>``

    Example:
        >>> encode_data_url(b"abc", "image/png")
        'data:image/png;base64,YWJj'
    """
    payload = base64.b64encode(content).decode("ascii")
    return f"data:{content_type};base64,{payload}"
