"""Resolve image references (data URLs, base64, URLs, paths) into raw bytes."""

from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import requests

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/jpeg"
_DATA_URL_PATTERN = re.compile(r"^data:(?P<mime>[\w.+\-/]+)?(?:;[\w=\-]+)*?;base64,(?P<data>.*)$", re.DOTALL)


class InvalidImagePayloadError(ValueError):
    """Raised when an inline image payload cannot be decoded."""


class ImageLoadError(RuntimeError):
    """Raised when an image reference cannot be fetched or read."""


@dataclass(frozen=True)
class ImagePayload:
    mime_type: str
    data: bytes

    def to_data_url(self) -> str:
        return to_data_url(self.data, self.mime_type)


def to_data_url(data: bytes, mime_type: str = "image/png") -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def decode_image_payload(image_base64: str) -> ImagePayload:
    """Decode a ``data:`` URL or bare base64 string.

    Bare base64 is assumed to be JPEG, matching what browsers upload from
    camera rolls.

    Raises:
        InvalidImagePayloadError: If the payload is empty or not valid base64.
    """

    if not isinstance(image_base64, str) or not image_base64.strip():
        raise InvalidImagePayloadError("Missing image payload")

    payload = image_base64.strip()
    mime_type = DEFAULT_MIME_TYPE
    match = _DATA_URL_PATTERN.match(payload)
    if match:
        mime_type = match.group("mime") or DEFAULT_MIME_TYPE
        payload = match.group("data")
    elif payload.startswith("data:"):
        raise InvalidImagePayloadError("Only base64 data URLs are supported")

    try:
        data = base64.b64decode(re.sub(r"\s+", "", payload), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidImagePayloadError(f"Image payload is not valid base64: {exc}") from exc
    if not data:
        raise InvalidImagePayloadError("Image payload is empty")
    return ImagePayload(mime_type=mime_type, data=data)


def load_inline_image(reference: str) -> bytes:
    """Return raw bytes for a ``data:`` URL or bare base64 payload only."""

    try:
        return decode_image_payload(reference).data
    except InvalidImagePayloadError as exc:
        raise ImageLoadError(str(exc)) from exc


def load_image_bytes(reference: str, timeout: Optional[float] = 10.0) -> bytes:
    """Return raw bytes for an inline payload, an HTTP(S) URL or a local file path."""

    if not reference:
        raise ImageLoadError("Empty image reference")

    parsed = urlparse(reference)
    if parsed.scheme in {"http", "https"} and parsed.netloc:
        try:
            response = requests.get(reference, timeout=timeout)
        except requests.RequestException as exc:
            raise ImageLoadError(f"Network error fetching image: {exc}") from exc
        if not 200 <= response.status_code < 300:
            logger.warning("Non-success status fetching image", extra={"status_code": response.status_code})
            raise ImageLoadError(f"Failed to fetch image: HTTP {response.status_code}")
        return response.content

    if reference.startswith("data:"):
        try:
            return decode_image_payload(reference).data
        except InvalidImagePayloadError as exc:
            raise ImageLoadError(str(exc)) from exc

    if len(reference) < 1024:
        path = Path(reference)
        try:
            if path.is_file():
                return path.read_bytes()
        except OSError as exc:
            raise ImageLoadError(f"Could not read image file: {exc}") from exc

    try:
        return decode_image_payload(reference).data
    except InvalidImagePayloadError as exc:
        raise ImageLoadError(f"Unrecognised image reference: {exc}") from exc


__all__ = [
    "ImagePayload",
    "ImageLoadError",
    "InvalidImagePayloadError",
    "decode_image_payload",
    "load_image_bytes",
    "load_inline_image",
    "to_data_url",
]
