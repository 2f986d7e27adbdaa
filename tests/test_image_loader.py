"""Image reference decoding and fetching."""

from __future__ import annotations

import base64
from pathlib import Path
from types import SimpleNamespace

import pytest
import requests

from tools import image_loader
from tools.image_loader import (
    ImageLoadError,
    InvalidImagePayloadError,
    decode_image_payload,
    load_image_bytes,
    load_inline_image,
)

from conftest import make_png, png_data_url


def test_data_url_keeps_its_mime_type() -> None:
    payload = decode_image_payload(png_data_url(4, 4))

    assert payload.mime_type == "image/png"
    assert payload.data == make_png(4, 4)


def test_bare_base64_defaults_to_jpeg() -> None:
    payload = decode_image_payload(base64.b64encode(b"jpeg-bytes").decode("ascii"))

    assert payload.mime_type == "image/jpeg"
    assert payload.data == b"jpeg-bytes"


@pytest.mark.parametrize("value", ["", "   ", "data:image/png,notbase64", "not base64 at all!!"])
def test_invalid_payloads_are_rejected(value) -> None:
    with pytest.raises(InvalidImagePayloadError):
        decode_image_payload(value)


def test_inline_loader_refuses_urls_and_paths(tmp_path: Path) -> None:
    path = tmp_path / "shirt.png"
    path.write_bytes(make_png(2, 2))

    with pytest.raises(ImageLoadError):
        load_inline_image("https://example.com/shirt.png")
    with pytest.raises(ImageLoadError):
        load_inline_image(str(path))


def test_load_local_file(tmp_path: Path) -> None:
    path = tmp_path / "shirt.png"
    path.write_bytes(make_png(2, 2))

    assert load_image_bytes(str(path)) == make_png(2, 2)


def test_load_remote_image(monkeypatch) -> None:
    calls = []

    def fake_get(url, timeout=None):
        calls.append((url, timeout))
        return SimpleNamespace(status_code=200, content=b"remote-bytes")

    monkeypatch.setattr(image_loader.requests, "get", fake_get)

    assert load_image_bytes("https://cdn.example.com/a.png", timeout=3) == b"remote-bytes"
    assert calls == [("https://cdn.example.com/a.png", 3)]


def test_remote_error_status_is_a_load_error(monkeypatch) -> None:
    monkeypatch.setattr(
        image_loader.requests, "get", lambda url, timeout=None: SimpleNamespace(status_code=404, content=b"")
    )

    with pytest.raises(ImageLoadError, match="HTTP 404"):
        load_image_bytes("https://cdn.example.com/missing.png")


def test_network_failure_is_a_load_error(monkeypatch) -> None:
    def boom(url, timeout=None):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(image_loader.requests, "get", boom)

    with pytest.raises(ImageLoadError, match="Network error"):
        load_image_bytes("http://cdn.example.com/a.png")
