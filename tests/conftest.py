"""Shared fixtures: a scripted AI client and small generated images."""

from __future__ import annotations

import base64
import json
import sys
from io import BytesIO
from pathlib import Path
from typing import Any, List, Tuple

import pytest
from PIL import Image

sys.path.append(str(Path(__file__).resolve().parents[1]))

from fitmuse_app.config import AppConfig
from tools.ai_client import AIClient
from tools.image_loader import ImagePayload


class FakeAIClient(AIClient):
    """Replays queued replies in order; an ``Exception`` in the queue is raised instead."""

    def __init__(self, replies: List[Any] | None = None, image_url: str = "data:image/png;base64,aW1n") -> None:
        self.replies: List[Any] = list(replies or [])
        self.image_url = image_url
        self.calls: List[Tuple[str, str]] = []
        self.images: List[ImagePayload] = []

    def queue(self, *replies: Any) -> "FakeAIClient":
        self.replies.extend(replies)
        return self

    def _next(self) -> str:
        if not self.replies:
            return "{}"
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, (dict, list)):
            return json.dumps(reply)
        return reply

    def analyze_image(self, prompt: str, image: ImagePayload, max_tokens: int = 500) -> str:
        self.calls.append(("analyze_image", prompt))
        self.images.append(image)
        return self._next()

    def chat_complete(self, prompt: str, max_tokens: int = 800) -> str:
        self.calls.append(("chat_complete", prompt))
        return self._next()

    def generate_image(self, prompt: str, size: str = "1024x1024") -> str:
        self.calls.append(("generate_image", prompt))
        if self.replies and isinstance(self.replies[0], Exception):
            raise self.replies.pop(0)
        return self.image_url


def make_png(width: int, height: int, color: Tuple[int, int, int] = (200, 30, 30)) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


def png_data_url(width: int, height: int, color: Tuple[int, int, int] = (200, 30, 30)) -> str:
    return "data:image/png;base64," + base64.b64encode(make_png(width, height, color)).decode("ascii")


def open_data_url(data_url: str) -> Image.Image:
    _, encoded = data_url.split(",", 1)
    return Image.open(BytesIO(base64.b64decode(encoded))).convert("RGB")


@pytest.fixture()
def fake_ai() -> FakeAIClient:
    return FakeAIClient()


@pytest.fixture()
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(database_path=str(tmp_path / "fitmuse.db"))
