"""Flat-lay compositor that stacks outfit photos top to bottom on one canvas."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from io import BytesIO
from typing import Callable, List, Optional, Sequence, Tuple

from PIL import Image, UnidentifiedImageError

from logic.validation import InvalidRequestError
from models.taxonomy import BOTTOM_SLOT_KEYWORDS, FOOTWEAR_SLOT_KEYWORDS, TOP_SLOT_KEYWORDS
from tools.image_loader import ImageLoadError, load_image_bytes, to_data_url

logger = logging.getLogger(__name__)

CANVAS_WIDTH = 400
TARGET_ITEM_WIDTH = 280
MAX_ITEM_HEIGHT = 300
ITEM_GAP = 20
EDGE_PADDING = 40
BACKGROUND_COLOR = (255, 255, 255)

SLOT_TOP = 0
SLOT_BOTTOM = 1
SLOT_FOOTWEAR = 2


@dataclass(frozen=True)
class FlatLayItem:
    """An image reference plus the category used to place it."""

    image: str
    category: Optional[str] = None


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def classify_slot(category: Optional[str]) -> int:
    """Return the vertical tier for a category; unmatched categories go in the middle."""

    text = (category or "").lower()
    if any(keyword in text for keyword in TOP_SLOT_KEYWORDS):
        return SLOT_TOP
    if any(keyword in text for keyword in BOTTOM_SLOT_KEYWORDS):
        return SLOT_BOTTOM
    if any(keyword in text for keyword in FOOTWEAR_SLOT_KEYWORDS):
        return SLOT_FOOTWEAR
    return SLOT_BOTTOM


def sort_by_slot(items: Sequence[FlatLayItem]) -> List[FlatLayItem]:
    # sorted() is stable, so items in the same tier keep their input order.
    return sorted(items, key=lambda item: classify_slot(item.category))


def scale_to_fit(
    width: int,
    height: int,
    target_width: int = TARGET_ITEM_WIDTH,
    max_height: int = MAX_ITEM_HEIGHT,
) -> Tuple[int, int]:
    """Scale to ``target_width``; if that makes the image too tall, scale to ``max_height`` instead."""

    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid image dimensions {width}x{height}")
    scale = target_width / width
    scaled_width = width * scale
    scaled_height = height * scale
    if scaled_height > max_height:
        scale = max_height / height
        scaled_width = width * scale
        scaled_height = height * scale
    return max(1, _round_half_up(scaled_width)), max(1, _round_half_up(scaled_height))


ImageLoader = Callable[[str], bytes]


def open_image(reference: str, loader: ImageLoader = load_image_bytes) -> Image.Image:
    """Load an image reference into an RGBA Pillow image."""

    data = loader(reference)
    try:
        image = Image.open(BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise ImageLoadError(f"Could not decode image: {exc}") from exc
    return image.convert("RGBA")


def compose_flat_lay(items: Sequence[FlatLayItem], loader: ImageLoader = load_image_bytes) -> str:
    """Render the items as a single white flat-lay PNG and return it as a data URL.

    Raises:
        InvalidRequestError: If ``items`` is empty.
        ImageLoadError: If any image cannot be loaded; nothing is rendered.
    """

    if not items:
        raise InvalidRequestError("Need at least 1 item for composite image")

    ordered = sort_by_slot(items)
    placed: List[Tuple[Image.Image, int, int]] = []
    for item in ordered:
        image = open_image(item.image, loader)
        width, height = scale_to_fit(*image.size)
        placed.append((image, width, height))

    total_height = sum(height for _, _, height in placed) + (len(placed) - 1) * ITEM_GAP + EDGE_PADDING * 2
    canvas = Image.new("RGB", (CANVAS_WIDTH, total_height), BACKGROUND_COLOR)

    y_offset = EDGE_PADDING
    for image, width, height in placed:
        resized = image.resize((width, height), Image.LANCZOS)
        x_offset = _round_half_up((CANVAS_WIDTH - width) / 2)
        canvas.paste(resized, (x_offset, y_offset), resized)
        y_offset += height + ITEM_GAP

    buffer = BytesIO()
    canvas.save(buffer, format="PNG")
    logger.info(
        "Composed flat lay",
        extra={"item_count": len(placed), "canvas_height": total_height},
    )
    return to_data_url(buffer.getvalue(), "image/png")


__all__ = [
    "FlatLayItem",
    "ImageLoader",
    "classify_slot",
    "compose_flat_lay",
    "open_image",
    "scale_to_fit",
    "sort_by_slot",
    "CANVAS_WIDTH",
    "TARGET_ITEM_WIDTH",
    "MAX_ITEM_HEIGHT",
    "ITEM_GAP",
    "EDGE_PADDING",
]
