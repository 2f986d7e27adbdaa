"""Cut a detected garment out of its collage as a standalone PNG."""

from __future__ import annotations

from io import BytesIO
from typing import Tuple

from PIL import Image

from logic.compositor import ImageLoader, open_image
from models.garment_detection import BoundingBox
from tools.image_loader import load_image_bytes, to_data_url


def pixel_region(box: BoundingBox, image_width: int, image_height: int) -> Tuple[int, int, int, int]:
    """Map a normalised box to a ``(left, top, right, bottom)`` pixel region inside the image."""

    left = min(max(int(box.x * image_width), 0), image_width - 1)
    top = min(max(int(box.y * image_height), 0), image_height - 1)
    width = max(1, int(round(box.width * image_width)))
    height = max(1, int(round(box.height * image_height)))
    right = min(left + width, image_width)
    bottom = min(top + height, image_height)
    return left, top, right, bottom


def _crop_image(image: Image.Image, box: BoundingBox) -> Image.Image:
    return image.crop(pixel_region(box, *image.size))


def crop_garment(image_reference: str, box: BoundingBox, loader: ImageLoader = load_image_bytes) -> str:
    """Return the garment region of ``image_reference`` as a PNG data URL.

    Raises:
        ImageLoadError: If the source image cannot be loaded.
    """

    cropped = _crop_image(open_image(image_reference, loader), box)
    buffer = BytesIO()
    cropped.save(buffer, format="PNG")
    return to_data_url(buffer.getvalue(), "image/png")


__all__ = ["crop_garment", "pixel_region"]
