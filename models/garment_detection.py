"""Collage detection result types and bounding-box sanitisation."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from models.taxonomy import text_or_default

logger = logging.getLogger(__name__)

MIN_CONFIDENCE = 0.7
BOX_PADDING = 0.05
MIN_BOX_EXTENT = 0.01


def _finite_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class BoundingBox:
    """Normalised (0-1) region of an image, origin at the top-left corner."""

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_raw(cls, raw: Any) -> Optional["BoundingBox"]:
        """Return a box when every field is a finite number and the extents are positive."""

        if not isinstance(raw, dict):
            return None
        x = _finite_number(raw.get("x"))
        y = _finite_number(raw.get("y"))
        width = _finite_number(raw.get("width"))
        height = _finite_number(raw.get("height"))
        if x is None or y is None or width is None or height is None:
            return None
        if width <= 0 or height <= 0:
            return None
        return cls(x=x, y=y, width=width, height=height)

    def padded(self, padding: float = BOX_PADDING) -> "BoundingBox":
        """Grow the box by ``padding`` on every side and clamp it inside the unit square."""

        # Origins past the far edge are pulled back so the minimum extent still fits.
        x = min(max(0.0, self.x - padding), 1.0 - MIN_BOX_EXTENT)
        y = min(max(0.0, self.y - padding), 1.0 - MIN_BOX_EXTENT)
        width = min(1.0 - x, self.width + padding * 2)
        height = min(1.0 - y, self.height + padding * 2)
        return BoundingBox(
            x=x,
            y=y,
            width=max(MIN_BOX_EXTENT, width),
            height=max(MIN_BOX_EXTENT, height),
        )

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class DetectedGarment:
    category: str
    bounding_box: BoundingBox
    description: str
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "boundingBox": self.bounding_box.to_dict(),
            "description": self.description,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class CollageDetectionResult:
    is_collage: bool
    garments: List[DetectedGarment] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isCollage": self.is_collage,
            "garments": [garment.to_dict() for garment in self.garments],
        }


def sanitize_garments(raw_garments: Any) -> List[DetectedGarment]:
    """Keep confident garments with usable boxes, padded for cropping."""

    if not isinstance(raw_garments, list):
        return []

    garments: List[DetectedGarment] = []
    for index, raw in enumerate(raw_garments):
        if not isinstance(raw, dict):
            logger.debug("Dropping garment %s: not an object", index)
            continue
        box = BoundingBox.from_raw(raw.get("boundingBox"))
        confidence = _finite_number(raw.get("confidence"))
        if box is None:
            logger.debug("Dropping garment %s: invalid bounding box", index)
            continue
        if confidence is None or confidence <= MIN_CONFIDENCE:
            logger.debug("Dropping garment %s: confidence %s", index, raw.get("confidence"))
            continue
        garments.append(
            DetectedGarment(
                category=text_or_default(raw.get("category"), "clothing"),
                bounding_box=box.padded(),
                description=text_or_default(raw.get("description"), "A clothing item"),
                confidence=confidence,
            )
        )
    return garments


def collage_result_from_raw(raw: Any) -> CollageDetectionResult:
    """Decode the detector response; a collage needs the model's claim and two usable garments."""

    data: Dict[str, Any] = raw if isinstance(raw, dict) else {}
    garments = sanitize_garments(data.get("garments"))
    return CollageDetectionResult(
        is_collage=data.get("isCollage") is True and len(garments) >= 2,
        garments=garments,
    )


__all__ = [
    "BoundingBox",
    "DetectedGarment",
    "CollageDetectionResult",
    "sanitize_garments",
    "collage_result_from_raw",
    "MIN_CONFIDENCE",
    "BOX_PADDING",
]
