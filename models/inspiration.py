"""Breakdown of a reference (celebrity or character) outfit photo."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from models.taxonomy import string_list, text_or_default

INSPIRATION_SLOTS = ("top", "bottom", "shoes", "outerwear", "accessory")


@dataclass(frozen=True)
class SlotDescription:
    description: Optional[str] = None
    colors: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CelebrityOutfitAnalysis:
    """Per-slot descriptions plus the overall vibe and dominant colours."""

    top: SlotDescription = field(default_factory=SlotDescription)
    bottom: SlotDescription = field(default_factory=SlotDescription)
    shoes: SlotDescription = field(default_factory=SlotDescription)
    outerwear: SlotDescription = field(default_factory=SlotDescription)
    accessory: SlotDescription = field(default_factory=SlotDescription)
    overall_vibe: str = "casual"
    dominant_colors: List[str] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Any) -> "CelebrityOutfitAnalysis":
        """Decode the camelCase wire shape used by both the AI and the HTTP client."""

        data: Dict[str, Any] = raw if isinstance(raw, dict) else {}
        slots = {
            slot: SlotDescription(
                description=text_or_default(data.get(f"{slot}Description"), None),
                colors=string_list(data.get(f"{slot}Colors")),
            )
            for slot in INSPIRATION_SLOTS
        }
        return cls(
            **slots,
            overall_vibe=text_or_default(data.get("overallVibe"), "casual"),
            dominant_colors=string_list(data.get("dominantColors")),
        )

    def slot(self, name: str) -> SlotDescription:
        return getattr(self, name)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        for slot in INSPIRATION_SLOTS:
            described = self.slot(slot)
            payload[f"{slot}Description"] = described.description
            payload[f"{slot}Colors"] = list(described.colors)
        payload["overallVibe"] = self.overall_vibe
        payload["dominantColors"] = list(self.dominant_colors)
        return payload


__all__ = ["CelebrityOutfitAnalysis", "SlotDescription", "INSPIRATION_SLOTS"]
