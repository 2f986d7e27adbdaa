"""Closet, recommendation and saved-outfit schemas."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from models.clothing_analysis import ClothingAnalysis


@dataclass
class ClosetItem:
    """One garment in a user's in-memory closet.

    ``analyzing`` stays true until the garment analyzer finishes; a failed
    single upload keeps the item with ``analysis`` unset.
    """

    id: str
    image: str
    name: str
    analysis: Optional[ClothingAnalysis] = None
    analyzing: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "image": self.image,
            "name": self.name,
            "analysis": self.analysis.to_dict() if self.analysis else None,
            "analyzing": self.analyzing,
        }


@dataclass(frozen=True)
class OutfitRecommendation:
    selected_item_ids: List[str]
    explanation: str
    style_notes: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "selected_item_ids": list(self.selected_item_ids),
            "explanation": self.explanation,
            "style_notes": self.style_notes,
        }


@dataclass(frozen=True)
class SavedOutfitItem:
    """One item snapshot; ``category_given`` keeps an explicit ``null`` category on the wire."""

    id: str
    name: str
    preview: str
    category: Optional[str] = None
    category_given: bool = field(default=False, compare=False, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"id": self.id, "name": self.name, "preview": self.preview}
        if self.category is not None or self.category_given:
            payload["category"] = self.category
        return payload


@dataclass(frozen=True)
class SavedOutfit:
    """A persisted outfit snapshot owned by exactly one user."""

    id: str
    user_id: str
    name: str
    mood: str
    items: List[SavedOutfitItem]
    explanation: str
    created_at: datetime
    style_vibe: Optional[str] = None
    style_notes: Optional[str] = None
    composite_image: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "mood": self.mood,
            "styleVibe": self.style_vibe,
            "items": [item.to_dict() for item in self.items],
            "explanation": self.explanation,
            "styleNotes": self.style_notes,
            "compositeImage": self.composite_image,
            "createdAt": self.created_at.isoformat(),
        }


__all__ = ["ClosetItem", "OutfitRecommendation", "SavedOutfitItem", "SavedOutfit"]
