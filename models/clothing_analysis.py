"""Structured description of a single garment photo."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from models.taxonomy import FORMALITY_LEVELS, normalize_key, string_list, text_or_default

DEFAULT_CATEGORY = "clothing"
DEFAULT_COLORS = ["unknown"]
DEFAULT_STYLE_VIBES = ["casual"]
DEFAULT_FORMALITY = "casual"
DEFAULT_SEASONS = ["all-seasons"]
DEFAULT_DESCRIPTION = "A clothing item"


@dataclass(frozen=True)
class ClothingAnalysis:
    """Normalised garment attributes produced by the garment analyzer."""

    category: str = DEFAULT_CATEGORY
    colors: List[str] = field(default_factory=lambda: list(DEFAULT_COLORS))
    style_vibes: List[str] = field(default_factory=lambda: list(DEFAULT_STYLE_VIBES))
    formality: str = DEFAULT_FORMALITY
    season: List[str] = field(default_factory=lambda: list(DEFAULT_SEASONS))
    description: str = DEFAULT_DESCRIPTION

    @classmethod
    def from_raw(cls, raw: Any) -> "ClothingAnalysis":
        """Decode an untrusted AI document, substituting a default for every bad field."""

        data: Dict[str, Any] = raw if isinstance(raw, dict) else {}
        formality = data.get("formality")
        if not isinstance(formality, str) or normalize_key(formality) not in FORMALITY_LEVELS:
            formality = DEFAULT_FORMALITY
        return cls(
            category=text_or_default(data.get("category"), DEFAULT_CATEGORY),
            colors=string_list(data.get("colors"), DEFAULT_COLORS),
            style_vibes=string_list(data.get("style_vibes"), DEFAULT_STYLE_VIBES),
            formality=normalize_key(formality),
            season=string_list(data.get("season"), DEFAULT_SEASONS),
            description=text_or_default(data.get("description"), DEFAULT_DESCRIPTION),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "colors": list(self.colors),
            "style_vibes": list(self.style_vibes),
            "formality": self.formality,
            "season": list(self.season),
            "description": self.description,
        }


__all__ = ["ClothingAnalysis"]
