"""Canonical vocabularies shared by the analyzers, selector and compositor.

The keyword lists here are matched as substrings against free-form category
strings returned by the AI, so their order matters: the compositor checks the
top tier first, then bottom, then footwear.
"""

from typing import Any, List, Optional

FORMALITY_LEVELS = ["casual", "smart-casual", "formal", "athletic"]

DETECTION_CATEGORIES = ["top", "bottom", "dress", "outerwear", "shoes", "accessory"]

STYLE_VOCABULARY = [
    "casual",
    "formal",
    "streetwear",
    "vintage",
    "sporty",
    "romantic",
    "minimalist",
    "edgy",
    "bohemian",
    "preppy",
]

# Flat-lay slot tiers used when stacking outfit photos.
TOP_SLOT_KEYWORDS = ["top", "shirt", "blouse", "jacket", "outerwear", "sweater", "hoodie", "coat", "dress"]
BOTTOM_SLOT_KEYWORDS = ["bottom", "pants", "jeans", "shorts", "skirt", "trousers"]
FOOTWEAR_SLOT_KEYWORDS = ["shoes", "boots", "sneakers", "heels", "sandals", "footwear"]

# Category hints given to the stylist model when it picks a top and a bottom.
SELECTION_TOP_CATEGORIES = [
    "top",
    "shirt",
    "blouse",
    "tank",
    "cami",
    "sweater",
    "hoodie",
    "jacket",
    "coat",
    "outerwear",
    "bikini top",
]
SELECTION_BOTTOM_CATEGORIES = [
    "bottom",
    "pants",
    "jeans",
    "shorts",
    "skirt",
    "trousers",
    "bikini bottom",
]


def normalize_key(value: str) -> str:
    """Normalise a free-form string for case-insensitive lookups."""

    return value.strip().lower()


def string_list(value: Any, default: Optional[List[str]] = None) -> List[str]:
    """Return ``value`` as a list of strings, or ``default`` when it is not a non-empty list."""

    fallback = list(default) if default is not None else []
    if not isinstance(value, list):
        return fallback
    cleaned = [str(entry).strip() for entry in value if entry is not None and str(entry).strip()]
    return cleaned or fallback


def text_or_default(value: Any, default: Optional[str]) -> Optional[str]:
    """Return a stripped string, or ``default`` for missing, blank or non-scalar values."""

    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, (str, int, float)):
        text = str(value).strip()
        return text or default
    return default


__all__ = [
    "FORMALITY_LEVELS",
    "DETECTION_CATEGORIES",
    "STYLE_VOCABULARY",
    "TOP_SLOT_KEYWORDS",
    "BOTTOM_SLOT_KEYWORDS",
    "FOOTWEAR_SLOT_KEYWORDS",
    "SELECTION_TOP_CATEGORIES",
    "SELECTION_BOTTOM_CATEGORIES",
    "normalize_key",
    "string_list",
    "text_or_default",
]
