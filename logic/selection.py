"""Recover a valid item selection from an untrusted stylist reply."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Sequence

from models.outfit import OutfitRecommendation
from models.taxonomy import text_or_default

logger = logging.getLogger(__name__)

MAX_SELECTED_ITEMS = 2
DEFAULT_EXPLANATION = "A stylish outfit combination."
DEFAULT_STYLE_NOTES = "Accessorize as needed."

_ID_TOKEN = re.compile(r"\[ID:\s*([^\]]+)\]")
_ID_PREFIX = re.compile(r"^\[?ID:\s*", re.IGNORECASE)
_ID_SUFFIX = re.compile(r"\]$")


def clean_item_id(raw_id: Any) -> str:
    """Strip ``[ID: ...]`` decoration from an id the model echoed back."""

    text = str(raw_id)
    return _ID_SUFFIX.sub("", _ID_PREFIX.sub("", text)).strip()


def _ids_from_list(raw_ids: Any, valid_ids: Sequence[str]) -> List[str]:
    if not isinstance(raw_ids, list):
        return []
    selected: List[str] = []
    for raw_id in raw_ids:
        if raw_id is None:
            continue
        cleaned = clean_item_id(raw_id)
        if cleaned in valid_ids:
            selected.append(cleaned)
        elif isinstance(raw_id, str) and raw_id in valid_ids:
            selected.append(raw_id)
    return selected


def _ids_from_text(text: Any, valid_ids: Sequence[str]) -> List[str]:
    if not isinstance(text, str):
        return []
    return [match.strip() for match in _ID_TOKEN.findall(text) if match.strip() in valid_ids]


def _dedupe(ids: Sequence[str], limit: int) -> List[str]:
    unique: List[str] = []
    for item_id in ids:
        if item_id not in unique:
            unique.append(item_id)
    return unique[:limit]


def resolve_selected_ids(raw: Dict[str, Any], valid_ids: Sequence[str]) -> List[str]:
    """Apply the three recovery tiers in order and return at most two known ids.

    1. ``selected_item_ids`` entries, with any ``[ID: ...]`` wrapper removed.
    2. ``[ID: x]`` tokens found in ``explanation``.
    3. The first two input ids.
    """

    selected = _dedupe(_ids_from_list(raw.get("selected_item_ids"), valid_ids), MAX_SELECTED_ITEMS)
    if selected:
        return selected

    selected = _dedupe(_ids_from_text(raw.get("explanation"), valid_ids), MAX_SELECTED_ITEMS)
    if selected:
        logger.info("Recovered selection from explanation text", extra={"selected_count": len(selected)})
        return selected

    logger.warning("No usable ids in stylist reply; using the first closet items")
    return _dedupe(valid_ids, MAX_SELECTED_ITEMS)


def recommendation_from_raw(raw: Dict[str, Any], valid_ids: Sequence[str]) -> OutfitRecommendation:
    return OutfitRecommendation(
        selected_item_ids=resolve_selected_ids(raw, valid_ids),
        explanation=text_or_default(raw.get("explanation"), DEFAULT_EXPLANATION),
        style_notes=text_or_default(raw.get("style_notes"), DEFAULT_STYLE_NOTES),
    )


__all__ = [
    "DEFAULT_EXPLANATION",
    "DEFAULT_STYLE_NOTES",
    "MAX_SELECTED_ITEMS",
    "clean_item_id",
    "recommendation_from_raw",
    "resolve_selected_ids",
]
