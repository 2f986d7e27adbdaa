"""Prompt assembly for the outfit selector.

The prompt is plain text built from independent blocks so each guidance source
(moodboard, style vibe, inspiration photo, free-form hints) can be absent
without leaving dangling headings.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from models.clothing_analysis import ClothingAnalysis
from models.inspiration import CelebrityOutfitAnalysis
from models.outfit import ClosetItem
from models.reference_data import Moodboard, StyleVibe
from models.taxonomy import SELECTION_BOTTOM_CATEGORIES, SELECTION_TOP_CATEGORIES

_INSPIRATION_SLOT_LABELS = (
    ("top", "Top"),
    ("bottom", "Bottom"),
    ("shoes", "Shoes"),
    ("outerwear", "Outerwear"),
)


def describe_item(item: ClosetItem) -> str:
    """Render one closet item as a ``[ID: ...]`` tagged line."""

    analysis = item.analysis or ClothingAnalysis()
    return (
        f"[ID: {item.id}] {item.name} - {analysis.category}, "
        f"colors: {', '.join(analysis.colors)}, "
        f"vibes: {', '.join(analysis.style_vibes)}, "
        f"formality: {analysis.formality}, "
        f"description: {analysis.description}"
    )


def moodboard_block(mood: str, moodboard: Optional[Moodboard]) -> str:
    if moodboard is None:
        return ""
    return "\n".join(
        [
            f'MOODBOARD FOR "{mood.upper()}" MOOD:',
            f"- Target Colors: {', '.join(moodboard.color_palette)}",
            f"- Preferred Textures: {', '.join(moodboard.textures)}",
            f"- Silhouette Style: {', '.join(moodboard.silhouettes)}",
            f"- Typical Pieces: {', '.join(moodboard.typical_pieces)}",
            f"- Styling Rules: {'; '.join(moodboard.styling_logic)}",
            f"- Example Outfit: {', '.join(moodboard.example_outfit)}",
        ]
    )


def style_vibe_block(style_vibe: Optional[StyleVibe]) -> str:
    if style_vibe is None:
        return ""
    return "\n".join(
        [
            f'STYLE VIBE: "{style_vibe.name.upper()}"',
            f"- Color Tendencies: {', '.join(style_vibe.color_tendencies)}",
            f"- Preferred Textures: {', '.join(style_vibe.textures)}",
            f"- Silhouette Style: {', '.join(style_vibe.silhouettes)}",
            f"- Typical Pieces: {', '.join(style_vibe.typical_pieces)}",
            f"- Styling Rules: {'; '.join(style_vibe.styling_rules)}",
            f"- Example Outfit: {', '.join(style_vibe.example_outfit)}",
        ]
    )


def inspiration_block(inspiration: Optional[CelebrityOutfitAnalysis]) -> str:
    """Describe the reference look and tell the model to match it first."""

    if inspiration is None:
        return ""
    lines: List[str] = ["CELEBRITY/CHARACTER INSPIRATION - MATCH THIS LOOK:"]
    for slot, label in _INSPIRATION_SLOT_LABELS:
        described = inspiration.slot(slot)
        if described.description:
            lines.append(f"- Reference {label}: {described.description} (colors: {', '.join(described.colors)})")
    lines.extend(
        [
            f"- Overall Vibe: {inspiration.overall_vibe}",
            f"- Dominant Colors: {', '.join(inspiration.dominant_colors)}",
            "",
            "PRIORITY: Match the celebrity outfit as closely as possible using items from the user's closet. Find:",
            "1. A TOP that matches the reference top's style, color, and vibe",
            "2. A BOTTOM that matches the reference bottom's style, color, and vibe",
            "Prioritize color matching and similar garment types.",
        ]
    )
    return "\n".join(lines)


def build_selection_prompt(
    items: Sequence[ClosetItem],
    mood: str,
    moodboard: Optional[Moodboard] = None,
    style_vibe: Optional[StyleVibe] = None,
    color_direction: Optional[str] = None,
    has_sketch: bool = False,
    inspiration: Optional[CelebrityOutfitAnalysis] = None,
) -> str:
    """Compose the full stylist prompt for one outfit request."""

    constraints: List[str] = [f"- Mood: {mood}"]
    for block in (
        moodboard_block(mood, moodboard),
        style_vibe_block(style_vibe),
        inspiration_block(inspiration),
    ):
        if block:
            constraints.append(block)
    if color_direction:
        constraints.append(f"- Color Direction: {color_direction}")
    if has_sketch:
        constraints.append("- User provided a silhouette sketch - consider volume and shape")

    item_lines = "\n".join(describe_item(item) for item in items)
    return f"""You are a professional fashion stylist. Create an outfit from these clothing items:

{item_lines}

CONSTRAINTS:
{chr(10).join(constraints)}

OUTFIT REQUIREMENTS:
- Select EXACTLY 2 items: ONE top and ONE bottom
- Top categories include: {', '.join(SELECTION_TOP_CATEGORIES)}
- Bottom categories include: {', '.join(SELECTION_BOTTOM_CATEGORIES)}
- If a dress is available and matches the mood, you may select just the dress (1 item)

IMPORTANT: Match clothing items to BOTH the mood criteria AND the style vibe criteria. Prioritize items whose colors, textures, silhouettes, and style match the guidelines. The outfit should feel cohesive with both the mood and vibe.

CRITICAL: You must ONLY select from the items provided above. Return the exact IDs (the strings in brackets like [ID: abc123]) of the items you select.

Return JSON with these exact fields:
- selected_item_ids: array of EXACTLY 2 item IDs (one top, one bottom) - strings only, from the [ID: xxx] brackets above
- explanation: 2-3 sentence explanation of why this outfit works for the mood/vibe and how items match the criteria
- style_notes: brief styling tip

Return ONLY valid JSON."""


__all__ = [
    "build_selection_prompt",
    "describe_item",
    "inspiration_block",
    "moodboard_block",
    "style_vibe_block",
]
