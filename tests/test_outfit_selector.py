"""Outfit selector: prompt guidance and the three-tier id recovery."""

from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from agents.outfit_selector import OutfitSelectorAgent
from logic.selection import DEFAULT_EXPLANATION, DEFAULT_STYLE_NOTES, clean_item_id, resolve_selected_ids
from models.clothing_analysis import ClothingAnalysis
from models.inspiration import CelebrityOutfitAnalysis
from models.outfit import ClosetItem
from tools.ai_client import AIResponseFormatError, AIServiceError
from tools.reference_store import SQLiteReferenceStore, seed_reference_data

from conftest import FakeAIClient


@pytest.fixture()
def reference_store(tmp_path: Path) -> SQLiteReferenceStore:
    store = SQLiteReferenceStore(tmp_path / "reference.db")
    seed_reference_data(store)
    return store


@pytest.fixture()
def closet() -> List[ClosetItem]:
    return [
        ClosetItem(
            id="a",
            image="",
            name="Linen shirt",
            analysis=ClothingAnalysis(category="shirt", colors=["white"], formality="smart-casual"),
            analyzing=False,
        ),
        ClosetItem(
            id="b",
            image="",
            name="Wide trousers",
            analysis=ClothingAnalysis(category="trousers", colors=["olive"]),
            analyzing=False,
        ),
        ClosetItem(
            id="c",
            image="",
            name="Denim skirt",
            analysis=ClothingAnalysis(category="skirt", colors=["blue"]),
            analyzing=False,
        ),
    ]


def _select(reference_store, closet, reply, **kwargs):
    client = FakeAIClient([reply])
    agent = OutfitSelectorAgent(client, reference_store)
    return agent.select(closet, kwargs.pop("mood", "Calm"), **kwargs), client


def test_wrapped_ids_are_cleaned_and_bogus_ids_dropped(reference_store, closet) -> None:
    result, _ = _select(reference_store, closet, {"selected_item_ids": ["[ID: a]", "bogus"], "explanation": "x"})

    assert result.selected_item_ids == ["a"]


def test_ids_are_recovered_from_explanation(reference_store, closet) -> None:
    reply = {"selected_item_ids": "none", "explanation": "Let's pair [ID: b] with [ID: c] for balance."}
    result, _ = _select(reference_store, closet, reply)

    assert result.selected_item_ids == ["b", "c"]
    assert result.explanation == reply["explanation"]


def test_unusable_reply_falls_back_to_first_two_items(reference_store, closet) -> None:
    result, _ = _select(reference_store, closet, {"selected_item_ids": [42, None], "explanation": "no ids here"})

    assert result.selected_item_ids == ["a", "b"]


def test_empty_reply_gets_default_text(reference_store, closet) -> None:
    result, _ = _select(reference_store, closet, {})

    assert result.selected_item_ids == ["a", "b"]
    assert result.explanation == DEFAULT_EXPLANATION
    assert result.style_notes == DEFAULT_STYLE_NOTES


def test_selection_is_deduplicated_and_capped(reference_store, closet) -> None:
    result, _ = _select(reference_store, closet, {"selected_item_ids": ["c", "ID: c", "a", "b"]})

    assert result.selected_item_ids == ["c", "a"]


def test_single_dress_selection_is_kept(reference_store, closet) -> None:
    result, _ = _select(reference_store, closet, {"selected_item_ids": ["c"]})

    assert result.selected_item_ids == ["c"]


@pytest.mark.parametrize(
    "raw, expected",
    [("[ID: abc123]", "abc123"), ("ID: abc123", "abc123"), ("id:abc123]", "abc123"), ("abc123", "abc123")],
)
def test_clean_item_id(raw, expected) -> None:
    assert clean_item_id(raw) == expected


def test_resolved_ids_are_always_known() -> None:
    valid = ["x1", "x2", "x3"]
    for raw in (
        {"selected_item_ids": ["[ID: nope]"]},
        {"selected_item_ids": [{"id": "x1"}], "explanation": "[ID: x9] then [ID: x3]"},
        {"explanation": None},
    ):
        selected = resolve_selected_ids(raw, valid)
        assert 1 <= len(selected) <= 2
        assert set(selected) <= set(valid)


def test_prompt_includes_moodboard_and_vibe_guidance(reference_store, closet) -> None:
    _, client = _select(reference_store, closet, {}, mood="calm", style_vibe="minimalist", color_direction="earth tones")

    prompt = client.calls[0][1]
    assert 'MOODBOARD FOR "CALM" MOOD:' in prompt
    assert 'STYLE VIBE: "MINIMALIST"' in prompt
    assert "- Color Direction: earth tones" in prompt
    assert "[ID: a] Linen shirt - shirt" in prompt
    assert "bikini bottom" in prompt


def test_unknown_mood_omits_guidance_without_error(reference_store, closet) -> None:
    result, client = _select(reference_store, closet, {"selected_item_ids": ["a", "b"]}, mood="Whimsical", style_vibe="Goth")

    prompt = client.calls[0][1]
    assert "MOODBOARD" not in prompt
    assert "STYLE VIBE" not in prompt
    assert "- Mood: Whimsical" in prompt
    assert result.selected_item_ids == ["a", "b"]


def test_inspiration_block_has_priority_directive(reference_store, closet) -> None:
    inspiration = CelebrityOutfitAnalysis.from_raw(
        {"topDescription": "white tee", "topColors": ["white"], "overallVibe": "minimalist"}
    )
    _, client = _select(reference_store, closet, {}, celebrity_inspiration=inspiration, has_sketch=True)

    prompt = client.calls[0][1]
    assert "- Reference Top: white tee (colors: white)" in prompt
    assert "Reference Bottom" not in prompt
    assert "PRIORITY: Match the celebrity outfit" in prompt
    assert "silhouette sketch" in prompt


def test_fewer_than_two_items_is_rejected(reference_store, closet) -> None:
    agent = OutfitSelectorAgent(FakeAIClient(), reference_store)

    with pytest.raises(ValueError, match="Need at least 2 items"):
        agent.select(closet[:1], "Calm")


def test_blank_mood_is_rejected(reference_store, closet) -> None:
    with pytest.raises(ValueError, match="Mood is required"):
        OutfitSelectorAgent(FakeAIClient(), reference_store).select(closet, "  ")


def test_ai_errors_propagate(reference_store, closet) -> None:
    with pytest.raises(AIServiceError):
        _select(reference_store, closet, AIServiceError("upstream down"))
    with pytest.raises(AIResponseFormatError):
        _select(reference_store, closet, "definitely not json")
