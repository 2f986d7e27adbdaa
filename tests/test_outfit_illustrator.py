"""Outfit illustration prompt and generation errors."""

from __future__ import annotations

import pytest

from agents.outfit_illustrator import OutfitIllustratorAgent, build_illustration_prompt
from models.clothing_analysis import ClothingAnalysis
from models.outfit import ClosetItem
from tools.ai_client import AIServiceError

from conftest import FakeAIClient


def _items():
    return [
        ClosetItem(
            id="1",
            image="data:image/png;base64,AAAA",
            name="Shirt",
            analysis=ClothingAnalysis(category="shirt", colors=["white", "blue"], description="striped oxford shirt"),
        ),
        ClosetItem(id="2", image="data:image/png;base64,BBBB", name="Chinos"),
    ]


def test_prompt_describes_items_mood_and_vibe() -> None:
    prompt = build_illustration_prompt(_items(), "Calm", "Minimalist")

    assert "white and blue striped oxford shirt, paired with unknown A clothing item" in prompt
    assert "a calm mood with Minimalist style aesthetic" in prompt
    assert "clean white background" in prompt


def test_prompt_defaults_to_casual_style() -> None:
    assert "casual style aesthetic" in build_illustration_prompt(_items(), "Bold")


def test_generate_returns_image_url() -> None:
    fake_ai = FakeAIClient(image_url="data:image/png;base64,ZmxhdA==")

    assert OutfitIllustratorAgent(fake_ai).generate(_items(), "Calm") == "data:image/png;base64,ZmxhdA=="
    assert fake_ai.calls[0][0] == "generate_image"


def test_generation_failure_is_wrapped() -> None:
    fake_ai = FakeAIClient([AIServiceError("No image data returned from AI")])

    with pytest.raises(AIServiceError, match="Failed to generate outfit image: No image data returned from AI"):
        OutfitIllustratorAgent(fake_ai).generate(_items(), "Calm")


@pytest.mark.parametrize(
    "items, mood, message",
    [([], "Calm", "Need at least 1 item for outfit image"), (_items(), "  ", "Mood is required")],
)
def test_invalid_input_is_rejected(items, mood, message) -> None:
    with pytest.raises(ValueError, match=message):
        OutfitIllustratorAgent(FakeAIClient()).generate(items, mood)
