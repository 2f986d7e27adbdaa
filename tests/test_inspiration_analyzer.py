"""Inspiration analyzer decoding."""

from __future__ import annotations

from agents.inspiration_analyzer import InspirationAnalyzerAgent
from models.inspiration import INSPIRATION_SLOTS, CelebrityOutfitAnalysis

from conftest import FakeAIClient, png_data_url


def test_empty_reply_uses_defaults() -> None:
    analysis = InspirationAnalyzerAgent(FakeAIClient([{}])).analyze(png_data_url(4, 4))

    for slot in INSPIRATION_SLOTS:
        assert analysis.slot(slot).description is None
        assert analysis.slot(slot).colors == []
    assert analysis.overall_vibe == "casual"
    assert analysis.dominant_colors == []


def test_slots_are_decoded_from_camel_case() -> None:
    reply = {
        "topDescription": "cropped white tank top",
        "topColors": ["cream white"],
        "bottomDescription": "high-waisted blue jeans",
        "bottomColors": ["indigo"],
        "shoesDescription": None,
        "shoesColors": "black",
        "overallVibe": "streetwear",
        "dominantColors": ["white", "indigo"],
    }
    analysis = InspirationAnalyzerAgent(FakeAIClient([reply])).analyze(png_data_url(4, 4))

    assert analysis.top.description == "cropped white tank top"
    assert analysis.bottom.colors == ["indigo"]
    assert analysis.shoes.description is None
    assert analysis.shoes.colors == []
    assert analysis.overall_vibe == "streetwear"


def test_wire_shape_round_trips_through_from_raw() -> None:
    analysis = CelebrityOutfitAnalysis.from_raw({"outerwearDescription": "camel trench", "outerwearColors": ["camel"]})

    payload = analysis.to_dict()

    assert payload["outerwearDescription"] == "camel trench"
    assert payload["accessoryDescription"] is None
    assert CelebrityOutfitAnalysis.from_raw(payload) == analysis


def test_prompt_offers_the_style_vocabulary() -> None:
    from agents.inspiration_analyzer import INSPIRATION_PROMPT
    from models.taxonomy import STYLE_VOCABULARY

    assert "one word describing the style: " + ", ".join(STYLE_VOCABULARY) in INSPIRATION_PROMPT
    assert "casual, formal, streetwear" in INSPIRATION_PROMPT
