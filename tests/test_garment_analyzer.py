"""Garment analyzer defaults and error propagation."""

from __future__ import annotations

import pytest

from agents.garment_analyzer import GarmentAnalyzerAgent
from models.taxonomy import FORMALITY_LEVELS
from tools.ai_client import AIResponseFormatError, AIServiceError
from tools.image_loader import InvalidImagePayloadError

from conftest import FakeAIClient, png_data_url


@pytest.mark.parametrize(
    "reply",
    [
        {},
        {"formality": "black-tie", "colors": [], "style_vibes": "edgy", "season": None},
        {"category": "", "colors": ["", None], "description": "   "},
        [1, 2, 3],
        "",
    ],
)
def test_analysis_is_always_fully_populated(reply) -> None:
    agent = GarmentAnalyzerAgent(FakeAIClient([reply]))

    analysis = agent.analyze(png_data_url(4, 4))

    assert analysis.formality in FORMALITY_LEVELS
    assert analysis.colors and analysis.style_vibes and analysis.season
    assert analysis.category
    assert analysis.description


def test_empty_document_uses_documented_defaults() -> None:
    analysis = GarmentAnalyzerAgent(FakeAIClient([{}])).analyze(png_data_url(4, 4))

    assert analysis.to_dict() == {
        "category": "clothing",
        "colors": ["unknown"],
        "style_vibes": ["casual"],
        "formality": "casual",
        "season": ["all-seasons"],
        "description": "A clothing item",
    }


def test_valid_fields_are_kept() -> None:
    reply = {
        "category": "jeans",
        "colors": ["indigo"],
        "style_vibes": ["streetwear", "casual"],
        "formality": "Smart-Casual",
        "season": ["fall", "winter"],
        "description": "Straight-leg dark denim.",
    }
    analysis = GarmentAnalyzerAgent(FakeAIClient([reply])).analyze(png_data_url(4, 4))

    assert analysis.category == "jeans"
    assert analysis.colors == ["indigo"]
    assert analysis.formality == "smart-casual"
    assert analysis.season == ["fall", "winter"]


def test_bare_base64_is_sent_as_jpeg() -> None:
    client = FakeAIClient([{}])
    data_url = png_data_url(4, 4)
    GarmentAnalyzerAgent(client).analyze(data_url.split(",", 1)[1])

    assert client.images[0].mime_type == "image/jpeg"
    assert client.calls[0][0] == "analyze_image"


def test_non_json_reply_raises_format_error() -> None:
    agent = GarmentAnalyzerAgent(FakeAIClient(["Sorry, I cannot help with that."]))

    with pytest.raises(AIResponseFormatError):
        agent.analyze(png_data_url(4, 4))


def test_provider_failure_propagates() -> None:
    agent = GarmentAnalyzerAgent(FakeAIClient([AIServiceError("quota exceeded")]))

    with pytest.raises(AIServiceError, match="quota exceeded"):
        agent.analyze(png_data_url(4, 4))


def test_invalid_payload_is_rejected_before_calling_ai() -> None:
    client = FakeAIClient()

    with pytest.raises(InvalidImagePayloadError):
        GarmentAnalyzerAgent(client).analyze("not base64 at all!")
    assert client.calls == []
