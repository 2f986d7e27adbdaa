"""Garment analyzer agent: one photo in, one fully-populated ClothingAnalysis out."""

from __future__ import annotations

import logging

from fitmuse_app.logging_config import get_logger, log_event, operation_context
from models.clothing_analysis import ClothingAnalysis
from tools.ai_client import AIClient, parse_json_document
from tools.image_loader import decode_image_payload

logger = get_logger(__name__)

GARMENT_ANALYSIS_PROMPT = """Analyze this image showing clothing. Even if there are multiple items, focus on the most prominent clothing piece visible. Provide a JSON response with these exact fields:
- category: the type of clothing (e.g., "shirt", "pants", "jacket", "dress", "shoes", "accessory", "top", "bottom", "outerwear")
- colors: array of dominant colors (e.g., ["black", "white", "navy"])
- style_vibes: array of style descriptors (e.g., ["streetwear", "minimalist", "vintage", "sporty", "romantic", "casual", "formal"])
- formality: one of "casual", "smart-casual", "formal", or "athletic"
- season: array of seasons this works for (e.g., ["spring", "summer", "fall", "winter"])
- description: brief 1-sentence description of the item

IMPORTANT: Always return valid JSON with all these fields. Never return an error message."""


class GarmentAnalyzerAgent:
    """Classifies a single garment photo through the vision model."""

    def __init__(self, ai_client: AIClient, max_tokens: int = 500) -> None:
        self.ai_client = ai_client
        self.max_tokens = max_tokens

    def analyze(self, image_base64: str) -> ClothingAnalysis:
        """Return the garment attributes; every field falls back to a documented default.

        Raises:
            InvalidImagePayloadError: If ``image_base64`` cannot be decoded.
            AIServiceError: If the provider call fails.
            AIResponseFormatError: If the provider reply is not JSON.
        """

        image = decode_image_payload(image_base64)
        with operation_context("agent:garment_analyzer.analyze") as correlation_id:
            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_started",
                agent="garment_analyzer",
                method="analyze",
                correlation_id=correlation_id,
                mime_type=image.mime_type,
                image_bytes=len(image.data),
            )
            try:
                reply = self.ai_client.analyze_image(GARMENT_ANALYSIS_PROMPT, image, max_tokens=self.max_tokens)
                analysis = ClothingAnalysis.from_raw(parse_json_document(reply))
            except Exception as exc:
                log_event(
                    logger,
                    level=logging.ERROR,
                    event="agent_call_failed",
                    agent="garment_analyzer",
                    method="analyze",
                    correlation_id=correlation_id,
                    error=str(exc),
                )
                raise

            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_completed",
                agent="garment_analyzer",
                method="analyze",
                correlation_id=correlation_id,
                category=analysis.category,
                formality=analysis.formality,
            )
            return analysis


__all__ = ["GarmentAnalyzerAgent", "GARMENT_ANALYSIS_PROMPT"]
