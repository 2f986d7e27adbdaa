"""Inspiration analyzer agent for celebrity or character outfit photos."""

from __future__ import annotations

import logging

from fitmuse_app.logging_config import get_logger, log_event, operation_context
from models.inspiration import CelebrityOutfitAnalysis
from models.taxonomy import STYLE_VOCABULARY
from tools.ai_client import AIClient, parse_json_document
from tools.image_loader import decode_image_payload

logger = get_logger(__name__)

INSPIRATION_PROMPT = """Analyze this image of a celebrity or character outfit. Extract detailed information about each clothing piece visible.

Return JSON with this exact structure:
{
  "topDescription": "description of the top/shirt/blouse if visible, or null",
  "topColors": ["array of colors in the top"],
  "bottomDescription": "description of pants/skirt/shorts if visible, or null",
  "bottomColors": ["array of colors in the bottom"],
  "shoesDescription": "description of footwear if visible, or null",
  "shoesColors": ["array of colors in the shoes"],
  "outerwearDescription": "description of jacket/coat if visible, or null",
  "outerwearColors": ["array of colors in outerwear"],
  "accessoryDescription": "description of main accessories if visible, or null",
  "accessoryColors": ["array of colors in accessories"],
  "overallVibe": "one word describing the style: """ + ", ".join(STYLE_VOCABULARY) + """",
  "dominantColors": ["the 2-3 most prominent colors in the entire outfit"]
}

Be specific about:
- Clothing types (e.g., "cropped white tank top", "high-waisted blue jeans", "black leather ankle boots")
- Colors (use specific color names like "navy blue", "cream white", "olive green")
- Style elements that make the outfit distinctive

Return ONLY valid JSON."""


class InspirationAnalyzerAgent:
    """Breaks a reference outfit photo into per-slot descriptions."""

    def __init__(self, ai_client: AIClient, max_tokens: int = 1000) -> None:
        self.ai_client = ai_client
        self.max_tokens = max_tokens

    def analyze(self, image_base64: str) -> CelebrityOutfitAnalysis:
        image = decode_image_payload(image_base64)
        with operation_context("agent:inspiration_analyzer.analyze") as correlation_id:
            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_started",
                agent="inspiration_analyzer",
                method="analyze",
                correlation_id=correlation_id,
            )
            try:
                reply = self.ai_client.analyze_image(INSPIRATION_PROMPT, image, max_tokens=self.max_tokens)
                analysis = CelebrityOutfitAnalysis.from_raw(parse_json_document(reply))
            except Exception as exc:
                log_event(
                    logger,
                    level=logging.ERROR,
                    event="agent_call_failed",
                    agent="inspiration_analyzer",
                    method="analyze",
                    correlation_id=correlation_id,
                    error=str(exc),
                )
                raise

            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_completed",
                agent="inspiration_analyzer",
                method="analyze",
                correlation_id=correlation_id,
                overall_vibe=analysis.overall_vibe,
            )
            return analysis


__all__ = ["InspirationAnalyzerAgent", "INSPIRATION_PROMPT"]
