"""Outfit illustrator agent producing a fashion illustration of selected items."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from fitmuse_app.logging_config import get_logger, log_event, operation_context
from logic.validation import InvalidRequestError
from models.clothing_analysis import ClothingAnalysis
from models.outfit import ClosetItem
from tools.ai_client import AIClient, AIServiceError

logger = get_logger(__name__)


def build_illustration_prompt(items: Sequence[ClosetItem], mood: str, style_vibe: Optional[str] = None) -> str:
    descriptions = []
    for item in items:
        analysis = item.analysis or ClothingAnalysis()
        colors = " and ".join(analysis.colors)
        descriptions.append(f"{colors} {analysis.description or analysis.category}")

    style_context = f"{style_vibe} style" if style_vibe else "casual style"
    return (
        f"Fashion illustration of a stylish outfit: {', paired with '.join(descriptions)}. "
        f"The outfit has a {mood.lower()} mood with {style_context} aesthetic. "
        "Show the complete outfit on a fashion model mannequin or flat lay presentation, "
        "professional fashion photography style, clean white background, high-end fashion "
        "magazine quality, soft lighting, elegant composition."
    )


class OutfitIllustratorAgent:
    """Renders an outfit through the image generation model."""

    def __init__(self, ai_client: AIClient, size: str = "1024x1024") -> None:
        self.ai_client = ai_client
        self.size = size

    def generate(self, items: Sequence[ClosetItem], mood: str, style_vibe: Optional[str] = None) -> str:
        """Return the illustration as a PNG ``data:`` URL.

        Raises:
            InvalidRequestError: If no items are given or ``mood`` is blank.
            AIServiceError: For any generation failure, prefixed with context.
        """

        if not items:
            raise InvalidRequestError("Need at least 1 item for outfit image")
        if not mood or not mood.strip():
            raise InvalidRequestError("Mood is required")

        with operation_context("agent:outfit_illustrator.generate", mood=mood) as correlation_id:
            prompt = build_illustration_prompt(items, mood, style_vibe)
            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_started",
                agent="outfit_illustrator",
                method="generate",
                correlation_id=correlation_id,
                item_count=len(items),
                prompt_chars=len(prompt),
            )
            try:
                image_url = self.ai_client.generate_image(prompt, size=self.size)
                if not image_url:
                    raise AIServiceError("Image data is empty")
            except Exception as exc:
                log_event(
                    logger,
                    level=logging.ERROR,
                    event="agent_call_failed",
                    agent="outfit_illustrator",
                    method="generate",
                    correlation_id=correlation_id,
                    error=str(exc),
                )
                raise AIServiceError(f"Failed to generate outfit image: {exc}") from exc

            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_completed",
                agent="outfit_illustrator",
                method="generate",
                correlation_id=correlation_id,
            )
            return image_url


__all__ = ["OutfitIllustratorAgent", "build_illustration_prompt"]
