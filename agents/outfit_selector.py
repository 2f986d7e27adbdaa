"""Outfit selector agent: asks the stylist model to pick a top and bottom (or a dress)."""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from fitmuse_app.logging_config import get_logger, log_event, operation_context
from logic.outfit_prompt import build_selection_prompt
from logic.validation import InvalidRequestError
from logic.selection import recommendation_from_raw
from models.inspiration import CelebrityOutfitAnalysis
from models.outfit import ClosetItem, OutfitRecommendation
from tools.ai_client import AIClient, parse_json_document
from tools.reference_store import ReferenceStore

logger = get_logger(__name__)

MIN_CLOSET_ITEMS = 2


class OutfitSelectorAgent:
    """Selects closet items for a mood using moodboard and vibe guidance."""

    def __init__(self, ai_client: AIClient, reference_store: ReferenceStore, max_tokens: int = 800) -> None:
        self.ai_client = ai_client
        self.reference_store = reference_store
        self.max_tokens = max_tokens

    def select(
        self,
        items: Sequence[ClosetItem],
        mood: str,
        style_vibe: Optional[str] = None,
        color_direction: Optional[str] = None,
        has_sketch: bool = False,
        celebrity_inspiration: Optional[CelebrityOutfitAnalysis] = None,
    ) -> OutfitRecommendation:
        """Return one to two ids from ``items`` with an explanation and a styling tip.

        Unknown moods or vibes simply omit their guidance block. The returned
        ids are always a subset of the input ids, whatever the model replies.

        Raises:
            InvalidRequestError: If fewer than two items are given or ``mood`` is blank.
            AIServiceError: If the provider call fails.
            AIResponseFormatError: If the provider reply is not JSON.
        """

        if len(items) < MIN_CLOSET_ITEMS:
            raise InvalidRequestError("Need at least 2 items in closet")
        if not mood or not mood.strip():
            raise InvalidRequestError("Mood is required")

        with operation_context("agent:outfit_selector.select", mood=mood) as correlation_id:
            moodboard = self.reference_store.get_moodboard(mood)
            vibe = self.reference_store.get_style_vibe(style_vibe) if style_vibe else None
            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_started",
                agent="outfit_selector",
                method="select",
                correlation_id=correlation_id,
                mood=mood,
                style_vibe=style_vibe,
                item_count=len(items),
                moodboard_found=moodboard is not None,
                style_vibe_found=vibe is not None,
                has_inspiration=celebrity_inspiration is not None,
            )

            prompt = build_selection_prompt(
                items,
                mood,
                moodboard=moodboard,
                style_vibe=vibe,
                color_direction=color_direction,
                has_sketch=has_sketch,
                inspiration=celebrity_inspiration,
            )
            try:
                reply = self.ai_client.chat_complete(prompt, max_tokens=self.max_tokens)
                raw = parse_json_document(reply)
            except Exception as exc:
                log_event(
                    logger,
                    level=logging.ERROR,
                    event="agent_call_failed",
                    agent="outfit_selector",
                    method="select",
                    correlation_id=correlation_id,
                    error=str(exc),
                )
                raise

            recommendation = recommendation_from_raw(raw, [item.id for item in items])
            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_completed",
                agent="outfit_selector",
                method="select",
                correlation_id=correlation_id,
                selected_item_ids=recommendation.selected_item_ids,
            )
            return recommendation


__all__ = ["OutfitSelectorAgent", "MIN_CLOSET_ITEMS"]
