"""Centralised system prompt shared by every AI call."""

from __future__ import annotations

from typing import List

GUARDRAIL_BULLETS: List[str] = [
    "Stay within the FitMuse scope (garment analysis, outfit styling, fashion illustration).",
    "Only describe clothing; never identify or speculate about the people in a photo.",
    "Only reference closet items by the IDs you were given; never invent IDs.",
    "Answer with a single JSON object when JSON is requested, with no prose around it.",
]


def system_instruction(role_hint: str = "stylist") -> str:
    """Compose a consistent system prompt with boundary reminders."""

    boundary_text = "\n".join(f"- {bullet}" for bullet in GUARDRAIL_BULLETS)
    return (
        f"You are the FitMuse {role_hint}, a professional fashion assistant.\n"
        "Follow these guardrails before responding:\n"
        f"{boundary_text}"
    )


__all__ = ["system_instruction", "GUARDRAIL_BULLETS"]
