"""Collage detector agent that locates individual garments in a grid photo."""

from __future__ import annotations

import logging

from fitmuse_app.logging_config import get_logger, log_event, operation_context
from models.garment_detection import CollageDetectionResult, collage_result_from_raw
from models.taxonomy import DETECTION_CATEGORIES
from tools.ai_client import AIClient, parse_json_document
from tools.image_loader import decode_image_payload

logger = get_logger(__name__)

COLLAGE_DETECTION_PROMPT = """Analyze this image to detect if it's a collage containing MULTIPLE separate clothing items (like a grid of tops, pants, bikinis, etc.).

If the image shows MULTIPLE distinct clothing items arranged in a grid or collage format:
1. Set "isCollage" to true
2. For each clothing item, provide its bounding box as NORMALIZED coordinates (0-1 range where 0,0 is top-left and 1,1 is bottom-right)
3. The bounding box MUST capture the ENTIRE garment including:
   - All straps, ties, strings, and ribbons
   - The complete body/main portion of the garment
   - Any decorative elements that extend from the main piece
   - For bikini tops: include BOTH the cups AND all ties/straps
   - For tank tops: include the full body AND shoulder straps

If the image shows just ONE clothing item (or an outfit on a person), set "isCollage" to false and return an empty garments array.

Return JSON with this exact structure:
{
  "isCollage": boolean,
  "garments": [
    {
      "category": """ + " | ".join(f'"{category}"' for category in DETECTION_CATEGORIES) + """,
      "boundingBox": {
        "x": number (0-1, left edge - include some margin),
        "y": number (0-1, top edge - start ABOVE the topmost part like straps),
        "width": number (0-1),
        "height": number (0-1, extend BELOW the bottommost part)
      },
      "description": "brief description like 'white crew-neck t-shirt'",
      "confidence": number (0-1)
    }
  ]
}

CRITICAL INSTRUCTIONS:
- The bounding box MUST include the COMPLETE garment from the very top (including straps/ties) to the very bottom
- Add a small margin around each garment to ensure nothing is cut off
- For items with straps or ties: the y coordinate should start ABOVE the straps, and height should extend past the bottom of the garment
- Only return garments with confidence > 0.7
- Bounding boxes must be normalized (0-1 range)
- Maximum 20 garments per image"""


class CollageDetectorAgent:
    """Decides whether a photo is a multi-garment collage and returns padded boxes."""

    def __init__(self, ai_client: AIClient, max_tokens: int = 2000) -> None:
        self.ai_client = ai_client
        self.max_tokens = max_tokens

    def detect(self, image_base64: str) -> CollageDetectionResult:
        image = decode_image_payload(image_base64)
        with operation_context("agent:collage_detector.detect") as correlation_id:
            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_started",
                agent="collage_detector",
                method="detect",
                correlation_id=correlation_id,
                image_bytes=len(image.data),
            )
            try:
                reply = self.ai_client.analyze_image(COLLAGE_DETECTION_PROMPT, image, max_tokens=self.max_tokens)
                raw = parse_json_document(reply)
            except Exception as exc:
                log_event(
                    logger,
                    level=logging.ERROR,
                    event="agent_call_failed",
                    agent="collage_detector",
                    method="detect",
                    correlation_id=correlation_id,
                    error=str(exc),
                )
                raise

            result = collage_result_from_raw(raw)
            raw_garments = raw.get("garments")
            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_completed",
                agent="collage_detector",
                method="detect",
                correlation_id=correlation_id,
                is_collage=result.is_collage,
                garments_returned=len(raw_garments) if isinstance(raw_garments, list) else 0,
                garments_kept=len(result.garments),
            )
            return result


__all__ = ["CollageDetectorAgent", "COLLAGE_DETECTION_PROMPT"]
