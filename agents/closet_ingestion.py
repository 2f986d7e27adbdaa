"""Closet ingestion agent turning one uploaded photo into one or more closet items."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List

from agents.collage_detector import CollageDetectorAgent
from agents.garment_analyzer import GarmentAnalyzerAgent
from fitmuse_app.logging_config import get_logger, log_event, operation_context
from logic.cropper import crop_garment
from models.garment_detection import CollageDetectionResult
from models.outfit import ClosetItem
from tools.image_loader import decode_image_payload, load_inline_image

logger = get_logger(__name__)


@dataclass
class ClosetIngestionResult:
    items: List[ClosetItem] = field(default_factory=list)
    failures: List[Dict[str, str]] = field(default_factory=list)
    is_collage: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "failures": list(self.failures),
            "isCollage": self.is_collage,
        }


def _new_item_id() -> str:
    return uuid.uuid4().hex


class ClosetIngestionAgent:
    """Runs detect, crop and analyze for an upload, one garment at a time."""

    def __init__(self, collage_detector: CollageDetectorAgent, garment_analyzer: GarmentAnalyzerAgent) -> None:
        self.collage_detector = collage_detector
        self.garment_analyzer = garment_analyzer

    def ingest(self, image_base64: str, name: str) -> ClosetIngestionResult:
        """Ingest one upload.

        A collage yields one item per garment that crops and analyzes cleanly;
        failed pieces are reported and dropped. Anything else becomes a single
        item, kept with no analysis if detection or the analyzer fails. Nothing
        is retried.

        Raises:
            InvalidImagePayloadError: If ``image_base64`` cannot be decoded.
        """

        decode_image_payload(image_base64)
        base_name = name.strip() or "Item"
        with operation_context("agent:closet_ingestion.ingest") as correlation_id:
            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_started",
                agent="closet_ingestion",
                method="ingest",
                correlation_id=correlation_id,
            )
            try:
                detection = self.collage_detector.detect(image_base64)
            except Exception as exc:
                logger.error(
                    "Collage detection failed; keeping the upload unanalyzed",
                    extra={"error": str(exc), "correlation_id": correlation_id},
                )
                result = self._unanalyzed_single(image_base64, base_name, exc)
            else:
                if detection.is_collage:
                    result = self._ingest_collage(image_base64, base_name, detection)
                else:
                    result = self._ingest_single(image_base64, base_name)

            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_completed",
                agent="closet_ingestion",
                method="ingest",
                correlation_id=correlation_id,
                is_collage=result.is_collage,
                ingested=len(result.items),
                failed=len(result.failures),
            )
            return result

    def _unanalyzed_single(self, image_base64: str, base_name: str, exc: Exception) -> ClosetIngestionResult:
        item = ClosetItem(id=_new_item_id(), image=image_base64, name=base_name, analyzing=False)
        return ClosetIngestionResult(
            items=[item],
            failures=[{"name": base_name, "reason": f"Could not analyze {base_name}: {exc}"}],
        )

    def _ingest_single(self, image_base64: str, base_name: str) -> ClosetIngestionResult:
        item = ClosetItem(id=_new_item_id(), image=image_base64, name=base_name)
        result = ClosetIngestionResult(items=[item])
        try:
            item.analysis = self.garment_analyzer.analyze(image_base64)
        except Exception as exc:
            logger.error("Failed to analyze upload", extra={"item_id": item.id, "error": str(exc)})
            result.failures.append({"name": base_name, "reason": f"Could not analyze {base_name}: {exc}"})
        item.analyzing = False
        return result

    def _ingest_collage(
        self, image_base64: str, base_name: str, detection: CollageDetectionResult
    ) -> ClosetIngestionResult:
        result = ClosetIngestionResult(is_collage=True)
        for index, garment in enumerate(detection.garments, start=1):
            garment_name = f"{base_name} - {garment.description or garment.category} {index}"
            try:
                cropped = crop_garment(image_base64, garment.bounding_box, loader=load_inline_image)
            except Exception as exc:
                logger.error("Failed to crop garment", extra={"garment_index": index, "error": str(exc)})
                result.failures.append({"name": garment_name, "reason": f"Could not crop {garment_name}: {exc}"})
                continue

            item = ClosetItem(id=_new_item_id(), image=cropped, name=garment_name)
            try:
                item.analysis = self.garment_analyzer.analyze(cropped)
            except Exception as exc:
                logger.error("Failed to analyze cropped garment", extra={"garment_index": index, "error": str(exc)})
                result.failures.append({"name": garment_name, "reason": f"Could not analyze {garment_name}: {exc}"})
                continue
            item.analyzing = False
            result.items.append(item)
        return result


__all__ = ["ClosetIngestionAgent", "ClosetIngestionResult"]
