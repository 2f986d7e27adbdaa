"""Pydantic schemas for HTTP request payloads.

Field names follow the camelCase wire format through aliases. Presence checks
run in ``mode="before"`` validators so each endpoint reports one readable
message (for example ``"Mood is required"``) instead of a list of field errors.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from models.clothing_analysis import ClothingAnalysis
from models.garment_detection import BoundingBox
from models.inspiration import CelebrityOutfitAnalysis
from models.outfit import ClosetItem, SavedOutfitItem


_VALUE_ERROR_PREFIX = "Value error, "


class InvalidRequestError(ValueError):
    """Raised when caller-supplied input is rejected; the API reports it as a 400."""


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _require(data: Any, message: str, *keys: str) -> None:
    if not isinstance(data, dict) or any(_is_blank(data.get(key)) for key in keys):
        raise ValueError(message)


def _require_items(data: Any, minimum: int, message: str) -> None:
    items = data.get("items") if isinstance(data, dict) else None
    if not isinstance(items, list) or len(items) < minimum:
        raise ValueError(message)


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CredentialsRequest(WireModel):
    username: str
    password: str

    @model_validator(mode="before")
    @classmethod
    def _check_present(cls, data: Any) -> Any:
        _require(data, "Username and password are required", "username", "password")
        return data


class ImageRequest(WireModel):
    image_base64: str = Field(alias="imageBase64")

    @model_validator(mode="before")
    @classmethod
    def _check_present(cls, data: Any) -> Any:
        _require(data, "Missing imageBase64", "imageBase64")
        return data


class ClosetIngestRequest(ImageRequest):
    name: str = ""


class ClosetItemPayload(WireModel):
    """A closet item as the client holds it; only the fields the stylist needs are kept."""

    id: str
    name: str = ""
    image: str = ""
    category: Optional[str] = None
    analysis: Optional[Dict[str, Any]] = None

    def to_closet_item(self) -> ClosetItem:
        analysis = ClothingAnalysis.from_raw(self.analysis) if self.analysis is not None else None
        return ClosetItem(id=self.id, image=self.image, name=self.name, analysis=analysis, analyzing=False)


class GenerateOutfitRequest(WireModel):
    items: List[ClosetItemPayload]
    mood: str
    style_vibe: Optional[str] = Field(default=None, alias="styleVibe")
    color_direction: Optional[str] = Field(default=None, alias="colorDirection")
    has_sketch: bool = Field(default=False, alias="hasSketch")
    celebrity_inspiration: Optional[Dict[str, Any]] = Field(default=None, alias="celebrityInspiration")

    @model_validator(mode="before")
    @classmethod
    def _check_present(cls, data: Any) -> Any:
        _require_items(data, 2, "Need at least 2 items in closet")
        _require(data, "Mood is required", "mood")
        return data

    def closet_items(self) -> List[ClosetItem]:
        return [item.to_closet_item() for item in self.items]

    def inspiration(self) -> Optional[CelebrityOutfitAnalysis]:
        if self.celebrity_inspiration is None:
            return None
        return CelebrityOutfitAnalysis.from_raw(self.celebrity_inspiration)


class IllustrationItemPayload(ClosetItemPayload):
    """Illustration only reads ``name`` and ``analysis``, so the id may be omitted."""

    id: Optional[str] = None

    def to_closet_item(self) -> ClosetItem:
        analysis = ClothingAnalysis.from_raw(self.analysis) if self.analysis is not None else None
        return ClosetItem(id=self.id or "", image=self.image, name=self.name, analysis=analysis, analyzing=False)


class GenerateOutfitImageRequest(WireModel):
    items: List[IllustrationItemPayload]
    mood: str
    style_vibe: Optional[str] = Field(default=None, alias="styleVibe")

    @model_validator(mode="before")
    @classmethod
    def _check_present(cls, data: Any) -> Any:
        _require_items(data, 1, "Need at least 1 item for outfit image")
        _require(data, "Mood is required", "mood")
        return data

    def closet_items(self) -> List[ClosetItem]:
        return [item.to_closet_item() for item in self.items]


class CompositeItemPayload(WireModel):
    image: str = Field(min_length=1)
    category: Optional[str] = None


class CompositeImageRequest(WireModel):
    items: List[CompositeItemPayload]

    @model_validator(mode="before")
    @classmethod
    def _check_present(cls, data: Any) -> Any:
        _require_items(data, 1, "Need at least 1 item for composite image")
        return data


class CropGarmentRequest(ImageRequest):
    bounding_box: Dict[str, Any] = Field(alias="boundingBox")

    @model_validator(mode="after")
    def _check_box(self) -> "CropGarmentRequest":
        if BoundingBox.from_raw(self.bounding_box) is None:
            raise ValueError("Invalid bounding box")
        return self

    def box(self) -> BoundingBox:
        return BoundingBox.from_raw(self.bounding_box)


class SavedOutfitItemPayload(WireModel):
    id: str
    name: str
    preview: str
    category: Optional[str] = None

    def to_saved_item(self) -> SavedOutfitItem:
        return SavedOutfitItem(
            id=self.id,
            name=self.name,
            preview=self.preview,
            category=self.category,
            category_given="category" in self.model_fields_set,
        )


class SaveOutfitRequest(WireModel):
    name: str
    mood: str
    items: List[SavedOutfitItemPayload]
    explanation: str
    style_vibe: Optional[str] = Field(default=None, alias="styleVibe")
    style_notes: Optional[str] = Field(default=None, alias="styleNotes")
    composite_image: Optional[str] = Field(default=None, alias="compositeImage")

    @model_validator(mode="before")
    @classmethod
    def _check_present(cls, data: Any) -> Any:
        _require(data, "Name, mood, and items are required", "name", "mood")
        _require_items(data, 1, "Name, mood, and items are required")
        _require(data, "Explanation is required", "explanation")
        return data


def first_error_message(exc: ValidationError | Any) -> str:
    """Return a single human-readable message for a pydantic validation failure.

    ``ValueError`` raised inside validators surfaces unchanged; other errors
    are prefixed with the offending field path.
    """

    errors = exc.errors() if hasattr(exc, "errors") else []
    if not errors:
        return "Invalid request"
    error = errors[0]
    message = str(error.get("msg", "Invalid value"))
    if error.get("type") == "value_error":
        return message.removeprefix(_VALUE_ERROR_PREFIX)
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{location}: {message}" if location else message


__all__ = [
    "InvalidRequestError",
    "ClosetIngestRequest",
    "ClosetItemPayload",
    "CompositeImageRequest",
    "CompositeItemPayload",
    "CredentialsRequest",
    "CropGarmentRequest",
    "GenerateOutfitImageRequest",
    "GenerateOutfitRequest",
    "IllustrationItemPayload",
    "ImageRequest",
    "SaveOutfitRequest",
    "SavedOutfitItemPayload",
    "first_error_message",
]
