"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.clothing_analysis import ClothingAnalysis
from models.garment_detection import BoundingBox, CollageDetectionResult, DetectedGarment
from models.inspiration import CelebrityOutfitAnalysis
from models.outfit import ClosetItem, OutfitRecommendation, SavedOutfit, SavedOutfitItem
from models.reference_data import Moodboard, StyleVibe

__all__ = [
    "ClothingAnalysis",
    "BoundingBox",
    "CollageDetectionResult",
    "DetectedGarment",
    "CelebrityOutfitAnalysis",
    "ClosetItem",
    "OutfitRecommendation",
    "SavedOutfit",
    "SavedOutfitItem",
    "Moodboard",
    "StyleVibe",
]
