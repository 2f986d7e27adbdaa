"""Moodboard and style-vibe reference records plus their seed data."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass(frozen=True)
class Moodboard:
    """Styling guidance for a mood such as ``Calm`` or ``Bold``."""

    name: str
    color_palette: List[str]
    textures: List[str]
    silhouettes: List[str]
    typical_pieces: List[str]
    styling_logic: List[str]
    example_outfit: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "colorPalette": list(self.color_palette),
            "textures": list(self.textures),
            "silhouettes": list(self.silhouettes),
            "typicalPieces": list(self.typical_pieces),
            "stylingLogic": list(self.styling_logic),
            "exampleOutfit": list(self.example_outfit),
        }


@dataclass(frozen=True)
class StyleVibe:
    """Styling guidance for an aesthetic such as ``Streetwear``."""

    name: str
    color_tendencies: List[str]
    textures: List[str]
    silhouettes: List[str]
    typical_pieces: List[str]
    styling_rules: List[str]
    example_outfit: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "colorTendencies": list(self.color_tendencies),
            "textures": list(self.textures),
            "silhouettes": list(self.silhouettes),
            "typicalPieces": list(self.typical_pieces),
            "stylingRules": list(self.styling_rules),
            "exampleOutfit": list(self.example_outfit),
        }


SEED_MOODBOARDS: List[Moodboard] = [
    Moodboard(
        name="Calm",
        color_palette=["Soft blue", "Light grey", "White", "Beige", "Dusty lavender"],
        textures=["Cotton", "Soft knits", "Linen", "Light fleece"],
        silhouettes=["Relaxed fit", "Straight leg", "Loose sweaters", "Soft drape"],
        typical_pieces=[
            "Oversized sweatshirt",
            "Light knit sweaters",
            "Straight leg jeans",
            "Linen pants",
            "White sneakers",
            "Soft tote bag",
        ],
        styling_logic=[
            "Avoid sharp contrast",
            "Prioritize comfort and balance",
            "Keep colors light and muted",
            "Choose pieces with smooth textures",
        ],
        example_outfit=["Beige oversized sweatshirt", "Light blue denim", "Pale-toned sneakers", "Grey crossbody bag"],
    ),
    Moodboard(
        name="Energetic",
        color_palette=["Red", "Hot pink", "Yellow", "Orange", "Bright white"],
        textures=["Nylon", "Mesh", "Activewear materials", "Denim"],
        silhouettes=["Fitted tops", "Cropped cuts", "Sporty shapes", "High contrast color blocks"],
        typical_pieces=[
            "Bright cropped hoodie",
            "Color block jacket",
            "Track pants",
            "Sneakers with bold accents",
            "Chunky backpacks",
        ],
        styling_logic=[
            "Use at least one high-energy color",
            "Combine contrast colors",
            "Include sporty or movement-forward shapes",
            "Add at least one statement piece",
        ],
        example_outfit=["Yellow crop sweatshirt", "Black and white block leggings", "Red sneakers", "Mini backpack"],
    ),
    Moodboard(
        name="Dark",
        color_palette=["Black", "Charcoal", "Dark olive", "Deep navy"],
        textures=["Leather", "Denim", "Heavy cotton", "Ribbing"],
        silhouettes=["Structured", "Streamlined", "Slightly oversized outerwear"],
        typical_pieces=["Black jeans", "Leather jacket", "Dark crewneck", "Combat boots", "Structured tote"],
        styling_logic=[
            "Keep outfit low contrast",
            "Mix matte and slightly shiny textures",
            "Silhouette should feel grounded and strong",
        ],
        example_outfit=["Charcoal crewneck", "Black straight jeans", "Dark boots", "Olive structured bag"],
    ),
    Moodboard(
        name="Bright",
        color_palette=["Bright teal", "Hot pink", "Lime", "Sky blue", "Sunshine yellow"],
        textures=["Light cotton", "Breathable knits", "Canvas", "Fun prints"],
        silhouettes=["Playful", "Balanced but not too structured", "Layerable pieces"],
        typical_pieces=[
            "Patterned top",
            "Colorful skirt or relaxed pants",
            "Fun sneakers",
            "Small colorful accessories",
        ],
        styling_logic=[
            "Use at least two bright colors",
            "Add prints or patterns when possible",
            "Keep overall vibe fun and expressive",
        ],
        example_outfit=["Pink patterned top", "Sky-blue wide-leg pants", "Yellow canvas sneakers", "Colorful hair clip or bag"],
    ),
    Moodboard(
        name="Soft",
        color_palette=["Cream", "Rose", "Blush pink", "Warm beige", "Soft white"],
        textures=["Ribbed knit", "Wool blend", "Brushed cotton", "Satin accents"],
        silhouettes=["Flowy", "Delicate", "Light layering"],
        typical_pieces=[
            "Soft knit cardigan",
            "Satin cami",
            "Beige trousers",
            "Pink flats or white sneakers",
            "Light neutral bag",
        ],
        styling_logic=[
            "Blend warm-toned neutrals",
            "Avoid anything too sharp",
            "Use soft curves in silhouette",
            "Prioritize warmth and gentle color harmony",
        ],
        example_outfit=["Cream cardigan", "Blush satin tank", "Beige trousers", "White sneakers"],
    ),
    Moodboard(
        name="Bold",
        color_palette=["Black", "White", "Royal blue", "Red", "Metallic accents"],
        textures=["Leather", "Structured cotton", "Denim", "Satin or chrome-like finishes"],
        silhouettes=["Strong shoulders", "Defined waist", "Clean lines", "Statement shapes"],
        typical_pieces=[
            "Structured blazer",
            "High-waisted pants",
            "Tucked-in tee",
            "Boots or sleek sneakers",
            "Geometric bag",
        ],
        styling_logic=[
            "High contrast color pairing",
            "Choose strong, defined lines",
            "Keep the outfit intentional, not soft",
            "At least one dramatic element (shoulder, shoe, or color pop)",
        ],
        example_outfit=["White fitted tee", "Black wide-leg trousers", "Structured blazer", "Red bag or shoes"],
    ),
]

SEED_STYLE_VIBES: List[StyleVibe] = [
    StyleVibe(
        name="Streetwear",
        color_tendencies=["Black", "Grey", "White", "Earth tones", "Occasional bold accent (red, neon, graphic prints)"],
        textures=["Heavy cotton", "Fleece", "Nylon", "Denim", "Ribbed knits"],
        silhouettes=["Oversized tops", "Baggy or straight leg bottoms", "Cropped puffer jackets", "Layered hoodies and tees"],
        typical_pieces=[
            "Hoodie",
            "Oversized tee",
            "Cargo pants",
            "Baggy jeans",
            "Puffer jacket",
            "Sneakers (chunky or skate style)",
            "Beanie or baseball cap",
        ],
        styling_rules=[
            "Use relaxed silhouettes",
            "Use at least one statement piece (graphic print, oversized item, or bold sneaker)",
            "Keep color palette grounded with one accent",
            "Prioritize comfort and layering",
        ],
        example_outfit=["Oversized grey hoodie", "Olive cargo pants", "White skate sneakers", "Black beanie"],
    ),
    StyleVibe(
        name="Minimalist",
        color_tendencies=["Black", "White", "Cream", "Taupe", "Muted grey", "Very subtle pastels"],
        textures=["Smooth cotton", "Structured knits", "Wool blends", "Clean denim"],
        silhouettes=["Clean lines", "Straight or tapered pants", "Boxy tops", "Simple layers"],
        typical_pieces=["Simple crewneck", "Straight trousers", "Minimal sneakers", "Long-line coat", "Basic tee", "Structured tote"],
        styling_rules=[
            "Avoid patterns",
            "Keep contrast medium to low",
            "Use simple geometry (boxy top, straight pants)",
            "Select 2-3 colors max",
            "Favor structure and balance",
        ],
        example_outfit=["White crewneck", "Black straight trousers", "Clean white sneakers", "Cream structured tote"],
    ),
    StyleVibe(
        name="Vintage",
        color_tendencies=["Warm browns", "Washed denim blue", "Rust", "Mustard", "Forest green", "Cream"],
        textures=["Denim", "Wool", "Worn cotton", "Corduroy", "Crochet or knits"],
        silhouettes=["High-waisted pieces", "Straight or wide-leg pants", "Cropped cardigans", "Relaxed jackets"],
        typical_pieces=[
            "Vintage wash jeans",
            "Cardigan",
            "Corduroy pants",
            "Retro sneakers or loafers",
            "Graphic tee",
            "Floral or textured blouse",
        ],
        styling_rules=[
            "Use warm, nostalgic tones",
            "Mix textures (denim + knit, corduroy + cotton)",
            "Add one retro detail (collar, pattern, color tone)",
            "Avoid modern technical fabrics",
        ],
        example_outfit=["Vintage wash jeans", "Cream cropped cardigan", "Brown loafers", "Small retro shoulder bag"],
    ),
    StyleVibe(
        name="Sporty",
        color_tendencies=["Black", "White", "Grey", "Neon accents", "Primary colors"],
        textures=["Spandex", "Nylon", "Mesh", "Jersey fabric", "Technical blends"],
        silhouettes=["Fitted tops", "Leggings or track pants", "Layered performance jackets", "Cropped hoodies"],
        typical_pieces=["Sports bra or fitted tee", "Track jacket", "Leggings", "Running shoes", "Baseball cap"],
        styling_rules=[
            "Always include at least one technical fabric",
            "Allow bright accents for energy",
            "Keep silhouettes movement-friendly",
            "Prioritize comfort and flexibility",
        ],
        example_outfit=["Black fitted tank", "White and grey track pants", "Neon-accent running shoes", "Lightweight zip jacket"],
    ),
    StyleVibe(
        name="Romantic",
        color_tendencies=["Blush pink", "Warm beige", "Cream", "Soft florals", "Lavender"],
        textures=["Satin", "Silk-like fabrics", "Soft knits", "Lace", "Light cotton"],
        silhouettes=["Flowing shapes", "Soft drape", "Gentle waist emphasis", "Layered light fabrics"],
        typical_pieces=[
            "Satin cami",
            "Knit cardigan",
            "Flowy skirt",
            "Soft trousers",
            "Ballet flats or dainty sneakers",
            "Ribbon details or delicate bags",
        ],
        styling_rules=[
            "Keep everything soft, warm, or pastel-toned",
            "Use flowing or soft-edged silhouettes",
            "Avoid sharp lines or harsh contrast",
            "Add subtle feminine details (lace, bows, drape)",
        ],
        example_outfit=["Blush satin cami", "Cream knit cardigan", "Soft beige wide-leg pants", "Light sneakers or ballet flats"],
    ),
]


__all__ = ["Moodboard", "StyleVibe", "SEED_MOODBOARDS", "SEED_STYLE_VIBES"]
