"""
Palette derivation and the static industry/style color tables.
"""
from typing import List, Optional

from heuristics.color_space import hex_to_hsl, hsl_to_hex, rotate_hue
from heuristics.models import Palette

DEFAULT_INDUSTRY = "technology"
DEFAULT_STYLE = "modern"
STYLE_PREFERENCES = ("vibrant", "minimal", "corporate", "modern", "earthy", "pastel")

# Reference palettes per industry; only "technology" is served as the default
INDUSTRY_PALETTES = {
    "technology": {
        "primary": "#3b82f6",
        "secondary": "#6366f1",
        "accent": "#8b5cf6",
        "neutral": "#64748b",
        "background": "#ffffff",
        "text": "#1e293b",
    },
    "healthcare": {
        "primary": "#0ea5e9",
        "secondary": "#06b6d4",
        "accent": "#10b981",
        "neutral": "#64748b",
        "background": "#f8fafc",
        "text": "#1e293b",
    },
    "finance": {
        "primary": "#1e40af",
        "secondary": "#3730a3",
        "accent": "#059669",
        "neutral": "#475569",
        "background": "#ffffff",
        "text": "#1f2937",
    },
    "retail": {
        "primary": "#dc2626",
        "secondary": "#ea580c",
        "accent": "#f59e0b",
        "neutral": "#6b7280",
        "background": "#ffffff",
        "text": "#1f2937",
    },
    "food": {
        "primary": "#dc2626",
        "secondary": "#ea580c",
        "accent": "#facc15",
        "neutral": "#78716c",
        "background": "#fef7ed",
        "text": "#1c1917",
    },
}

# Per-role defaults for upstream palettes that omit a role
COLOR_ROLE_DEFAULTS = {
    "primary": "#3b82f6",
    "secondary": "#64748b",
    "accent": "#f59e0b",
    "neutral": "#6b7280",
    "background": "#ffffff",
    "text": "#1f2937",
}

INDUSTRY_COLOR_GUIDELINES = {
    "technology": "Blues, purples, and clean whites. Conveys innovation, trust, and professionalism.",
    "healthcare": "Blues, greens, and soft whites. Represents trust, healing, and cleanliness.",
    "finance": "Blues, grays, and dark greens. Suggests stability, trust, and wealth.",
    "education": "Blues, oranges, and warm neutrals. Indicates knowledge, creativity, and approachability.",
    "retail": "Reds, oranges, and vibrant colors. Creates excitement, urgency, and energy.",
    "food": "Reds, yellows, and warm colors. Stimulates appetite and creates warmth.",
    "travel": "Blues, greens, and earth tones. Evokes nature, adventure, and relaxation.",
    "real estate": "Blues, grays, and whites. Conveys stability, luxury, and professionalism.",
    "fitness": "Reds, oranges, and blacks. Represents energy, strength, and determination.",
    "beauty": "Pinks, purples, and soft pastels. Suggests elegance, femininity, and luxury.",
    "automotive": "Reds, blacks, and metallic colors. Indicates power, speed, and sophistication.",
    "legal": "Blues, grays, and burgundy. Represents authority, tradition, and trust.",
    "nonprofit": "Blues, greens, and warm colors. Conveys compassion, hope, and trust.",
    "entertainment": "Bright, vibrant colors. Creates excitement, creativity, and fun.",
    "consulting": "Blues, grays, and accent colors. Suggests professionalism, expertise, and innovation.",
}

STYLE_COLOR_GUIDELINES = {
    "vibrant": "Bold, saturated colors with high contrast. Use energetic combinations that grab attention.",
    "minimal": "Limited color palette with plenty of white space. Use subtle, muted tones and clean lines.",
    "corporate": "Professional, conservative colors. Blues, grays, and subtle accent colors.",
    "modern": "Contemporary color combinations. Mix bold and neutral colors with clean aesthetics.",
    "earthy": "Natural, organic colors. Browns, greens, and warm tones that feel grounded.",
    "pastel": "Soft, muted colors. Gentle, soothing palette with low saturation.",
}

COLOR_USAGE_RECOMMENDATIONS = {
    "vibrant": [
        "Use accent colors for call-to-action buttons and important elements",
        "Create high contrast for readability and visual hierarchy",
        "Limit vibrant colors to 20-30% of the design to avoid overwhelming users",
        "Use complementary colors for visual interest and energy",
        "Ensure text remains readable on vibrant backgrounds",
    ],
    "minimal": [
        "Stick to a limited color palette (3-4 colors maximum)",
        "Use plenty of white space to let colors breathe",
        "Apply the 60-30-10 rule: 60% dominant, 30% secondary, 10% accent",
        "Use subtle variations of the same color for depth",
        "Focus on typography and layout rather than color for visual interest",
    ],
    "corporate": [
        "Use professional blues and grays as the foundation",
        "Maintain brand consistency across all materials",
        "Use accent colors sparingly for highlights and calls-to-action",
        "Ensure accessibility with proper contrast ratios",
        "Consider color psychology for professional credibility",
    ],
    "modern": [
        "Combine bold and neutral colors for contemporary appeal",
        "Use gradients and subtle shadows for depth",
        "Apply color to create clear visual hierarchy",
        "Use accent colors for interactive elements",
        "Consider dark mode compatibility from the start",
    ],
    "earthy": [
        "Use natural tones found in nature (browns, greens, tans)",
        "Create organic color combinations that feel grounded",
        "Use muted colors for a sophisticated, natural look",
        "Consider sustainability and environmental messaging",
        "Use texture and pattern to complement earthy colors",
    ],
    "pastel": [
        "Use soft, muted colors with low saturation",
        "Create gentle color transitions and gradients",
        "Combine pastels with white or light gray backgrounds",
        "Use pastels for a calming, approachable aesthetic",
        "Ensure sufficient contrast for accessibility",
    ],
}


def derive_complementary_colors(primary_color: str) -> List[str]:
    """
    Derive harmony colors from a primary color.

    Returns exactly four colors in this order: complementary (+180),
    triadic (+120, saturation x0.8), triadic (+240, saturation x0.8),
    analogous (+30). The analogous -30 candidate is generated but not returned.

    Raises:
        InvalidColorFormat: if primary_color is not a 6-digit hex color
    """
    hsl = hex_to_hsl(primary_color)

    candidates = [
        rotate_hue(hsl, 180),
        rotate_hue(hsl, 120, saturation_scale=0.8),
        rotate_hue(hsl, 240, saturation_scale=0.8),
        rotate_hue(hsl, 30),
        rotate_hue(hsl, -30),
    ]

    return [hsl_to_hex(c) for c in candidates][:4]


def get_industry_default_palette(industry: Optional[str] = None) -> Palette:
    """
    Default palette used when upstream color generation can't be parsed.

    The technology palette is the universal default, whatever the industry.
    """
    return Palette(**INDUSTRY_PALETTES[DEFAULT_INDUSTRY])


def get_color_usage_recommendations(style: Optional[str] = None) -> List[str]:
    recommendations = COLOR_USAGE_RECOMMENDATIONS.get(
        style or DEFAULT_STYLE,
        COLOR_USAGE_RECOMMENDATIONS[DEFAULT_STYLE],
    )
    return list(recommendations)


def get_industry_color_guidelines(industry: Optional[str] = None) -> str:
    return INDUSTRY_COLOR_GUIDELINES.get(
        (industry or "").lower(),
        "Consider industry-appropriate color associations and target audience preferences."
    )


def get_style_color_guidelines(style: Optional[str] = None) -> str:
    return STYLE_COLOR_GUIDELINES.get(
        style or "",
        "Create a balanced, harmonious color palette suitable for the intended purpose."
    )
