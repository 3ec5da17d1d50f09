"""
Rule-based layout scoring and content analysis.

Every score starts from a fixed base and adds bounded bonuses; nothing here
is statistical, so identical inputs always give identical scores.
"""
import json
from typing import Any, Dict, Iterable

from heuristics.color_space import round_half_up
from heuristics.models import Layout, LayoutSection, OptimizationMetrics

HIGH_PRIORITY_CONTENT = ("hero", "cta", "value_proposition", "testimonials")
MEDIUM_PRIORITY_CONTENT = ("features", "benefits", "pricing", "about")

MAX_GRID_COLUMNS = 12
MAX_SECTIONS = 8


def _clamp_score(score: float) -> int:
    return int(min(max(score, 0), 100))


def _any_type_contains(sections: Iterable[LayoutSection], *needles: str) -> bool:
    return any(
        needle in (section.type or "")
        for section in sections
        for needle in needles
    )


def calculate_conversion_potential(layout: Layout, request: Any = None) -> int:
    score = 50

    has_cta = any(
        "cta" in (section.type or "") or "cta" in section.title.lower()
        for section in layout.sections
    )
    if has_cta:
        score += 20

    if _any_type_contains(layout.sections, "hero", "value_proposition"):
        score += 15

    if _any_type_contains(layout.sections, "testimonials", "reviews"):
        score += 15

    return _clamp_score(score)


def calculate_engagement_score(layout: Layout) -> int:
    score = 60

    interactions = sum(len(section.interactions) for section in layout.sections)
    score += min(interactions * 5, 20)

    section_types = {section.type for section in layout.sections}
    score += min(len(section_types) * 3, 20)

    return _clamp_score(score)


def calculate_accessibility_score(layout: Layout) -> int:
    score = 70

    if layout.content_hierarchy:
        score += 15
    if layout.user_flow:
        score += 15

    return _clamp_score(score)


def calculate_performance_score(layout: Layout) -> int:
    score = 80

    # No declared grid earns no grid bonus
    if layout.grid_system is not None and layout.grid_system.columns <= MAX_GRID_COLUMNS:
        score += 10

    if len(layout.sections) <= MAX_SECTIONS:
        score += 10

    return _clamp_score(score)


def calculate_optimization_metrics(layout: Layout, request: Any = None) -> OptimizationMetrics:
    """
    Score a layout on conversion, engagement, accessibility and performance.

    Args:
        layout: the layout to score
        request: the originating layout request (accepted for the conversion
            axis; the current rules don't read it)

    Returns:
        OptimizationMetrics with every score an int in [0, 100]
    """
    return OptimizationMetrics(
        conversion_potential=calculate_conversion_potential(layout, request),
        engagement_score=calculate_engagement_score(layout),
        accessibility_score=calculate_accessibility_score(layout),
        performance_score=calculate_performance_score(layout),
    )


def calculate_content_complexity(content_data: Dict[str, Any]) -> int:
    """Complexity on a 0-10 scale from string lengths, list sizes and nested key counts"""
    complexity = 0.0
    for value in content_data.values():
        if isinstance(value, str):
            complexity += min(len(value) / 100, 3)
        elif isinstance(value, list):
            complexity += len(value) * 0.5
        elif isinstance(value, dict):
            complexity += len(value) * 0.3

    return min(round_half_up(complexity), 10)


def get_content_priority(content_type: str) -> str:
    if content_type in HIGH_PRIORITY_CONTENT:
        return "high"
    if content_type in MEDIUM_PRIORITY_CONTENT:
        return "medium"
    return "low"


def estimate_visual_weight(key: str, value: Any) -> float:
    weight = 1.0
    if "hero" in key or "cta" in key:
        weight = 3.0
    if "image" in key or "video" in key:
        weight = 2.0
    if isinstance(value, str) and len(value) > 200:
        weight = 1.5
    return weight


def calculate_visual_weight(content_data: Dict[str, Any]) -> str:
    return ", ".join(
        f"{key}: {estimate_visual_weight(key, value):g}"
        for key, value in content_data.items()
    )


def analyze_content_for_layout(content_data: Dict[str, Any]) -> str:
    """Summarize content types, complexity and visual weight for the layout prompt"""
    content_types = ", ".join(
        f"{key} ({len(value) if isinstance(value, list) else 1}, {get_content_priority(key)} priority)"
        for key, value in content_data.items()
    )

    return "\n".join([
        f"Content Types: {content_types}",
        f"Content Volume: {describe_content_volume(content_data)}",
        f"Content Complexity: {calculate_content_complexity(content_data)}/10",
        f"Visual Weight Distribution: {calculate_visual_weight(content_data)}",
    ])


def describe_content_volume(content_data: Dict[str, Any]) -> str:
    length = len(json.dumps(content_data, default=str))
    if length > 1000:
        return "substantial"
    if length > 500:
        return "moderate"
    return "light"
