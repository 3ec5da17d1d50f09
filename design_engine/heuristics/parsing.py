"""
Tolerant parsing of free-text LLM responses.

Parsers never raise on malformed text. They return a ParseResult carrying
either the structured value or a ParseError, and the caller picks the
deterministic fallback on the error branch (see the resolve_* helpers).
"""
import json
import re
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, TypeVar

from pydantic import ValidationError

from heuristics.color_space import is_valid_hex, normalize_hex
from heuristics.fallbacks import (
    DEFAULT_ACCESSIBILITY_CONSIDERATIONS,
    DEFAULT_CONVERSION_OPTIMIZATION,
    DEFAULT_PERFORMANCE_OPTIMIZATIONS,
    FALLBACK_READABILITY_SCORE,
    FALLBACK_SEO_SCORE,
    generate_fallback_content_optimization,
    generate_fallback_keywords,
    generate_fallback_layout,
    generate_fallback_meta_description,
    generate_fallback_priority_actions,
    generate_fallback_title,
    get_industry_specific_seo_fallback,
)
from heuristics.models import (
    GridSystem,
    Layout,
    LayoutSection,
    LayoutSuggestion,
    Palette,
    PriorityAction,
    SEOSuggestion,
)
from heuristics.palette import COLOR_ROLE_DEFAULTS, get_industry_default_palette

T = TypeVar("T")

CODE_FENCE_PATTERN = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)
TEXT_SECTION_PATTERN = re.compile(r"Section \d+[:\s]*(.*?)(?=Section \d+|$)", re.DOTALL | re.IGNORECASE)
GRID_COLUMNS_PATTERN = re.compile(r"(\d+)")
SECTION_PRIORITIES = ("high", "medium", "low")


@dataclass(frozen=True)
class ParseError:
    """Why an upstream response couldn't be used"""
    kind: str  # empty, invalid_json, unexpected_shape, invalid_fields
    message: str
    excerpt: str = ""


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ParseResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: str, message: str, raw: str = "") -> "ParseResult[T]":
        return cls(error=ParseError(kind=kind, message=message, excerpt=(raw or "")[:200]))

    def unwrap_or_else(self, fallback: Callable[[], T]) -> T:
        return self.value if self.error is None else fallback()


def _json_candidates(text: str) -> List[str]:
    """Candidate JSON substrings, most specific first"""
    candidates = [text]

    fenced = CODE_FENCE_PATTERN.search(text)
    if fenced:
        candidates.append(fenced.group(1))

    for open_char, close_char in (("{", "}"), ("[", "]")):
        start = text.find(open_char)
        end = text.rfind(close_char)
        if start != -1 and end > start:
            candidates.append(text[start:end + 1])

    return candidates


def decode_json(text: Optional[str]) -> ParseResult[Any]:
    """Decode JSON from an LLM response, tolerating code fences and surrounding prose"""
    raw = (text or "").strip()
    if not raw:
        return ParseResult.failure("empty", "Upstream response was empty")

    last_error = None
    for candidate in _json_candidates(raw):
        try:
            return ParseResult.success(json.loads(candidate))
        except ValueError as e:
            last_error = e

    return ParseResult.failure("invalid_json", f"Response is not valid JSON: {last_error}", raw)


# ---------- Colors ----------

def parse_color_response(text: Optional[str], base_color: Optional[str] = None) -> ParseResult[Palette]:
    """
    Parse a palette from '{"palette": {...}}' or a bare role mapping.

    Missing or invalid roles are filled from per-role defaults; a valid
    base_color stands in for a missing primary.
    """
    decoded = decode_json(text)
    if not decoded.ok:
        return ParseResult(error=decoded.error)

    data = decoded.value
    if not isinstance(data, dict):
        return ParseResult.failure("unexpected_shape", "Palette response is not an object", text)

    nested = data.get("palette")
    palette_data = nested if isinstance(nested, dict) and nested.get("primary") else data

    defaults = dict(COLOR_ROLE_DEFAULTS)
    if base_color and is_valid_hex(base_color):
        defaults["primary"] = base_color

    roles = {}
    for role, default in defaults.items():
        candidate = palette_data.get(role)
        roles[role] = normalize_hex(candidate) if is_valid_hex(candidate) else default

    return ParseResult.success(Palette(**roles))


def resolve_palette(result: ParseResult[Palette], base_color: Optional[str] = None,
                    industry: Optional[str] = None) -> Palette:
    """Parsed palette, or the default palette seeded with the caller's base color"""
    if result.ok:
        return result.value

    palette = get_industry_default_palette(industry)
    if base_color and is_valid_hex(base_color):
        palette = palette.model_copy(update={"primary": normalize_hex(base_color)})
    return palette


# ---------- Layouts ----------

def _normalize_grid(grid: Any, breakpoints: Any) -> GridSystem:
    if isinstance(grid, dict):
        return GridSystem.model_validate(grid)

    grid_system = GridSystem()
    if isinstance(grid, str):
        # e.g. "12-column"
        match = GRID_COLUMNS_PATTERN.search(grid)
        if match:
            grid_system.columns = int(match.group(1))
    if isinstance(breakpoints, dict):
        grid_system.breakpoints = breakpoints
    return grid_system


def _normalize_interactions(raw: Any) -> List[dict]:
    """Accept bare interaction names ("click") as well as interaction objects"""
    if not isinstance(raw, list):
        return []

    interactions = []
    for item in raw:
        if isinstance(item, str):
            interactions.append({"type": item})
        elif isinstance(item, dict) and isinstance(item.get("type"), str):
            interactions.append(item)
    return interactions


def _normalize_sections(raw_sections: Any) -> List[LayoutSection]:
    """
    Coerce upstream sections into LayoutSection values.

    Unknown priorities become "medium" and a missing or malformed position
    gets a stacked default. A section that still fails validation is dropped
    on its own; the rest of the layout is kept.
    """
    if not isinstance(raw_sections, list):
        return []

    sections = []
    for index, raw in enumerate(raw_sections):
        if not isinstance(raw, dict):
            continue
        section = dict(raw)
        if not isinstance(section.get("position"), dict):
            section["position"] = {"x": 0, "y": index * 20, "width": 100, "height": 15}
        if section.get("priority") not in SECTION_PRIORITIES:
            section["priority"] = "medium"
        section["interactions"] = _normalize_interactions(section.get("interactions"))

        try:
            sections.append(LayoutSection.model_validate(section))
        except ValidationError:
            continue
    return sections


def _layout_from_text(text: str) -> ParseResult[LayoutSuggestion]:
    """Recover 'Section N: ...' fragments from a prose response"""
    titles = [m.group(1).strip() for m in TEXT_SECTION_PATTERN.finditer(text)]
    titles = [t for t in titles if t]
    if not titles:
        return ParseResult.failure("invalid_json", "Layout response has neither JSON nor section fragments", text)

    sections = [
        LayoutSection(
            type=f"section_{index + 1}",
            position={"x": 0, "y": index * 200, "width": 100, "height": 180},
            content={"title": title},
            priority="medium",
        )
        for index, title in enumerate(titles)
    ]

    return ParseResult.success(LayoutSuggestion(
        suggested_layout=Layout(sections=sections, grid_system=GridSystem()),
        reasoning="Layout recovered from a descriptive response",
        accessibility_considerations=list(DEFAULT_ACCESSIBILITY_CONSIDERATIONS),
        conversion_optimization=list(DEFAULT_CONVERSION_OPTIMIZATION),
        performance_optimizations=list(DEFAULT_PERFORMANCE_OPTIMIZATIONS),
    ))


def parse_layout_response(text: Optional[str]) -> ParseResult[LayoutSuggestion]:
    """
    Parse a layout from either '{"suggestedLayout": {...}}' or a bare layout object.

    Missing grid systems get the default 12-column grid.
    """
    decoded = decode_json(text)
    if not decoded.ok:
        if decoded.error.kind == "invalid_json":
            return _layout_from_text(text)
        return ParseResult(error=decoded.error)

    data = decoded.value
    if not isinstance(data, dict):
        return ParseResult.failure("unexpected_shape", "Layout response is not an object", text)

    layout_data = data.get("suggestedLayout")
    if not isinstance(layout_data, dict):
        layout_data = data

    if not isinstance(layout_data.get("sections"), list):
        return ParseResult.failure("unexpected_shape", "Layout response has no sections list", text)

    try:
        layout = Layout(
            sections=_normalize_sections(layout_data.get("sections")),
            overall_structure=str(layout_data.get("overallStructure") or "standard"),
            grid_system=_normalize_grid(layout_data.get("gridSystem"), layout_data.get("breakpoints")),
            content_hierarchy=layout_data.get("contentHierarchy") or [],
            user_flow=layout_data.get("userFlow") or [],
        )
        suggestion = LayoutSuggestion(
            suggested_layout=layout,
            reasoning=str(data.get("reasoning") or "Layout optimized for content type and user experience"),
            accessibility_considerations=_string_list(
                data.get("accessibilityConsiderations"), DEFAULT_ACCESSIBILITY_CONSIDERATIONS),
            conversion_optimization=_string_list(
                data.get("conversionOptimization"), DEFAULT_CONVERSION_OPTIMIZATION),
            performance_optimizations=_string_list(
                layout_data.get("performanceOptimizations"), DEFAULT_PERFORMANCE_OPTIMIZATIONS),
        )
    except ValidationError as e:
        return ParseResult.failure("invalid_fields", f"Layout fields failed validation: {e.error_count()} errors", text)

    return ParseResult.success(suggestion)


def resolve_layout(result: ParseResult[LayoutSuggestion], page_type: Optional[str] = None) -> LayoutSuggestion:
    return result.unwrap_or_else(lambda: generate_fallback_layout(page_type))


# ---------- SEO ----------

def _string_list(value: Any, default: List[str]) -> List[str]:
    if isinstance(value, list) and value and all(isinstance(v, str) for v in value):
        return list(value)
    return list(default)


def _score(value: Any, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not value:
        return default
    return int(min(max(value, 0), 100))


def _priority_actions(value: Any) -> List[PriorityAction]:
    if not isinstance(value, list) or not value:
        return generate_fallback_priority_actions()
    try:
        return [PriorityAction.model_validate(item) for item in value]
    except ValidationError:
        return generate_fallback_priority_actions()


def _non_empty_str(value: Any, fallback: Callable[[], str]) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return fallback()


def parse_seo_response(text: Optional[str]) -> ParseResult[SEOSuggestion]:
    """Parse SEO suggestions, completing missing fields with fallback values"""
    decoded = decode_json(text)
    if not decoded.ok:
        return ParseResult(error=decoded.error)

    data = decoded.value
    if not isinstance(data, dict):
        return ParseResult.failure("unexpected_shape", "SEO response is not an object", text)

    competitor_gaps = data.get("competitorGaps")
    technical = data.get("technicalRecommendations")

    return ParseResult.success(SEOSuggestion(
        title_suggestion=_non_empty_str(data.get("titleSuggestion"), generate_fallback_title),
        meta_description_suggestion=_non_empty_str(
            data.get("metaDescriptionSuggestion"), generate_fallback_meta_description),
        keyword_suggestions=_string_list(data.get("keywordSuggestions"), generate_fallback_keywords()),
        content_optimization=_string_list(
            data.get("contentOptimization"), generate_fallback_content_optimization()),
        readability_score=_score(data.get("readabilityScore"), FALLBACK_READABILITY_SCORE),
        seo_score=_score(data.get("seoScore"), FALLBACK_SEO_SCORE),
        priority_actions=_priority_actions(data.get("priorityActions")),
        competitor_gaps=_string_list(competitor_gaps, []),
        technical_recommendations=_string_list(technical, []),
    ))


def resolve_seo(result: ParseResult[SEOSuggestion], industry: Optional[str] = None) -> SEOSuggestion:
    return result.unwrap_or_else(lambda: get_industry_specific_seo_fallback(industry))
