"""
Value objects shared by the design heuristics and the AI designer service.

Models serialize with camelCase aliases (the wire format the builder UI and
the LLM prompts use) and accept snake_case names when constructed in Python.
"""
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from heuristics.color_space import normalize_hex


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SectionType(str, Enum):
    """Known section kinds; anything else is CUSTOM (e.g. 'section_3')"""
    HERO = "hero"
    VALUE_PROPOSITION = "value_proposition"
    FEATURES = "features"
    BENEFITS = "benefits"
    PRICING = "pricing"
    ABOUT = "about"
    CONTENT = "content"
    TESTIMONIALS = "testimonials"
    REVIEWS = "reviews"
    CTA = "cta"
    HEADER = "header"
    FOOTER = "footer"
    CUSTOM = "custom"

    @classmethod
    def classify(cls, raw: Optional[str]) -> "SectionType":
        try:
            return cls((raw or "").lower())
        except ValueError:
            return cls.CUSTOM


Priority = Literal["high", "medium", "low"]


class Palette(CamelModel):
    """Six named color roles, each a canonical '#rrggbb'"""
    primary: str
    secondary: str
    accent: str
    neutral: str
    background: str
    text: str

    @field_validator("*")
    @classmethod
    def _canonical_hex(cls, value: str) -> str:
        return normalize_hex(value)


class Position(CamelModel):
    x: float = 0
    y: float = 0
    width: float = 100
    height: float = 15


class Interaction(CamelModel):
    type: str  # click, hover, scroll, form
    trigger: str = ""
    action: str = ""


class LayoutSection(CamelModel):
    type: str = SectionType.CONTENT.value
    position: Position = Field(default_factory=Position)
    content: Dict[str, Any] = Field(default_factory=dict)
    styles: Dict[str, Any] = Field(default_factory=dict)
    priority: Priority = "medium"
    interactions: List[Interaction] = Field(default_factory=list)

    @property
    def kind(self) -> SectionType:
        return SectionType.classify(self.type)

    @property
    def title(self) -> str:
        title = self.content.get("title")
        return title if isinstance(title, str) else ""


class GridSystem(CamelModel):
    columns: int = 12
    gap: int = 16
    breakpoints: Dict[str, Any] = Field(
        default_factory=lambda: {"sm": 640, "md": 768, "lg": 1024, "xl": 1280}
    )


class HierarchyLevel(CamelModel):
    level: int
    element: str
    purpose: str = ""


class FlowStep(CamelModel):
    step: int
    element: str
    action: str = ""
    expected_outcome: str = ""


class Layout(CamelModel):
    sections: List[LayoutSection] = Field(default_factory=list)
    overall_structure: str = "standard"
    grid_system: Optional[GridSystem] = None
    content_hierarchy: List[Union[HierarchyLevel, str]] = Field(default_factory=list)
    user_flow: List[Union[FlowStep, str]] = Field(default_factory=list)


class LayoutSuggestion(CamelModel):
    """A layout plus the advisory lists that travel with it"""
    suggested_layout: Layout
    reasoning: str
    accessibility_considerations: List[str] = Field(default_factory=list)
    conversion_optimization: List[str] = Field(default_factory=list)
    performance_optimizations: List[str] = Field(default_factory=list)


class OptimizationMetrics(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    conversion_potential: int = Field(ge=0, le=100)
    engagement_score: int = Field(ge=0, le=100)
    accessibility_score: int = Field(ge=0, le=100)
    performance_score: int = Field(ge=0, le=100)


class PriorityAction(CamelModel):
    action: str
    impact: Priority = "medium"
    effort: Priority = "medium"


class SEOSuggestion(CamelModel):
    title_suggestion: str
    meta_description_suggestion: str
    keyword_suggestions: List[str]
    content_optimization: List[str]
    readability_score: int = 75
    seo_score: int = 70
    priority_actions: List[PriorityAction] = Field(default_factory=list)
    competitor_gaps: List[str] = Field(default_factory=list)
    technical_recommendations: List[str] = Field(default_factory=list)
