"""
Request and response models for the AI designer operations
"""
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field, field_validator

from heuristics.color_space import normalize_hex
from heuristics.models import (
    CamelModel,
    LayoutSuggestion,
    OptimizationMetrics,
    Palette,
    SEOSuggestion,
)

WritingStyle = Literal["formal", "casual", "professional", "friendly"]
LayoutStyle = Literal["modern", "classic", "minimal", "creative"]
StylePreference = Literal["vibrant", "minimal", "corporate", "modern", "earthy", "pastel"]
ContentPriority = Literal["conversion", "engagement", "information", "branding"]
BATCH_OPERATION_TYPES = ("content_generation", "layout_suggestion", "color_palette", "seo_optimization")


class ContentGenerationRequest(CamelModel):
    business_type: str = Field(min_length=1)
    target_audience: str = Field(min_length=1)
    topic: str = Field(min_length=1)
    writing_style: Optional[WritingStyle] = None
    word_count: Optional[int] = Field(default=None, gt=0, le=4000)
    context: Optional[str] = None


class ContentGenerationResponse(CamelModel):
    generated_text: str
    suggestions: List[str]
    confidence: float
    processing_time: int


class LayoutPreferences(CamelModel):
    layout_style: LayoutStyle = "modern"
    color_scheme: Optional[List[str]] = None


class AdvancedLayoutOptions(CamelModel):
    content_priority: Optional[ContentPriority] = None
    user_flow_optimization: bool = False
    accessibility_compliance: bool = False
    performance_optimization: bool = False


class LayoutSuggestionRequest(CamelModel):
    content_data: Dict[str, Any]
    page_type: str = Field(min_length=1)
    industry_type: Optional[str] = None
    preferences: Optional[LayoutPreferences] = None
    advanced_options: Optional[AdvancedLayoutOptions] = None


class LayoutSuggestionResponse(LayoutSuggestion):
    confidence: float
    processing_time: int
    optimization_metrics: OptimizationMetrics


class ColorPaletteRequest(CamelModel):
    brand_colors: Optional[List[str]] = None
    industry_type: Optional[str] = None
    style_preference: Optional[StylePreference] = None
    base_color: Optional[str] = None

    @field_validator("base_color")
    @classmethod
    def _validate_base_color(cls, value: Optional[str]) -> Optional[str]:
        return normalize_hex(value) if value is not None else None

    @field_validator("brand_colors")
    @classmethod
    def _validate_brand_colors(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return [normalize_hex(c) for c in value] if value is not None else None


class ColorPaletteResponse(CamelModel):
    palette: Palette
    complementary_colors: List[str]
    usage_recommendations: List[str]
    confidence: float
    processing_time: int


class SEOSuggestionRequest(CamelModel):
    page_content: str = Field(min_length=1)
    keywords: Optional[List[str]] = None
    target_audience: Optional[str] = None
    industry: Optional[str] = None
    competitor_analysis: bool = False


class SEOSuggestionResponse(SEOSuggestion):
    confidence: float
    processing_time: int


class BatchOperation(CamelModel):
    type: str  # one of BATCH_OPERATION_TYPES; others fail per item
    data: Dict[str, Any]


class BatchProcessRequest(CamelModel):
    requests: List[BatchOperation] = Field(min_length=1)


class BatchResult(CamelModel):
    type: str
    success: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    processing_time: int = 0


class BatchProcessResponse(CamelModel):
    results: List[BatchResult]
    total_processing_time: int
