import pytest
from pydantic import ValidationError

from heuristics.models import (
    Layout,
    LayoutSection,
    OptimizationMetrics,
    Palette,
    SectionType,
)


def test_section_kind_classification():
    assert LayoutSection(type="hero").kind is SectionType.HERO
    assert LayoutSection(type="CTA").kind is SectionType.CTA
    assert LayoutSection(type="section_3").kind is SectionType.CUSTOM
    assert SectionType.classify(None) is SectionType.CUSTOM


def test_section_title_only_from_strings():
    assert LayoutSection(content={"title": "Pricing"}).title == "Pricing"
    assert LayoutSection(content={"title": 42}).title == ""


def test_palette_normalizes_colors():
    palette = Palette(
        primary="3B82F6", secondary="#6366F1", accent="#8b5cf6",
        neutral="#64748b", background="#FFFFFF", text="#1e293b",
    )

    assert palette.primary == "#3b82f6"
    assert palette.background == "#ffffff"


def test_palette_rejects_invalid_colors():
    with pytest.raises(ValidationError):
        Palette(
            primary="blue", secondary="#6366f1", accent="#8b5cf6",
            neutral="#64748b", background="#ffffff", text="#1e293b",
        )


def test_metrics_are_bounded_and_frozen():
    metrics = OptimizationMetrics(
        conversion_potential=50, engagement_score=60, accessibility_score=70, performance_score=90,
    )

    with pytest.raises(ValidationError):
        metrics.conversion_potential = 10
    with pytest.raises(ValidationError):
        OptimizationMetrics(
            conversion_potential=101, engagement_score=60, accessibility_score=70, performance_score=90,
        )


def test_layout_serializes_with_camel_case():
    data = Layout.model_validate({"sections": [], "overallStructure": "grid"}).model_dump(by_alias=True)

    assert data["overallStructure"] == "grid"
    assert data["gridSystem"] is None
    assert data["contentHierarchy"] == []
