"""
Deterministic defaults substituted when an upstream AI response can't be used.

Each producer returns a complete, schema-valid object. The only randomness is
cosmetic: the SEO title and meta description are picked from fixed lists.
"""
import random
from typing import List, Optional

from heuristics.layout_scoring import get_content_priority
from heuristics.models import (
    GridSystem,
    Layout,
    LayoutSection,
    LayoutSuggestion,
    Position,
    PriorityAction,
    SEOSuggestion,
)

DEFAULT_PAGE_TYPE = "homepage"

DEFAULT_BREAKPOINTS = {"mobile": "768px", "tablet": "1024px", "desktop": "1200px"}
DEFAULT_USER_FLOW = ["awareness", "interest", "decision", "action"]
DEFAULT_ACCESSIBILITY_CONSIDERATIONS = ["contrast", "keyboard-nav", "screen-reader"]
DEFAULT_CONVERSION_OPTIMIZATION = ["above-fold", "clear-cta", "trust-signals"]
DEFAULT_PERFORMANCE_OPTIMIZATIONS = ["lazy-loading", "image-optimization"]

# (type, y, height, content, styles)
_PAGE_SECTIONS = {
    "homepage": [
        ("hero", 0, 25,
         {"title": "Welcome", "subtitle": "Discover our solutions"},
         {"background": "#3b82f6", "padding": "60px 20px", "alignment": "center"}),
        ("features", 25, 40,
         {"title": "Features", "description": "What we offer"},
         {"background": "#ffffff", "padding": "40px 20px", "alignment": "center"}),
        ("cta", 65, 20,
         {"title": "Get Started", "description": "Join us today"},
         {"background": "#f8fafc", "padding": "40px 20px", "alignment": "center"}),
        ("footer", 85, 15,
         {"title": "Footer", "description": "Contact information"},
         {"background": "#1f2937", "padding": "20px", "alignment": "center"}),
    ],
}

FALLBACK_TITLES = [
    "Optimized Title for Maximum SEO Impact",
    "Boost Your Rankings with This Strategic Title",
    "Compelling Title That Drives Click-Through Rates",
]

FALLBACK_META_DESCRIPTIONS = [
    "Discover expert insights and actionable strategies to achieve your goals. "
    "Learn from industry leaders and transform your approach today.",
    "Comprehensive guide featuring proven techniques, best practices, and expert "
    "recommendations for optimal results and sustainable growth.",
    "Explore in-depth analysis, practical tips, and innovative solutions designed "
    "to help you succeed in today's competitive landscape.",
]

FALLBACK_KEYWORDS = [
    "primary keyword",
    "secondary keyword",
    "long-tail keyword phrase",
    "related search term",
    "question-based query",
]

FALLBACK_CONTENT_OPTIMIZATION = [
    "Add H1 heading with primary keyword",
    "Include H2 subheadings for structure",
    "Increase content length to 1000+ words",
    "Add internal links to relevant pages",
    "Include images with alt text",
    "Add bullet points for readability",
    "Include call-to-action",
    "Add schema markup",
    "Optimize page loading speed",
    "Ensure mobile responsiveness",
]

FALLBACK_READABILITY_SCORE = 75
FALLBACK_SEO_SCORE = 70

FALLBACK_CONTENT_SUGGESTIONS = [
    "Consider adding a call-to-action",
    "Include customer testimonials for social proof",
    "Add relevant statistics or data points",
    "Use power words to increase engagement",
]


def generate_fallback_layout(page_type: Optional[str] = None) -> LayoutSuggestion:
    """
    Build the default layout for a page type.

    Unknown page types get the homepage layout. The result is structurally
    identical on every call.
    """
    key = (page_type or DEFAULT_PAGE_TYPE).lower()
    specs = _PAGE_SECTIONS.get(key, _PAGE_SECTIONS[DEFAULT_PAGE_TYPE])

    sections = [
        LayoutSection(
            type=section_type,
            position=Position(x=0, y=y, width=100, height=height),
            content=dict(content),
            styles=dict(styles),
            priority=get_content_priority(section_type),
        )
        for section_type, y, height, content, styles in specs
    ]

    layout = Layout(
        sections=sections,
        overall_structure="mixed",
        grid_system=GridSystem(columns=12, gap=16, breakpoints=dict(DEFAULT_BREAKPOINTS)),
        user_flow=list(DEFAULT_USER_FLOW),
    )

    return LayoutSuggestion(
        suggested_layout=layout,
        reasoning="Fallback layout optimized for user experience and conversion",
        accessibility_considerations=list(DEFAULT_ACCESSIBILITY_CONSIDERATIONS),
        conversion_optimization=list(DEFAULT_CONVERSION_OPTIMIZATION),
        performance_optimizations=list(DEFAULT_PERFORMANCE_OPTIMIZATIONS),
    )


def generate_fallback_title() -> str:
    return random.choice(FALLBACK_TITLES)


def generate_fallback_meta_description() -> str:
    return random.choice(FALLBACK_META_DESCRIPTIONS)


def generate_fallback_keywords() -> List[str]:
    return list(FALLBACK_KEYWORDS)


def generate_fallback_content_optimization() -> List[str]:
    return list(FALLBACK_CONTENT_OPTIMIZATION)


def generate_fallback_priority_actions() -> List[PriorityAction]:
    return [
        PriorityAction(action="Update title tag", impact="high", effort="low"),
        PriorityAction(action="Add meta description", impact="medium", effort="low"),
        PriorityAction(action="Improve content structure", impact="high", effort="medium"),
    ]


def get_industry_specific_seo_fallback(industry: Optional[str] = None) -> SEOSuggestion:
    """Complete SEO suggestion used when the upstream response is unusable"""
    return SEOSuggestion(
        title_suggestion=generate_fallback_title(),
        meta_description_suggestion=generate_fallback_meta_description(),
        keyword_suggestions=generate_fallback_keywords(),
        content_optimization=generate_fallback_content_optimization(),
        readability_score=FALLBACK_READABILITY_SCORE,
        seo_score=FALLBACK_SEO_SCORE,
        priority_actions=generate_fallback_priority_actions(),
        competitor_gaps=["Content depth", "Keyword coverage", "User experience"],
        technical_recommendations=["Schema markup", "Page speed optimization", "Mobile optimization"],
    )


def get_fallback_content_suggestions() -> List[str]:
    return list(FALLBACK_CONTENT_SUGGESTIONS)
