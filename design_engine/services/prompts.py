"""
Prompt builders for the AI designer features.

System prompts are fixed strings; user prompts are assembled from the request
plus the guideline tables below.
"""
import json
import re
from typing import Optional

from bs4 import BeautifulSoup

from heuristics.layout_scoring import analyze_content_for_layout
from heuristics.palette import get_industry_color_guidelines, get_style_color_guidelines
from services.schemas import (
    AdvancedLayoutOptions,
    ColorPaletteRequest,
    ContentGenerationRequest,
    LayoutSuggestionRequest,
    SEOSuggestionRequest,
)

MAX_SEO_CONTENT_CHARS = 2000

CONTENT_SYSTEM_PROMPT = (
    "You are a professional copywriter specializing in website content. Generate engaging, "
    "persuasive content that converts visitors into customers. Consider the target audience "
    "and business type when crafting content."
)

LAYOUT_SYSTEM_PROMPT = """You are an expert web designer, UX architect, and conversion optimization specialist. Your task is to generate advanced layout suggestions that optimize for:

1. **Content Hierarchy**: Clear visual hierarchy that guides users through information
2. **User Flow**: Intuitive navigation and interaction patterns
3. **Conversion Optimization**: Strategic placement of CTAs and conversion elements
4. **Accessibility**: WCAG 2.1 compliant design with proper contrast and navigation
5. **Performance**: Optimized layout structure for fast loading and rendering
6. **Responsive Design**: Mobile-first approach with adaptive breakpoints

Consider industry best practices, user psychology, and modern design principles. Respond with JSON only."""

COLOR_SYSTEM_PROMPT = (
    "You are a color theory expert specializing in brand identity and web design. Generate "
    "harmonious color palettes based on brand requirements, industry standards, and psychological "
    "color associations. Consider color psychology, accessibility, and modern design trends."
)

SEO_SYSTEM_PROMPT = (
    "You are an expert SEO specialist with deep knowledge of on-page optimization, content strategy, "
    "technical SEO, and search engine algorithms. Provide comprehensive, actionable SEO recommendations "
    "based on current best practices, search intent analysis, and competitive landscape. Consider "
    "E-E-A-T (Experience, Expertise, Authoritativeness, Trustworthiness) principles, user experience "
    "factors, and the latest algorithm updates."
)

PAGE_LAYOUT_PATTERNS = {
    "homepage": "Hero section with value proposition, feature highlights, social proof, clear CTA, footer with navigation",
    "landing": "Attention-grabbing headline, benefit-focused content, trust signals, conversion-focused layout",
    "product": "Product showcase, detailed specifications, customer reviews, related products, purchase options",
    "blog": "Article content with sidebar, author information, related posts, newsletter signup, comments",
    "about": "Company story, team showcase, mission/values, timeline, contact information",
    "contact": "Contact form, multiple contact methods, map integration, business hours, FAQ section",
    "portfolio": "Project grid, filtering options, case study details, client testimonials, contact CTA",
    "services": "Service overview, detailed service descriptions, pricing tiers, process explanation, consultation CTA",
}

ADVANCED_PAGE_PATTERNS = {
    "homepage": ["hero_above_fold", "value_proposition_grid", "feature_showcase", "social_proof_section"],
    "product": ["product_gallery", "specification_table", "customer_reviews", "related_products"],
    "service": ["service_overview", "process_timeline", "case_studies", "pricing_comparison"],
    "about": ["company_story", "team_showcase", "mission_values", "achievements_timeline"],
    "contact": ["contact_form", "location_map", "business_hours", "contact_information"],
}

INDUSTRY_LAYOUT_PATTERNS = {
    "technology": ["innovation_spotlight", "technology_stack", "integration_capabilities"],
    "healthcare": ["trust_indicators", "certification_badges", "patient_testimonials"],
    "finance": ["security_features", "compliance_info", "financial_metrics"],
    "retail": ["product_categories", "promotion_banner", "customer_reviews"],
}

INDUSTRY_LAYOUT_RECOMMENDATIONS = {
    "technology": "Clean, modern layouts with emphasis on features and innovation. Use card-based designs, interactive demos, and technical specifications.",
    "healthcare": "Trust-focused layouts with clear information hierarchy. Use calming colors, professional imagery, and easy-to-find contact information.",
    "finance": "Secure, professional layouts with emphasis on trust and credibility. Use data visualization, clear CTAs, and security indicators.",
    "ecommerce": "Conversion-focused layouts with product showcases, customer reviews, and streamlined checkout process. Use grid layouts and filtering.",
    "education": "Learning-focused layouts with clear course structure, progress indicators, and engaging content presentation.",
    "real estate": "Visual-heavy layouts with property showcases, search functionality, and location-based information.",
    "restaurant": "Appetizing layouts with menu highlights, atmosphere imagery, and easy reservation systems.",
    "fitness": "Motivational layouts with transformation stories, class schedules, and progress tracking elements.",
}

STYLE_LAYOUT_GUIDELINES = {
    "modern": "Clean lines, ample white space, bold typography, subtle gradients, and minimalist navigation. Focus on visual hierarchy and readability.",
    "classic": "Traditional layouts with balanced composition, serif typography, structured grids, and formal navigation. Emphasize professionalism and trust.",
    "minimal": "Maximum white space, limited color palette, simple typography, hidden navigation, and focus on content. Remove all non-essential elements.",
    "creative": "Asymmetrical layouts, experimental navigation, bold typography, unique interactions, and artistic elements. Break traditional grid patterns.",
}

SEO_GUIDELINES = {
    "healthcare": "Focus on E-A-T, medical accuracy, and trustworthy sources. Use medical schema markup. Prioritize local SEO for healthcare providers.",
    "finance": "Emphasize trust signals, security, and compliance. Use financial schema. Focus on long-tail keywords for specific financial products.",
    "legal": "Highlight expertise, credentials, and case studies. Use legal schema. Target location-based keywords and practice areas.",
    "technology": "Focus on technical accuracy, innovation, and problem-solving. Use tech schema. Target solution-oriented keywords and comparison terms.",
    "ecommerce": "Optimize for product keywords, reviews, and local SEO. Use product schema. Focus on commercial intent keywords.",
    "education": "Emphasize expertise, learning outcomes, and credentials. Use course schema. Target knowledge-based and how-to keywords.",
    "real estate": "Focus on local SEO, property types, and neighborhood information. Use real estate schema. Target location-based keywords.",
    "travel": "Optimize for destination keywords, travel tips, and local attractions. Use travel schema. Focus on seasonal and event-based keywords.",
    "restaurant": "Prioritize local SEO, menu items, and cuisine types. Use restaurant schema. Target hungry-now keywords and location-based terms.",
    "fitness": "Focus on health benefits, workout types, and results. Use fitness schema. Target goal-oriented and how-to keywords.",
}

LAYOUT_RESPONSE_FORMAT = """{
  "suggestedLayout": {
    "sections": [
      {
        "type": "header|hero|value_proposition|features|testimonials|cta|footer",
        "position": {"x": 0, "y": 0, "width": 100, "height": 15},
        "content": {"title": "", "subtitle": "", "description": ""},
        "styles": {"background": "#hex", "padding": "value", "alignment": "center"},
        "priority": "high|medium|low",
        "interactions": [{"type": "click|hover|scroll|form", "trigger": "", "action": ""}]
      }
    ],
    "overallStructure": "grid|flex|mixed",
    "gridSystem": {"columns": 12, "gap": 16, "breakpoints": {"sm": 640, "md": 768, "lg": 1024, "xl": 1280}},
    "contentHierarchy": [{"level": 1, "element": "hero", "purpose": ""}],
    "userFlow": [{"step": 1, "element": "hero", "action": "", "expectedOutcome": ""}],
    "performanceOptimizations": ["lazy-loading", "image-optimization"]
  },
  "reasoning": "Detailed explanation of layout choices",
  "accessibilityConsiderations": ["contrast", "keyboard-nav", "screen-reader"],
  "conversionOptimization": ["above-fold", "clear-cta", "trust-signals"]
}"""

COLOR_RESPONSE_FORMAT = """{
  "palette": {
    "primary": "#hexcode",
    "secondary": "#hexcode",
    "accent": "#hexcode",
    "neutral": "#hexcode",
    "background": "#hexcode",
    "text": "#hexcode"
  },
  "rationale": "Brief explanation of color choices"
}"""

SEO_RESPONSE_FORMAT = """{
  "titleSuggestion": "optimized title",
  "metaDescriptionSuggestion": "optimized meta description",
  "keywordSuggestions": ["primary", "secondary1", "secondary2", "longtail1", "longtail2"],
  "contentOptimization": ["Add H2 heading with primary keyword"],
  "readabilityScore": 85,
  "seoScore": 78,
  "priorityActions": [{"action": "Update title tag", "impact": "high", "effort": "low"}],
  "competitorGaps": ["missing topic coverage"],
  "technicalRecommendations": ["schema markup", "page speed"]
}"""


def _optional_line(label: str, value) -> str:
    return f"{label}: {value}\n" if value else ""


# ---------- Content ----------

def build_content_prompt(request: ContentGenerationRequest) -> str:
    style = request.writing_style or "professional"
    return (
        f"Generate website content for a {request.business_type} targeting {request.target_audience}. "
        f"The topic is: {request.topic}.\n\n"
        f"Writing style: {style}\n"
        + _optional_line("Target word count", request.word_count)
        + _optional_line("Additional context", request.context)
        + "\nPlease provide compelling, professional content that resonates with the target audience."
    )


# ---------- Layout ----------

def get_layout_patterns_for_page_type(page_type: str) -> str:
    return PAGE_LAYOUT_PATTERNS.get(
        page_type.lower(),
        "Standard web layout with header, content, and footer sections"
    )


def get_advanced_layout_patterns(page_type: str, industry_type: Optional[str] = None) -> str:
    base = ADVANCED_PAGE_PATTERNS.get(page_type.lower(), ["standard_layout"])
    specific = INDUSTRY_LAYOUT_PATTERNS.get((industry_type or "").lower(), [])
    return ", ".join(base + specific)


def get_industry_layout_recommendations(industry: Optional[str] = None) -> str:
    return INDUSTRY_LAYOUT_RECOMMENDATIONS.get(
        (industry or "").lower(),
        "Standard layout recommendations focusing on user experience and conversion."
    )


def get_style_layout_guidelines(style: Optional[str] = None) -> str:
    return STYLE_LAYOUT_GUIDELINES.get(
        style or "",
        "Balanced layout approach combining usability and visual appeal."
    )


def get_optimization_goals(options: Optional[AdvancedLayoutOptions] = None) -> str:
    if options is None:
        return "Balanced optimization for all metrics"

    goals = []
    if options.content_priority:
        goals.append(f"Priority: {options.content_priority}")
    if options.user_flow_optimization:
        goals.append("User flow optimization")
    if options.accessibility_compliance:
        goals.append("WCAG 2.1 compliance")
    if options.performance_optimization:
        goals.append("Performance optimization")

    return ", ".join(goals) or "Standard optimization"


def build_layout_prompt(request: LayoutSuggestionRequest) -> str:
    layout_style = request.preferences.layout_style if request.preferences else "modern"
    advanced = request.advanced_options.model_dump(by_alias=True) if request.advanced_options else {}

    return f"""Generate an advanced layout for a {request.page_type} page with the following specifications:

**Content Analysis:**
{analyze_content_for_layout(request.content_data)}

**Content Data:** {json.dumps(request.content_data, indent=2, default=str)}

**Industry:** {request.industry_type or 'General'}
**Layout Style:** {layout_style}
**Advanced Options:** {json.dumps(advanced)}

**Page Patterns:** {get_layout_patterns_for_page_type(request.page_type)}
**Layout Patterns:** {get_advanced_layout_patterns(request.page_type, request.industry_type)}
**Industry Layout Recommendations:** {get_industry_layout_recommendations(request.industry_type)}
**Style Guidelines:** {get_style_layout_guidelines(layout_style)}
**Optimization Goals:** {get_optimization_goals(request.advanced_options)}

Generate a comprehensive layout suggestion including the grid system, content hierarchy,
sections with positioning and interactions, and the user flow.

Response format: JSON object with the following structure:
{LAYOUT_RESPONSE_FORMAT}"""


# ---------- Colors ----------

def build_color_prompt(request: ColorPaletteRequest) -> str:
    brand_colors = ", ".join(request.brand_colors) if request.brand_colors else None

    return (
        "Generate a harmonious color palette for web design with the following specifications:\n\n"
        + _optional_line("Existing brand colors", brand_colors)
        + _optional_line("Industry", request.industry_type)
        + _optional_line("Style preference", request.style_preference)
        + _optional_line("Base color to build around", request.base_color)
        + f"\nIndustry color guidelines: {get_industry_color_guidelines(request.industry_type)}\n"
        f"Style color guidelines: {get_style_color_guidelines(request.style_preference)}\n\n"
        "Requirements:\n"
        "1. Provide a complete palette with 6 colors: primary, secondary, accent, neutral, background, and text\n"
        "2. All colors must be in hex format (#RRGGBB)\n"
        "3. Ensure proper contrast ratios for accessibility (WCAG 2.1 AA compliant)\n"
        "4. Colors should work harmoniously together\n"
        "5. Consider color psychology and industry associations\n\n"
        f"Response format: JSON object with the following structure:\n{COLOR_RESPONSE_FORMAT}"
    )


# ---------- SEO ----------

def get_seo_guidelines(industry: Optional[str] = None) -> str:
    return SEO_GUIDELINES.get(
        (industry or "").lower(),
        "Follow general SEO best practices with focus on user intent and content quality."
    )


def analyze_content_for_seo(content: str) -> str:
    """Word count, heading count and average paragraph length of the page content"""
    soup = BeautifulSoup(content, "html.parser")
    text = soup.get_text(" ")

    word_count = len(text.split())
    if word_count < 300:
        verdict = "too short"
    elif word_count > 1000:
        verdict = "good length"
    else:
        verdict = "adequate"

    headings = soup.find_all(re.compile(r"^h[1-6]$"))

    paragraphs = [p for p in content.split("\n\n") if p.strip()]
    avg_paragraph = (
        sum(len(p.split()) for p in paragraphs) / len(paragraphs)
        if paragraphs else 0
    )

    return ". ".join([
        f"Word count: {word_count} ({verdict})",
        f"Headings found: {len(headings)}",
        f"Average paragraph length: {round(avg_paragraph)} words",
        "Content structure: Ready for keyword analysis",
    ])


def build_seo_prompt(request: SEOSuggestionRequest) -> str:
    content = request.page_content[:MAX_SEO_CONTENT_CHARS]
    if len(request.page_content) > MAX_SEO_CONTENT_CHARS:
        content += "..."

    keywords = ", ".join(request.keywords) if request.keywords else None

    return (
        "Analyze the following content and provide comprehensive SEO recommendations:\n\n"
        f"Content Analysis:\n{analyze_content_for_seo(request.page_content)}\n\n"
        f"Page Content: {content}\n"
        + _optional_line("Target Keywords", keywords)
        + _optional_line("Target Audience", request.target_audience)
        + _optional_line("Industry", request.industry)
        + ("Include competitor analysis and gap identification\n" if request.competitor_analysis else "")
        + f"\nIndustry-Specific SEO Guidelines: {get_seo_guidelines(request.industry)}\n\n"
        "Cover title optimization (50-60 characters), meta description (150-160 characters), "
        "keyword strategy, content optimization, technical SEO and user experience.\n\n"
        f"Response format: JSON object with the following structure:\n{SEO_RESPONSE_FORMAT}"
    )
