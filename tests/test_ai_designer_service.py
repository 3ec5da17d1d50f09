import json

import httpx
import pytest

from heuristics.fallbacks import FALLBACK_TITLES, generate_fallback_layout
from heuristics.palette import COLOR_USAGE_RECOMMENDATIONS, INDUSTRY_PALETTES, derive_complementary_colors
from services.ai_designer_service import AIDesignerService, AIServiceError
from services.completion_client import OpenRouterCompletionClient
from services.schemas import (
    BatchOperation,
    BatchProcessRequest,
    ColorPaletteRequest,
    ContentGenerationRequest,
    LayoutSuggestionRequest,
    SEOSuggestionRequest,
)

PALETTE_RESPONSE = json.dumps({
    "palette": {
        "primary": "#0EA5E9",
        "secondary": "#06b6d4",
        "accent": "#10b981",
        "neutral": "#64748b",
        "background": "#f8fafc",
        "text": "#1e293b",
    },
    "rationale": "Calm and trustworthy",
})

CONTENT_REQUEST = {"businessType": "bakery", "targetAudience": "locals", "topic": "sourdough"}


async def test_color_palette_from_upstream(service, fake_client):
    fake_client.response = PALETTE_RESPONSE
    response = await service.generate_color_palette("user-1", ColorPaletteRequest(style_preference="pastel"))

    assert response.palette.primary == "#0ea5e9"
    assert response.complementary_colors == derive_complementary_colors("#0ea5e9")
    assert response.usage_recommendations == COLOR_USAGE_RECOMMENDATIONS["pastel"]
    assert response.confidence == 0.9
    assert fake_client.calls[0]["max_tokens"] == 500
    assert fake_client.calls[0]["temperature"] == 0.8
    assert fake_client.calls[0]["messages"][0].role == "system"


async def test_color_palette_falls_back_on_garbage(service, fake_client):
    fake_client.response = "Blue is a lovely color."
    response = await service.generate_color_palette("user-1", ColorPaletteRequest(industry_type="healthcare"))

    assert response.palette.model_dump() == INDUSTRY_PALETTES["technology"]
    assert len(response.complementary_colors) == 4
    assert response.usage_recommendations == COLOR_USAGE_RECOMMENDATIONS["modern"]


async def test_color_palette_falls_back_when_upstream_fails(failing_client):
    service = AIDesignerService(failing_client)
    response = await service.generate_color_palette("user-1", ColorPaletteRequest(base_color="#ff0000"))

    assert response.palette.primary == "#ff0000"
    assert response.complementary_colors[0] == "#00ffff"


async def test_layout_fallback_with_metrics(service, fake_client):
    fake_client.response = "I can't do that right now."
    response = await service.suggest_layout(
        "user-1", LayoutSuggestionRequest(content_data={"hero": "Welcome"}, page_type="homepage"),
    )

    assert response.suggested_layout == generate_fallback_layout("homepage").suggested_layout
    assert response.optimization_metrics.conversion_potential == 85
    assert response.optimization_metrics.engagement_score == 72
    assert response.optimization_metrics.accessibility_score == 85
    assert response.optimization_metrics.performance_score == 100
    assert response.confidence == 0.85


async def test_layout_from_upstream(service, fake_client):
    fake_client.response = "```json\n" + json.dumps({
        "suggestedLayout": {
            "sections": [{"type": "hero", "priority": "high"}, {"type": "pricing"}],
            "gridSystem": {"columns": 12, "gap": 24},
        },
        "reasoning": "Pricing-led landing page",
    }) + "\n```"
    response = await service.suggest_layout(
        "user-1", LayoutSuggestionRequest(content_data={}, page_type="landing"),
    )

    assert [s.type for s in response.suggested_layout.sections] == ["hero", "pricing"]
    assert response.reasoning == "Pricing-led landing page"
    assert response.optimization_metrics.conversion_potential == 65
    assert fake_client.calls[0]["max_tokens"] == 2000


async def test_layout_falls_back_when_upstream_fails(failing_client):
    service = AIDesignerService(failing_client)
    response = await service.suggest_layout(
        "user-1", LayoutSuggestionRequest(content_data={}, page_type="blog"),
    )

    assert [s.type for s in response.suggested_layout.sections] == ["hero", "features", "cta", "footer"]


async def test_seo_fallback_on_malformed_response(service, fake_client):
    fake_client.response = "{ broken"
    response = await service.get_seo_suggestions("user-1", SEOSuggestionRequest(page_content="<h1>Hi</h1>"))

    assert response.title_suggestion in FALLBACK_TITLES
    assert response.seo_score == 70
    assert response.confidence == 0.8


async def test_generate_content(service, fake_client):
    fake_client.response = "```\nFresh bread, every morning.\n```"
    request = ContentGenerationRequest(**{**CONTENT_REQUEST, "wordCount": 150})
    response = await service.generate_content("user-1", request)

    assert response.generated_text == "Fresh bread, every morning."
    assert response.suggestions
    assert fake_client.calls[0]["max_tokens"] == 150


async def test_generate_content_raises_when_upstream_fails(failing_client):
    service = AIDesignerService(failing_client)

    with pytest.raises(AIServiceError):
        await service.generate_content("user-1", ContentGenerationRequest.model_validate(CONTENT_REQUEST))


async def test_batch_failures_are_isolated(service, fake_client):
    fake_client.response = PALETTE_RESPONSE
    request = BatchProcessRequest(requests=[
        BatchOperation(type="color_palette", data={"industryType": "healthcare"}),
        BatchOperation(type="image_enhancement", data={}),
        BatchOperation(type="content_generation", data={"topic": "missing fields"}),
        BatchOperation(type="seo_optimization", data={"pageContent": "Hello world"}),
    ])
    response = await service.batch_process("user-1", request)

    assert [r.success for r in response.results] == [True, False, False, True]
    assert response.results[0].data["palette"]["primary"] == "#0ea5e9"
    assert "complementaryColors" in response.results[0].data
    assert "Unknown request type" in response.results[1].error
    assert "Invalid request data" in response.results[2].error


async def test_batch_content_failure_does_not_abort(failing_client):
    service = AIDesignerService(failing_client)
    request = BatchProcessRequest(requests=[
        BatchOperation(type="content_generation", data=CONTENT_REQUEST),
        BatchOperation(type="color_palette", data={}),
    ])
    response = await service.batch_process("user-1", request)

    assert [r.success for r in response.results] == [False, True]
    assert response.results[0].error == "Failed to generate content"


async def test_color_prompt_carries_request_details(service, fake_client):
    fake_client.response = PALETTE_RESPONSE
    await service.generate_color_palette(
        "user-1", ColorPaletteRequest(industry_type="finance", base_color="#1e40af"),
    )

    user_prompt = fake_client.calls[0]["messages"][1].content
    assert "Industry: finance" in user_prompt
    assert "Base color to build around: #1e40af" in user_prompt


def _openrouter_service(body):
    client = OpenRouterCompletionClient(
        api_key="test-key",
        api_url="https://openrouter.test/api/v1/chat/completions",
        models=["model-a"],
        transport=httpx.MockTransport(lambda request: httpx.Response(200, **body)),
    )
    return AIDesignerService(client)


@pytest.mark.parametrize("body", [
    {"text": "<html>gateway</html>"},
    {"json": {"choices": []}},
    {"json": {"choices": [{"message": None}]}},
])
async def test_malformed_openrouter_body_falls_back(body):
    service = _openrouter_service(body)

    layout = await service.suggest_layout("user-1", LayoutSuggestionRequest(content_data={}, page_type="homepage"))
    colors = await service.generate_color_palette("user-1", ColorPaletteRequest())
    seo = await service.get_seo_suggestions("user-1", SEOSuggestionRequest(page_content="Hello"))

    assert layout.suggested_layout == generate_fallback_layout("homepage").suggested_layout
    assert colors.palette.model_dump() == INDUSTRY_PALETTES["technology"]
    assert seo.title_suggestion in FALLBACK_TITLES


async def test_malformed_openrouter_body_does_not_abort_batch():
    service = _openrouter_service({"json": {"choices": []}})
    request = BatchProcessRequest(requests=[
        BatchOperation(type="layout_suggestion", data={"contentData": {}, "pageType": "homepage"}),
        BatchOperation(type="content_generation", data=CONTENT_REQUEST),
    ])
    response = await service.batch_process("user-1", request)

    assert [r.success for r in response.results] == [True, False]
