"""
AI designer API router.

Endpoints for content generation, layout suggestions, color palettes, SEO
suggestions and batch processing. Layout, color and SEO endpoints always
return a well-formed result, falling back to deterministic defaults when the
upstream model misbehaves.
"""
from fastapi import APIRouter, Depends, HTTPException, Request

from config import settings
from logging_config import logger
from routers.dependencies import get_current_user_id, get_designer_service, limiter
from services.ai_designer_service import AIDesignerService, AIServiceError
from services.schemas import (
    BatchProcessRequest,
    BatchProcessResponse,
    ColorPaletteRequest,
    ColorPaletteResponse,
    ContentGenerationRequest,
    ContentGenerationResponse,
    LayoutSuggestionRequest,
    LayoutSuggestionResponse,
    SEOSuggestionRequest,
    SEOSuggestionResponse,
)

router = APIRouter()


@router.post("/generate-content", response_model=ContentGenerationResponse)
@limiter.limit(settings.AI_RATE_LIMIT)
async def generate_content(
    request: Request,
    data: ContentGenerationRequest,
    user_id: str = Depends(get_current_user_id),
    service: AIDesignerService = Depends(get_designer_service),
):
    """
    Generate website copy for a business, audience and topic.

    Returns 502 when the completion endpoint fails; there is no
    deterministic substitute for generated copy.
    """
    logger.info("Content generation request received", user_id=user_id, business_type=data.business_type)

    try:
        return await service.generate_content(user_id, data)
    except AIServiceError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.post("/suggest-layout", response_model=LayoutSuggestionResponse)
@limiter.limit(settings.AI_RATE_LIMIT)
async def suggest_layout(
    request: Request,
    data: LayoutSuggestionRequest,
    user_id: str = Depends(get_current_user_id),
    service: AIDesignerService = Depends(get_designer_service),
):
    """
    Suggest a page layout with optimization metrics.

    Parameters:
    - contentData: page content keyed by content type (hero, features, ...)
    - pageType: homepage, landing, product, blog, about, contact, ...
    - industryType: optional industry for pattern selection
    - preferences / advancedOptions: optional style and optimization goals
    """
    logger.info("Layout suggestion request received", user_id=user_id, page_type=data.page_type)
    return await service.suggest_layout(user_id, data)


@router.post("/generate-colors", response_model=ColorPaletteResponse)
@limiter.limit(settings.AI_RATE_LIMIT)
async def generate_colors(
    request: Request,
    data: ColorPaletteRequest,
    user_id: str = Depends(get_current_user_id),
    service: AIDesignerService = Depends(get_designer_service),
):
    """
    Generate a six-role palette plus complementary colors and usage tips.

    Colors must be 6-digit hex (#RRGGBB); anything else is rejected with 422.
    """
    logger.info(
        "Color palette request received",
        user_id=user_id,
        industry=data.industry_type,
        style=data.style_preference,
    )
    return await service.generate_color_palette(user_id, data)


@router.post("/seo-suggestions", response_model=SEOSuggestionResponse)
@limiter.limit(settings.AI_RATE_LIMIT)
async def seo_suggestions(
    request: Request,
    data: SEOSuggestionRequest,
    user_id: str = Depends(get_current_user_id),
    service: AIDesignerService = Depends(get_designer_service),
):
    """Title, meta description, keyword and content recommendations for a page"""
    logger.info("SEO suggestion request received", user_id=user_id, industry=data.industry)
    return await service.get_seo_suggestions(user_id, data)


@router.post("/batch-process", response_model=BatchProcessResponse)
@limiter.limit(settings.BATCH_RATE_LIMIT)
async def batch_process(
    request: Request,
    data: BatchProcessRequest,
    user_id: str = Depends(get_current_user_id),
    service: AIDesignerService = Depends(get_designer_service),
):
    """
    Run several AI operations in one request.

    Each operation succeeds or fails on its own. At most
    MAX_BATCH_OPERATIONS operations per request.
    """
    if len(data.requests) > settings.MAX_BATCH_OPERATIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Maximum {settings.MAX_BATCH_OPERATIONS} operations per batch"
        )

    logger.info("Batch request received", user_id=user_id, operations=len(data.requests))
    return await service.batch_process(user_id, data)
