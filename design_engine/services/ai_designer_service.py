"""
AI designer service: LLM-backed content, layout, color and SEO suggestions.

Layout, color and SEO results always come back well-formed. When the
completion endpoint fails or returns something unparseable, the deterministic
heuristics supply the answer instead. Content generation has no deterministic
substitute and raises AIServiceError.
"""
import time
from typing import Any, Awaitable, Callable, Dict, Optional

from pydantic import BaseModel, ValidationError

from heuristics.fallbacks import get_fallback_content_suggestions
from heuristics.layout_scoring import calculate_optimization_metrics
from heuristics.models import SectionType
from heuristics.palette import derive_complementary_colors, get_color_usage_recommendations
from heuristics.parsing import (
    ParseResult,
    parse_color_response,
    parse_layout_response,
    parse_seo_response,
    resolve_layout,
    resolve_palette,
    resolve_seo,
)
from logging_config import logger
from services import prompts
from services.completion_client import ChatMessage, CompletionClient, CompletionClientError
from services.llm_response_handler import LLMResponseHandler
from services.schemas import (
    BATCH_OPERATION_TYPES,
    BatchProcessRequest,
    BatchProcessResponse,
    BatchResult,
    ColorPaletteRequest,
    ColorPaletteResponse,
    ContentGenerationRequest,
    ContentGenerationResponse,
    LayoutSuggestionRequest,
    LayoutSuggestionResponse,
    SEOSuggestionRequest,
    SEOSuggestionResponse,
)

# Cost units recorded with each usage event
FEATURE_COSTS = {
    "content_generation": 0.001,
    "layout_suggestion": 0.003,
    "color_palette": 0.001,
    "seo_optimization": 0.001,
    "batch_processing": 0.01,
}


class AIServiceError(Exception):
    """Raised when an AI feature has no usable result to return"""


def _elapsed_ms(start_time: float) -> int:
    return int((time.monotonic() - start_time) * 1000)


class AIDesignerService:
    """Orchestrates prompt building, completion calls, parsing and fallbacks"""

    def __init__(self, client: CompletionClient):
        self.client = client

    def _log_usage(self, user_id: str, feature: str, processing_time: int, **extra) -> None:
        logger.info(
            "ai_usage",
            user_id=user_id,
            feature=feature,
            cost=FEATURE_COSTS.get(feature, 0),
            processing_time_ms=processing_time,
            provider=getattr(self.client, "name", "unknown"),
            **extra
        )

    async def _complete(self, system_prompt: str, user_prompt: str, max_tokens: int, temperature: float) -> str:
        messages = [
            ChatMessage(role="system", content=system_prompt),
            ChatMessage(role="user", content=user_prompt),
        ]
        return await self.client.complete(messages, max_tokens=max_tokens, temperature=temperature)

    async def _complete_or_none(self, feature: str, system_prompt: str, user_prompt: str,
                                max_tokens: int, temperature: float) -> Optional[str]:
        """Completion text, or None when the upstream call fails (parsers treat None as empty)"""
        try:
            return await self._complete(system_prompt, user_prompt, max_tokens, temperature)
        except CompletionClientError as e:
            logger.warning("Completion failed, using deterministic fallback", feature=feature, error=str(e))
            return None

    @staticmethod
    def _log_parse_outcome(feature: str, result: ParseResult) -> None:
        if not result.ok:
            logger.warning(
                "Upstream response unusable, using fallback",
                feature=feature,
                kind=result.error.kind,
                reason=result.error.message,
            )

    async def generate_content(self, user_id: str, request: ContentGenerationRequest) -> ContentGenerationResponse:
        start_time = time.monotonic()

        try:
            text = await self._complete(
                prompts.CONTENT_SYSTEM_PROMPT,
                prompts.build_content_prompt(request),
                max_tokens=request.word_count or 500,
                temperature=0.7,
            )
        except CompletionClientError as e:
            logger.error("Content generation failed", user_id=user_id, error=str(e))
            raise AIServiceError("Failed to generate content") from e

        generated_text = LLMResponseHandler.clean_code_fences(text) if text else ""
        processing_time = _elapsed_ms(start_time)
        self._log_usage(user_id, "content_generation", processing_time, output_chars=len(generated_text))

        return ContentGenerationResponse(
            generated_text=generated_text,
            suggestions=get_fallback_content_suggestions(),
            confidence=0.85,
            processing_time=processing_time,
        )

    async def suggest_layout(self, user_id: str, request: LayoutSuggestionRequest) -> LayoutSuggestionResponse:
        start_time = time.monotonic()

        text = await self._complete_or_none(
            "layout_suggestion",
            prompts.LAYOUT_SYSTEM_PROMPT,
            prompts.build_layout_prompt(request),
            max_tokens=2000,
            temperature=0.6,
        )
        result = parse_layout_response(text)
        self._log_parse_outcome("layout_suggestion", result)

        suggestion = resolve_layout(result, request.page_type)
        metrics = calculate_optimization_metrics(suggestion.suggested_layout, request)
        processing_time = _elapsed_ms(start_time)
        self._log_usage(
            user_id, "layout_suggestion", processing_time,
            fallback=not result.ok,
            section_count=len(suggestion.suggested_layout.sections),
            custom_sections=sum(
                1 for s in suggestion.suggested_layout.sections if s.kind is SectionType.CUSTOM
            ),
        )

        return LayoutSuggestionResponse(
            **suggestion.model_dump(),
            confidence=0.85,
            processing_time=processing_time,
            optimization_metrics=metrics,
        )

    async def generate_color_palette(self, user_id: str, request: ColorPaletteRequest) -> ColorPaletteResponse:
        start_time = time.monotonic()

        text = await self._complete_or_none(
            "color_palette",
            prompts.COLOR_SYSTEM_PROMPT,
            prompts.build_color_prompt(request),
            max_tokens=500,
            temperature=0.8,
        )
        result = parse_color_response(text, base_color=request.base_color)
        self._log_parse_outcome("color_palette", result)

        palette = resolve_palette(result, base_color=request.base_color, industry=request.industry_type)
        processing_time = _elapsed_ms(start_time)
        self._log_usage(user_id, "color_palette", processing_time, fallback=not result.ok)

        return ColorPaletteResponse(
            palette=palette,
            complementary_colors=derive_complementary_colors(palette.primary),
            usage_recommendations=get_color_usage_recommendations(request.style_preference),
            confidence=0.9,
            processing_time=processing_time,
        )

    async def get_seo_suggestions(self, user_id: str, request: SEOSuggestionRequest) -> SEOSuggestionResponse:
        start_time = time.monotonic()

        text = await self._complete_or_none(
            "seo_optimization",
            prompts.SEO_SYSTEM_PROMPT,
            prompts.build_seo_prompt(request),
            max_tokens=600,
            temperature=0.5,
        )
        result = parse_seo_response(text)
        self._log_parse_outcome("seo_optimization", result)

        seo = resolve_seo(result, request.industry)
        processing_time = _elapsed_ms(start_time)
        self._log_usage(user_id, "seo_optimization", processing_time, fallback=not result.ok)

        return SEOSuggestionResponse(
            **seo.model_dump(),
            confidence=0.8,
            processing_time=processing_time,
        )

    def _batch_handlers(self) -> Dict[str, tuple]:
        return {
            "content_generation": (ContentGenerationRequest, self.generate_content),
            "layout_suggestion": (LayoutSuggestionRequest, self.suggest_layout),
            "color_palette": (ColorPaletteRequest, self.generate_color_palette),
            "seo_optimization": (SEOSuggestionRequest, self.get_seo_suggestions),
        }

    async def batch_process(self, user_id: str, request: BatchProcessRequest) -> BatchProcessResponse:
        """
        Run each operation in order. A failing operation is recorded in its
        own result and never aborts the rest of the batch.
        """
        start_time = time.monotonic()
        handlers = self._batch_handlers()
        results = []

        for operation in request.requests:
            if operation.type not in BATCH_OPERATION_TYPES:
                results.append(BatchResult(
                    type=operation.type,
                    success=False,
                    error=f"Unknown request type: {operation.type}",
                ))
                continue

            model, handler = handlers[operation.type]
            results.append(await self._run_batch_item(user_id, operation.type, model, handler, operation.data))

        total_processing_time = _elapsed_ms(start_time)
        self._log_usage(
            user_id, "batch_processing", total_processing_time,
            operations=len(results),
            failures=sum(1 for r in results if not r.success),
        )

        return BatchProcessResponse(results=results, total_processing_time=total_processing_time)

    async def _run_batch_item(
        self,
        user_id: str,
        operation_type: str,
        model: type,
        handler: Callable[[str, Any], Awaitable[BaseModel]],
        data: Dict[str, Any],
    ) -> BatchResult:
        try:
            item_request = model.model_validate(data)
        except ValidationError as e:
            return BatchResult(
                type=operation_type,
                success=False,
                error=f"Invalid request data: {e.error_count()} validation errors",
            )

        try:
            response = await handler(user_id, item_request)
        except AIServiceError as e:
            return BatchResult(type=operation_type, success=False, error=str(e))

        return BatchResult(
            type=operation_type,
            success=True,
            data=response.model_dump(by_alias=True),
            processing_time=response.processing_time,
        )
