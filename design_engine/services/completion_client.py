"""
LLM completion clients.

Clients are constructed explicitly and injected into AIDesignerService; there
is no module-level client. Every client returns plain text and raises
CompletionClientError on transport or provider failures.
"""
from dataclasses import dataclass
from typing import List, Optional, Protocol

import httpx
from anthropic import AsyncAnthropic, APIError

from config import Settings
from logging_config import logger
from services.llm_response_handler import LLMResponseHandler


class CompletionClientError(Exception):
    """Raised when the upstream completion endpoint can't produce a response"""


@dataclass(frozen=True)
class ChatMessage:
    role: str  # system, user, assistant
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


class CompletionClient(Protocol):
    name: str

    async def complete(
        self,
        messages: List[ChatMessage],
        max_tokens: int,
        temperature: float,
    ) -> str: ...


class AnthropicCompletionClient:
    """Completion client backed by the Anthropic Messages API"""

    name = "anthropic"

    def __init__(self, api_key: str, model: str, client: Optional[AsyncAnthropic] = None):
        if not api_key and client is None:
            raise CompletionClientError("ANTHROPIC_API_KEY not configured")

        self.client = client or AsyncAnthropic(api_key=api_key)
        self.model = model

        logger.info("Initialized AnthropicCompletionClient", model=self.model)

    async def complete(self, messages: List[ChatMessage], max_tokens: int, temperature: float) -> str:
        # The Messages API takes the system prompt separately
        system_prompt = "\n\n".join(m.content for m in messages if m.role == "system")
        conversation = [m.to_dict() for m in messages if m.role != "system"]

        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system_prompt,
                messages=conversation,
            )
        except APIError as e:
            logger.error("Anthropic completion failed", model=self.model, error=str(e))
            raise CompletionClientError(f"Anthropic request failed: {e}") from e

        logger.info(
            "Anthropic completion received",
            model=self.model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )
        return LLMResponseHandler.handle_response(response.content)


class OpenRouterCompletionClient:
    """Completion client using the OpenRouter chat completions API with model fallback"""

    name = "openrouter"

    MODELS = [
        "anthropic/claude-sonnet-4",
        "anthropic/claude-3.5-sonnet",
        "google/gemini-2.0-flash-001",
    ]

    def __init__(
        self,
        api_key: str,
        api_url: str,
        timeout: float = 60.0,
        models: Optional[List[str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise CompletionClientError("OPENROUTER_API_KEY not configured")

        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self.models = models or list(self.MODELS)
        self.transport = transport

        logger.info("Initialized OpenRouterCompletionClient", models=self.models)

    async def complete(self, messages: List[ChatMessage], max_tokens: int, temperature: float) -> str:
        payload_messages = [m.to_dict() for m in messages]
        last_error = None

        # Try each model in sequence
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            for model in self.models:
                try:
                    response = await client.post(
                        self.api_url,
                        headers={
                            "Authorization": f"Bearer {self.api_key}",
                            "Content-Type": "application/json",
                            "X-Title": "AI Design Engine",
                        },
                        json={
                            "model": model,
                            "messages": payload_messages,
                            "max_tokens": max_tokens,
                            "temperature": temperature,
                        },
                    )
                except httpx.HTTPError as e:
                    logger.warning("OpenRouter request failed", model=model, error=str(e))
                    last_error = e
                    continue

                if response.status_code != 200:
                    logger.warning(
                        "OpenRouter model failed",
                        model=model,
                        status_code=response.status_code,
                        body=response.text[:500],
                    )
                    last_error = CompletionClientError(f"{response.status_code}: {response.text[:200]}")
                    continue

                try:
                    content = response.json()["choices"][0]["message"]["content"]
                except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
                    logger.warning(
                        "OpenRouter model returned a malformed body",
                        model=model,
                        error=repr(e),
                        body=response.text[:500],
                    )
                    last_error = CompletionClientError(f"Malformed response from {model}: {e!r}")
                    continue

                logger.info("OpenRouter completion received", model=model)
                return LLMResponseHandler.handle_response(content)

        raise CompletionClientError(f"All OpenRouter models failed. Last error: {last_error}")


def build_completion_client(settings: Settings) -> CompletionClient:
    """
    Construct the completion client selected by COMPLETION_PROVIDER.

    "auto" prefers Anthropic when its key is set, then OpenRouter.

    Raises:
        CompletionClientError: when the selected provider has no API key
    """
    provider = settings.COMPLETION_PROVIDER

    if provider == "anthropic" or (provider == "auto" and settings.ANTHROPIC_API_KEY):
        return AnthropicCompletionClient(
            api_key=settings.ANTHROPIC_API_KEY,
            model=settings.DEFAULT_CLAUDE_MODEL,
        )

    if provider == "openrouter" or (provider == "auto" and settings.OPENROUTER_API_KEY):
        return OpenRouterCompletionClient(
            api_key=settings.OPENROUTER_API_KEY,
            api_url=settings.OPENROUTER_API_URL,
            timeout=settings.OPENROUTER_TIMEOUT,
        )

    raise CompletionClientError("No completion provider configured")
