import json
from types import SimpleNamespace

import httpx
import pytest

from config import Settings
from services.completion_client import (
    AnthropicCompletionClient,
    ChatMessage,
    CompletionClientError,
    OpenRouterCompletionClient,
    build_completion_client,
)
from services.llm_response_handler import LLMResponseHandler

MESSAGES = [
    ChatMessage(role="system", content="You are a color expert."),
    ChatMessage(role="user", content="Give me a palette."),
]


class FakeMessages:
    def __init__(self, response):
        self.response = response
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        return self.response


def _anthropic_response(*blocks):
    return SimpleNamespace(content=list(blocks), usage=SimpleNamespace(input_tokens=12, output_tokens=34))


async def test_anthropic_client_sends_system_prompt_separately():
    messages = FakeMessages(_anthropic_response(SimpleNamespace(type="text", text="  {\"primary\": \"#000000\"} ")))
    client = AnthropicCompletionClient(api_key="", model="claude-test", client=SimpleNamespace(messages=messages))

    text = await client.complete(MESSAGES, max_tokens=500, temperature=0.8)

    assert text == '{"primary": "#000000"}'
    assert messages.kwargs["system"] == "You are a color expert."
    assert messages.kwargs["messages"] == [{"role": "user", "content": "Give me a palette."}]
    assert messages.kwargs["model"] == "claude-test"
    assert messages.kwargs["max_tokens"] == 500


async def test_anthropic_client_skips_thinking_blocks():
    messages = FakeMessages(_anthropic_response(
        SimpleNamespace(type="thinking", text="hmm"),
        SimpleNamespace(type="text", text="Section 1: Hero"),
    ))
    client = AnthropicCompletionClient(api_key="", model="claude-test", client=SimpleNamespace(messages=messages))

    assert await client.complete(MESSAGES, max_tokens=100, temperature=0.5) == "Section 1: Hero"


def test_anthropic_client_requires_key():
    with pytest.raises(CompletionClientError):
        AnthropicCompletionClient(api_key="", model="claude-test")


def _openrouter_reply(content):
    return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": content}}]})


async def test_openrouter_falls_back_to_next_model():
    seen_models = []

    def handler(request):
        body = json.loads(request.content)
        seen_models.append(body["model"])
        assert request.headers["Authorization"] == "Bearer test-key"
        if body["model"] == "model-a":
            return httpx.Response(503, text="overloaded")
        return _openrouter_reply("hello")

    client = OpenRouterCompletionClient(
        api_key="test-key",
        api_url="https://openrouter.test/api/v1/chat/completions",
        models=["model-a", "model-b"],
        transport=httpx.MockTransport(handler),
    )

    assert await client.complete(MESSAGES, max_tokens=100, temperature=0.5) == "hello"
    assert seen_models == ["model-a", "model-b"]


async def test_openrouter_sends_all_messages():
    captured = {}

    def handler(request):
        captured.update(json.loads(request.content))
        return _openrouter_reply("ok")

    client = OpenRouterCompletionClient(
        api_key="test-key",
        api_url="https://openrouter.test/api/v1/chat/completions",
        models=["model-a"],
        transport=httpx.MockTransport(handler),
    )
    await client.complete(MESSAGES, max_tokens=321, temperature=0.2)

    assert captured["messages"][0] == {"role": "system", "content": "You are a color expert."}
    assert captured["max_tokens"] == 321
    assert captured["temperature"] == 0.2


async def test_openrouter_raises_when_every_model_fails():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = OpenRouterCompletionClient(
        api_key="test-key",
        api_url="https://openrouter.test/api/v1/chat/completions",
        models=["model-a", "model-b"],
        transport=httpx.MockTransport(handler),
    )

    with pytest.raises(CompletionClientError):
        await client.complete(MESSAGES, max_tokens=100, temperature=0.5)


def test_openrouter_requires_key():
    with pytest.raises(CompletionClientError):
        OpenRouterCompletionClient(api_key="", api_url="https://openrouter.test")


def test_build_prefers_anthropic_in_auto_mode():
    settings = Settings(ANTHROPIC_API_KEY="sk-ant", OPENROUTER_API_KEY="sk-or", COMPLETION_PROVIDER="auto")

    assert isinstance(build_completion_client(settings), AnthropicCompletionClient)


def test_build_uses_openrouter_when_only_its_key_is_set():
    settings = Settings(ANTHROPIC_API_KEY="", OPENROUTER_API_KEY="sk-or", COMPLETION_PROVIDER="auto")

    assert isinstance(build_completion_client(settings), OpenRouterCompletionClient)


def test_build_explicit_provider_without_key_fails():
    settings = Settings(ANTHROPIC_API_KEY="", OPENROUTER_API_KEY="sk-or", COMPLETION_PROVIDER="anthropic")

    with pytest.raises(CompletionClientError):
        build_completion_client(settings)


def test_build_without_any_key_fails():
    settings = Settings(ANTHROPIC_API_KEY="", OPENROUTER_API_KEY="", COMPLETION_PROVIDER="auto")

    with pytest.raises(CompletionClientError):
        build_completion_client(settings)


class TestResponseHandler:
    def test_text_parts_from_dicts(self):
        parts = [{"type": "thinking", "text": "secret"}, {"type": "text", "text": "visible"}]

        assert LLMResponseHandler.handle_response(parts) == "visible"

    def test_empty_response(self):
        assert LLMResponseHandler.handle_response(None) == ""
        assert LLMResponseHandler.handle_response([{"type": "tool_use"}]) == ""

    def test_clean_code_fences(self):
        assert LLMResponseHandler.clean_code_fences("```json\n{\"a\": 1}\n```") == '{"a": 1}'
        assert LLMResponseHandler.clean_code_fences("plain text") == "plain text"


@pytest.mark.parametrize("reply", [
    httpx.Response(200, text="<html>gateway</html>"),
    httpx.Response(200, json={"choices": []}),
    httpx.Response(200, json={"choices": [{"message": None}]}),
    httpx.Response(200, json={"error": {"message": "quota"}}),
])
async def test_openrouter_malformed_body_is_a_model_failure(reply):
    seen_models = []

    def handler(request):
        model = json.loads(request.content)["model"]
        seen_models.append(model)
        return reply if model == "model-a" else _openrouter_reply("recovered")

    client = OpenRouterCompletionClient(
        api_key="test-key",
        api_url="https://openrouter.test/api/v1/chat/completions",
        models=["model-a", "model-b"],
        transport=httpx.MockTransport(handler),
    )

    assert await client.complete(MESSAGES, max_tokens=100, temperature=0.5) == "recovered"
    assert seen_models == ["model-a", "model-b"]


async def test_openrouter_malformed_bodies_on_every_model_raise():
    client = OpenRouterCompletionClient(
        api_key="test-key",
        api_url="https://openrouter.test/api/v1/chat/completions",
        models=["model-a", "model-b"],
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"choices": []})),
    )

    with pytest.raises(CompletionClientError):
        await client.complete(MESSAGES, max_tokens=100, temperature=0.5)


def test_build_uses_configured_claude_model():
    settings = Settings(ANTHROPIC_API_KEY="sk-ant", COMPLETION_PROVIDER="anthropic", DEFAULT_CLAUDE_MODEL="claude-custom")

    assert build_completion_client(settings).model == "claude-custom"


def test_settings_expose_a_single_claude_model():
    settings = Settings()

    assert not hasattr(settings, "CLAUDE_MODEL_SONNET")
    assert not hasattr(settings, "CLAUDE_MODEL_HAIKU")
