"""Unit tests for the Anthropic-backed generation service."""
from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any

import anthropic
import httpx
import pytest

from aetherfit.models.schemas import GenerationRequest
from aetherfit.services.errors import AuthError, ParseError, QuotaError, TransportError
from aetherfit.services.generation_service import AnthropicGenerationService

_API_REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


def _status_error(cls: type[anthropic.APIStatusError], status: int) -> anthropic.APIStatusError:
    response = httpx.Response(status, request=_API_REQUEST)
    return cls(f"HTTP {status}", response=response, body=None)


@pytest.fixture
def generation_request() -> GenerationRequest:
    return GenerationRequest(
        model="claude-test",
        prompt="Analyze the air for running.",
        response_schema={"type": "object", "properties": {"aqfaScore": {"type": "number"}}},
        temperature=0.5,
        system_prompt="You are Aether.",
        max_tokens=512,
    )


@pytest.fixture
def dummy_anthropic(monkeypatch: pytest.MonkeyPatch):
    """Patch the SDK client; returns a holder to configure replies and inspect calls."""

    state: dict[str, Any] = {"calls": [], "reply": None, "error": None, "init": None}

    class DummyMessages:
        def create(self, **kwargs):
            state["calls"].append(kwargs)
            if state["error"] is not None:
                raise state["error"]
            return state["reply"]

    class DummyAnthropic:
        def __init__(self, api_key: str, **kwargs):
            state["init"] = {"api_key": api_key, **kwargs}
            self.messages = DummyMessages()

    monkeypatch.setattr("aetherfit.services.generation_service.Anthropic", DummyAnthropic)
    return state


def test_tool_use_input_is_returned_as_json(dummy_anthropic, generation_request):
    payload = {"aqfaScore": 8, "summary": "Fresh air", "recommendations": []}
    dummy_anthropic["reply"] = SimpleNamespace(
        content=[SimpleNamespace(type="tool_use", name="record_aqfa_analysis", input=payload)]
    )
    service = AnthropicGenerationService("test-key", timeout=12.0)

    raw = service.generate(generation_request)

    assert json.loads(raw) == payload
    assert dummy_anthropic["init"] == {"api_key": "test-key", "timeout": 12.0, "max_retries": 0}


def test_request_forces_schema_tool(dummy_anthropic, generation_request):
    dummy_anthropic["reply"] = SimpleNamespace(content=[SimpleNamespace(type="text", text="{}")])
    service = AnthropicGenerationService("test-key")

    service.generate(generation_request)

    sent = dummy_anthropic["calls"][0]
    assert sent["model"] == "claude-test"
    assert sent["temperature"] == 0.5
    assert sent["max_tokens"] == 512
    assert sent["system"] == "You are Aether."
    assert sent["messages"] == [{"role": "user", "content": "Analyze the air for running."}]
    assert sent["tools"][0]["input_schema"] == generation_request.response_schema
    assert sent["tool_choice"] == {"type": "tool", "name": AnthropicGenerationService.TOOL_NAME}


def test_text_blocks_are_concatenated(dummy_anthropic, generation_request):
    dummy_anthropic["reply"] = SimpleNamespace(
        content=[SimpleNamespace(type="text", text='{"aqfaScore": '), SimpleNamespace(type="text", text="5}")]
    )
    service = AnthropicGenerationService("test-key")

    assert service.generate(generation_request) == '{"aqfaScore": 5}'


def test_empty_content_raises_parse_error(dummy_anthropic, generation_request):
    dummy_anthropic["reply"] = SimpleNamespace(content=[])
    service = AnthropicGenerationService("test-key")

    with pytest.raises(ParseError):
        service.generate(generation_request)


def test_missing_key_raises_auth_error_without_client(generation_request):
    service = AnthropicGenerationService(None)

    assert service.configured is False
    with pytest.raises(AuthError):
        service.generate(generation_request)


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (_status_error(anthropic.AuthenticationError, 401), AuthError),
        (_status_error(anthropic.PermissionDeniedError, 403), AuthError),
        (_status_error(anthropic.RateLimitError, 429), QuotaError),
        (_status_error(anthropic.InternalServerError, 500), TransportError),
        (anthropic.APIConnectionError(request=_API_REQUEST), TransportError),
        (anthropic.APITimeoutError(request=_API_REQUEST), TransportError),
    ],
)
def test_sdk_errors_are_classified(dummy_anthropic, generation_request, error, expected):
    dummy_anthropic["error"] = error
    service = AnthropicGenerationService("test-key")

    with pytest.raises(expected) as excinfo:
        service.generate(generation_request)

    assert excinfo.value.__cause__ is error
