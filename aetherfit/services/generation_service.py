"""Generation service contract and its Anthropic-backed implementation."""
from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import anthropic
from anthropic import Anthropic

from aetherfit.models.schemas import GenerationRequest
from aetherfit.services.errors import AuthError, ParseError, QuotaError, TransportError


logger = logging.getLogger(__name__)


class GenerationService(Protocol):
    """Black-box oracle turning a prompt plus schema into raw (JSON) text."""

    def generate(self, request: GenerationRequest) -> str:
        ...


class AnthropicGenerationService:
    """Calls the Anthropic Messages API, forcing a schema-typed tool call.

    The declared response schema becomes the ``input_schema`` of a single tool
    and ``tool_choice`` pins the model to it, so a successful call returns
    structured input that is serialised back to JSON text for validation.
    """

    TOOL_NAME = "record_aqfa_analysis"
    TOOL_DESCRIPTION = "Record the Air Quality for Activity (AQFA) analysis."

    def __init__(
        self,
        api_key: str | None,
        *,
        timeout: float = 30.0,
    ) -> None:
        self.client: Anthropic | None = None
        if api_key:
            # One attempt per evaluation; the pipeline owns recovery.
            self.client = Anthropic(api_key=api_key, timeout=timeout, max_retries=0)
        else:
            logger.warning("ANTHROPIC_API_KEY not set - AQFA analysis will run in demo mode")

    @property
    def configured(self) -> bool:
        return self.client is not None

    def generate(self, request: GenerationRequest) -> str:
        if self.client is None:
            raise AuthError("Generation service credential is not configured")

        payload: dict[str, Any] = {
            "model": request.model,
            "max_tokens": request.max_tokens,
            "temperature": request.temperature,
            "messages": [{"role": "user", "content": request.prompt}],
            "tools": [
                {
                    "name": self.TOOL_NAME,
                    "description": self.TOOL_DESCRIPTION,
                    "input_schema": request.response_schema,
                }
            ],
            "tool_choice": {"type": "tool", "name": self.TOOL_NAME},
        }
        if request.system_prompt:
            payload["system"] = request.system_prompt

        try:
            response = self.client.messages.create(**payload)
        except (anthropic.AuthenticationError, anthropic.PermissionDeniedError) as exc:
            raise AuthError(f"Generation service rejected the credential: {exc}") from exc
        except anthropic.RateLimitError as exc:
            raise QuotaError(f"Generation service quota exceeded: {exc}") from exc
        except anthropic.APIConnectionError as exc:
            # Also covers APITimeoutError.
            raise TransportError(f"Could not reach generation service: {exc}") from exc
        except anthropic.APIStatusError as exc:
            raise TransportError(
                f"Generation service returned HTTP {exc.status_code}: {exc}"
            ) from exc

        return self._extract_text(response)

    def _extract_text(self, response: Any) -> str:
        """Return the tool input as JSON text, or the concatenated text blocks."""

        texts: list[str] = []
        for block in getattr(response, "content", None) or []:
            block_type = getattr(block, "type", None)
            if block_type == "tool_use":
                return json.dumps(block.input)
            text = getattr(block, "text", None)
            if text:
                texts.append(text)

        if not texts:
            raise ParseError("Generation service returned no content")
        return "".join(texts)
