"""Anthropic Messages API adapter.

Request::

    POST {base}/messages
    x-api-key: <key>
    anthropic-version: 2023-06-01

    {"model": "...", "max_tokens": 1000,
     "messages": [{"role": "user", "content": "..."}],
     "stop_sequences": [...], "tools": [{"name", "description", "input_schema"}]}

Response::

    {"model": "...", "stop_reason": "end_turn",
     "content": [{"type": "text", "text": "..."},
                 {"type": "tool_use", "id": "...", "name": "...", "input": {...}}],
     "usage": {"input_tokens": 12, "output_tokens": 5}}
"""

from typing import Any

from llmunify.providers.base import BaseClient
from llmunify.providers.models import GenerationRequest, GenerationResponse, ToolCall
from llmunify.providers.registry import Provider

ANTHROPIC_VERSION = "2023-06-01"
DEFAULT_MAX_TOKENS = 1000


class AnthropicClient(BaseClient):
    """Adapter for the Anthropic Messages API.

    ``max_tokens`` is mandatory for this vendor, so it is the one parameter
    intercepted: the caller's value wins, otherwise :data:`DEFAULT_MAX_TOKENS`.
    """

    provider_type = Provider.ANTHROPIC

    def build_headers(self) -> dict[str, str]:
        return self._with_extra_headers(
            {
                "x-api-key": self.config.api_key or "",
                "anthropic-version": ANTHROPIC_VERSION,
                "Content-Type": "application/json",
            }
        )

    def build_url(self, model: str) -> str:
        return f"{self.base_url}/messages"

    def build_payload(self, request: GenerationRequest, model: str) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": model,
            "messages": [{"role": "user", "content": request.prompt}],
            "max_tokens": request.parameters.get("max_tokens", DEFAULT_MAX_TOKENS),
        }
        payload.update(
            {key: value for key, value in request.parameters.items() if key != "max_tokens"}
        )
        if request.stop_sequences is not None:
            payload["stop_sequences"] = list(request.stop_sequences)
        if request.tools:
            payload["tools"] = [
                {
                    "name": tool.name,
                    "description": tool.description,
                    "input_schema": tool.parameters,
                }
                for tool in request.tools
            ]
        return payload

    def parse_response(self, data: dict[str, Any], model: str) -> GenerationResponse:
        blocks: list[dict[str, Any]] = data["content"]

        text = next(
            (block.get("text", "") for block in blocks if block.get("type", "text") == "text"),
            "",
        )
        tool_calls = [
            ToolCall(id=block["id"], name=block["name"], arguments=block.get("input") or {})
            for block in blocks
            if block.get("type") == "tool_use"
        ]

        metadata: dict[str, Any] = {}
        if data.get("usage") is not None:
            metadata["usage"] = data["usage"]
        if data.get("stop_reason") is not None:
            metadata["finish_reason"] = data["stop_reason"]

        return GenerationResponse(
            content=text,
            model=data.get("model") or model,
            provider=self.provider_type,
            metadata=metadata,
            tool_calls=tool_calls or None,
        )

    def _probe(self) -> None:
        self._transport.get_json(f"{self.base_url}/models", headers=self.build_headers())
