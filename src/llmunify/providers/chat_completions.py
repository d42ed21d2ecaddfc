"""Shared behaviour for vendors speaking the ``/chat/completions`` dialect.

OpenAI and Mistral use the same response envelope::

    {
      "model": "...",
      "choices": [{"message": {"content": "...", "tool_calls": [...]},
                   "finish_reason": "stop"}],
      "usage": {"prompt_tokens": 9, "completion_tokens": 1, "total_tokens": 10}
    }

They differ in authentication, endpoint layout and message content shape,
which the concrete subclasses provide.
"""

import json
from typing import Any

from llmunify.providers.base import BaseClient
from llmunify.providers.models import GenerationRequest, GenerationResponse, ToolCall


class ChatCompletionsClient(BaseClient):
    """Base class for OpenAI-style chat-completion vendors."""

    def build_payload(self, request: GenerationRequest, model: str) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": model,
            "messages": [{"role": "user", "content": self._user_content(request)}],
        }
        # Forwarded verbatim; the vendor validates ranges and types.
        payload.update(request.parameters)
        if request.stop_sequences is not None:
            payload["stop"] = list(request.stop_sequences)
        if request.tools:
            payload["tools"] = self._function_tools(request.tools)
        return payload

    def parse_response(self, data: dict[str, Any], model: str) -> GenerationResponse:
        choice = data["choices"][0]
        message = choice["message"]

        metadata: dict[str, Any] = {}
        if data.get("usage") is not None:
            metadata["usage"] = data["usage"]
        if choice.get("finish_reason") is not None:
            metadata["finish_reason"] = choice["finish_reason"]

        return GenerationResponse(
            content=message.get("content") or "",
            model=data.get("model") or model,
            provider=self.provider_type,
            metadata=metadata,
            tool_calls=self._parse_tool_calls(message.get("tool_calls")),
        )

    def _user_content(self, request: GenerationRequest) -> Any:
        return request.prompt

    @staticmethod
    def _parse_tool_calls(raw_calls: list[dict[str, Any]] | None) -> list[ToolCall] | None:
        if not raw_calls:
            return None

        calls: list[ToolCall] = []
        for raw in raw_calls:
            function = raw["function"]
            arguments = function.get("arguments") or {}
            # OpenAI sends a JSON string; Mistral may send an object.
            if isinstance(arguments, str):
                arguments = json.loads(arguments) if arguments.strip() else {}
            if not isinstance(arguments, dict):
                raise ValueError(
                    f"Tool call {function['name']!r} arguments must be a JSON object, "
                    f"got {type(arguments).__name__}"
                )
            calls.append(ToolCall(id=raw.get("id", ""), name=function["name"], arguments=arguments))
        return calls
