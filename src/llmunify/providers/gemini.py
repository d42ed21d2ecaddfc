"""Google Gemini ``generateContent`` adapter.

The API key travels as the ``key`` query parameter rather than a header.
Sampling options live in ``generationConfig`` instead of the top level of
the body, and stop strings are called ``stopSequences`` there.
"""

from typing import Any

from llmunify.providers.base import BaseClient
from llmunify.providers.errors import ProviderError
from llmunify.providers.models import GenerationRequest, GenerationResponse, ToolCall
from llmunify.providers.registry import Provider


class GeminiClient(BaseClient):
    provider_type = Provider.GEMINI

    def build_headers(self) -> dict[str, str]:
        return self._with_extra_headers({"Content-Type": "application/json"})

    def build_url(self, model: str) -> str:
        return f"{self.base_url}/models/{model}:generateContent"

    def _query_params(self) -> dict[str, str]:
        return {"key": self.config.api_key or ""}

    def build_payload(self, request: GenerationRequest, model: str) -> dict[str, Any]:
        payload: dict[str, Any] = {"contents": [{"parts": [{"text": request.prompt}]}]}

        generation_config: dict[str, Any] = dict(request.parameters)
        if request.stop_sequences is not None:
            generation_config["stopSequences"] = list(request.stop_sequences)
        if generation_config:
            payload["generationConfig"] = generation_config

        if request.tools:
            payload["tools"] = [
                {
                    "functionDeclarations": [
                        {
                            "name": tool.name,
                            "description": tool.description,
                            "parameters": tool.parameters,
                        }
                        for tool in request.tools
                    ]
                }
            ]
        return payload

    def parse_response(self, data: dict[str, Any], model: str) -> GenerationResponse:
        candidates = data.get("candidates") or []
        if not candidates:
            feedback = data.get("promptFeedback") or {}
            reason = feedback.get("blockReason", "no candidates returned")
            raise ProviderError(
                f"Gemini returned no candidates: {reason}",
                provider=self.provider_type.id,
            )

        candidate = candidates[0]
        parts: list[dict[str, Any]] = (candidate.get("content") or {}).get("parts") or []

        text = next((part["text"] for part in parts if "text" in part), "")
        # Gemini assigns no call ids; derive stable ones from name and position.
        tool_calls = [
            ToolCall(
                id=f"{part['functionCall']['name']}-{index}",
                name=part["functionCall"]["name"],
                arguments=part["functionCall"].get("args") or {},
            )
            for index, part in enumerate(parts)
            if "functionCall" in part
        ]

        metadata: dict[str, Any] = {}
        if data.get("usageMetadata") is not None:
            metadata["usage"] = data["usageMetadata"]
        if candidate.get("finishReason") is not None:
            metadata["finish_reason"] = candidate["finishReason"]

        return GenerationResponse(
            content=text,
            model=data.get("modelVersion") or model,
            provider=self.provider_type,
            metadata=metadata,
            tool_calls=tool_calls or None,
        )

    def _probe(self) -> None:
        self._transport.get_json(
            f"{self.base_url}/models",
            headers=self.build_headers(),
            params=self._query_params(),
        )
