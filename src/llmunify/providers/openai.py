"""OpenAI chat-completions adapter.

Supports two deployment shapes:

* the public API: ``{base}/chat/completions`` with a bearer token;
* a managed (Azure-style) deployment, selected explicitly with
  :meth:`ClientConfig.with_managed_deployment`: ``base_url`` is the full
  deployment endpoint and the key travels in an ``api-key`` header.

This is the only adapter that forwards an inline image, as an ``image_url``
content part carrying a base64 data URL.
"""

from typing import Any

from llmunify.providers.chat_completions import ChatCompletionsClient
from llmunify.providers.models import GenerationRequest
from llmunify.providers.registry import Provider


class OpenAIClient(ChatCompletionsClient):
    provider_type = Provider.OPENAI
    supports_images = True

    def build_headers(self) -> dict[str, str]:
        if self.config.managed_deployment:
            headers = {"api-key": self.config.api_key or ""}
        else:
            headers = {"Authorization": f"Bearer {self.config.api_key or ''}"}
        headers["Content-Type"] = "application/json"
        return self._with_extra_headers(headers)

    def build_url(self, model: str) -> str:
        if self.config.managed_deployment:
            return self.base_url
        return f"{self.base_url}/chat/completions"

    def _user_content(self, request: GenerationRequest) -> list[dict[str, Any]]:
        parts: list[dict[str, Any]] = [{"type": "text", "text": request.prompt}]
        if request.image is not None:
            parts.append(
                {"type": "image_url", "image_url": {"url": request.image.as_data_url()}}
            )
        return parts

    def _probe(self) -> None:
        if self.config.managed_deployment:
            # Deployments expose no model listing; a one-token completion is the cheapest call.
            self._transport.post_json(
                self.base_url,
                headers=self.build_headers(),
                body={"messages": [{"role": "user", "content": "Hello"}], "max_tokens": 1},
            )
            return
        self._transport.get_json(f"{self.base_url}/models", headers=self.build_headers())
