"""Mistral AI chat-completions adapter."""

from llmunify.providers.chat_completions import ChatCompletionsClient
from llmunify.providers.registry import Provider


class MistralClient(ChatCompletionsClient):
    """Mistral's API mirrors OpenAI's chat-completions envelope.

    The user message carries the prompt as a plain string; inline images are
    not sent.
    """

    provider_type = Provider.MISTRAL

    def build_headers(self) -> dict[str, str]:
        return self._with_extra_headers(
            {
                "Authorization": f"Bearer {self.config.api_key or ''}",
                "Content-Type": "application/json",
            }
        )

    def build_url(self, model: str) -> str:
        return f"{self.base_url}/chat/completions"

    def _probe(self) -> None:
        self._transport.get_json(f"{self.base_url}/models", headers=self.build_headers())
