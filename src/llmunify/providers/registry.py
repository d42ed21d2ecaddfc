"""The closed set of supported vendors and their per-vendor defaults."""

from dataclasses import dataclass
from enum import Enum


class Provider(Enum):
    """Supported text-generation vendors.

    Each member's value is its stable identifier; :attr:`display_name` is the
    human-readable name shown by the CLI.
    """

    OPENAI = ("openai", "OpenAI")
    ANTHROPIC = ("anthropic", "Anthropic")
    GEMINI = ("gemini", "Google Gemini")
    MISTRAL = ("mistral", "Mistral AI")

    def __init__(self, identifier: str, display_name: str) -> None:
        self.id = identifier
        self.display_name = display_name

    def __str__(self) -> str:
        return self.id

    @classmethod
    def from_id(cls, value: str) -> "Provider":
        """Resolve a case-insensitive identifier such as ``"openai"``.

        Raises:
            ValueError: If *value* names no supported provider.
        """
        wanted = value.strip().lower()
        for provider in cls:
            if provider.id == wanted:
                return provider
        supported = ", ".join(p.id for p in cls)
        raise ValueError(f"Unknown provider: {value!r}. Supported providers: {supported}")


@dataclass(frozen=True)
class ProviderDefaults:
    base_url: str
    model: str


PROVIDER_DEFAULTS: dict[Provider, ProviderDefaults] = {
    Provider.OPENAI: ProviderDefaults(
        base_url="https://api.openai.com/v1",
        model="gpt-3.5-turbo",
    ),
    Provider.ANTHROPIC: ProviderDefaults(
        base_url="https://api.anthropic.com/v1",
        model="claude-3-haiku-20240307",
    ),
    Provider.GEMINI: ProviderDefaults(
        base_url="https://generativelanguage.googleapis.com/v1beta",
        model="gemini-pro",
    ),
    Provider.MISTRAL: ProviderDefaults(
        base_url="https://api.mistral.ai/v1",
        model="mistral-tiny",
    ),
}
