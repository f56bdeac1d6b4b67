"""Static LLM provider capability tables.

These tables ship with the validator; changing them requires a release,
not a runtime write.
"""
from __future__ import annotations

from dataclasses import dataclass

SUPPORTED_PROVIDERS: tuple[str, ...] = ("openai", "anthropic", "google", "local")

# Output token ceiling for any model without an explicit entry below.
DEFAULT_MAX_OUTPUT_TOKENS: int = 2048


@dataclass(frozen=True)
class ProviderCapabilities:
    """Constraints a provider places on preference values.

    Attributes
    ----------
    models:
        Allowed model identifiers.  ``None`` means any non-empty name.
    temperature_range:
        Closed ``(min, max)`` interval for the sampling temperature.
    max_output_tokens:
        Per-model output token ceiling.
    default_model:
        Model assumed when a preference set names none.
    """

    models: frozenset[str] | None
    temperature_range: tuple[float, float]
    max_output_tokens: dict[str, int]
    default_model: str

    def token_ceiling(self, model: str) -> int:
        """Return the output token ceiling for *model*.

        Models without an entry, including non-string names, get
        :data:`DEFAULT_MAX_OUTPUT_TOKENS`.
        """
        if not isinstance(model, str):
            return DEFAULT_MAX_OUTPUT_TOKENS
        return self.max_output_tokens.get(model, DEFAULT_MAX_OUTPUT_TOKENS)


PROVIDER_CAPABILITIES: dict[str, ProviderCapabilities] = {
    "openai": ProviderCapabilities(
        models=frozenset(
            ["gpt-4", "gpt-4-turbo", "gpt-4o", "gpt-4o-mini", "gpt-3.5-turbo"]
        ),
        temperature_range=(0.0, 2.0),
        max_output_tokens={
            "gpt-4": 4096,
            "gpt-4-turbo": 4096,
            "gpt-4o": 4096,
        },
        default_model="gpt-4",
    ),
    "anthropic": ProviderCapabilities(
        models=frozenset(
            [
                "claude-3-5-sonnet-20241022",
                "claude-3-5-haiku-20241022",
                "claude-3-opus-20240229",
                "claude-3-sonnet-20240229",
                "claude-3-haiku-20240307",
            ]
        ),
        temperature_range=(0.0, 1.0),
        max_output_tokens={
            "claude-3-5-sonnet-20241022": 8192,
            "claude-3-5-haiku-20241022": 8192,
        },
        default_model="claude-3-5-sonnet-20241022",
    ),
    "google": ProviderCapabilities(
        models=frozenset(["gemini-1.5-pro", "gemini-1.5-flash", "gemini-1.0-pro"]),
        temperature_range=(0.0, 2.0),
        max_output_tokens={
            "gemini-1.5-pro": 8192,
        },
        default_model="gemini-1.5-pro",
    ),
    "local": ProviderCapabilities(
        models=None,
        temperature_range=(0.0, 2.0),
        max_output_tokens={},
        default_model="local",
    ),
}


def get_capabilities(provider: object) -> ProviderCapabilities | None:
    """Return the capability table for *provider*, or None if unknown.

    Anything that is not a string is unknown.
    """
    if not isinstance(provider, str):
        return None
    return PROVIDER_CAPABILITIES.get(provider)
