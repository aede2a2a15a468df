"""Summary provider abstractions."""

from __future__ import annotations

import json
import sys
from abc import ABC, abstractmethod
from typing import Any

from .configuration import ScramblerConfig, validate_provider_settings
from .errors import (
    InputValidationError,
    SummaryProviderConfigurationError,
    SummaryProviderError,
)

MAX_SUMMARY_INPUT_LENGTH = 3000
SUMMARY_MAX_TOKENS = 200
GROQ_BASE_URL = "https://api.groq.com/openai/v1"

SUMMARY_PROMPT = (
    "Analyze and summarize the following website content. Provide a concise summary "
    "that captures the main topics, key information, and overall purpose of the "
    "content. Keep it under 150 words and focus on the most important points.\n\n"
    "Content to analyze:\n{content}"
)


class SummaryProvider(ABC):
    """Abstract adapter for summarization providers."""

    name: str = "abstract"

    @abstractmethod
    def summarize(self, text: str, *, model: str | None = None) -> str:
        """Return a short summary of ``text``."""


class EchoSummaryProvider(SummaryProvider):
    """A provider that returns the input text (useful for testing)."""

    name = "echo"

    def summarize(self, text: str, *, model: str | None = None) -> str:
        return text


class OpenAISummaryProvider(SummaryProvider):
    """Summary provider backed by an OpenAI-compatible chat completions API."""

    name = "openai"
    DEFAULT_MODEL = "gpt-4o-mini"

    def __init__(self, settings: ScramblerConfig, *, debug: bool = False) -> None:
        self.settings = settings
        self.debug = debug
        self._client, self._default_model = self._build_client()

    def _build_client(self) -> tuple[Any, str]:
        try:
            from openai import OpenAI  # type: ignore
        except ImportError as exc:  # pragma: no cover - import guard
            raise SummaryProviderConfigurationError(
                "OpenAI Python SDK not installed. Install with `pip install openai`."
            ) from exc

        return OpenAI(api_key=self.settings.OPENAI_API_KEY), self.DEFAULT_MODEL

    def summarize(self, text: str, *, model: str | None = None) -> str:
        prompt = SUMMARY_PROMPT.format(content=text)
        chosen_model = model or self.settings.SUMMARY_MODEL or self._default_model
        self._log_debug("provider.request.model", chosen_model)
        self._log_debug("provider.request.prompt", prompt)

        try:
            response = self._client.chat.completions.create(
                model=chosen_model,
                max_tokens=SUMMARY_MAX_TOKENS,
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as exc:  # pragma: no cover - network call
            raise SummaryProviderError(
                f"Summary service temporarily unavailable: {exc}"
            ) from exc

        summary = self._extract_content(response)
        self._log_debug("provider.response.summary", summary)
        return summary

    def _extract_content(self, response: Any) -> str:
        choices = getattr(response, "choices", None) or []
        for choice in choices:
            message = getattr(choice, "message", None)
            content = getattr(message, "content", None) if message is not None else None
            if content:
                return str(content).strip()
        raise SummaryProviderError("Summary provider response empty or unrecognised.")

    def _log_debug(self, label: str, payload: Any) -> None:
        """Emit structured debug information when enabled."""

        if not self.debug:
            return
        if isinstance(payload, (dict, list)):
            message = json.dumps(payload, ensure_ascii=False, indent=2)
        else:
            message = str(payload)
        print(f"[webscrambler][provider-debug] {label}:\n{message}", file=sys.stderr)


class GroqSummaryProvider(OpenAISummaryProvider):
    """Summary provider using Groq's OpenAI-compatible endpoint."""

    name = "groq"
    DEFAULT_MODEL = "llama-3.1-8b-instant"

    def _build_client(self) -> tuple[Any, str]:
        try:
            from openai import OpenAI  # type: ignore
        except ImportError as exc:  # pragma: no cover - import guard
            raise SummaryProviderConfigurationError(
                "OpenAI Python SDK not installed. Install with `pip install openai`."
            ) from exc

        client = OpenAI(api_key=self.settings.GROQ_API_KEY, base_url=GROQ_BASE_URL)
        return client, self.DEFAULT_MODEL


class AzureOpenAISummaryProvider(OpenAISummaryProvider):
    """Summary provider using an Azure OpenAI deployment."""

    name = "azure_openai"

    def _build_client(self) -> tuple[Any, str]:
        try:
            from openai import AzureOpenAI  # type: ignore
        except ImportError as exc:  # pragma: no cover - import guard
            raise SummaryProviderConfigurationError(
                "OpenAI Python SDK not installed. Install with `pip install openai`."
            ) from exc

        client = AzureOpenAI(
            api_key=self.settings.AZURE_OPENAI_API_KEY,
            api_version=self.settings.AZURE_OPENAI_API_VERSION,
            azure_endpoint=self.settings.AZURE_OPENAI_ENDPOINT,
        )
        return client, self.settings.AZURE_OPENAI_DEPLOYMENT_NAME  # type: ignore[return-value]


def build_provider(settings: ScramblerConfig, *, debug: bool = False) -> SummaryProvider:
    """Factory to create the provider selected by ``LLM_PROVIDER``."""

    name = settings.LLM_PROVIDER
    if name == "echo":
        return EchoSummaryProvider()

    validate_provider_settings(settings)
    if name == "openai":
        return OpenAISummaryProvider(settings, debug=debug)
    if name == "groq":
        return GroqSummaryProvider(settings, debug=debug)
    if name == "azure_openai":
        return AzureOpenAISummaryProvider(settings, debug=debug)
    raise SummaryProviderConfigurationError(f"Unknown summary provider '{name}'.")


def summarize_text(text: str, provider: SummaryProvider) -> str:
    """Summarize ``text`` after truncating it to the provider input limit."""

    if not isinstance(text, str) or not text.strip():
        raise InputValidationError("Text content is required")
    return provider.summarize(text[:MAX_SUMMARY_INPUT_LENGTH])
