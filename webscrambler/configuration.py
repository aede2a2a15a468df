"""Layered configuration loader for the Web Scrambler."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal, Mapping, Sequence

import yaml
from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import ConfigurationError, SummaryProviderConfigurationError

CONFIG_FILE_NAME = "config.yaml"
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; WebScrambler/1.0)"


class ScramblerConfig(BaseModel):
    """Schema describing all supported configuration options."""

    model_config = ConfigDict(frozen=True)

    LLM_PROVIDER: Literal["openai", "azure_openai", "groq", "echo"] = Field(
        default="openai",
        description="Large language model provider used for summaries.",
    )
    OPENAI_API_KEY: str | None = Field(default=None, repr=False)
    AZURE_OPENAI_API_KEY: str | None = Field(default=None, repr=False)
    AZURE_OPENAI_ENDPOINT: str | None = None
    AZURE_OPENAI_API_VERSION: str | None = None
    AZURE_OPENAI_DEPLOYMENT_NAME: str | None = None
    GROQ_API_KEY: str | None = Field(default=None, repr=False)
    SUMMARY_MODEL: str | None = None
    FETCH_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)
    FETCH_USER_AGENT: str = DEFAULT_USER_AGENT
    WEBSCRAMBLER_PROVIDER_DEBUG: bool = False

    @model_validator(mode="before")
    @classmethod
    def _normalise_provider(cls, data: Any) -> Any:
        if isinstance(data, dict):
            raw_value = data.get("LLM_PROVIDER")
            if isinstance(raw_value, str):
                normalized = raw_value.strip().lower().replace("-", "_")
                synonyms = {
                    "azure_open_ai": "azure_openai",
                    "azureopenai": "azure_openai",
                    "mock": "echo",
                    "noop": "echo",
                }
                normalized = synonyms.get(normalized, normalized)
                if normalized not in {"openai", "azure_openai", "groq", "echo"}:
                    normalized = "openai"
                data["LLM_PROVIDER"] = normalized
        return data


@lru_cache(maxsize=1)
def _load_settings(app_dir: Path | None = None) -> ScramblerConfig:
    """Load configuration layers once and cache the validated model."""

    base_dir = app_dir or Path.cwd()
    combined: dict[str, Any] = {}
    combined.update(_load_yaml_file(base_dir / CONFIG_FILE_NAME))
    _merge_env_sources(combined, app_dir=base_dir)

    try:
        return ScramblerConfig.model_validate(combined)
    except ValidationError as exc:
        raise ConfigurationError(_format_validation_errors(exc.errors())) from exc


def _load_yaml_file(path: Path) -> dict[str, Any]:
    allowed = set(ScramblerConfig.model_fields)
    if not path.exists():
        return {}
    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(
            f"Configuration file {path} could not be read: {exc}"
        ) from exc
    if parsed is None:
        return {}
    if not isinstance(parsed, Mapping):
        raise ConfigurationError(
            f"Invalid configuration file {path}: expected a mapping at the root."
        )
    return {key: value for key, value in parsed.items() if key in allowed}


def _merge_env_sources(target: dict[str, Any], *, app_dir: Path) -> None:
    """Merge .env and process environment variables into the target mapping."""

    allowed = set(ScramblerConfig.model_fields)

    def merge_values(values: Mapping[str, str | None]) -> None:
        for key, value in sorted(values.items()):
            if value is None or key not in allowed:
                continue
            target[key] = value

    dotenv_path = app_dir / ".env"
    if dotenv_path.exists():
        merge_values(dotenv_values(dotenv_path))

    merge_values({k: v for k, v in os.environ.items() if isinstance(v, str)})


def validate_provider_settings(settings: ScramblerConfig) -> None:
    """Check that the selected summary provider has its credentials."""

    provider = settings.LLM_PROVIDER
    errors: list[str] = []

    if provider == "openai":
        if not settings.OPENAI_API_KEY:
            errors.append("OPENAI_API_KEY is required when LLM_PROVIDER is 'openai'.")
    elif provider == "groq":
        if not settings.GROQ_API_KEY:
            errors.append("GROQ_API_KEY is required when LLM_PROVIDER is 'groq'.")
    elif provider == "azure_openai":
        missing = [
            name
            for name, value in {
                "AZURE_OPENAI_API_KEY": settings.AZURE_OPENAI_API_KEY,
                "AZURE_OPENAI_ENDPOINT": settings.AZURE_OPENAI_ENDPOINT,
                "AZURE_OPENAI_API_VERSION": settings.AZURE_OPENAI_API_VERSION,
                "AZURE_OPENAI_DEPLOYMENT_NAME": settings.AZURE_OPENAI_DEPLOYMENT_NAME,
            }.items()
            if not value
        ]
        if missing:
            errors.append(
                "The following Azure OpenAI settings must be provided when "
                f"LLM_PROVIDER is 'azure_openai': {', '.join(missing)}."
            )

    if errors:
        bullet_list = "\n".join(f"- {message}" for message in errors)
        raise SummaryProviderConfigurationError(
            "Configuration validation errors detected:\n" + bullet_list
        )


def _format_validation_errors(entries: Sequence[Mapping[str, Any]]) -> str:
    details: list[str] = []
    for entry in entries:
        path = entry.get("loc") or []
        location = ".".join(str(part) for part in path if part not in {None, ""})
        message = str(entry.get("msg") or "Invalid value")
        prefix = f"{location}: " if location else ""
        details.append(f"- {prefix}{message}")
    return "Configuration validation errors detected:\n" + "\n".join(details)


def get_settings(app_dir: Path | None = None) -> ScramblerConfig:
    """Return the validated, cached configuration."""

    return _load_settings(app_dir=app_dir)


def clear_settings_cache() -> None:
    _load_settings.cache_clear()
