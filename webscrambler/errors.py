"""Error definitions for the Web Scrambler."""

from __future__ import annotations


class WebScramblerError(Exception):
    """Base exception for all custom errors."""

    status_code = 500


class InputValidationError(WebScramblerError):
    """Raised when a request is missing fields or carries invalid values."""

    status_code = 400


class UpstreamFetchError(WebScramblerError):
    """Raised when the target page answers with a non-2xx status."""

    status_code = 400


class FetchTimeoutError(UpstreamFetchError):
    """Raised when the target page does not answer in time."""

    status_code = 408


class EmptyContentError(WebScramblerError):
    """Raised when extraction yields nothing usable for the chosen method."""

    status_code = 400


class ConfigurationError(WebScramblerError):
    """Raised when configuration sources cannot be read or validated."""


class SummaryProviderConfigurationError(WebScramblerError):
    """Raised when the summary provider is misconfigured."""


class SummaryProviderError(WebScramblerError):
    """Raised when the summary provider fails permanently."""
