"""Request handling for the scramble and summary boundaries."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from .configuration import ScramblerConfig
from .errors import InputValidationError, WebScramblerError
from .extractor import extract_plain_text
from .fetcher import fetch_markup, validate_url
from .providers import SummaryProvider, build_provider, summarize_text
from .scrambler import Scrambler
from .structures import ScrambleType

logger = logging.getLogger(__name__)

Response = Tuple[int, Dict[str, Any]]
Fetcher = Callable[..., str]


class ScrambleService:
    """Validates requests, fetches pages and packages scramble results."""

    def __init__(
        self,
        *,
        settings: ScramblerConfig,
        fetcher: Fetcher = fetch_markup,
        scrambler: Optional[Scrambler] = None,
        provider: Optional[SummaryProvider] = None,
    ) -> None:
        self.settings = settings
        self.fetcher = fetcher
        self.scrambler = scrambler or Scrambler()
        self._provider = provider

    @property
    def provider(self) -> SummaryProvider:
        if self._provider is None:
            self._provider = build_provider(
                self.settings, debug=self.settings.WEBSCRAMBLER_PROVIDER_DEBUG
            )
        return self._provider

    def scramble_url(self, url: str, scramble_type: str) -> Dict[str, str]:
        """Fetch ``url`` and return the success payload.

        Raises WebScramblerError subclasses for every reportable failure.
        """

        if not url or not scramble_type:
            raise InputValidationError("URL and scramble type are required")
        validate_url(url)
        if scramble_type not in ScrambleType.public_values():
            raise InputValidationError("Invalid scramble type")

        markup = self.fetcher(
            url,
            timeout=self.settings.FETCH_TIMEOUT_SECONDS,
            user_agent=self.settings.FETCH_USER_AGENT,
        )
        plain_text = extract_plain_text(markup)
        logger.info("Extracted text length: %d", len(plain_text))

        result = self.scrambler.scramble(markup, plain_text, ScrambleType(scramble_type))
        logger.info("Content scrambled using method: %s", scramble_type)
        return {
            "originalText": result.original_text,
            "scrambledText": result.scrambled_text,
            "url": url,
            "scrambleType": scramble_type,
        }

    def handle_scramble(self, payload: Any) -> Response:
        """Turn a scramble request body into a status code and JSON body."""

        if not isinstance(payload, dict):
            return 400, {"error": "URL and scramble type are required"}
        try:
            return 200, self.scramble_url(payload.get("url"), payload.get("scrambleType"))
        except WebScramblerError as exc:
            if exc.status_code >= 500:
                logger.exception("API error")
                return exc.status_code, {"error": f"Failed to process request: {exc}"}
            return exc.status_code, {"error": str(exc)}
        except Exception as exc:
            logger.exception("API error")
            return 500, {"error": f"Failed to process request: {exc}"}

    def summarize(self, text: str) -> str:
        return summarize_text(text, self.provider)

    def handle_summary(self, payload: Any) -> Response:
        """Turn a summary request body into a status code and JSON body."""

        text = payload.get("text") if isinstance(payload, dict) else None
        try:
            return 200, {"summary": self.summarize(text)}
        except InputValidationError as exc:
            return 400, {"error": str(exc)}
        except Exception:
            logger.exception("AI Summary error")
            return 500, {"error": "Failed to generate AI summary"}
