"""Page retrieval for the request boundary."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

import requests
from bs4.dammit import EncodingDetector, UnicodeDammit

from .configuration import DEFAULT_USER_AGENT
from .errors import FetchTimeoutError, InputValidationError, UpstreamFetchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
TIMEOUT_MESSAGE = "Request timeout - the website took too long to respond"


def is_valid_url(url: str) -> bool:
    """Accept only absolute http(s) URLs."""

    if not isinstance(url, str):
        return False
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def decode_markup(response: requests.Response) -> str:
    """Decode a response body, preferring the charset the page itself declares.

    Without a charset in the Content-Type header requests assumes ISO-8859-1
    for text/html, so the bytes go through UnicodeDammit instead, trying the
    <meta> declaration and then UTF-8.
    """

    content_type = response.headers.get("Content-Type", "")
    if "charset=" in content_type.lower():
        return response.text

    content = response.content or b""
    declared = EncodingDetector.find_declared_encoding(content, is_html=True)
    encodings = [declared, "utf-8"] if declared else ["utf-8"]
    dammit = UnicodeDammit(content, known_definite_encodings=encodings, is_html=True)
    if dammit.unicode_markup is None:
        return response.text
    return dammit.unicode_markup


def validate_url(url: str) -> None:
    if not is_valid_url(url):
        raise InputValidationError("Invalid URL format")


def fetch_markup(
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
    session: requests.Session | None = None,
) -> str:
    """Fetch a page and return its markup.

    Raises:
        InputValidationError: If the URL is not an absolute http(s) URL.
        FetchTimeoutError: If the server does not answer within ``timeout``.
        UpstreamFetchError: If the server answers with a non-2xx status.
    """
    validate_url(url)
    logger.info("Fetching content from: %s", url)

    http = session or requests
    try:
        response = http.get(url, headers={"User-Agent": user_agent}, timeout=timeout)
    except requests.Timeout as exc:
        logger.warning("Fetch timed out after %ss: %s", timeout, url)
        raise FetchTimeoutError(TIMEOUT_MESSAGE) from exc

    if not response.ok:
        logger.warning("Fetch failed with status: %s", response.status_code)
        raise UpstreamFetchError(
            f"Failed to fetch content: {response.status_code} {response.reason or ''}".rstrip()
        )

    markup = decode_markup(response)
    logger.info("HTML content length: %d", len(markup))
    return markup
