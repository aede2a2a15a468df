import pytest

from webscrambler.configuration import ScramblerConfig
from webscrambler.errors import FetchTimeoutError, UpstreamFetchError
from webscrambler.fetcher import TIMEOUT_MESSAGE
from webscrambler.providers import EchoSummaryProvider, SummaryProvider
from webscrambler.scrambler import EMPTY_CONTENT_MESSAGE, Scrambler
from webscrambler.service import ScrambleService

PAGE = """
<html><head><script>track()</script></head>
<body>
  <p>Hello, world! Bye.</p>
  <a href="https://a.example">First</a>
  <a href="https://b.example">Second</a>
</body></html>
"""


class RecordingFetcher:
    def __init__(self, markup=PAGE, error=None):
        self.markup = markup
        self.error = error
        self.calls = []

    def __call__(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.markup


class FailingProvider(SummaryProvider):
    def summarize(self, text, *, model=None):
        raise RuntimeError("provider down")


@pytest.fixture
def fetcher():
    return RecordingFetcher()


@pytest.fixture
def service(fetcher, first_index_rng):
    return ScrambleService(
        settings=ScramblerConfig(LLM_PROVIDER="echo", FETCH_TIMEOUT_SECONDS=4),
        fetcher=fetcher,
        scrambler=Scrambler(rng=first_index_rng),
        provider=EchoSummaryProvider(),
    )


def test_words_request_returns_full_payload(service, fetcher):
    status, body = service.handle_scramble({"url": "https://example.com", "scrambleType": "words"})

    assert status == 200
    assert body["url"] == "https://example.com"
    assert body["scrambleType"] == "words"
    assert body["originalText"] == "Hello, world! Bye. First Second"
    assert sorted(body["scrambledText"].split(" ")) == sorted(body["originalText"].split(" "))
    assert "track" not in body["originalText"]
    assert fetcher.calls[0][1]["timeout"] == 4


def test_links_request_renders_references(service):
    status, body = service.handle_scramble({"url": "https://example.com", "scrambleType": "links"})

    assert status == 200
    assert body["originalText"] == "First: https://a.example\nSecond: https://b.example"
    assert body["scrambledText"] == "First: https://b.example\nSecond: https://a.example"


@pytest.mark.parametrize(
    "payload",
    [None, [], {}, {"url": "https://example.com"}, {"scrambleType": "words"}, {"url": "", "scrambleType": "words"}],
)
def test_missing_fields_are_rejected(service, payload):
    assert service.handle_scramble(payload) == (400, {"error": "URL and scramble type are required"})


def test_invalid_url_is_rejected_without_fetching(service, fetcher):
    status, body = service.handle_scramble({"url": "file:///etc/passwd", "scrambleType": "words"})
    assert (status, body) == (400, {"error": "Invalid URL format"})
    assert fetcher.calls == []


@pytest.mark.parametrize("scramble_type", ["shuffle", "none", "WORDS"])
def test_unknown_scramble_type_is_rejected(service, scramble_type):
    status, body = service.handle_scramble({"url": "https://example.com", "scrambleType": scramble_type})
    assert (status, body) == (400, {"error": "Invalid scramble type"})


def test_upstream_status_maps_to_400(service, fetcher):
    fetcher.error = UpstreamFetchError("Failed to fetch content: 503 Service Unavailable")
    status, body = service.handle_scramble({"url": "https://example.com", "scrambleType": "words"})
    assert (status, body) == (400, {"error": "Failed to fetch content: 503 Service Unavailable"})


def test_timeout_maps_to_408(service, fetcher):
    fetcher.error = FetchTimeoutError(TIMEOUT_MESSAGE)
    status, body = service.handle_scramble({"url": "https://example.com", "scrambleType": "words"})
    assert (status, body) == (408, {"error": TIMEOUT_MESSAGE})


def test_empty_page_maps_to_empty_content(service, fetcher):
    fetcher.markup = "<html><body><script>only()</script></body></html>"
    status, body = service.handle_scramble({"url": "https://example.com", "scrambleType": "sentences"})
    assert (status, body) == (400, {"error": EMPTY_CONTENT_MESSAGE})


def test_unexpected_failure_maps_to_500(service, fetcher):
    fetcher.error = RuntimeError("boom")
    status, body = service.handle_scramble({"url": "https://example.com", "scrambleType": "words"})
    assert (status, body) == (500, {"error": "Failed to process request: boom"})


def test_summary_truncates_input(service):
    status, body = service.handle_summary({"text": "x" * 5000})
    assert status == 200
    assert body["summary"] == "x" * 3000


@pytest.mark.parametrize("payload", [None, {}, {"text": ""}, {"text": "   "}, {"text": 12}])
def test_summary_requires_text(service, payload):
    assert service.handle_summary(payload) == (400, {"error": "Text content is required"})


def test_summary_provider_failure_is_generic(fetcher):
    service = ScrambleService(
        settings=ScramblerConfig(LLM_PROVIDER="echo"),
        fetcher=fetcher,
        provider=FailingProvider(),
    )
    assert service.handle_summary({"text": "hello"}) == (500, {"error": "Failed to generate AI summary"})


def test_provider_is_built_lazily_from_settings(fetcher):
    service = ScrambleService(settings=ScramblerConfig(LLM_PROVIDER="echo"), fetcher=fetcher)
    assert isinstance(service.provider, EchoSummaryProvider)


def test_missing_credentials_only_fail_the_summary(fetcher):
    service = ScrambleService(
        settings=ScramblerConfig(LLM_PROVIDER="openai", OPENAI_API_KEY=None), fetcher=fetcher
    )
    status, _ = service.handle_scramble({"url": "https://example.com", "scrambleType": "words"})
    assert status == 200
    assert service.handle_summary({"text": "hello"}) == (500, {"error": "Failed to generate AI summary"})
