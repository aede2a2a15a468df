"""Command line interface for the Web Scrambler."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from .configuration import get_settings
from .errors import ConfigurationError, WebScramblerError
from .service import ScrambleService
from .structures import ScrambleType

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="webscrambler",
        description="Fetch a webpage and show its content next to a scrambled copy.",
    )
    parser.add_argument(
        "url",
        nargs="?",
        help="Absolute http(s) URL of the page to scramble.",
    )
    parser.add_argument(
        "-t",
        "--type",
        dest="scramble_type",
        choices=ScrambleType.public_values(),
        default=ScrambleType.WORDS.value,
        help="Scrambling method (default: words).",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Also request a short AI summary of the extracted content.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as a JSON export document.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Fetch timeout in seconds (default: FETCH_TIMEOUT_SECONDS or 10).",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the HTTP API instead of a single scramble.",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Bind address for --serve.")
    parser.add_argument("--port", type=int, default=8000, help="Port for --serve.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show detailed progress information.",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def build_export(result: Dict[str, str], summary: str | None) -> Dict[str, Any]:
    """Shape a result the way the web UI exports it."""

    export: Dict[str, Any] = {
        "url": result["url"],
        "method": result["scrambleType"],
        "date": datetime.now(timezone.utc).isoformat(),
        "originalText": result["originalText"],
        "scrambledText": result["scrambledText"],
        "aiSummary": summary,
    }
    return export


def print_result(result: Dict[str, str], summary: str | None) -> None:
    """Output the original and scrambled content one after the other."""

    print(f"URL:    {result['url']}")
    print(f"Method: {result['scrambleType'].capitalize()}")
    print("\n--- Original ---")
    print(result["originalText"])
    print("\n--- Scrambled ---")
    print(result["scrambledText"])
    if summary:
        print("\n--- AI summary ---")
        print(summary)


def execute_scramble(
    *,
    service: ScrambleService,
    url: str,
    scramble_type: str,
    with_summary: bool,
) -> tuple[int, Dict[str, str] | None, str | None, str | None]:
    """Run one scramble and return the exit code, result, summary and message."""

    try:
        result = service.scramble_url(url, scramble_type)
    except WebScramblerError as exc:
        return 1, None, None, str(exc)
    except KeyboardInterrupt:
        return 2, None, None, "Scramble interrupted by user."
    except Exception as exc:  # pragma: no cover - defensive catch
        logging.getLogger(__name__).exception("Unexpected failure")
        return 1, None, None, f"Failed to process request: {exc}"

    summary = None
    message = None
    if with_summary:
        try:
            summary = service.summarize(result["originalText"])
        except WebScramblerError as exc:
            message = f"Failed to generate AI summary: {exc}"
    return 0, result, summary, message


def serve(host: str, port: int) -> int:
    import uvicorn

    uvicorn.run("webscrambler.api:app", host=host, port=port, log_level="info")
    return 0


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    configure_logging(args.verbose)

    if args.serve:
        return serve(args.host, args.port)

    if args.url is None:
        parser.error("the following arguments are required: url")

    try:
        settings = get_settings()
    except ConfigurationError as exc:
        print(exc)
        return 1
    if args.timeout is not None:
        settings = settings.model_copy(update={"FETCH_TIMEOUT_SECONDS": args.timeout})

    exit_code, result, summary, message = execute_scramble(
        service=ScrambleService(settings=settings),
        url=args.url,
        scramble_type=args.scramble_type,
        with_summary=args.summary,
    )

    if message:
        print(message, file=sys.stderr if result else sys.stdout)
    if result:
        if args.json:
            print(json.dumps(build_export(result, summary), ensure_ascii=False, indent=2))
        else:
            print_result(result, summary)
    return exit_code


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
