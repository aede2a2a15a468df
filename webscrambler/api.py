"""HTTP surface exposing the scramble and summary endpoints."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from .configuration import get_settings
from .errors import WebScramblerError
from .service import ScrambleService

logger = logging.getLogger(__name__)


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        logger.warning("Request body is not valid JSON")
        return None


def create_app(service: Optional[ScrambleService] = None) -> FastAPI:
    """Build the application; the service is created on first use when omitted."""

    app = FastAPI(title="Web Scrambler", version="0.1.0")
    state: dict[str, ScrambleService] = {}
    if service is not None:
        state["service"] = service

    def get_service() -> ScrambleService:
        if "service" not in state:
            state["service"] = ScrambleService(settings=get_settings())
        return state["service"]

    @app.exception_handler(WebScramblerError)
    async def scrambler_error_handler(request: Request, exc: WebScramblerError) -> JSONResponse:
        logger.error("Request failed: %s", exc)
        return JSONResponse({"error": str(exc)}, status_code=exc.status_code)

    @app.post("/api/scramble")
    async def scramble_endpoint(request: Request) -> JSONResponse:
        payload = await _read_json(request)
        status, body = await run_in_threadpool(get_service().handle_scramble, payload)
        return JSONResponse(body, status_code=status)

    @app.post("/api/summary")
    async def summary_endpoint(request: Request) -> JSONResponse:
        payload = await _read_json(request)
        status, body = await run_in_threadpool(get_service().handle_summary, payload)
        return JSONResponse(body, status_code=status)

    return app


app = create_app()
