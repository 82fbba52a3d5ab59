"""FastAPI app for product copy generation.

Endpoints:
- GET /health
- POST /api/generate  { "productInfo": "...", "template": "...", ... }
"""
from __future__ import annotations
import json
import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.concurrency import run_in_threadpool

from product_copy import __version__
from product_copy.common.config import Settings
from product_copy.common.logging_setup import setup_logging
from product_copy.serve.handler import GenerateHandler, HandlerResult

LOGGER = logging.getLogger("product_copy.serve.app")

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def _decode_body(raw: bytes) -> Any:
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        LOGGER.info("Request body is not valid JSON; treating it as empty")
        return {}


def _render(result: HandlerResult) -> Response:
    if result.is_json:
        return JSONResponse(
            result.body,
            status_code=result.status,
            headers=result.headers,
            media_type="application/json; charset=utf-8",
        )
    return PlainTextResponse(str(result.body), status_code=result.status, headers=result.headers)


def create_app(settings: Settings | None = None, client: Any | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Runtime settings; resolved from YAML/env when omitted.
        client: Generation client override (used by tests).
    """
    settings = settings or Settings.load()
    setup_logging(settings.log_level)
    handler = GenerateHandler(settings, client=client)

    app = FastAPI(title="Product Copy API", version=__version__)
    app.state.settings = settings
    app.state.handler = handler

    if not settings.has_api_key:
        LOGGER.warning("OPENAI_API_KEY is not set; /api/generate will answer 500")

    @app.get("/health")
    def health() -> dict[str, str]:
        return {
            "status": "ok",
            "model": settings.default_model,
            "api_key": "configured" if settings.has_api_key else "missing",
        }

    @app.api_route("/api/generate", methods=ALL_METHODS)
    async def generate(request: Request) -> Response:
        payload = _decode_body(await request.body()) if request.method == "POST" else {}
        result = await run_in_threadpool(handler.handle, request.method, payload)
        return _render(result)

    return app

