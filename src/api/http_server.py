"""FastAPI HTTP server setup."""

import json
import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.types import ASGIApp

from config import Settings
from .endpoints import create_api

logger = logging.getLogger(__name__)


async def log_request(request: Request, call_next):
    """Log every inbound request before it is handled."""
    logger.info(f"Request {request.method} {request.url.path}")
    return await call_next(request)


def _is_json(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def _too_large():
    return JSONResponse(status_code=413, content={"detail": "Request body too large"})


def _malformed():
    return JSONResponse(status_code=400, content={"detail": "Malformed JSON body"})


async def parse_json_body(request: Request, call_next):
    """Decode JSON request bodies into request.state.json_body.

    Only objects and arrays are accepted at the top level. Bodies larger
    than ``max_body_size`` are refused before being decoded.
    """
    request.state.json_body = None

    if _is_json(request.headers.get("content-type", "")):
        limit = request.app.state.settings.max_body_size

        declared = request.headers.get("content-length")
        if declared and declared.isdigit() and int(declared) > limit:
            return _too_large()

        body = await request.body()
        if len(body) > limit:
            return _too_large()

        if body:
            try:
                parsed = json.loads(body)
            except (ValueError, RecursionError) as e:
                logger.warning(f"Rejecting malformed JSON body on {request.url.path}: {e}")
                return _malformed()
            if not isinstance(parsed, (dict, list)):
                logger.warning(f"Rejecting non-container JSON body on {request.url.path}")
                return _malformed()
            request.state.json_body = parsed

    return await call_next(request)


# Outermost first
REQUEST_STEPS = (log_request, parse_json_body)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle, including the mounted todos app's own."""
    logger.info("Starting Hellowed server...")

    async with AsyncExitStack() as stack:
        todos = app.state.todos
        router = getattr(todos, "router", None)
        if router is not None and hasattr(router, "lifespan_context"):
            await stack.enter_async_context(router.lifespan_context(todos))
        yield

    logger.info("Hellowed server shut down")


def create_app(settings: Settings, todos: Optional[ASGIApp] = None) -> FastAPI:
    """Create the application for the given settings and todos handler."""
    app = FastAPI(
        title="Hellowed",
        description="A tiny greeting service",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.todos = todos

    # Starlette runs the last registered middleware first
    for step in reversed(REQUEST_STEPS):
        app.middleware("http")(step)

    app.mount("/api", create_api(todos), name="api")

    @app.api_route("/", methods=["GET", "HEAD"], response_class=PlainTextResponse)
    async def root():
        """Root endpoint."""
        return "Hello World"

    @app.api_route("/json", methods=["GET", "HEAD"])
    async def hello_json():
        return {"hello": "world", "foo": "bar"}

    return app
