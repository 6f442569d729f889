"""API sub-application mounted under /api."""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)


class PrefixRoot:
    """Hand a request for the bare mount prefix to the mounted app as its "/"."""

    def __init__(self, prefix: str, app: ASGIApp):
        self.prefix = prefix
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        scope = dict(scope)
        scope["root_path"] = scope.get("root_path", "") + self.prefix
        scope["path"] = scope["path"] + "/"
        await self.app(scope, receive, send)


def create_api(todos: Optional[ASGIApp] = None) -> FastAPI:
    """Create the /api application, delegating /todos to the given ASGI app."""
    api = FastAPI(
        title="Hellowed API",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @api.api_route("/", methods=["GET", "HEAD"], response_class=PlainTextResponse)
    async def api_root():
        return "Hellowed"

    if todos is not None:
        # Mount only matches /todos/..., so /todos itself needs its own route
        api.add_route("/todos", PrefixRoot("/todos", todos), include_in_schema=False)
        api.mount("/todos", todos, name="todos")
        logger.debug("Mounted todos handler %r", todos)

    return api
