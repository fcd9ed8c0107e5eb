from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from starlette.applications import Starlette
from starlette.types import Lifespan

from devsignal.proxy.middleware import proxy_middleware, route_not_found

ShutdownCallback = Callable[[], Awaitable[None]]


def with_shutdown(lifespan: Lifespan[Any], on_shutdown: Sequence[ShutdownCallback]) -> Lifespan[Any]:
    """Wrap a lifespan so that the callbacks run, in order, once it has exited."""

    @asynccontextmanager
    async def lifespan_with_shutdown(app: Any) -> AsyncIterator[Any]:  # pyright: ignore[reportAny]
        try:
            async with lifespan(app) as state:  # pyright: ignore[reportUnknownVariableType]
                yield state
        finally:
            for callback in on_shutdown:
                await callback()

    return lifespan_with_shutdown


def create_http_app(fastmcp: FastMCP[Any], on_shutdown: Sequence[ShutdownCallback] = ()) -> Starlette:
    """Build the ASGI app that serves the proxy routes and the MCP endpoint at `/mcp`.

    Requests for an unknown path, or with a method no route accepts, get the JSON route-not-found envelope.
    """

    app = fastmcp.http_app(middleware=list(proxy_middleware()))
    app.add_exception_handler(404, route_not_found)
    app.add_exception_handler(405, route_not_found)

    if on_shutdown:
        app.router.lifespan_context = with_shutdown(app.router.lifespan_context, on_shutdown)

    return app
