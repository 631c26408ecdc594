"""
Greeter Backend - Greeting Routes
===================================

What:  The two public endpoints of the service, GET /hello and GET /goodbye.
How:   Routes are declared in an explicit table (ROUTES) and turned into an
       APIRouter once by build_router(). Responses are plain text.

Route table:
    GET /hello    → 200 "Hello, world!"
    GET /goodbye  → 200 "Goodbye, world!"

Any other path answers 404, and any other method on these paths answers 405;
both are the framework's default responses.
"""

from typing import Awaitable, Callable, NamedTuple, Tuple

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

HELLO_TEXT = "Hello, world!"
GOODBYE_TEXT = "Goodbye, world!"


async def hello() -> str:
    return HELLO_TEXT


async def goodbye() -> str:
    return GOODBYE_TEXT


class Route(NamedTuple):
    """A (method, path) pair bound to a handler."""

    method: str
    path: str
    handler: Callable[[], Awaitable[str]]


ROUTES: Tuple[Route, ...] = (
    Route("GET", "/hello", hello),
    Route("GET", "/goodbye", goodbye),
)


def build_router() -> APIRouter:
    """
    Build the greetings router from the route table.

    Each route is registered with PlainTextResponse so the handler's string
    is written verbatim as a text/plain body.
    """
    router = APIRouter(tags=["Greetings"], redirect_slashes=False)
    for route in ROUTES:
        router.add_api_route(
            route.path,
            route.handler,
            methods=[route.method],
            response_class=PlainTextResponse,
            name=route.handler.__name__,
        )
    return router
