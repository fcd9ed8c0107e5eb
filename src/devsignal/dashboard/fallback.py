from collections.abc import Awaitable, Callable, Sized
from logging import Logger
from typing import Any, Generic, TypeVar

import httpx
from fastmcp.utilities.logging import get_logger
from pydantic import BaseModel

from devsignal.clients.errors.upstream import RequestError, RequestTimeoutError

logger: Logger = get_logger(name=__name__)

TOO_MANY_REQUESTS = 429

TIMEOUT_WARNING = "Data request timeout 🚦"
NETWORK_WARNING = "Network connection lost 🕊️"
RATE_LIMIT_WARNING = "API rate limit exceeded 🌬️"
UNAVAILABLE_WARNING = "Financial data temporarily unavailable ☕"

T = TypeVar("T")

WarningType = str | Callable[[BaseException], str]


class EmptyResultError(Exception):
    """A loader returned nothing to display."""

    def __init__(self) -> None:
        super().__init__("No data received from API")


class FetchResult(BaseModel, Generic[T]):
    """The data to display and the banner to show next to it, if any."""

    data: T
    warning: str | None = None
    live: bool = True


def describe_error(exc: BaseException) -> str:
    """Turn a failed fetch into a short banner message."""

    if isinstance(exc, RequestTimeoutError | httpx.TimeoutException):
        return TIMEOUT_WARNING

    if isinstance(exc, RequestError) and exc.status_code == TOO_MANY_REQUESTS:
        return RATE_LIMIT_WARNING

    if isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code == TOO_MANY_REQUESTS:
        return RATE_LIMIT_WARNING

    if isinstance(exc, httpx.TransportError):
        return NETWORK_WARNING

    if isinstance(exc, RequestError) and isinstance(exc.__cause__, httpx.TransportError):
        return NETWORK_WARNING

    return UNAVAILABLE_WARNING


def is_empty(value: Any) -> bool:  # pyright: ignore[reportAny]
    if value is None:
        return True

    return isinstance(value, Sized) and len(value) == 0


async def fetch_with_fallback(
    loader: Callable[[], Awaitable[T]],
    demo_data: T,
    warning: WarningType = describe_error,
) -> FetchResult[T]:
    """Run the loader and return its result, or the demo data and a warning if it fails or comes back empty."""

    try:
        data = await loader()

        if is_empty(data):
            raise EmptyResultError  # noqa: TRY301
    except Exception as e:
        message = warning if isinstance(warning, str) else warning(e)

        logger.warning(f"Using demo data: {e}")

        return FetchResult(data=demo_data, warning=message, live=False)

    return FetchResult(data=data, warning=None, live=True)
