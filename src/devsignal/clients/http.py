from logging import Logger, getLogger
from typing import Any
from urllib.parse import quote

import httpx

from devsignal.clients.errors.upstream import RequestError, RequestTimeoutError, ResourceNotFoundError


def path_segment(value: int | str) -> str:
    """Percent-encode a value so that it stays a single segment of an upstream URL path."""
    return quote(str(value), safe="")


class JsonHttpClient:
    """Base for clients that GET JSON documents over a shared `httpx.AsyncClient`."""

    httpx_client: httpx.AsyncClient
    logger: Logger

    def __init__(self, httpx_client: httpx.AsyncClient, logger: Logger | None = None):
        self.httpx_client = httpx_client
        self.logger = logger or getLogger(__name__)

    async def aclose(self) -> None:
        await self.httpx_client.aclose()

    async def _perform_rest_request(self, action: str, path: str, params: dict[str, Any] | None = None) -> Any:  # pyright: ignore[reportAny]
        """Perform a GET request and return the decoded JSON body.

        Raises:
            ResourceNotFoundError: If the server answers with a 404.
            RequestTimeoutError: If the server does not answer in time.
            RequestError: If the request fails for any other reason.
        """

        self.logger.info(f"Performing {action} against {path} with params {params}")

        try:
            response = await self.httpx_client.get(path, params=params)
            _ = response.raise_for_status()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == httpx.codes.NOT_FOUND:
                self.logger.warning(f"{action}: Not found error for {e.request.url}")
                raise ResourceNotFoundError(action=action, resource=e.request.url.path) from e

            self.logger.exception(f"HTTP error performing {action} against {path}: {e}")

            raise RequestError(action=action, message=str(e), status_code=e.response.status_code) from e
        except httpx.TimeoutException as e:
            self.logger.exception(f"Timed out performing {action} against {path}")

            raise RequestTimeoutError(action=action) from e
        except httpx.HTTPError as e:
            self.logger.exception(f"Error performing {action} against {path}: {e}")

            raise RequestError(action=action, message=str(e)) from e

        return response.json()
