from datetime import UTC, datetime

from pydantic import BaseModel, Field
from starlette.responses import JSONResponse

from devsignal.settings import error_detail


class HealthEnvelope(BaseModel):
    message: str = "DevSignal Backend is running!"
    status: str = "OK"
    timestamp: str = Field(default_factory=lambda: datetime.now(tz=UTC).isoformat().replace("+00:00", "Z"))


class ErrorEnvelope(BaseModel):
    """The body of every non-2xx response from the proxy."""

    message: str
    error: str | None = None
    suggestion: str | None = None


class RouteNotFoundEnvelope(BaseModel):
    message: str = "Route not found"
    path: str


def envelope_response(envelope: BaseModel, status_code: int) -> JSONResponse:
    return JSONResponse(envelope.model_dump(exclude_none=True), status_code=status_code)


def upstream_failure(message: str, detail: str, suggestion: str | None = None) -> JSONResponse:
    """A 500 envelope. The detail is withheld in production."""

    return envelope_response(ErrorEnvelope(message=message, error=error_detail(detail), suggestion=suggestion), status_code=500)
