import os

DEFAULT_PORT = 3000

USER_AGENT = "DevSignal-Dashboard"

UPSTREAM_TIMEOUT_SECONDS = 10.0
DASHBOARD_TIMEOUT_SECONDS = 8.0
REFRESH_INTERVAL_SECONDS = 60.0

GITHUB_API_BASE_URL = "https://api.github.com"
GITLAB_API_BASE_URL = "https://gitlab.com/api/v4"

DEFAULT_GITHUB_USERNAME = "Lukhanyo05"
DEFAULT_GITLAB_USERNAME = "LukhanyoN"

PRODUCTION_ERROR_DETAIL = "Something went wrong"


def get_port() -> int:
    return int(os.getenv("PORT", str(DEFAULT_PORT)))


def get_environment() -> str:
    return os.getenv("ENVIRONMENT", "development").strip().lower()


def is_production() -> bool:
    """Whether internal error details should be withheld from clients."""
    return get_environment() == "production"


def error_detail(detail: str) -> str:
    return PRODUCTION_ERROR_DETAIL if is_production() else detail
