ExtraInfoType = dict[str, str | None]


class ClientError(Exception):
    """A request error from a DevSignal upstream client."""

    def __init__(self, message: str, extra_info: ExtraInfoType | None = None):
        msg = message
        if extra_info:
            msg += " (" + ", ".join([f"{key}: {value}" for key, value in extra_info.items() if value is not None]) + ")"
        super().__init__(msg)


class RequestError(ClientError):
    """An upstream request failed, timed out, or returned an error status."""

    status_code: int | None

    def __init__(
        self,
        action: str,
        message: str | None = None,
        extra_info: ExtraInfoType | None = None,
        status_code: int | None = None,
    ):
        if not extra_info:
            extra_info = {}
        self.action = action
        self.detail = message
        self.status_code = status_code
        super().__init__(message="A request error occured.", extra_info={"action": action, "message": message, **extra_info})


class RequestTimeoutError(RequestError):
    """The upstream did not answer within the configured timeout."""

    def __init__(self, action: str, message: str | None = None):
        super().__init__(action=action, message=message or "The request timed out.")


class ResourceNotFoundError(RequestError):
    """The upstream reported that the resource does not exist."""

    def __init__(self, action: str, resource: str | None = None, extra_info: ExtraInfoType | None = None):
        if not extra_info:
            extra_info = {}
        super().__init__(
            action=action,
            message="The resource could not be found.",
            extra_info={"resource": resource, **extra_info},
            status_code=404,
        )
