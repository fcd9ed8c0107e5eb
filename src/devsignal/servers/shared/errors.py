ExtraInfoType = dict[str, str | None]


class ServerError(Exception):
    """A request error from the DevSignal server."""

    def __init__(self, message: str, extra_info: ExtraInfoType | None = None):
        msg = message
        if extra_info:
            msg += " (" + ", ".join([f"{key}: {value}" for key, value in extra_info.items() if value is not None]) + ")"
        super().__init__(msg)


class MissingOwnerError(ServerError):
    """A GitHub repository was requested without its owner."""

    def __init__(self, project: str):
        super().__init__(message="The owner is required to get the commits of a GitHub repository.", extra_info={"project": project})
