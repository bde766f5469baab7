class ToolError(Exception):
    """
    Base class for every error a tool call can report back to the caller.
    The message is always a readable sentence.
    """

    code = -32603

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnknownTool(ToolError):
    code = -32602

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name!r} is not provided by this server.")
        self.name = name


class InvalidArguments(ToolError):
    code = -32602

    def __init__(self, field: str, reason: str):
        super().__init__(f"Invalid argument {field!r}: {reason}")
        self.field = field
        self.reason = reason


class NotFound(ToolError):
    """Valid request, but no matching movie or person exists."""


class UpstreamUnavailable(ToolError):
    def __init__(self, detail: str):
        super().__init__(f"The movie database service is unavailable: {detail}")
        self.detail = detail


class UpstreamError(Exception):
    """Raised by the TMDB client for any network, HTTP or payload failure."""


class ConfigError(Exception):
    pass
