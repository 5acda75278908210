"""Chat client exceptions."""


class ChatClientError(Exception):
    """Base class for chat client errors."""


class ClientConfigError(ChatClientError, ValueError):
    """Invalid client option or environment configuration."""


class ResponseDecodeError(ChatClientError):
    """Response bytes do not match the expected shape for the active wire format."""


class EmptyReplyError(ChatClientError):
    """Well-formed response that carries no reply content."""


class UpstreamAPIError(ChatClientError):
    """Upstream returned an explicit error object instead of a reply."""


class TransportError(ChatClientError):
    """Request could not be completed by the HTTP transport."""


class HTTPStatusError(TransportError):
    """Upstream answered with a non-success HTTP status."""

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        message = f"upstream returned HTTP {status_code}"
        if body:
            message = f"{message}: {body}"
        super().__init__(message)
