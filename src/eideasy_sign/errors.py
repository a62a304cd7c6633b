"""Error types raised by the eID Easy client and command surface."""
from typing import Optional


class EIDEasyError(Exception):
    """Base class for every failure the client reports."""


class UsageError(EIDEasyError):
    """A required argument or file was not supplied."""


class IoError(EIDEasyError):
    """A local file could not be read or written."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class HttpError(EIDEasyError):
    """The API answered with a non-success status."""

    def __init__(self, status: int, body: str, url: Optional[str] = None):
        super().__init__(f"HTTP {status} from {url or 'eID Easy API'}: {body}")
        self.status = status
        self.body = body
        self.url = url


class DecodeError(EIDEasyError):
    """Malformed JSON, malformed base64, or a response missing required fields."""


class TransportError(EIDEasyError):
    """The request never produced an HTTP response."""
