"""eID Easy document signing client."""

from .errors import (  # noqa: F401
    DecodeError,
    EIDEasyError,
    HttpError,
    IoError,
    TransportError,
    UsageError,
)
from .esign_eideasy import EIDEasyClient, get_eideasy_client  # noqa: F401

__version__ = "0.1.0"
