"""
Codec helpers: base64 for file bytes and MIME type inference.
"""
import base64
import binascii
import mimetypes
import os
from typing import Union

from .errors import DecodeError

DEFAULT_MIME_TYPE = "application/octet-stream"

# Compressed files are typed by their outer encoding, not the wrapped content.
ENCODING_MIME_TYPES = {
    "gzip": "application/gzip",
    "bzip2": "application/x-bzip2",
    "xz": "application/x-xz",
    "compress": "application/x-compress",
    "br": "application/x-brotli",
}


def encode_base64(data: bytes) -> str:
    """Encode raw bytes as padded standard base64 text."""
    return base64.b64encode(data).decode("ascii")


def decode_base64(text: str) -> bytes:
    """
    Decode standard base64 text.

    Raises:
        DecodeError: If the input is not valid base64
    """
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Invalid base64 content: {e}") from e


def mime_type_for(path: Union[str, "os.PathLike[str]"]) -> str:
    """Guess a MIME type from the file name, defaulting to application/octet-stream."""
    mime_type, encoding = mimetypes.guess_type(os.path.basename(os.fspath(path)))
    if encoding is not None:
        return ENCODING_MIME_TYPES.get(encoding, DEFAULT_MIME_TYPE)
    return mime_type or DEFAULT_MIME_TYPE
