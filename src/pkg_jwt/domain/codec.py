"""
Unpadded, URL-safe base64 used for every token segment.
"""

from __future__ import annotations

import base64
import binascii
import re

from .exceptions import MalformedEncodingError

_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


def b64url_encode(data: bytes) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return encoded.replace("+", "-").replace("/", "_").rstrip("=")


def b64url_decode(value: str | bytes) -> bytes:
    """
    Decode an unpadded base64url string.

    Padding is restored before decoding: ``(4 - len % 4) % 4`` ``=`` signs.

    Raises:
        MalformedEncodingError: on characters outside the base64url alphabet
            or a length that no amount of padding can fix.
    """
    if isinstance(value, bytes):
        try:
            value = value.decode("ascii")
        except UnicodeDecodeError as exc:
            raise MalformedEncodingError("base64url value is not ASCII") from exc

    if not _ALPHABET.fullmatch(value):
        raise MalformedEncodingError("base64url value contains invalid characters")

    if len(value) % 4 == 1:
        raise MalformedEncodingError(f"Invalid base64url length: {len(value)}")

    pad = (4 - len(value) % 4) % 4
    standard = value.replace("-", "+").replace("_", "/") + "=" * pad
    try:
        return base64.b64decode(standard, validate=True)
    except binascii.Error as exc:
        raise MalformedEncodingError(f"Invalid base64url value: {exc}") from exc
