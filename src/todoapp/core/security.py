"""Helpers for the ``base64(username):base64(password)`` authentication header."""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass

from ..errors import MalformedHeaderError

_SEGMENT_SEPARATOR = ":"
_BASE64_SEGMENT = re.compile(
    r"^(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=|[A-Za-z0-9+/]{4})$"
)


@dataclass(frozen=True, slots=True)
class Credentials:
    """Username and password decoded from the authentication header."""

    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"


def _decode_segment(segment: str) -> str:
    if not _BASE64_SEGMENT.match(segment):
        raise MalformedHeaderError("Invalid token format.")
    try:
        return base64.b64decode(segment, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise MalformedHeaderError("Invalid token format.") from exc


def decode_auth_header(value: str | None) -> Credentials:
    """Split and decode an authentication header value.

    The value must consist of exactly two padded standard-base64 segments
    joined by a single colon. Anything else, including a missing header,
    raises :class:`MalformedHeaderError`.
    """

    if value is None:
        raise MalformedHeaderError("Authentication header is missing.")

    segments = value.split(_SEGMENT_SEPARATOR)
    if len(segments) != 2:
        raise MalformedHeaderError("Invalid token format.")

    username, password = (_decode_segment(segment) for segment in segments)
    return Credentials(username=username, password=password)


def encode_auth_header(username: str, password: str) -> str:
    """Build the header value a client sends for ``username``/``password``."""

    return _SEGMENT_SEPARATOR.join(
        base64.b64encode(part.encode("utf-8")).decode("ascii") for part in (username, password)
    )


__all__ = ["Credentials", "decode_auth_header", "encode_auth_header"]
