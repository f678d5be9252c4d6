"""
Canonical byte forms of the token header and payload.

Field order is fixed and values go through `json.dumps`, so quotes,
backslashes and control characters in caller strings are escaped.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from .constants import Algorithm
from .exceptions import MalformedTokenError
from .value_objects import Claims, Header

_SEPARATORS = (",", ":")


def _dump(obj: Mapping[str, Any]) -> bytes:
    return json.dumps(obj, separators=_SEPARATORS, ensure_ascii=False).encode("utf-8")


def header_bytes(header: Header) -> bytes:
    return _dump({"alg": header.alg.value, "typ": header.typ})


def payload_bytes(claims: Claims) -> bytes:
    body: dict[str, Any] = {
        "username": claims.subject,
        "claims": claims.claims,
        "exp": claims.expires_at,
    }
    if claims.issued_at is not None:
        body["iat"] = claims.issued_at
    return _dump(body)


def _load_object(raw: bytes, what: str) -> Mapping[str, Any]:
    try:
        obj = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        # RecursionError: nesting deeper than the interpreter stack
        raise MalformedTokenError(f"{what} is not valid JSON") from exc
    if not isinstance(obj, dict):
        raise MalformedTokenError(f"{what} is not a JSON object")
    return obj


def _is_epoch(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def parse_header(raw: bytes) -> Header:
    obj = _load_object(raw, "Header")
    try:
        alg = Algorithm(obj.get("alg"))
    except ValueError as exc:
        raise MalformedTokenError(f"Unsupported algorithm: {obj.get('alg')!r}") from exc
    typ = obj.get("typ", "JWT")
    if not isinstance(typ, str):
        raise MalformedTokenError("Header typ must be a string")
    return Header(alg=alg, typ=typ)


def parse_payload(raw: bytes) -> Claims:
    obj = _load_object(raw, "Payload")

    subject = obj.get("username")
    claims = obj.get("claims")
    exp = obj.get("exp")
    iat = obj.get("iat")

    if not isinstance(subject, str):
        raise MalformedTokenError("Payload username is missing or not a string")
    if not isinstance(claims, str):
        raise MalformedTokenError("Payload claims is missing or not a string")
    if not _is_epoch(exp):
        raise MalformedTokenError("Payload exp is missing or not an integer")
    if iat is not None and not _is_epoch(iat):
        raise MalformedTokenError("Payload iat is not an integer")

    return Claims(subject=subject, claims=claims, expires_at=exp, issued_at=iat)
