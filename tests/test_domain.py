# tests/test_domain.py
import json
from datetime import timedelta

import pytest

from pkg_jwt.domain.constants import Algorithm, FailureReason, KeyKind
from pkg_jwt.domain.entities import AccessContext, Key, ValidationResult, to_validation_result
from pkg_jwt.domain.exceptions import MalformedTokenError
from pkg_jwt.domain.serialization import header_bytes, parse_header, parse_payload, payload_bytes
from pkg_jwt.domain.value_objects import AccessRequirement, Claims, Header, require_claims


def test_header_bytes_are_canonical():
    assert header_bytes(Header.for_algorithm(Algorithm.HS256)) == b'{"alg":"HS256","typ":"JWT"}'
    assert header_bytes(Header.for_algorithm(Algorithm.RS256)) == b'{"alg":"RS256","typ":"JWT"}'


def test_payload_bytes_field_order():
    claims = Claims(subject="alice", claims="admin,user", expires_at=1700003600)
    assert payload_bytes(claims) == (
        b'{"username":"alice","claims":"admin,user","exp":1700003600}'
    )


def test_payload_bytes_appends_iat_when_set():
    claims = Claims(subject="a", claims="", expires_at=20, issued_at=10)
    assert payload_bytes(claims) == b'{"username":"a","claims":"","exp":20,"iat":10}'


def test_payload_escapes_reserved_characters():
    sneaky = 'x","exp":9999999999,"y":"'
    claims = Claims(subject='bob"\\', claims=sneaky + "\n\x01}", expires_at=5)
    raw = payload_bytes(claims)

    decoded = json.loads(raw)
    assert list(decoded) == ["username", "claims", "exp"]
    assert decoded["username"] == 'bob"\\'
    assert decoded["claims"] == sneaky + "\n\x01}"
    assert decoded["exp"] == 5
    assert b"\n" not in raw


def test_payload_keeps_unicode_as_utf8():
    raw = payload_bytes(Claims(subject="zoë", claims="☃", expires_at=1))
    assert "zoë".encode("utf-8") in raw
    assert parse_payload(raw).claims == "☃"


def test_parse_payload_round_trip():
    claims = Claims(subject="alice", claims="admin", expires_at=123, issued_at=100)
    assert parse_payload(payload_bytes(claims)) == claims


@pytest.mark.parametrize(
    "raw",
    [
        b"",
        b"not json",
        b"\xff\xfe",
        b"[]",
        b'{"claims":"x","exp":1}',
        b'{"username":1,"claims":"x","exp":1}',
        b'{"username":"a","exp":1}',
        b'{"username":"a","claims":"x"}',
        b'{"username":"a","claims":"x","exp":"1"}',
        b'{"username":"a","claims":"x","exp":1.5}',
        b'{"username":"a","claims":"x","exp":true}',
        b'{"username":"a","claims":"x","exp":1,"iat":"now"}',
    ],
)
def test_parse_payload_rejects_bad_input(raw):
    with pytest.raises(MalformedTokenError):
        parse_payload(raw)


def test_parse_header():
    assert parse_header(b'{"alg":"RS256","typ":"JWT"}') == Header(Algorithm.RS256)
    with pytest.raises(MalformedTokenError):
        parse_header(b'{"alg":"none","typ":"JWT"}')
    with pytest.raises(MalformedTokenError):
        parse_header(b'{"alg":"HS256","typ":5}')
    with pytest.raises(MalformedTokenError):
        parse_header(b"{")


def test_claims_require_whole_seconds():
    with pytest.raises(ValueError):
        Claims(subject="a", claims="b", expires_at=1.5)
    with pytest.raises(ValueError):
        Claims(subject="a", claims="b", expires_at=True)
    with pytest.raises(ValueError):
        Claims(subject=None, claims="b", expires_at=1)


def test_claims_with_lifetime():
    c = Claims.with_lifetime("a", "b", now=1000, lifetime=timedelta(hours=1))
    assert c.expires_at == 4600
    c = Claims.with_lifetime("a", "b", now=1000, lifetime=90.9)
    assert c.expires_at == 1090
    c = Claims.with_lifetime("a", "b", now=1000, lifetime=-1)
    assert c.expires_at == 999


def test_validation_result_constructors():
    ok = ValidationResult.success(Claims("alice", "admin", 10))
    assert ok.valid and ok.subject == "alice" and ok.claims == "admin" and ok.expires_at == 10
    assert ok.failure_reason is None

    bad = ValidationResult.failure(FailureReason.EXPIRED)
    assert not bad.valid
    assert bad.failure_reason is FailureReason.EXPIRED
    assert (bad.subject, bad.claims, bad.expires_at) == (None, None, None)


def test_validation_result_invariants():
    with pytest.raises(ValueError):
        ValidationResult(valid=True)
    with pytest.raises(ValueError):
        ValidationResult(valid=False)
    with pytest.raises(ValueError):
        ValidationResult(valid=False, subject="x", failure_reason=FailureReason.EXPIRED)
    with pytest.raises(ValueError):
        ValidationResult(
            valid=True, subject="a", claims="b", expires_at=1,
            failure_reason=FailureReason.EXPIRED,
        )


def test_to_validation_result_is_total_and_explicit():
    assert to_validation_result(Claims("a", "b", 1)).valid
    failed = to_validation_result(FailureReason.SIGNATURE_INVALID)
    assert failed.failure_reason is FailureReason.SIGNATURE_INVALID
    with pytest.raises(TypeError):
        to_validation_result(None)
    with pytest.raises(TypeError):
        to_validation_result(True)


def test_validation_result_to_dict():
    assert ValidationResult.failure(FailureReason.MALFORMED_TOKEN).to_dict() == {
        "valid": False,
        "subject": None,
        "claims": None,
        "expires_at": None,
        "failure_reason": "malformed_token",
    }


def test_access_context_claim_values():
    ctx = AccessContext(subject="alice", claims="admin, user,,")
    assert ctx.claim_values == ("admin", "user")
    assert ctx.contains("admin")
    assert ctx.contains_any(["x", "user"])
    assert not ctx.contains_all(["admin", "x"])

    empty = AccessContext(subject="bob")
    assert empty.claim_values == ()


def test_access_context_from_result():
    ctx = AccessContext.from_result(ValidationResult.success(Claims("alice", "admin", 9)))
    assert (ctx.subject, ctx.claims, ctx.expires_at) == ("alice", "admin", 9)
    with pytest.raises(ValueError):
        AccessContext.from_result(ValidationResult.failure(FailureReason.EXPIRED))


def test_access_requirement():
    ar = AccessRequirement(any_of=["a", "b"])
    assert ar.any_of == ("a", "b")
    assert ar.all_of == ()

    ar = AccessRequirement(any_of="e", all_of="f")
    assert ar.any_of == ("e",)
    assert ar.all_of == ("f",)

    assert require_claims("a", "b") == AccessRequirement(any_of=("a", "b"))
    assert require_claims("a", "b", any_of=False) == AccessRequirement(all_of=("a", "b"))


def test_key_is_read_only():
    key = Key(id=1, kind=KeyKind.SYMMETRIC, secret=b"s")
    assert key.active
    with pytest.raises(AttributeError):
        key.active = False
