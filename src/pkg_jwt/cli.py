# src/pkg_jwt/cli.py

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Sequence

from .adapters.keystore.memory import (
    DEFAULT_RSA_KEY_SIZE,
    generate_rsa_pem_pair,
    generate_secret,
)
from .application.use_cases.issue import IssueTokenUseCase
from .application.use_cases.validate import ValidateTokenUseCase
from .config.env import resolve_log_level, scheme_from_settings, settings_from_env
from .domain.codec import b64url_encode
from .domain.exceptions import JwtError

EXIT_INVALID = 1
EXIT_CONFIG = 2


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pkg-jwt",
        description="Issue and validate signed tokens (HS256 / RS256)",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (defaults from env JWT_LOG_LEVEL, else WARNING).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    issue = sub.add_parser("issue", help="Issue a token using JWT_* settings.")
    issue.add_argument("subject")
    issue.add_argument("claims")
    issue.add_argument(
        "--lifetime",
        type=int,
        help="Token lifetime in seconds (default: JWT_LIFETIME_SECONDS or 3600).",
    )

    validate = sub.add_parser("validate", help="Validate a token using JWT_* settings.")
    validate.add_argument("token")

    keygen = sub.add_parser("keygen", help="Generate fresh key material.")
    keygen.add_argument("kind", choices=["symmetric", "asymmetric"])
    keygen.add_argument(
        "--key-size",
        type=int,
        default=DEFAULT_RSA_KEY_SIZE,
        help="RSA modulus size in bits (asymmetric only).",
    )

    return parser.parse_args(args=argv)


def _emit(payload: dict[str, Any]) -> None:
    json.dump(payload, sys.stdout, indent=2)
    sys.stdout.write("\n")


def _keygen(args: argparse.Namespace) -> dict[str, Any]:
    if args.kind == "symmetric":
        secret = b64url_encode(generate_secret())
        return {"ok": True, "kind": "symmetric", "secret": secret}

    private_pem, public_pem = generate_rsa_pem_pair(args.key_size)
    return {
        "ok": True,
        "kind": "asymmetric",
        "private_key": private_pem.decode("ascii"),
        "public_key": public_pem.decode("ascii"),
    }


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    if args.command == "keygen":
        _emit(_keygen(args))
        return 0

    try:
        settings = settings_from_env()
        scheme = scheme_from_settings(settings)
        level = resolve_log_level(args.log_level or settings.log_level)
    except (RuntimeError, JwtError) as exc:
        _emit({"ok": False, "error": str(exc)})
        return EXIT_CONFIG

    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "issue":
        lifetime = settings.lifetime_seconds if args.lifetime is None else args.lifetime
        try:
            token = IssueTokenUseCase(scheme=scheme).create_token(
                args.subject, args.claims, lifetime=lifetime
            )
        except JwtError as exc:
            _emit({"ok": False, "error": str(exc)})
            return EXIT_CONFIG
        _emit({"ok": True, "token": token})
        return 0

    validator = ValidateTokenUseCase(scheme=scheme, leeway_seconds=settings.leeway_seconds)
    result = validator.validate(args.token)
    _emit({"ok": result.valid, **result.to_dict()})
    return 0 if result.valid else EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
