# src/pkg_keycloak/cli.py

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import Any, Sequence

from .application.use_cases.build_logout_url import split_key_value_params
from .domain.exceptions import InvalidArgumentError
from .env import settings_from_env
from .integrations.common.provider_factory import create_keycloak_provider
from .settings import ProviderSettings


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pkg-keycloak",
        description="Inspect Keycloak realm endpoints, logout URLs and token roles",
    )
    parser.add_argument("--base-url", help="Override KEYCLOAK_BASE_URL")
    parser.add_argument("--realm", help="Override KEYCLOAK_REALM (default: master)")
    parser.add_argument("--algorithm", help="Override KEYCLOAK_ALGORITHM (e.g. RS256)")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("endpoints", help="Print the realm protocol endpoints")

    logout = sub.add_parser("logout-url", help="Build a logout URL")
    logout.add_argument("--redirect-uri")
    logout.add_argument("--client-id")
    logout.add_argument("--id-token-hint")
    logout.add_argument(
        "--param",
        "-p",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Extra query parameter (repeatable, order preserved).",
    )

    roles = sub.add_parser("roles", help="Verify an access token and print its client roles")
    roles.add_argument("token")
    roles.add_argument("--client-id", help="Only return roles of this client")

    return parser.parse_args(args=argv)


def _settings(args: argparse.Namespace) -> ProviderSettings:
    try:
        settings = settings_from_env()
    except InvalidArgumentError:
        if not args.base_url:
            raise
        settings = ProviderSettings(base_url=args.base_url)

    overrides: dict[str, Any] = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.realm is not None:
        overrides["realm"] = args.realm
    if args.algorithm:
        overrides["algorithm"] = args.algorithm
    # replace() re-runs __post_init__ normalization
    return replace(settings, **overrides)


def _run(args: argparse.Namespace) -> dict[str, Any]:
    provider = create_keycloak_provider(_settings(args))

    if args.command == "endpoints":
        return {"endpoints": provider.endpoints.as_dict()}

    if args.command == "logout-url":
        url = provider.get_logout_url(
            redirect_uri=args.redirect_uri,
            client_id=args.client_id,
            id_token_hint=args.id_token_hint,
            extra_params=split_key_value_params(args.param),
        )
        return {"logout_url": url}

    return {"roles": provider.get_user_roles(args.token, args.client_id)}


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), stream=sys.stderr)

    try:
        result = _run(args)
        json.dump({"ok": True, **result}, sys.stdout, indent=2)
        sys.stdout.write("\n")
    except Exception as exc:  # noqa: BLE001
        json.dump({"ok": False, "error": str(exc)}, sys.stdout, indent=2)
        sys.stdout.write("\n")
        raise


if __name__ == "__main__":
    main()
