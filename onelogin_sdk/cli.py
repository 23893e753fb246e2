"""Command-line access to OneLogin resources.

This module serves as a thin CLI wrapper around the SDK services.

Examples:
    onelogin-cli users list --limit 10
    onelogin-cli apps get 1234
    onelogin-cli --region eu roles delete 42
"""
from __future__ import annotations
import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from .config.settings import ClientConfig, DEFAULT_TIMEOUT, _load_secret_from_file
from .core.api import APIClient
from .core.exceptions import OneLoginError

# CLI resource name -> Services attribute
RESOURCES = {
    "apps": "apps",
    "users": "users",
    "roles": "roles",
    "mappings": "user_mappings",
    "hooks": "smart_hooks",
    "auth-servers": "auth_servers",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="onelogin-cli", description="OneLogin API helper")
    parser.add_argument("--client-id", default=os.environ.get("ONELOGIN_CLIENT_ID"))
    parser.add_argument("--client-secret", default=None,
                        help="Defaults to /run/secrets/onelogin_client_secret or ONELOGIN_CLIENT_SECRET")
    parser.add_argument("--region", default=os.environ.get("ONELOGIN_REGION", "us"), choices=["us", "eu"])
    parser.add_argument("--url", default=os.environ.get("ONELOGIN_URL"))
    parser.add_argument("--timeout", type=int, default=os.environ.get("ONELOGIN_TIMEOUT", str(DEFAULT_TIMEOUT)))
    parser.add_argument("-v", "--verbose", action="store_true", help="Log HTTP requests to stderr")

    sub = parser.add_subparsers(dest="resource")
    for name in RESOURCES:
        rp = sub.add_parser(name)
        actions = rp.add_subparsers(dest="action")

        lp = actions.add_parser("list")
        lp.add_argument("--limit", type=int)
        lp.add_argument("--page", type=int)
        lp.add_argument("--filter", action="append", default=[], metavar="KEY=VALUE",
                        help="Extra query filter (repeatable)")

        gp = actions.add_parser("get")
        gp.add_argument("id")

        dp = actions.add_parser("delete")
        dp.add_argument("id")

    return parser


def _query_params(args: argparse.Namespace) -> List[tuple]:
    params = []
    if args.limit is not None:
        params.append(("limit", str(args.limit)))
    if args.page is not None:
        params.append(("page", str(args.page)))
    for item in args.filter:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid filter '{item}': expected KEY=VALUE")
        params.append((key, value))
    return params


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if not args.resource or not getattr(args, "action", None):
        parser.print_help()
        return 2

    client_secret = args.client_secret or _load_secret_from_file("onelogin_client_secret", "ONELOGIN_CLIENT_SECRET")
    if not args.client_id or not client_secret:
        parser.error("Missing client credentials (--client-id/--client-secret or ONELOGIN_* environment)")

    config = ClientConfig(
        client_id=args.client_id,
        client_secret=client_secret,
        region=args.region,
        url=args.url,
        timeout=args.timeout,
    )

    try:
        with APIClient(config) as client:
            service = getattr(client.services, RESOURCES[args.resource])
            if args.action == "list":
                try:
                    params = _query_params(args)
                except ValueError as e:
                    parser.error(str(e))
                result = [item.to_payload() for item in service.query(params)]
            elif args.action == "get":
                result = service.get_one(args.id).to_payload()
            else:
                service.destroy(args.id)
                result = {"deleted": args.id}
    except OneLoginError as e:
        print(f"[{args.resource}] Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
