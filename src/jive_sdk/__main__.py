"""jive-sdk command line.

Examples:
  jive-sdk canonicalize registration.json   Print the buffer the MAC is computed over
  jive-sdk register registration.json       Validate and store a registration block
  jive-sdk show https://community.example   Print a stored community (secrets redacted)
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from jive_sdk.community.registration import canonicalize_registration
from jive_sdk.config import get_settings
from jive_sdk.errors import JiveSDKError
from jive_sdk.logging_setup import setup_logging
from jive_sdk.persistence.file import FilePersistence
from jive_sdk.sdk import JiveSDK

logger = logging.getLogger(__name__)

_SECRET_KEYS = {"clientSecret", "access_token", "refresh_token", "code", "jiveSignature"}


def redact(record: dict) -> dict:
    """Mask secrets for display, keeping the last 4 characters."""
    out = {}
    for key, value in record.items():
        if isinstance(value, dict):
            out[key] = redact(value)
        elif key in _SECRET_KEYS and isinstance(value, str):
            out[key] = f"***{value[-4:]}" if len(value) > 4 else "***"
        else:
            out[key] = value
    return out


def _load_block(path: str) -> dict:
    return json.loads(Path(path).read_text(encoding="utf-8"))


async def _register(path: str) -> int:
    sdk = JiveSDK(persistence=FilePersistence())
    community = await sdk.registration.register(_load_block(path))
    print(json.dumps(redact(community.to_dict()), indent=2))
    return 0


async def _show(jive_url: str) -> int:
    sdk = JiveSDK(persistence=FilePersistence())
    community = await sdk.communities.find_by_jive_url(jive_url)
    if community is None:
        print(f"No community registered for {jive_url}", file=sys.stderr)
        return 1
    print(json.dumps(redact(community.to_dict()), indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="jive-sdk",
        description="Jive add-on SDK tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("canonicalize", help="Print the canonical registration buffer")
    p.add_argument("file", help="Registration block JSON file")

    p = sub.add_parser("register", help="Validate and store a registration block")
    p.add_argument("file", help="Registration block JSON file")

    p = sub.add_parser("show", help="Print a stored community")
    p.add_argument("jive_url", help="Community URL")

    args = parser.parse_args(argv)
    setup_logging(level=get_settings().log_level)

    try:
        if args.command == "canonicalize":
            sys.stdout.write(canonicalize_registration(_load_block(args.file)))
            return 0
        if args.command == "register":
            return asyncio.run(_register(args.file))
        return asyncio.run(_show(args.jive_url))
    except (JiveSDKError, OSError, json.JSONDecodeError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
