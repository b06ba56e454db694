#!/usr/bin/env python3
"""Simulate an application launch against an encrypted ledger file.

Useful to check how a given version/installation time pair is classified
and what the ledger holds afterwards.

Usage:
    python scripts/simulate_launch.py --version 1.2.0 --installed-days-ago 3

The ledger file and key come from ``APPRUNTIME_STORE_PATH`` and
``APPRUNTIME_STORE_KEY`` unless given on the command line.  Without a key
a fresh one is generated and printed so later runs can reuse it.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from appruntime import (  # noqa: E402
    LedgerWriteError,
    RuntimeEventPayload,
    RuntimeEventsConfig,
    StaticAppInfoProvider,
    create_runtime_events,
)
from appruntime.storage import generate_key_hex  # noqa: E402


def _print_event(name: str) -> Callable[[RuntimeEventPayload], None]:
    def _callback(payload: RuntimeEventPayload) -> None:
        print(f"  {name}: {payload.model_dump_json()}")

    return _callback


async def main() -> int:
    parser = argparse.ArgumentParser(description="Classify a simulated app launch.")
    parser.add_argument("--version", required=True, help="Current app version")
    parser.add_argument("--installed-days-ago", type=float, default=0.0, help="Age of the installation in days")
    parser.add_argument("--store", help="Ledger file (default: APPRUNTIME_STORE_PATH)")
    parser.add_argument("--key", help="Hex AES key (default: APPRUNTIME_STORE_KEY)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, str] = {}
    if args.store:
        overrides["store_path"] = args.store
    if args.key:
        overrides["store_key_hex"] = args.key
    config = RuntimeEventsConfig.from_env(**overrides)
    if config.store_path is None:
        parser.error("no ledger file given (use --store or APPRUNTIME_STORE_PATH)")
    if config.store_key_hex is None:
        key_hex = generate_key_hex()
        print(f"Generated key (set APPRUNTIME_STORE_KEY to reuse): {key_hex}")
        config = RuntimeEventsConfig.from_env(**overrides, store_key_hex=key_hex)

    installed_at = datetime.now(UTC) - timedelta(days=args.installed_days_ago)
    events = create_runtime_events(
        config,
        app_info=StaticAppInfoProvider(args.version, installed_at),
        on_after_install=[_print_event("on_after_install")],
        on_after_update=[_print_event("on_after_update")],
    )

    exit_code = 0
    try:
        await events.initialize_runtime_info()
    except LedgerWriteError as exc:
        print(f"Ledger write failed: {exc}", file=sys.stderr)
        exit_code = 1

    print(json.dumps(events.state.model_dump(), indent=2))
    return exit_code


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
