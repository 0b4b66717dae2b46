# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv
from pydantic import ValidationError

from recordflow.adapters.schema import RecordPayload
from recordflow.app import (
    apply_optimized_update,
    compute_record_delta,
    inspect_configuration,
    resolve_record,
)
from recordflow.config import configure_logging
from recordflow.domain.model import EntityRef

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from recordflow.domain.model import Record

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile records and apply minimal updates")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log at DEBUG level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    delta = subparsers.add_parser("delta", help="Compute the minimal update between two records")
    delta.add_argument("target", type=str, help="JSON file with the desired record ('-' = stdin)")
    delta.add_argument("current", type=str, help="JSON file with the current record")
    delta.add_argument(
        "--preserve",
        type=str,
        default="",
        help="Comma separated fields to keep even when unchanged",
    )

    config = subparsers.add_parser("config", help="Parse a pipeline configuration blob")
    config.add_argument("unsecure", type=str, help="Unsecure configuration file ('-' = stdin)")
    config.add_argument("--secure", type=str, help="Secure configuration file")

    resolve = subparsers.add_parser("resolve", help="Resolve a record against the store")
    resolve.add_argument("entity_type", type=str, help="Entity type of the record")
    resolve.add_argument("record_id", type=str, help="Id of the record")
    resolve.add_argument("--target", type=str, help="JSON file with pending changes to merge")
    resolve.add_argument("--user-id", type=str, help="Acting user id")

    update = subparsers.add_parser("update", help="Write only the changed fields of a record")
    update.add_argument("target", type=str, help="JSON file with the desired record")
    update.add_argument("--config", type=str, help="Unsecure pipeline configuration file")
    update.add_argument("--user-id", type=str, help="Acting user id")
    update.add_argument(
        "--dry-run",
        action="store_true",
        help="Reduce and print the update without writing it",
    )

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _read_text(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _load_record(source: str) -> Record:
    try:
        return RecordPayload.model_validate_json(_read_text(source)).to_domain()
    except ValidationError as exc:
        raise ValueError(f"Invalid record in {source}: {exc}") from exc


def _dump_record(record: Record) -> str:
    return RecordPayload.from_domain(record).model_dump_json(indent=2)


def _run_delta(args: argparse.Namespace) -> None:
    preserve = [name.strip() for name in args.preserve.split(",") if name.strip()]
    delta, removed = compute_record_delta(
        _load_record(args.target), _load_record(args.current), preserve=preserve
    )
    print(_dump_record(delta))
    log.info("Removed fields: %s", ", ".join(removed) or "(none)")


def _run_config(args: argparse.Namespace) -> None:
    secure = _read_text(args.secure) if args.secure else None
    configuration = inspect_configuration(_read_text(args.unsecure), secure)
    summary = {
        "values": dict(configuration.unsecure_values),
        "secure_keys": sorted(configuration.secure_values),
        "trace_message_stack": configuration.trace_message_stack,
        "preserve_fields": sorted(configuration.preserve_fields),
    }
    print(json.dumps(summary, indent=2))


def _run_resolve(args: argparse.Namespace) -> None:
    ref = EntityRef(args.entity_type, _parse_uuid(args.record_id))
    target = _load_record(args.target) if args.target else None
    user_id = _parse_uuid(args.user_id) if args.user_id else None
    print(_dump_record(resolve_record(ref, target, user_id=user_id)))


def _run_update(args: argparse.Namespace) -> None:
    user_id = _parse_uuid(args.user_id) if args.user_id else None
    result = apply_optimized_update(
        _load_record(args.target),
        unsecure_config=_read_text(args.config) if args.config else "",
        user_id=user_id,
        write=not args.dry_run,
    )
    for line in result.trace:
        log.debug("%s", line)
    print(_dump_record(result.target))
    log.info(
        "Removed fields: %s; written: %s",
        ", ".join(result.removed) or "(none)",
        result.written,
    )


_COMMANDS = {
    "delta": _run_delta,
    "config": _run_config,
    "resolve": _run_resolve,
    "update": _run_update,
}


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        _COMMANDS[parsed_args.command](parsed_args)
    except (ValueError, OSError):
        log.exception("CLI validation error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
