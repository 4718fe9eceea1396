from __future__ import annotations

import argparse
import logging
import sys
import threading
from dataclasses import replace
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from holocron.adapters.swapi import build_catalog_source
from holocron.app import bootstrap_catalog, catalog_status, reseed_catalog, sync_catalog
from holocron.config import ConfigurationError, configure_logging, get_swapi_config
from holocron.domain.ports.fetching import IngestCancelled

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from holocron.domain.ingest_pipeline import BootstrapResult
    from holocron.domain.ports.fetching import CatalogSource

log = logging.getLogger(__name__)

# set by the first Ctrl+C; ingestion stops at the next stage or request boundary
CANCEL_EVENT = threading.Event()


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Ingest the SWAPI catalog into a local store")
    subparsers = parser.add_subparsers(dest="command", required=True)

    source_options = argparse.ArgumentParser(add_help=False)
    source_options.add_argument(
        "--snapshot",
        action="store_true",
        help="Read the local snapshot instead of calling the live API",
    )
    source_options.add_argument(
        "--snapshot-dir",
        type=Path,
        help="Directory holding <resource>.json snapshot files (implies --snapshot)",
    )

    subparsers.add_parser(
        "bootstrap",
        parents=[source_options],
        help="Seed the catalog unless it already holds data",
    )

    seed = subparsers.add_parser(
        "seed",
        parents=[source_options],
        help="Seed the catalog, optionally wiping existing rows first",
    )
    seed.add_argument(
        "--force",
        action="store_true",
        help="Delete every catalog row before re-ingesting",
    )

    subparsers.add_parser(
        "sync",
        parents=[source_options],
        help="Update existing rows and add missing ones without deleting anything",
    )

    subparsers.add_parser("status", help="Report row counts per table")

    return parser.parse_args(list(argv))


def _build_source(args: argparse.Namespace) -> CatalogSource | None:
    snapshot_dir: Path | None = getattr(args, "snapshot_dir", None)
    if not getattr(args, "snapshot", False) and snapshot_dir is None:
        return None
    config = replace(get_swapi_config(), use_snapshot=True)
    if snapshot_dir is not None:
        config = replace(config, snapshot_dir=snapshot_dir)
    return build_catalog_source(config)


def _log_result(result: BootstrapResult) -> None:
    if result.skipped:
        log.info("Nothing to do: %s", result.reason)
        return
    log.info(
        "Catalog %s finished: inserted=%s, updated=%s, edges=%s, duplicate_edges=%s, "
        "unresolved=%s",
        result.mode,
        result.total_inserted,
        sum(result.updated.values()),
        result.edges_inserted,
        result.duplicate_edges,
        len(result.unresolved),
    )


def main(argv: Sequence[str] | None = None, *, cancel: threading.Event = CANCEL_EVENT) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        source = _build_source(parsed_args)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "bootstrap":
            _log_result(bootstrap_catalog(source=source, cancel=cancel))
        elif parsed_args.command == "seed":
            _log_result(reseed_catalog(force=parsed_args.force, source=source, cancel=cancel))
        elif parsed_args.command == "sync":
            _log_result(sync_catalog(source=source, cancel=cancel))
        elif parsed_args.command == "status":
            status = catalog_status()
            for resource, count in status.counts.items():
                log.info("%-10s %s", resource, count)
            log.info("seeded=%s, complete=%s", status.seeded, status.complete)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except IngestCancelled as exc:
        log.warning("Stopped: %s", exc)
        sys.exit(130)
    except Exception:
        log.exception("Fatal error during ingestion")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C): cancel cooperatively first, exit on a second press."""
    if CANCEL_EVENT.is_set():
        log.info("Closed by user (Ctrl+C)")
        sys.exit(0)
    log.info("Cancelling; committed stages are kept. Press Ctrl+C again to quit now")
    CANCEL_EVENT.set()


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
