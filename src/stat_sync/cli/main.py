"""Main CLI entry point."""

import argparse
import json
import logging
from pathlib import Path


def main(argv: list[str] | None = None) -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(
        prog="stat-sync",
        description="Copy video statistics from YouTube/Twitter into Airtable fields",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    def _add_config_args(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--config",
            type=Path,
            required=True,
            help="Path to sync config YAML",
        )
        sub.add_argument(
            "--variant",
            choices=["youtube", "twitter"],
            default=None,
            help="Override the config's source variant",
        )
        # SUPPRESS keeps a top-level --verbose from being reset by the subcommand default.
        sub.add_argument("--verbose", "-v", action="store_true", default=argparse.SUPPRESS, help="Debug logging")

    # run
    run_parser = subparsers.add_parser("run", help="Fetch statistics and write them to the destination field")
    _add_config_args(run_parser)

    # check
    check_parser = subparsers.add_parser("check", help="Check update permission on the destination field")
    _add_config_args(check_parser)

    # preview
    preview_parser = subparsers.add_parser("preview", help="List records with a valid identifier (no fetch/write)")
    _add_config_args(preview_parser)
    preview_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write JSON to file (default: stdout)",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    if args.command == "run":
        _run_sync(args)
    elif args.command == "check":
        _run_check(args)
    elif args.command == "preview":
        _run_preview(args)
    else:
        parser.print_help()


def _build_pipeline(args: argparse.Namespace):
    """Load config and wire store + fetcher into a pipeline."""
    from pydantic import ValidationError

    from stat_sync.fetchers import FetcherRegistry
    from stat_sync.models.config import SyncConfig
    from stat_sync.pipeline import SyncPipeline
    from stat_sync.store import AirtableStore

    try:
        config = SyncConfig.from_yaml(args.config, variant=args.variant)
    except FileNotFoundError:
        raise SystemExit(f"Config file not found: {args.config}")
    except ValidationError as e:
        raise SystemExit(f"Invalid config {args.config}:\n{e}")

    try:
        store = AirtableStore(config.base_id, config.table)
        fetcher = FetcherRegistry.for_config(config)
    except ValueError as e:
        raise SystemExit(str(e))
    return SyncPipeline(config, store, fetcher, on_progress=print)


def _run_sync(args: argparse.Namespace) -> None:
    """Run sync command."""
    from stat_sync.errors import SyncError

    pipeline = _build_pipeline(args)
    try:
        report = pipeline.run()
    except SyncError as e:
        raise SystemExit(f"Sync failed: {e}")
    print(
        f"Done: {report.updated} updated, {report.skipped_fetch} skipped "
        f"({report.valid_items} valid of {report.total_records} records)"
    )


def _run_check(args: argparse.Namespace) -> None:
    """Run check command."""
    pipeline = _build_pipeline(args)
    check = pipeline.check_permission()
    if check.allowed:
        print(f'OK: "{pipeline.config.destination_field}" can be updated')
    else:
        print(f"Denied: {check.reason}")
        raise SystemExit(1)


def _run_preview(args: argparse.Namespace) -> None:
    """Run preview command."""
    from stat_sync.errors import SyncError

    pipeline = _build_pipeline(args)
    try:
        items = pipeline.preview()
    except SyncError as e:
        raise SystemExit(f"Preview failed: {e}")

    output = json.dumps(
        [{"record_id": item.record.id, "identifier": item.identifier} for item in items],
        indent=2,
    )
    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"Wrote {len(items)} items to {args.output}")
    else:
        print(output)


if __name__ == "__main__":
    main()
