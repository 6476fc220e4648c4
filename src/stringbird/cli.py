"""Command-line interface for stringbird.

Usage:
    stringbird extract src/app.tsx src/menu.tsx
    stringbird apply src/app.tsx src/menu.tsx
    stringbird apply --dry-run src/app.tsx
    stringbird apply --backup src/app.tsx
    stringbird backups
    stringbird rollback backup-20260101-120000-000
    stringbird serve
"""

import argparse
import sys
from typing import Any, Dict, List, Optional

from stringbird.constants import AUTO_DIALECT, DIALECTS
from stringbird.core.config import configure_logging_from_env, load_config
from stringbird.core.exceptions import StringBirdError
from stringbird.core.logging import bind_command
from stringbird.core.sentry import init_sentry
from stringbird.features.apply.service import apply_strings_impl, list_backups_impl, rollback_apply_impl
from stringbird.features.extract.service import extract_strings_impl
from stringbird.models.config import StringBirdConfig
from stringbird.server.runner import run_mcp_server
from stringbird.utils.console_logger import console


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="stringbird",
        description="Extract marked string literals into a key-value store and apply edited values back.",
        epilog="""
environment variables:
  STRINGBIRD_CONFIG  Path to a .stringbird.yml file (overridden by --config flag)
  LOG_LEVEL          Logging level: DEBUG, INFO, WARNING, ERROR (default: INFO)
  LOG_FILE           Path to log file (logs to stderr by default)
  SENTRY_DSN         Enables Sentry error tracking when set
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", type=str, metavar="PATH", help="Path to a .stringbird.yml config file")
    parser.add_argument("--store", type=str, metavar="PATH", default=None, help="Store file (default: ./stringbird)")
    parser.add_argument(
        "--dialect",
        choices=list(DIALECTS) + [AUTO_DIALECT],
        default=None,
        help="Syntax dialect of the sources (default: tsx)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        metavar="LEVEL",
        help="Logging level (DEBUG, INFO, WARNING, ERROR). Can also be set via LOG_LEVEL env var. Default: INFO",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        default=None,
        help="Path to log file (logs to stderr by default). Can also be set via LOG_FILE env var.",
    )
    parser.add_argument("--quiet", action="store_true", help="Only print errors")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")

    subparsers = parser.add_subparsers(dest="command", required=True)

    extract = subparsers.add_parser("extract", help="Write marked literals of FILES to the store")
    extract.add_argument("files", nargs="+", metavar="FILE")

    apply = subparsers.add_parser("apply", help="Rewrite marked literals of FILES from the store")
    apply.add_argument("files", nargs="+", metavar="FILE")
    apply.add_argument("--dry-run", action="store_true", help="Show the diff without writing files")
    apply.add_argument("--backup", action="store_true", help="Back up FILES before writing")

    rollback = subparsers.add_parser("rollback", help="Restore files from an apply backup")
    rollback.add_argument("backup_id", metavar="BACKUP_ID")

    subparsers.add_parser("backups", help="List apply backups")
    subparsers.add_parser("serve", help="Run the MCP server on stdio")

    return parser


def _report_extract(result: Dict[str, Any]) -> None:
    for file_result in result["files"]:
        console.log(f"Parsed {file_result['file']} ({file_result['keys']} marked)")
    for key in result["overridden"]:
        console.warning(f"Key '{key}' marked in several files; the last one wins")
    console.success(f"Output written to {result['store_file']} ({result['keys']} keys)")


def _report_apply(result: Dict[str, Any]) -> None:
    for file_result in result["files"]:
        changes = file_result["changes"]
        if result["dry_run"]:
            if file_result["diff"]:
                console.log(file_result["diff"], end="")
            continue
        status = f"{len(changes)} replaced" if file_result["modified"] else "unchanged"
        console.log(f"Applied to {file_result['file']} ({status})")
    if result["backup_id"]:
        console.log(f"Backup: {result['backup_id']}")
    verb = "would change" if result["dry_run"] else "changed"
    console.success(f"{len(result['modified_files'])} file(s) {verb}, {result['changes_applied']} literal(s)")


def _run(args: argparse.Namespace, config: StringBirdConfig) -> int:
    if args.command == "extract":
        result = extract_strings_impl(args.files, config=config)
        if args.json:
            console.json(result)
        else:
            _report_extract(result)
        return 0

    if args.command == "apply":
        result = apply_strings_impl(args.files, dry_run=args.dry_run, backup=args.backup, config=config)
        if args.json:
            console.json(result)
        else:
            _report_apply(result)
        return 0

    if args.command == "rollback":
        restored = rollback_apply_impl(args.backup_id, config=config)
        if args.json:
            console.json(restored)
        for error in restored["errors"]:
            console.error(error)
        for path in restored["conflicts"]:
            console.error(f"{path} was edited after apply; not restored")
        if not restored["success"]:
            return 1
        if not args.json:
            console.success(f"Restored {len(restored['restored_files'])} file(s) from {args.backup_id}")
        return 0

    if args.command == "backups":
        backups = list_backups_impl(config=config)
        if args.json:
            console.json(backups)
            return 0
        if not backups:
            console.log("No backups found")
        for backup in backups:
            console.log(
                f"{backup['backup_id']}  {backup['timestamp']}  "
                f"{backup['rewritten_files']}/{backup['file_count']} file(s) rewritten, {backup['changes']} change(s)"
            )
        return 0

    if args.command == "serve":
        run_mcp_server()
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return the process exit status."""
    args = _create_argument_parser().parse_args(argv)

    configure_logging_from_env(args.log_level, args.log_file, quiet=args.quiet)
    bind_command(args.command)
    console.set_quiet(args.quiet)

    try:
        config = load_config(args.config, store_file=args.store, dialect=args.dialect)
        if args.command != "serve":
            init_sentry()
        return _run(args, config)
    except StringBirdError as e:
        console.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
