"""Apply feature service - splices a store's values back into source files."""

import difflib
import os
import time
from typing import Any, Dict, List, Optional

import sentry_sdk

from stringbird.constants import FormattingDefaults
from stringbird.core.exceptions import StringBirdError
from stringbird.core.logging import get_logger
from stringbird.core.parser import parse_source, resolve_dialect
from stringbird.features.apply.backup import (
    create_backup,
    list_available_backups,
    record_applied_changes,
    restore_backup,
)
from stringbird.features.apply.rewriter import rewrite_literals
from stringbird.features.store.codec import load_store
from stringbird.models.config import StringBirdConfig
from stringbird.models.literals import StringMap
from stringbird.utils.files import read_source, write_source


def _unified_diff(file_path: str, before: str, after: str) -> str:
    return "".join(difflib.unified_diff(
        before.splitlines(keepends=True),
        after.splitlines(keepends=True),
        fromfile=f"a/{file_path}",
        tofile=f"b/{file_path}",
        n=FormattingDefaults.DIFF_CONTEXT_LINES,
    ))


def apply_file(
    file_path: str,
    store: StringMap,
    config: StringBirdConfig,
    dry_run: bool = False,
) -> Dict[str, Any]:
    """Rewrite one file's marked literals from the store.

    The file is only written when at least one literal changed and dry_run
    is False. Nothing is written if any literal fails, so a file is never
    left half-applied.

    Args:
        file_path: Source file to rewrite in place
        store: Key to replacement source text; treated as read-only
        config: Effective configuration (dialect, encoding)
        dry_run: Compute changes and a diff without writing

    Returns:
        Dict with file, modified, changes (and diff when dry_run)

    Raises:
        SourceLoadError, SourceParseError, LiteralKindMismatchError, OutputWriteError
    """
    logger = get_logger("apply.service")

    text = read_source(file_path, config.encoding)
    dialect = resolve_dialect(file_path, config.dialect)
    tree = parse_source(text, dialect, origin=file_path)

    changes = rewrite_literals(tree, dict(store), dialect)
    rendered = tree.render()
    modified = rendered != text

    if modified and not dry_run:
        write_source(file_path, rendered, config.encoding)
        logger.info("file_rewritten", file=file_path, changes=len(changes))

    result: Dict[str, Any] = {
        "file": file_path,
        "modified": modified,
        "changes": [change.to_dict() for change in changes],
    }
    if dry_run:
        result["diff"] = _unified_diff(file_path, text, rendered) if modified else ""
    return result


def apply_strings_impl(
    files: List[str],
    store_path: Optional[str] = None,
    dry_run: bool = False,
    backup: bool = False,
    config: Optional[StringBirdConfig] = None,
) -> Dict[str, Any]:
    """Apply the store to each file, overwriting files in place.

    The store is loaded once, before any file is touched, and every file gets
    its own copy. A failure stops the run at that file; files written earlier
    in the run stay written.

    Args:
        files: Source files to rewrite, processed in order
        store_path: Store file to read (defaults to config.store_file)
        dry_run: Report changes and diffs without writing any file
        backup: Snapshot all input files before the first write
        config: Effective configuration (defaults to StringBirdConfig())

    Returns:
        Dict with store_file, dry_run, files_processed, modified_files,
        changes_applied, backup_id and per-file results

    Raises:
        ValueError: If no files are given
        StringBirdError: On a malformed store or the first per-file failure
    """
    if not files:
        raise ValueError("At least one file is required")

    config = config or StringBirdConfig()
    store_path = store_path or config.store_file
    logger = get_logger("apply.service")
    start_time = time.time()

    logger.info("apply_started", files=len(files), store_file=store_path, dry_run=dry_run)

    try:
        store = load_store(store_path, config.encoding)
    except StringBirdError as e:
        sentry_sdk.capture_exception(e, extras={"store_path": store_path})
        raise

    project_folder = os.path.abspath(os.getcwd())
    backup_id: Optional[str] = None
    if backup and not dry_run:
        backup_id = create_backup(files, project_folder, config.backup_dir, store_file=store_path)

    file_results: List[Dict[str, Any]] = []

    with sentry_sdk.start_span(op="stringbird.apply", name="Applying stored literals") as span:
        span.set_data("file_count", len(files))
        span.set_data("dry_run", dry_run)

        for file_path in files:
            logger.info("apply_file_started", file=file_path)
            try:
                file_results.append(apply_file(file_path, store, config, dry_run=dry_run))
            except StringBirdError as e:
                written = [r["file"] for r in file_results if r["modified"] and not dry_run]
                logger.error("apply_failed", file=file_path, error=str(e), files_already_written=written)
                sentry_sdk.capture_exception(e, extras={"file": file_path, "files_already_written": written})
                raise
            finally:
                if backup_id:
                    record_applied_changes(backup_id, project_folder, file_results, config.backup_dir)

    modified_files = [r["file"] for r in file_results if r["modified"]]
    changes_applied = sum(len(r["changes"]) for r in file_results)

    execution_time = time.time() - start_time
    logger.info(
        "apply_completed",
        execution_time_seconds=round(execution_time, 3),
        dry_run=dry_run,
        files_processed=len(file_results),
        modified_files=len(modified_files),
        changes=changes_applied,
        status="success"
    )

    return {
        "store_file": store_path,
        "dry_run": dry_run,
        "files_processed": len(file_results),
        "modified_files": modified_files,
        "changes_applied": changes_applied,
        "backup_id": backup_id,
        "files": file_results,
    }


def rollback_apply_impl(backup_id: str, config: Optional[StringBirdConfig] = None) -> Dict[str, Any]:
    """Undo an apply run: restore the files it rewrote from its backup."""
    config = config or StringBirdConfig()
    return restore_backup(backup_id, os.path.abspath(os.getcwd()), config.backup_dir)


def list_backups_impl(config: Optional[StringBirdConfig] = None) -> List[Dict[str, Any]]:
    """List apply backups in the working directory, newest first."""
    config = config or StringBirdConfig()
    return list_available_backups(os.path.abspath(os.getcwd()), config.backup_dir)
