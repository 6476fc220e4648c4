"""Backups of apply runs.

Apply overwrites sources in place and never rolls back by itself. A backup
copies every input before the first write, then records which files apply
actually rewrote and the literal changes it made to them. Rollback uses that
record: it reverts only the files apply rewrote, and leaves alone any file
edited by hand since.

Metadata layout (``backup-metadata.json``)::

    {
      "backup_id": "backup-20260101-120000-000",
      "timestamp": "2026-01-01T12:00:00.000000",
      "project_folder": "/work/app",
      "store_file": "stringbird",
      "files": [
        {
          "original": "/work/app/src/page.tsx",
          "backup": ".../backup-.../src/page.tsx",
          "original_hash": "<sha256 before apply>",
          "applied_hash": "<sha256 after apply, null if apply left it alone>",
          "changes": [{"key": "page.title", "kind": "string", ...}]
        }
      ]
    }
"""

import hashlib
import json
import os
import shutil
from datetime import datetime
from typing import Any, Dict, List, Optional

from stringbird.constants import BackupDefaults
from stringbird.core.logging import get_logger


def _backup_relative_path(file_path: str, project_folder: str, index: int) -> str:
    rel_path = os.path.relpath(file_path, project_folder)
    if rel_path.startswith(os.pardir) or os.path.isabs(rel_path):
        # Outside the project folder
        return os.path.join("_external", f"{index}-{os.path.basename(file_path)}")
    return rel_path


def _metadata_path(project_folder: str, backup_dir_name: str, backup_id: str) -> str:
    return os.path.join(project_folder, backup_dir_name, backup_id, BackupDefaults.METADATA_FILE)


def _read_metadata(path: str) -> Optional[Dict[str, Any]]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        get_logger("apply.backup").warning("backup_metadata_unreadable", path=path, error=str(e))
        return None


def _write_metadata(path: str, metadata: Dict[str, Any]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(metadata, f, indent=2)


def get_file_hash(file_path: str) -> str:
    """SHA-256 hex digest of a file's bytes, or "" if it cannot be read."""
    try:
        with open(file_path, "rb") as f:
            return hashlib.sha256(f.read()).hexdigest()
    except OSError:
        return ""


def create_backup(
    files_to_backup: List[str],
    project_folder: str,
    backup_dir_name: str = BackupDefaults.DIRECTORY,
    store_file: Optional[str] = None,
) -> str:
    """Copy the inputs of an apply run before anything is written.

    Args:
        files_to_backup: Source files that apply may overwrite
        project_folder: Folder the backup directory lives in
        backup_dir_name: Backup directory name inside project_folder
        store_file: Store the run applies, recorded for listing

    Returns:
        backup_id: Timestamp-based identifier, unique within backup_dir_name
    """
    logger = get_logger("apply.backup")

    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S-%f")[:-3]
    backup_id = f"backup-{timestamp}"
    backup_base_dir = os.path.join(project_folder, backup_dir_name)
    suffix = 1
    while os.path.exists(os.path.join(backup_base_dir, backup_id)):
        backup_id = f"backup-{timestamp}-{suffix}"
        suffix += 1
    backup_dir = os.path.join(backup_base_dir, backup_id)
    os.makedirs(backup_dir)

    entries: List[Dict[str, Any]] = []
    for index, file_path in enumerate(files_to_backup):
        original = os.path.abspath(file_path)
        if not os.path.isfile(original):
            logger.warning("file_not_found_for_backup", file_path=file_path)
            continue

        backup_path = os.path.join(backup_dir, _backup_relative_path(original, project_folder, index))
        os.makedirs(os.path.dirname(backup_path), exist_ok=True)
        shutil.copy2(original, backup_path)
        entries.append({
            "original": original,
            "backup": backup_path,
            "original_hash": get_file_hash(original),
            "applied_hash": None,
            "changes": [],
        })

    _write_metadata(os.path.join(backup_dir, BackupDefaults.METADATA_FILE), {
        "backup_id": backup_id,
        "timestamp": datetime.now().isoformat(),
        "project_folder": project_folder,
        "store_file": store_file,
        "files": entries,
    })

    logger.info("backup_created", backup_id=backup_id, files_backed_up=len(entries), backup_dir=backup_dir)
    return backup_id


def record_applied_changes(
    backup_id: str,
    project_folder: str,
    file_results: List[Dict[str, Any]],
    backup_dir_name: str = BackupDefaults.DIRECTORY,
) -> None:
    """Record which backed-up files apply rewrote and what it changed.

    Args:
        backup_id: Backup taken before the run
        project_folder: Folder the backup directory lives in
        file_results: apply_file results of the files processed so far
        backup_dir_name: Backup directory name inside project_folder
    """
    path = _metadata_path(project_folder, backup_dir_name, backup_id)
    metadata = _read_metadata(path)
    if metadata is None:
        return

    written = {
        os.path.abspath(result["file"]): result["changes"]
        for result in file_results
        if result["modified"]
    }
    for entry in metadata["files"]:
        if entry["original"] in written:
            entry["applied_hash"] = get_file_hash(entry["original"])
            entry["changes"] = written[entry["original"]]

    _write_metadata(path, metadata)
    get_logger("apply.backup").info("backup_changes_recorded", backup_id=backup_id, files_rewritten=len(written))


def restore_backup(
    backup_id: str,
    project_folder: str,
    backup_dir_name: str = BackupDefaults.DIRECTORY,
) -> Dict[str, Any]:
    """Undo an apply run from its backup.

    Only files that apply rewrote are restored. A file whose content no
    longer matches what apply wrote is reported as a conflict and kept.

    Returns:
        Dict with success, restored_files, reverted_changes (file -> changes),
        skipped_files, conflicts and errors
    """
    logger = get_logger("apply.backup")
    result: Dict[str, Any] = {
        "success": False,
        "restored_files": [],
        "reverted_changes": {},
        "skipped_files": [],
        "conflicts": [],
        "errors": [],
    }

    path = _metadata_path(project_folder, backup_dir_name, backup_id)
    if not os.path.isfile(path):
        result["errors"].append(f"Backup not found: {backup_id} in {os.path.join(project_folder, backup_dir_name)}")
        return result
    metadata = _read_metadata(path)
    if metadata is None:
        result["errors"].append(f"Backup metadata unreadable: {path}")
        return result

    for entry in metadata.get("files", []):
        original = entry["original"]
        current_hash = get_file_hash(original)
        if entry.get("applied_hash") is None or current_hash == entry["original_hash"]:
            result["skipped_files"].append(original)
            continue
        if current_hash != entry["applied_hash"]:
            result["conflicts"].append(original)
            continue

        try:
            shutil.copy2(entry["backup"], original)
        except OSError as e:
            result["errors"].append(f"Failed to restore {original}: {e}")
            continue
        result["restored_files"].append(original)
        result["reverted_changes"][original] = entry.get("changes", [])

    result["success"] = not result["errors"] and not result["conflicts"]
    logger.info(
        "backup_restored",
        backup_id=backup_id,
        success=result["success"],
        restored=len(result["restored_files"]),
        skipped=len(result["skipped_files"]),
        conflicts=len(result["conflicts"]),
    )
    return result


def list_available_backups(
    project_folder: str,
    backup_dir_name: str = BackupDefaults.DIRECTORY,
) -> List[Dict[str, Any]]:
    """Summarize the apply backups in project_folder, newest first."""
    backup_base_dir = os.path.join(project_folder, backup_dir_name)
    if not os.path.isdir(backup_base_dir):
        return []

    backups: List[Dict[str, Any]] = []
    for backup_id in os.listdir(backup_base_dir):
        metadata_path = _metadata_path(project_folder, backup_dir_name, backup_id)
        if not os.path.isfile(metadata_path):
            continue
        metadata = _read_metadata(metadata_path)
        if metadata is None:
            continue

        files = metadata.get("files", [])
        rewritten = [entry for entry in files if entry.get("applied_hash")]
        backups.append({
            "backup_id": metadata.get("backup_id", backup_id),
            "timestamp": metadata.get("timestamp"),
            "store_file": metadata.get("store_file"),
            "file_count": len(files),
            "rewritten_files": len(rewritten),
            "changes": sum(len(entry.get("changes", [])) for entry in rewritten),
        })

    backups.sort(key=lambda backup: backup.get("timestamp") or "", reverse=True)
    get_logger("apply.backup").info("listed_backups", backup_count=len(backups), project_folder=project_folder)
    return backups
