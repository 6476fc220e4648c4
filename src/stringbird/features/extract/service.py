"""Extract feature service - builds the store from a list of source files."""

import time
from typing import Any, Dict, List, Optional

import sentry_sdk

from stringbird.core.exceptions import StringBirdError
from stringbird.core.logging import get_logger
from stringbird.core.parser import parse_source, resolve_dialect
from stringbird.features.extract.extractor import extract_literals
from stringbird.features.store.codec import save_store
from stringbird.models.config import StringBirdConfig
from stringbird.models.literals import StringMap
from stringbird.utils.files import read_source


def extract_file(file_path: str, config: StringBirdConfig) -> StringMap:
    """Parse one file and collect its marked literals.

    Args:
        file_path: Path to the source file
        config: Effective configuration (dialect, encoding)

    Returns:
        Mapping of mark key to exact literal source text

    Raises:
        SourceLoadError: If the file cannot be read
        SourceParseError: If the file does not parse
    """
    text = read_source(file_path, config.encoding)
    dialect = resolve_dialect(file_path, config.dialect)
    tree = parse_source(text, dialect, origin=file_path)
    return extract_literals(tree)


def extract_strings_impl(
    files: List[str],
    store_path: Optional[str] = None,
    config: Optional[StringBirdConfig] = None,
) -> Dict[str, Any]:
    """Extract marked literals from files into a fresh store file.

    Files are processed in the given order and merged into one store; when
    two files mark the same key, the later file wins. The store is written
    once, after every file has been processed, replacing any previous store.

    Args:
        files: Source files to scan, in precedence order
        store_path: Store file to write (defaults to config.store_file)
        config: Effective configuration (defaults to StringBirdConfig())

    Returns:
        Dict with store_file, files_processed, keys, overridden and per-file results

    Raises:
        ValueError: If no files are given
        StringBirdError: On the first load, parse or write failure
    """
    if not files:
        raise ValueError("At least one file is required")

    config = config or StringBirdConfig()
    store_path = store_path or config.store_file
    logger = get_logger("extract.service")
    start_time = time.time()

    logger.info("extract_started", files=len(files), store_file=store_path, dialect=config.dialect)

    store: StringMap = {}
    overridden: List[str] = []
    file_results: List[Dict[str, Any]] = []

    with sentry_sdk.start_span(op="stringbird.extract", name="Extracting marked literals") as span:
        span.set_data("file_count", len(files))

        for file_path in files:
            logger.info("extract_file_started", file=file_path)
            try:
                strings = extract_file(file_path, config)
            except StringBirdError as e:
                logger.error("extract_failed", file=file_path, error=str(e))
                sentry_sdk.capture_exception(e, extras={"file": file_path, "files_processed": len(file_results)})
                raise

            for key, value in strings.items():
                if key in store and store[key] != value and key not in overridden:
                    overridden.append(key)
            store.update(strings)
            file_results.append({"file": file_path, "keys": len(strings)})

        try:
            save_store(store, store_path, encoding=config.encoding, sort_keys=config.sort_keys)
        except StringBirdError as e:
            sentry_sdk.capture_exception(e, extras={"store_path": store_path, "keys": len(store)})
            raise

        span.set_data("key_count", len(store))

    execution_time = time.time() - start_time
    logger.info(
        "extract_completed",
        execution_time_seconds=round(execution_time, 3),
        files_processed=len(file_results),
        keys=len(store),
        overridden=len(overridden),
        status="success"
    )

    return {
        "store_file": store_path,
        "files_processed": len(file_results),
        "keys": len(store),
        "overridden": overridden,
        "files": file_results,
    }
