"""Store codec - line-oriented ``key=value`` encoding of a StringMap.

Values are escaped so each entry fits on one line: backslash becomes ``\\\\``
and newline becomes ``\\n``. Nothing else is escaped, including ``=``.
Decoding splits every line on its first ``=``, so values may contain ``=``
but keys may not.
"""

import os
from typing import Iterable, List, Optional

from stringbird.constants import StoreDefaults
from stringbird.core.exceptions import OutputWriteError, SourceLoadError, StoreFormatError, StoreNotFoundError
from stringbird.core.logging import get_logger
from stringbird.models.literals import StringMap


def encode_value(value: str) -> str:
    """Escape backslashes and newlines in a store value."""
    encoded: List[str] = []
    for char in value:
        if char == "\\":
            encoded.append("\\\\")
        elif char == "\n":
            encoded.append("\\n")
        else:
            encoded.append(char)
    return "".join(encoded)


def decode_value(value: str) -> str:
    """Undo encode_value.

    For any other escaped character the backslash is dropped and the
    character kept. A trailing lone backslash is kept.
    """
    decoded: List[str] = []
    i = 0
    while i < len(value):
        char = value[i]
        if char == "\\" and i + 1 < len(value):
            following = value[i + 1]
            if following == "n":
                decoded.append("\n")
            elif following == "\\":
                decoded.append("\\")
            else:
                decoded.append(following)
            i += 2
            continue
        decoded.append(char)
        i += 1
    return "".join(decoded)


def encode_store(store: StringMap, sort_keys: bool = StoreDefaults.SORT_KEYS) -> str:
    """Encode a store as newline-terminated ``key=escapedValue`` lines.

    Args:
        store: Mapping of key to literal source text
        sort_keys: Write entries sorted by key instead of insertion order

    Returns:
        Encoded store text
    """
    keys: Iterable[str] = sorted(store) if sort_keys else store
    return "".join(
        f"{key}{StoreDefaults.SEPARATOR}{encode_value(store[key])}\n"
        for key in keys
    )


def decode_store(text: str, store_path: Optional[str] = None) -> StringMap:
    """Decode store text produced by encode_store.

    Args:
        text: Store text
        store_path: Store location, only used in error messages

    Returns:
        Decoded mapping; a key repeated on a later line overrides earlier ones

    Raises:
        StoreFormatError: If any line has no '=' separator
    """
    store: StringMap = {}
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    for line_number, line in enumerate(lines, start=1):
        if line.endswith("\r"):
            line = line[:-1]
        key, separator, value = line.partition(StoreDefaults.SEPARATOR)
        if not separator:
            raise StoreFormatError(line_number, line, store_path)
        store[key] = decode_value(value)

    return store


def save_store(store: StringMap, store_path: str, encoding: str = StoreDefaults.ENCODING,
               sort_keys: bool = StoreDefaults.SORT_KEYS) -> None:
    """Encode and write a store, replacing any existing file.

    Raises:
        OutputWriteError: If the file cannot be written
    """
    logger = get_logger("store.codec")
    text = encode_store(store, sort_keys=sort_keys)

    try:
        with open(store_path, "w", encoding=encoding, newline="") as f:
            f.write(text)
    except (OSError, UnicodeEncodeError) as e:
        logger.error("store_write_failed", store_path=store_path, error=str(e))
        raise OutputWriteError(store_path, str(e)) from e

    logger.info("store_written", store_path=store_path, keys=len(store), bytes=len(text.encode(encoding)))


def load_store(store_path: str, encoding: str = StoreDefaults.ENCODING) -> StringMap:
    """Read and decode a store file.

    Raises:
        StoreNotFoundError: If the file does not exist
        SourceLoadError: If the file cannot be read
        StoreFormatError: If the file is malformed
    """
    logger = get_logger("store.codec")

    if not os.path.exists(store_path):
        logger.error("store_not_found", store_path=store_path)
        raise StoreNotFoundError(store_path)

    try:
        with open(store_path, "r", encoding=encoding, newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error("store_read_failed", store_path=store_path, error=str(e))
        raise SourceLoadError(store_path, str(e)) from e

    try:
        store = decode_store(text, store_path)
    except StoreFormatError as e:
        logger.error("store_malformed", store_path=store_path, line_number=e.line_number)
        raise

    logger.info("store_loaded", store_path=store_path, keys=len(store))
    return store
