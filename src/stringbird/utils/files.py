"""Source file reading and writing.

Files are read and written whole with newline translation disabled, so
line endings survive an apply run byte for byte.
"""

from stringbird.constants import StoreDefaults
from stringbird.core.exceptions import OutputWriteError, SourceLoadError
from stringbird.core.logging import get_logger


def read_source(path: str, encoding: str = StoreDefaults.ENCODING) -> str:
    """Read a source file.

    Raises:
        SourceLoadError: If the file cannot be read or decoded
    """
    try:
        with open(path, "r", encoding=encoding, newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        get_logger("files").error("source_load_failed", path=path, error=str(e))
        raise SourceLoadError(path, str(e)) from e


def write_source(path: str, text: str, encoding: str = StoreDefaults.ENCODING) -> None:
    """Overwrite a source file in place.

    Raises:
        OutputWriteError: If the file cannot be written
    """
    try:
        with open(path, "w", encoding=encoding, newline="") as f:
            f.write(text)
    except (OSError, UnicodeEncodeError) as e:
        get_logger("files").error("source_write_failed", path=path, error=str(e))
        raise OutputWriteError(path, str(e)) from e
