"""Extract feature - collects marked literals into the store."""

from stringbird.features.extract.extractor import LiteralExtractor, extract_literals
from stringbird.features.extract.service import extract_file, extract_strings_impl
from stringbird.features.extract.tools import register_extract_tools

__all__ = [
    # Extraction
    "LiteralExtractor",
    "extract_literals",
    # Service functions
    "extract_file",
    "extract_strings_impl",
    # Registration
    "register_extract_tools",
]
