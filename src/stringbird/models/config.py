"""Configuration models for stringbird."""

import codecs
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from stringbird.constants import BackupDefaults, DEFAULT_DIALECT, StoreDefaults

DialectName = Literal["tsx", "typescript", "javascript", "auto"]


class StringBirdConfig(BaseModel):
    """Settings loaded from .stringbird.yml (all optional)."""

    store_file: str = Field(default=StoreDefaults.FILENAME, description="Store file path, relative to the working directory")
    dialect: DialectName = Field(default=DEFAULT_DIALECT, description="Syntax dialect used to parse sources")
    encoding: str = Field(default=StoreDefaults.ENCODING, description="Encoding of sources and the store file")
    sort_keys: bool = Field(default=StoreDefaults.SORT_KEYS, description="Write store entries sorted by key")
    backup_dir: str = Field(default=BackupDefaults.DIRECTORY, description="Directory for apply backups")

    @field_validator("store_file", "backup_dir")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Reject empty paths."""
        if not v or not v.strip():
            raise ValueError("path must not be empty")
        return v

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Ensure the encoding is known to Python."""
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"unknown encoding: {v}") from e
        return v
