"""Store feature - encoding and persistence of the key-value store."""

from stringbird.features.store.codec import (
    decode_store,
    decode_value,
    encode_store,
    encode_value,
    load_store,
    save_store,
)

__all__ = [
    "encode_value",
    "decode_value",
    "encode_store",
    "decode_store",
    "save_store",
    "load_store",
]
