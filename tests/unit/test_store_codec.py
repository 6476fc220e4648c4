"""Tests for the store codec.

Tests cover:
- Value escaping of backslashes and newlines
- Decoding of known and unknown escape sequences
- Store encoding order and line format
- Store decoding of separators, CRLF endings and malformed lines
- Loading and saving store files
"""

import os

import pytest

from stringbird.core.exceptions import OutputWriteError, SourceLoadError, StoreFormatError, StoreNotFoundError
from stringbird.features.store.codec import (
    decode_store,
    decode_value,
    encode_store,
    encode_value,
    load_store,
    save_store,
)


class TestEncodeValue:
    """Tests for encode_value."""

    def test_plain_text_unchanged(self):
        assert encode_value('"Hello, world"') == '"Hello, world"'

    def test_escapes_newline(self):
        assert encode_value("`line one\nline two`") == "`line one\\nline two`"

    def test_escapes_backslash(self):
        assert encode_value('"a\\nb"') == '"a\\\\nb"'

    def test_does_not_escape_equals(self):
        assert encode_value('"a=b"') == '"a=b"'

    def test_output_has_no_newline(self):
        assert "\n" not in encode_value("`\n\n\\\n`")


class TestDecodeValue:
    """Tests for decode_value."""

    def test_decodes_newline(self):
        assert decode_value("`a\\nb`") == "`a\nb`"

    def test_decodes_backslash(self):
        assert decode_value('"a\\\\nb"') == '"a\\nb"'

    def test_unknown_escape_drops_backslash(self):
        assert decode_value("'don\\'t'") == "'don't'"

    def test_unknown_escape_before_letter(self):
        assert decode_value('"tab\\there"') == '"tabthere"'

    def test_trailing_backslash_kept(self):
        assert decode_value("abc\\") == "abc\\"

    @pytest.mark.parametrize("value", [
        '"plain"',
        "`multi\nline`",
        '"escaped \\" quote"',
        '"path\\\\to\\\\file"',
        "'unicode é ✓'",
        "\\\n\\n",
    ])
    def test_inverse_of_encode(self, value):
        assert decode_value(encode_value(value)) == value


class TestEncodeStore:
    """Tests for encode_store."""

    def test_empty_store(self):
        assert encode_store({}) == ""

    def test_one_line_per_entry(self):
        text = encode_store({"b": '"B"', "a": '"A"'})

        assert text == 'a="A"\nb="B"\n'

    def test_insertion_order_when_not_sorted(self):
        text = encode_store({"b": '"B"', "a": '"A"'}, sort_keys=False)

        assert text == 'b="B"\na="A"\n'

    def test_multiline_value_stays_on_one_line(self):
        text = encode_store({"k": "`one\ntwo`"})

        assert text == "k=`one\\ntwo`\n"


class TestDecodeStore:
    """Tests for decode_store."""

    def test_empty_text(self):
        assert decode_store("") == {}

    def test_splits_on_first_equals(self):
        assert decode_store('k="a=b=c"\n') == {"k": '"a=b=c"'}

    def test_missing_final_newline(self):
        assert decode_store('a="A"\nb="B"') == {"a": '"A"', "b": '"B"'}

    def test_crlf_line_endings(self):
        assert decode_store('a="A"\r\nb="B"\r\n') == {"a": '"A"', "b": '"B"'}

    def test_later_duplicate_wins(self):
        assert decode_store('k="first"\nk="second"\n') == {"k": '"second"'}

    def test_empty_value(self):
        assert decode_store("k=\n") == {"k": ""}

    def test_hand_edited_escape(self):
        assert decode_store("k='it\\'s'\n") == {"k": "'it's'"}

    def test_line_without_separator_raises(self):
        with pytest.raises(StoreFormatError) as exc_info:
            decode_store('a="A"\nbroken\n', store_path="stringbird")

        assert exc_info.value.line_number == 2
        assert exc_info.value.line == "broken"
        assert "stringbird:2" in str(exc_info.value)

    def test_empty_line_in_the_middle_raises(self):
        with pytest.raises(StoreFormatError) as exc_info:
            decode_store('a="A"\n\nb="B"\n')

        assert exc_info.value.line_number == 2

    def test_round_trip(self):
        store = {
            "title": '"Welcome"',
            "body": "`Hello ${name}\nBye`",
            "path": "'C:\\\\temp'",
        }

        assert decode_store(encode_store(store)) == store


class TestStoreFiles:
    """Tests for save_store and load_store."""

    def test_save_then_load(self, tmp_path):
        store_path = str(tmp_path / "stringbird")
        store = {"a": '"A"', "b": "`B\n`"}

        save_store(store, store_path)

        assert load_store(store_path) == store

    def test_save_replaces_existing_file(self, tmp_path):
        store_path = tmp_path / "stringbird"
        store_path.write_text('stale="entry"\n')

        save_store({"fresh": '"entry"'}, str(store_path))

        assert store_path.read_text() == 'fresh="entry"\n'

    def test_save_empty_store_writes_empty_file(self, tmp_path):
        store_path = tmp_path / "stringbird"

        save_store({}, str(store_path))

        assert store_path.read_text() == ""

    def test_load_missing_store(self, tmp_path):
        with pytest.raises(StoreNotFoundError):
            load_store(str(tmp_path / "missing"))

    def test_load_malformed_store(self, tmp_path):
        store_path = tmp_path / "stringbird"
        store_path.write_text("no separator\n")

        with pytest.raises(StoreFormatError):
            load_store(str(store_path))

    def test_load_undecodable_store(self, tmp_path):
        store_path = tmp_path / "stringbird"
        store_path.write_bytes(b'k="\xff\xfe"\n')

        with pytest.raises(SourceLoadError):
            load_store(str(store_path))

    def test_save_into_missing_directory(self, tmp_path):
        store_path = os.path.join(str(tmp_path), "missing", "stringbird")

        with pytest.raises(OutputWriteError):
            save_store({"a": '"A"'}, store_path)
