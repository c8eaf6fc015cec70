"""Tests for the LZW algorithm."""

import io
from unittest.mock import MagicMock

import pytest

from algorithms.LZW import LZWCompressor
from exceptions import ProtocolError
from symbols import RESET, BackRef, DictRef, Literal

TEXT = b"TOBEORNOTTOBEORTOBEORNOT"


def refs(*entries):
    return [RESET if e is RESET else DictRef(e if isinstance(e, int) else ord(e)) for e in entries]


class TestCompress:
    def test_classic_example(self):
        symbols = LZWCompressor().compress_bytes(TEXT)
        assert symbols == refs(*"TOBEORNOT", 257, 259, 261, 266, 260, 262, 264)

    def test_reset_when_full(self):
        symbols = LZWCompressor(max_entries=268).compress_bytes(TEXT)
        assert symbols == refs(
            *"TOBEORNOT", 257, 259, RESET, *"ORTOBE", 257, *"NOT"
        )

    def test_empty_input(self):
        assert LZWCompressor().compress_bytes(b"") == []

    def test_single_byte(self):
        assert LZWCompressor().compress_bytes(b"\xff") == [DictRef(255)]

    def test_entry_used_right_after_creation(self):
        symbols = LZWCompressor().compress_bytes(b"TOTTTTTTBE")
        assert symbols == refs(*"TOT", 259, 260, *"BE")

    def test_tags_encoder(self):
        encoder = MagicMock()
        LZWCompressor().compress(io.BytesIO(b"ab"), encoder)
        encoder.set_algorithm.assert_called_once_with("lzw")
        assert encoder.write.call_count == 2
        encoder.close.assert_called_once_with()


class TestDecompress:
    def test_classic_example(self, list_decoder):
        symbols = refs(*"TOBEORNOT", 257, 259, 261, 266, 260, 262, 264)
        out = io.BytesIO()
        LZWCompressor().decompress(list_decoder("lzw", symbols), out)
        assert out.getvalue() == TEXT

    def test_with_reset(self):
        symbols = refs(*"TOBEORNOT", 257, 259, RESET, *"ORTOBE", 257, *"NOT")
        assert LZWCompressor(max_entries=268).decompress_bytes(symbols) == TEXT

    def test_reset_understood_with_default_size(self):
        symbols = refs(*"TOBEORNOT", 257, 259, RESET, *"ORTOBE", 257, *"NOT")
        assert LZWCompressor().decompress_bytes(symbols) == TEXT

    def test_entry_used_right_after_creation(self):
        symbols = refs(*"TOT", 259, 260, *"BE")
        assert LZWCompressor().decompress_bytes(symbols) == b"TOTTTTTTBE"

    def test_wrong_algorithm(self, list_decoder):
        with pytest.raises(ProtocolError, match="lz77 data with a lzw"):
            LZWCompressor().decompress(list_decoder("lz77", []), io.BytesIO())

    @pytest.mark.parametrize("symbol", [Literal(65), BackRef(1, 3)])
    def test_foreign_symbols(self, symbol):
        with pytest.raises(ProtocolError, match="invalid symbol type"):
            LZWCompressor().decompress_bytes([DictRef(65), symbol])

    def test_entry_256_is_invalid(self):
        with pytest.raises(ProtocolError, match="unknown dictionary entry 256"):
            LZWCompressor().decompress_bytes(refs("A", "B", 256))

    def test_unknown_entry_first(self):
        with pytest.raises(ProtocolError):
            LZWCompressor().decompress_bytes([DictRef(257)])

    def test_entry_from_the_future(self):
        with pytest.raises(ProtocolError):
            LZWCompressor().decompress_bytes(refs("A", "B", 300))

    def test_entry_forgotten_after_reset(self):
        with pytest.raises(ProtocolError):
            LZWCompressor().decompress_bytes(refs("A", "B", "C", RESET, 257))

    def test_overflow_without_reset(self):
        # 257 and 258 are the only entries; a third insert has no room.
        symbols = refs("A", "B", "C", "D")
        with pytest.raises(ProtocolError, match="overflowed"):
            LZWCompressor(max_entries=259).decompress_bytes(symbols)
