"""Tests for the LZ77 algorithm."""

import io
from unittest.mock import MagicMock, call

import pytest

from algorithms.LZ77 import LZ77
from exceptions import MatchRangeError, ProtocolError
from symbols import RESET, BackRef, DictRef, Literal


def literals(text):
    return [Literal(b) for b in text]


class TestCompress:
    def test_finds_repeated_sequence(self):
        symbols = LZ77().compress_bytes(b"abcdebcdfghij")
        assert symbols == literals(b"abcde") + [BackRef(4, 3)] + literals(b"fghij")

    def test_empty_input(self):
        assert LZ77().compress_bytes(b"") == []

    def test_single_byte(self):
        assert LZ77().compress_bytes(b"z") == [Literal(ord("z"))]

    def test_run_of_one_byte_overlaps_itself(self):
        assert LZ77().compress_bytes(b"a" * 10) == [Literal(97), BackRef(1, 9)]

    def test_long_run_split_at_max_length(self):
        symbols = LZ77().compress_bytes(b"a" * 600)
        assert symbols == [Literal(97), BackRef(1, 258), BackRef(1, 258), BackRef(1, 83)]

    def test_custom_limits(self):
        symbols = LZ77(max_distance=4, max_length=5).compress_bytes(b"abcabcabcabc")
        assert symbols == literals(b"abc") + [BackRef(3, 5), BackRef(3, 4)]

    def test_writes_to_encoder(self):
        encoder = MagicMock()
        LZ77().compress(io.BytesIO(b"abab"), encoder)
        assert encoder.mock_calls == [
            call.set_algorithm("lz77"),
            call.write(Literal(97)),
            call.write(Literal(98)),
            call.write(Literal(97)),
            call.write(Literal(98)),
            call.close(),
        ]


class TestDecompress:
    def test_decodes_symbols(self, list_decoder):
        symbols = literals(b"abcde") + [BackRef(4, 3)] + literals(b"fghij")
        out = io.BytesIO()
        LZ77().decompress(list_decoder("lz77", symbols), out)
        assert out.getvalue() == b"abcdebcdfghij"

    def test_overlapping_reference(self):
        assert LZ77().decompress_bytes([Literal(97), BackRef(1, 9)]) == b"a" * 10

    def test_wrong_algorithm(self, list_decoder):
        with pytest.raises(ProtocolError, match="lzw data with a lz77"):
            LZ77().decompress(list_decoder("lzw", []), io.BytesIO())

    @pytest.mark.parametrize("symbol", [DictRef(65), RESET])
    def test_foreign_symbols(self, symbol):
        with pytest.raises(ProtocolError, match="unrecognized type"):
            LZ77().decompress_bytes([Literal(97), symbol])

    def test_reference_before_start(self):
        with pytest.raises(MatchRangeError):
            LZ77().decompress_bytes([Literal(97), BackRef(2, 3)])

    def test_reference_longer_than_limit(self):
        with pytest.raises(MatchRangeError):
            LZ77(max_length=8).decompress_bytes([Literal(97), BackRef(1, 9)])
