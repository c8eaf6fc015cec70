"""
This class implements the LZ77 compression algorithm.
It compresses data by finding repeated sequences in a sliding window and
replacing them with back-references.
"""

from typing import BinaryIO, Iterable, Iterator, Optional

from compressor_ABC import CompressionAlgorithm
from exceptions import ProtocolError
from lz_window import EOF, MAX_DISTANCE, MAX_LENGTH, LZWindow
from symbols import BackRef, Literal, Symbol


class LZ77(CompressionAlgorithm):
    """
    LZ77 compression algorithm implementation.
    Produces Literal and BackRef symbols, choosing the longest match at
    every position (greedy parsing).
    """

    name = "lz77"

    MAX_DISTANCE = MAX_DISTANCE
    MAX_LENGTH = MAX_LENGTH

    def __init__(
        self,
        max_distance: Optional[int] = None,
        max_length: Optional[int] = None,
        buffer_size: Optional[int] = None,
    ) -> None:
        """
        Args:
            max_distance: Longest back-reference distance
            max_length: Longest back-reference length
            buffer_size: Capacity of the window used while compressing
        """
        self.max_distance = max_distance if max_distance is not None else self.MAX_DISTANCE
        self.max_length = max_length if max_length is not None else self.MAX_LENGTH
        self.buffer_size = buffer_size

    def compress_symbols(self, input_stream: BinaryIO) -> Iterator[Symbol]:
        window = LZWindow.for_reading(
            input_stream,
            max_distance=self.max_distance,
            max_length=self.max_length,
            buffer_size=self.buffer_size,
        )
        byte = bytearray()
        while True:
            match = window.find_past_match()
            if match is not None:
                window.skip(match.length)
                yield BackRef(match.distance, match.length)
                continue
            del byte[:]
            if window.read(byte, 1) == EOF:
                return
            yield Literal(byte[0])

    def decompress_symbols(
        self, symbols: Iterable[Symbol], output_stream: BinaryIO
    ) -> None:
        window = LZWindow.for_writing(
            output_stream, max_distance=self.max_distance, max_length=self.max_length
        )
        for symbol in symbols:
            if isinstance(symbol, BackRef):
                window.repeat_past_match(symbol.distance, symbol.length)
            elif isinstance(symbol, Literal):
                window.write(symbol.value)
            else:
                raise ProtocolError(
                    f"Found symbol of unrecognized type {type(symbol).__name__}"
                )
