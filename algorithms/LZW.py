"""
LZW Compression and Decompression
"""

from typing import BinaryIO, Iterable, Iterator, Optional

from algorithms.lzw_dictionary import LZWDictionary
from compressor_ABC import CompressionAlgorithm
from exceptions import ProtocolError
from symbols import RESET, DictRef, Reset, Symbol


class LZWCompressor(CompressionAlgorithm):
    """
    LZW compression over a dictionary of at most `max_entries` entries.
    When the dictionary fills up it is cleared and a Reset symbol is emitted.
    """

    name = "lzw"

    MAX_ENTRIES = 4096

    def __init__(self, max_entries: Optional[int] = None) -> None:
        self.max_entries = max_entries if max_entries is not None else self.MAX_ENTRIES

    def compress_symbols(self, input_stream: BinaryIO) -> Iterator[Symbol]:
        """Greedy LZW: emits the longest sequence already in the dictionary."""
        dictionary = LZWDictionary(self.max_entries)
        sequence = bytearray()
        previous = None

        while True:
            if dictionary.is_full:
                dictionary.reset()
                yield RESET
            c = input_stream.read(1)
            if not c:
                break
            sequence += c
            entry = dictionary.lookup(sequence)
            if entry is None:
                yield DictRef(previous)
                dictionary.insert(previous, c[0])
                sequence = bytearray(c)
                previous = c[0]
            else:
                previous = entry

        if previous is not None:
            yield DictRef(previous)

    def decompress_symbols(
        self, symbols: Iterable[Symbol], output_stream: BinaryIO
    ) -> None:
        """
        Rebuilds the dictionary one step behind the encoder: the entry the
        encoder added while emitting the previous reference is only known
        once the first byte of the current one is.
        """
        dictionary = LZWDictionary(self.max_entries)
        previous = None

        for symbol in symbols:
            if isinstance(symbol, Reset):
                dictionary.reset()
                previous = None
                continue
            if not isinstance(symbol, DictRef):
                raise ProtocolError(
                    f"Read invalid symbol type {type(symbol).__name__}"
                )

            entry = symbol.entry
            current = bytearray()
            if previous is not None and entry == dictionary.next_entry:
                # The sequence refers to itself: previous + its own first byte.
                dictionary.reconstruct(previous, current)
                current.append(current[0])
            elif entry in dictionary:
                dictionary.reconstruct(entry, current)
            else:
                raise ProtocolError(f"Reference to unknown dictionary entry {entry}")

            if previous is not None:
                if dictionary.is_full:
                    raise ProtocolError("Dictionary overflowed without a reset")
                dictionary.insert(previous, current[0])
            output_stream.write(bytes(current))
            previous = entry
