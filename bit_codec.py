"""
Compact binary wire format for symbol streams.

Header: the magic bytes b"DBLT", one byte with the length of the algorithm
name and the name itself in UTF-8. Every symbol then starts with a 2-bit tag:

    00  literal            8 bits value
    01  back-reference    16 bits distance - 1, 9 bits length
    10  dictionary ref    16 bits entry
    11  control            1 bit: 0 = reset, 1 = end of stream

The stream is padded with zero bits up to a byte boundary.
"""

from typing import BinaryIO, Optional

from bit_reader import BitReader
from bit_writer import BitWriter
from codec_ABC import Codec, Decoder, Encoder
from exceptions import CodecError
from symbols import RESET, BackRef, DictRef, Literal, Reset, Symbol

MAGIC = b"DBLT"

TAG_BITS = 2
TAG_LITERAL = 0b00
TAG_BACKREF = 0b01
TAG_DICTREF = 0b10
TAG_CONTROL = 0b11

CONTROL_RESET = 0
CONTROL_END = 1

DISTANCE_BITS = 16
LENGTH_BITS = 9
ENTRY_BITS = 16


class BitEncoder(Encoder):
    def __init__(self, output_stream: BinaryIO):
        super().__init__(output_stream)
        self.writer = BitWriter(output_stream)

    def _write_header(self, algorithm: str) -> None:
        name = algorithm.encode("utf-8")
        if len(name) > 255:
            raise CodecError(f"Algorithm name too long: {algorithm!r}")
        self.writer.write_bytes(MAGIC)
        self.writer.write_bits_msb(len(name), 8)
        self.writer.write_bytes(name)

    def _write_symbol(self, symbol: Symbol) -> None:
        writer = self.writer
        if isinstance(symbol, Literal):
            _check_fits("byte value", symbol.value, 8)
            writer.write_bits_msb(TAG_LITERAL, TAG_BITS)
            writer.write_bits_msb(symbol.value, 8)
        elif isinstance(symbol, BackRef):
            _check_fits("distance", symbol.distance - 1, DISTANCE_BITS)
            _check_fits("length", symbol.length, LENGTH_BITS)
            writer.write_bits_msb(TAG_BACKREF, TAG_BITS)
            writer.write_bits_msb(symbol.distance - 1, DISTANCE_BITS)
            writer.write_bits_msb(symbol.length, LENGTH_BITS)
        elif isinstance(symbol, DictRef):
            _check_fits("dictionary entry", symbol.entry, ENTRY_BITS)
            writer.write_bits_msb(TAG_DICTREF, TAG_BITS)
            writer.write_bits_msb(symbol.entry, ENTRY_BITS)
        elif isinstance(symbol, Reset):
            writer.write_bits_msb(TAG_CONTROL, TAG_BITS)
            writer.write_bits_msb(CONTROL_RESET, 1)
        else:
            raise CodecError(
                f"Cannot write symbol of unknown type {type(symbol).__name__}"
            )

    def _write_footer(self) -> None:
        self.writer.write_bits_msb(TAG_CONTROL, TAG_BITS)
        self.writer.write_bits_msb(CONTROL_END, 1)
        self.writer.flush()


def _check_fits(what: str, value: int, bits: int) -> None:
    if not 0 <= value < (1 << bits):
        raise CodecError(f"Cannot encode {what} {value} in {bits} bits")


class BitDecoder(Decoder):
    def __init__(self, input_stream: BinaryIO):
        super().__init__(input_stream)
        self.reader = BitReader(input_stream)
        try:
            magic = self.reader.read_bytes(len(MAGIC))
            if magic != MAGIC:
                raise CodecError("Invalid magic number")
            name = self.reader.read_bytes(self.reader.read_bits_msb(8))
        except EOFError as e:
            raise CodecError("Truncated header") from e
        try:
            self.algorithm = name.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CodecError("Algorithm name is not valid UTF-8") from e
        self._finished = False

    def read(self) -> Optional[Symbol]:
        if self._finished:
            return None
        reader = self.reader
        try:
            tag = reader.read_bits_msb(TAG_BITS)
            if tag == TAG_LITERAL:
                return Literal(reader.read_bits_msb(8))
            if tag == TAG_BACKREF:
                distance = reader.read_bits_msb(DISTANCE_BITS) + 1
                return BackRef(distance, reader.read_bits_msb(LENGTH_BITS))
            if tag == TAG_DICTREF:
                return DictRef(reader.read_bits_msb(ENTRY_BITS))
            if reader.read_bit() == CONTROL_RESET:
                return RESET
        except EOFError as e:
            raise CodecError("Truncated symbol stream") from e
        self._finished = True
        return None


class BitCodec(Codec):
    name = "bits"

    def get_encoder(self, output_stream: BinaryIO) -> BitEncoder:
        return BitEncoder(output_stream)

    def get_decoder(self, input_stream: BinaryIO) -> BitDecoder:
        return BitDecoder(input_stream)
