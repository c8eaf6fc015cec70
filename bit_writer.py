from typing import BinaryIO, Optional

from bitarray import bitarray
from bitarray.util import int2ba


class BitWriter:
    """
    Packs bits into a bitarray (most significant bit first) and passes
    complete bytes on to an output stream, if one is given.
    """

    # Complete bytes are handed to the stream once this many bits are pending.
    FLUSH_BITS = 8 * 4096

    def __init__(self, output_stream: Optional[BinaryIO] = None):
        self.bits = bitarray(endian="big")  # endian='big' matters for tobytes()
        self.output_stream = output_stream

    def write_bits_msb(self, value: int, length: int):
        """
        Writes `length` bits of `value`, most significant bit first.
        """
        if length < 0:
            raise ValueError("Length cannot be negative")
        if value < 0 or value >> length:
            raise ValueError(f"Value {value} does not fit in {length} bits")
        if length == 0:
            return
        self.bits.extend(int2ba(value, length=length, endian="big"))
        if self.output_stream is not None and len(self.bits) >= self.FLUSH_BITS:
            self._write_complete_bytes()

    def write_bytes(self, data: bytes):
        for b in data:
            self.write_bits_msb(b, 8)

    def byte_align(self):
        """
        Pads with zeros up to the next byte boundary.
        """
        while len(self.bits) % 8 != 0:
            self.bits.append(0)

    def flush(self):
        """
        Pads to a byte boundary and writes everything to the stream.
        """
        self.byte_align()
        if self.output_stream is not None:
            self._write_complete_bytes()

    def get_bitarray(self) -> bitarray:
        """
        Returns the bits not yet handed to the stream (without padding).
        """
        return self.bits

    def _write_complete_bytes(self):
        whole = len(self.bits) - len(self.bits) % 8
        self.output_stream.write(self.bits[:whole].tobytes())
        del self.bits[:whole]
