from typing import BinaryIO, Union

from bitarray import bitarray
from bitarray.util import ba2int


class BitReader:
    """
    Reads bits (most significant bit first) from bytes or from a binary
    stream, pulling more data from the stream as needed.
    """

    CHUNK_SIZE = 4096

    def __init__(self, source: Union[bytes, bytearray, BinaryIO]):
        """
        :param source: the bytes to read, or a binary stream to read them from
        """
        self.bits = bitarray(endian="big")
        if isinstance(source, (bytes, bytearray)):
            self.bits.frombytes(bytes(source))
            self.stream = None
        else:
            self.stream = source
        self.pos = 0  # current position in the bit stream

    def read_bit(self) -> int:
        """
        Reads one bit and returns it as 0 or 1.
        """
        if not self._ensure(1):
            raise EOFError("Bit stream length exceeded")
        val = self.bits[self.pos]
        self.pos += 1
        return val

    def read_bits_msb(self, n: int) -> int:
        """
        Reads n bits, most significant bit first, and returns them as an int.
        """
        if n == 0:
            return 0
        if not self._ensure(n):
            raise EOFError("Not enough bits to read (MSB)")
        val = ba2int(self.bits[self.pos : self.pos + n])
        self.pos += n
        return val

    def read_bytes(self, n: int) -> bytes:
        return bytes(self.read_bits_msb(8) for _ in range(n))

    def byte_align(self):
        """
        Moves the position to the start of the next byte.
        """
        offset = self.pos % 8
        if offset != 0:
            self.pos += 8 - offset

    def _ensure(self, n: int) -> bool:
        """Makes sure n unread bits are loaded; False if the data runs out."""
        while len(self.bits) - self.pos < n and self.stream is not None:
            chunk = self.stream.read(self.CHUNK_SIZE)
            if not chunk:
                self.stream = None
                break
            # Drop whole bytes that were already consumed.
            consumed = self.pos - self.pos % 8
            del self.bits[:consumed]
            self.pos -= consumed
            self.bits.frombytes(chunk)
        return len(self.bits) - self.pos >= n
