from abc import ABC, abstractmethod
import io
import os
import sys
from typing import BinaryIO, Iterable, Iterator, List

from codec_ABC import Codec, Decoder, Encoder
from exceptions import ProtocolError
from symbols import Symbol


class CompressionAlgorithm(ABC):
    """
    Interface for compression algorithms that turn a stream of bytes into
    a stream of symbols and back.
    """

    name: str = ""

    @abstractmethod
    def compress_symbols(self, input_stream: BinaryIO) -> Iterator[Symbol]:
        """
        Reads bytes from the input stream and yields the symbols that
        represent them.

        Args:
            input_stream: Binary stream with the uncompressed data
        """

    @abstractmethod
    def decompress_symbols(
        self, symbols: Iterable[Symbol], output_stream: BinaryIO
    ) -> None:
        """
        Rebuilds the original bytes from a sequence of symbols and writes them
        to the output stream.

        Args:
            symbols: Symbols produced by compress_symbols()
            output_stream: Binary stream for the uncompressed data

        Raises:
            ProtocolError: If a symbol does not belong to this algorithm
        """

    def compress(self, input_stream: BinaryIO, encoder: Encoder) -> None:
        """
        Compresses the input stream into the encoder.
        Tags the encoder with this algorithm's name and closes it when done.
        """
        encoder.set_algorithm(self.name)
        for symbol in self.compress_symbols(input_stream):
            encoder.write(symbol)
        encoder.close()

    def decompress(self, decoder: Decoder, output_stream: BinaryIO) -> None:
        """
        Decompresses the symbols of the decoder into the output stream.

        Raises:
            ProtocolError: If the data was compressed with another algorithm
        """
        if decoder.algorithm != self.name:
            raise ProtocolError(
                f"Tried to decompress {decoder.algorithm} data with a {self.name} decompressor"
            )
        self.decompress_symbols(decoder, output_stream)

    def compress_bytes(self, data: bytes) -> List[Symbol]:
        """
        Helper to compress bytes held in memory.

        Args:
            data: Input data

        Returns:
            List of symbols
        """
        return list(self.compress_symbols(io.BytesIO(data)))

    def decompress_bytes(self, symbols: Iterable[Symbol]) -> bytes:
        """
        Helper to decompress symbols held in memory.

        Args:
            symbols: Symbols produced by compress_bytes()

        Returns:
            Decompressed data
        """
        out_buffer = io.BytesIO()
        self.decompress_symbols(symbols, out_buffer)
        return out_buffer.getvalue()

    def compress_file(
        self, input_file: str, output_file: str, codec: Codec, verbose: bool = False
    ) -> str:
        """
        Helper to compress a file.

        Args:
            input_file: Path to the input file
            output_file: Path to the output file
            codec: Wire format for the compressed data
            verbose: Print progress to stderr

        Returns:
            Compression summary
        """
        if verbose:
            print(
                f"Compressing {input_file} ({os.path.getsize(input_file)} bytes) "
                f"with {self.name}/{codec.name}",
                file=sys.stderr,
            )
        with open(input_file, "rb") as in_file, open(output_file, "wb") as out_file:
            self.compress(in_file, codec.get_encoder(out_file))
        return size_report(os.path.getsize(input_file), os.path.getsize(output_file))

    def decompress_file(
        self, input_file: str, output_file: str, codec: Codec, verbose: bool = False
    ) -> str:
        """
        Helper to decompress a file.

        Args:
            input_file: Path to the compressed file
            output_file: Path to the output file
            codec: Wire format of the compressed data
            verbose: Print progress to stderr

        Returns:
            Decompression summary
        """
        if verbose:
            print(
                f"Decompressing {input_file} ({os.path.getsize(input_file)} bytes) "
                f"with {self.name}/{codec.name}",
                file=sys.stderr,
            )
        with open(input_file, "rb") as in_file, open(output_file, "wb") as out_file:
            self.decompress(codec.get_decoder(in_file), out_file)
        return size_report(os.path.getsize(output_file), os.path.getsize(input_file))


def size_report(original_size: int, compressed_size: int) -> str:
    """One-line summary of how much space compression saved."""
    diff = original_size - compressed_size
    if diff > 0:
        ratio = (1 - compressed_size / original_size) * 100
        return f"Size reduced by {diff} bytes ({ratio:.1f}% total saving)"
    return f"Size increased by {-diff} bytes"
