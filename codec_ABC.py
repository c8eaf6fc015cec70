from abc import ABC, abstractmethod
from typing import BinaryIO, Iterator, Optional

from exceptions import CodecError
from symbols import Symbol


class Encoder(ABC):
    """
    Writes symbols to an output stream in some wire format.

    The name of the algorithm must be set before the first symbol is written,
    and close() must be called once all symbols are written.
    """

    def __init__(self, output_stream: BinaryIO):
        self.output_stream = output_stream
        self.algorithm: Optional[str] = None
        self.closed = False

    def set_algorithm(self, algorithm: str) -> None:
        if self.algorithm is not None:
            raise CodecError("The algorithm name can only be set once")
        self.algorithm = algorithm
        self._write_header(algorithm)

    def write(self, symbol: Symbol) -> None:
        self._check_ready()
        self._write_symbol(symbol)

    def close(self) -> None:
        if self.closed:
            return
        self._check_ready()
        self._write_footer()
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.close()
        return False

    def _check_ready(self) -> None:
        if self.algorithm is None:
            raise CodecError("Must set the algorithm's name before encoding data")
        if self.closed:
            raise CodecError("Encoder is already closed")

    @abstractmethod
    def _write_header(self, algorithm: str) -> None:
        pass

    @abstractmethod
    def _write_symbol(self, symbol: Symbol) -> None:
        pass

    @abstractmethod
    def _write_footer(self) -> None:
        pass


class Decoder(ABC):
    """
    Reads symbols back from an input stream.
    The algorithm name is available as soon as the decoder is created.
    """

    def __init__(self, input_stream: BinaryIO):
        self.input_stream = input_stream
        self.algorithm: Optional[str] = None

    @abstractmethod
    def read(self) -> Optional[Symbol]:
        """Returns the next symbol, or None once there are no more symbols."""
        pass

    def __iter__(self) -> Iterator[Symbol]:
        while True:
            symbol = self.read()
            if symbol is None:
                return
            yield symbol


class Codec(ABC):
    """
    A wire format for symbol streams.
    """

    name: str = ""

    @abstractmethod
    def get_encoder(self, output_stream: BinaryIO) -> Encoder:
        pass

    @abstractmethod
    def get_decoder(self, input_stream: BinaryIO) -> Decoder:
        pass
