"""
Name -> constructor lookup for compression algorithms and codecs.
"""

from typing import Callable, Dict, Generic, List, TypeVar

from algorithms.LZ77 import LZ77
from algorithms.LZW import LZWCompressor
from bit_codec import BitCodec
from codec_ABC import Codec, Decoder
from compressor_ABC import CompressionAlgorithm
from exceptions import UnknownAlgorithmError
from xml_codec import XmlCodec

T = TypeVar("T")

DEFAULT_ALGORITHM = "lz77"
DEFAULT_CODEC = "xml"


class Registry(Generic[T]):
    """
    Keeps factories by name; every get() builds a fresh instance so that
    no state is shared between two compress or decompress calls.
    """

    def __init__(self, kind: str):
        self.kind = kind
        self._factories: Dict[str, Callable[[], T]] = {}

    def register(self, name: str, factory: Callable[[], T]) -> None:
        if name in self._factories:
            raise ValueError(f"A {self.kind} named {name!r} is already registered")
        self._factories[name] = factory

    def get(self, name: str) -> T:
        try:
            factory = self._factories[name]
        except KeyError:
            raise UnknownAlgorithmError(
                f"Unknown {self.kind} {name!r}; available: {', '.join(self.names())}"
            ) from None
        return factory()

    def names(self) -> List[str]:
        return sorted(self._factories)

    def __contains__(self, name: str) -> bool:
        return name in self._factories


class CompressionAlgorithmRegistry(Registry[CompressionAlgorithm]):
    def __init__(self):
        super().__init__("compression algorithm")

    def get_for_decoder(self, decoder: Decoder) -> CompressionAlgorithm:
        """The algorithm that produced the data the decoder is reading."""
        return self.get(decoder.algorithm)


class CodecRegistry(Registry[Codec]):
    def __init__(self):
        super().__init__("codec")


def default_algorithms() -> CompressionAlgorithmRegistry:
    registry = CompressionAlgorithmRegistry()
    registry.register(LZ77.name, LZ77)
    registry.register(LZWCompressor.name, LZWCompressor)
    return registry


def default_codecs() -> CodecRegistry:
    registry = CodecRegistry()
    registry.register(XmlCodec.name, XmlCodec)
    registry.register(BitCodec.name, BitCodec)
    return registry


ALGORITHMS = default_algorithms()
CODECS = default_codecs()
