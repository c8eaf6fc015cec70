"""
Symbols produced by the compression algorithms and consumed by the codecs.

A compressed stream is a sequence of these four kinds of symbol:
literal bytes, back-references into the sliding window (LZ77),
references to dictionary entries (LZW) and dictionary resets (LZW).
"""


class Symbol:
    """Base class for every unit of compressed output."""

    def _key(self) -> tuple:
        return ()

    def __eq__(self, other):
        if self is other:
            return True
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash((type(self).__name__,) + self._key())


class Literal(Symbol):
    """
    One uncompressed byte.

    :param value: byte value (0–255)
    """

    def __init__(self, value: int):
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    def _key(self) -> tuple:
        return (self._value,)

    def __repr__(self):
        return f"Literal({self._value})"


class BackRef(Symbol):
    """
    Copy `length` bytes starting `distance` bytes before the current
    output position.

    :param distance: how far back the match starts (>= 1)
    :param length: number of bytes to copy (>= 3)
    """

    def __init__(self, distance: int, length: int):
        self._distance = distance
        self._length = length

    @property
    def distance(self) -> int:
        return self._distance

    @property
    def length(self) -> int:
        return self._length

    def _key(self) -> tuple:
        return (self._distance, self._length)

    def __repr__(self):
        return f"BackRef(distance={self._distance}, length={self._length})"


class DictRef(Symbol):
    """
    Reference to an LZW dictionary entry.

    :param entry: entry number
    """

    def __init__(self, entry: int):
        self._entry = entry

    @property
    def entry(self) -> int:
        return self._entry

    def _key(self) -> tuple:
        return (self._entry,)

    def __repr__(self):
        return f"DictRef({self._entry})"


class Reset(Symbol):
    """Marks the point where the LZW dictionary is cleared. Singleton."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "Reset()"


RESET = Reset()
