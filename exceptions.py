"""
Exceptions raised by the compression algorithms, buffers and codecs.
"""


class CompressionError(ValueError):
    """Base class for all errors raised while compressing or decompressing."""


class ProtocolError(CompressionError):
    """
    The symbol stream does not make sense for the algorithm reading it:
    an unexpected symbol kind, a reference to an unknown dictionary entry,
    or data compressed with a different algorithm.
    """


class MatchRangeError(CompressionError, IndexError):
    """A back-reference distance or length is outside the window limits."""


class DictionaryFullError(CompressionError):
    """An entry was inserted into an LZW dictionary that has no room left."""


class CodecError(CompressionError):
    """Malformed wire data, or a symbol that the codec cannot represent."""


class UnknownAlgorithmError(CompressionError, KeyError):
    """No algorithm or codec is registered under the requested name."""

    def __str__(self):
        return ValueError.__str__(self)
