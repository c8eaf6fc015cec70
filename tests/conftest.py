"""Shared test fixtures."""

import random

import pytest

from codec_ABC import Decoder


class ListDecoder(Decoder):
    """Decoder that hands out symbols from a list."""

    def __init__(self, algorithm, symbols):
        super().__init__(None)
        self.algorithm = algorithm
        self._symbols = list(symbols)

    def read(self):
        if not self._symbols:
            return None
        return self._symbols.pop(0)


@pytest.fixture
def list_decoder():
    return ListDecoder


@pytest.fixture
def text_data():
    line = b"It was the best of times, it was the worst of times, it was the age of wisdom.\n"
    return b"".join(line.replace(b"times", b"times %d" % i) for i in range(60))


@pytest.fixture
def random_data():
    rng = random.Random(1234)
    return bytes(rng.randrange(256) for _ in range(20000))
