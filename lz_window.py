# lz_window.py

import io
from typing import BinaryIO, List, Optional, Tuple, Union

from exceptions import MatchRangeError

MIN_MATCH = 3
MAX_DISTANCE = 32768
MAX_LENGTH = 258

# Number of chain heads in the position index (prime).
HASH_BUCKETS = 32771

# Returned by LZWindow.read() once the source is exhausted.
EOF = -1

NO_POSITION = -1


def ring_index(offset: int, capacity: int) -> int:
    """Physical slot in the circular array that holds logical `offset`."""
    return offset % capacity


def ring_used(bottom: int, top: int) -> int:
    """Number of bytes held between logical offsets `bottom` and `top`."""
    return top - bottom


def ring_free(bottom: int, top: int, capacity: int) -> int:
    """
    Number of bytes that can still be stored.
    One slot always stays empty so that a full buffer never looks empty.
    """
    return capacity - 1 - ring_used(bottom, top)


def discard_floor(bottom: int, position: int, max_distance: int) -> int:
    """
    New value for `bottom` after dropping history that no back-reference can
    reach any more. Never goes past `position - max_distance`, never backwards.
    """
    return max(bottom, position - max_distance)


def ring_spans(offset: int, length: int, capacity: int) -> List[Tuple[int, int]]:
    """
    Splits `length` bytes starting at logical `offset` into contiguous
    physical (start, end) slices; at most two when the range wraps around.
    """
    spans = []
    while length > 0:
        start = ring_index(offset, capacity)
        end = min(start + length, capacity)
        spans.append((start, end))
        length -= end - start
        offset += end - start
    return spans


class Match:
    """
    Result of LZWindow.find_past_match(): the same bytes appeared
    `distance` bytes earlier and run for `length` bytes.
    """

    def __init__(self, distance: int, length: int):
        self.distance = distance
        self.length = length

    def __eq__(self, other):
        if not isinstance(other, Match):
            return NotImplemented
        return self.distance == other.distance and self.length == other.length

    def __repr__(self):
        return f"<Match distance={self.distance} length={self.length}>"


class LZWindow:
    """
    Sliding window for LZ77.

    Keeps the last `max_distance` bytes of history in a circular buffer.
    A window is bound either to a source (read mode, used while compressing:
    look-ahead is pulled from the source and searched for past matches) or to
    a sink (write mode, used while decompressing: every written byte becomes
    history that later back-references replay).

    All offsets are logical, i.e. counted from the start of the stream:
    `bottom` is the oldest byte still held, `position` the cursor and
    `top` one past the newest byte. `top - bottom` is always below capacity.
    """

    MIN_MATCH = MIN_MATCH
    MAX_DISTANCE = MAX_DISTANCE
    MAX_LENGTH = MAX_LENGTH
    HASH_BUCKETS = HASH_BUCKETS

    def __init__(
        self,
        source: Optional[BinaryIO] = None,
        sink: Optional[BinaryIO] = None,
        max_distance: Optional[int] = None,
        max_length: Optional[int] = None,
        buffer_size: Optional[int] = None,
    ) -> None:
        """
        :param source: stream to read uncompressed data from (read mode)
        :param sink: stream to write uncompressed data to (write mode)
        :param max_distance: longest back-reference distance
        :param max_length: longest back-reference length
        :param buffer_size: requested capacity in read mode; never less than
            max_distance + max_length + 1
        """
        if (source is None) == (sink is None):
            raise ValueError("A window needs exactly one of source or sink")
        if max_distance is None:
            max_distance = self.MAX_DISTANCE
        if max_length is None:
            max_length = self.MAX_LENGTH
        if max_distance < 0 or max_length < 0:
            raise ValueError("Window limits cannot be negative")

        self.source = source
        self.sink = sink
        self.max_distance = max_distance
        self.max_length = max_length

        minimum = max_distance + max_length + 1
        if source is not None:
            if buffer_size is None:
                buffer_size = 2 * max_distance
            self.capacity = max(buffer_size, minimum)
        else:
            self.capacity = minimum
        self.buffer = bytearray(self.capacity)

        self.bottom = 0
        self.position = 0
        self.top = 0
        self.eof = False

        # Position index: chain heads per 3-byte prefix hash, and for each
        # physical slot the previous offset sharing its hash.
        if source is not None:
            self._heads = [NO_POSITION] * self.HASH_BUCKETS
            self._chain = [NO_POSITION] * self.capacity
            self._next_to_index = 0

    @classmethod
    def for_reading(cls, source: BinaryIO, **limits) -> "LZWindow":
        return cls(source=source, **limits)

    @classmethod
    def for_writing(cls, sink: BinaryIO, **limits) -> "LZWindow":
        return cls(sink=sink, **limits)

    def __repr__(self):
        mode = "read" if self.source is not None else "write"
        return (
            f"<LZWindow {mode} capacity={self.capacity} bottom={self.bottom} "
            f"position={self.position} top={self.top}>"
        )

    # Read mode

    def read(self, dest: Optional[bytearray], length: int) -> int:
        """
        Consumes up to `length` bytes, appending them to `dest` unless it is
        None. Returns the number of bytes consumed, or EOF if nothing was left.
        """
        self._check_readable()
        done = 0
        while done < length:
            if self.position == self.top:
                self._fill()
                if self.position == self.top:
                    break
            count = min(length - done, self.top - self.position)
            if dest is not None:
                for start, end in ring_spans(self.position, count, self.capacity):
                    dest.extend(self.buffer[start:end])
            self.position += count
            done += count
        if done == 0 and length > 0 and self.eof:
            return EOF
        return done

    def skip(self, length: int) -> int:
        return self.read(None, length)

    def find_past_match(self) -> Optional[Match]:
        """
        Looks for the bytes at the cursor in the history.

        Candidates come from the position index, nearest first. The longest
        match wins; among equally long ones the nearest is kept. Matches
        shorter than MIN_MATCH are not reported.
        """
        self._check_readable()
        if self.top - self.position < self.max_length:
            self._fill()
        lookahead = min(self.max_length, self.top - self.position)
        if lookahead < MIN_MATCH:
            return None

        bucket = self._hash(self.position)
        best = None
        newer = NO_POSITION
        offset = self._heads[bucket]
        while offset != NO_POSITION:
            distance = self.position - offset
            if offset < self.bottom or distance > self.max_distance:
                # The rest of the chain is older still: cut it off here.
                if newer == NO_POSITION:
                    self._heads[bucket] = NO_POSITION
                else:
                    self._chain[ring_index(newer, self.capacity)] = NO_POSITION
                break
            if distance >= 1:
                length = self._match_length(offset, lookahead)
                if length >= MIN_MATCH and (best is None or length > best.length):
                    best = Match(distance, length)
                    if length == lookahead:
                        break
            newer = offset
            offset = self._chain[ring_index(offset, self.capacity)]
        return best

    def _fill(self) -> None:
        if self.eof:
            return
        self.bottom = discard_floor(self.bottom, self.position, self.max_distance)
        free = ring_free(self.bottom, self.top, self.capacity)
        while free > 0 and not self.eof:
            free -= self._pull(free)
        self._index_positions()

    def _pull(self, length: int) -> int:
        """Reads from the source into one contiguous stretch of the buffer."""
        start, end = ring_spans(self.top, length, self.capacity)[0]
        count = self.source.readinto(memoryview(self.buffer)[start:end])
        if not count:
            self.eof = True
            return 0
        self.top += count
        return count

    def _index_positions(self) -> None:
        # An offset can be indexed once its three prefix bytes are buffered.
        last = self.top - MIN_MATCH
        first = max(self._next_to_index, self.bottom)
        for offset in range(first, last + 1):
            bucket = self._hash(offset)
            self._chain[ring_index(offset, self.capacity)] = self._heads[bucket]
            self._heads[bucket] = offset
        self._next_to_index = max(self._next_to_index, last + 1)

    def _hash(self, offset: int) -> int:
        buf = self.buffer
        capacity = self.capacity
        value = 0
        for i in range(MIN_MATCH):
            value = (value * 257 + buf[ring_index(offset + i, capacity)]) % self.HASH_BUCKETS
        return value

    def _match_length(self, offset: int, limit: int) -> int:
        buf = self.buffer
        capacity = self.capacity
        position = self.position
        length = 0
        while (
            length < limit
            and buf[ring_index(offset + length, capacity)]
            == buf[ring_index(position + length, capacity)]
        ):
            length += 1
        return length

    def _check_readable(self) -> None:
        if self.source is None:
            raise io.UnsupportedOperation("Cannot read from a write window")

    # Write mode

    def write(self, data: Union[int, bytes, bytearray]) -> None:
        """Writes one byte (an int) or a sequence of bytes to the sink."""
        self._check_writable()
        if isinstance(data, int):
            self._put(data)
            self.sink.write(bytes((data,)))
        else:
            data = bytes(data)
            for b in data:
                self._put(b)
            self.sink.write(data)

    def repeat_past_match(self, distance: int, length: int) -> None:
        """
        Writes again `length` bytes that were written `distance` bytes ago.
        Bytes are copied one at a time, so a match may overlap its own output.
        """
        self._check_writable()
        if distance < 1 or distance > self.max_distance:
            raise MatchRangeError(f"Repeat distance is not valid: {distance}")
        if length < MIN_MATCH or length > self.max_length:
            raise MatchRangeError(f"Repeat length is not valid: {length}")
        if distance > self.position - self.bottom:
            raise MatchRangeError(
                f"Repeat distance {distance} reaches before the start of the data"
            )
        replay = bytearray()
        for _ in range(length):
            b = self.buffer[ring_index(self.position - distance, self.capacity)]
            self._put(b)
            replay.append(b)
        self.sink.write(bytes(replay))

    def _put(self, b: int) -> None:
        self.bottom = discard_floor(self.bottom, self.position, self.max_distance)
        self.buffer[ring_index(self.position, self.capacity)] = b
        self.position += 1
        self.top = self.position

    def _check_writable(self) -> None:
        if self.sink is None:
            raise io.UnsupportedOperation("Cannot write to a read window")
