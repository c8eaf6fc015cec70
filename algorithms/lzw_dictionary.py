"""
Dictionary of byte sequences for LZW.

Every entry is stored as its last byte plus the number of the entry that
holds the bytes before it, so a sequence is a chain of single-byte links
ending at one of the 256 literal entries. Entries get their numbers in
insertion order and are found again through a hash table with linear probing.
"""

import math
from typing import Optional

from exceptions import DictionaryFullError

LITERAL_ENTRIES = 256
# Entry 256 is never assigned; numbering restarts here after every reset.
FIRST_ENTRY = 257
NO_ENTRY = -1


def next_prime(n: int) -> int:
    """Smallest prime number greater than or equal to n."""
    if n <= 2:
        return 2
    candidate = n if n % 2 else n + 1
    while True:
        if all(candidate % d for d in range(3, math.isqrt(candidate) + 1, 2)):
            return candidate
        candidate += 2


class LZWDictionary:
    """
    LZW dictionary with room for `max_entries` entries (literals included).
    """

    def __init__(self, max_entries: int):
        if max_entries <= FIRST_ENTRY:
            raise ValueError(
                f"An LZW dictionary needs more than {FIRST_ENTRY} entries, got {max_entries}"
            )
        self.max_entries = max_entries
        self.hash_buckets = next_prime(int(max_entries * math.sqrt(2)) + 1)

        # Arena: entry number -> (prefix entry, trailing byte).
        self._prefix = [NO_ENTRY] * max_entries
        self._byte = bytearray(max_entries)
        for i in range(LITERAL_ENTRIES):
            self._byte[i] = i

        self._table = [NO_ENTRY] * self.hash_buckets
        self.next_entry = FIRST_ENTRY

    @property
    def size(self) -> int:
        """Number of entry numbers in use, counting the unused entry 256."""
        return self.next_entry

    @property
    def is_full(self) -> bool:
        return self.next_entry >= self.max_entries

    def __contains__(self, entry: int) -> bool:
        return 0 <= entry < LITERAL_ENTRIES or FIRST_ENTRY <= entry < self.next_entry

    def reset(self) -> None:
        """Forgets every entry except the 256 literals."""
        self.next_entry = FIRST_ENTRY
        self._table = [NO_ENTRY] * self.hash_buckets

    def lookup(self, sequence: bytes) -> Optional[int]:
        """Returns the entry number for `sequence`, or None if it is unknown."""
        if len(sequence) == 1:
            return sequence[0]
        if not sequence:
            return None
        bucket = self._hash(sequence)
        while True:
            entry = self._table[bucket]
            if entry == NO_ENTRY:
                return None
            if self._holds(entry, sequence):
                return entry
            bucket = (bucket + 1) % self.hash_buckets

    def insert(self, prefix_entry: int, byte: int) -> int:
        """
        Adds the sequence made of entry `prefix_entry` followed by `byte`.
        Returns the number of the new entry.
        """
        if self.is_full:
            raise DictionaryFullError(
                f"Dictionary is full ({self.max_entries} entries)"
            )
        entry = self.next_entry
        self._prefix[entry] = prefix_entry
        self._byte[entry] = byte

        sequence = bytearray()
        self.reconstruct(entry, sequence)
        bucket = self._hash(sequence)
        while self._table[bucket] != NO_ENTRY:
            bucket = (bucket + 1) % self.hash_buckets
        self._table[bucket] = entry

        self.next_entry += 1
        return entry

    def reconstruct(self, entry: int, dest: bytearray) -> int:
        """
        Appends the bytes of `entry` to `dest`.
        Returns the number of bytes appended.
        """
        if entry < LITERAL_ENTRIES:
            dest.append(entry)
            return 1
        start = len(dest)
        while entry != NO_ENTRY:
            dest.append(self._byte[entry])
            entry = self._prefix[entry]
        # Bytes were collected last-first.
        dest[start:] = dest[start:][::-1]
        return len(dest) - start

    def first_byte(self, entry: int) -> int:
        while self._prefix[entry] != NO_ENTRY:
            entry = self._prefix[entry]
        return self._byte[entry]

    def _holds(self, entry: int, sequence: bytes) -> bool:
        """Walks the chain of `entry` backwards comparing it with `sequence`."""
        i = len(sequence) - 1
        while entry != NO_ENTRY:
            if i < 0 or self._byte[entry] != sequence[i]:
                return False
            entry = self._prefix[entry]
            i -= 1
        return i < 0

    def _hash(self, sequence: bytes) -> int:
        value = 0
        for b in sequence:
            value = (value * 257 + b) % self.hash_buckets
        return value
