"""
Multiset Digest Accumulator

Mutable owner of a running MultisetHash. Inserts, removals, unions and
differences replace the held digest with a new value; snapshots are
immutable and unaffected by later mutation.

An accumulator is not thread-safe. For parallel workloads give each worker
its own accumulator and fold the results with union_all(), which is exact
in any order because union is the group's commutative, associative
operation.
"""

import logging
from functools import reduce
from typing import Iterable, Optional, Union

from .errors import ValidationError
from .groups import Group, HashToGroup
from .hash_to_group import BytesLike
from .multiset import Counts, MultisetHash
from .params import load_group

logger = logging.getLogger(__name__)

DigestLike = Union["MultisetAccumulator", MultisetHash]


def _as_digest(other: DigestLike) -> MultisetHash:
    if isinstance(other, MultisetAccumulator):
        return other.snapshot()
    if isinstance(other, MultisetHash):
        return other
    raise TypeError(f"Expected MultisetAccumulator or MultisetHash, got {type(other).__name__}")


class MultisetAccumulator:
    """
    Incrementally updated MSet-Mu-Hash of a multiset.

    Args:
        group: Group to hash into (default: the configured default group,
            see msethash.config)
        hasher: Hash-to-group function (default: group.hash_to_group)

    Example:
        >>> acc = MultisetAccumulator()
        >>> acc.insert(b"apple", 3)
        >>> acc.insert(b"banana")
        >>> other = MultisetAccumulator()
        >>> other.insert(b"apple", -3)
        >>> acc.union(other)
        >>> expected = MultisetAccumulator()
        >>> expected.insert(b"banana")
        >>> acc.equals(expected)
        True
    """

    def __init__(self, group: Optional[Group] = None, hasher: Optional[HashToGroup] = None):
        if group is None:
            group = load_group()
        self._digest = MultisetHash(group, hasher)

    @classmethod
    def from_snapshot(cls, snapshot: MultisetHash) -> "MultisetAccumulator":
        """Start a new accumulator from an existing digest."""
        if not isinstance(snapshot, MultisetHash):
            raise TypeError(f"Expected MultisetHash, got {type(snapshot).__name__}")
        acc = cls(snapshot.group, snapshot.hasher)
        acc._digest = snapshot
        return acc

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        group: Optional[Group] = None,
        hasher: Optional[HashToGroup] = None,
    ) -> "MultisetAccumulator":
        """
        Re-hydrate an accumulator from a serialized digest.

        Raises:
            ValidationError: If data does not encode an element of group
        """
        acc = cls(group, hasher)
        acc.restore(data)
        return acc

    @property
    def group(self) -> Group:
        return self._digest.group

    @property
    def digest(self) -> MultisetHash:
        return self._digest

    def insert(self, element: BytesLike, multiplicity: int = 1) -> None:
        """
        Add multiplicity copies of element.

        Multiplicity may be any integer: zero is a no-op and a negative
        value records a removal that has not been matched by an insert.

        Args:
            element: Element bytes
            multiplicity: Signed count (default: 1)

        Raises:
            TypeError: If element is not bytes-like or multiplicity is not an int
        """
        self._digest = self._digest.add(element, multiplicity)

    def remove(self, element: BytesLike, multiplicity: int = 1) -> None:
        """Remove multiplicity copies of element; same as insert(element, -multiplicity)."""
        self._digest = self._digest.remove(element, multiplicity)

    def insert_many(self, counts: Counts) -> None:
        """Insert every (element, multiplicity) pair of a mapping or iterable."""
        self._digest = self._digest.add_many(counts)

    def remove_many(self, counts: Counts) -> None:
        self._digest = self._digest.difference(MultisetHash(self.group, self._digest.hasher).add_many(counts))

    def update(self, elements: Iterable[BytesLike]) -> None:
        """Insert each element of an iterable once per occurrence."""
        self._digest = self._digest.union(
            MultisetHash.from_elements(self.group, elements, self._digest.hasher)
        )

    def union(self, other: DigestLike) -> None:
        """
        Merge another multiset into this one (multiplicities add).

        Raises:
            ValueError: If other uses a different group or hasher
        """
        self._digest = self._digest.union(_as_digest(other))
        logger.debug(f"Merged digest into accumulator over {self.group.name}")

    def difference(self, other: DigestLike) -> None:
        """
        Subtract another multiset from this one (multiplicities may go negative).

        Raises:
            ValueError: If other uses a different group or hasher
        """
        self._digest = self._digest.difference(_as_digest(other))

    def equals(self, other: DigestLike) -> bool:
        """True if both digests are the same group element."""
        try:
            return self._digest.equals(_as_digest(other))
        except TypeError:
            return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (MultisetAccumulator, MultisetHash)):
            return NotImplemented
        return self.equals(other)

    # Accumulators are mutable
    __hash__ = None

    def snapshot(self) -> MultisetHash:
        """Return the current digest; later mutation does not affect it."""
        return self._digest

    def restore(self, data: bytes) -> None:
        """
        Replace the digest with a serialized one.

        The accumulator is left unchanged if data is invalid.

        Raises:
            ValidationError: If data does not encode an element of the group
        """
        try:
            restored = MultisetHash.from_bytes(self.group, data, self._digest.hasher)
        except ValidationError as e:
            logger.warning(f"Rejected serialized digest for {self.group.name}: {e}")
            raise
        self._digest = restored
        logger.debug(f"Restored accumulator over {self.group.name}")

    def to_bytes(self) -> bytes:
        return self._digest.to_bytes()

    def hex(self) -> str:
        return self._digest.hex()

    def is_empty(self) -> bool:
        return self._digest.is_empty()

    def copy(self) -> "MultisetAccumulator":
        return type(self).from_snapshot(self._digest)

    def reset(self) -> None:
        """Return to the digest of the empty multiset."""
        self._digest = MultisetHash(self.group, self._digest.hasher)

    def __repr__(self) -> str:
        return f"MultisetAccumulator(group={self.group.name!r}, digest={self.hex()[:16]}...)"


def union_all(items: Iterable[DigestLike], group: Optional[Group] = None) -> MultisetHash:
    """
    Fold partial digests into one with union.

    The result does not depend on the order or grouping of items.

    Args:
        items: Accumulators or digests, all over the same group
        group: Group of the empty result when items is empty
            (default: the group of the first item, else the configured default)

    Returns:
        MultisetHash: Digest of the union of all items

    Raises:
        ValueError: If the items use different groups
    """
    digests = [_as_digest(item) for item in items]
    if not digests:
        return MultisetHash(group if group is not None else load_group())

    start = digests[0] if group is None else MultisetHash(group, digests[0].hasher).union(digests[0])
    return reduce(MultisetHash.union, digests[1:], start)
