"""
Multiset Hash Value

Immutable MSet-Mu-Hash digest. A multiset with integer (possibly negative)
multiplicities is hashed to the group sum of m * H(e) over its elements e,
so digests of unions and differences are computed directly from the
operands' digests.
"""

import hashlib
from collections import Counter, abc
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from .errors import ValidationError
from .groups import Group, HashToGroup
from .hash_to_group import BytesLike, element_bytes

Counts = Union[Mapping[BytesLike, int], Iterable[Tuple[BytesLike, int]]]


def check_multiplicity(multiplicity: int) -> int:
    """
    Validate a multiplicity.

    Raises:
        TypeError: If multiplicity is not an int (bool is rejected)
    """
    if isinstance(multiplicity, bool) or not isinstance(multiplicity, int):
        raise TypeError(f"Multiplicity must be an int, not {type(multiplicity).__name__}")
    return multiplicity


def iter_counts(counts: Counts) -> Iterable[Tuple[BytesLike, int]]:
    """Yield (element, multiplicity) pairs from a mapping or an iterable of pairs."""
    if isinstance(counts, abc.Mapping):
        return counts.items()
    return counts


class MultisetHash:
    """
    Immutable digest of a multiset over a group.

    Every operation returns a new MultisetHash; the receiver never changes,
    so instances can be shared freely and used as dict keys.

    Args:
        group: Group the digest lives in
        hasher: Hash-to-group function (default: group.hash_to_group)

    Example:
        >>> empty = MultisetHash(group)
        >>> a = empty.add(b"apple", 3).add(b"banana")
        >>> b = empty.add(b"apple", -3)
        >>> a.union(b) == empty.add(b"banana")
        True
    """

    __slots__ = ("_group", "_hasher", "_value")

    def __init__(self, group: Group, hasher: Optional[HashToGroup] = None):
        if not isinstance(group, Group):
            raise TypeError(f"group must be a Group, not {type(group).__name__}")
        object.__setattr__(self, "_group", group)
        object.__setattr__(self, "_hasher", hasher)
        object.__setattr__(self, "_value", group.identity())

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("MultisetHash is immutable")

    def _derive(self, value: Any) -> "MultisetHash":
        clone = object.__new__(type(self))
        object.__setattr__(clone, "_group", self._group)
        object.__setattr__(clone, "_hasher", self._hasher)
        object.__setattr__(clone, "_value", value)
        return clone

    # Construction

    @classmethod
    def from_value(cls, group: Group, value: Any, hasher: Optional[HashToGroup] = None) -> "MultisetHash":
        """
        Wrap an existing group element as a digest.

        Raises:
            ValidationError: If value is not an element of group
        """
        return cls(group, hasher)._derive(group.validate(value))

    @classmethod
    def from_bytes(cls, group: Group, data: bytes, hasher: Optional[HashToGroup] = None) -> "MultisetHash":
        """
        Decode a digest serialized with to_bytes().

        Raises:
            ValidationError: If data is not a valid encoding for group
        """
        return cls(group, hasher)._derive(group.decode(data))

    @classmethod
    def from_hex(cls, group: Group, text: str, hasher: Optional[HashToGroup] = None) -> "MultisetHash":
        if text.startswith("0x"):
            text = text[2:]
        try:
            data = bytes.fromhex(text)
        except ValueError as e:
            raise ValidationError(f"Invalid hex digest: {e}") from e
        return cls.from_bytes(group, data, hasher)

    @classmethod
    def from_counts(cls, group: Group, counts: Counts, hasher: Optional[HashToGroup] = None) -> "MultisetHash":
        """
        Hash a multiset given as element -> multiplicity.

        Args:
            group: Group to hash into
            counts: Mapping or iterable of (element, multiplicity) pairs;
                repeated elements accumulate
            hasher: Hash-to-group function (default: group.hash_to_group)

        Returns:
            MultisetHash: Digest of the multiset
        """
        return cls(group, hasher).add_many(counts)

    @classmethod
    def from_elements(cls, group: Group, elements: Iterable[BytesLike], hasher: Optional[HashToGroup] = None) -> "MultisetHash":
        """Hash a multiset given as a flat iterable; repeats raise the multiplicity."""
        return cls.from_counts(group, Counter(element_bytes(e) for e in elements), hasher)

    # Accessors

    @property
    def group(self) -> Group:
        return self._group

    @property
    def hasher(self) -> Optional[HashToGroup]:
        return self._hasher

    @property
    def value(self) -> Any:
        """The digest as a raw group element."""
        return self._value

    def hash_element(self, element: BytesLike) -> Any:
        data = element_bytes(element)
        if self._hasher is None:
            return self._group.hash_to_group(data)
        return self._hasher(data)

    def is_empty(self) -> bool:
        """True if the digest equals the digest of the empty multiset."""
        return self._value == self._group.identity()

    # Element updates

    def add(self, element: BytesLike, multiplicity: int = 1) -> "MultisetHash":
        """
        Return the digest after adding multiplicity copies of element.

        Multiplicity may be zero (no-op) or negative (a removal delta).

        Raises:
            TypeError: If element is not bytes-like or multiplicity is not an int
        """
        data = element_bytes(element)
        check_multiplicity(multiplicity)
        if multiplicity == 0:
            return self
        return self._apply(self.hash_element(data), multiplicity)

    def remove(self, element: BytesLike, multiplicity: int = 1) -> "MultisetHash":
        """Return the digest after removing multiplicity copies of element."""
        return self.add(element, -check_multiplicity(multiplicity))

    def add_value(self, value: Any, multiplicity: int = 1) -> "MultisetHash":
        """
        Add an element that has already been mapped into the group.

        Raises:
            ValidationError: If value is not an element of the group
        """
        self._group.validate(value)
        check_multiplicity(multiplicity)
        if multiplicity == 0:
            return self
        return self._apply(value, multiplicity)

    def remove_value(self, value: Any, multiplicity: int = 1) -> "MultisetHash":
        return self.add_value(value, -check_multiplicity(multiplicity))

    def add_many(self, counts: Counts) -> "MultisetHash":
        """Return the digest after adding every (element, multiplicity) pair."""
        group = self._group
        value = self._value
        for element, multiplicity in iter_counts(counts):
            data = element_bytes(element)
            if check_multiplicity(multiplicity) == 0:
                continue
            term = group.scalar_multiply(self.hash_element(data), multiplicity)
            value = group.combine(value, term)
        return self._derive(value)

    def _apply(self, point: Any, multiplicity: int) -> "MultisetHash":
        group = self._group
        term = group.scalar_multiply(point, multiplicity)
        return self._derive(group.combine(self._value, term))

    # Multiset algebra

    def _check_compatible(self, other: "MultisetHash") -> None:
        if not isinstance(other, MultisetHash):
            raise TypeError(f"Expected MultisetHash, got {type(other).__name__}")
        if self._group != other._group:
            raise ValueError(
                f"Cannot combine digests over different groups: {self._group.name} and {other._group.name}"
            )
        if self._hasher != other._hasher:
            raise ValueError("Cannot combine digests built with different hash-to-group functions")

    def union(self, other: "MultisetHash") -> "MultisetHash":
        """
        Digest of the multiset union (per-element sum of multiplicities).

        Raises:
            ValueError: If other uses a different group or hasher
        """
        self._check_compatible(other)
        return self._derive(self._group.combine(self._value, other._value))

    def difference(self, other: "MultisetHash") -> "MultisetHash":
        """
        Digest of the multiset difference (per-element subtraction).

        Elements that are more frequent in other end up with negative
        multiplicity.

        Raises:
            ValueError: If other uses a different group or hasher
        """
        self._check_compatible(other)
        group = self._group
        return self._derive(group.combine(self._value, group.invert(other._value)))

    def negate(self) -> "MultisetHash":
        """Digest of the multiset with every multiplicity negated."""
        return self._derive(self._group.invert(self._value))

    def equals(self, other: "MultisetHash") -> bool:
        """True if both digests are the same group element of the same group."""
        if not isinstance(other, MultisetHash):
            return False
        return self._group == other._group and self._value == other._value

    __add__ = union
    __sub__ = difference
    __neg__ = negate

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MultisetHash):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash((self._group, self._value))

    # Serialization

    def to_bytes(self) -> bytes:
        return self._group.encode(self._value)

    __bytes__ = to_bytes

    def hex(self) -> str:
        return self.to_bytes().hex()

    def fingerprint(self) -> bytes:
        """
        32-byte summary of the digest: SHA-256 of the encoding.

        Over MuHash3072Group this is Bitcoin Core's finalized MuHash3072
        (MuHash3072::Finalize), in internal byte order.
        """
        return hashlib.sha256(self.to_bytes()).digest()

    def __repr__(self) -> str:
        return f"MultisetHash(group={self._group.name!r}, digest={self.hex()[:16]}...)"
