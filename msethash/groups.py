"""
Group Capability for Multiset Hashing

Defines the abelian group contract the multiset digest is built on and the
shared double-and-add scalar multiplication used by adapters that have no
native exponentiation.
"""

from abc import ABC, abstractmethod
from functools import reduce
from typing import Any, Hashable, Iterable, Protocol, Tuple

from .errors import ValidationError


class HashToGroup(Protocol):
    """Deterministic map from element bytes into a group."""

    def __call__(self, data: bytes) -> Any:
        ...


def double_and_add(group: "Group", a: Any, k: int) -> Any:
    """
    Compute k * a using O(log |k|) group operations.

    Negative scalars multiply the inverse of a.

    Args:
        group: Group the element belongs to
        a: Group element
        k: Any integer scalar

    Returns:
        The group element a combined with itself k times

    Example:
        >>> double_and_add(group, a, 0) == group.identity()
        >>> double_and_add(group, a, -3) == group.invert(double_and_add(group, a, 3))
    """
    if k < 0:
        a = group.invert(a)
        k = -k

    result = group.identity()
    addend = a
    while k:
        if k & 1:
            result = group.combine(result, addend)
        k >>= 1
        if k:
            addend = group.combine(addend, addend)
    return result


class Group(ABC):
    """
    Abelian group used as the digest space of a multiset hash.

    Subclasses supply the arithmetic, a fixed serialization and a default
    hash-to-group embedding. Group elements must be immutable and hashable.
    """

    name: str = "group"

    @abstractmethod
    def identity(self) -> Any:
        """Return the neutral element."""

    @abstractmethod
    def combine(self, a: Any, b: Any) -> Any:
        """Return the group operation applied to a and b."""

    @abstractmethod
    def invert(self, a: Any) -> Any:
        """Return the inverse of a."""

    @abstractmethod
    def is_element(self, value: Any) -> bool:
        """Return True if value is a member of this group."""

    @abstractmethod
    def encode(self, a: Any) -> bytes:
        """Serialize a group element."""

    @abstractmethod
    def decode(self, data: bytes) -> Any:
        """
        Deserialize a group element.

        Raises:
            ValidationError: If data does not encode a member of the group
        """

    @abstractmethod
    def hash_to_group(self, data: bytes) -> Any:
        """Map element bytes to a group element."""

    @abstractmethod
    def _params(self) -> Tuple[Hashable, ...]:
        """Parameters that identify this group instance."""

    def scalar_multiply(self, a: Any, k: int) -> Any:
        return double_and_add(self, a, k)

    def sum(self, values: Iterable[Any]) -> Any:
        return reduce(self.combine, values, self.identity())

    def validate(self, value: Any) -> Any:
        """
        Check that value belongs to the group.

        Returns:
            The value unchanged

        Raises:
            ValidationError: If value is not a group member
        """
        if not self.is_element(value):
            raise ValidationError(f"Value is not an element of group {self.name}")
        return value

    def _check_length(self, data: bytes, *lengths: int) -> bytes:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise ValidationError("Encoded group element must be bytes")
        data = bytes(data)
        if len(data) not in lengths:
            expected = " or ".join(str(n) for n in lengths)
            raise ValidationError(
                f"Encoded {self.name} element must be {expected} bytes, got {len(data)}"
            )
        return data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Group):
            return NotImplemented
        return type(self) is type(other) and self._params() == other._params()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._params()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
