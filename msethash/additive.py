"""
Additive Modular Group (AdHash)

Z_{2^bits} under addition with BLAKE3 element hashes. Digests are cheap to
compute and order independent, which makes this group a good fit for
reconciling table contents or detecting accidental drift.

AdHash over a power-of-two modulus is NOT collision resistant against an
adversary who chooses the elements (generalized birthday attacks find
relations among hashes). Use a discrete-log group when inputs are untrusted.
"""

from typing import Hashable, Tuple

from .groups import Group
from .hash_to_group import hash_to_ring


class AdditiveGroup(Group):
    """
    Integers modulo 2^bits under addition.

    Args:
        bits: Width of the digest in bits, a positive multiple of 8 (default: 256)
    """

    def __init__(self, bits: int = 256):
        if bits <= 0 or bits % 8:
            raise ValueError("bits must be a positive multiple of 8")
        self.bits = bits
        self.modulus = 1 << bits
        self.element_size = bits // 8
        self.name = f"adhash{bits}"

    def _params(self) -> Tuple[Hashable, ...]:
        return (self.bits,)

    def identity(self) -> int:
        return 0

    def combine(self, a: int, b: int) -> int:
        return (a + b) % self.modulus

    def invert(self, a: int) -> int:
        return (-a) % self.modulus

    def scalar_multiply(self, a: int, k: int) -> int:
        return (a * k) % self.modulus

    def is_element(self, value) -> bool:
        return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < self.modulus

    def encode(self, a: int) -> bytes:
        return a.to_bytes(self.element_size, "big")

    def decode(self, data: bytes) -> int:
        data = self._check_length(data, self.element_size)
        return int.from_bytes(data, "big")

    def hash_to_group(self, data: bytes) -> int:
        return hash_to_ring(data, self.bits, dst=self.name.encode())
