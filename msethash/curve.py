"""
Elliptic Curve Group

The prime-order subgroup G1 of BLS12-381. Point arithmetic, hashing to the
curve and point compression come from py_ecc; this module converts between
py_ecc's projective points and canonical affine tuples so that equal group
elements compare and hash equal.

The point at infinity (the identity) is represented by None; every other
point is an (x, y) tuple of ints. Collision resistance of digests over this
group rests on the elliptic curve discrete logarithm problem in G1.
"""

import hashlib
from typing import Hashable, Optional, Tuple

from py_ecc.bls.hash_to_curve import hash_to_G1
from py_ecc.bls.point_compression import compress_G1, decompress_G1
from py_ecc.fields import optimized_bls12_381_FQ as FQ
from py_ecc.optimized_bls12_381.optimized_curve import (
    Z1,
    add,
    b,
    curve_order,
    field_modulus,
    is_inf,
    is_on_curve,
    multiply,
    neg,
    normalize,
)

from .errors import ValidationError
from .groups import Group

Point = Optional[Tuple[int, int]]

# Hash-to-curve suite BLS12381G1_XMD:SHA-256_SSWU_RO_ (RFC 9380)
BLS12_381_G1_DST = b"MSETHASH-V01-CS01-with-BLS12381G1_XMD:SHA-256_SSWU_RO_"

COMPRESSED_G1_SIZE = 48


def to_affine(pt) -> Point:
    """Convert a py_ecc projective point to an affine (x, y) tuple or None."""
    if is_inf(pt):
        return None
    x, y = normalize(pt)
    return x.n, y.n


def to_projective(P: Point):
    """Convert an affine tuple (or None) to a py_ecc projective point."""
    if P is None:
        return Z1
    x, y = P
    return (FQ(x), FQ(y), FQ(1))


class BLS12381G1Group(Group):
    """
    G1 subgroup of BLS12-381, of prime order r.

    Elements are hashed with the RFC 9380 random-oracle map
    (expand_message_xmd with SHA-256, simplified SWU, cofactor clearing) and
    serialized in the 48-byte Zcash compressed form used by BLS signatures.
    Decoding rejects points outside the prime-order subgroup.

    Example:
        >>> group = BLS12381G1Group()
        >>> P = group.hash_to_group(b"apple")
        >>> group.combine(P, group.invert(P)) is None
        True
    """

    name = "bls12_381_g1"

    def __init__(self):
        self.p = field_modulus
        self.n = curve_order
        self.dst = BLS12_381_G1_DST

    @property
    def order(self) -> int:
        return self.n

    def _params(self) -> Tuple[Hashable, ...]:
        return (self.p, self.n, self.dst)

    def identity(self) -> Point:
        return None

    def combine(self, P: Point, Q: Point) -> Point:
        if P is None:
            return Q
        if Q is None:
            return P
        return to_affine(add(to_projective(P), to_projective(Q)))

    def invert(self, P: Point) -> Point:
        if P is None:
            return None
        return to_affine(neg(to_projective(P)))

    def scalar_multiply(self, P: Point, k: int) -> Point:
        k %= self.n
        if P is None or k == 0:
            return None
        # Scalars past r / 2 are cheaper as a multiple of -P
        if k > self.n // 2:
            return to_affine(neg(multiply(to_projective(P), self.n - k)))
        return to_affine(multiply(to_projective(P), k))

    def _in_subgroup(self, pt) -> bool:
        return is_inf(multiply(pt, self.n))

    def is_element(self, value) -> bool:
        if value is None:
            return True
        if not isinstance(value, tuple) or len(value) != 2:
            return False
        if not all(isinstance(c, int) and not isinstance(c, bool) for c in value):
            return False
        x, y = value
        if not (0 <= x < self.p and 0 <= y < self.p):
            return False
        pt = to_projective(value)
        return is_on_curve(pt, b) and self._in_subgroup(pt)

    def encode(self, P: Point) -> bytes:
        return compress_G1(to_projective(P)).to_bytes(COMPRESSED_G1_SIZE, "big")

    def decode(self, data: bytes) -> Point:
        """
        Decode a compressed G1 point.

        Raises:
            ValidationError: If data is not the compressed form of a point
                in the prime-order subgroup
        """
        data = self._check_length(data, COMPRESSED_G1_SIZE)
        try:
            pt = decompress_G1(int.from_bytes(data, "big"))
        except ValueError as e:
            raise ValidationError(f"Invalid compressed {self.name} point: {e}") from e

        if not self._in_subgroup(pt):
            raise ValidationError(f"Point is not in the prime-order subgroup of {self.name}")
        return to_affine(pt)

    def hash_to_group(self, data: bytes) -> Point:
        return to_affine(hash_to_G1(data, self.dst, hashlib.sha256))
