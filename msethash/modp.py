"""
Modular Exponentiation Groups

Multiplicative groups of integers modulo a prime:

- MultiplicativeGroup: all of Z_p^*
- MuHash3072Group: Z_p^* for p = 2^3072 - 1103717, compatible with the
  MuHash3072 digest used by Bitcoin Core
- SafePrimeGroup: the prime-order subgroup of quadratic residues modulo a
  safe prime p = 2q + 1

Collision resistance of digests over these groups rests on the hardness of
discrete logarithms in the chosen (sub)group.
"""

from typing import Hashable, Optional, Tuple

from .errors import ValidationError
from .groups import Group
from .hash_to_group import hash_to_num3072, hash_to_residue, hash_to_unit
from .primality import is_probable_prime

MUHASH3072_MODULUS = 2**3072 - 1103717

# RFC 3526, 2048-bit MODP group (id 14)
RFC3526_MODP_2048 = int(
    "FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD129024E088A67CC74"
    "020BBEA63B139B22514A08798E3404DDEF9519B3CD3A431B302B0A6DF25F1437"
    "4FE1356D6D51C245E485B576625E7EC6F44C42E9A637ED6B0BFF5CB6F406B7ED"
    "EE386BFB5A899FA5AE9F24117C4B1FE649286651ECE45B3DC2007CB8A163BF05"
    "98DA48361C55D39A69163FA8FD24CF5F83655D23DCA3AD961C62F356208552BB"
    "9ED529077096966D670C354E4ABC9804F1746C08CA18217C32905E462E36CE3B"
    "E39E772C180E86039B2783A2EC07A28FB5C55DF06F4C52C9DE2BCBF695581718"
    "3995497CEA956AE515D2261898FA051015728E5A8AACAA68FFFFFFFFFFFFFFFF",
    16,
)


class MultiplicativeGroup(Group):
    """
    The multiplicative group Z_p^* of a prime field.

    Elements are ints in [1, p - 1], serialized as fixed-width integers.

    Args:
        p: Prime modulus
        name: Registry name (default: "modp<bits>")
        byteorder: Byte order of the serialized form (default: "big")
        check_prime: Run Miller-Rabin on p (default: True)

    Raises:
        ValueError: If p is not an odd prime
    """

    def __init__(self, p: int, name: Optional[str] = None, byteorder: str = "big", check_prime: bool = True):
        if not isinstance(p, int) or p < 3 or p % 2 == 0:
            raise ValueError("Modulus p must be an odd prime")
        if check_prime and not is_probable_prime(p):
            raise ValueError("Modulus p must be prime")
        if byteorder not in ("big", "little"):
            raise ValueError("byteorder must be 'big' or 'little'")

        self.p = p
        self.byteorder = byteorder
        self.element_size = (p.bit_length() + 7) // 8
        self.name = name or f"modp{p.bit_length()}"

    @property
    def order(self) -> int:
        return self.p - 1

    def _params(self) -> Tuple[Hashable, ...]:
        return (self.p, self.byteorder)

    def identity(self) -> int:
        return 1

    def combine(self, a: int, b: int) -> int:
        return (a * b) % self.p

    def invert(self, a: int) -> int:
        return pow(a, -1, self.p)

    def scalar_multiply(self, a: int, k: int) -> int:
        # pow() inverts a itself for negative k
        return pow(a, k, self.p)

    def is_element(self, value) -> bool:
        return isinstance(value, int) and not isinstance(value, bool) and 1 <= value < self.p

    def encode(self, a: int) -> bytes:
        return a.to_bytes(self.element_size, self.byteorder)

    def decode(self, data: bytes) -> int:
        data = self._check_length(data, self.element_size)
        value = int.from_bytes(data, self.byteorder)
        if not 1 <= value < self.p:
            raise ValidationError(f"Encoded value is outside [1, p - 1] for group {self.name}")
        return value

    def hash_to_group(self, data: bytes) -> int:
        return hash_to_unit(data, self.p)


class MuHash3072Group(MultiplicativeGroup):
    """
    Z_p^* for the 3072-bit prime p = 2^3072 - 1103717.

    Elements are hashed with the ChaCha20 expansion of Bitcoin Core's MuHash3072
    and serialized as 384 little-endian bytes, so digests over this group
    interoperate with Bitcoin Core's MuHash.
    """

    def __init__(self):
        # p is a well-known prime; skip the Miller-Rabin run
        super().__init__(MUHASH3072_MODULUS, name="muhash3072", byteorder="little", check_prime=False)

    def hash_to_group(self, data: bytes) -> int:
        value = hash_to_num3072(data) % self.p
        counter = 0
        while value == 0:
            counter += 1
            value = hash_to_num3072(counter.to_bytes(4, "big") + data) % self.p
        return value


class SafePrimeGroup(MultiplicativeGroup):
    """
    Subgroup of quadratic residues modulo a safe prime p = 2q + 1.

    The subgroup has prime order q, so every non-identity element
    generates it. Decoding checks membership with a^q = 1 (mod p).

    Args:
        p: Safe prime modulus
        name: Registry name (default: "qr<bits>")
        check_prime: Run Miller-Rabin on p and q (default: True)

    Raises:
        ValueError: If p is not a safe prime

    Example:
        >>> group = SafePrimeGroup(2039)  # q = 1019
        >>> group.is_element(4)
        True
    """

    def __init__(self, p: int, name: Optional[str] = None, check_prime: bool = True):
        super().__init__(p, name=name or f"qr{p.bit_length()}", check_prime=check_prime)
        if p < 5:
            raise ValueError("Safe prime p must be at least 5")
        if check_prime and not is_probable_prime((p - 1) // 2):
            raise ValueError("p must be a safe prime: (p - 1) / 2 is not prime")
        self.q = (p - 1) // 2

    @property
    def order(self) -> int:
        return self.q

    def is_element(self, value) -> bool:
        if not super().is_element(value):
            return False
        return pow(value, self.q, self.p) == 1

    def decode(self, data: bytes) -> int:
        value = super().decode(data)
        if pow(value, self.q, self.p) != 1:
            raise ValidationError(f"Encoded value is not a quadratic residue for group {self.name}")
        return value

    def hash_to_group(self, data: bytes) -> int:
        return hash_to_residue(data, self.p)


def modp2048() -> SafePrimeGroup:
    """Quadratic-residue subgroup of the RFC 3526 2048-bit MODP prime."""
    return SafePrimeGroup(RFC3526_MODP_2048, name="modp2048", check_prime=False)


def toy_group() -> SafePrimeGroup:
    """
    Small safe-prime group for fast unit tests.

    p = 2039, q = 1019. Digests collide after a few dozen elements;
    never use outside tests.
    """
    return SafePrimeGroup(2039, name="toy2039")
