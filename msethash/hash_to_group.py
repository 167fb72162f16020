"""
Hash-to-Group Embeddings

Deterministic maps from arbitrary element bytes into the groups shipped with
msethash. Each map is modelled as a random oracle onto its group; the
collision resistance of every multiset digest rests on these functions.
"""

import hashlib
from typing import Union

from blake3 import blake3
from Crypto.Cipher import ChaCha20

BytesLike = Union[bytes, bytearray, memoryview]

DST_PREFIX = b"msethash-v1:"


def element_bytes(element: BytesLike) -> bytes:
    """
    Normalize a multiset element to bytes.

    Raises:
        TypeError: If element is not bytes-like
    """
    if isinstance(element, bytes):
        return element
    if isinstance(element, (bytearray, memoryview)):
        return bytes(element)
    raise TypeError(f"Multiset elements must be bytes, not {type(element).__name__}")


def expand_message(data: bytes, length: int, dst: bytes) -> bytes:
    """
    Expand data to length pseudo-random bytes with SHAKE-256.

    The domain tag is length-prefixed so that distinct tags never produce
    overlapping inputs.

    Args:
        data: Input bytes
        length: Number of output bytes
        dst: Domain separation tag

    Returns:
        bytes: length bytes of output
    """
    tag = DST_PREFIX + dst
    if len(tag) > 255:
        raise ValueError("Domain separation tag too long")
    shake = hashlib.shake_256()
    shake.update(bytes([len(tag)]) + tag)
    shake.update(data)
    return shake.digest(length)


def chacha20_expand(data: bytes, length: int = 384) -> bytes:
    """
    Expand data with the ChaCha20 keystream keyed by SHA-256(data).

    This is the element expansion of Bitcoin Core's MuHash3072 (ToNum3072): a
    zero nonce and a block counter starting at zero.
    """
    key = hashlib.sha256(data).digest()
    cipher = ChaCha20.new(key=key, nonce=bytes(8))
    return cipher.encrypt(bytes(length))


def hash_to_num3072(data: bytes) -> int:
    """Map data to a 3072-bit integer (little-endian ChaCha20 keystream)."""
    return int.from_bytes(chacha20_expand(data, 384), "little")


def _field_bytes(p: int) -> int:
    # 128 extra bits keep the bias of the modular reduction negligible
    return (p.bit_length() + 7) // 8 + 16


def hash_to_unit(data: bytes, p: int, dst: bytes = b"modp") -> int:
    """
    Map data to a uniformly distributed element of Z_p^*.

    Zero is re-drawn with an incremented counter, which only matters for
    very small moduli.

    Args:
        data: Element bytes
        p: Prime modulus
        dst: Domain separation tag

    Returns:
        int: Value in [1, p - 1]
    """
    length = _field_bytes(p)
    counter = 0
    while True:
        digest = expand_message(counter.to_bytes(4, "big") + data, length, dst)
        x = int.from_bytes(digest, "big") % p
        if x:
            return x
        counter += 1


def hash_to_residue(data: bytes, p: int, dst: bytes = b"qr") -> int:
    """Map data to the quadratic-residue subgroup of Z_p^* by squaring."""
    x = hash_to_unit(data, p, dst)
    return (x * x) % p


def hash_to_ring(data: bytes, bits: int, dst: bytes = b"ring") -> int:
    """Map data to Z_{2^bits} with a BLAKE3 digest of bits / 8 bytes."""
    if bits <= 0 or bits % 8:
        raise ValueError("bits must be a positive multiple of 8")
    hasher = blake3(DST_PREFIX + dst + b":")
    hasher.update(data)
    return int.from_bytes(hasher.digest(length=bits // 8), "big")
