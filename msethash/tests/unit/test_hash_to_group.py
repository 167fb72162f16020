"""
Unit Tests for Hash-to-Group Embeddings

Tests determinism, domain separation and range of every element embedding.
"""

import pytest

from msethash.hash_to_group import (
    chacha20_expand,
    element_bytes,
    expand_message,
    hash_to_num3072,
    hash_to_residue,
    hash_to_ring,
    hash_to_unit,
)


class TestElementBytes:
    """Normalization of multiset elements."""

    def test_bytes_like_inputs(self):
        assert element_bytes(b"abc") == b"abc"
        assert element_bytes(bytearray(b"abc")) == b"abc"
        assert element_bytes(memoryview(b"abc")) == b"abc"
        assert element_bytes(b"") == b""

    @pytest.mark.parametrize("bad", ["apple", 42, None, ["a"]])
    def test_rejects_non_bytes(self, bad):
        with pytest.raises(TypeError, match="must be bytes"):
            element_bytes(bad)


class TestExpandMessage:
    """SHAKE-256 expansion."""

    def test_deterministic(self):
        assert expand_message(b"data", 64, b"tag") == expand_message(b"data", 64, b"tag")

    def test_length(self):
        for length in (1, 32, 300):
            assert len(expand_message(b"data", length, b"tag")) == length

    def test_domain_separation(self):
        assert expand_message(b"data", 32, b"tag1") != expand_message(b"data", 32, b"tag2")
        # Tag/data boundary is unambiguous
        assert expand_message(b"bdata", 32, b"ta") != expand_message(b"data", 32, b"tab")

    def test_tag_too_long(self):
        with pytest.raises(ValueError, match="too long"):
            expand_message(b"data", 32, b"x" * 300)


class TestChaCha20Expansion:
    """MuHash3072 element expansion."""

    def test_length_and_determinism(self):
        out = chacha20_expand(b"\x00" * 32)

        assert len(out) == 384
        assert out == chacha20_expand(b"\x00" * 32)
        assert out != chacha20_expand(b"\x01" + b"\x00" * 31)

    def test_keystream_prefix_is_stable(self):
        # Longer output extends the same keystream
        assert chacha20_expand(b"element", 512)[:384] == chacha20_expand(b"element", 384)

    def test_num3072_range(self):
        value = hash_to_num3072(b"element")

        assert 0 <= value < 2**3072
        assert value == int.from_bytes(chacha20_expand(b"element"), "little")


class TestModularEmbeddings:
    """Embeddings into Z_p^* and the quadratic residues."""

    def test_unit_range(self):
        for i in range(200):
            x = hash_to_unit(bytes([i]), 7)
            assert 1 <= x < 7

    def test_unit_never_zero_for_tiny_modulus(self):
        # With p = 3 a third of the first draws are zero and must be re-drawn
        values = {hash_to_unit(i.to_bytes(2, "big"), 3) for i in range(100)}

        assert values == {1, 2}

    def test_residue(self):
        p = 2039
        for i in range(100):
            x = hash_to_residue(bytes([i]), p)
            assert pow(x, (p - 1) // 2, p) == 1

    def test_dst_changes_output(self):
        p = 2**127 - 1
        assert hash_to_unit(b"data", p, b"one") != hash_to_unit(b"data", p, b"two")


class TestRingEmbedding:
    """BLAKE3 embedding into Z_{2^bits}."""

    def test_range(self):
        for bits in (8, 128, 256):
            assert 0 <= hash_to_ring(b"row", bits) < 2**bits

    def test_deterministic_and_distinct(self):
        assert hash_to_ring(b"row-1", 256) == hash_to_ring(b"row-1", 256)
        assert hash_to_ring(b"row-1", 256) != hash_to_ring(b"row-2", 256)

    def test_invalid_width(self):
        with pytest.raises(ValueError, match="multiple of 8"):
            hash_to_ring(b"row", 10)
