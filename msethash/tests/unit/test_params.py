"""
Unit Tests for the Group Registry and Parameter Files
"""

import json

import pytest

from msethash import params
from msethash.accumulator import MultisetAccumulator
from msethash.modp import RFC3526_MODP_2048, SafePrimeGroup, modp2048
from msethash.params import (
    available_groups,
    get_group,
    load_group,
    load_group_file,
    register_group,
    save_group_file,
    validate_safe_prime,
)


class TestRegistry:
    """Group lookup by name."""

    def test_available_groups(self):
        names = available_groups()

        for name in ("muhash3072", "modp2048", "bls12_381_g1", "adhash256"):
            assert name in names

    def test_get_group(self):
        for name in ("muhash3072", "modp2048", "bls12_381_g1", "adhash256"):
            assert get_group(name).name == name

    def test_lookup_is_case_insensitive_and_cached(self):
        assert get_group("BLS12_381_G1") is get_group("bls12_381_g1")

    def test_unknown_group(self):
        with pytest.raises(ValueError, match="Unknown group 'ed448'"):
            get_group("ed448")

    def test_register_group(self, monkeypatch):
        monkeypatch.setattr(params, "_REGISTRY", dict(params._REGISTRY))
        monkeypatch.setattr(params, "_CACHE", {})

        register_group("toy", lambda: SafePrimeGroup(2039, name="toy"))

        assert "toy" in available_groups()
        assert get_group("toy").p == 2039

        with pytest.raises(ValueError, match="already registered"):
            register_group("toy", lambda: SafePrimeGroup(2039))


class TestLoadGroup:
    """Resolving the configured default group."""

    def test_explicit_name(self):
        assert load_group("adhash256").name == "adhash256"

    def test_default(self):
        assert load_group().name == "muhash3072"

    def test_default_from_environment(self, monkeypatch):
        monkeypatch.setenv("MSETHASH_DEFAULT_GROUP", "modp2048")

        assert load_group().name == "modp2048"

    def test_unknown_default(self, monkeypatch):
        monkeypatch.setenv("MSETHASH_DEFAULT_GROUP", "nope")

        with pytest.raises(ValueError, match="Unknown group"):
            load_group()

    def test_params_file_overrides_default(self, monkeypatch, tmp_path):
        path = tmp_path / "group.json"
        save_group_file(modp2048(), path)
        monkeypatch.setenv("MSETHASH_DEFAULT_GROUP", "bls12_381_g1")
        monkeypatch.setenv("MSETHASH_GROUP_PARAMS_FILE", str(path))

        group = load_group()

        assert isinstance(group, SafePrimeGroup)
        assert group == modp2048()

    def test_params_file_is_read_once(self, monkeypatch, tmp_path):
        path = tmp_path / "group.json"
        save_group_file(modp2048(), path)
        monkeypatch.setenv("MSETHASH_GROUP_PARAMS_FILE", str(path))

        first = load_group()
        path.unlink()

        assert load_group() is first
        assert MultisetAccumulator().group is first


class TestParameterFiles:
    """JSON safe-prime parameter files."""

    def test_round_trip(self, tmp_path):
        path = tmp_path / "group.json"
        save_group_file(modp2048(), path)

        stored = json.loads(path.read_text())
        assert stored["type"] == "safe-prime"
        assert int(stored["p"], 16) == RFC3526_MODP_2048

        group = load_group_file(path)
        assert group == modp2048()
        assert group.name == "modp2048"

    def test_small_group_with_lower_bound(self, tmp_path):
        path = tmp_path / "toy.json"
        path.write_text(json.dumps({"p": hex(2039)}))

        group = load_group_file(path, min_bits=8)

        assert group.q == 1019
        assert group.name == "qr11"

    def test_small_group_rejected_by_default(self, tmp_path):
        path = tmp_path / "toy.json"
        path.write_text(json.dumps({"p": hex(2039)}))

        with pytest.raises(ValueError, match="at least 2048 bits"):
            load_group_file(path)

    def test_malformed_files(self, tmp_path):
        path = tmp_path / "bad.json"

        path.write_text("{not json")
        with pytest.raises(ValueError, match="Invalid group parameters file format"):
            load_group_file(path)

        path.write_text(json.dumps({"name": "missing-p"}))
        with pytest.raises(ValueError, match="Invalid group parameters file format"):
            load_group_file(path)

        path.write_text(json.dumps({"type": "curve", "p": "0x17"}))
        with pytest.raises(ValueError, match="Unsupported group type"):
            load_group_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_group_file(tmp_path / "absent.json")


class TestValidateSafePrime:
    """Safe-prime validation."""

    def test_valid(self):
        validate_safe_prime(2039, min_bits=11)
        validate_safe_prime(RFC3526_MODP_2048)

    def test_invalid(self):
        with pytest.raises(ValueError, match="positive"):
            validate_safe_prime(-7, min_bits=1)

        with pytest.raises(ValueError, match="at least 2048 bits"):
            validate_safe_prime(2039)

        with pytest.raises(ValueError, match="must be prime"):
            validate_safe_prime(2047, min_bits=8)

        with pytest.raises(ValueError, match="safe prime"):
            validate_safe_prime(2029, min_bits=8)
