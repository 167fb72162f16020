"""
Group Parameters and Registry

Resolves group names to Group instances and loads custom safe-prime groups
from JSON parameter files.
"""

import json
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from .additive import AdditiveGroup
from .config import get_settings
from .curve import BLS12381G1Group
from .groups import Group
from .modp import MuHash3072Group, SafePrimeGroup, modp2048
from .primality import is_probable_prime

logger = logging.getLogger(__name__)

GroupFactory = Callable[[], Group]

_REGISTRY: Dict[str, GroupFactory] = {
    "muhash3072": MuHash3072Group,
    "modp2048": modp2048,
    "bls12_381_g1": BLS12381G1Group,
    "adhash256": AdditiveGroup,
}

_CACHE: Dict[str, Group] = {}

# Groups loaded from parameter files, keyed by resolved path
_FILE_CACHE: Dict[Path, SafePrimeGroup] = {}


def register_group(name: str, factory: GroupFactory) -> None:
    """
    Register a group factory under name.

    Args:
        name: Registry name
        factory: Zero-argument callable returning the Group

    Raises:
        ValueError: If name is already registered
    """
    key = name.lower()
    if key in _REGISTRY:
        raise ValueError(f"Group {name!r} is already registered")
    _REGISTRY[key] = factory


def available_groups() -> List[str]:
    return sorted(_REGISTRY)


def get_group(name: str) -> Group:
    """
    Return the group registered under name.

    Instances are cached, so repeated lookups return the same object.

    Raises:
        ValueError: If no group is registered under name
    """
    key = name.lower()
    if key not in _REGISTRY:
        raise ValueError(
            f"Unknown group {name!r}; available groups: {', '.join(available_groups())}"
        )
    if key not in _CACHE:
        _CACHE[key] = _REGISTRY[key]()
    return _CACHE[key]


def load_group(name: Optional[str] = None) -> Group:
    """
    Resolve the group to hash into.

    With no name, the configured default is used: a JSON parameter file
    when MSETHASH_GROUP_PARAMS_FILE is set, otherwise the registry entry
    named by MSETHASH_DEFAULT_GROUP. A parameter file is read and validated
    once per path; later calls return the cached group.

    Args:
        name: Registry name (default: from settings)

    Returns:
        Group: The resolved group

    Raises:
        ValueError: If the name is unknown or the parameter file is invalid
        FileNotFoundError: If the configured parameter file does not exist
    """
    if name is not None:
        return get_group(name)

    settings = get_settings()
    if settings.group_params_file:
        path = Path(settings.group_params_file).resolve()
        if path not in _FILE_CACHE:
            _FILE_CACHE[path] = load_group_file(path)
        return _FILE_CACHE[path]
    return get_group(settings.default_group)


def validate_safe_prime(p: int, min_bits: int = 2048) -> None:
    """
    Validate a safe prime for use as a group modulus.

    Args:
        p: Candidate modulus
        min_bits: Minimum bit length (default: 2048)

    Raises:
        ValueError: If p is too small or not a safe prime
    """
    if p <= 0:
        raise ValueError("Modulus p must be positive")

    if p.bit_length() < min_bits:
        raise ValueError(f"Modulus p must be at least {min_bits} bits")

    if not is_probable_prime(p):
        raise ValueError("Modulus p must be prime")

    if not is_probable_prime((p - 1) // 2):
        raise ValueError("Modulus p must be a safe prime: (p - 1) / 2 is not prime")


def load_group_file(path: Union[str, Path], min_bits: int = 2048) -> SafePrimeGroup:
    """
    Load a safe-prime group from a JSON parameter file.

    The file holds the modulus as a hex string:

        {"type": "safe-prime", "p": "0x...", "name": "my-group"}

    Args:
        path: Path to the parameter file
        min_bits: Minimum modulus size accepted (default: 2048)

    Returns:
        SafePrimeGroup: Group over the quadratic residues modulo p

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is malformed or p is not a safe prime
    """
    params_file = Path(path)

    try:
        with open(params_file, "r") as f:
            params = json.load(f)

        group_type = params.get("type", "safe-prime")
        if group_type != "safe-prime":
            raise ValueError(f"Unsupported group type {group_type!r}")

        p = int(params["p"], 16)
        name = params.get("name")
    except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as e:
        raise ValueError(f"Invalid group parameters file format: {e}")

    validate_safe_prime(p, min_bits=min_bits)
    group = SafePrimeGroup(p, name=name, check_prime=False)
    logger.info(f"Loaded group {group.name} from {params_file} ({p.bit_length()} bits)")
    return group


def save_group_file(group: SafePrimeGroup, path: Union[str, Path]) -> None:
    """Write a safe-prime group to a JSON parameter file readable by load_group_file()."""
    params = {
        "type": "safe-prime",
        "p": hex(group.p),
        "name": group.name,
        "description": "Quadratic-residue subgroup modulo a safe prime",
    }

    with open(Path(path), "w") as f:
        json.dump(params, f, indent=2)
