"""
msethash: Incremental Multiset Hashing

MSet-Mu-Hash digests of multisets with signed multiplicities. Digests are
homomorphic: the digest of a union or difference of two multisets is
computed from the operands' digests without revisiting their elements.
"""

__version__ = "0.1.0"

from .errors import MultisetHashError, ValidationError
from .groups import Group, HashToGroup, double_and_add
from .modp import MultiplicativeGroup, MuHash3072Group, SafePrimeGroup, modp2048
from .curve import BLS12381G1Group
from .additive import AdditiveGroup
from .multiset import MultisetHash
from .params import available_groups, get_group, load_group, load_group_file, register_group
from .accumulator import MultisetAccumulator, union_all
from .config import Settings, get_settings
from .logging_config import setup_logging

__all__ = [
    "MultisetHashError",
    "ValidationError",
    "Group",
    "HashToGroup",
    "double_and_add",
    "MultiplicativeGroup",
    "MuHash3072Group",
    "SafePrimeGroup",
    "modp2048",
    "BLS12381G1Group",
    "AdditiveGroup",
    "MultisetHash",
    "available_groups",
    "get_group",
    "load_group",
    "load_group_file",
    "register_group",
    "MultisetAccumulator",
    "union_all",
    "Settings",
    "get_settings",
    "setup_logging",
]
