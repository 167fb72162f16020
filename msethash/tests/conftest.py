"""
Test Configuration and Fixtures

Provides group fixtures and isolates tests from MSETHASH_* settings.
"""

import logging

import pytest

from msethash.additive import AdditiveGroup
from msethash import params
from msethash.config import get_settings
from msethash.curve import BLS12381G1Group
from msethash.modp import MuHash3072Group, modp2048, toy_group

GROUP_FACTORIES = {
    "muhash3072": MuHash3072Group,
    "modp2048": modp2048,
    "bls12_381_g1": BLS12381G1Group,
    "adhash256": AdditiveGroup,
    "toy2039": toy_group,
}

# Groups large enough that distinct small multisets never collide
CRYPTO_GROUPS = ["muhash3072", "modp2048", "bls12_381_g1", "adhash256"]


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Clear MSETHASH_* variables and the settings cache around each test."""
    monkeypatch.setattr(params, "_FILE_CACHE", {})
    for var in (
        "MSETHASH_DEFAULT_GROUP",
        "MSETHASH_GROUP_PARAMS_FILE",
        "MSETHASH_LOG_LEVEL",
        "MSETHASH_LOG_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def restore_package_logger():
    """Undo handler changes made by setup_logging()."""
    package_logger = logging.getLogger("msethash")
    handlers = package_logger.handlers[:]
    level = package_logger.level
    propagate = package_logger.propagate
    yield package_logger
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate


@pytest.fixture
def toy():
    """Safe-prime group with p = 2039 (fast, collision-prone)."""
    return toy_group()


@pytest.fixture
def muhash():
    return MuHash3072Group()


@pytest.fixture
def curve():
    return BLS12381G1Group()


@pytest.fixture(params=list(GROUP_FACTORIES))
def any_group(request):
    """Every shipped group, including the toy group."""
    return GROUP_FACTORIES[request.param]()


@pytest.fixture(params=CRYPTO_GROUPS)
def crypto_group(request):
    """Every shipped production-size group."""
    return GROUP_FACTORIES[request.param]()
