"""Pytest configuration and shared fixtures for all tests."""

import pytest

from create2miner.config import ENV_DEPLOYER, ENV_FLAGS, ENV_MANAGER, ENV_MASK, ENV_MAX_ATTEMPTS, ENV_WORKERS
from create2miner.core.types import DeploymentRequest
from create2miner.deploy.evm import EVMDeployer
from create2miner.deploy.memory import InMemoryDeployer

from tests.fixtures.addresses import MANAGER_ADDRESS, PROXY_ADDRESS
from tests.fixtures.contracts import SIMPLE_STORAGE_BYTECODE, TEST_INIT_CODE_HASH

AFTER_SWAP_BIT = 1 << 6


# =============================================================================
# Request Fixtures
# =============================================================================

@pytest.fixture
def proxy_address():
    """Deterministic deployment proxy address."""
    return PROXY_ADDRESS


@pytest.fixture
def init_code_hash():
    """Fixed init code digest."""
    return TEST_INIT_CODE_HASH


@pytest.fixture
def request_factory():
    """Factory fixture to create deployment requests."""
    def _request_factory(
        deployer=PROXY_ADDRESS,
        required_flags=AFTER_SWAP_BIT,
        flag_mask=AFTER_SWAP_BIT,
        init_code=SIMPLE_STORAGE_BYTECODE,
        constructor_args=b"",
    ):
        return DeploymentRequest(
            deployer=deployer,
            required_flags=required_flags,
            flag_mask=flag_mask,
            init_code=init_code,
            constructor_args=constructor_args,
        )
    return _request_factory


@pytest.fixture
def after_swap_request(request_factory):
    """Request for the after-swap bit with a manager constructor argument."""
    return request_factory(constructor_args=MANAGER_ADDRESS.rjust(32, b"\x00"))


# =============================================================================
# Deployer Fixtures
# =============================================================================

@pytest.fixture
def memory_deployer():
    """In-memory CREATE2 factory at the proxy address."""
    return InMemoryDeployer(PROXY_ADDRESS)


@pytest.fixture
def evm_deployer():
    """Local py-evm chain with the deployment proxy installed."""
    return EVMDeployer(factory=PROXY_ADDRESS)


# =============================================================================
# Environment Fixtures
# =============================================================================

@pytest.fixture
def clean_env(monkeypatch):
    """Remove miner variables from the environment."""
    for name in (ENV_DEPLOYER, ENV_FLAGS, ENV_MASK, ENV_MAX_ATTEMPTS, ENV_WORKERS, ENV_MANAGER):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
