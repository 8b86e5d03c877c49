"""Tests for verification and the mine-deploy-verify pipeline."""

import pytest

from create2miner.core.errors import (
    AddressMismatch,
    CollisionError,
    InvalidRequest,
    SearchExhausted,
)
from create2miner.deploy.base import Deployer
from create2miner.deploy.evm import EVMDeployer
from create2miner.deploy.memory import InMemoryDeployer
from create2miner.miner.pipeline import deploy_with_mined_salt
from create2miner.miner.search import mine
from create2miner.miner.verify import verify
from tests.fixtures.addresses import DEADBEEF_ADDRESS, PROXY_ADDRESS

AFTER_SWAP_BIT = 1 << 6


class RecordingDeployer(Deployer):
    """Returns a fixed address and records calls."""

    def __init__(self, address: bytes):
        self.address = address
        self.calls = []

    def deploy(self, init_code, salt):
        self.calls.append((init_code, salt))
        return self.address


class TestVerify:
    """Test the address check."""

    def test_equal_addresses_pass(self):
        """Matching addresses return silently."""
        assert verify(PROXY_ADDRESS, PROXY_ADDRESS) is None

    def test_mismatch_raises(self):
        """Different addresses abort."""
        with pytest.raises(AddressMismatch) as exc_info:
            verify(DEADBEEF_ADDRESS, PROXY_ADDRESS)

        assert exc_info.value.actual == DEADBEEF_ADDRESS
        assert exc_info.value.predicted == PROXY_ADDRESS
        assert DEADBEEF_ADDRESS.hex() in str(exc_info.value)


class TestDeployWithMinedSalt:
    """Test the full pipeline."""

    def test_round_trip_memory(self, after_swap_request, memory_deployer):
        """In-memory deployment lands on the mined address."""
        outcome = deploy_with_mined_salt(after_swap_request, memory_deployer)

        assert outcome.address == outcome.result.address
        assert outcome.address[-1] & AFTER_SWAP_BIT
        assert memory_deployer.is_deployed(outcome.address)

    def test_round_trip_evm(self, after_swap_request, evm_deployer):
        """Proxy deployment lands on the mined address."""
        outcome = deploy_with_mined_salt(after_swap_request, evm_deployer)

        assert outcome.address == mine(after_swap_request).address
        assert evm_deployer.get_code(outcome.address) == (42).to_bytes(32, "big")

    def test_creation_code_passed_to_deployer(self, after_swap_request):
        """Deployer receives init code with constructor args and the mined salt."""
        result = mine(after_swap_request)
        deployer = RecordingDeployer(result.address)

        deploy_with_mined_salt(after_swap_request, deployer)

        assert deployer.calls == [(after_swap_request.creation_code, result.salt)]

    def test_wrong_factory_mismatch(self, request_factory):
        """Deploying through a different factory is fatal."""
        request = request_factory()
        deployer = InMemoryDeployer(DEADBEEF_ADDRESS)

        with pytest.raises(AddressMismatch):
            deploy_with_mined_salt(request, deployer)

    def test_wrong_factory_mismatch_evm(self, request_factory):
        """Mismatch is detected against a real proxy as well."""
        request = request_factory(deployer=DEADBEEF_ADDRESS)

        with pytest.raises(AddressMismatch):
            deploy_with_mined_salt(request, EVMDeployer(factory=PROXY_ADDRESS))

    def test_second_run_collides(self, after_swap_request, memory_deployer):
        """Repeating a deployment hits the already-deployed address."""
        deploy_with_mined_salt(after_swap_request, memory_deployer)

        with pytest.raises(CollisionError):
            deploy_with_mined_salt(after_swap_request, memory_deployer)

    def test_invalid_request_never_deploys(self, request_factory):
        """Inconsistent flags abort before the deployer is called."""
        request = request_factory(required_flags=0x41, flag_mask=0x40)
        deployer = RecordingDeployer(PROXY_ADDRESS)

        with pytest.raises(InvalidRequest):
            deploy_with_mined_salt(request, deployer)
        assert deployer.calls == []

    def test_exhausted_never_deploys(self, after_swap_request):
        """A failed search leaves nothing deployed."""
        deployer = RecordingDeployer(PROXY_ADDRESS)

        with pytest.raises(SearchExhausted):
            deploy_with_mined_salt(after_swap_request, deployer, max_attempts=0)
        assert deployer.calls == []

    def test_logs_deployed_address(self, after_swap_request, memory_deployer, caplog):
        """Verified address is logged."""
        with caplog.at_level("INFO", logger="create2miner"):
            deploy_with_mined_salt(after_swap_request, memory_deployer)

        assert "Deployed to 0x" in caplog.text
