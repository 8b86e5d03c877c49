"""In-memory CREATE2 factory."""

import logging
from dataclasses import dataclass

from create2miner.core.constants import DETERMINISTIC_DEPLOYER
from create2miner.core.create2 import predict, salt_to_bytes
from create2miner.core.crypto import keccak256
from create2miner.core.errors import CollisionError

from .base import Deployer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeploymentRecord:
    address: bytes
    deployer: bytes
    salt: bytes
    init_code_hash: bytes
    init_code: bytes


class InMemoryDeployer(Deployer):
    """Simulates a CREATE2 factory without executing any code.

    Every successful deploy is recorded; deploying the same creation code with
    the same salt twice targets the same address and raises CollisionError.
    """

    def __init__(self, factory: bytes = DETERMINISTIC_DEPLOYER):
        self.factory = factory
        self._deployments: dict[bytes, DeploymentRecord] = {}

    def deploy(self, init_code: bytes, salt: int | bytes) -> bytes:
        salt = salt_to_bytes(salt)
        init_code_hash = keccak256(init_code)
        address = predict(self.factory, salt, init_code_hash)

        if address in self._deployments:
            raise CollisionError(address)

        self._deployments[address] = DeploymentRecord(
            address=address,
            deployer=self.factory,
            salt=salt,
            init_code_hash=init_code_hash,
            init_code=init_code,
        )
        logger.debug("Recorded deployment at 0x%s", address.hex())
        return address

    def occupy(self, address: bytes) -> None:
        """Mark an address as taken by something this factory did not deploy."""
        self._deployments[address] = DeploymentRecord(
            address=address,
            deployer=b"",
            salt=b"",
            init_code_hash=b"",
            init_code=b"",
        )

    def is_deployed(self, address: bytes) -> bool:
        return address in self._deployments

    def get_deployment(self, address: bytes) -> DeploymentRecord | None:
        return self._deployments.get(address)

    def get_deployments(self) -> list[DeploymentRecord]:
        return list(self._deployments.values())
