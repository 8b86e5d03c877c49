"""Deployment on an in-process py-evm chain."""

import logging
from typing import Any

from eth import constants
from eth.chains.base import MiningChain
from eth.consensus.noproof import NoProofConsensus
from eth.db.atomic import AtomicDB
from eth.db.backends.memory import MemoryDB
from eth.vm.forks.prague import PragueVM
from eth_keys import keys
from eth_utils import to_wei

from create2miner.core.constants import (
    ADDRESS_SIZE,
    DEFAULT_CHAIN_ID,
    DEFAULT_GAS_LIMIT,
    DETERMINISTIC_DEPLOYER,
    DETERMINISTIC_DEPLOYER_CODE,
)
from create2miner.core.create2 import compute_create2_address, salt_to_bytes
from create2miner.core.errors import CollisionError, DeploymentFailed

from .base import Deployer

logger = logging.getLogger(__name__)

# Well-known development key, never used outside the local chain.
DEFAULT_SENDER_KEY = bytes.fromhex("01" * 32)


class EVMDeployer(Deployer):
    """Deploys through the deterministic deployment proxy on a local chain.

    The chain starts from a genesis holding the proxy code at ``factory`` and
    a funded sender. Each deploy sends ``salt ++ init_code`` to the proxy in
    its own block and returns the address the proxy reports.
    """

    def __init__(
        self,
        factory: bytes = DETERMINISTIC_DEPLOYER,
        sender_key: bytes = DEFAULT_SENDER_KEY,
        chain_id: int = DEFAULT_CHAIN_ID,
        gas_limit: int = DEFAULT_GAS_LIMIT,
        deploy_gas: int = 5_000_000,
        gas_price: int = 10_000_000_000,
    ):
        self.factory = factory
        self.chain_id = chain_id
        self.gas_limit = gas_limit
        self.deploy_gas = deploy_gas
        self.gas_price = gas_price
        self._pk = keys.PrivateKey(sender_key)
        self.sender = self._pk.public_key.to_canonical_address()
        self._setup_chain()

    def _setup_chain(self):
        PragueNoProof = PragueVM.configure(consensus_class=NoProofConsensus)

        chain_class = MiningChain.configure(
            __name__="DeploymentChain",
            vm_configuration=((constants.GENESIS_BLOCK_NUMBER, PragueNoProof),),
            chain_id=self.chain_id,
        )

        genesis_params = {
            "difficulty": 0,
            "gas_limit": self.gas_limit,
            "timestamp": 0,
            "coinbase": b"\x00" * 20,
        }
        genesis_state = {
            self.sender: {
                "balance": to_wei(100, "ether"),
                "nonce": 0,
                "code": b"",
                "storage": {},
            },
            self.factory: {
                "balance": 0,
                "nonce": 1,
                "code": DETERMINISTIC_DEPLOYER_CODE,
                "storage": {},
            },
        }

        self.chain = chain_class.from_genesis(
            AtomicDB(MemoryDB()), genesis_params, genesis_state
        )

    def get_vm(self):
        return self.chain.get_vm()

    def get_code(self, address: bytes) -> bytes:
        return self.get_vm().state.get_code(address)

    def get_nonce(self, address: bytes) -> int:
        return self.get_vm().state.get_nonce(address)

    def is_occupied(self, address: bytes) -> bool:
        return bool(self.get_code(address)) or self.get_nonce(address) > 0

    def _send(self, data: bytes) -> Any:
        vm = self.get_vm()
        unsigned_tx = vm.create_unsigned_transaction(
            nonce=vm.state.get_nonce(self.sender),
            gas_price=self.gas_price,
            gas=self.deploy_gas,
            to=self.factory,
            value=0,
            data=data,
        )
        signed_tx = unsigned_tx.as_signed_transaction(self._pk)
        _, _, computation = self.chain.apply_transaction(signed_tx)
        self.chain.mine_block()
        return computation

    def deploy(self, init_code: bytes, salt: int | bytes) -> bytes:
        salt = salt_to_bytes(salt)

        target = compute_create2_address(self.factory, salt, init_code)
        if self.is_occupied(target):
            raise CollisionError(target)

        computation = self._send(salt + init_code)
        if computation.is_error:
            raise DeploymentFailed(f"Deployment reverted: {computation.error}")

        output = bytes(computation.output)
        if len(output) != ADDRESS_SIZE:
            raise DeploymentFailed(
                f"Proxy returned {len(output)} bytes, expected {ADDRESS_SIZE}"
            )

        logger.debug("Proxy created contract at 0x%s", output.hex())
        return output
