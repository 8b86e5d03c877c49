"""Immutable values passed between the miner, the deployer and the verifier."""

from dataclasses import dataclass, field

from .constants import ADDRESS_SIZE
from .create2 import compute_init_code_hash, salt_to_bytes
from .errors import InvalidRequest


@dataclass(frozen=True)
class DeploymentRequest:
    """Everything needed to mine a salt and deploy a contract.

    The deployer is the contract executing CREATE2 (a factory or the
    deterministic deployment proxy), not the account sending the transaction.
    """

    deployer: bytes
    required_flags: int
    flag_mask: int
    init_code: bytes
    constructor_args: bytes = b""
    init_code_hash: bytes = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if len(self.deployer) != ADDRESS_SIZE:
            raise InvalidRequest(
                f"Deployer must be {ADDRESS_SIZE} bytes, got {len(self.deployer)}"
            )
        # Hashed once per request, reused for every candidate salt.
        object.__setattr__(
            self,
            "init_code_hash",
            compute_init_code_hash(self.init_code, self.constructor_args),
        )

    @property
    def creation_code(self) -> bytes:
        return self.init_code + self.constructor_args


@dataclass(frozen=True)
class MiningResult:
    salt: int
    address: bytes
    attempts: int = 1

    @property
    def salt_bytes(self) -> bytes:
        return salt_to_bytes(self.salt)


@dataclass(frozen=True)
class DeploymentOutcome:
    request: DeploymentRequest
    result: MiningResult
    address: bytes
