"""CREATE2 salt mining for flag-constrained contract addresses."""

from .core.create2 import compute_init_code_hash, predict
from .core.errors import (
    AddressMismatch,
    CollisionError,
    Create2MinerError,
    InvalidRequest,
    SearchExhausted,
)
from .core.types import DeploymentRequest, MiningResult
from .miner.pipeline import deploy_with_mined_salt
from .miner.search import find_salt, mine
from .miner.verify import verify

__all__ = [
    "AddressMismatch",
    "CollisionError",
    "Create2MinerError",
    "DeploymentRequest",
    "InvalidRequest",
    "MiningResult",
    "SearchExhausted",
    "compute_init_code_hash",
    "deploy_with_mined_salt",
    "find_salt",
    "mine",
    "predict",
    "verify",
]
