"""Core types and constants."""

from .constants import (
    CREATE2_PREFIX,
    DEFAULT_MAX_ATTEMPTS,
    DETERMINISTIC_DEPLOYER,
    MAX_SALT,
)
from .crypto import keccak256
from .create2 import compute_init_code_hash, predict, salt_to_bytes

__all__ = [
    "CREATE2_PREFIX",
    "DEFAULT_MAX_ATTEMPTS",
    "DETERMINISTIC_DEPLOYER",
    "MAX_SALT",
    "keccak256",
    "compute_init_code_hash",
    "predict",
    "salt_to_bytes",
]
