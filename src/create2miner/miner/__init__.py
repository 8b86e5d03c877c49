"""Salt search, verification and the mine-deploy-verify pipeline."""

from .pipeline import deploy_with_mined_salt
from .search import candidate_salts, find_salt, find_salt_parallel, mine, validate_flags
from .verify import verify

__all__ = [
    "candidate_salts",
    "deploy_with_mined_salt",
    "find_salt",
    "find_salt_parallel",
    "mine",
    "validate_flags",
    "verify",
]
