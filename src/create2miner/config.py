"""Miner configuration from the environment and the command line."""

import os
from dataclasses import dataclass, replace
from pathlib import Path

from eth_utils import decode_hex, is_address, to_canonical_address

from create2miner.core.constants import DEFAULT_MAX_ATTEMPTS, DETERMINISTIC_DEPLOYER
from create2miner.core.errors import InvalidRequest
from create2miner.core.flags import ALL_HOOK_MASK, parse_flags
from create2miner.core.types import DeploymentRequest

ENV_DEPLOYER = "CREATE2_DEPLOYER"
ENV_FLAGS = "HOOK_FLAGS"
ENV_MASK = "FLAG_MASK"
ENV_MAX_ATTEMPTS = "MAX_ATTEMPTS"
ENV_WORKERS = "MINER_WORKERS"
ENV_MANAGER = "POOL_MANAGER"


def parse_address(value: str) -> bytes:
    """Parse a hex address, checksummed or not, into 20 bytes."""
    if not is_address(value):
        raise InvalidRequest(f"Invalid address: {value!r}")
    return to_canonical_address(value)


def parse_hex(value: str) -> bytes:
    """Parse hex bytes, or read them from a file when prefixed with "@"."""
    try:
        if value.startswith("@"):
            value = Path(value[1:]).read_bytes().decode("ascii").strip()
        return decode_hex(value)
    except ValueError as e:
        raise InvalidRequest(f"Invalid hex data: {e}") from e


def _parse_flag_value(name: str, value: str) -> int:
    try:
        return parse_flags(value)
    except ValueError as e:
        raise InvalidRequest(f"{name}: {e}") from e


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value, 0)
    except ValueError as e:
        raise InvalidRequest(f"{name} must be an integer, got {value!r}") from e


def encode_address_arg(address: bytes) -> bytes:
    """ABI-encode an address constructor argument (left-padded to 32 bytes)."""
    return address.rjust(32, b"\x00")


@dataclass
class MinerConfig:
    deployer: bytes = DETERMINISTIC_DEPLOYER
    required_flags: int = 0
    flag_mask: int = ALL_HOOK_MASK
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    workers: int = 1
    manager: bytes | None = None

    @classmethod
    def from_env(cls, environ=None) -> "MinerConfig":
        """Build a config from environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        config = cls()

        if env.get(ENV_DEPLOYER):
            config.deployer = parse_address(env[ENV_DEPLOYER])
        if env.get(ENV_FLAGS):
            config.required_flags = _parse_flag_value(ENV_FLAGS, env[ENV_FLAGS])
        if env.get(ENV_MASK):
            config.flag_mask = _parse_flag_value(ENV_MASK, env[ENV_MASK])
        if env.get(ENV_MAX_ATTEMPTS):
            config.max_attempts = _parse_int(ENV_MAX_ATTEMPTS, env[ENV_MAX_ATTEMPTS])
        if env.get(ENV_WORKERS):
            config.workers = _parse_int(ENV_WORKERS, env[ENV_WORKERS])
        if env.get(ENV_MANAGER):
            config.manager = parse_address(env[ENV_MANAGER])

        return config

    def override(self, **values) -> "MinerConfig":
        """Return a copy with every non-None value replaced."""
        return replace(self, **{k: v for k, v in values.items() if v is not None})

    def constructor_args(self, extra: bytes = b"") -> bytes:
        args = encode_address_arg(self.manager) if self.manager is not None else b""
        return args + extra

    def build_request(self, init_code: bytes, extra_args: bytes = b"") -> DeploymentRequest:
        return DeploymentRequest(
            deployer=self.deployer,
            required_flags=self.required_flags,
            flag_mask=self.flag_mask,
            init_code=init_code,
            constructor_args=self.constructor_args(extra_args),
        )
