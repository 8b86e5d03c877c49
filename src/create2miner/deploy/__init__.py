"""Deployment transports executing CREATE2 with a mined salt."""

from .base import Deployer
from .evm import EVMDeployer
from .memory import InMemoryDeployer

__all__ = ["Deployer", "EVMDeployer", "InMemoryDeployer"]
