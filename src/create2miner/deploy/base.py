"""Interface for deployment transports."""

from abc import ABC, abstractmethod


class Deployer(ABC):
    """Creates a contract through CREATE2 and reports where it landed."""

    @abstractmethod
    def deploy(self, init_code: bytes, salt: int | bytes) -> bytes:
        """
        Deploy creation code with the given salt.

        Args:
            init_code: Creation code, constructor arguments included
            salt: Salt as an integer or 32 bytes

        Returns:
            20-byte address of the created contract

        Raises:
            CollisionError: If the target address is already occupied
            DeploymentFailed: If the creation reverted
        """
