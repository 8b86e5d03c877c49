"""Exceptions raised while mining, deploying and verifying."""


class Create2MinerError(Exception):
    """Base class for all miner errors."""


class InvalidRequest(Create2MinerError, ValueError):
    """The request is inconsistent and no search was attempted."""


class SearchExhausted(Create2MinerError):
    """No salt in the search bound produced a matching address.

    This is the only error worth retrying, with a wider bound or relaxed
    flag constraints.
    """

    def __init__(self, attempts: int, start: int = 0):
        self.attempts = attempts
        self.start = start
        super().__init__(
            f"No matching salt in [{start}, {start + attempts}) "
            f"after {attempts} attempts"
        )


class DeploymentError(Create2MinerError):
    """The deployment transport failed."""


class CollisionError(DeploymentError):
    """The target address is already occupied."""

    def __init__(self, address: bytes):
        self.address = address
        super().__init__(f"Address 0x{address.hex()} is already occupied")


class DeploymentFailed(DeploymentError):
    """The creation transaction reverted or returned no address."""


class AddressMismatch(Create2MinerError):
    """The deployed address differs from the predicted one."""

    def __init__(self, actual: bytes, predicted: bytes):
        self.actual = actual
        self.predicted = predicted
        super().__init__(
            f"Deployed to 0x{actual.hex()} but predicted 0x{predicted.hex()}"
        )
