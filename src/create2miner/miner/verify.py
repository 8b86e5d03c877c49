"""Post-deployment address check."""

from create2miner.core.errors import AddressMismatch


def verify(actual: bytes, predicted: bytes) -> None:
    """Raise AddressMismatch unless the deployed address is the predicted one.

    A mismatch means the flag bits of the deployed contract are not
    guaranteed, so callers must treat the whole deployment as failed.
    """
    if actual != predicted:
        raise AddressMismatch(actual, predicted)
