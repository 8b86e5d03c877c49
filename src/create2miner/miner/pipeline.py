"""Mine a salt, deploy with it, and verify the result."""

import logging

from eth_utils import to_checksum_address

from create2miner.core.constants import DEFAULT_MAX_ATTEMPTS
from create2miner.core.types import DeploymentOutcome, DeploymentRequest
from create2miner.deploy.base import Deployer

from .search import mine, validate_flags
from .verify import verify

logger = logging.getLogger(__name__)


def deploy_with_mined_salt(
    request: DeploymentRequest,
    deployer: Deployer,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    workers: int = 1,
) -> DeploymentOutcome:
    """
    Deploy the requested contract to a flag-matching address.

    The steps run strictly in order: validate, mine, deploy, verify. Any
    failure propagates to the caller and no outcome is returned, so a
    contract that was deployed but not verified is never reported.

    Raises:
        InvalidRequest: Inconsistent flags, raised before mining
        SearchExhausted: No salt within max_attempts
        CollisionError: The mined address is already occupied
        AddressMismatch: The transport deployed somewhere else
    """
    validate_flags(request.required_flags, request.flag_mask)

    result = mine(request, max_attempts=max_attempts, workers=workers)
    actual = deployer.deploy(request.creation_code, result.salt)
    verify(actual, result.address)

    logger.info("Deployed to %s (salt %d)", to_checksum_address(actual), result.salt)
    return DeploymentOutcome(request=request, result=result, address=actual)
