"""Salt search for CREATE2 addresses whose low bits match a flag pattern.

Candidates are scanned in increasing order, so the first match is also the
lowest salt in the searched range. Every candidate is independent of the
others, which lets the parallel search split the range into chunks and still
return exactly what the sequential scan would.
"""

import logging
import os
from collections.abc import Iterator
from concurrent.futures import Future, ProcessPoolExecutor

from create2miner.core.constants import (
    ADDRESS_BITS,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_MAX_ATTEMPTS,
    MAX_SALT,
)
from create2miner.core.create2 import address_matches, predict
from create2miner.core.errors import InvalidRequest, SearchExhausted
from create2miner.core.types import DeploymentRequest, MiningResult

logger = logging.getLogger(__name__)


def validate_flags(required_flags: int, flag_mask: int) -> None:
    """
    Reject flag constraints that no address can satisfy.

    Raises:
        InvalidRequest: If a required bit lies outside the mask, a value is
            negative, or the mask is wider than an address
    """
    if required_flags < 0 or flag_mask < 0:
        raise InvalidRequest("Flags and mask must be non-negative")
    if flag_mask >> ADDRESS_BITS:
        raise InvalidRequest(f"Flag mask 0x{flag_mask:x} is wider than {ADDRESS_BITS} bits")
    if required_flags & ~flag_mask:
        raise InvalidRequest(
            f"Required flags 0x{required_flags:x} set bits outside "
            f"mask 0x{flag_mask:x}"
        )


def _search_stop(start: int, max_attempts: int) -> int:
    """Validate the range and return its end, clamped past the largest salt."""
    if max_attempts < 0:
        raise InvalidRequest(f"max_attempts must be non-negative, got {max_attempts}")
    if start < 0 or start > MAX_SALT:
        raise InvalidRequest(f"Start salt out of range: {start}")
    return min(start + max_attempts, MAX_SALT + 1)


def candidate_salts(start: int = 0, stop: int | None = None) -> Iterator[int]:
    """Yield salts in increasing order from start up to (excluding) stop.

    Each call returns a fresh iterator over the same sequence. The sequence
    never goes past the largest 256-bit salt.
    """
    end = MAX_SALT + 1 if stop is None else min(stop, MAX_SALT + 1)
    return iter(range(start, end))


def _scan(
    deployer: bytes,
    required_flags: int,
    flag_mask: int,
    init_code_hash: bytes,
    start: int,
    stop: int,
) -> tuple[int, bytes] | None:
    """Return the first (salt, address) in [start, stop) that matches."""
    for salt in candidate_salts(start, stop):
        address = predict(deployer, salt, init_code_hash)
        if address_matches(address, required_flags, flag_mask):
            return salt, address
    return None


def find_salt(
    deployer: bytes,
    required_flags: int,
    flag_mask: int,
    init_code_hash: bytes,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    start: int = 0,
) -> MiningResult:
    """
    Find the lowest salt whose CREATE2 address satisfies
    ``address & flag_mask == required_flags``.

    Args:
        deployer: 20-byte address executing CREATE2
        required_flags: Bit pattern the masked address bits must equal
        flag_mask: Bits of the address that are constrained
        init_code_hash: keccak256 of init code and constructor arguments
        max_attempts: Number of candidates to try before giving up
        start: First candidate salt

    Returns:
        MiningResult with the winning salt and its address

    Raises:
        InvalidRequest: If the flags are inconsistent or the bound is negative
        SearchExhausted: If no salt in [start, start + max_attempts) matches
    """
    validate_flags(required_flags, flag_mask)
    stop = _search_stop(start, max_attempts)
    logger.debug(
        "Searching salts [%d, %d) for flags 0x%x under mask 0x%x",
        start, stop, required_flags, flag_mask,
    )

    found = _scan(deployer, required_flags, flag_mask, init_code_hash, start, stop)
    if found is None:
        raise SearchExhausted(stop - start, start)

    salt, address = found
    return MiningResult(salt=salt, address=address, attempts=salt - start + 1)


def find_salt_parallel(
    deployer: bytes,
    required_flags: int,
    flag_mask: int,
    init_code_hash: bytes,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    start: int = 0,
    workers: int | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> MiningResult:
    """
    Same contract as find_salt, with the range split across processes.

    Chunks are submitted in order and their results consumed in order, so the
    lowest matching salt wins regardless of which worker finishes first. At
    most ``workers`` chunks are in flight; after a match no new chunk is
    submitted and queued ones are cancelled.
    """
    validate_flags(required_flags, flag_mask)
    stop = _search_stop(start, max_attempts)
    if chunk_size <= 0:
        raise InvalidRequest(f"chunk_size must be positive, got {chunk_size}")
    if workers is not None and workers < 1:
        raise InvalidRequest(f"workers must be at least 1, got {workers}")

    workers = workers or os.cpu_count() or 1
    bounds = iter(range(start, stop, chunk_size))
    logger.debug(
        "Searching salts [%d, %d) with %d workers, chunk size %d",
        start, stop, workers, chunk_size,
    )

    def submit(executor: ProcessPoolExecutor) -> Future | None:
        chunk_start = next(bounds, None)
        if chunk_start is None:
            return None
        return executor.submit(
            _scan,
            deployer,
            required_flags,
            flag_mask,
            init_code_hash,
            chunk_start,
            min(chunk_start + chunk_size, stop),
        )

    with ProcessPoolExecutor(max_workers=workers) as executor:
        pending: list[Future] = []
        for _ in range(workers):
            future = submit(executor)
            if future is None:
                break
            pending.append(future)

        while pending:
            found = pending.pop(0).result()
            if found is not None:
                for future in pending:
                    future.cancel()
                salt, address = found
                return MiningResult(salt=salt, address=address, attempts=salt - start + 1)
            future = submit(executor)
            if future is not None:
                pending.append(future)

    raise SearchExhausted(stop - start, start)


def mine(
    request: DeploymentRequest,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    workers: int = 1,
    start: int = 0,
) -> MiningResult:
    """Mine a salt for a deployment request."""
    if workers < 1:
        raise InvalidRequest(f"workers must be at least 1, got {workers}")

    args = (
        request.deployer,
        request.required_flags,
        request.flag_mask,
        request.init_code_hash,
        max_attempts,
        start,
    )
    if workers == 1:
        result = find_salt(*args)
    else:
        result = find_salt_parallel(*args, workers=workers)

    logger.info(
        "Mined salt %d after %d attempts: 0x%s",
        result.salt, result.attempts, result.address.hex(),
    )
    return result
