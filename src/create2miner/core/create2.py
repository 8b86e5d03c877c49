"""CREATE2 address prediction (EIP-1014).

The address of a contract created with CREATE2 is known before deployment:
    address = keccak256(0xff ++ deployer ++ salt ++ keccak256(init_code))[12:]

Salts are handled as integers by the miner and encoded as 32-byte big-endian
values when they enter the preimage.

Reference: https://eips.ethereum.org/EIPS/eip-1014
"""

from .constants import (
    ADDRESS_SIZE,
    CREATE2_PREFIX,
    HASH_SIZE,
    MAX_SALT,
    SALT_SIZE,
)
from .crypto import keccak256


def salt_to_bytes(salt: int | bytes) -> bytes:
    """
    Encode a salt as the 32-byte big-endian value used by CREATE2.

    Raises:
        ValueError: If an integer salt is outside [0, 2**256) or a bytes
            salt is not 32 bytes long
    """
    if isinstance(salt, (bytes, bytearray)):
        if len(salt) != SALT_SIZE:
            raise ValueError(f"Salt must be {SALT_SIZE} bytes, got {len(salt)}")
        return bytes(salt)
    if salt < 0 or salt > MAX_SALT:
        raise ValueError(f"Salt out of range: {salt}")
    return salt.to_bytes(SALT_SIZE, "big")


def compute_init_code_hash(init_code: bytes, constructor_args: bytes = b"") -> bytes:
    """
    Hash the creation code of a contract.

    The creation code is the init code followed by the ABI-encoded
    constructor arguments; this is what a CREATE2 factory receives and what
    the address formula commits to.
    """
    return keccak256(init_code + constructor_args)


def predict(deployer: bytes, salt: int | bytes, init_code_hash: bytes) -> bytes:
    """
    Compute the CREATE2 address for a pre-computed init code hash.

    Args:
        deployer: 20-byte address of the contract executing CREATE2
        salt: Salt as an integer or as 32 bytes
        init_code_hash: 32-byte keccak256 hash of the creation code

    Returns:
        20-byte predicted contract address

    Raises:
        ValueError: If lengths are incorrect or the salt is out of range

    Example:
        >>> deployer = bytes(20)
        >>> predict(deployer, 0, keccak256(b"\\x00")).hex()
        '4d1a2e2bb4f88f0250f26ffff098b0b30b26bf38'
    """
    if len(deployer) != ADDRESS_SIZE:
        raise ValueError(f"Deployer must be {ADDRESS_SIZE} bytes, got {len(deployer)}")
    if len(init_code_hash) != HASH_SIZE:
        raise ValueError(f"Init code hash must be {HASH_SIZE} bytes, got {len(init_code_hash)}")

    preimage = CREATE2_PREFIX + deployer + salt_to_bytes(salt) + init_code_hash
    return keccak256(preimage)[12:]


def compute_create2_address(deployer: bytes, salt: int | bytes, init_code: bytes) -> bytes:
    """Compute the CREATE2 address from raw creation code."""
    return predict(deployer, salt, keccak256(init_code))


def address_matches(address: bytes, required_flags: int, flag_mask: int) -> bool:
    """Check whether the masked low-order bits of an address equal the flags."""
    return int.from_bytes(address, "big") & flag_mask == required_flags
