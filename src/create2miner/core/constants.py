"""Protocol constants and search defaults."""

from eth_utils import to_canonical_address

# EIP-1014 preimage prefix
CREATE2_PREFIX = b"\xff"

ADDRESS_SIZE = 20
SALT_SIZE = 32
HASH_SIZE = 32

MAX_SALT = 2**256 - 1
ADDRESS_BITS = ADDRESS_SIZE * 8

# Deterministic deployment proxy shared by Foundry and most EVM chains.
DETERMINISTIC_DEPLOYER = to_canonical_address("0x4e59b44847b379578588920cA78FbF26c0B4956C")

# Runtime code of the deterministic deployment proxy. Calldata is
# salt (32 bytes) followed by the creation code; it returns the 20-byte
# address of the created contract and reverts if CREATE2 fails.
DETERMINISTIC_DEPLOYER_CODE = bytes.fromhex(
    "7f" + "ff" * 31 + "e0"
    "3601600081602082378035828234f58015156039578182fd5b8082525050506014600cf3"
)

# Loop limit of the Uniswap v4 hook miner. With the full 14-bit hook mask the
# expected number of candidates is 2**14.
DEFAULT_MAX_ATTEMPTS = 160_444

# Salts per task handed to a worker process.
DEFAULT_CHUNK_SIZE = 4_096

DEFAULT_CHAIN_ID = 1337
DEFAULT_GAS_LIMIT = 30_000_000
