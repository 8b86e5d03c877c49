"""Command-line interface for the CREATE2 salt miner."""

import argparse
import json
import logging
import sys

from eth_utils import to_checksum_address

from create2miner.config import MinerConfig, parse_address, parse_hex
from create2miner.core.errors import Create2MinerError
from create2miner.core.flags import parse_flags
from create2miner.deploy.evm import EVMDeployer
from create2miner.miner.pipeline import deploy_with_mined_salt
from create2miner.miner.search import mine

logger = logging.getLogger("create2miner")


def _flags(value: str) -> int:
    try:
        return parse_flags(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _address(value: str) -> bytes:
    try:
        return parse_address(value)
    except Create2MinerError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _add_request_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--init-code",
        required=True,
        help="Contract init code as hex, or @path to a file holding it",
    )
    parser.add_argument(
        "--constructor-args",
        default="",
        help="ABI-encoded constructor arguments as hex (appended after --manager)",
    )
    parser.add_argument("--manager", type=_address, help="Manager address passed to the constructor")
    parser.add_argument("--flags", type=_flags, help="Required flags: integer or AFTER_SWAP|BEFORE_SWAP")
    parser.add_argument("--mask", type=_flags, help="Flag mask (default: all 14 hook bits)")
    parser.add_argument("--deployer", type=_address, help="Address executing CREATE2")
    parser.add_argument("--max-attempts", type=int, help="Search bound")
    parser.add_argument("--workers", type=int, help="Worker processes (default: 1)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Mine CREATE2 salts for addresses with required flag bits"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    mine_parser = subparsers.add_parser("mine", help="Find a salt and print it")
    _add_request_arguments(mine_parser)

    deploy_parser = subparsers.add_parser(
        "deploy", help="Find a salt, deploy on a local chain and verify the address"
    )
    _add_request_arguments(deploy_parser)

    return parser


def run(args: argparse.Namespace) -> dict:
    config = MinerConfig.from_env().override(
        deployer=args.deployer,
        required_flags=args.flags,
        flag_mask=args.mask,
        max_attempts=args.max_attempts,
        workers=args.workers,
        manager=args.manager,
    )
    request = config.build_request(
        parse_hex(args.init_code), parse_hex(args.constructor_args)
    )

    if args.command == "mine":
        result = mine(request, max_attempts=config.max_attempts, workers=config.workers)
        return {
            "salt": "0x" + result.salt_bytes.hex(),
            "address": to_checksum_address(result.address),
            "attempts": result.attempts,
        }

    outcome = deploy_with_mined_salt(
        request,
        EVMDeployer(factory=config.deployer),
        max_attempts=config.max_attempts,
        workers=config.workers,
    )
    return {
        "salt": "0x" + outcome.result.salt_bytes.hex(),
        "address": to_checksum_address(outcome.address),
    }


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        output = run(args)
    except (Create2MinerError, OSError) as e:
        logger.error("%s", e)
        return 1

    print(json.dumps(output))
    return 0


if __name__ == "__main__":
    sys.exit(main())
