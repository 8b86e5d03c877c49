"""Uniswap v4 hook permission bits.

The pool manager reads a hook's permissions from the 14 lowest bits of its
address, so a hook must be deployed to an address whose low bits match the
callbacks it implements.
"""

from enum import IntFlag


class HookFlag(IntFlag):
    AFTER_REMOVE_LIQUIDITY_RETURNS_DELTA = 1 << 0
    AFTER_ADD_LIQUIDITY_RETURNS_DELTA = 1 << 1
    AFTER_SWAP_RETURNS_DELTA = 1 << 2
    BEFORE_SWAP_RETURNS_DELTA = 1 << 3
    AFTER_DONATE = 1 << 4
    BEFORE_DONATE = 1 << 5
    AFTER_SWAP = 1 << 6
    BEFORE_SWAP = 1 << 7
    AFTER_REMOVE_LIQUIDITY = 1 << 8
    BEFORE_REMOVE_LIQUIDITY = 1 << 9
    AFTER_ADD_LIQUIDITY = 1 << 10
    BEFORE_ADD_LIQUIDITY = 1 << 11
    AFTER_INITIALIZE = 1 << 12
    BEFORE_INITIALIZE = 1 << 13


ALL_HOOK_MASK = (1 << 14) - 1


def parse_flags(value: str) -> int:
    """
    Parse a flag expression.

    Accepts an integer literal ("64", "0x40", "0b1000000") or hook flag names
    joined by "|" ("AFTER_SWAP|BEFORE_SWAP"). Names are case-insensitive and
    may omit the "_FLAG" suffix used in Solidity.

    Raises:
        ValueError: If the expression is empty or names an unknown flag
    """
    value = value.strip()
    if not value:
        raise ValueError("Empty flag expression")

    try:
        return int(value, 0)
    except ValueError:
        pass

    flags = 0
    for name in value.split("|"):
        key = name.strip().upper().removesuffix("_FLAG")
        if key not in HookFlag.__members__:
            raise ValueError(f"Unknown hook flag: {name.strip()}")
        flags |= HookFlag[key]
    return int(flags)
