import hashlib
from typing import List, Tuple

from mint_contracts.errors import InvalidFeeBasisPoints, NotInAllowlist
from mint_contracts.types import MAX_BPS, ZERO_ROOT


################################################
# Hashing
################################################
def blake2b_256(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=32).digest()


def allowlist_leaf(address: bytes) -> bytes:
    """Leaf committed in an allowlist tree for one address"""
    return blake2b_256(address)


def hash_pair(left: bytes, right: bytes) -> bytes:
    """Parent node over two children, ordered so proofs need no direction bits"""
    if left <= right:
        return blake2b_256(left + right)
    return blake2b_256(right + left)


################################################
# Allowlist
################################################
def compute_root(leaf: bytes, proof: List[bytes]) -> bytes:
    node = leaf
    for sibling in proof:
        node = hash_pair(node, sibling)
    return node


def verify_allowlist(root: bytes, leaf_input: bytes, proof: List[bytes]) -> None:
    """
    Check an allowlist proof for an address.

    A zero root means the condition is unrestricted and always passes.

    Args:
        root: 32-byte allowlist commitment of the active condition
        leaf_input: Address being checked (the caller)
        proof: Sibling hashes from leaf to root

    Raises:
        NotInAllowlist: If the recomputed root differs from ``root``
    """
    if root == ZERO_ROOT:
        return
    if compute_root(allowlist_leaf(leaf_input), proof) != root:
        raise NotInAllowlist(f"{leaf_input.hex()} is not in the allowlist")


################################################
# Pricing
################################################
def validate_fee_bps(bps: int) -> None:
    if not 0 <= bps <= MAX_BPS:
        raise InvalidFeeBasisPoints(f"Platform fee must be within 0..{MAX_BPS} bps, got {bps}")


def split_fee(total_price: int, platform_fee_bps: int) -> Tuple[int, int]:
    """
    Split a total into (primary_share, platform_share).

    The platform share is rounded down, so the two always sum to the total.
    """
    validate_fee_bps(platform_fee_bps)
    platform_share = total_price * platform_fee_bps // MAX_BPS
    return total_price - platform_share, platform_share


def unit_total_price(quantity: int, price_per_unit: int) -> int:
    return quantity * price_per_unit


def scaled_total_price(amount: int, price_per_unit: int, decimals: int) -> int:
    """Total for a fungible amount priced per whole token of ``decimals`` precision"""
    return amount * price_per_unit // 10**decimals
