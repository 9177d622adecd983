"""
Allowlist Tree

Builds the Merkle commitment stored in a claim condition and the proofs
claimers attach to open mints. Leaves are the Blake2b-256 of each address,
sorted; parents hash their children in sorted order; an odd node at the end
of a level is promoted unchanged.
"""

from typing import Iterable, List

from mint_contracts.types import ZERO_ROOT
from mint_contracts.util import allowlist_leaf, hash_pair


class AllowlistTree:
    def __init__(self, addresses: Iterable[bytes]):
        self.addresses = sorted(set(addresses))
        self.leaves = sorted(allowlist_leaf(address) for address in self.addresses)
        self.levels = self._build(self.leaves)

    @staticmethod
    def _build(leaves: List[bytes]) -> List[List[bytes]]:
        if not leaves:
            return []
        levels = [leaves]
        while len(levels[-1]) > 1:
            level = levels[-1]
            parents = [hash_pair(level[i], level[i + 1]) for i in range(0, len(level) - 1, 2)]
            if len(level) % 2:
                parents.append(level[-1])
            levels.append(parents)
        return levels

    @property
    def root(self) -> bytes:
        """Root to store in a ClaimCondition (the zero root for an empty list)"""
        if not self.levels:
            return ZERO_ROOT
        return self.levels[-1][0]

    def __contains__(self, address: bytes) -> bool:
        return address in self.addresses

    def proof(self, address: bytes) -> List[bytes]:
        """
        Sibling hashes from the address's leaf up to the root.

        Raises:
            KeyError: Address is not in the allowlist
        """
        leaf = allowlist_leaf(address)
        if address not in self.addresses:
            raise KeyError(f"{address.hex()} is not in the allowlist")

        index = self.leaves.index(leaf)
        proof = []
        for level in self.levels[:-1]:
            sibling = index ^ 1
            if sibling < len(level):
                proof.append(level[sibling])
            index //= 2
        return proof
