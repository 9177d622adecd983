"""
Capability Model

Per-registry bitmask of capabilities held by each principal. The registry
owner is simply the principal holding OWNER (bit 0), granted once when the
registry is created. No bit is ever implied by another.
"""

import logging
from enum import IntFlag
from typing import Any, Dict

from mint_contracts.errors import Unauthorized


logger = logging.getLogger(__name__)

CAPABILITIES_NAMESPACE = "capabilities"


class Capability(IntFlag):
    """
    Named capability bits

    - OWNER: grants and revokes capabilities
    - MINTER: may sign mint requests
    - MANAGER: may write sale configs and claim conditions
    - INSTALLER: may install and uninstall modules
    """

    NONE = 0
    OWNER = 1 << 0
    MINTER = 1 << 1
    MANAGER = 1 << 2
    INSTALLER = 1 << 3


class CapabilityTable:
    """Capability lookups and grants over a registry's state partition"""

    def __init__(self, storage: Dict[str, Any]):
        self._holders: Dict[bytes, int] = storage.setdefault("holders", {})

    def capabilities_of(self, principal: bytes) -> Capability:
        return Capability(self._holders.get(principal, 0))

    def has_capability(self, principal: bytes, bits: int) -> bool:
        """True when ``principal`` holds every bit in ``bits``"""
        held = self._holders.get(principal, 0)
        return held & bits == bits

    def has_any_capability(self, principal: bytes, bits: int) -> bool:
        return self._holders.get(principal, 0) & bits != 0

    def require_capability(self, principal: bytes, bits: int) -> None:
        if not self.has_capability(principal, bits):
            raise Unauthorized(
                f"{principal.hex()} lacks capability {Capability(bits)!r}"
            )

    def require_any_capability(self, principal: bytes, bits: int) -> None:
        if not self.has_any_capability(principal, bits):
            raise Unauthorized(
                f"{principal.hex()} holds none of {Capability(bits)!r}"
            )

    def initialize_owner(self, owner: bytes) -> None:
        """Grant OWNER at registry creation. Only valid on an empty table."""
        if self._holders:
            raise Unauthorized("Capability table is already initialized")
        self._holders[owner] = int(Capability.OWNER)

    def grant(self, caller: bytes, principal: bytes, bits: int) -> None:
        self.require_capability(caller, Capability.OWNER)
        self._holders[principal] = self._holders.get(principal, 0) | bits
        logger.info(f"Granted {Capability(bits)!r} to {principal.hex()}")

    def revoke(self, caller: bytes, principal: bytes, bits: int) -> None:
        self.require_capability(caller, Capability.OWNER)
        self._remove(principal, bits)
        logger.info(f"Revoked {Capability(bits)!r} from {principal.hex()}")

    def renounce(self, caller: bytes, bits: int) -> None:
        self._remove(caller, bits)

    def _remove(self, principal: bytes, bits: int) -> None:
        remaining = self._holders.get(principal, 0) & ~bits
        if remaining:
            self._holders[principal] = remaining
        else:
            self._holders.pop(principal, None)
