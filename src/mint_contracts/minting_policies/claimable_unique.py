"""
Claimable Unique Policy

Mint hook for UniqueRegistry. Each unit is one token id, priced per unit.
"""

import logging

from mint_contracts.minting_policies.base import ClaimableMintPolicy, MintCall, SignedPathPolicy
from mint_contracts.module import ModuleContext
from mint_contracts.types import (
    INTERFACE_UNIQUE,
    SELECTOR_BEFORE_MINT_UNIQUE,
    SignedUniqueClaim,
    UniqueMintRequest,
)
from mint_contracts.util import unit_total_price


logger = logging.getLogger(__name__)


class ClaimableUnique(ClaimableMintPolicy):
    NAME = "ClaimableUnique"
    VERSION = "1"
    NAMESPACE = "claimable_unique"

    CALLBACK = SELECTOR_BEFORE_MINT_UNIQUE
    REQUIRED_INTERFACE = INTERFACE_UNIQUE
    SIGNED_CLAIM_TYPE = SignedUniqueClaim
    DEFAULT_SIGNED_PATH = SignedPathPolicy.CONDITION_GATED

    def before_mint_unique(
        self, ctx: ModuleContext, to: bytes, start_token_id: int, quantity: int, payload: bytes
    ) -> None:
        receipt = self.authorize_mint(ctx, MintCall(recipient=to, quantity=quantity), payload)
        logger.info(
            f"Authorized #{start_token_id}..#{start_token_id + quantity - 1} on {ctx.registry.name} "
            f"for {to.hex()} at {receipt.total_price}"
        )

    def total_price(self, ctx: ModuleContext, quantity: int, price_per_unit: int) -> int:
        return unit_total_price(quantity, price_per_unit)

    def quantity_of(self, request: UniqueMintRequest) -> int:
        return request.quantity
