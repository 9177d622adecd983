"""
Claimable Fungible Policy

Mint hook for FungibleRegistry. Prices are per whole token, so a total is
scaled by the registry's decimals.
"""

from mint_contracts.minting_policies.base import ClaimableMintPolicy, MintCall, SignedPathPolicy
from mint_contracts.module import ModuleContext
from mint_contracts.types import (
    INTERFACE_FUNGIBLE,
    SELECTOR_BEFORE_MINT_FUNGIBLE,
    FungibleMintRequest,
    SignedFungibleClaim,
)
from mint_contracts.util import scaled_total_price


class ClaimableFungible(ClaimableMintPolicy):
    NAME = "ClaimableFungible"
    VERSION = "1"
    NAMESPACE = "claimable_fungible"

    CALLBACK = SELECTOR_BEFORE_MINT_FUNGIBLE
    REQUIRED_INTERFACE = INTERFACE_FUNGIBLE
    SIGNED_CLAIM_TYPE = SignedFungibleClaim
    DEFAULT_SIGNED_PATH = SignedPathPolicy.CONDITION_GATED

    def before_mint_fungible(self, ctx: ModuleContext, to: bytes, amount: int, payload: bytes) -> None:
        self.authorize_mint(ctx, MintCall(recipient=to, quantity=amount), payload)

    def total_price(self, ctx: ModuleContext, quantity: int, price_per_unit: int) -> int:
        return scaled_total_price(quantity, price_per_unit, ctx.registry.decimals)

    def quantity_of(self, request: FungibleMintRequest) -> int:
        return request.amount
