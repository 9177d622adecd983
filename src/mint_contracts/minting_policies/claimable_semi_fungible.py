"""
Claimable Semi-Fungible Policy

Mint hook for SemiFungibleRegistry. Claim conditions, consumption and
optionally the sale config are kept per token id; a token without its own
sale config uses the registry-wide one.
"""

import logging
from typing import Tuple

from mint_contracts.capabilities import Capability
from mint_contracts.minting_policies.base import (
    ClaimableMintPolicy,
    MintCall,
    SignedPathPolicy,
    build_sale_config,
)
from mint_contracts.module import FallbackFunction, ModuleContext
from mint_contracts.types import (
    INTERFACE_SEMI_FUNGIBLE,
    SELECTOR_BEFORE_MINT_SEMI_FUNGIBLE,
    ClaimCondition,
    SaleConfig,
    SemiFungibleMintRequest,
    SignedSemiFungibleClaim,
)
from mint_contracts.util import unit_total_price


logger = logging.getLogger(__name__)


class ClaimableSemiFungible(ClaimableMintPolicy):
    NAME = "ClaimableSemiFungible"
    VERSION = "1"
    NAMESPACE = "claimable_semi_fungible"

    CALLBACK = SELECTOR_BEFORE_MINT_SEMI_FUNGIBLE
    REQUIRED_INTERFACE = INTERFACE_SEMI_FUNGIBLE
    SIGNED_CLAIM_TYPE = SignedSemiFungibleClaim
    DEFAULT_SIGNED_PATH = SignedPathPolicy.SIGNATURE_AUTHORITATIVE

    def fallback_functions(self) -> Tuple[FallbackFunction, ...]:
        return super().fallback_functions() + (
            FallbackFunction("get_sale_config_for_token"),
            FallbackFunction("set_sale_config_for_token", Capability.MANAGER),
        )

    def before_mint_semi_fungible(
        self, ctx: ModuleContext, to: bytes, token_id: int, amount: int, payload: bytes
    ) -> None:
        self.authorize_mint(ctx, MintCall(recipient=to, quantity=amount, subject=token_id), payload)

    def total_price(self, ctx: ModuleContext, quantity: int, price_per_unit: int) -> int:
        return unit_total_price(quantity, price_per_unit)

    def quantity_of(self, request: SemiFungibleMintRequest) -> int:
        return request.amount

    def subject_of(self, request: SemiFungibleMintRequest) -> int:
        return request.token_id

    def sale_config_for(self, ctx: ModuleContext, subject) -> SaleConfig:
        per_token = ctx.storage.get("token_sale_configs", {})
        if subject is not None and subject in per_token:
            return per_token[subject]
        return super().sale_config_for(ctx, None)

    # Token-keyed administrative entries

    def get_claim_condition(self, ctx: ModuleContext, token_id: int) -> ClaimCondition:
        return self.conditions(ctx).get_condition(token_id)

    def set_claim_condition(
        self, ctx: ModuleContext, token_id: int, condition: ClaimCondition, reset_consumption: bool = False
    ) -> None:
        self.conditions(ctx).set_condition(token_id, condition, reset_consumption)

    def get_wallet_consumption(self, ctx: ModuleContext, token_id: int, wallet: bytes) -> int:
        return self.conditions(ctx).get_consumption(token_id, wallet)

    def get_sale_config_for_token(self, ctx: ModuleContext, token_id: int) -> SaleConfig:
        return self.sale_config_for(ctx, token_id)

    def set_sale_config_for_token(
        self,
        ctx: ModuleContext,
        token_id: int,
        primary_recipient: bytes,
        platform_fee_recipient: bytes = b"",
        platform_fee_bps: int = 0,
    ) -> None:
        configs = ctx.storage.setdefault("token_sale_configs", {})
        configs[token_id] = build_sale_config(primary_recipient, platform_fee_recipient, platform_fee_bps)
        logger.info(f"Sale config for token {token_id} updated on {ctx.registry.name}")
