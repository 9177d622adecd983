"""
Mock chain and builders shared by the engine tests
"""

from typing import List, Optional

from mint_contracts.capabilities import Capability
from mint_contracts.ledger import CallContext, Chain, derive_address
from mint_contracts.minting_policies import SignedPathPolicy
from mint_contracts.registry import ModularRegistry
from mint_contracts.types import NATIVE_CURRENCY, ZERO_ROOT, ClaimCondition, MintRequest
from mint_offchain.config import ChainSettings
from mint_offchain.contracts import ContractManager
from mint_offchain.requests import open_claim_payload, sign_request
from mint_offchain.wallet import MintWallet


NOW = 1_700_000_000


class MockCommon:
    """Common Mock class used in tests"""

    def setup_method(self):
        """Setup method called before each test"""
        self.chain = Chain(chain_id=1)
        self.chain.warp(NOW)
        self.manager = ContractManager(self.chain, ChainSettings(chain_id=1, domain_version="1"))

        self.owner = derive_address(b"owner")
        self.admin = derive_address(b"manager")
        self.buyer = derive_address(b"buyer")
        self.seller = derive_address(b"seller")
        self.platform = derive_address(b"platform")
        self.signer = MintWallet()

        for principal in (self.owner, self.buyer):
            self.chain.fund(principal, 100_000_000)

    # Deployments

    def create_unique(self, signed_path: Optional[SignedPathPolicy] = None, name: str = "drops"):
        registry = self.manager.deploy_unique(name, "DROP", self.owner)
        module = self.manager.create_claimable_registry(registry, self.owner, self.seller, signed_path)
        self.grant_roles(registry)
        return registry, module

    def create_fungible(self, signed_path: Optional[SignedPathPolicy] = None, name: str = "coin"):
        registry = self.manager.deploy_fungible(name, "COIN", self.owner, decimals=6)
        module = self.manager.create_claimable_registry(registry, self.owner, self.seller, signed_path)
        self.grant_roles(registry)
        return registry, module

    def create_semi_fungible(self, signed_path: Optional[SignedPathPolicy] = None, name: str = "editions"):
        registry = self.manager.deploy_semi_fungible(name, self.owner)
        module = self.manager.create_claimable_registry(registry, self.owner, self.seller, signed_path)
        self.grant_roles(registry)
        return registry, module

    def grant_roles(self, registry: ModularRegistry) -> None:
        owner_ctx = CallContext(self.owner)
        registry.grant_capability(owner_ctx, self.admin, Capability.MANAGER)
        registry.grant_capability(owner_ctx, self.signer.address, Capability.MINTER)

    # Administrative helpers

    def create_mock_condition(self, **overrides) -> ClaimCondition:
        """Create an open, free condition active around NOW"""
        fields = dict(
            available_supply=100,
            allowlist_root=ZERO_ROOT,
            price_per_unit=0,
            currency=NATIVE_CURRENCY,
            start_time=NOW - 100,
            end_time=NOW + 1000,
            max_per_wallet=0,
        )
        fields.update(overrides)
        return ClaimCondition(**fields)

    def set_condition(self, registry: ModularRegistry, *token_args, reset: bool = False, **overrides) -> ClaimCondition:
        condition = self.create_mock_condition(**overrides)
        registry.dispatch_administrative(CallContext(self.admin), "set_claim_condition", *token_args, condition, reset)
        return condition

    def set_sale(self, registry: ModularRegistry, fee_bps: int = 0) -> None:
        platform = self.platform if fee_bps else b""
        registry.dispatch_administrative(CallContext(self.admin), "set_sale_config", self.seller, platform, fee_bps)

    def admin_call(self, registry: ModularRegistry, selector: str, *args):
        return registry.dispatch_administrative(CallContext(self.buyer), selector, *args)

    # Payloads

    def open_payload(self, price_per_unit: int = 0, currency: bytes = NATIVE_CURRENCY, proof: List[bytes] = None) -> bytes:
        return open_claim_payload(price_per_unit, currency, proof)

    def signed_payload(self, registry: ModularRegistry, request: MintRequest, signer: Optional[MintWallet] = None) -> bytes:
        domain = self.admin_call(registry, "get_signing_domain")
        return sign_request(request, domain, signer or self.signer)
