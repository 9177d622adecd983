"""
Contract Management

Deploys registries and mint modules on a chain and keeps track of them by
name, the way deployment tooling records compiled contracts.
"""

import logging
from typing import Any, Dict, List, Optional

from mint_contracts.ledger import CallContext, Chain
from mint_contracts.minting_policies import (
    ClaimableFungible,
    ClaimableSemiFungible,
    ClaimableUnique,
    FaucetPolicy,
    SignedPathPolicy,
)
from mint_contracts.module import Module
from mint_contracts.registries import FungibleRegistry, SemiFungibleRegistry, UniqueRegistry
from mint_contracts.registry import ModularRegistry
from mint_offchain.config import ChainSettings


logger = logging.getLogger(__name__)

POLICY_FOR_REGISTRY = {
    FungibleRegistry: ClaimableFungible,
    UniqueRegistry: ClaimableUnique,
    SemiFungibleRegistry: ClaimableSemiFungible,
}


class ContractManager:
    """Registry and module deployments of one chain"""

    def __init__(self, chain: Optional[Chain] = None, settings: Optional[ChainSettings] = None):
        self.settings = settings or ChainSettings()
        self.chain = chain or Chain(chain_id=self.settings.chain_id)
        self.registries: Dict[str, ModularRegistry] = {}
        self.modules: Dict[str, Module] = {}

    def _deploy_registry(self, registry: ModularRegistry) -> ModularRegistry:
        if registry.name in self.registries:
            raise ValueError(f"Registry '{registry.name}' already deployed")
        self.chain.deploy(registry)
        self.registries[registry.name] = registry
        return registry

    def deploy_fungible(self, name: str, symbol: str, owner: bytes, decimals: Optional[int] = None) -> FungibleRegistry:
        if decimals is None:
            decimals = self.settings.currency_decimals
        return self._deploy_registry(FungibleRegistry(name, symbol, owner, decimals))

    def deploy_unique(self, name: str, symbol: str, owner: bytes) -> UniqueRegistry:
        return self._deploy_registry(UniqueRegistry(name, symbol, owner))

    def deploy_semi_fungible(self, name: str, owner: bytes) -> SemiFungibleRegistry:
        return self._deploy_registry(SemiFungibleRegistry(name, owner))

    def deploy_module(self, module: Module, label: Optional[str] = None) -> Module:
        label = label or module.NAME
        if label in self.modules:
            raise ValueError(f"Module '{label}' already deployed")
        module.VERSION = self.settings.domain_version
        self.chain.deploy(module)
        self.modules[label] = module
        return module

    def create_claimable_registry(
        self,
        registry: ModularRegistry,
        owner: bytes,
        primary_recipient: bytes = b"",
        signed_path: Optional[SignedPathPolicy] = None,
    ) -> Module:
        """
        Deploy the claimable module matching a registry and install it.

        Args:
            registry: A deployed registry
            owner: Principal holding OWNER or INSTALLER on the registry
            primary_recipient: Initial primary sale recipient, if any
            signed_path: Override of the module's default signed-path policy

        Returns:
            The installed module
        """
        policy_type = POLICY_FOR_REGISTRY[type(registry)]
        module = self.deploy_module(policy_type(signed_path), label=f"{policy_type.NAME}:{registry.name}")
        registry.install_module(CallContext(owner), module.address, primary_recipient)
        return module

    def create_faucet_currency(self, name: str, symbol: str, owner: bytes) -> FungibleRegistry:
        """Fungible test currency anyone can mint for free"""
        registry = self.deploy_fungible(name, symbol, owner)
        module = self.deploy_module(FaucetPolicy(), label=f"{FaucetPolicy.NAME}:{name}")
        registry.install_module(CallContext(owner), module.address)
        return registry

    def get_registry(self, name: str) -> Optional[ModularRegistry]:
        return self.registries.get(name)

    def list_registries(self) -> List[str]:
        return list(self.registries)

    def get_contracts_info(self) -> Dict[str, Any]:
        return {
            "chain_id": self.chain.chain_id,
            "registries": {
                name: {
                    "address": registry.address.hex(),
                    "kind": type(registry).__name__,
                    "modules": [record.module.hex() for record in registry.get_installed_modules()],
                }
                for name, registry in self.registries.items()
            },
            "modules": {label: module.address.hex() for label, module in self.modules.items()},
        }
