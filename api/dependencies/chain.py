"""
Chain Dependency

FastAPI dependencies for the process-wide ContractManager and the registries
it deployed.
"""

from fastapi import Depends, HTTPException, Path, status

from api.config import chain_settings
from mint_contracts.registry import ModularRegistry
from mint_offchain.contracts import ContractManager


# Global state for the contract manager
_contract_manager: ContractManager | None = None


def get_contract_manager() -> ContractManager:
    """
    Get or initialize the contract manager.

    Returns:
        ContractManager: Manager of the API's chain and deployments
    """
    global _contract_manager
    if _contract_manager is None:
        _contract_manager = ContractManager(settings=chain_settings)
    return _contract_manager


def reset_contract_manager() -> None:
    """Drop all deployments (used between tests)"""
    global _contract_manager
    _contract_manager = None


def get_registry(
    name: str = Path(..., description="Registry name"),
    manager: ContractManager = Depends(get_contract_manager),
) -> ModularRegistry:
    registry = manager.get_registry(name)
    if registry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Registry not found: {name}")
    return registry
