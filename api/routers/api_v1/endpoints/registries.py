"""
Registry Endpoints

Deploy registries with their claimable mint module, list them, and manage
capabilities.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies.chain import get_contract_manager, get_registry
from api.enums import RegistryKind
from api.schemas.registry import (
    CapabilityRequest,
    CapabilityResponse,
    ModuleItem,
    RegistryCreateRequest,
    RegistryListResponse,
    RegistryResponse,
)
from api.utils.encoding import from_hex, to_hex
from mint_contracts.ledger import CallContext
from mint_contracts.registry import ModularRegistry
from mint_offchain.contracts import ContractManager


logger = logging.getLogger(__name__)

router = APIRouter()

KIND_NAMES = {
    "FungibleRegistry": RegistryKind.FUNGIBLE,
    "UniqueRegistry": RegistryKind.UNIQUE,
    "SemiFungibleRegistry": RegistryKind.SEMI_FUNGIBLE,
}


def _registry_response(registry: ModularRegistry) -> RegistryResponse:
    return RegistryResponse(
        name=registry.name,
        kind=KIND_NAMES[type(registry).__name__].value,
        address=to_hex(registry.address),
        modules=[
            ModuleItem(
                module=to_hex(record.module),
                callback_functions=record.callback_functions,
                fallback_functions=record.fallback_functions,
            )
            for record in registry.get_installed_modules()
        ],
    )


@router.get("/", response_model=RegistryListResponse, summary="List registries")
async def list_registries(manager: ContractManager = Depends(get_contract_manager)) -> RegistryListResponse:
    registries = [_registry_response(registry) for registry in manager.registries.values()]
    return RegistryListResponse(registries=registries, total=len(registries))


@router.post(
    "/",
    response_model=RegistryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Deploy a registry",
    description="Deploy a registry of the given kind and install the matching claimable mint module.",
)
async def create_registry(
    request: RegistryCreateRequest, manager: ContractManager = Depends(get_contract_manager)
) -> RegistryResponse:
    if manager.get_registry(request.name) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"Registry already exists: {request.name}")

    owner = from_hex(request.owner, "owner")
    if request.kind == RegistryKind.FUNGIBLE:
        registry = manager.deploy_fungible(request.name, request.symbol, owner, request.decimals)
    elif request.kind == RegistryKind.UNIQUE:
        registry = manager.deploy_unique(request.name, request.symbol, owner)
    else:
        registry = manager.deploy_semi_fungible(request.name, owner)

    manager.create_claimable_registry(
        registry, owner, from_hex(request.primary_recipient, "primary_recipient"), request.signed_path
    )
    logger.info(f"Registry {request.name} ({request.kind.value}) deployed through the API")
    return _registry_response(registry)


@router.get("/{name}", response_model=RegistryResponse, summary="Get registry details")
async def get_registry_detail(registry: ModularRegistry = Depends(get_registry)) -> RegistryResponse:
    return _registry_response(registry)


@router.post("/{name}/capabilities", response_model=CapabilityResponse, summary="Grant or revoke capabilities")
async def update_capabilities(
    request: CapabilityRequest, registry: ModularRegistry = Depends(get_registry)
) -> CapabilityResponse:
    ctx = CallContext(from_hex(request.caller, "caller"))
    principal = from_hex(request.principal, "principal")
    if request.revoke:
        registry.revoke_capability(ctx, principal, request.bits)
    else:
        registry.grant_capability(ctx, principal, request.bits)
    return CapabilityResponse(principal=request.principal, bits=int(registry.capabilities.capabilities_of(principal)))
