"""
Condition Endpoints

Sale configuration, claim conditions and consumption of a registry's mint
module, reached through the registry's administrative entries.

Semi-fungible registries key conditions and consumption by token id, so
those routes require `token_id` there; their sale config falls back to the
registry-wide default when no token id is given. Other kinds reject
`token_id` outright.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.dependencies.chain import get_registry
from api.schemas.registry import (
    ClaimConditionModel,
    ClaimConditionUpdateRequest,
    ConsumptionResponse,
    RequestUsedResponse,
    SaleConfigModel,
    SaleConfigUpdateRequest,
    SigningDomainResponse,
)
from api.utils.encoding import from_hex, to_hex
from mint_contracts.ledger import CallContext
from mint_contracts.registries import SemiFungibleRegistry
from mint_contracts.registry import ModularRegistry
from mint_contracts.types import ClaimCondition, SaleConfig


router = APIRouter()

READER = CallContext(sender=b"")


def _token_args(registry: ModularRegistry, token_id: int | None) -> tuple:
    """Leading token id argument of semi-fungible administrative entries"""
    if isinstance(registry, SemiFungibleRegistry):
        if token_id is None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="token_id is required for semi-fungible registries",
            )
        return (token_id,)
    _reject_token_id(registry, token_id)
    return ()


def _reject_token_id(registry: ModularRegistry, token_id: int | None) -> None:
    if token_id is not None and not isinstance(registry, SemiFungibleRegistry):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"token_id is only accepted by semi-fungible registries, {registry.name} has none",
        )


def _sale_config_model(config: SaleConfig) -> SaleConfigModel:
    return SaleConfigModel(
        primary_recipient=to_hex(config.primary_recipient),
        platform_fee_recipient=to_hex(config.platform_fee_recipient),
        platform_fee_bps=config.platform_fee_bps,
    )


@router.get("/{name}/sale-config", response_model=SaleConfigModel, summary="Get sale configuration")
async def get_sale_config(
    token_id: int | None = Query(None, ge=0, description="Token id (semi-fungible only)"),
    registry: ModularRegistry = Depends(get_registry),
) -> SaleConfigModel:
    _reject_token_id(registry, token_id)
    if token_id is not None and isinstance(registry, SemiFungibleRegistry):
        config = registry.dispatch_administrative(READER, "get_sale_config_for_token", token_id)
    else:
        config = registry.dispatch_administrative(READER, "get_sale_config")
    return _sale_config_model(config)


@router.put("/{name}/sale-config", response_model=SaleConfigModel, summary="Update sale configuration")
async def set_sale_config(
    request: SaleConfigUpdateRequest, registry: ModularRegistry = Depends(get_registry)
) -> SaleConfigModel:
    _reject_token_id(registry, request.token_id)
    ctx = CallContext(from_hex(request.caller, "caller"))
    args = (
        from_hex(request.primary_recipient, "primary_recipient"),
        from_hex(request.platform_fee_recipient, "platform_fee_recipient"),
        request.platform_fee_bps,
    )
    if request.token_id is not None and isinstance(registry, SemiFungibleRegistry):
        registry.dispatch_administrative(ctx, "set_sale_config_for_token", request.token_id, *args)
        config = registry.dispatch_administrative(READER, "get_sale_config_for_token", request.token_id)
    else:
        registry.dispatch_administrative(ctx, "set_sale_config", *args)
        config = registry.dispatch_administrative(READER, "get_sale_config")
    return _sale_config_model(config)


@router.get("/{name}/claim-condition", response_model=ClaimConditionModel, summary="Get claim condition")
async def get_claim_condition(
    token_id: int | None = Query(None, ge=0, description="Token id (semi-fungible only)"),
    registry: ModularRegistry = Depends(get_registry),
) -> ClaimConditionModel:
    condition = registry.dispatch_administrative(READER, "get_claim_condition", *_token_args(registry, token_id))
    return ClaimConditionModel(
        available_supply=condition.available_supply,
        allowlist_root=to_hex(condition.allowlist_root),
        price_per_unit=condition.price_per_unit,
        currency=to_hex(condition.currency),
        start_time=condition.start_time,
        end_time=condition.end_time,
        max_per_wallet=condition.max_per_wallet,
        aux_data=to_hex(condition.aux_data),
    )


@router.put("/{name}/claim-condition", response_model=ClaimConditionModel, summary="Replace claim condition")
async def set_claim_condition(
    request: ClaimConditionUpdateRequest, registry: ModularRegistry = Depends(get_registry)
) -> ClaimConditionModel:
    condition = ClaimCondition(
        available_supply=request.available_supply,
        allowlist_root=from_hex(request.allowlist_root, "allowlist_root"),
        price_per_unit=request.price_per_unit,
        currency=from_hex(request.currency, "currency"),
        start_time=request.start_time,
        end_time=request.end_time,
        max_per_wallet=request.max_per_wallet,
        aux_data=from_hex(request.aux_data, "aux_data"),
    )
    registry.dispatch_administrative(
        CallContext(from_hex(request.caller, "caller")),
        "set_claim_condition",
        *_token_args(registry, request.token_id),
        condition,
        request.reset_consumption,
    )
    return await get_claim_condition(request.token_id, registry)


@router.get("/{name}/consumption/{wallet}", response_model=ConsumptionResponse, summary="Get wallet consumption")
async def get_wallet_consumption(
    wallet: str,
    token_id: int | None = Query(None, ge=0, description="Token id (semi-fungible only)"),
    registry: ModularRegistry = Depends(get_registry),
) -> ConsumptionResponse:
    consumed = registry.dispatch_administrative(
        READER, "get_wallet_consumption", *_token_args(registry, token_id), from_hex(wallet, "wallet")
    )
    return ConsumptionResponse(wallet=wallet, token_id=token_id, consumed=consumed)


@router.get("/{name}/signing-domain", response_model=SigningDomainResponse, summary="Get signing domain")
async def get_signing_domain(registry: ModularRegistry = Depends(get_registry)) -> SigningDomainResponse:
    domain = registry.dispatch_administrative(READER, "get_signing_domain")
    return SigningDomainResponse(
        name=domain.name.decode(),
        version=domain.version.decode(),
        chain_id=domain.chain_id,
        verifying_contract=to_hex(domain.verifying_contract),
    )


@router.get("/{name}/requests/{uid}", response_model=RequestUsedResponse, summary="Check a signed request UID")
async def is_request_used(uid: str, registry: ModularRegistry = Depends(get_registry)) -> RequestUsedResponse:
    used = registry.dispatch_administrative(READER, "is_request_used", from_hex(uid, "uid"))
    return RequestUsedResponse(uid=uid, used=used)
