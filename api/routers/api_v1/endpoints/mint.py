"""
Mint Endpoints

Submit open or signed mints to a registry.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies.chain import get_registry
from api.schemas.mint import MintSubmitRequest, MintSubmitResponse
from api.utils.encoding import from_hex
from mint_contracts.ledger import CallContext
from mint_contracts.registries import FungibleRegistry, SemiFungibleRegistry, UniqueRegistry
from mint_contracts.registry import ModularRegistry


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/{name}/mint",
    response_model=MintSubmitResponse,
    summary="Submit a mint",
    description="Run a mint through the registry's mint module. The call is atomic: any failure leaves no trace.",
)
async def submit_mint(
    request: MintSubmitRequest, registry: ModularRegistry = Depends(get_registry)
) -> MintSubmitResponse:
    ctx = CallContext(sender=from_hex(request.caller, "caller"), value=request.value)
    to = from_hex(request.to, "to")
    payload = from_hex(request.payload, "payload")

    token_ids = None
    if isinstance(registry, FungibleRegistry):
        registry.mint(ctx, to, request.quantity, payload)
    elif isinstance(registry, UniqueRegistry):
        token_ids = registry.mint(ctx, to, request.quantity, payload)
    elif isinstance(registry, SemiFungibleRegistry):
        if request.token_id is None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="token_id is required for semi-fungible mints"
            )
        registry.mint(ctx, to, request.token_id, request.quantity, payload)

    logger.info(f"Mint of {request.quantity} on {registry.name} submitted by {request.caller}")
    return MintSubmitResponse(
        registry=registry.name,
        to=request.to,
        quantity=request.quantity,
        token_id=request.token_id,
        token_ids=token_ids,
    )
