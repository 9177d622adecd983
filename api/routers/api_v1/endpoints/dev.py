"""
Dev Endpoints

Native balance funding and lookup. Funding is only available in the
development environment.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from api.config import settings
from api.dependencies.chain import get_contract_manager
from api.schemas.mint import BalanceResponse, FundRequest
from api.utils.encoding import from_hex
from mint_offchain.contracts import ContractManager


router = APIRouter()


@router.post("/fund", response_model=BalanceResponse, summary="Fund a principal (development only)")
async def fund(request: FundRequest, manager: ContractManager = Depends(get_contract_manager)) -> BalanceResponse:
    if not settings.is_development:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Funding is only available in development")
    address = from_hex(request.address, "address")
    manager.chain.fund(address, request.amount)
    return BalanceResponse(address=request.address, native_balance=manager.chain.native_balance(address))


@router.get("/balances/{address}", response_model=BalanceResponse, summary="Get native balance")
async def get_balance(address: str, manager: ContractManager = Depends(get_contract_manager)) -> BalanceResponse:
    return BalanceResponse(
        address=address, native_balance=manager.chain.native_balance(from_hex(address, "address"))
    )
