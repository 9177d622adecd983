"""
Mint Schemas

Pydantic models for mint submission and dev-only funding.
"""

from pydantic import BaseModel, Field


class MintSubmitRequest(BaseModel):
    """Submit a mint to a registry"""

    caller: str = Field(description="Principal submitting (and paying for) the mint (hex)")
    to: str = Field(description="Mint recipient (hex)")
    quantity: int = Field(description="Units to mint")
    token_id: int | None = Field(None, ge=0, description="Token id (semi-fungible only)")
    payload: str = Field("", description="CBOR-encoded open claim or signed claim (hex)")
    value: int = Field(0, ge=0, description="Native value attached to the call")


class MintSubmitResponse(BaseModel):
    registry: str
    to: str
    quantity: int
    token_id: int | None = None
    token_ids: list[int] | None = Field(None, description="Token ids created (unique registries)")


class FundRequest(BaseModel):
    address: str = Field(description="Principal to credit (hex)")
    amount: int = Field(gt=0)


class BalanceResponse(BaseModel):
    address: str
    native_balance: int
