"""
Registry Schemas

Pydantic models for registry deployment and administration requests and
responses. Addresses, currencies and roots are hex strings.
"""

from pydantic import BaseModel, Field

from api.enums import RegistryKind
from mint_contracts.minting_policies import SignedPathPolicy


class RegistryCreateRequest(BaseModel):
    """Deploy a registry with its claimable mint module installed"""

    kind: RegistryKind = Field(description="Registry kind")
    name: str = Field(min_length=1, description="Unique registry name")
    symbol: str = Field("", description="Token symbol (fungible and unique registries)")
    owner: str = Field(description="Owner principal (hex key hash)")
    decimals: int | None = Field(None, ge=0, le=18, description="Fungible decimals (defaults to chain settings)")
    primary_recipient: str = Field("", description="Initial primary sale recipient (hex)")
    signed_path: SignedPathPolicy | None = Field(None, description="Override of the module's signed-path policy")


class ModuleItem(BaseModel):
    module: str = Field(description="Module address (hex)")
    callback_functions: list[str]
    fallback_functions: dict[str, int] = Field(description="Selector -> required capability bits")


class RegistryResponse(BaseModel):
    name: str
    kind: str
    address: str
    modules: list[ModuleItem]


class RegistryListResponse(BaseModel):
    registries: list[RegistryResponse]
    total: int


class CapabilityRequest(BaseModel):
    caller: str = Field(description="Principal performing the grant or revoke (hex)")
    principal: str = Field(description="Principal receiving or losing the bits (hex)")
    bits: int = Field(gt=0, description="Capability bitmask")
    revoke: bool = False


class CapabilityResponse(BaseModel):
    principal: str
    bits: int


class SaleConfigModel(BaseModel):
    primary_recipient: str = ""
    platform_fee_recipient: str = ""
    platform_fee_bps: int = Field(0, ge=0)


class SaleConfigUpdateRequest(SaleConfigModel):
    caller: str = Field(description="Principal holding MANAGER (hex)")
    token_id: int | None = Field(None, ge=0, description="Token id (semi-fungible only)")


class ClaimConditionModel(BaseModel):
    available_supply: int = Field(0, ge=0)
    allowlist_root: str = Field("00" * 32, description="32-byte allowlist root, zero = unrestricted")
    price_per_unit: int = Field(0, ge=0)
    currency: str = Field("", description="Currency id, empty = native")
    start_time: int = 0
    end_time: int = 0
    max_per_wallet: int = Field(0, ge=0, description="0 = unlimited")
    aux_data: str = ""


class ClaimConditionUpdateRequest(ClaimConditionModel):
    caller: str = Field(description="Principal holding MANAGER (hex)")
    token_id: int | None = Field(None, ge=0, description="Token id (semi-fungible only)")
    reset_consumption: bool = False


class ConsumptionResponse(BaseModel):
    wallet: str
    token_id: int | None = None
    consumed: int


class SigningDomainResponse(BaseModel):
    name: str
    version: str
    chain_id: int
    verifying_contract: str


class RequestUsedResponse(BaseModel):
    uid: str
    used: bool
