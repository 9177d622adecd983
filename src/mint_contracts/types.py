from dataclasses import dataclass, field
from typing import List, Union

from pycardano import PlutusData


################################################
# Constants
################################################
# Currency id of the chain's native asset (lovelace-style empty policy id)
NATIVE_CURRENCY = b""
ZERO_ROOT = bytes(32)
MAX_BPS = 10_000
ADDRESS_LENGTH = 28  # payment key hash size

SELECTOR_BEFORE_MINT_FUNGIBLE = "before_mint_fungible"
SELECTOR_BEFORE_MINT_UNIQUE = "before_mint_unique"
SELECTOR_BEFORE_MINT_SEMI_FUNGIBLE = "before_mint_semi_fungible"

INTERFACE_FUNGIBLE = "IFungibleRegistry"
INTERFACE_UNIQUE = "IUniqueRegistry"
INTERFACE_SEMI_FUNGIBLE = "ISemiFungibleRegistry"


################################################
# Registry state records
################################################
@dataclass
class SaleConfig:
    primary_recipient: bytes = b""
    platform_fee_recipient: bytes = b""  # b"" = no platform fee recipient
    platform_fee_bps: int = 0


@dataclass
class ClaimCondition:
    """Active rule set for open or signed minting of one subject"""

    available_supply: int = 0  # remaining mintable units
    allowlist_root: bytes = ZERO_ROOT  # zero root = unrestricted
    price_per_unit: int = 0
    currency: bytes = NATIVE_CURRENCY
    start_time: int = 0
    end_time: int = 0
    max_per_wallet: int = 0  # 0 = no per-wallet cap
    aux_data: bytes = b""


@dataclass
class ExtensionRecord:
    module: bytes
    callback_functions: List[str] = field(default_factory=list)
    fallback_functions: dict = field(default_factory=dict)  # selector -> permission bits


@dataclass(frozen=True)
class ConsumptionReceipt:
    """
    Proof that authorization state was committed for a mint.

    Only produced after supply/consumption/UID mutation, and the only thing
    settlement accepts.
    """

    payer: bytes
    currency: bytes
    price_per_unit: int
    quantity: int
    total_price: int


################################################
# Signing domain
################################################
@dataclass()
class DomainDescriptor(PlutusData):
    CONSTR_ID = 0
    name: bytes  # module's fixed identity
    version: bytes
    chain_id: int
    verifying_contract: bytes  # registry address the module is installed on


################################################
# Signed mint requests (one per asset kind)
################################################
@dataclass()
class FungibleMintRequest(PlutusData):
    CONSTR_ID = 0
    recipient: bytes
    amount: int
    currency: bytes
    price_per_unit: int
    start_time: int
    end_time: int
    uid: bytes


@dataclass()
class UniqueMintRequest(PlutusData):
    CONSTR_ID = 0
    recipient: bytes
    quantity: int
    currency: bytes
    price_per_unit: int
    start_time: int
    end_time: int
    uid: bytes


@dataclass()
class SemiFungibleMintRequest(PlutusData):
    CONSTR_ID = 0
    token_id: int
    recipient: bytes
    amount: int
    currency: bytes
    price_per_unit: int
    start_time: int
    end_time: int
    uid: bytes


MintRequest = Union[FungibleMintRequest, UniqueMintRequest, SemiFungibleMintRequest]


@dataclass()
class SignatureWitness(PlutusData):
    CONSTR_ID = 0
    vkey: bytes  # 32-byte Ed25519 verification key
    signature: bytes


################################################
# Mint payloads
################################################
@dataclass()
class OpenClaimParams(PlutusData):
    CONSTR_ID = 0
    currency: bytes  # expected currency of the active condition
    price_per_unit: int  # expected price of the active condition
    allowlist_proof: List[bytes]


@dataclass()
class SignedFungibleClaim(PlutusData):
    CONSTR_ID = 1
    request: FungibleMintRequest
    witness: SignatureWitness


@dataclass()
class SignedUniqueClaim(PlutusData):
    CONSTR_ID = 1
    request: UniqueMintRequest
    witness: SignatureWitness


@dataclass()
class SignedSemiFungibleClaim(PlutusData):
    CONSTR_ID = 1
    request: SemiFungibleMintRequest
    witness: SignatureWitness
