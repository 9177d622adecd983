"""
Mint Payload Builders

Encodes the payloads a registry's mint entry point accepts: open claims
(expected currency/price plus allowlist proof) and MINTER-signed requests.
"""

import os
from typing import List, Optional

from mint_contracts.signatures import typed_data_hash
from mint_contracts.types import (
    NATIVE_CURRENCY,
    DomainDescriptor,
    FungibleMintRequest,
    MintRequest,
    OpenClaimParams,
    SemiFungibleMintRequest,
    SignedFungibleClaim,
    SignedSemiFungibleClaim,
    SignedUniqueClaim,
    UniqueMintRequest,
)
from mint_offchain.wallet import MintWallet


SIGNED_CLAIM_TYPES = {
    FungibleMintRequest: SignedFungibleClaim,
    UniqueMintRequest: SignedUniqueClaim,
    SemiFungibleMintRequest: SignedSemiFungibleClaim,
}


def new_uid() -> bytes:
    """Random 32-byte request identifier"""
    return os.urandom(32)


def open_claim_payload(
    price_per_unit: int, currency: bytes = NATIVE_CURRENCY, allowlist_proof: Optional[List[bytes]] = None
) -> bytes:
    return OpenClaimParams(
        currency=currency, price_per_unit=price_per_unit, allowlist_proof=list(allowlist_proof or [])
    ).to_cbor()


def sign_request(request: MintRequest, domain: DomainDescriptor, signer: MintWallet) -> bytes:
    """
    Sign a mint request for one deployment and encode it as a mint payload.

    Args:
        request: Kind-specific mint request
        domain: Signing domain returned by the module's ``get_signing_domain``
        signer: Wallet of a MINTER of the target registry

    Returns:
        CBOR payload to pass to the registry's mint entry point
    """
    claim_type = SIGNED_CLAIM_TYPES[type(request)]
    witness = signer.sign(typed_data_hash(request, domain))
    return claim_type(request=request, witness=witness).to_cbor()
