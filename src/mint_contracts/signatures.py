"""
Signed Mint Requests

Hashing and verification of mint requests signed off-chain by a MINTER.

The signed message binds the request to one deployment:

    domain_separator = blake2b256(DOMAIN_TYPE_HASH || cbor(domain))
    struct_hash      = blake2b256(type_hash(request) || cbor(request))
    message          = blake2b256(0x19 0x01 || domain_separator || struct_hash)

where the domain carries the module name and version, the chain id and the
registry address. A signature made for one registry or chain never verifies
on another.

The witness carries the signer's verification key; the signer identity is
the key hash, exactly as a payment key hash is derived from a vkey.
"""

import logging
from typing import Any, Dict, Set

import pycardano as pc
from cryptography.exceptions import InvalidSignature as CryptoInvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from mint_contracts.capabilities import Capability, CapabilityTable
from mint_contracts.errors import (
    InvalidSignature,
    RequestAlreadyUsed,
    RequestExpired,
    RequestNotYetValid,
    UnauthorizedSigner,
)
from mint_contracts.types import DomainDescriptor, MintRequest, SignatureWitness
from mint_contracts.util import blake2b_256


logger = logging.getLogger(__name__)

DOMAIN_TYPE_HASH = blake2b_256(b"DomainDescriptor(bytes name,bytes version,int chain_id,bytes verifying_contract)")
TYPED_DATA_PREFIX = b"\x19\x01"


def type_hash(request: MintRequest) -> bytes:
    return blake2b_256(type(request).__name__.encode())


def domain_separator(domain: DomainDescriptor) -> bytes:
    return blake2b_256(DOMAIN_TYPE_HASH + domain.to_cbor())


def struct_hash(request: MintRequest) -> bytes:
    return blake2b_256(type_hash(request) + request.to_cbor())


def typed_data_hash(request: MintRequest, domain: DomainDescriptor) -> bytes:
    """Message a MINTER signs for ``request`` on the deployment ``domain``"""
    return blake2b_256(TYPED_DATA_PREFIX + domain_separator(domain) + struct_hash(request))


def recover_signer(message: bytes, witness: SignatureWitness) -> bytes:
    """
    Verify a witness over ``message`` and return the signer's key hash.

    Raises:
        InvalidSignature: The witness does not verify
    """
    try:
        Ed25519PublicKey.from_public_bytes(witness.vkey).verify(witness.signature, message)
    except (CryptoInvalidSignature, ValueError) as e:
        raise InvalidSignature("Signature does not match the request") from e
    return pc.VerificationKey(witness.vkey).hash().payload


class SignedRequestVerifier:
    """Verifies signed requests and keeps the set of consumed UIDs"""

    def __init__(self, storage: Dict[str, Any], capabilities: CapabilityTable, domain: DomainDescriptor):
        self._used: Set[bytes] = storage.setdefault("used_uids", set())
        self._capabilities = capabilities
        self._domain = domain

    @property
    def domain(self) -> DomainDescriptor:
        return self._domain

    def is_used(self, uid: bytes) -> bool:
        return uid in self._used

    def verify(self, request: MintRequest, witness: SignatureWitness, now: int) -> MintRequest:
        """
        Authorize a signed request and consume its UID.

        The UID is marked used before this returns, so it is committed before
        any payment the caller makes.

        Args:
            request: Decoded mint request
            witness: Verification key and signature
            now: Execution time

        Returns:
            The request, whose currency/price/quantity the caller settles against

        Raises:
            InvalidSignature: Signature does not verify
            UnauthorizedSigner: Signer does not hold MINTER
            RequestNotYetValid / RequestExpired: Outside [start_time, end_time)
            RequestAlreadyUsed: UID consumed before
        """
        signer = recover_signer(typed_data_hash(request, self._domain), witness)
        if not self._capabilities.has_capability(signer, Capability.MINTER):
            raise UnauthorizedSigner(f"Signer {signer.hex()} lacks the minting capability")

        if now < request.start_time:
            raise RequestNotYetValid(f"Request valid from {request.start_time}, now is {now}")
        if now >= request.end_time:
            raise RequestExpired(f"Request expired at {request.end_time}, now is {now}")

        if request.uid in self._used:
            raise RequestAlreadyUsed(f"Request {request.uid.hex()} was already used")
        self._used.add(request.uid)

        logger.debug(f"Signed request {request.uid.hex()} accepted from {signer.hex()}")
        return request
