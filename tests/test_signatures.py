"""
Tests for signed mint request verification
"""

import pytest

from mint_contracts.capabilities import Capability, CapabilityTable
from mint_contracts.errors import (
    InvalidSignature,
    RequestAlreadyUsed,
    RequestExpired,
    RequestNotYetValid,
    UnauthorizedSigner,
)
from mint_contracts.signatures import SignedRequestVerifier, domain_separator, recover_signer, typed_data_hash
from mint_contracts.types import DomainDescriptor, FungibleMintRequest, SignatureWitness, UniqueMintRequest
from mint_offchain.requests import new_uid
from mint_offchain.wallet import MintWallet

from .mock import NOW, MockCommon

MNEMONIC = "test walk nut penalty hip pave soap entry language right filter choice"


class TestSignedRequestVerifier(MockCommon):
    """Domain binding, signer authorization, validity window and replay"""

    def setup_method(self):
        super().setup_method()
        self.domain = DomainDescriptor(
            name=b"ClaimableUnique", version=b"1", chain_id=1, verifying_contract=b"r" * 28
        )
        self.capabilities = CapabilityTable({})
        self.capabilities.initialize_owner(self.owner)
        self.capabilities.grant(self.owner, self.signer.address, Capability.MINTER)
        self.storage = {}
        self.verifier = SignedRequestVerifier(self.storage, self.capabilities, self.domain)

    def create_mock_request(self, uid: bytes = None, **overrides) -> UniqueMintRequest:
        fields = dict(
            recipient=self.buyer,
            quantity=1,
            currency=b"",
            price_per_unit=0,
            start_time=NOW - 10,
            end_time=NOW + 10,
            uid=uid or new_uid(),
        )
        fields.update(overrides)
        return UniqueMintRequest(**fields)

    def sign(self, request, signer: MintWallet = None, domain: DomainDescriptor = None) -> SignatureWitness:
        return (signer or self.signer).sign(typed_data_hash(request, domain or self.domain))

    def test_valid_request_marks_uid(self):
        request = self.create_mock_request()
        assert self.verifier.verify(request, self.sign(request), NOW) == request
        assert self.verifier.is_used(request.uid)

    def test_replay_fails(self):
        request = self.create_mock_request(uid=b"U1")
        self.verifier.verify(request, self.sign(request), NOW)

        replay = self.create_mock_request(uid=b"U1", quantity=2)
        with pytest.raises(RequestAlreadyUsed):
            self.verifier.verify(replay, self.sign(replay), NOW)

    def test_signer_without_minter(self):
        request = self.create_mock_request()
        with pytest.raises(UnauthorizedSigner, match="lacks the minting capability"):
            self.verifier.verify(request, self.sign(request, MintWallet()), NOW)

    def test_tampered_request(self):
        request = self.create_mock_request()
        witness = self.sign(request)
        tampered = self.create_mock_request(uid=request.uid, quantity=5)
        with pytest.raises(InvalidSignature):
            self.verifier.verify(tampered, witness, NOW)

    def test_invalid_signature_is_unauthorized_signer(self):
        assert issubclass(InvalidSignature, UnauthorizedSigner)

    def test_garbage_key(self):
        request = self.create_mock_request()
        with pytest.raises(InvalidSignature):
            self.verifier.verify(request, SignatureWitness(vkey=b"short", signature=bytes(64)), NOW)

    def test_other_deployment_domain(self):
        request = self.create_mock_request()
        other = DomainDescriptor(name=b"ClaimableUnique", version=b"1", chain_id=2, verifying_contract=b"r" * 28)
        with pytest.raises(InvalidSignature):
            self.verifier.verify(request, self.sign(request, domain=other), NOW)

    def test_validity_window(self):
        request = self.create_mock_request(start_time=NOW + 1)
        with pytest.raises(RequestNotYetValid):
            self.verifier.verify(request, self.sign(request), NOW)

        request = self.create_mock_request(end_time=NOW)
        with pytest.raises(RequestExpired):
            self.verifier.verify(request, self.sign(request), NOW)

        request = self.create_mock_request(start_time=NOW)
        self.verifier.verify(request, self.sign(request), NOW)

    def test_failed_verification_does_not_mark_uid(self):
        request = self.create_mock_request(end_time=NOW)
        with pytest.raises(RequestExpired):
            self.verifier.verify(request, self.sign(request), NOW)
        assert not self.verifier.is_used(request.uid)


class TestTypedDataHash:
    """Hash construction"""

    def setup_method(self):
        self.domain = DomainDescriptor(name=b"ClaimableFungible", version=b"1", chain_id=1, verifying_contract=b"a" * 28)
        self.request = FungibleMintRequest(
            recipient=b"b" * 28, amount=10, currency=b"", price_per_unit=0, start_time=0, end_time=1, uid=b"u"
        )

    def test_hash_is_deterministic(self):
        assert typed_data_hash(self.request, self.domain) == typed_data_hash(self.request, self.domain)
        assert len(typed_data_hash(self.request, self.domain)) == 32

    def test_domain_fields_change_separator(self):
        moved = DomainDescriptor(name=b"ClaimableFungible", version=b"1", chain_id=1, verifying_contract=b"c" * 28)
        assert domain_separator(moved) != domain_separator(self.domain)

    def test_request_kinds_do_not_collide(self):
        unique = UniqueMintRequest(
            recipient=b"b" * 28, quantity=10, currency=b"", price_per_unit=0, start_time=0, end_time=1, uid=b"u"
        )
        assert typed_data_hash(unique, self.domain) != typed_data_hash(self.request, self.domain)

    def test_mnemonic_wallet_signatures_recover(self):
        wallet = MintWallet(MNEMONIC)
        message = typed_data_hash(self.request, self.domain)
        assert recover_signer(message, wallet.sign(message)) == wallet.address
        assert len(wallet.address) == 28
