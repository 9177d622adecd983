"""
Claimable Mint Policy

Shared orchestration of a priced mint, used by the fungible, unique and
semi-fungible policies:

    START -> DECODE_PAYLOAD -> OPEN_PATH | SIGNED_PATH
          -> AUTHORIZE_AND_CONSUME -> SETTLE -> DONE

Any failure raises; the registry's transaction then rolls back every state
change of the call (REVERTED).

Open path: the caller declares the currency and price it expects and, when
the condition has an allowlist, proves membership of its own address.

Signed path: a MINTER-signed request authorizes the mint. Depending on the
policy's SignedPathPolicy the request is also checked against (and consumes)
the claim condition, or is fully authoritative on its own.
"""

import logging
from collections import UserList
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple, Type, Union

from cbor2 import CBORDecodeError
from pycardano.exception import DeserializeException

from mint_contracts.capabilities import Capability
from mint_contracts.conditions import ClaimConditionStore, Subject
from mint_contracts.errors import (
    InvalidFeeBasisPoints,
    InvalidQuantity,
    MintContractError,
    PayloadDecodeError,
    RequestMismatch,
)
from mint_contracts.module import FallbackFunction, Module, ModuleConfig, ModuleContext
from mint_contracts.settlement import SettlementEngine
from mint_contracts.signatures import SignedRequestVerifier
from mint_contracts.types import (
    ClaimCondition,
    ConsumptionReceipt,
    DomainDescriptor,
    MintRequest,
    OpenClaimParams,
    SaleConfig,
    SignatureWitness,
)
from mint_contracts.util import validate_fee_bps, verify_allowlist


logger = logging.getLogger(__name__)


class SignedPathPolicy(str, Enum):
    """How a valid signed request relates to the stored claim condition"""

    CONDITION_GATED = "condition_gated"  # request must match and consume the condition
    SIGNATURE_AUTHORITATIVE = "signature_authoritative"  # UID set only


class MintStage(str, Enum):
    START = "start"
    DECODE_PAYLOAD = "decode_payload"
    OPEN_PATH = "open_path"
    SIGNED_PATH = "signed_path"
    AUTHORIZE_AND_CONSUME = "authorize_and_consume"
    SETTLE = "settle"
    DONE = "done"
    REVERTED = "reverted"


@dataclass
class MintCall:
    """The mint the registry is about to perform"""

    recipient: bytes
    quantity: int
    subject: Subject = None
    stage: MintStage = MintStage.START


class ClaimableMintPolicy(Module):
    """
    Base module for claim-condition and signature gated minting.

    Subclasses set the callback they bind, the registry interface they need,
    their signed payload type and how a total price is computed.
    """

    CALLBACK: str = ""
    REQUIRED_INTERFACE: str = ""
    SIGNED_CLAIM_TYPE: Type[Any] = type(None)
    DEFAULT_SIGNED_PATH: SignedPathPolicy = SignedPathPolicy.CONDITION_GATED

    def __init__(self, signed_path: Optional[SignedPathPolicy] = None):
        self.signed_path = signed_path or self.DEFAULT_SIGNED_PATH

    def module_config(self) -> ModuleConfig:
        return ModuleConfig(
            callback_functions=(self.CALLBACK,),
            fallback_functions=self.fallback_functions(),
            required_interfaces=(self.REQUIRED_INTERFACE,),
            register_installation_callback=True,
        )

    def fallback_functions(self) -> Tuple[FallbackFunction, ...]:
        return (
            FallbackFunction("get_sale_config"),
            FallbackFunction("set_sale_config", Capability.MANAGER),
            FallbackFunction("get_claim_condition"),
            FallbackFunction("set_claim_condition", Capability.MANAGER),
            FallbackFunction("get_wallet_consumption"),
            FallbackFunction("is_request_used"),
            FallbackFunction("get_signing_domain"),
        )

    def on_install(self, ctx: ModuleContext, data: bytes) -> None:
        """Install data, when given, is the initial primary sale recipient"""
        if data:
            ctx.storage["sale_config"] = SaleConfig(primary_recipient=data)

    # ------------------------------------------------------------------
    # State helpers
    # ------------------------------------------------------------------

    def conditions(self, ctx: ModuleContext) -> ClaimConditionStore:
        return ClaimConditionStore(ctx.storage)

    def verifier(self, ctx: ModuleContext) -> SignedRequestVerifier:
        return SignedRequestVerifier(ctx.storage, ctx.capabilities, self.signing_domain(ctx))

    def signing_domain(self, ctx: ModuleContext) -> DomainDescriptor:
        """Domain of this module on the calling registry, derived on every call"""
        return DomainDescriptor(
            name=self.NAME.encode(),
            version=self.VERSION.encode(),
            chain_id=ctx.chain.chain_id,
            verifying_contract=ctx.registry.address,
        )

    def sale_config_for(self, ctx: ModuleContext, subject: Subject) -> SaleConfig:
        return ctx.storage.get("sale_config", SaleConfig())

    def total_price(self, ctx: ModuleContext, quantity: int, price_per_unit: int) -> int:
        raise NotImplementedError

    def subject_of(self, request: MintRequest) -> Subject:
        return None

    def quantity_of(self, request: MintRequest) -> int:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Administrative entries
    # ------------------------------------------------------------------

    def get_sale_config(self, ctx: ModuleContext) -> SaleConfig:
        return self.sale_config_for(ctx, None)

    def set_sale_config(
        self,
        ctx: ModuleContext,
        primary_recipient: bytes,
        platform_fee_recipient: bytes = b"",
        platform_fee_bps: int = 0,
    ) -> None:
        ctx.storage["sale_config"] = build_sale_config(primary_recipient, platform_fee_recipient, platform_fee_bps)
        logger.info(f"Sale config updated on {ctx.registry.name}: fee={platform_fee_bps} bps")

    def get_claim_condition(self, ctx: ModuleContext) -> ClaimCondition:
        return self.conditions(ctx).get_condition(None)

    def set_claim_condition(self, ctx: ModuleContext, condition: ClaimCondition, reset_consumption: bool = False) -> None:
        self.conditions(ctx).set_condition(None, condition, reset_consumption)

    def get_wallet_consumption(self, ctx: ModuleContext, wallet: bytes) -> int:
        return self.conditions(ctx).get_consumption(None, wallet)

    def is_request_used(self, ctx: ModuleContext, uid: bytes) -> bool:
        return self.verifier(ctx).is_used(uid)

    def get_signing_domain(self, ctx: ModuleContext) -> DomainDescriptor:
        return self.signing_domain(ctx)

    # ------------------------------------------------------------------
    # Mint orchestration
    # ------------------------------------------------------------------

    def authorize_mint(self, ctx: ModuleContext, call: MintCall, payload: bytes) -> ConsumptionReceipt:
        """
        Run a mint through authorization, consumption and settlement.

        Args:
            ctx: Module context of the minting registry
            call: Recipient, quantity and subject of the mint
            payload: Encoded OpenClaimParams or signed claim

        Returns:
            The settled consumption receipt
        """
        try:
            if call.quantity <= 0:
                raise InvalidQuantity(f"Quantity must be positive, got {call.quantity}")

            self._advance(call, MintStage.DECODE_PAYLOAD)
            params = self.decode_payload(payload)

            if isinstance(params, OpenClaimParams):
                self._advance(call, MintStage.OPEN_PATH)
                receipt = self._open_path(ctx, call, params)
            else:
                self._advance(call, MintStage.SIGNED_PATH)
                receipt = self._signed_path(ctx, call, params.request, params.witness)

            self._advance(call, MintStage.SETTLE)
            SettlementEngine(ctx.chain, ctx.registry.address).settle(
                receipt, ctx.call.value, self.sale_config_for(ctx, call.subject)
            )
            self._advance(call, MintStage.DONE)
            return receipt
        except MintContractError:
            self._advance(call, MintStage.REVERTED)
            raise

    def decode_payload(self, payload: bytes) -> Union[OpenClaimParams, Any]:
        """
        Decode an opaque mint payload into open or signed claim parameters.

        Raises:
            PayloadDecodeError: Payload is empty or neither of the two shapes
        """
        if not payload:
            raise PayloadDecodeError("Mint payload is empty")

        for params_type in (OpenClaimParams, self.SIGNED_CLAIM_TYPE):
            try:
                params = params_type.from_cbor(payload)
            except (CBORDecodeError, DeserializeException, ValueError, TypeError, KeyError, IndexError, AssertionError):
                continue
            if self._well_formed(params):
                return params

        raise PayloadDecodeError(f"Cannot decode mint payload for {self.NAME}")

    def _open_path(self, ctx: ModuleContext, call: MintCall, params: OpenClaimParams) -> ConsumptionReceipt:
        store = self.conditions(ctx)
        condition = store.get_condition(call.subject)
        verify_allowlist(condition.allowlist_root, ctx.caller, list(params.allowlist_proof))

        self._advance(call, MintStage.AUTHORIZE_AND_CONSUME)
        store.check_and_consume(
            call.subject, call.recipient, call.quantity, params.currency, params.price_per_unit, ctx.now
        )
        return ConsumptionReceipt(
            payer=ctx.caller,
            currency=params.currency,
            price_per_unit=params.price_per_unit,
            quantity=call.quantity,
            total_price=self.total_price(ctx, call.quantity, params.price_per_unit),
        )

    def _signed_path(
        self, ctx: ModuleContext, call: MintCall, request: MintRequest, witness: SignatureWitness
    ) -> ConsumptionReceipt:
        self._advance(call, MintStage.AUTHORIZE_AND_CONSUME)
        request = self.verifier(ctx).verify(request, witness, ctx.now)

        quantity = self.quantity_of(request)
        if request.recipient != call.recipient:
            raise RequestMismatch("Signed request is for a different recipient")
        if quantity != call.quantity:
            raise RequestMismatch(f"Signed request is for {quantity} units, mint is for {call.quantity}")
        if self.subject_of(request) != call.subject:
            raise RequestMismatch("Signed request is for a different token")

        if self.signed_path == SignedPathPolicy.CONDITION_GATED:
            self.conditions(ctx).check_and_consume(
                call.subject, request.recipient, quantity, request.currency, request.price_per_unit, ctx.now
            )

        return ConsumptionReceipt(
            payer=ctx.caller,
            currency=request.currency,
            price_per_unit=request.price_per_unit,
            quantity=quantity,
            total_price=self.total_price(ctx, quantity, request.price_per_unit),
        )

    def _well_formed(self, params: Any) -> bool:
        if isinstance(params, OpenClaimParams):
            proof = params.allowlist_proof
            return (
                isinstance(params.currency, bytes)
                and isinstance(params.price_per_unit, int)
                and params.price_per_unit >= 0
                and isinstance(proof, (list, UserList))
                and all(isinstance(node, bytes) and len(node) == 32 for node in proof)
            )
        if not isinstance(params, self.SIGNED_CLAIM_TYPE) or not isinstance(params.witness, SignatureWitness):
            return False
        request = params.request
        return (
            isinstance(params.witness.vkey, bytes)
            and isinstance(params.witness.signature, bytes)
            and isinstance(request.recipient, bytes)
            and isinstance(request.uid, bytes)
            and isinstance(request.currency, bytes)
            and isinstance(request.price_per_unit, int)
            and request.price_per_unit >= 0
        )

    def _advance(self, call: MintCall, stage: MintStage) -> None:
        logger.debug(f"{self.NAME} mint to {call.recipient.hex()}: {call.stage.value} -> {stage.value}")
        call.stage = stage


def build_sale_config(primary_recipient: bytes, platform_fee_recipient: bytes, platform_fee_bps: int) -> SaleConfig:
    validate_fee_bps(platform_fee_bps)
    if platform_fee_bps and not platform_fee_recipient:
        raise InvalidFeeBasisPoints("A platform fee needs a platform fee recipient")
    return SaleConfig(
        primary_recipient=primary_recipient,
        platform_fee_recipient=platform_fee_recipient,
        platform_fee_bps=platform_fee_bps,
    )
