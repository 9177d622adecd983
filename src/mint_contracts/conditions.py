"""
Claim Condition Store

Claim conditions and per-wallet consumption kept in a module's state
partition. A subject is either the whole asset (``None``) or one token id of
a semi-fungible registry.

Consumption belongs to a condition "epoch": it survives condition updates and
is only cleared when an update explicitly asks for it.
"""

import copy
import logging
from typing import Any, Dict, Optional

from mint_contracts.errors import (
    ConditionEnded,
    ConditionNotStarted,
    ExceedsAvailableSupply,
    ExceedsWalletLimit,
    InvalidCondition,
    InvalidQuantity,
    PriceOrCurrencyMismatch,
    SupplyBelowConsumed,
)
from mint_contracts.types import ClaimCondition, ZERO_ROOT


logger = logging.getLogger(__name__)

Subject = Optional[int]


def validate_condition(condition: ClaimCondition) -> None:
    if condition.available_supply < 0:
        raise InvalidCondition("available_supply cannot be negative")
    if condition.price_per_unit < 0:
        raise InvalidCondition("price_per_unit cannot be negative")
    if condition.max_per_wallet < 0:
        raise InvalidCondition("max_per_wallet cannot be negative")
    if len(condition.allowlist_root) != len(ZERO_ROOT):
        raise InvalidCondition("allowlist_root must be 32 bytes")
    if condition.start_time > condition.end_time:
        raise InvalidCondition("start_time must not be after end_time")


def check_window(condition: ClaimCondition, now: int) -> None:
    """A condition is usable strictly between its start and end time"""
    if now <= condition.start_time:
        raise ConditionNotStarted(f"Claim condition starts at {condition.start_time}, now is {now}")
    if now >= condition.end_time:
        raise ConditionEnded(f"Claim condition ended at {condition.end_time}, now is {now}")


class ClaimConditionStore:
    """Conditions and consumption over one module partition"""

    def __init__(self, storage: Dict[str, Any]):
        self._conditions: Dict[Subject, ClaimCondition] = storage.setdefault("conditions", {})
        self._consumption: Dict[Subject, Dict[bytes, int]] = storage.setdefault("consumption", {})

    def get_condition(self, subject: Subject = None) -> ClaimCondition:
        """Return a copy of the stored condition (an all-zero one if unset)"""
        return copy.copy(self._conditions.get(subject, ClaimCondition()))

    def get_consumption(self, subject: Subject, wallet: bytes) -> int:
        return self._consumption.get(subject, {}).get(wallet, 0)

    def total_consumed(self, subject: Subject) -> int:
        return sum(self._consumption.get(subject, {}).values())

    def set_condition(self, subject: Subject, condition: ClaimCondition, reset_consumption: bool) -> None:
        """
        Replace the condition of a subject.

        Args:
            subject: None for the whole asset, or a token id
            condition: New condition record
            reset_consumption: Start a new consumption epoch for the subject

        Raises:
            InvalidCondition: Malformed condition
            SupplyBelowConsumed: New supply is below what the current epoch
                already consumed and no reset was requested
        """
        validate_condition(condition)

        consumed = self.total_consumed(subject)
        if not reset_consumption and condition.available_supply < consumed:
            raise SupplyBelowConsumed(
                f"available_supply {condition.available_supply} is below {consumed} already consumed"
            )

        self._conditions[subject] = copy.copy(condition)
        if reset_consumption:
            self._consumption.pop(subject, None)

        logger.info(
            f"Claim condition set for subject {subject}: supply={condition.available_supply} "
            f"price={condition.price_per_unit} reset={reset_consumption}"
        )

    def check_and_consume(
        self,
        subject: Subject,
        wallet: bytes,
        quantity: int,
        currency: bytes,
        price_per_unit: int,
        now: int,
    ) -> ClaimCondition:
        """
        Validate a claim against the stored condition and record it.

        ``currency``/``price_per_unit`` are the values the claimer committed
        to; they must equal the stored ones, so a condition changed after the
        claim was prepared fails instead of charging a different price.

        Returns:
            The condition as it was before consumption
        """
        condition = self.get_condition(subject)

        if currency != condition.currency or price_per_unit != condition.price_per_unit:
            raise PriceOrCurrencyMismatch(
                f"Expected {price_per_unit} of '{currency.hex()}', condition is "
                f"{condition.price_per_unit} of '{condition.currency.hex()}'"
            )

        check_window(condition, now)

        if quantity <= 0:
            raise InvalidQuantity(f"Quantity must be positive, got {quantity}")
        if quantity > condition.available_supply:
            raise ExceedsAvailableSupply(
                f"Requested {quantity}, only {condition.available_supply} available"
            )

        already = self.get_consumption(subject, wallet)
        if condition.max_per_wallet and already + quantity > condition.max_per_wallet:
            raise ExceedsWalletLimit(
                f"Wallet {wallet.hex()} claimed {already}, limit is {condition.max_per_wallet}"
            )

        self._conditions[subject].available_supply = condition.available_supply - quantity
        wallets = self._consumption.setdefault(subject, {})
        wallets[wallet] = already + quantity
        return condition
