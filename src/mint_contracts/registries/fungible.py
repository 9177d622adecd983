"""
Fungible Registry

Balances, allowances and supply of a fungible token. Minting is delegated to
the module bound to ``before_mint_fungible``; the registry only creates the
units once the hook returns. Deployed fungible registries also serve as
payment currencies (their address is the currency id).
"""

import logging
from typing import Any, Dict, List

from mint_contracts.errors import InsufficientAllowance, InsufficientBalance, InvalidQuantity
from mint_contracts.ledger import CallContext
from mint_contracts.module import SupportedCallback
from mint_contracts.registry import ModularRegistry
from mint_contracts.types import INTERFACE_FUNGIBLE, SELECTOR_BEFORE_MINT_FUNGIBLE


logger = logging.getLogger(__name__)

LEDGER_NAMESPACE = "fungible"


class FungibleRegistry(ModularRegistry):
    SUPPORTED_INTERFACES = (INTERFACE_FUNGIBLE,)

    def __init__(self, name: str, symbol: str, owner: bytes, decimals: int = 6):
        super().__init__(name, owner)
        self.symbol = symbol
        self.decimals = decimals

    def supported_callbacks(self) -> List[SupportedCallback]:
        return [SupportedCallback(SELECTOR_BEFORE_MINT_FUNGIBLE)]

    @property
    def _ledger(self) -> Dict[str, Any]:
        ledger = self.chain.storage(self.address, LEDGER_NAMESPACE)
        ledger.setdefault("balances", {})
        ledger.setdefault("allowances", {})
        ledger.setdefault("total_supply", 0)
        return ledger

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def balance_of(self, owner: bytes) -> int:
        return self._ledger["balances"].get(owner, 0)

    def allowance(self, owner: bytes, spender: bytes) -> int:
        return self._ledger["allowances"].get((owner, spender), 0)

    def total_supply(self) -> int:
        return self._ledger["total_supply"]

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------

    def approve(self, ctx: CallContext, spender: bytes, amount: int) -> None:
        with self.chain.transaction():
            self._ledger["allowances"][(ctx.sender, spender)] = amount

    def transfer(self, ctx: CallContext, to: bytes, amount: int) -> None:
        with self.chain.transaction():
            self._move(ctx.sender, to, amount)

    def transfer_from(self, ctx: CallContext, owner: bytes, to: bytes, amount: int) -> None:
        """Move ``amount`` from ``owner`` using the caller's allowance"""
        with self.chain.transaction():
            allowances = self._ledger["allowances"]
            allowed = allowances.get((owner, ctx.sender), 0)
            if allowed < amount:
                raise InsufficientAllowance(
                    f"{ctx.sender.hex()} may spend {allowed} of {owner.hex()}'s {self.symbol}, needs {amount}"
                )
            allowances[(owner, ctx.sender)] = allowed - amount
            self._move(owner, to, amount)

    def _move(self, sender: bytes, to: bytes, amount: int) -> None:
        if amount < 0:
            raise ValueError("Transfer amount must be non-negative")
        balances = self._ledger["balances"]
        balance = balances.get(sender, 0)
        if balance < amount:
            raise InsufficientBalance(f"{sender.hex()} holds {balance} {self.symbol}, needs {amount}")
        balances[sender] = balance - amount
        balances[to] = balances.get(to, 0) + amount

    # ------------------------------------------------------------------
    # Mint
    # ------------------------------------------------------------------

    def mint(self, ctx: CallContext, to: bytes, amount: int, payload: bytes = b"") -> None:
        """
        Mint ``amount`` units to ``to`` once the installed mint module allows it.

        The whole call is atomic: a failing hook, payment or mint leaves no
        trace.
        """
        if amount <= 0:
            raise InvalidQuantity(f"Mint amount must be positive, got {amount}")

        with self.chain.transaction():
            self._accept_value(ctx)
            self.dispatch(ctx, SELECTOR_BEFORE_MINT_FUNGIBLE, to, amount, payload)
            ledger = self._ledger
            ledger["balances"][to] = ledger["balances"].get(to, 0) + amount
            ledger["total_supply"] += amount

        logger.info(f"Minted {amount} {self.symbol} to {to.hex()}")
