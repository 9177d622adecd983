"""
Semi-Fungible Registry

Balances per (token id, owner). Minting is delegated to the module bound to
``before_mint_semi_fungible``, which sees the token id being minted.
"""

import logging
from typing import Any, Dict, List

from mint_contracts.errors import InvalidQuantity
from mint_contracts.ledger import CallContext
from mint_contracts.module import SupportedCallback
from mint_contracts.registry import ModularRegistry
from mint_contracts.types import INTERFACE_SEMI_FUNGIBLE, SELECTOR_BEFORE_MINT_SEMI_FUNGIBLE


logger = logging.getLogger(__name__)

LEDGER_NAMESPACE = "semi_fungible"


class SemiFungibleRegistry(ModularRegistry):
    SUPPORTED_INTERFACES = (INTERFACE_SEMI_FUNGIBLE,)

    def __init__(self, name: str, owner: bytes):
        super().__init__(name, owner)

    def supported_callbacks(self) -> List[SupportedCallback]:
        return [SupportedCallback(SELECTOR_BEFORE_MINT_SEMI_FUNGIBLE)]

    @property
    def _ledger(self) -> Dict[str, Any]:
        ledger = self.chain.storage(self.address, LEDGER_NAMESPACE)
        ledger.setdefault("balances", {})
        ledger.setdefault("supply", {})
        return ledger

    def balance_of(self, owner: bytes, token_id: int) -> int:
        return self._ledger["balances"].get((token_id, owner), 0)

    def total_supply(self, token_id: int) -> int:
        return self._ledger["supply"].get(token_id, 0)

    def mint(self, ctx: CallContext, to: bytes, token_id: int, amount: int, payload: bytes = b"") -> None:
        if amount <= 0:
            raise InvalidQuantity(f"Mint amount must be positive, got {amount}")
        if token_id < 0:
            raise InvalidQuantity(f"Token id must be non-negative, got {token_id}")

        with self.chain.transaction():
            self._accept_value(ctx)
            self.dispatch(ctx, SELECTOR_BEFORE_MINT_SEMI_FUNGIBLE, to, token_id, amount, payload)

            ledger = self._ledger
            key = (token_id, to)
            ledger["balances"][key] = ledger["balances"].get(key, 0) + amount
            ledger["supply"][token_id] = ledger["supply"].get(token_id, 0) + amount

        logger.info(f"Minted {amount} of token {token_id} on {self.name} to {to.hex()}")
