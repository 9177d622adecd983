"""
Unique Asset Registry

Sequential token ids, one owner each. Minting is delegated to the module
bound to ``before_mint_unique``.
"""

import logging
from typing import Any, Dict, List, Optional

from mint_contracts.errors import InvalidQuantity
from mint_contracts.ledger import CallContext
from mint_contracts.module import SupportedCallback
from mint_contracts.registry import ModularRegistry
from mint_contracts.types import INTERFACE_UNIQUE, SELECTOR_BEFORE_MINT_UNIQUE


logger = logging.getLogger(__name__)

LEDGER_NAMESPACE = "unique"


class UniqueRegistry(ModularRegistry):
    SUPPORTED_INTERFACES = (INTERFACE_UNIQUE,)

    def __init__(self, name: str, symbol: str, owner: bytes):
        super().__init__(name, owner)
        self.symbol = symbol

    def supported_callbacks(self) -> List[SupportedCallback]:
        return [SupportedCallback(SELECTOR_BEFORE_MINT_UNIQUE)]

    @property
    def _ledger(self) -> Dict[str, Any]:
        ledger = self.chain.storage(self.address, LEDGER_NAMESPACE)
        ledger.setdefault("owners", {})
        ledger.setdefault("balances", {})
        ledger.setdefault("next_token_id", 0)
        return ledger

    def owner_of(self, token_id: int) -> Optional[bytes]:
        return self._ledger["owners"].get(token_id)

    def balance_of(self, owner: bytes) -> int:
        return self._ledger["balances"].get(owner, 0)

    def total_minted(self) -> int:
        return self._ledger["next_token_id"]

    def mint(self, ctx: CallContext, to: bytes, quantity: int, payload: bytes = b"") -> List[int]:
        """
        Mint ``quantity`` new token ids to ``to``.

        Returns:
            The token ids created, in order
        """
        if quantity <= 0:
            raise InvalidQuantity(f"Mint quantity must be positive, got {quantity}")

        with self.chain.transaction():
            self._accept_value(ctx)
            start_token_id = self._ledger["next_token_id"]
            self.dispatch(ctx, SELECTOR_BEFORE_MINT_UNIQUE, to, start_token_id, quantity, payload)

            ledger = self._ledger
            token_ids = list(range(ledger["next_token_id"], ledger["next_token_id"] + quantity))
            for token_id in token_ids:
                ledger["owners"][token_id] = to
            ledger["balances"][to] = ledger["balances"].get(to, 0) + quantity
            ledger["next_token_id"] += quantity

        logger.info(f"Minted {self.symbol} #{token_ids[0]}..#{token_ids[-1]} to {to.hex()}")
        return token_ids
