"""
Execution Environment

In-process stand-in for the chain the registries run on. Holds:

- the state store: one partition per (contract address, namespace)
- native asset balances
- deployed contracts (registries, modules, payment recipients)
- the execution clock

Every state-changing entry point wraps its work in ``Chain.transaction()``,
which snapshots the state store and restores it if anything raises. This is
what makes a mint all-or-nothing.
"""

import copy
import hashlib
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Optional

from mint_contracts.errors import InsufficientBalance
from mint_contracts.types import ADDRESS_LENGTH


logger = logging.getLogger(__name__)

NATIVE_NAMESPACE = "native"


@dataclass(frozen=True)
class CallContext:
    """Who is calling and how much native value rides along"""

    sender: bytes
    value: int = 0


def derive_address(seed: bytes) -> bytes:
    """Derive a 28-byte address from arbitrary seed bytes"""
    return hashlib.blake2b(seed, digest_size=ADDRESS_LENGTH).digest()


class Chain:
    """State store, native ledger and contract directory for one chain id"""

    def __init__(self, chain_id: int, clock: Optional[Callable[[], int]] = None):
        self.chain_id = chain_id
        self.state: Dict[bytes, Dict[str, Any]] = {}
        self.contracts: Dict[bytes, Any] = {}
        self._clock = clock or (lambda: int(time.time()))
        self._deploy_nonce = 0
        self._depth = 0

    # ------------------------------------------------------------------
    # Clock
    # ------------------------------------------------------------------

    def now(self) -> int:
        """Current execution time (POSIX seconds)"""
        return self._clock()

    def warp(self, timestamp: int) -> None:
        """Pin the clock to a fixed timestamp"""
        self._clock = lambda: timestamp

    # ------------------------------------------------------------------
    # Contracts
    # ------------------------------------------------------------------

    def deploy(self, contract: Any) -> bytes:
        """
        Register a contract object and assign it a fresh address.

        Args:
            contract: Object exposing an ``address`` attribute to fill in

        Returns:
            The new contract address
        """
        self._deploy_nonce += 1
        seed = f"{type(contract).__name__}:{self.chain_id}:{self._deploy_nonce}".encode()
        address = derive_address(seed)
        contract.address = address
        contract.chain = self
        self.contracts[address] = contract

        on_deploy = getattr(contract, "on_deploy", None)
        if on_deploy is not None:
            on_deploy()
        logger.info(f"Deployed {type(contract).__name__} at {address.hex()}")
        return address

    def is_contract(self, address: bytes) -> bool:
        return address in self.contracts

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def storage(self, address: bytes, namespace: str) -> Dict[str, Any]:
        """
        Return the mutable state partition owned by ``namespace`` at ``address``.

        Partitions must be fetched per call: a rollback replaces them.
        """
        return self.state.setdefault(address, {}).setdefault(namespace, {})

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """
        Run a block atomically.

        The full state store is snapshotted on entry and restored if the block
        raises. Nested transactions keep their own snapshot, so an inner
        failure that the caller handles only unwinds the inner call.
        """
        snapshot = copy.deepcopy(self.state)
        self._depth += 1
        try:
            yield
        except BaseException:
            self.state.clear()
            self.state.update(snapshot)
            logger.debug(f"Transaction reverted at depth {self._depth}")
            raise
        finally:
            self._depth -= 1

    # ------------------------------------------------------------------
    # Native asset
    # ------------------------------------------------------------------

    def native_balance(self, address: bytes) -> int:
        return self.storage(address, NATIVE_NAMESPACE).get("balance", 0)

    def fund(self, address: bytes, amount: int) -> None:
        """Credit native balance out of thin air (genesis / test faucet)"""
        balances = self.storage(address, NATIVE_NAMESPACE)
        balances["balance"] = balances.get("balance", 0) + amount

    def transfer_native(self, sender: bytes, recipient: bytes, amount: int) -> None:
        """
        Move native value between accounts.

        When the recipient is a deployed contract with an ``on_native_received``
        hook, the hook runs after the balances are updated.
        """
        if amount < 0:
            raise ValueError("Native transfer amount must be non-negative")
        if amount == 0:
            return

        sender_balance = self.native_balance(sender)
        if sender_balance < amount:
            raise InsufficientBalance(
                f"Native balance {sender_balance} of {sender.hex()} is below {amount}"
            )
        self.storage(sender, NATIVE_NAMESPACE)["balance"] = sender_balance - amount
        self.fund(recipient, amount)

        receiver = self.contracts.get(recipient)
        hook = getattr(receiver, "on_native_received", None)
        if hook is not None:
            hook(CallContext(sender=sender, value=amount))
