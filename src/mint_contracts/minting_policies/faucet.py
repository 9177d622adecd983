"""
Faucet Policy

Free, unconditional minting of a fungible test currency. Anyone may mint any
amount; no payload and no value are expected.
"""

import logging

from mint_contracts.errors import IncorrectNativeValue
from mint_contracts.module import Module, ModuleConfig, ModuleContext
from mint_contracts.types import INTERFACE_FUNGIBLE, SELECTOR_BEFORE_MINT_FUNGIBLE


logger = logging.getLogger(__name__)


class FaucetPolicy(Module):
    NAME = "FaucetPolicy"
    VERSION = "1"
    NAMESPACE = "faucet"

    def module_config(self) -> ModuleConfig:
        return ModuleConfig(
            callback_functions=(SELECTOR_BEFORE_MINT_FUNGIBLE,),
            required_interfaces=(INTERFACE_FUNGIBLE,),
        )

    def before_mint_fungible(self, ctx: ModuleContext, to: bytes, amount: int, payload: bytes) -> None:
        if ctx.call.value:
            raise IncorrectNativeValue("Faucet mints are free")
        minted = ctx.storage.get("minted", 0) + amount
        ctx.storage["minted"] = minted
        logger.debug(f"Faucet mint of {amount} to {to.hex()} ({minted} total)")
