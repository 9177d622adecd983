"""
Module Interface

A module is a separately deployed object whose handlers a registry runs on
its own behalf. Modules hold no state of their own: every handler receives a
ModuleContext that resolves the module's private partition inside the
calling registry's state, so one deployed module can serve many registries.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple

from mint_contracts.capabilities import CapabilityTable
from mint_contracts.ledger import CallContext, Chain


class CallbackMode(str, Enum):
    """Whether a registry call fails or proceeds when no module is bound"""

    REQUIRED = "required"
    OPTIONAL = "optional"


@dataclass(frozen=True)
class SupportedCallback:
    selector: str
    mode: CallbackMode = CallbackMode.REQUIRED


@dataclass(frozen=True)
class FallbackFunction:
    """Administrative entry exposed through the registry"""

    selector: str
    permission_bits: int = 0  # 0 = callable by anyone


@dataclass(frozen=True)
class ModuleConfig:
    """What a module binds when installed"""

    callback_functions: Tuple[str, ...] = ()
    fallback_functions: Tuple[FallbackFunction, ...] = ()
    required_interfaces: Tuple[str, ...] = ()
    register_installation_callback: bool = False


@dataclass
class ModuleContext:
    """Execution context of a module handler running for a registry"""

    registry: Any
    call: CallContext
    namespace: str

    @property
    def chain(self) -> Chain:
        return self.registry.chain

    @property
    def caller(self) -> bytes:
        return self.call.sender

    @property
    def now(self) -> int:
        return self.chain.now()

    @property
    def storage(self) -> Dict[str, Any]:
        return self.chain.storage(self.registry.address, self.namespace)

    @property
    def capabilities(self) -> CapabilityTable:
        return self.registry.capabilities


class Module:
    """
    Base class for installable modules.

    Subclasses declare NAME, VERSION and NAMESPACE and return their bindings
    from ``module_config``. Every selector named in the config must be a
    method on the module taking ``(ctx: ModuleContext, *args)``.
    """

    NAME: str = "Module"
    VERSION: str = "1"
    NAMESPACE: str = "module"

    address: bytes = b""
    chain: Any = None

    def module_config(self) -> ModuleConfig:
        return ModuleConfig()

    def on_install(self, ctx: ModuleContext, data: bytes) -> None:
        pass

    def on_uninstall(self, ctx: ModuleContext, data: bytes) -> None:
        pass
