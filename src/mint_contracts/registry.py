"""
Modular Registry

Base class for token registries that delegate behaviour to installed modules.

Two kinds of bindings are kept in the registry's "modules" partition:

- callbacks: hooks the registry itself invokes (e.g. before a mint). The
  registry declares which callbacks it supports and whether each is REQUIRED.
- fallbacks: administrative entries callers reach through
  ``dispatch_administrative``, each guarded by capability bits.

Each selector is bound to exactly one module at a time. Replacing a module
means uninstalling it and installing the new one.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from mint_contracts.capabilities import CAPABILITIES_NAMESPACE, Capability, CapabilityTable
from mint_contracts.errors import (
    CallbackAlreadyInstalled,
    CallbackNotInstalled,
    CallbackNotSupported,
    FallbackAlreadyInstalled,
    FallbackNotInstalled,
    InvalidModule,
    ModuleAlreadyInstalled,
    ModuleInterfaceNotCompatible,
    ModuleNotInstalled,
)
from mint_contracts.ledger import CallContext, Chain
from mint_contracts.module import CallbackMode, Module, ModuleContext, SupportedCallback
from mint_contracts.types import ExtensionRecord


logger = logging.getLogger(__name__)

MODULES_NAMESPACE = "modules"


class ModularRegistry:
    """Registry core: capabilities, module table and dispatch"""

    SUPPORTED_INTERFACES: Tuple[str, ...] = ()

    address: bytes = b""
    chain: Optional[Chain] = None

    def __init__(self, name: str, owner: bytes):
        self.name = name
        self.owner_at_creation = owner

    def on_deploy(self) -> None:
        """Seed state right after ``Chain.deploy`` assigned an address"""
        self.capabilities.initialize_owner(self.owner_at_creation)

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------

    @property
    def capabilities(self) -> CapabilityTable:
        return CapabilityTable(self.chain.storage(self.address, CAPABILITIES_NAMESPACE))

    def has_capability(self, principal: bytes, bits: int) -> bool:
        return self.capabilities.has_capability(principal, bits)

    def grant_capability(self, ctx: CallContext, principal: bytes, bits: int) -> None:
        with self.chain.transaction():
            self.capabilities.grant(ctx.sender, principal, bits)

    def revoke_capability(self, ctx: CallContext, principal: bytes, bits: int) -> None:
        with self.chain.transaction():
            self.capabilities.revoke(ctx.sender, principal, bits)

    def renounce_capability(self, ctx: CallContext, bits: int) -> None:
        with self.chain.transaction():
            self.capabilities.renounce(ctx.sender, bits)

    # ------------------------------------------------------------------
    # Module table
    # ------------------------------------------------------------------

    def supported_callbacks(self) -> List[SupportedCallback]:
        """Callbacks this registry invokes. Overridden by concrete registries."""
        return []

    @property
    def _table(self) -> Dict[str, Any]:
        table = self.chain.storage(self.address, MODULES_NAMESPACE)
        table.setdefault("records", {})
        table.setdefault("callbacks", {})
        table.setdefault("fallbacks", {})
        return table

    def get_installed_modules(self) -> List[ExtensionRecord]:
        return [
            ExtensionRecord(
                module=address,
                callback_functions=list(record["callbacks"]),
                fallback_functions=dict(record["fallbacks"]),
            )
            for address, record in self._table["records"].items()
        ]

    def install_module(self, ctx: CallContext, module_address: bytes, data: bytes = b"") -> None:
        """
        Install a deployed module and bind its selectors.

        Args:
            ctx: Caller context (needs OWNER or INSTALLER)
            module_address: Address of the deployed module
            data: Opaque bytes forwarded to the module's install callback

        Raises:
            Unauthorized: Caller may not install modules
            ModuleError subclasses: Binding conflicts or incompatibility
        """
        with self.chain.transaction():
            self.capabilities.require_any_capability(
                ctx.sender, Capability.OWNER | Capability.INSTALLER
            )
            module = self._resolve_module(module_address)
            table = self._table

            if module_address in table["records"]:
                raise ModuleAlreadyInstalled(f"Module {module_address.hex()} already installed")

            config = module.module_config()

            for interface in config.required_interfaces:
                if interface not in self.SUPPORTED_INTERFACES:
                    raise ModuleInterfaceNotCompatible(
                        f"{module.NAME} requires {interface}, {self.name} supports {self.SUPPORTED_INTERFACES}"
                    )

            supported = {callback.selector for callback in self.supported_callbacks()}
            for selector in config.callback_functions:
                if selector not in supported:
                    raise CallbackNotSupported(f"{self.name} does not support callback {selector}")
                if selector in table["callbacks"]:
                    raise CallbackAlreadyInstalled(f"Callback {selector} is already installed")
                self._require_handler(module, selector)

            for fallback in config.fallback_functions:
                if fallback.selector in table["fallbacks"]:
                    raise FallbackAlreadyInstalled(f"Function {fallback.selector} is already installed")
                self._require_handler(module, fallback.selector)

            for selector in config.callback_functions:
                table["callbacks"][selector] = module_address
            for fallback in config.fallback_functions:
                table["fallbacks"][fallback.selector] = {
                    "module": module_address,
                    "permission_bits": int(fallback.permission_bits),
                }
            table["records"][module_address] = {
                "callbacks": list(config.callback_functions),
                "fallbacks": {f.selector: int(f.permission_bits) for f in config.fallback_functions},
            }

            if config.register_installation_callback:
                module.on_install(self._module_context(module, ctx), data)

        logger.info(f"Installed {module.NAME} v{module.VERSION} on {self.name}")

    def uninstall_module(self, ctx: CallContext, module_address: bytes, data: bytes = b"") -> None:
        with self.chain.transaction():
            self.capabilities.require_any_capability(
                ctx.sender, Capability.OWNER | Capability.INSTALLER
            )
            table = self._table
            record = table["records"].pop(module_address, None)
            if record is None:
                raise ModuleNotInstalled(f"Module {module_address.hex()} is not installed")

            for selector in record["callbacks"]:
                table["callbacks"].pop(selector, None)
            for selector in record["fallbacks"]:
                table["fallbacks"].pop(selector, None)

            module = self._resolve_module(module_address)
            if module.module_config().register_installation_callback:
                module.on_uninstall(self._module_context(module, ctx), data)

        logger.info(f"Uninstalled {module.NAME} from {self.name}")

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, ctx: CallContext, selector: str, *args: Any) -> Any:
        """
        Invoke the module bound to a callback selector.

        Returns None without calling anything when an OPTIONAL callback has no
        module bound; a REQUIRED one raises CallbackNotInstalled.
        """
        module_address = self._table["callbacks"].get(selector)
        if module_address is None:
            if self._callback_mode(selector) == CallbackMode.OPTIONAL:
                return None
            raise CallbackNotInstalled(f"No module installed for callback {selector}")

        module = self._resolve_module(module_address)
        handler = getattr(module, selector)
        return handler(self._module_context(module, ctx), *args)

    def dispatch_administrative(self, ctx: CallContext, selector: str, *args: Any) -> Any:
        """
        Invoke an administrative entry of an installed module.

        The caller's capability is checked against the entry's permission bits
        before any module code runs. Writes are atomic.
        """
        binding = self._table["fallbacks"].get(selector)
        if binding is None:
            raise FallbackNotInstalled(f"No module installed for function {selector}")

        permission_bits = binding["permission_bits"]
        if permission_bits:
            self.capabilities.require_capability(ctx.sender, permission_bits)

        module = self._resolve_module(binding["module"])
        handler = getattr(module, selector)
        with self.chain.transaction():
            return handler(self._module_context(module, ctx), *args)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _accept_value(self, ctx: CallContext) -> None:
        """Credit the native value attached to a call to this registry"""
        if ctx.value:
            self.chain.transfer_native(ctx.sender, self.address, ctx.value)

    def _callback_mode(self, selector: str) -> CallbackMode:
        for callback in self.supported_callbacks():
            if callback.selector == selector:
                return callback.mode
        return CallbackMode.REQUIRED

    def _resolve_module(self, module_address: bytes) -> Module:
        module = self.chain.contracts.get(module_address)
        if not isinstance(module, Module):
            raise InvalidModule(f"No module deployed at {module_address.hex()}")
        return module

    @staticmethod
    def _require_handler(module: Module, selector: str) -> None:
        if not callable(getattr(module, selector, None)):
            raise InvalidModule(f"{module.NAME} declares {selector} but does not implement it")

    def _module_context(self, module: Module, ctx: CallContext) -> ModuleContext:
        return ModuleContext(registry=self, call=ctx, namespace=module.NAMESPACE)
