"""
Mint Contract Errors

Every failure of the dispatcher, the authorization logic and settlement is a
distinct exception class. Each class carries an ErrorCategory so callers
(and the HTTP layer) can group causes without string matching.

All of them abort the enclosing mint: the registry's transaction rolls back
every state change made during the call.
"""

from enum import Enum


class ErrorCategory(str, Enum):
    """Error classes of the mint engine"""

    AUTHORIZATION = "authorization"
    TEMPORAL = "temporal"
    REPLAY = "replay"
    QUANTITY = "quantity"
    PRICING = "pricing"
    PAYMENT = "payment"
    DECODE = "decode"
    MODULE = "module"
    CONFIGURATION = "configuration"


class MintContractError(Exception):
    """Base exception for the mint engine"""

    category: ErrorCategory = ErrorCategory.CONFIGURATION


# ============================================================================
# Module / dispatch errors
# ============================================================================


class ModuleError(MintContractError):
    """Extension install, uninstall or dispatch failed"""

    category = ErrorCategory.MODULE


class InvalidModule(ModuleError):
    """Module declares a selector it does not implement"""

    pass


class ModuleAlreadyInstalled(ModuleError):
    """Module is already installed on this registry"""

    pass


class ModuleNotInstalled(ModuleError):
    """Module was never installed on this registry"""

    pass


class ModuleInterfaceNotCompatible(ModuleError):
    """Registry does not support an interface the module requires"""

    pass


class CallbackNotSupported(ModuleError):
    """Registry does not expose the callback the module wants to bind"""

    pass


class CallbackAlreadyInstalled(ModuleError):
    """Callback selector is already bound to another module"""

    pass


class CallbackNotInstalled(ModuleError):
    """Required callback has no module bound"""

    pass


class FallbackAlreadyInstalled(ModuleError):
    """Administrative selector is already bound to another module"""

    pass


class FallbackNotInstalled(ModuleError):
    """No module handles the administrative selector"""

    pass


# ============================================================================
# Authorization errors
# ============================================================================


class AuthorizationError(MintContractError):
    """Caller or signer is not allowed to perform the operation"""

    category = ErrorCategory.AUTHORIZATION


class Unauthorized(AuthorizationError):
    """Caller lacks the required capability"""

    pass


class UnauthorizedSigner(AuthorizationError):
    """Recovered signer does not hold the minting capability"""

    pass


class InvalidSignature(UnauthorizedSigner):
    """Signature witness does not verify against the request hash"""

    pass


class NotInAllowlist(AuthorizationError):
    """Allowlist proof does not reach the condition's root"""

    pass


class RequestMismatch(AuthorizationError):
    """Signed request does not describe the mint being executed"""

    pass


# ============================================================================
# Temporal errors
# ============================================================================


class TemporalError(MintContractError):
    """Condition or request used outside its time window"""

    category = ErrorCategory.TEMPORAL


class ConditionNotStarted(TemporalError):
    pass


class ConditionEnded(TemporalError):
    pass


class RequestNotYetValid(TemporalError):
    pass


class RequestExpired(TemporalError):
    pass


# ============================================================================
# Replay errors
# ============================================================================


class RequestAlreadyUsed(MintContractError):
    """Signed request UID was already consumed"""

    category = ErrorCategory.REPLAY


# ============================================================================
# Quantity / supply errors
# ============================================================================


class QuantityError(MintContractError):
    category = ErrorCategory.QUANTITY


class InvalidQuantity(QuantityError):
    """Quantity is zero or otherwise invalid for the asset kind"""

    pass


class ExceedsAvailableSupply(QuantityError):
    pass


class ExceedsWalletLimit(QuantityError):
    pass


class SupplyBelowConsumed(QuantityError):
    """Condition replace would under-supply already consumed demand"""

    pass


# ============================================================================
# Pricing errors
# ============================================================================


class PricingError(MintContractError):
    category = ErrorCategory.PRICING


class PriceOrCurrencyMismatch(PricingError):
    """Declared or signed price/currency differs from the stored condition"""

    pass


class IncorrectNativeValue(PricingError):
    """Attached native value does not match what the mint costs"""

    pass


# ============================================================================
# Payment errors
# ============================================================================


class PaymentError(MintContractError):
    category = ErrorCategory.PAYMENT


class InsufficientBalance(PaymentError):
    pass


class InsufficientAllowance(PaymentError):
    pass


# ============================================================================
# Decode errors
# ============================================================================


class PayloadDecodeError(MintContractError):
    """Opaque mint payload is malformed"""

    category = ErrorCategory.DECODE


# ============================================================================
# Configuration errors
# ============================================================================


class ConfigurationError(MintContractError):
    category = ErrorCategory.CONFIGURATION


class InvalidCondition(ConfigurationError):
    pass


class InvalidFeeBasisPoints(ConfigurationError):
    pass


class SaleRecipientNotSet(ConfigurationError):
    """Priced mint attempted before a primary recipient was configured"""

    pass


class UnknownCurrency(ConfigurationError):
    """Currency id does not resolve to a deployed fungible registry"""

    pass
