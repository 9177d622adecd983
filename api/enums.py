"""
Shared Enums

Enums used across API schemas and endpoint logic.
"""

from enum import Enum

from fastapi import status

from mint_contracts.errors import ErrorCategory


class RegistryKind(str, Enum):
    """Kinds of registry the API can deploy"""

    FUNGIBLE = "fungible"
    UNIQUE = "unique"
    SEMI_FUNGIBLE = "semi_fungible"


ERROR_STATUS = {
    ErrorCategory.AUTHORIZATION: status.HTTP_403_FORBIDDEN,
    ErrorCategory.TEMPORAL: status.HTTP_400_BAD_REQUEST,
    ErrorCategory.REPLAY: status.HTTP_409_CONFLICT,
    ErrorCategory.QUANTITY: status.HTTP_400_BAD_REQUEST,
    ErrorCategory.PRICING: status.HTTP_400_BAD_REQUEST,
    ErrorCategory.PAYMENT: status.HTTP_402_PAYMENT_REQUIRED,
    ErrorCategory.DECODE: status.HTTP_400_BAD_REQUEST,
    ErrorCategory.MODULE: status.HTTP_404_NOT_FOUND,
    ErrorCategory.CONFIGURATION: status.HTTP_400_BAD_REQUEST,
}
