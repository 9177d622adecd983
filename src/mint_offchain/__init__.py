"""
Mint Off-chain Library

Tooling around the mint engine: configuration, wallets, allowlist trees,
payload builders and deployment management.
"""

from .allowlist import AllowlistTree
from .config import ChainSettings
from .contracts import ContractManager
from .requests import new_uid, open_claim_payload, sign_request
from .wallet import MintWallet


__all__ = [
    "AllowlistTree",
    "ChainSettings",
    "ContractManager",
    "MintWallet",
    "new_uid",
    "open_claim_payload",
    "sign_request",
]
