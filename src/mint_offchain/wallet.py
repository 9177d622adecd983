"""
Mint Wallet

Key management for principals and MINTER signers. A wallet's address is its
payment key hash, the same 28 bytes a Cardano enterprise address carries.
"""

from typing import Optional, Union

import pycardano as pc

from mint_contracts.types import SignatureWitness


PAYMENT_PATH = "m/1852'/1815'/0'/0/{index}"


class MintWallet:
    """A single payment key, generated or derived from a BIP39 mnemonic"""

    def __init__(self, wallet_mnemonic: Optional[str] = None, network: str = "testnet", account_index: int = 0):
        """
        Initialize wallet

        Args:
            wallet_mnemonic: BIP39 mnemonic phrase; a fresh key is generated when omitted
            network: Network type ("testnet" or "mainnet")
            account_index: Address index on the payment derivation path
        """
        self.network = network
        self.cardano_network = pc.Network.TESTNET if network == "testnet" else pc.Network.MAINNET
        self.mnemonic = wallet_mnemonic

        self.signing_key: Union[pc.PaymentSigningKey, pc.ExtendedSigningKey]
        if wallet_mnemonic:
            hdwallet = pc.crypto.bip32.HDWallet.from_mnemonic(wallet_mnemonic)
            payment_key = hdwallet.derive_from_path(PAYMENT_PATH.format(index=account_index))
            self.signing_key = pc.ExtendedSigningKey.from_hdwallet(payment_key)
            self.verification_key = self.signing_key.to_verification_key().to_non_extended()
        else:
            self.signing_key = pc.PaymentSigningKey.generate()
            self.verification_key = pc.PaymentVerificationKey.from_signing_key(self.signing_key)

        self.enterprise_address = pc.Address(
            payment_part=self.verification_key.hash(), network=self.cardano_network
        )

    @classmethod
    def generate(cls, network: str = "testnet") -> "MintWallet":
        """Create a wallet from a freshly generated 24-word mnemonic"""
        return cls(pc.crypto.bip32.HDWallet.generate_mnemonic(strength=256), network)

    @property
    def address(self) -> bytes:
        """Principal id used by registries (payment key hash)"""
        return self.verification_key.hash().payload

    @property
    def vkey(self) -> bytes:
        return self.verification_key.payload

    def sign(self, message: bytes) -> SignatureWitness:
        return SignatureWitness(vkey=self.vkey, signature=self.signing_key.sign(message))

    def __repr__(self) -> str:
        return f"MintWallet({self.enterprise_address})"
