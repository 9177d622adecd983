"""
Settlement Engine

Moves the price of a mint to the sale recipients. Native value was already
credited to the registry when the mint call started; fungible-asset payments
are pulled from the payer with ``transfer_from``.

``settle`` only accepts a ConsumptionReceipt, which the orchestrators build
after supply, consumption and UID state were written. Payment therefore
always follows the state mutation it pays for.
"""

import logging

from mint_contracts.errors import IncorrectNativeValue, SaleRecipientNotSet, UnknownCurrency
from mint_contracts.ledger import CallContext, Chain
from mint_contracts.types import NATIVE_CURRENCY, ConsumptionReceipt, SaleConfig
from mint_contracts.util import split_fee


logger = logging.getLogger(__name__)


class SettlementEngine:
    """Pays out one mint on behalf of a registry"""

    def __init__(self, chain: Chain, registry_address: bytes):
        self.chain = chain
        self.registry_address = registry_address

    def settle(self, receipt: ConsumptionReceipt, value_attached: int, sale_config: SaleConfig) -> None:
        """
        Transfer the receipt's total price to the sale recipients.

        Args:
            receipt: Committed consumption to pay for
            value_attached: Native value sent with the mint call
            sale_config: Recipients and platform fee of the registry

        Raises:
            IncorrectNativeValue: Value attached when nothing native is owed,
                or native value different from the total
            SaleRecipientNotSet: Priced mint with no primary recipient
            InsufficientBalance / InsufficientAllowance: From the paying asset
        """
        total_price = receipt.total_price

        if total_price == 0:
            if value_attached != 0:
                raise IncorrectNativeValue(f"Mint is free but {value_attached} native value was attached")
            return

        if not sale_config.primary_recipient:
            raise SaleRecipientNotSet("Primary sale recipient is not configured")

        primary_share, platform_share = split_fee(total_price, sale_config.platform_fee_bps)

        if receipt.currency == NATIVE_CURRENCY:
            if value_attached != total_price:
                raise IncorrectNativeValue(f"Expected {total_price} native value, got {value_attached}")
            self._pay_native(sale_config.primary_recipient, primary_share)
            if platform_share:
                self._pay_native(sale_config.platform_fee_recipient, platform_share)
        else:
            if value_attached != 0:
                raise IncorrectNativeValue(
                    f"Price is in {receipt.currency.hex()} but {value_attached} native value was attached"
                )
            asset = self._resolve_asset(receipt.currency)
            spender = CallContext(sender=self.registry_address)
            asset.transfer_from(spender, receipt.payer, sale_config.primary_recipient, primary_share)
            if platform_share:
                asset.transfer_from(spender, receipt.payer, sale_config.platform_fee_recipient, platform_share)

        logger.info(
            f"Settled {total_price} of '{receipt.currency.hex()}': "
            f"primary={primary_share} platform={platform_share}"
        )

    def _pay_native(self, recipient: bytes, amount: int) -> None:
        self.chain.transfer_native(self.registry_address, recipient, amount)

    def _resolve_asset(self, currency: bytes):
        asset = self.chain.contracts.get(currency)
        if asset is None or not hasattr(asset, "transfer_from"):
            raise UnknownCurrency(f"Currency {currency.hex()} is not a deployed fungible asset")
        return asset
