"""Spend instruction assembly for a created exchange order."""

from dataclasses import dataclass, field
from typing import Optional

from shiftswap.errors import SIDESHIFT_INFO, SwapProviderInfo

# Source assets that need a faster fee to land inside the quote window
HIGH_FEE_ASSETS = frozenset({"BTC"})


@dataclass(frozen=True)
class SpendTarget:
    native_amount: int
    public_address: str
    unique_identifier: Optional[str] = None


@dataclass(frozen=True)
class SwapData:
    """Swap metadata attached to the outgoing transaction."""

    order_id: str
    payout_address: str
    payout_currency_code: str
    payout_native_amount: int
    payout_wallet_id: str
    refund_address: str
    plugin: SwapProviderInfo = SIDESHIFT_INFO
    is_estimate: bool = False


@dataclass(frozen=True)
class SpendInstruction:
    """Generic spend request handed to the source wallet."""

    currency_code: str
    spend_targets: list[SpendTarget] = field(default_factory=list)
    network_fee_option: str = "standard"
    swap_data: Optional[SwapData] = None


def network_fee_option(currency_code: str) -> str:
    """Pick the fee priority for the source asset."""
    return "high" if currency_code.upper() in HIGH_FEE_ASSETS else "standard"


def build_spend_instruction(
    currency_code: str,
    deposit_address: str,
    native_amount: int,
    swap_data: SwapData,
) -> SpendInstruction:
    """Build the spend paying an order's deposit address.

    Args:
        currency_code: Source asset ticker
        deposit_address: Provider-generated deposit address from the order
        native_amount: Deposit amount in smallest units
        swap_data: Order metadata (order id, payout, refund address)

    Returns:
        SpendInstruction for the source wallet's ``make_spend``
    """
    return SpendInstruction(
        currency_code=currency_code,
        spend_targets=[
            SpendTarget(
                native_amount=native_amount,
                public_address=deposit_address,
                unique_identifier=swap_data.order_id or None,
            )
        ],
        network_fee_option=network_fee_option(currency_code),
        swap_data=swap_data,
    )
