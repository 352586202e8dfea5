"""Swap request and quote result records."""

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from shiftswap.wallet.base import SwapWallet, Transaction


class QuoteDirection(str, Enum):
    """Which side of the swap ``native_amount`` refers to."""

    FROM = "from"  # Amount the user deposits
    TO = "to"  # Amount the user receives


@dataclass(frozen=True)
class SwapRequest:
    """A user's request to exchange one asset for another."""

    from_asset: str
    to_asset: str
    from_wallet: SwapWallet
    to_wallet: SwapWallet
    native_amount: int
    quote_for: QuoteDirection = QuoteDirection.FROM

    def __post_init__(self):
        if self.native_amount <= 0:
            raise ValueError(f"native_amount must be positive, got {self.native_amount}")
        object.__setattr__(self, "quote_for", QuoteDirection(self.quote_for))

    @property
    def pair(self) -> str:
        return f"{self.from_asset}->{self.to_asset}"


@dataclass(frozen=True)
class SwapQuoteResult:
    """A binding swap quote with a ready-to-sign transaction."""

    request: SwapRequest
    source_amount_native: int
    destination_amount_native: int
    transaction: Transaction
    destination_address: str
    provider_id: str
    expiration_time: int  # epoch ms
    provider_order_id: str
    is_estimate: bool = False

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.expiration_time / 1000, tz=timezone.utc)

    @property
    def seconds_until_expiry(self) -> float:
        """Get seconds until quote expires (negative if expired)."""
        return self.expiration_time / 1000 - time.time()

    @property
    def is_expired(self) -> bool:
        return self.seconds_until_expiry <= 0

    def to_dict(self) -> dict:
        """Convert to dictionary for display or logging."""
        return {
            "provider": self.provider_id,
            "from_asset": self.request.from_asset,
            "to_asset": self.request.to_asset,
            "source_amount_native": str(self.source_amount_native),
            "destination_amount_native": str(self.destination_amount_native),
            "destination_address": self.destination_address,
            "provider_order_id": self.provider_order_id,
            "txid": self.transaction.txid,
            "expiration_time": self.expiration_time,
            "is_estimate": self.is_estimate,
        }
