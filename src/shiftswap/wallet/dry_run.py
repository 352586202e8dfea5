"""Dry-run wallet for simulated swaps.

Derives deterministic fake addresses and builds fake transactions, but does
exact decimal unit conversion so quotes against the real exchange are
meaningful.
"""

import hashlib
import logging
from decimal import ROUND_DOWN, Decimal
from typing import Optional

from shiftswap.wallet.base import ReceiveAddress, SwapWallet, Transaction

logger = logging.getLogger(__name__)

# Smallest-unit decimals per ticker
ASSET_DECIMALS: dict[str, int] = {
    "BTC": 8,
    "LTC": 8,
    "BCH": 8,
    "DASH": 8,
    "DOGE": 8,
    "DGB": 8,
    "ZEC": 8,
    "XMR": 12,
    "ETH": 18,
    "BNB": 18,
    "AVAX": 18,
    "MATIC": 18,
    "USDT": 6,
    "USDC": 6,
    "SOL": 9,
    "TRX": 6,
    "XRP": 6,
}

# Chains with a legacy (base58 / pre-cashaddr) address format
LEGACY_ADDRESS_ASSETS = {"BCH", "DGB", "LTC"}


class DryRunWallet(SwapWallet):
    """Simulated wallet (PoC / CLI use).

    Never signs or broadcasts anything. ``make_spend`` returns a transaction
    handle with a deterministic fake txid.
    """

    def __init__(
        self,
        wallet_id: str = "dry-run",
        decimals: Optional[dict[str, int]] = None,
        default_decimals: int = 8,
    ):
        self._id = wallet_id
        self.decimals = {**ASSET_DECIMALS, **(decimals or {})}
        self.default_decimals = default_decimals
        self.spends: list = []

    @property
    def id(self) -> str:
        return self._id

    def _decimals_for(self, currency_code: str) -> int:
        return self.decimals.get(currency_code.upper(), self.default_decimals)

    def _fake_address(self, currency_code: str, prefix: str) -> str:
        digest = hashlib.sha256(f"{self._id}:{currency_code.upper()}:{prefix}".encode()).hexdigest()
        return f"{prefix}{digest[:38]}"

    async def get_receive_address(self, currency_code: str) -> ReceiveAddress:
        legacy = None
        if currency_code.upper() in LEGACY_ADDRESS_ASSETS:
            legacy = self._fake_address(currency_code, "legacy1")
        return ReceiveAddress(
            public_address=self._fake_address(currency_code, "dry1"),
            legacy_address=legacy,
        )

    async def native_to_denomination(self, native_amount: int, currency_code: str) -> str:
        scale = Decimal(10) ** self._decimals_for(currency_code)
        value = Decimal(int(native_amount)) / scale
        return format(value.normalize(), "f")

    async def denomination_to_native(self, amount: str, currency_code: str) -> int:
        scale = Decimal(10) ** self._decimals_for(currency_code)
        return int((Decimal(amount) * scale).to_integral_value(rounding=ROUND_DOWN))

    async def make_spend(self, instruction) -> Transaction:
        target = instruction.spend_targets[0]
        seed = f"{self._id}:{target.public_address}:{target.native_amount}:{target.unique_identifier}"
        txid = hashlib.sha256(seed.encode()).hexdigest()
        self.spends.append(instruction)

        logger.info(
            f"[DRY RUN] Spend {target.native_amount} {instruction.currency_code} "
            f"-> {target.public_address} (fee: {instruction.network_fee_option})"
        )
        return Transaction(
            txid=txid,
            currency_code=instruction.currency_code,
            native_amount=target.native_amount,
            metadata={"simulated": True},
        )
