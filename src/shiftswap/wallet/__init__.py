"""Wallet capability interface used by the swap pipeline."""

from shiftswap.wallet.base import ReceiveAddress, SwapWallet, Transaction
from shiftswap.wallet.dry_run import DryRunWallet

__all__ = [
    "ReceiveAddress",
    "SwapWallet",
    "Transaction",
    "DryRunWallet",
]
