"""Wallet capability interface.

The swap pipeline never touches keys. It only asks a wallet for receive
addresses, unit conversions, and to turn a spend instruction into a
transaction the caller can sign and broadcast.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from shiftswap.swap.spend import SpendInstruction


@dataclass(frozen=True)
class ReceiveAddress:
    """A wallet receive address for one asset."""

    public_address: str
    legacy_address: Optional[str] = None  # Pre-segwit / cashaddr-style chains


@dataclass
class Transaction:
    """Handle for an unsigned transaction produced by ``make_spend``."""

    txid: str
    currency_code: str
    native_amount: int
    network_fee: int = 0
    raw: Optional[Any] = None
    metadata: dict = field(default_factory=dict)


class SwapWallet(ABC):
    """Abstract wallet used as source or destination of a swap."""

    @property
    @abstractmethod
    def id(self) -> str:
        """Stable wallet identifier."""
        pass

    @abstractmethod
    async def get_receive_address(self, currency_code: str) -> ReceiveAddress:
        """Get a receive address for an asset held by this wallet."""
        pass

    @abstractmethod
    async def native_to_denomination(self, native_amount: int, currency_code: str) -> str:
        """Convert smallest-unit integer to a human-readable decimal string."""
        pass

    @abstractmethod
    async def denomination_to_native(self, amount: str, currency_code: str) -> int:
        """Convert a human-readable decimal string to smallest units."""
        pass

    @abstractmethod
    async def make_spend(self, instruction: "SpendInstruction") -> Transaction:
        """Build an unsigned transaction for a spend instruction."""
        pass
