"""SideShift.ai exchange API: client, wire models, and ticker mapping."""

from shiftswap.exchange.client import SideShiftClient
from shiftswap.exchange.codes import CurrencyCodeMapper
from shiftswap.exchange.models import (
    FixedQuote,
    Order,
    Permissions,
    ProviderReply,
    RateInfo,
    ReplyKind,
)

__all__ = [
    "SideShiftClient",
    "CurrencyCodeMapper",
    "FixedQuote",
    "Order",
    "Permissions",
    "ProviderReply",
    "RateInfo",
    "ReplyKind",
]
