"""Fixed-rate swap quote pipeline."""

from shiftswap.swap.base import QuoteDirection, SwapQuoteResult, SwapRequest
from shiftswap.swap.factory import create_orchestrator, create_sideshift_client
from shiftswap.swap.limits import LimitBounds, LimitValidator
from shiftswap.swap.orchestrator import SwapQuoteOrchestrator, deposit_amount_for_target
from shiftswap.swap.spend import SpendInstruction, SpendTarget, SwapData, build_spend_instruction

__all__ = [
    # Records
    "QuoteDirection",
    "SwapRequest",
    "SwapQuoteResult",
    # Pipeline
    "SwapQuoteOrchestrator",
    "LimitBounds",
    "LimitValidator",
    "deposit_amount_for_target",
    # Spend
    "SpendInstruction",
    "SpendTarget",
    "SwapData",
    "build_spend_instruction",
    # Factory functions
    "create_orchestrator",
    "create_sideshift_client",
]
