"""Deposit limit enforcement.

Limits are checked twice: against the rate-pair bounds before any quote is
requested, and again when the quote or order endpoint answers with an
"amount too low/high" error. Both paths raise the same error kinds.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from shiftswap.errors import (
    SIDESHIFT_INFO,
    AboveLimitError,
    BelowLimitError,
    SwapProviderInfo,
    UnclassifiedProviderError,
    UnsupportedPairError,
)
from shiftswap.exchange.models import ProviderReply, RateInfo, ReplyKind
from shiftswap.swap.base import QuoteDirection, SwapRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LimitBounds:
    """Deposit bounds in the source asset's native units."""

    native_min: int
    native_max: int

    def check(self, native_amount: int, provider: SwapProviderInfo = SIDESHIFT_INFO) -> None:
        if native_amount < self.native_min:
            raise BelowLimitError(self.native_min, provider)
        if native_amount > self.native_max:
            raise AboveLimitError(self.native_max, provider)


class LimitValidator:
    """Validates a requested amount against exchange-reported bounds."""

    def __init__(self, provider: SwapProviderInfo = SIDESHIFT_INFO):
        self.provider = provider

    def require_rate(self, reply: ProviderReply[RateInfo], request: SwapRequest) -> RateInfo:
        """Unwrap a rate reply; any error means the pair is not tradable."""
        if not reply.ok:
            logger.info(f"Rate lookup failed for {request.pair}: {reply.message}")
            raise UnsupportedPairError(request.from_asset, request.to_asset, self.provider)
        return reply.value

    async def native_bounds(self, rate: RateInfo, request: SwapRequest) -> LimitBounds:
        """Convert the rate's decimal min/max with the source wallet."""
        wallet = request.from_wallet
        native_min = await wallet.denomination_to_native(rate.min, request.from_asset)
        native_max = await wallet.denomination_to_native(rate.max, request.from_asset)
        return LimitBounds(native_min=native_min, native_max=native_max)

    async def validate(
        self,
        rate: RateInfo,
        request: SwapRequest,
        deposit_amount: str,
    ) -> LimitBounds:
        """Check the requested amount against the pair's deposit bounds.

        Args:
            rate: Rate and bounds from a successful lookup
            request: Original swap request
            deposit_amount: Deposit-side amount in denomination units

        Returns:
            The native bounds, for classifying later quote/order errors

        Raises:
            BelowLimitError: Amount is below the native minimum
            AboveLimitError: Amount is above the native maximum
        """
        bounds = await self.native_bounds(rate, request)

        if request.quote_for is QuoteDirection.FROM:
            amount_native = request.native_amount
        else:
            amount_native = await request.from_wallet.denomination_to_native(
                deposit_amount, request.from_asset
            )

        logger.debug(
            f"Limit check {request.pair}: {amount_native} in "
            f"[{bounds.native_min}, {bounds.native_max}]"
        )
        bounds.check(amount_native, self.provider)
        return bounds

    def raise_for_reply(
        self,
        reply: ProviderReply,
        bounds: Optional[LimitBounds],
        request: SwapRequest,
    ) -> None:
        """Translate a failed quote/order reply into a swap error."""
        if reply.ok:
            return
        if reply.kind is ReplyKind.PAIR_UNSUPPORTED:
            raise UnsupportedPairError(request.from_asset, request.to_asset, self.provider)
        if bounds is not None:
            if reply.kind is ReplyKind.AMOUNT_TOO_LOW:
                raise BelowLimitError(bounds.native_min, self.provider)
            if reply.kind is ReplyKind.AMOUNT_TOO_HIGH:
                raise AboveLimitError(bounds.native_max, self.provider)
        raise UnclassifiedProviderError(reply.message or reply.kind.value, self.provider)
