"""Fixed-rate swap quote orchestration.

Quote flow:
1. Check the session may create quotes and orders
2. Resolve refund and settle addresses (concurrently)
3. Map wallet tickers to exchange methods
4. Fetch the pair rate and enforce deposit limits
5. Request a fixed quote for the deposit amount
6. Create an order from the quote
7. Build the spend paying the order's deposit address
8. Hand it to the source wallet and return the quote result

The first failure aborts the pipeline. Nothing is retried; calling again
fetches a fresh rate and quote.
"""

import asyncio
import logging
from decimal import ROUND_DOWN, Decimal
from typing import Optional

from shiftswap.config import ExchangeConfig
from shiftswap.errors import (
    SIDESHIFT_INFO,
    GeoRestrictedError,
    SwapError,
    SwapProviderInfo,
    TransportError,
    UnsupportedPairError,
)
from shiftswap.exchange.client import SideShiftClient
from shiftswap.exchange.codes import CurrencyCodeMapper
from shiftswap.exchange.models import FixedQuote, Order, RateInfo
from shiftswap.swap.base import QuoteDirection, SwapQuoteResult, SwapRequest
from shiftswap.swap.limits import LimitBounds, LimitValidator
from shiftswap.swap.spend import SwapData, build_spend_instruction
from shiftswap.wallet.base import SwapWallet

logger = logging.getLogger(__name__)

# Deposit amounts are sent to the exchange with at most 8 fractional digits
DEPOSIT_AMOUNT_QUANTUM = Decimal("0.00000001")


def deposit_amount_for_target(target_amount: str, rate: Decimal) -> str:
    """Deposit amount needed to receive ``target_amount`` at ``rate``.

    Truncated to 8 fractional digits so the deposit never overshoots.
    """
    amount = (Decimal(target_amount) / Decimal(rate)).quantize(
        DEPOSIT_AMOUNT_QUANTUM, rounding=ROUND_DOWN
    )
    return format(amount, "f")


class SwapQuoteOrchestrator:
    """Runs the permission -> rate -> quote -> order -> spend pipeline."""

    def __init__(
        self,
        client: SideShiftClient,
        config: ExchangeConfig,
        mapper: Optional[CurrencyCodeMapper] = None,
        validator: Optional[LimitValidator] = None,
        provider: SwapProviderInfo = SIDESHIFT_INFO,
    ):
        self.client = client
        self.config = config
        self.mapper = mapper or CurrencyCodeMapper(
            overrides=config.code_overrides,
            unsupported=config.unsupported_codes,
        )
        self.validator = validator or LimitValidator(provider)
        self.provider = provider

    async def fetch_swap_quote(self, request: SwapRequest) -> SwapQuoteResult:
        """Get a binding quote and a ready-to-sign deposit transaction.

        Args:
            request: Assets, wallets, amount, and which side it quotes

        Returns:
            SwapQuoteResult with the transaction and order metadata

        Raises:
            GeoRestrictedError, UnsupportedPairError, BelowLimitError,
            AboveLimitError, TransportError, UnclassifiedProviderError
        """
        logger.info(
            f"Fetching {self.provider.display_name} quote: {request.native_amount} "
            f"({request.quote_for.value}) {request.pair}"
        )
        try:
            return await self._run(request)
        except SwapError as e:
            logger.warning(f"{self.provider.display_name} quote failed for {request.pair}: {e}")
            raise

    async def _run(self, request: SwapRequest) -> SwapQuoteResult:
        if not (self.mapper.is_supported(request.from_asset) and self.mapper.is_supported(request.to_asset)):
            raise UnsupportedPairError(request.from_asset, request.to_asset, self.provider)

        await self._check_permissions()

        refund_address, settle_address = await self._resolve_addresses(request)

        deposit_method = self.mapper.map_code(request.from_asset)
        settle_method = self.mapper.map_code(request.to_asset)

        rate_reply = await self.client.get_rate(deposit_method, settle_method)
        rate = self.validator.require_rate(rate_reply, request)

        deposit_amount = await self._deposit_amount(request, rate)
        bounds = await self.validator.validate(rate, request, deposit_amount)

        quote = await self._create_quote(
            request, deposit_method, settle_method, deposit_amount, bounds
        )
        order = await self._create_order(request, quote, settle_address, bounds)

        return await self._execute(request, order, refund_address, settle_address)

    async def _check_permissions(self) -> None:
        permissions = await self.client.get_permissions()
        if not permissions.allowed:
            logger.info(
                f"{self.provider.display_name} permissions denied "
                f"(createOrder={permissions.create_order}, createQuote={permissions.create_quote})"
            )
            raise GeoRestrictedError(self.provider)

    async def _resolve_addresses(self, request: SwapRequest) -> tuple[str, str]:
        """Look up the refund and settle addresses concurrently.

        If either lookup fails the other one is cancelled before the error
        propagates.
        """
        refund_task = asyncio.create_task(
            self._get_address(request.from_wallet, request.from_asset)
        )
        settle_task = asyncio.create_task(
            self._get_address(request.to_wallet, request.to_asset)
        )
        tasks = (refund_task, settle_task)
        try:
            refund_address, settle_address = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return refund_address, settle_address

    async def _get_address(self, wallet: SwapWallet, currency_code: str) -> str:
        """Get the wallet's receive address, legacy format where allowed."""
        info = await wallet.get_receive_address(currency_code)
        if info.legacy_address and currency_code.upper() not in self.config.legacy_address_exclusions:
            return info.legacy_address
        return info.public_address

    async def _deposit_amount(self, request: SwapRequest, rate: RateInfo) -> str:
        """Deposit-side amount, in denomination units, for the request."""
        if request.quote_for is QuoteDirection.FROM:
            return await request.from_wallet.native_to_denomination(
                request.native_amount, request.from_asset
            )

        target_amount = await request.to_wallet.native_to_denomination(
            request.native_amount, request.to_asset
        )
        return deposit_amount_for_target(target_amount, rate.rate)

    async def _create_quote(
        self,
        request: SwapRequest,
        deposit_method: str,
        settle_method: str,
        deposit_amount: str,
        bounds: LimitBounds,
    ) -> FixedQuote:
        reply = await self.client.create_fixed_quote(deposit_method, settle_method, deposit_amount)
        self.validator.raise_for_reply(reply, bounds, request)

        quote = reply.value
        logger.info(
            f"Fixed quote {quote.id}: {quote.deposit_amount} {request.from_asset} -> "
            f"{quote.settle_amount} {request.to_asset} (rate: {quote.rate})"
        )
        return quote

    async def _create_order(
        self,
        request: SwapRequest,
        quote: FixedQuote,
        settle_address: str,
        bounds: LimitBounds,
    ) -> Order:
        reply = await self.client.create_order(
            quote_id=quote.id,
            affiliate_id=self.config.affiliate_id,
            settle_address=settle_address,
            session_secret=self.config.session_secret,
        )
        self.validator.raise_for_reply(reply, bounds, request)

        order = reply.value
        logger.info(
            f"Order {order.provider_order_id} created: deposit {order.deposit_amount} "
            f"{request.from_asset} to {order.deposit_address.address}"
        )
        return order

    async def _execute(
        self,
        request: SwapRequest,
        order: Order,
        refund_address: str,
        settle_address: str,
    ) -> SwapQuoteResult:
        wallet = request.from_wallet
        source_native = await wallet.denomination_to_native(order.deposit_amount, request.from_asset)
        destination_native = await wallet.denomination_to_native(order.settle_amount, request.to_asset)

        if order.expiration_ms is None:
            raise TransportError(None, f"order {order.provider_order_id} has no expiration")

        instruction = build_spend_instruction(
            currency_code=request.from_asset,
            deposit_address=order.deposit_address.address,
            native_amount=source_native,
            swap_data=SwapData(
                order_id=order.provider_order_id,
                payout_address=settle_address,
                payout_currency_code=request.to_asset,
                payout_native_amount=destination_native,
                payout_wallet_id=request.to_wallet.id,
                refund_address=refund_address,
                plugin=self.provider,
            ),
        )
        transaction = await wallet.make_spend(instruction)

        return SwapQuoteResult(
            request=request,
            source_amount_native=source_native,
            destination_amount_native=destination_native,
            transaction=transaction,
            destination_address=settle_address,
            provider_id=self.provider.plugin_id,
            expiration_time=order.expiration_ms,
            provider_order_id=order.provider_order_id,
        )
