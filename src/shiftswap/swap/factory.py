"""Factory for wiring the quote orchestrator from settings."""

import logging
from typing import Optional

import httpx

from shiftswap.config import ExchangeConfig, Settings, get_settings
from shiftswap.exchange.client import SideShiftClient
from shiftswap.swap.orchestrator import SwapQuoteOrchestrator

logger = logging.getLogger(__name__)


def create_sideshift_client(
    config: ExchangeConfig,
    http_client: Optional[httpx.AsyncClient] = None,
) -> SideShiftClient:
    """Create the SideShift.ai client for a config."""
    return SideShiftClient(
        base_url=config.base_url,
        timeout=config.timeout,
        api_secret=config.api_secret,
        client=http_client,
    )


def create_orchestrator(
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> SwapQuoteOrchestrator:
    """Create a quote orchestrator.

    Args:
        settings: Settings to use (cached environment settings if omitted)
        http_client: Shared httpx client (one per request if omitted)
    """
    settings = settings or get_settings()
    config = ExchangeConfig.from_settings(settings)

    if not config.affiliate_id:
        logger.warning("SIDESHIFT_AFFILIATE_ID not set - orders will not be attributed")

    return SwapQuoteOrchestrator(
        client=create_sideshift_client(config, http_client),
        config=config,
    )
