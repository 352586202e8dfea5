"""Pytest configuration and fixtures."""

import json
import os
from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "true"

from shiftswap.config import ExchangeConfig, Settings
from shiftswap.swap.factory import create_orchestrator
from shiftswap.swap.orchestrator import SwapQuoteOrchestrator
from shiftswap.wallet.dry_run import DryRunWallet

BASE_URL = "https://sideshift.test/api/v1"
AFFILIATE_ID = "FyacsJHluwd"
SESSION_SECRET = "siujdhfuijsdhgiuyw897813i4"

PERMISSIONS_RESPONSE = {"createOrder": True, "createQuote": True}

RATE_RESPONSE = {"rate": "188.317", "min": "0.001", "max": "1.5"}

QUOTE_REQUEST_BODY = {
    "depositMethod": "btc",
    "settleMethod": "ltc",
    "depositAmount": "0.0015",
}

QUOTE_REQUEST_RESPONSE = {
    "createdAt": "2020-09-04T07:25:52.6752",
    "depositAmount": "0.0015",
    "depositMethod": "btc",
    "expiresAt": "2020-09-04T07:40:52.6752",
    "id": "12dc0782-f19f-4abb-8b2b-87aa7d6fd77b",
    "rate": "188.317",
    "settleAmount": "0.2894532784",
    "settleMethod": "ltc",
}

ORDER_REQUEST_RESPONSE = {
    "createdAt": "1599201558372",
    "createdAtISO": "2020-09-04T07:27:52.6752",
    "expiresAt": "1599201578372",
    "expiresAtIso": "2020-09-04T07:27:52.6752",
    "depositAddress": {"address": "1F1tAaz5x1HUXrCNLbtMDqcw6o5GNn4xqX"},
    "depositMethod": "btc",
    "id": "a67a90b58a6782f7834f",
    "orderId": "a67a90b58a6782f7834f",
    "settleAddress": {
        "address": "fe2ed5a8a652488b33321a5222c80b6ad981ff2433cc86dc5c319bad1b0d0c70"
    },
    "settleMethod": "ltc",
    "depositMax": "0.0015",
    "depositMin": "0.0015",
    "quoteId": "12dc0782-f19f-4abb-8b2b-87aa7d6fd77b",
    "settleAmount": "0.23647895",
    "depositAmount": "0.0015",
    "deposits": [],
}


class FakeSideShift:
    """In-process stand-in for the SideShift.ai API.

    Responses are keyed by (method, path relative to the base URL); a value
    may be a JSON payload, a raw string body, or an exception to raise.
    """

    def __init__(self):
        self.responses = {
            ("GET", "permissions"): (200, PERMISSIONS_RESPONSE),
            ("GET", "pairs/btc/ltc"): (200, RATE_RESPONSE),
            ("POST", "quotes"): (200, QUOTE_REQUEST_RESPONSE),
            ("POST", "orders"): (200, ORDER_REQUEST_RESPONSE),
        }
        self.calls: list[tuple[str, str, object]] = []

    def respond(self, method: str, path: str, payload, status: int = 200) -> None:
        self.responses[(method, path)] = (status, payload)

    @property
    def paths(self) -> list[str]:
        return [path for _, path, _ in self.calls]

    def body_for(self, path: str):
        return next(body for _, p, body in self.calls if p == path)

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.split("/api/v1/", 1)[1]
        body = json.loads(request.content) if request.content else None
        self.calls.append((request.method, path, body))

        if (request.method, path) not in self.responses:
            return httpx.Response(404, json={"error": {"message": "Not found"}})

        status, payload = self.responses[(request.method, path)]
        if isinstance(payload, Exception):
            raise payload
        if isinstance(payload, str):
            return httpx.Response(status, text=payload)
        return httpx.Response(status, json=payload)


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at the fake exchange."""
    return Settings(
        sideshift_api_url=BASE_URL,
        sideshift_affiliate_id=AFFILIATE_ID,
        sideshift_session_secret=SESSION_SECRET,
        currency_code_overrides={"USDT": "usdtErc20"},
        unsupported_currency_codes=["XMR"],
        legacy_address_exclusions=["DGB"],
    )


@pytest.fixture
def exchange_config(settings: Settings) -> ExchangeConfig:
    return ExchangeConfig.from_settings(settings)


@pytest.fixture
def sideshift() -> FakeSideShift:
    return FakeSideShift()


@pytest_asyncio.fixture
async def http_client(sideshift: FakeSideShift) -> AsyncGenerator[httpx.AsyncClient, None]:
    """httpx client routed to the fake exchange."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(sideshift.handler)) as client:
        yield client


@pytest.fixture
def orchestrator(settings: Settings, http_client: httpx.AsyncClient) -> SwapQuoteOrchestrator:
    return create_orchestrator(settings=settings, http_client=http_client)


@pytest.fixture
def source_wallet() -> DryRunWallet:
    return DryRunWallet("source-wallet")


@pytest.fixture
def destination_wallet() -> DryRunWallet:
    return DryRunWallet("destination-wallet")
