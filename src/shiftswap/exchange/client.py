"""SideShift.ai HTTP client.

Fixed-rate flow: permissions -> pairs/{from}/{to} -> quotes -> orders.
"""

import json
import logging
from typing import Any, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from shiftswap.errors import TransportError
from shiftswap.exchange.models import (
    FixedQuote,
    Order,
    Permissions,
    ProviderReply,
    RateInfo,
    ReplyKind,
    parse_error_payload,
)

logger = logging.getLogger(__name__)

SIDESHIFT_API_V1 = "https://sideshift.ai/api/v1"

M = TypeVar("M", bound=BaseModel)

# Error kinds trusted when the provider answers with a 4xx status
_KNOWN_ERROR_KINDS = (
    ReplyKind.PAIR_UNSUPPORTED,
    ReplyKind.AMOUNT_TOO_LOW,
    ReplyKind.AMOUNT_TOO_HIGH,
)


class SideShiftClient:
    """Stateless request builder/executor for the SideShift.ai endpoints.

    Every call is a single HTTP exchange; nothing is retried. Pass ``client``
    to reuse a connection pool (or a mock transport in tests), otherwise a
    short-lived ``httpx.AsyncClient`` is opened per request.
    """

    def __init__(
        self,
        base_url: str = SIDESHIFT_API_V1,
        timeout: float = 30.0,
        api_secret: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.api_secret = api_secret
        self._client = client

    def _get_headers(self) -> dict:
        """Get API headers, with the secret when one is configured."""
        headers = {"Accept": "application/json"}
        if self.api_secret:
            headers["x-sideshift-secret"] = self.api_secret
        return headers

    async def _send(self, method: str, path: str, body: Optional[dict]) -> httpx.Response:
        url = f"{self.base_url}/{path}"
        headers = self._get_headers()
        content = None
        if body is not None:
            headers["Content-Type"] = "application/json"
            content = json.dumps(body)

        logger.debug(f"SideShift {method} {url} {content or ''}")
        try:
            if self._client is not None:
                return await self._client.request(method, url, headers=headers, content=content)
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                return await client.request(method, url, headers=headers, content=content)
        except httpx.HTTPError as e:
            logger.error(f"SideShift request failed: {method} {url}: {e}")
            raise TransportError(None, f"{type(e).__name__}: {e}") from e

    async def _call(
        self,
        method: str,
        path: str,
        model: Type[M],
        body: Optional[dict] = None,
        error_kind: Optional[ReplyKind] = None,
    ) -> ProviderReply[M]:
        """Execute a request and classify the response.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            model: Expected success shape
            body: JSON body for POST requests
            error_kind: Kind for error payloads on a 2xx response, and for
                4xx payloads that already classify as this kind

        Returns:
            ProviderReply with the parsed model or a classified error
        """
        response = await self._send(method, path, body)
        status = response.status_code

        try:
            data: Any = response.json()
        except ValueError:
            logger.warning(f"SideShift {path}: non-JSON body (status {status})")
            raise TransportError(status, "response is not JSON")

        error = parse_error_payload(data)
        if error is not None:
            kind = error.classify()
            if error_kind is not None and response.is_success:
                kind = error_kind
            if response.is_success or (response.is_client_error and kind in _KNOWN_ERROR_KINDS):
                logger.info(f"SideShift {path}: {kind.value} ({error.message})")
                return ProviderReply(kind=kind, message=error.message)

        if not response.is_success:
            logger.warning(f"SideShift {path}: HTTP {status}")
            raise TransportError(status, error.message if error else "")

        try:
            return ProviderReply.success(model.model_validate(data))
        except ValidationError as e:
            logger.warning(f"SideShift {path}: unexpected response shape: {e}")
            raise TransportError(status, "unexpected response shape") from e

    async def get_permissions(self) -> Permissions:
        """Check whether this session may create quotes and orders."""
        reply = await self._call("GET", "permissions", Permissions)
        if not reply.ok:
            raise TransportError(None, reply.message)
        return reply.value

    async def get_rate(self, from_method: str, to_method: str) -> ProviderReply[RateInfo]:
        """Get the current rate and deposit bounds for a pair.

        An error payload on a 2xx response means the pair cannot be traded.
        A 4xx is only pair-unsupported when its payload says so; anything
        else non-2xx is a transport failure.
        """
        return await self._call(
            "GET",
            f"pairs/{from_method}/{to_method}",
            RateInfo,
            error_kind=ReplyKind.PAIR_UNSUPPORTED,
        )

    async def create_fixed_quote(
        self,
        deposit_method: str,
        settle_method: str,
        deposit_amount: str,
    ) -> ProviderReply[FixedQuote]:
        """Request a fixed-rate quote for a deposit amount."""
        body = {
            "depositMethod": deposit_method,
            "settleMethod": settle_method,
            "depositAmount": deposit_amount,
        }
        return await self._call("POST", "quotes", FixedQuote, body=body)

    async def create_order(
        self,
        quote_id: str,
        affiliate_id: str,
        settle_address: str,
        session_secret: Optional[str] = None,
    ) -> ProviderReply[Order]:
        """Create a fixed order from a quote."""
        body = {
            "type": "fixed",
            "quoteId": quote_id,
            "affiliateId": affiliate_id,
            "settleAddress": settle_address,
        }
        if session_secret:
            body["sessionSecret"] = session_secret
        return await self._call("POST", "orders", Order, body=body)
