"""Swap error taxonomy.

Every failure of the quote pipeline surfaces as one of these types. Callers
can catch ``SwapError`` for all of them or a specific subclass to prompt the
user (e.g. a corrected amount for limit errors).
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SwapProviderInfo:
    """Identity of the exchange a quote or error came from."""

    plugin_id: str
    display_name: str
    support_email: str


SIDESHIFT_INFO = SwapProviderInfo(
    plugin_id="sideshift",
    display_name="SideShift.ai",
    support_email="help@sideshift.ai",
)


class SwapError(Exception):
    """Base error for the swap quote pipeline."""

    def __init__(self, message: str, provider: SwapProviderInfo = SIDESHIFT_INFO):
        self.provider = provider
        super().__init__(message)


class GeoRestrictedError(SwapError):
    """Provider refuses service for this session or region."""

    def __init__(self, provider: SwapProviderInfo = SIDESHIFT_INFO):
        super().__init__(
            f"{provider.display_name} is not available in your region", provider
        )


class UnsupportedPairError(SwapError):
    """The asset pair cannot be traded."""

    def __init__(
        self,
        from_asset: str,
        to_asset: str,
        provider: SwapProviderInfo = SIDESHIFT_INFO,
    ):
        self.from_asset = from_asset
        self.to_asset = to_asset
        super().__init__(
            f"{provider.display_name} does not support {from_asset} -> {to_asset}",
            provider,
        )


class SwapLimitError(SwapError):
    """Requested amount is outside the tradable bounds."""

    direction = ""

    def __init__(self, native_amount: int, provider: SwapProviderInfo = SIDESHIFT_INFO):
        self.native_amount = native_amount
        super().__init__(
            f"Amount is {self.direction} the {provider.display_name} limit of "
            f"{native_amount} (native units)",
            provider,
        )


class BelowLimitError(SwapLimitError):
    """Amount is smaller than the provider minimum."""

    direction = "below"

    @property
    def native_min(self) -> int:
        return self.native_amount


class AboveLimitError(SwapLimitError):
    """Amount is larger than the provider maximum."""

    direction = "above"

    @property
    def native_max(self) -> int:
        return self.native_amount


class TransportError(SwapError):
    """Malformed or non-success HTTP response from the provider."""

    def __init__(
        self,
        status_code: Optional[int],
        message: str = "",
        provider: SwapProviderInfo = SIDESHIFT_INFO,
    ):
        self.status_code = status_code
        detail = f": {message}" if message else ""
        super().__init__(
            f"{provider.display_name} returned error code {status_code}{detail}",
            provider,
        )


class UnclassifiedProviderError(SwapError):
    """Provider error payload that matches none of the known tags."""

    def __init__(self, message: str, provider: SwapProviderInfo = SIDESHIFT_INFO):
        self.raw_message = message
        super().__init__(f"{provider.display_name} error: {message}", provider)
