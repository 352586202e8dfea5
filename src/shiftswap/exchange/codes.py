"""Wallet ticker -> exchange method translation."""

import logging
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

logger = logging.getLogger(__name__)


class CurrencyCodeMapper:
    """Translates wallet tickers into the exchange's method identifiers.

    Tickers in the override table are returned verbatim (they are already in
    exchange casing). Everything else is lowercased. Tickers listed as
    unsupported never get an override entry.
    """

    def __init__(
        self,
        overrides: Optional[Mapping[str, str]] = None,
        unsupported: Iterable[str] = (),
    ):
        self._overrides = MappingProxyType(
            {ticker.upper(): method for ticker, method in (overrides or {}).items()}
        )
        self._unsupported = frozenset(ticker.upper() for ticker in unsupported)

        conflicting = self._unsupported & set(self._overrides)
        if conflicting:
            raise ValueError(
                f"Unsupported tickers cannot have overrides: {', '.join(sorted(conflicting))}"
            )

    @property
    def overrides(self) -> Mapping[str, str]:
        return self._overrides

    def map_code(self, ticker: str) -> str:
        """Get the exchange method for a wallet ticker."""
        method = self._overrides.get(ticker.upper())
        if method is not None:
            logger.debug(f"Mapped {ticker} -> {method} (override)")
            return method
        return ticker.lower()

    def is_supported(self, ticker: str) -> bool:
        """Check the ticker is not on the unsupported list."""
        return ticker.upper() not in self._unsupported
