"""Application configuration using pydantic-settings.

Settings are read once from the environment (or ``.env``) and frozen into an
``ExchangeConfig`` that is handed to the swap orchestrator.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug logging")

    # ======================
    # SideShift.ai
    # ======================
    sideshift_api_url: str = Field(
        default="https://sideshift.ai/api/v1", description="SideShift.ai API base URL"
    )
    sideshift_affiliate_id: str = Field(
        default="", description="Affiliate id attached to every order"
    )
    sideshift_session_secret: Optional[str] = Field(
        default=None, description="Optional session secret sent with orders"
    )
    sideshift_api_secret: Optional[str] = Field(
        default=None, description="Optional API secret sent as x-sideshift-secret"
    )
    http_timeout: float = Field(default=30.0, description="HTTP timeout in seconds")

    # ======================
    # Asset codes
    # ======================
    currency_code_overrides: dict[str, str] = Field(
        default_factory=lambda: {"USDT": "usdtErc20"},
        description="Wallet ticker -> exchange method, used verbatim",
    )
    unsupported_currency_codes: list[str] = Field(
        default_factory=list, description="Tickers the exchange never trades"
    )
    legacy_address_exclusions: list[str] = Field(
        default_factory=lambda: ["DGB"],
        description="Tickers whose legacy receive address must not be used",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "sideshift": {
                "api_url": self.sideshift_api_url,
                "affiliate_id": self.sideshift_affiliate_id or "(not set)",
                "session_secret": "***" if self.sideshift_session_secret else "(not set)",
                "api_secret": "***" if self.sideshift_api_secret else "(not set)",
                "timeout": self.http_timeout,
            },
            "assets": {
                "overrides": dict(self.currency_code_overrides),
                "unsupported": list(self.unsupported_currency_codes),
                "legacy_exclusions": list(self.legacy_address_exclusions),
            },
        }


@dataclass(frozen=True)
class ExchangeConfig:
    """Immutable per-deployment configuration for the swap pipeline."""

    base_url: str
    affiliate_id: str
    session_secret: Optional[str] = None
    api_secret: Optional[str] = None
    timeout: float = 30.0
    code_overrides: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    unsupported_codes: frozenset[str] = frozenset()
    legacy_address_exclusions: frozenset[str] = frozenset({"DGB"})

    def __post_init__(self):
        # Plain dicts/lists passed in by callers are frozen here
        overrides = {k.upper(): v for k, v in self.code_overrides.items()}
        object.__setattr__(self, "code_overrides", MappingProxyType(overrides))
        object.__setattr__(
            self, "unsupported_codes", frozenset(c.upper() for c in self.unsupported_codes)
        )
        object.__setattr__(
            self,
            "legacy_address_exclusions",
            frozenset(c.upper() for c in self.legacy_address_exclusions),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ExchangeConfig":
        """Build the frozen config from loaded settings."""
        return cls(
            base_url=settings.sideshift_api_url,
            affiliate_id=settings.sideshift_affiliate_id,
            session_secret=settings.sideshift_session_secret,
            api_secret=settings.sideshift_api_secret,
            timeout=settings.http_timeout,
            code_overrides=settings.currency_code_overrides,
            unsupported_codes=frozenset(settings.unsupported_currency_codes),
            legacy_address_exclusions=frozenset(settings.legacy_address_exclusions),
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
