"""Wire contracts for the SideShift.ai quote/order API.

Responses are parsed into pydantic models at the HTTP boundary, and any error
payload is classified into a ``ProviderReply`` variant so downstream code never
inspects raw message text.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Annotated, Any, Generic, Optional, TypeVar, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
)

T = TypeVar("T")

# JSON-RPC "invalid params", returned for unknown deposit/settle methods
INVALID_PARAMS_CODE = -32602

_datetime_adapter = TypeAdapter(datetime)


def to_epoch_ms(value: Union[str, int, float, datetime, None]) -> Optional[int]:
    """Normalize an expiration/creation timestamp to epoch milliseconds.

    The provider sends either numeric epoch strings ("1599201578372") or ISO
    timestamps ("2020-09-04T07:40:52.6752"). Naive timestamps are UTC.
    """
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())

    parsed = value if isinstance(value, datetime) else _datetime_adapter.validate_python(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)


def to_decimal_string(value: Any) -> str:
    """Validate a finite, non-negative amount and return it as a plain string."""
    if value is None or isinstance(value, bool):
        raise ValueError("amount is required")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"not a decimal amount: {value!r}")
    if not amount.is_finite() or amount < 0:
        raise ValueError(f"amount must be finite and non-negative: {value!r}")
    return format(amount, "f")


DecimalString = Annotated[str, BeforeValidator(to_decimal_string)]


class ReplyKind(str, Enum):
    """Classification of a provider response."""

    SUCCESS = "success"
    PAIR_UNSUPPORTED = "pair_unsupported"
    AMOUNT_TOO_LOW = "amount_too_low"
    AMOUNT_TOO_HIGH = "amount_too_high"
    UNKNOWN_ERROR = "unknown_error"


@dataclass(frozen=True)
class ProviderReply(Generic[T]):
    """Either a parsed value or a classified provider error."""

    kind: ReplyKind
    value: Optional[T] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.kind is ReplyKind.SUCCESS

    @classmethod
    def success(cls, value: T) -> "ProviderReply[T]":
        return cls(kind=ReplyKind.SUCCESS, value=value)


class ProviderErrorPayload(BaseModel):
    """The ``error`` object the provider embeds in failed responses."""

    model_config = ConfigDict(extra="allow")

    code: Optional[int] = None
    message: str = ""

    def classify(self) -> ReplyKind:
        text = self.message.lower()
        if "too low" in text:
            return ReplyKind.AMOUNT_TOO_LOW
        if "too high" in text:
            return ReplyKind.AMOUNT_TOO_HIGH
        if self.code == INVALID_PARAMS_CODE or "invalid currency" in text:
            return ReplyKind.PAIR_UNSUPPORTED
        return ReplyKind.UNKNOWN_ERROR


def parse_error_payload(data: Any) -> Optional[ProviderErrorPayload]:
    """Extract the error payload from a response body, if present."""
    if not isinstance(data, dict) or data.get("error") is None:
        return None
    error = data["error"]
    if isinstance(error, str):
        return ProviderErrorPayload(message=error)
    if isinstance(error, dict):
        return ProviderErrorPayload.model_validate(error)
    return ProviderErrorPayload(message=str(error))


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Permissions(_WireModel):
    """Whether this session may create quotes and orders."""

    create_order: bool = Field(alias="createOrder")
    create_quote: bool = Field(alias="createQuote")

    @property
    def allowed(self) -> bool:
        return self.create_order and self.create_quote


class RateInfo(_WireModel):
    """Current rate and deposit bounds for a pair (never cached)."""

    rate: Decimal = Field(gt=0, allow_inf_nan=False)
    min: DecimalString
    max: DecimalString


class FixedQuote(_WireModel):
    """A provider-side price lock with a short validity window."""

    id: str
    deposit_method: Optional[str] = Field(default=None, alias="depositMethod")
    settle_method: Optional[str] = Field(default=None, alias="settleMethod")
    deposit_amount: DecimalString = Field(alias="depositAmount")
    settle_amount: DecimalString = Field(alias="settleAmount")
    rate: Decimal = Field(gt=0, allow_inf_nan=False)
    created_at: Optional[int] = Field(default=None, alias="createdAt")
    expires_at: Optional[int] = Field(default=None, alias="expiresAt")

    @field_validator("created_at", "expires_at", mode="before")
    @classmethod
    def _epoch_ms(cls, value: Any) -> Optional[int]:
        return to_epoch_ms(value)


class AddressField(_WireModel):
    address: str


class Order(_WireModel):
    """An exchange order created from a fixed quote."""

    id: str
    order_id: Optional[str] = Field(default=None, alias="orderId")
    quote_id: Optional[str] = Field(default=None, alias="quoteId")
    deposit_address: AddressField = Field(alias="depositAddress")
    settle_address: AddressField = Field(alias="settleAddress")
    deposit_method: Optional[str] = Field(default=None, alias="depositMethod")
    settle_method: Optional[str] = Field(default=None, alias="settleMethod")
    deposit_amount: DecimalString = Field(alias="depositAmount")
    settle_amount: DecimalString = Field(alias="settleAmount")
    expires_at: Optional[int] = Field(default=None, alias="expiresAt")
    expires_at_iso: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("expiresAtISO", "expiresAtIso"),
    )

    @field_validator("expires_at", "expires_at_iso", mode="before")
    @classmethod
    def _epoch_ms(cls, value: Any) -> Optional[int]:
        return to_epoch_ms(value)

    @property
    def provider_order_id(self) -> str:
        return self.order_id or self.id

    @property
    def expiration_ms(self) -> Optional[int]:
        """Expiration in epoch ms, whichever representation was sent."""
        return self.expires_at if self.expires_at is not None else self.expires_at_iso
