"""Pricing Schemas — request/response models for the calculator endpoints.

Invariants:
    - Base and listing prices are within [0, PRICE_MAX] at the boundary; discounts
      are only capped at PRICE_MAX (core clamps them instead of rejecting)
    - Listing prices accept grouped free text ("65,000"); blank text means absent
    - Every response value comes with a display string ("-" when unknown)

Design Decisions:
    - Patch model relies on exclude_unset: an explicit null clears a field,
      an omitted field is left alone
    - Display strings built here, not in core: formatting is presentation
"""

from dataclasses import asdict
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from outlet_calc.core.domain_types import DiscountMode, Platform, PRICE_MAX
from outlet_calc.core.history_ledger import HistoryRecord
from outlet_calc.core.number_format import (
    format_krw, format_percent, format_input_text, parse_input_text,
)
from outlet_calc.core.pricing import PricingInput, PricingResult, PlatformSettlement


def _parse_price_text(v: object) -> object:
    if isinstance(v, str):
        return parse_input_text(v)
    return v


class PricingInputPatch(BaseModel):
    """Partial calculator input — only the fields sent are changed."""
    model_config = ConfigDict(extra="forbid")

    base_price: int | None = Field(None, ge=0, le=PRICE_MAX)
    discount_mode: DiscountMode | None = None
    discount_amount: int | None = Field(None, le=PRICE_MAX)
    discount_percent: int | None = None
    extra_percent: int | None = None
    kream_price: int | None = Field(None, ge=0, le=PRICE_MAX)
    poizon_price: int | None = Field(None, ge=0, le=PRICE_MAX)

    @field_validator("base_price", "kream_price", "poizon_price", mode="before")
    @classmethod
    def parse_grouped_text(cls, v: object) -> object:
        return _parse_price_text(v)

    def changes(self) -> dict:
        data = self.model_dump(exclude_unset=True)
        if data.get("discount_mode", DiscountMode.AMOUNT) is None:
            data.pop("discount_mode")
        return data


class PricingInputBody(PricingInputPatch):
    """Full calculator input for the stateless quote endpoint."""
    discount_mode: DiscountMode = DiscountMode.AMOUNT

    def to_domain(self) -> PricingInput:
        return PricingInput(**self.model_dump())

    @classmethod
    def from_domain(cls, data: PricingInput) -> "PricingInputBody":
        return cls.model_validate(asdict(data))


class PlatformSettlementOut(BaseModel):
    platform: Platform
    price: float | None
    net: float | None
    fee: float | None
    margin: float | None
    margin_percent: float | None
    is_loss: bool | None
    display: dict[str, str]

    @classmethod
    def from_domain(cls, s: PlatformSettlement) -> "PlatformSettlementOut":
        return cls(
            platform=s.platform,
            price=s.price,
            net=s.net,
            fee=s.fee,
            margin=s.margin,
            margin_percent=s.margin_percent,
            is_loss=s.is_loss,
            display={
                "price": format_krw(s.price),
                "net": format_krw(s.net),
                "fee": format_krw(s.fee),
                "margin": format_krw(s.margin),
                "margin_percent": format_percent(s.margin_percent),
            },
        )


class PricingResultOut(BaseModel):
    first_discounted: float | None
    final: float | None
    tax: float | None
    after_tax: float | None
    kream: PlatformSettlementOut
    poizon: PlatformSettlementOut
    display: dict[str, str]

    @classmethod
    def from_domain(cls, r: PricingResult) -> "PricingResultOut":
        return cls(
            first_discounted=r.first_discounted,
            final=r.final,
            tax=r.tax,
            after_tax=r.after_tax,
            kream=PlatformSettlementOut.from_domain(r.kream),
            poizon=PlatformSettlementOut.from_domain(r.poizon),
            display={
                "first_discounted": format_krw(r.first_discounted),
                "final": format_krw(r.final),
                "tax": format_krw(r.tax),
                "after_tax": format_krw(r.after_tax),
            },
        )


class QuoteResponse(BaseModel):
    input: PricingInputBody
    result: PricingResultOut


# --- Free-text numeric input ---------------------------------------------------

class FormatInputRequest(BaseModel):
    text: str = Field("", max_length=64)


class FormatInputResponse(BaseModel):
    formatted: str
    value: int | None

    @classmethod
    def from_text(cls, text: str) -> "FormatInputResponse":
        formatted = format_input_text(text)
        return cls(formatted=formatted, value=parse_input_text(formatted))


# --- History --------------------------------------------------------------------

class HistorySaveRequest(BaseModel):
    """Memo is checked for blankness in core, so an empty one yields EMPTY_LABEL."""
    memo: str | None = Field(None, max_length=500)


def _first_discount_display(data: PricingInput) -> str:
    if data.discount_mode == DiscountMode.AMOUNT:
        return format_krw(data.discount_amount)
    if data.discount_percent is None:
        return "-"
    return f"{data.discount_percent}%"


class HistoryRecordOut(BaseModel):
    id: UUID
    memo: str | None
    created_at: datetime | None
    input: PricingInputBody
    result: PricingResultOut
    first_discount_display: str

    @classmethod
    def from_domain(cls, record: HistoryRecord) -> "HistoryRecordOut":
        return cls(
            id=record.id,
            memo=record.memo,
            created_at=record.created_at,
            input=PricingInputBody.from_domain(record.input),
            result=PricingResultOut.from_domain(record.result),
            first_discount_display=_first_discount_display(record.input),
        )
