"""History Row — mapping between HistoryRecord and the `outlet_history` row shape.

Invariants:
    - record_to_row produces a JSON-safe dict (str id, str enum, no dataclasses)
    - Nullable columns carry None, never 0, for absent values
    - Fees are not stored: record_from_row rebuilds them as price - net
    - created_at is never written; the server assigns it

Design Decisions:
    - Pure mapping shared by every store adapter (Supabase rows and ORM rows)
    - Stored nets are trusted over recomputation: a row reflects the formulas at save time
"""

from datetime import datetime
from typing import Any, Mapping
from uuid import UUID

from outlet_calc.core.domain_types import DiscountMode, Platform
from outlet_calc.core.history_ledger import HistoryRecord
from outlet_calc.core.pricing import (
    PricingInput, PricingResult,
    apply_first_discount, after_tax, settle_from_net,
)

ROW_COLUMNS: tuple[str, ...] = (
    "id", "memo", "base_price", "discount_mode",
    "base_discount_amount", "base_discount_percent", "extra",
    "final", "refund10",
    "kream_price", "kream_net", "poizon_price", "poizon_net",
)


def record_to_row(record: HistoryRecord) -> dict:
    """Serialize a record for insertion. Pure, no IO."""
    data, result = record.input, record.result
    return {
        "id": str(record.id),
        "memo": record.memo or None,
        "base_price": data.base_price,
        "discount_mode": data.discount_mode.value,
        "base_discount_amount": data.discount_amount,
        "base_discount_percent": data.discount_percent,
        "extra": data.extra_percent or 0,
        "final": result.final,
        "refund10": result.tax,
        "kream_price": data.kream_price,
        "kream_net": result.kream.net,
        "poizon_price": data.poizon_price,
        "poizon_net": result.poizon.net,
    }


def _parse_created_at(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _int_or_none(value: Any) -> int | None:
    return None if value is None else int(value)


def record_from_row(row: Mapping[str, Any]) -> HistoryRecord:
    """Rebuild a record from a stored row. Pure, no IO."""
    data = PricingInput(
        base_price=_int_or_none(row.get("base_price")),
        discount_mode=DiscountMode(row.get("discount_mode") or DiscountMode.AMOUNT),
        discount_amount=_int_or_none(row.get("base_discount_amount")),
        discount_percent=_int_or_none(row.get("base_discount_percent")),
        extra_percent=_int_or_none(row.get("extra")),
        kream_price=_int_or_none(row.get("kream_price")),
        poizon_price=_int_or_none(row.get("poizon_price")),
    )
    final = row.get("final")
    tax = row.get("refund10")
    result = PricingResult(
        first_discounted=apply_first_discount(
            data.base_price, data.discount_mode,
            data.discount_amount, data.discount_percent,
        ),
        final=final,
        tax=tax,
        after_tax=after_tax(final),
        kream=settle_from_net(
            Platform.KREAM, row.get("kream_price"), row.get("kream_net"), final, tax,
        ),
        poizon=settle_from_net(
            Platform.POIZON, row.get("poizon_price"), row.get("poizon_net"), final, tax,
        ),
    )
    raw_id = row["id"]
    return HistoryRecord(
        id=raw_id if isinstance(raw_id, UUID) else UUID(str(raw_id)),
        input=data,
        result=result,
        memo=row.get("memo") or None,
        created_at=_parse_created_at(row.get("created_at")),
    )
