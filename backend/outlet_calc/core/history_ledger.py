"""History Ledger — pure construction and bookkeeping of saved calculations.

Invariants:
    - A HistoryRecord is frozen: there is no edit path, only delete
    - Saving requires a non-blank memo (and a base price); failures mutate nothing
    - The history list is only ever replaced wholesale (prepend / filter), newest first
    - Only the active discount mode's field is kept on a record, clamped

Design Decisions:
    - Record ids are passed in, not generated here: core stays deterministic
    - Tuples for history lists: a caller cannot mutate a list it was handed
"""

from dataclasses import dataclass, replace
from datetime import datetime
from uuid import UUID

from outlet_calc.core.domain_types import DiscountMode, PERCENT_MAX
from outlet_calc.core.errors import (
    EmptyLabelError, MissingBasePriceError, ErrorContext,
)
from outlet_calc.core.pricing import PricingInput, PricingResult, clamp


@dataclass(frozen=True)
class HistoryRecord:
    """One saved calculation: frozen input, its result, and a label."""
    id: UUID
    input: PricingInput
    result: PricingResult
    memo: str | None = None
    created_at: datetime | None = None


def validate_memo(memo: str | None, context: ErrorContext | None = None) -> str:
    """Return the trimmed memo or raise EmptyLabelError."""
    trimmed = (memo or "").strip()
    if not trimmed:
        raise EmptyLabelError(context)
    return trimmed


def normalize_for_record(data: PricingInput) -> PricingInput:
    """Freeze the inputs the way they were applied (clamped, inactive mode dropped)."""
    base = data.base_price or 0
    if data.discount_mode == DiscountMode.AMOUNT:
        amount = int(clamp(data.discount_amount or 0, 0, base))
        percent = None
    else:
        amount = None
        percent = int(clamp(data.discount_percent or 0, 0, PERCENT_MAX))
    return replace(
        data,
        discount_amount=amount,
        discount_percent=percent,
        extra_percent=int(clamp(data.extra_percent or 0, 0, PERCENT_MAX)),
    )


def build_history_record(
    record_id: UUID,
    memo: str | None,
    data: PricingInput,
    result: PricingResult,
    context: ErrorContext | None = None,
) -> HistoryRecord:
    """Validate and snapshot the current calculation. Raises before building anything."""
    label = validate_memo(memo, context)
    if data.base_price is None:
        raise MissingBasePriceError(context)
    return HistoryRecord(
        id=record_id,
        input=normalize_for_record(data),
        result=result,
        memo=label,
    )


def prepend_record(
    history: tuple[HistoryRecord, ...], record: HistoryRecord,
) -> tuple[HistoryRecord, ...]:
    return (record,) + tuple(h for h in history if h.id != record.id)


def remove_record(
    history: tuple[HistoryRecord, ...], record_id: UUID,
) -> tuple[HistoryRecord, ...]:
    return tuple(h for h in history if h.id != record_id)


def find_record(
    history: tuple[HistoryRecord, ...], record_id: UUID,
) -> HistoryRecord | None:
    return next((h for h in history if h.id == record_id), None)
