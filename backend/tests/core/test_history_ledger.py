"""History Ledger — record construction, memo validation, whole-list replacement."""

from uuid import uuid4

import pytest

from outlet_calc.core.domain_types import DiscountMode
from outlet_calc.core.errors import EmptyLabelError, MissingBasePriceError
from outlet_calc.core.history_ledger import (
    build_history_record, normalize_for_record, validate_memo,
    prepend_record, remove_record, find_record,
)
from outlet_calc.core.pricing import PricingInput, compute_pricing


def _record(memo="AF1 07", **fields):
    data = PricingInput(**{"base_price": 100_000, **fields})
    return build_history_record(uuid4(), memo, data, compute_pricing(data))


@pytest.mark.parametrize("memo", ["", "   ", None, "\t\n"])
def test_blank_memo_rejected(memo):
    with pytest.raises(EmptyLabelError) as exc:
        validate_memo(memo)
    assert exc.value.http_status == 400
    assert exc.value.code == "EMPTY_LABEL"


def test_memo_is_trimmed():
    assert validate_memo("  Air Force 1  ") == "Air Force 1"


def test_missing_base_price_rejected():
    data = PricingInput()
    with pytest.raises(MissingBasePriceError):
        build_history_record(uuid4(), "memo", data, compute_pricing(data))


def test_empty_memo_checked_before_base_price():
    data = PricingInput()
    with pytest.raises(EmptyLabelError):
        build_history_record(uuid4(), " ", data, compute_pricing(data))


def test_amount_mode_record_keeps_clamped_amount_only():
    normalized = normalize_for_record(PricingInput(
        base_price=100_000, discount_mode=DiscountMode.AMOUNT,
        discount_amount=250_000, discount_percent=30, extra_percent=120,
    ))
    assert normalized.discount_amount == 100_000
    assert normalized.discount_percent is None
    assert normalized.extra_percent == 100


def test_percent_mode_record_keeps_clamped_percent_only():
    normalized = normalize_for_record(PricingInput(
        base_price=100_000, discount_mode=DiscountMode.PERCENT,
        discount_amount=20_000, discount_percent=-5,
    ))
    assert normalized.discount_amount is None
    assert normalized.discount_percent == 0
    assert normalized.extra_percent == 0


def test_record_result_matches_normalized_input():
    record = _record(discount_amount=20_000, extra_percent=10, kream_price=65_000)
    assert record.result == compute_pricing(record.input)
    assert record.created_at is None


def test_prepend_puts_newest_first_and_returns_new_tuple():
    first, second = _record("first"), _record("second")
    history = prepend_record((), first)
    updated = prepend_record(history, second)
    assert [r.memo for r in updated] == ["second", "first"]
    assert history == (first,)


def test_prepend_same_id_does_not_duplicate():
    record = _record()
    history = prepend_record(prepend_record((), record), record)
    assert len(history) == 1


def test_remove_filters_by_id():
    a, b = _record("a"), _record("b")
    history = (b, a)
    assert remove_record(history, a.id) == (b,)
    assert remove_record(history, uuid4()) == history


def test_find_record():
    a = _record()
    assert find_record((a,), a.id) is a
    assert find_record((a,), uuid4()) is None
