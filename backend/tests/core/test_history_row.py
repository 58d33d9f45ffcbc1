"""History Row — mapping to and from the `outlet_history` row shape."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from outlet_calc.core.domain_types import DiscountMode
from outlet_calc.core.history_ledger import build_history_record
from outlet_calc.core.history_row import ROW_COLUMNS, record_to_row, record_from_row
from outlet_calc.core.pricing import PricingInput, compute_pricing


def _saved(**fields):
    data = PricingInput(**fields)
    return build_history_record(uuid4(), "Dunk Low", data, compute_pricing(data))


def test_row_has_exactly_the_table_columns():
    row = record_to_row(_saved(base_price=100_000))
    assert tuple(row) == ROW_COLUMNS
    assert "created_at" not in row


def test_row_values_for_reference_scenario():
    record = _saved(
        base_price=100_000, discount_amount=20_000, extra_percent=10,
        kream_price=65_000,
    )
    row = record_to_row(record)
    assert row["id"] == str(record.id)
    assert row["discount_mode"] == "amount"
    assert row["base_discount_amount"] == 20_000
    assert row["base_discount_percent"] is None
    assert row["extra"] == 10
    assert row["final"] == pytest.approx(72_000)
    assert row["refund10"] == pytest.approx(7_200)
    assert row["kream_net"] == pytest.approx(56_640)
    assert row["poizon_price"] is None
    assert row["poizon_net"] is None


def test_row_from_supabase_json():
    rid = uuid4()
    record = record_from_row({
        "id": str(rid),
        "memo": "Samba OG",
        "base_price": 139_000,
        "discount_mode": "percent",
        "base_discount_amount": None,
        "base_discount_percent": 30,
        "extra": 0,
        "final": 97_300,
        "refund10": 9_730,
        "kream_price": None,
        "kream_net": None,
        "poizon_price": 150_000,
        "poizon_net": 135_000,
        "created_at": "2025-09-01T10:15:00.123456+00:00",
    })
    assert record.id == rid
    assert record.input.discount_mode == DiscountMode.PERCENT
    assert record.result.first_discounted == pytest.approx(97_300)
    assert record.result.after_tax == pytest.approx(87_570)
    assert record.result.kream.net is None
    assert record.result.poizon.fee == 15_000
    assert record.result.poizon.margin == pytest.approx(135_000 - 97_300 + 9_730)
    assert record.created_at == datetime(2025, 9, 1, 10, 15, 0, 123456, tzinfo=timezone.utc)


def test_roundtrip_keeps_input_and_settlements():
    record = _saved(
        base_price=189_000, discount_mode=DiscountMode.PERCENT,
        discount_percent=20, extra_percent=5,
        kream_price=170_000, poizon_price=480_000,
    )
    loaded = record_from_row(record_to_row(record))
    assert loaded.input == record.input
    assert loaded.memo == record.memo
    assert loaded.result.kream == record.result.kream
    assert loaded.result.poizon == record.result.poizon


def test_unknown_discount_mode_raises_value_error():
    row = record_to_row(_saved(base_price=1_000))
    row["discount_mode"] = "coupon"
    with pytest.raises(ValueError):
        record_from_row(row)
