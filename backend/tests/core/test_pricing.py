"""Pricing Engine — pure tests for the discount chain, tax split and settlements.

Tests cover:
    - First discount in amount and percent modes (clamping, absent values)
    - Extra discount and tax split
    - Kream / Poizon net and fee formulas, Poizon tier boundaries
    - Margin asymmetry and margin percent with a zero final price
    - Unknown propagation end-to-end
"""

import pytest

from outlet_calc.core.domain_types import DiscountMode, Platform
from outlet_calc.core.pricing import (
    PricingInput,
    apply_first_discount, apply_extra_discount, compute_tax, after_tax,
    kream_net, poizon_net, platform_fee, platform_margin, margin_percent,
    settle, compute_pricing,
)


# --- First discount -------------------------------------------------------------

@pytest.mark.parametrize("base,amount,expected", [
    (100_000, 20_000, 80_000),
    (100_000, 0, 100_000),
    (100_000, None, 100_000),
    (100_000, 150_000, 0),
    (100_000, -5_000, 100_000),
    (0, 10_000, 0),
])
def test_amount_mode_clamps_discount_to_base(base, amount, expected):
    assert apply_first_discount(base, DiscountMode.AMOUNT, amount, 99) == expected


@pytest.mark.parametrize("base,percent,expected", [
    (100_000, 30, 70_000),
    (100_000, 0, 100_000),
    (100_000, None, 100_000),
    (100_000, 100, 0),
    (100_000, 140, 0),
    (100_000, -10, 100_000),
])
def test_percent_mode_clamps_percent(base, percent, expected):
    result = apply_first_discount(base, DiscountMode.PERCENT, 99_999, percent)
    assert result == pytest.approx(expected)


def test_percent_mode_ignores_amount_field():
    assert apply_first_discount(
        50_000, DiscountMode.PERCENT, amount=10_000, percent=10,
    ) == pytest.approx(45_000)


def test_unknown_base_price_stays_unknown():
    assert apply_first_discount(None, DiscountMode.AMOUNT, 10_000, None) is None
    assert apply_first_discount(None, DiscountMode.PERCENT, None, 10) is None


# --- Extra discount & tax -------------------------------------------------------

def test_extra_discount_applies_percent():
    assert apply_extra_discount(80_000, 10) == pytest.approx(72_000)


def test_extra_discount_absent_is_zero_percent():
    assert apply_extra_discount(80_000, None) == 80_000


def test_extra_discount_is_clamped():
    assert apply_extra_discount(80_000, 250) == 0
    assert apply_extra_discount(80_000, -20) == 80_000


def test_extra_discount_of_unknown_is_unknown():
    assert apply_extra_discount(None, 10) is None


@pytest.mark.parametrize("final", [0, 1, 72_000, 123_456.7])
def test_tax_is_ten_percent_and_after_tax_is_remainder(final):
    assert compute_tax(final) == pytest.approx(final * 0.1)
    assert after_tax(final) == pytest.approx(max(0, final - final * 0.1))


def test_tax_of_unknown_is_unknown():
    assert compute_tax(None) is None
    assert after_tax(None) is None


# --- Platforms ------------------------------------------------------------------

def test_kream_scenario_65000():
    net = kream_net(65_000)
    assert net == pytest.approx(56_640)
    assert platform_fee(65_000, net) == pytest.approx(8_360)


@pytest.mark.parametrize("price", [0, 5_000, 65_000, 1_234_567])
def test_kream_net_plus_fee_is_price(price):
    net = kream_net(price)
    assert net + platform_fee(price, net) == pytest.approx(price)


def test_poizon_low_tier_scenario_66000():
    net = poizon_net(66_000)
    assert net == 51_000
    assert platform_fee(66_000, net) == 15_000


def test_poizon_tier_boundaries():
    assert poizon_net(150_000) == 135_000
    assert poizon_net(450_000) == 405_000
    assert poizon_net(300_000) == pytest.approx(270_000)


def test_poizon_just_above_low_tier_uses_rate():
    assert poizon_net(150_001) == pytest.approx(135_000.9)


def test_absent_listing_price_gives_no_net_or_fee():
    assert kream_net(None) is None
    assert poizon_net(None) is None
    assert platform_fee(None, None) is None


def test_zero_listing_price_is_a_real_price():
    assert kream_net(0) == -5_500
    assert poizon_net(0) == -15_000


# --- Margins --------------------------------------------------------------------

def test_kream_margin_ignores_tax():
    assert platform_margin(Platform.KREAM, 56_640, 72_000, 7_200) == pytest.approx(-15_360)


def test_poizon_margin_adds_tax_back():
    assert platform_margin(Platform.POIZON, 51_000, 72_000, 7_200) == pytest.approx(-13_800)


def test_margin_unknown_when_final_unknown():
    assert platform_margin(Platform.KREAM, 56_640, None, None) is None


def test_margin_percent_uses_one_when_final_is_zero():
    assert margin_percent(500, 0) == 50_000
    assert margin_percent(None, 0) is None


def test_settle_marks_loss():
    s = settle(Platform.KREAM, 65_000, 72_000, 7_200)
    assert s.is_loss is True
    assert s.margin_percent == pytest.approx(-15_360 / 72_000 * 100)


def test_settle_without_price_is_all_unknown():
    s = settle(Platform.POIZON, None, 72_000, 7_200)
    assert s.net is None and s.fee is None and s.margin is None
    assert s.is_loss is None


# --- Full pipeline --------------------------------------------------------------

def test_reference_scenario():
    result = compute_pricing(PricingInput(
        base_price=100_000,
        discount_mode=DiscountMode.AMOUNT,
        discount_amount=20_000,
        extra_percent=10,
        kream_price=65_000,
        poizon_price=66_000,
    ))
    assert result.first_discounted == 80_000
    assert result.final == pytest.approx(72_000)
    assert result.tax == pytest.approx(7_200)
    assert result.after_tax == pytest.approx(64_800)
    assert result.kream.net == pytest.approx(56_640)
    assert result.kream.fee == pytest.approx(8_360)
    assert result.poizon.net == 51_000
    assert result.poizon.fee == 15_000
    assert result.poizon.margin == pytest.approx(51_000 - 72_000 + 7_200)


def test_empty_input_is_unknown_everywhere():
    result = compute_pricing(PricingInput())
    assert result.first_discounted is None
    assert result.final is None
    assert result.tax is None
    assert result.after_tax is None
    assert result.kream.net is None
    assert result.poizon.margin is None


def test_listing_price_without_base_price_has_net_but_no_margin():
    result = compute_pricing(PricingInput(kream_price=65_000))
    assert result.kream.net == pytest.approx(56_640)
    assert result.kream.margin is None


def test_compute_pricing_is_deterministic():
    data = PricingInput(
        base_price=129_000, discount_mode=DiscountMode.PERCENT,
        discount_percent=30, extra_percent=5, poizon_price=200_000,
    )
    assert compute_pricing(data) == compute_pricing(data)
