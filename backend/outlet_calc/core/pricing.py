"""Pricing Engine — discount chain, tax split and marketplace settlement formulas.

Invariants:
    - Every function is pure, deterministic and total: nothing here raises
    - None in, None out: an unknown upstream value yields unknown downstream values
    - Out-of-range discounts are clamped, never rejected
    - Absent listing price is None, never 0
    - Kream margin = net - final; Poizon margin = net - final + tax (asymmetry kept as observed)

Design Decisions:
    - Frozen dataclasses for input/result: a result can never drift from its input
    - compute_pricing is the cold path; core/pricing_state.py memoizes the same stages
"""

from dataclasses import dataclass, field

from outlet_calc.core.domain_types import (
    DiscountMode, Platform,
    TAX_RATE, PERCENT_MAX,
    KREAM_NET_RATE, KREAM_FIXED_FEE,
    POIZON_LOW_TIER_MAX, POIZON_HIGH_TIER_MIN,
    POIZON_LOW_TIER_FEE, POIZON_HIGH_TIER_FEE, POIZON_MID_TIER_RATE,
)


@dataclass(frozen=True)
class PricingInput:
    """Raw calculator inputs. All amounts in KRW."""
    base_price: int | None = None
    discount_mode: DiscountMode = DiscountMode.AMOUNT
    discount_amount: int | None = None
    discount_percent: int | None = None
    extra_percent: int | None = None
    kream_price: int | None = None
    poizon_price: int | None = None


@dataclass(frozen=True)
class PlatformSettlement:
    """Projected payout for one marketplace listing."""
    platform: Platform
    price: float | None = None
    net: float | None = None
    fee: float | None = None
    margin: float | None = None
    margin_percent: float | None = None

    @property
    def is_loss(self) -> bool | None:
        if self.margin is None:
            return None
        return self.margin < 0


@dataclass(frozen=True)
class PricingResult:
    """Everything derived from one PricingInput."""
    first_discounted: float | None = None
    final: float | None = None
    tax: float | None = None
    after_tax: float | None = None
    kream: PlatformSettlement = field(
        default_factory=lambda: PlatformSettlement(Platform.KREAM),
    )
    poizon: PlatformSettlement = field(
        default_factory=lambda: PlatformSettlement(Platform.POIZON),
    )


def clamp(n: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, n))


# ─── Discount chain ─────────────────────────────────────────────

def apply_first_discount(
    base_price: float | None,
    mode: DiscountMode,
    amount: float | None = None,
    percent: float | None = None,
) -> float | None:
    """Step 2: fixed-amount or percent discount off the base price."""
    if base_price is None:
        return None
    if mode == DiscountMode.AMOUNT:
        amt = clamp(amount or 0, 0, base_price)
        return max(0, base_price - amt)
    p = clamp(percent or 0, 0, PERCENT_MAX)
    return base_price * (1 - p / 100)


def apply_extra_discount(
    price: float | None, extra_percent: float | None,
) -> float | None:
    """Extra percent off the first-discounted price (absent = 0%)."""
    if price is None:
        return None
    return price * (1 - clamp(extra_percent or 0, 0, PERCENT_MAX) / 100)


def compute_tax(final: float | None) -> float | None:
    if final is None:
        return None
    return final * TAX_RATE


def after_tax(final: float | None) -> float | None:
    """Supply value: final price minus tax, floored at 0."""
    tax = compute_tax(final)
    if tax is None:
        return None
    return max(0, final - tax)


# ─── Marketplace settlement ─────────────────────────────────────

def kream_net(price: float | None) -> float | None:
    if price is None:
        return None
    return price * KREAM_NET_RATE - KREAM_FIXED_FEE


def poizon_net(price: float | None) -> float | None:
    """Tiered: flat fee below/above the tier bounds, rate in between."""
    if price is None:
        return None
    if price <= POIZON_LOW_TIER_MAX:
        return price - POIZON_LOW_TIER_FEE
    if price >= POIZON_HIGH_TIER_MIN:
        return price - POIZON_HIGH_TIER_FEE
    return price * POIZON_MID_TIER_RATE


def platform_fee(price: float | None, net: float | None) -> float | None:
    if price is None or net is None:
        return None
    return price - net


def platform_margin(
    platform: Platform,
    net: float | None,
    final: float | None,
    tax: float | None,
) -> float | None:
    """Net minus what the seller paid; Poizon adds the tax back."""
    if net is None or final is None:
        return None
    if platform == Platform.POIZON:
        return net - final + (tax or 0)
    return net - final


def margin_percent(margin: float | None, final: float | None) -> float | None:
    if margin is None:
        return None
    return margin / (final or 1) * 100


_NET_FORMULAS = {
    Platform.KREAM: kream_net,
    Platform.POIZON: poizon_net,
}


def settle_from_net(
    platform: Platform,
    price: float | None,
    net: float | None,
    final: float | None,
    tax: float | None,
) -> PlatformSettlement:
    """Build a settlement around a known net (fresh or read back from storage)."""
    if price is None or net is None:
        return PlatformSettlement(platform, price=price)
    margin = platform_margin(platform, net, final, tax)
    return PlatformSettlement(
        platform,
        price=price,
        net=net,
        fee=platform_fee(price, net),
        margin=margin,
        margin_percent=margin_percent(margin, final),
    )


def settle(
    platform: Platform,
    price: float | None,
    final: float | None,
    tax: float | None,
) -> PlatformSettlement:
    return settle_from_net(
        platform, price, _NET_FORMULAS[platform](price), final, tax,
    )


# ─── Full pipeline ──────────────────────────────────────────────

def compute_pricing(data: PricingInput) -> PricingResult:
    """Cold, from-scratch computation of every derived value."""
    first = apply_first_discount(
        data.base_price, data.discount_mode,
        data.discount_amount, data.discount_percent,
    )
    final = apply_extra_discount(first, data.extra_percent)
    tax = compute_tax(final)
    return PricingResult(
        first_discounted=first,
        final=final,
        tax=tax,
        after_tax=after_tax(final),
        kream=settle(Platform.KREAM, data.kream_price, final, tax),
        poizon=settle(Platform.POIZON, data.poizon_price, final, tax),
    )
