"""Pricing State — derived-state recomputation over a single input snapshot.

Invariants:
    - state.result == compute_pricing(state.input) after every update (memo is an optimization only)
    - update() swaps the whole snapshot at once: no stage ever sees a half-applied change
    - A stage that raises leaves its memo, input and result untouched
    - Each stage is keyed on exactly the inputs it reads
    - No derived field is independently settable

Design Decisions:
    - One-slot memo per stage (last key / last value), the same reuse a UI memo
      hook gives: consecutive edits to unrelated fields skip the untouched stages
    - Recompute counters exposed for observability and tests
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Callable

from outlet_calc.core.domain_types import Platform
from outlet_calc.core.pricing import (
    PricingInput, PricingResult,
    apply_first_discount, apply_extra_discount, compute_tax, after_tax,
    kream_net, poizon_net, settle_from_net,
)

_INPUT_FIELDS = frozenset(f.name for f in fields(PricingInput))

_MISSING = object()


@dataclass
class _StageMemo:
    """Remembers the last (key, value) pair of one pure stage."""
    fn: Callable[..., Any]
    key: tuple = ()
    value: Any = _MISSING
    computations: int = 0

    def __call__(self, *key: Any) -> Any:
        if self.value is _MISSING or key != self.key:
            value = self.fn(*key)
            self.key, self.value = key, value
            self.computations += 1
        return self.value


@dataclass
class PricingState:
    """Current calculator input plus its memoized derived result."""

    input: PricingInput = field(default_factory=PricingInput)
    result: PricingResult = field(init=False)

    def __post_init__(self) -> None:
        self._first = _StageMemo(apply_first_discount)
        self._final = _StageMemo(apply_extra_discount)
        self._tax = _StageMemo(lambda final: (compute_tax(final), after_tax(final)))
        self._kream_net = _StageMemo(kream_net)
        self._poizon_net = _StageMemo(poizon_net)
        self.result = self._recompute(self.input)

    def update(self, **changes: Any) -> PricingResult:
        """Apply a batch of input changes atomically, then recompute."""
        unknown = set(changes) - _INPUT_FIELDS
        if unknown:
            raise ValueError(f"Unknown pricing input field(s): {sorted(unknown)}")
        snapshot = replace(self.input, **changes)
        result = self._recompute(snapshot)
        self.input, self.result = snapshot, result
        return self.result

    def reset(self) -> PricingResult:
        """Back to an empty calculator; memos stay warm."""
        self.input = PricingInput()
        self.result = self._recompute(self.input)
        return self.result

    @property
    def computations(self) -> dict[str, int]:
        return {
            "first_discount": self._first.computations,
            "final": self._final.computations,
            "tax": self._tax.computations,
            "kream": self._kream_net.computations,
            "poizon": self._poizon_net.computations,
        }

    def _recompute(self, snap: PricingInput) -> PricingResult:
        first = self._first(
            snap.base_price, snap.discount_mode,
            snap.discount_amount, snap.discount_percent,
        )
        final = self._final(first, snap.extra_percent)
        tax, supply = self._tax(final)
        return PricingResult(
            first_discounted=first,
            final=final,
            tax=tax,
            after_tax=supply,
            kream=settle_from_net(
                Platform.KREAM, snap.kream_price,
                self._kream_net(snap.kream_price), final, tax,
            ),
            poizon=settle_from_net(
                Platform.POIZON, snap.poizon_price,
                self._poizon_net(snap.poizon_price), final, tax,
            ),
        )
