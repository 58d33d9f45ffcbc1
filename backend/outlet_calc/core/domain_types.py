"""Domain Types — enums and fee constants shared across layers.

Invariants:
    - DiscountMode and Platform are str Enums (serialize to JSON as-is)
    - Platform fee constants live here and nowhere else

Design Decisions:
    - Constants module-level, not configurable: fee formulas are not versioned
"""

from enum import Enum


# ─── Enums ───────────────────────────────────────────────────────

class DiscountMode(str, Enum):
    """How the first discount is entered — maps to DB `discount_mode` column."""
    AMOUNT = "amount"
    PERCENT = "percent"


class Platform(str, Enum):
    """Resale marketplaces with a settlement formula."""
    KREAM = "kream"
    POIZON = "poizon"


class HistoryBackend(str, Enum):
    """Which History Store adapter the shell wires in."""
    SUPABASE = "supabase"
    DATABASE = "database"
    NONE = "none"


# ─── Constants ───────────────────────────────────────────────────

TAX_RATE: float = 0.10
PERCENT_MAX: int = 100
# Largest accepted price or amount (KRW); keeps every stage within float range
PRICE_MAX: int = 10**12

KREAM_NET_RATE: float = 0.956
KREAM_FIXED_FEE: int = 5_500

POIZON_LOW_TIER_MAX: int = 150_000
POIZON_HIGH_TIER_MIN: int = 450_000
POIZON_LOW_TIER_FEE: int = 15_000
POIZON_HIGH_TIER_FEE: int = 45_000
POIZON_MID_TIER_RATE: float = 0.9

HISTORY_TABLE: str = "outlet_history"
