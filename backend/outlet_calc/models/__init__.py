"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - All models imported here so metadata is complete before create_all/autogenerate
"""

from outlet_calc.models.outlet_history import OutletHistory  # noqa: F401
