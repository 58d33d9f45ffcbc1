"""Infrastructure Layer — IO adapters (history stores, database, logging).

Invariants:
    - Adapters implement the Protocols in core/repository_protocols.py
    - Library exceptions are translated into core/errors.py types here
"""
