"""Infrastructure — database sessions, persistence adapters, logging and sinks.

Invariants:
    - All IO lives here; core stays pure
"""
