"""Core — pure domain logic: validation, errors, domain types, sink contract.

Invariants:
    - Core NEVER imports from infrastructure, api or client
    - No IO in core modules
"""
