"""Core Layer — pure domain logic: metrics, validation rules, day windows.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, db/ or models/
    - Functions take the current time as an argument where a rule depends on it
"""
