"""Pydantic Schemas — request/response validation for API endpoints and LLM replies.

Invariants:
    - Schemas validate at system boundaries (HTTP bodies, language-model output)
    - Domain enums from core/ used for enum-valued response fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
