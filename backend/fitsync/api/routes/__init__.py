"""Route Modules — one file per resource.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Arithmetic and validation rules live in core/; routes only orchestrate IO
"""
