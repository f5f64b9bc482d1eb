"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Endpoints return the {success, message, data} JSON envelope, except the
      bare suggestion replies of /api/stats/bmi and /api/stats/activity
"""
