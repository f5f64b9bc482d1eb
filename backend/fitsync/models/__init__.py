"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the aggregate root; every other entity is scoped by user_id

Design Decisions:
    - One file per entity
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from fitsync.models.user import User  # noqa: F401
from fitsync.models.health_data import HealthData  # noqa: F401
from fitsync.models.meal_plan import MealPlan  # noqa: F401
from fitsync.models.chatbot_interaction import ChatbotInteraction  # noqa: F401
from fitsync.models.health_record import HealthRecord  # noqa: F401
from fitsync.models.wearable_data import WearableData  # noqa: F401
from fitsync.models.event import Event  # noqa: F401
from fitsync.models.event_registration import EventRegistration  # noqa: F401
from fitsync.models.activity import Activity  # noqa: F401
from fitsync.models.daily_stat import DailyStat  # noqa: F401
