"""Dashboard Routes — today's stat snapshot with activity totals and BMI.

Invariants:
    - Exactly one DailyStat per user per UTC day; first read of the day creates it
    - A generated snapshot uses plausible ranges and the user's current weight
    - BMI on the dashboard is rounded to 1 decimal place
    - Any failure building the snapshot surfaces as 500 "No stats found for today"
"""

import logging
import random

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fitsync.api.deps import get_current_user
from fitsync.core.day_window import day_bounds
from fitsync.core.errors import DailyStatsUnavailableError, ErrorContext
from fitsync.core.health_metrics import classify_bmi, compute_bmi
from fitsync.infrastructure.database import get_db
from fitsync.models.activity import Activity
from fitsync.models.daily_stat import DailyStat
from fitsync.models.user import User
from fitsync.schemas.base import to_wire
from fitsync.schemas.stats import DailyStatOut

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])

STEPS_RANGE = (3000, 15000)
ACTIVE_CALORIES_RANGE = (150, 800)
HEART_RATE_RANGE = (60.0, 110.0)
SLEEP_HOURS_RANGE = (5.0, 9.0)


def generate_daily_stats(weight_kg: float, rng: random.Random | None = None) -> dict:
    """Plausible placeholder readings for a day with no device data."""
    rng = rng or random.Random()
    return {
        "steps": rng.randint(*STEPS_RANGE),
        "active_calories": rng.randint(*ACTIVE_CALORIES_RANGE),
        "heart_rate_avg": round(rng.uniform(*HEART_RATE_RANGE), 1),
        "sleep_hours": round(rng.uniform(*SLEEP_HOURS_RANGE), 1),
        "weight_kg": weight_kg,
    }


async def _todays_stat(user_id, start, end, db: AsyncSession) -> DailyStat | None:
    result = await db.execute(
        select(DailyStat)
        .where(
            DailyStat.user_id == user_id,
            DailyStat.date >= start,
            DailyStat.date < end,
        )
        .limit(1)
    )
    return result.scalar_one_or_none()


@router.get("/getdailystats")
async def get_daily_stats(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    # read before any rollback expires the instance
    user_id = user.id
    weight_kg = user.current_weight_kg
    height_cm = user.height_cm

    try:
        snapshot = await _build_snapshot(user_id, weight_kg, height_cm, db)
    except Exception as e:
        logger.error(
            f"Daily stats failed: {e}",
            exc_info=True, extra={"user_id": str(user_id)},
        )
        raise DailyStatsUnavailableError(
            context=ErrorContext(user_id=str(user_id)),
        ) from e
    return {"success": True, "data": snapshot}


async def _build_snapshot(
    user_id, weight_kg: float, height_cm: float, db: AsyncSession,
) -> dict:
    start, end = day_bounds()

    stat = await _todays_stat(user_id, start, end, db)
    if stat is None:
        stat = DailyStat(
            user_id=user_id, date=start, **generate_daily_stats(weight_kg),
        )
        db.add(stat)
        try:
            await db.commit()
        except IntegrityError:
            # another request created today's row first
            await db.rollback()
            stat = await _todays_stat(user_id, start, end, db)
        else:
            logger.info("Generated daily stats", extra={"user_id": str(user_id)})

    result = await db.execute(
        select(Activity).where(
            Activity.user_id == user_id,
            Activity.date >= start,
            Activity.date < end,
        )
    )
    activities = result.scalars().all()

    bmi = compute_bmi(weight_kg, height_cm, digits=1)
    return {
        **to_wire(DailyStatOut.model_validate(stat)),
        "activitiesCount": len(activities),
        "totalActivityDuration": sum(a.duration for a in activities),
        "totalCaloriesFromActivities": sum(a.calories_burnt for a in activities),
        "bmi": bmi,
        "bmiCategory": classify_bmi(bmi).to_dict(),
    }
