"""Stats Routes — BMI, activity and meal suggestions, weight goals, chat, and logged records.

Invariants:
    - Every route requires a bearer token (get_current_user)
    - Suggestion failures surface as 404 "not found, try refreshing" (SuggestionUnavailableError)
    - At most one MealPlan per user per UTC day: /meal updates today's plan when it exists
    - Every answered chat question is stored as a ChatbotInteraction
    - A known activity's calorieBurnt is the local estimate, never the model's number

Design Decisions:
    - /bmi and /activity answer with the bare suggestion shape (no envelope)
    - A healthy BMI short-circuits: no model call, "NA" placeholders
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fitsync.api.deps import get_current_user, get_suggestion_engine
from fitsync.core.day_window import day_bounds, parse_day, utcnow
from fitsync.core.enforce_profile import validate_target_weight
from fitsync.core.errors import ResourceNotFoundError, ValidationError
from fitsync.core.health_metrics import (
    classify_bmi, classify_weight_goal, compute_bmi, estimate_calorie_needs,
    estimate_calories,
)
from fitsync.infrastructure.database import get_db
from fitsync.models.activity import Activity
from fitsync.models.chatbot_interaction import ChatbotInteraction
from fitsync.models.daily_stat import DailyStat
from fitsync.models.health_data import HealthData
from fitsync.models.health_record import HealthRecord
from fitsync.models.meal_plan import MealPlan
from fitsync.models.user import User
from fitsync.models.wearable_data import WearableData
from fitsync.schemas.base import to_wire
from fitsync.schemas.stats import (
    ActivityLogRequest, ActivityOut, ActivityRequest, ChatInteractionOut,
    ChatRequest, HealthRecordOut, HealthRecordRequest, MealLogRequest,
    MealPlanOut, WearableDataOut, WearableDataRequest, WeightGoalRequest,
)
from fitsync.services.prompts import (
    OFF_TOPIC_REPLY, build_user_context, describe_meals,
)
from fitsync.services.suggestion_engine import SuggestionEngine

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/stats", tags=["stats"])


async def _todays(model, user_id: UUID, db: AsyncSession):
    """Row of `model` dated within today's UTC window, if any."""
    start, end = day_bounds()
    result = await db.execute(
        select(model)
        .where(model.user_id == user_id, model.date >= start, model.date < end)
        .limit(1)
    )
    return result.scalar_one_or_none()


async def _save_health_data(user: User, bmi: float, db: AsyncSession) -> None:
    calorie_needs = estimate_calorie_needs(
        user.current_weight_kg, user.height_cm, user.age,
        user.gender, user.activity_level,
    )
    result = await db.execute(
        select(HealthData).where(HealthData.user_id == user.id)
    )
    health = result.scalar_one_or_none()
    if health:
        health.bmi = bmi
        health.calorie_needs = calorie_needs
    else:
        db.add(HealthData(user_id=user.id, bmi=bmi, calorie_needs=calorie_needs))
    await db.commit()


# ─── Suggestions ─────────────────────────────────────────────────

@router.post("/bmi")
async def bmi_suggestion(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    engine: SuggestionEngine = Depends(get_suggestion_engine),
):
    bmi = compute_bmi(user.current_weight_kg, user.height_cm)
    classification = classify_bmi(bmi)
    await _save_health_data(user, bmi, db)

    result = {"bmi": bmi, **classification.to_dict()}
    if classification.good:
        return {
            **result,
            "message": "Your BMI is in a healthy range!",
            "mealPlan": "NA",
            "suggestions": "NA",
        }

    advice = await engine.bmi_advice(bmi, classification.category.value)
    return {**result, **to_wire(advice)}


@router.post("/activity")
async def activity_suggestion(
    body: ActivityRequest,
    user: User = Depends(get_current_user),
    engine: SuggestionEngine = Depends(get_suggestion_engine),
):
    if not body.activity or not body.activity.strip():
        raise ValidationError("activity required", field="activity")

    calories = estimate_calories(
        body.activity, body.minutes, user.current_weight_kg,
    )
    advice = await engine.activity_advice(
        body.activity, body.minutes, user.current_weight_kg, calories,
    )
    if calories is not None:
        advice.calorie_burnt = calories
    return to_wire(advice)


@router.post("/meal")
async def log_meal(
    body: MealLogRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    engine: SuggestionEngine = Depends(get_suggestion_engine),
):
    """Analyze today's meals and create or update today's plan."""
    if not (body.breakfast or body.lunch or body.dinner):
        raise ValidationError(
            "At least one meal (breakfast, lunch, or dinner) is required",
        )

    analysis = await engine.meal_analysis(
        user,
        describe_meals(body.breakfast, body.lunch, body.dinner, body.snacks),
    )

    plan = await _todays(MealPlan, user.id, db)
    if plan is None:
        plan = MealPlan(user_id=user.id, date=day_bounds()[0])
        db.add(plan)
    for meal in ("breakfast", "lunch", "dinner", "snacks"):
        value = getattr(body, meal)
        if value:
            setattr(plan, meal, value)
        elif getattr(plan, meal) is None:
            setattr(plan, meal, "")
    plan.total_calories = analysis.total_calories
    plan.protein_grams = analysis.protein_grams
    plan.carbs_grams = analysis.carbs_grams
    plan.fats_grams = analysis.fats_grams
    await db.commit()
    await db.refresh(plan)

    return {
        "success": True,
        "message": "Meal plan updated successfully",
        "data": {
            "mealPlan": to_wire(MealPlanOut.model_validate(plan)),
            "suggestions": analysis.suggestions,
            "nextMealRecommendation": analysis.next_meal_recommendation,
        },
    }


@router.get("/meals")
async def list_meals(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(MealPlan)
        .where(MealPlan.user_id == user.id)
        .order_by(MealPlan.date.desc())
    )
    plans = result.scalars().all()
    return {
        "success": True,
        "message": "Meal plans retrieved successfully",
        "data": {
            "mealPlans": [to_wire(MealPlanOut.model_validate(p)) for p in plans],
            "total": len(plans),
        },
    }


@router.get("/meals/{day}")
async def get_meal_for_day(
    day: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    parsed = parse_day(day)
    if parsed is None:
        raise ValidationError("Invalid date format. Use YYYY-MM-DD", field="date")

    start, end = day_bounds(parsed)
    result = await db.execute(
        select(MealPlan)
        .where(
            MealPlan.user_id == user.id,
            MealPlan.date >= start,
            MealPlan.date < end,
        )
        .limit(1)
    )
    plan = result.scalar_one_or_none()
    if plan is None:
        raise ResourceNotFoundError("No meal plan found for this date")

    return {
        "success": True,
        "message": "Meal plan retrieved successfully",
        "data": {"mealPlan": to_wire(MealPlanOut.model_validate(plan))},
    }


@router.post("/weight-goal")
async def weight_goal(
    body: WeightGoalRequest,
    user: User = Depends(get_current_user),
    engine: SuggestionEngine = Depends(get_suggestion_engine),
):
    error = validate_target_weight(body.target_weight)
    if error:
        raise ValidationError(error, field="targetWeight")

    target = body.target_weight
    current = user.current_weight_kg
    current_bmi = compute_bmi(current, user.height_cm)
    target_bmi = compute_bmi(target, user.height_cm)
    goal_type = classify_weight_goal(current, target)

    advice = await engine.weight_goal_advice(
        user, target, goal_type.value, current_bmi, target_bmi,
    )
    return {
        "success": True,
        "message": "Weight goal suggestions generated successfully",
        "data": {
            "userProfile": {
                "currentWeight": current,
                "targetWeight": target,
                "weightToChange": target - current,
                "goalType": goal_type.value,
                "currentBMI": current_bmi,
                "targetBMI": target_bmi,
            },
            "suggestions": to_wire(advice),
        },
    }


@router.post("/chat")
async def chat(
    body: ChatRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    engine: SuggestionEngine = Depends(get_suggestion_engine),
):
    """Answer a fitness question using the user's profile and today's data."""
    message = body.message
    if not isinstance(message, str) or not message.strip():
        raise ValidationError(
            "Message is required and must be a non-empty string",
            field="message",
        )

    stats = await _todays(DailyStat, user.id, db)
    meals = await _todays(MealPlan, user.id, db)
    bmi = compute_bmi(user.current_weight_kg, user.height_cm)

    reply = await engine.chat_reply(
        message, build_user_context(user, bmi, stats, meals),
    )
    answer = reply.response if reply.is_relevant else OFF_TOPIC_REPLY
    db.add(ChatbotInteraction(
        user_id=user.id,
        question=message,
        answer=answer,
        is_relevant=reply.is_relevant,
    ))
    await db.commit()

    if not reply.is_relevant:
        return {
            "success": True,
            "message": "Response generated",
            "data": {"response": answer},
        }
    return {
        "success": True,
        "message": "Response generated successfully",
        "data": {
            "response": answer,
            "contextUsed": {
                "hasStats": stats is not None,
                "hasMeals": meals is not None,
                "userBMI": bmi,
            },
        },
    }


@router.get("/chat/history")
async def chat_history(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(ChatbotInteraction)
        .where(ChatbotInteraction.user_id == user.id)
        .order_by(ChatbotInteraction.created_at.desc())
    )
    interactions = result.scalars().all()
    return {
        "success": True,
        "message": "Chat history retrieved successfully",
        "data": {
            "interactions": [
                to_wire(ChatInteractionOut.model_validate(i))
                for i in interactions
            ],
            "total": len(interactions),
        },
    }


# ─── Logged records ──────────────────────────────────────────────

@router.post("/activities", status_code=status.HTTP_201_CREATED)
async def log_activity(
    body: ActivityLogRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if not body.name or not body.name.strip() or not body.duration:
        raise ValidationError("Activity name and duration are required")

    calories = body.calories_burnt
    if calories is None:
        calories = estimate_calories(
            body.name, body.duration, user.current_weight_kg,
        )
    if calories is None:
        raise ValidationError(
            "Unknown activity: provide caloriesBurnt to log it",
            field="caloriesBurnt",
        )

    activity = Activity(
        user_id=user.id,
        name=body.name.strip(),
        duration=body.duration,
        calories_burnt=calories,
        date=body.date or utcnow(),
    )
    db.add(activity)
    await db.commit()
    await db.refresh(activity)

    return {
        "success": True,
        "message": "Activity logged successfully",
        "data": {"activity": to_wire(ActivityOut.model_validate(activity))},
    }


@router.get("/activities")
async def list_activities(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(Activity)
        .where(Activity.user_id == user.id)
        .order_by(Activity.date.desc())
    )
    activities = result.scalars().all()
    return {
        "success": True,
        "message": "Activities retrieved successfully",
        "data": {
            "activities": [
                to_wire(ActivityOut.model_validate(a)) for a in activities
            ],
            "total": len(activities),
        },
    }


@router.post("/health-records", status_code=status.HTTP_201_CREATED)
async def create_health_record(
    body: HealthRecordRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    fields = body.model_dump(exclude_none=True)
    if not fields:
        raise ValidationError("Health record must contain at least one field")

    record = HealthRecord(user_id=user.id, **fields)
    db.add(record)
    await db.commit()
    await db.refresh(record)

    return {
        "success": True,
        "message": "Health record created successfully",
        "data": {"healthRecord": to_wire(HealthRecordOut.model_validate(record))},
    }


@router.get("/health-records")
async def list_health_records(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(HealthRecord)
        .where(HealthRecord.user_id == user.id)
        .order_by(HealthRecord.visit_date.desc())
    )
    records = result.scalars().all()
    return {
        "success": True,
        "message": "Health records retrieved successfully",
        "data": {
            "healthRecords": [
                to_wire(HealthRecordOut.model_validate(r)) for r in records
            ],
            "total": len(records),
        },
    }


@router.post("/wearables", status_code=status.HTTP_201_CREATED)
async def push_wearable_data(
    body: WearableDataRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    readings = body.model_dump(exclude_none=True)
    if not readings:
        raise ValidationError(
            "At least one reading (steps, heartRate, sleepHours, "
            "caloriesBurned) is required",
        )

    entry = WearableData(user_id=user.id, **readings)
    db.add(entry)
    await db.commit()
    await db.refresh(entry)

    return {
        "success": True,
        "message": "Wearable data saved successfully",
        "data": {"wearableData": to_wire(WearableDataOut.model_validate(entry))},
    }


@router.get("/wearables")
async def list_wearable_data(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(WearableData)
        .where(WearableData.user_id == user.id)
        .order_by(WearableData.created_at.desc())
    )
    entries = result.scalars().all()
    return {
        "success": True,
        "message": "Wearable data retrieved successfully",
        "data": {
            "wearableData": [
                to_wire(WearableDataOut.model_validate(e)) for e in entries
            ],
            "total": len(entries),
        },
    }
