"""Stats Routes — suggestions, meal logging, weight goals, chat and logged records.

Invariants:
    - Healthy BMI answers without a model call; other BMIs merge the model's advice
    - Known activities report the local calorie estimate, not the model's
    - /meal keeps one plan per day and merges meals across calls
    - Suggestion failures surface as 404 "not found, try refreshing"
    - Every chat answer is stored, irrelevant questions get the fixed refusal
"""

from datetime import datetime, timezone

from sqlalchemy import func, select

from fitsync.core.day_window import day_bounds
from fitsync.models.chatbot_interaction import ChatbotInteraction
from fitsync.models.daily_stat import DailyStat
from fitsync.models.health_data import HealthData
from fitsync.models.meal_plan import MealPlan
from fitsync.schemas.suggestion import ChatReply
from fitsync.services.prompts import OFF_TOPIC_REPLY


# ─── /bmi ────────────────────────────────────────────────────────

async def test_bmi_requires_token(client):
    res = await client.post("/api/stats/bmi")
    assert res.status_code == 401


async def test_healthy_bmi_skips_model(client, auth, fake_engine):
    res = await client.post("/api/stats/bmi", headers=auth)

    assert res.status_code == 200
    assert res.json() == {
        "bmi": 22.86,
        "category": "Normal",
        "good": True,
        "message": "Your BMI is in a healthy range!",
        "mealPlan": "NA",
        "suggestions": "NA",
    }
    assert fake_engine.calls == []


async def test_unhealthy_bmi_merges_advice(client, make_user, auth_for, fake_engine):
    heavy = await make_user(current_weight_kg=100.0)
    res = await client.post("/api/stats/bmi", headers=auth_for(heavy))

    body = res.json()
    assert res.status_code == 200
    assert body["bmi"] == 32.65
    assert body["category"] == "Obese"
    assert body["good"] is False
    assert body["mealPlan"] == "Oats and greens"
    assert body["suggestions"] == "Walk daily"
    assert fake_engine.calls == [("bmi_advice", (32.65, "Obese"))]


async def test_bmi_upserts_health_data(client, user, auth, test_session_factory):
    await client.post("/api/stats/bmi", headers=auth)
    await client.post("/api/stats/bmi", headers=auth)

    async with test_session_factory() as session:
        rows = (await session.execute(
            select(HealthData).where(HealthData.user_id == user.id),
        )).scalars().all()
    assert len(rows) == 1
    assert rows[0].bmi == 22.86
    # 10*70 + 6.25*175 - 5*30 + 5 = 1648.75; * 1.55 (MODERATE)
    assert rows[0].calorie_needs == 2556.0


async def test_bmi_suggestion_failure_returns_404(
    client, make_user, auth_for, fake_engine,
):
    fake_engine.fail = True
    heavy = await make_user(current_weight_kg=100.0)
    res = await client.post("/api/stats/bmi", headers=auth_for(heavy))

    assert res.status_code == 404
    assert res.json()["message"] == "not found, try refreshing"


# ─── /activity ───────────────────────────────────────────────────

async def test_activity_requires_name(client, auth):
    res = await client.post("/api/stats/activity", headers=auth, json={})
    assert res.status_code == 400
    assert res.json()["message"] == "activity required"


async def test_known_activity_uses_local_estimate(client, auth, fake_engine):
    res = await client.post(
        "/api/stats/activity", headers=auth,
        json={"activity": "Running", "minutes": 45},
    )

    assert res.status_code == 200
    assert res.json() == {"calorieBurnt": 450, "suggestions": "Stretch after"}
    assert fake_engine.calls[0][1][3] == 450


async def test_unknown_activity_uses_model_estimate(client, auth, fake_engine):
    res = await client.post(
        "/api/stats/activity", headers=auth, json={"activity": "curling"},
    )

    assert res.status_code == 200
    assert res.json()["calorieBurnt"] == 123.0
    name, args = fake_engine.calls[0]
    assert args == ("curling", 30, 70.0, None)


async def test_activity_rejects_non_positive_minutes(client, auth):
    res = await client.post(
        "/api/stats/activity", headers=auth,
        json={"activity": "yoga", "minutes": 0},
    )
    assert res.status_code == 400


# ─── /meal, /meals ───────────────────────────────────────────────

async def test_meal_requires_a_main_meal(client, auth):
    res = await client.post("/api/stats/meal", headers=auth, json={"snacks": "Nuts"})
    assert res.status_code == 400
    assert res.json()["message"] == (
        "At least one meal (breakfast, lunch, or dinner) is required"
    )


async def test_meal_creates_todays_plan(client, auth):
    res = await client.post(
        "/api/stats/meal", headers=auth, json={"breakfast": "Oatmeal"},
    )

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["mealPlan"]["breakfast"] == "Oatmeal"
    assert data["mealPlan"]["lunch"] == ""
    assert data["mealPlan"]["totalCalories"] == 1500
    assert data["suggestions"] == "More fibre"
    assert data["nextMealRecommendation"] == "Grilled fish with salad"


async def test_meal_merges_into_existing_plan(
    client, user, auth, test_session_factory,
):
    await client.post("/api/stats/meal", headers=auth, json={"breakfast": "Oatmeal"})
    res = await client.post("/api/stats/meal", headers=auth, json={"lunch": "Salad"})

    plan = res.json()["data"]["mealPlan"]
    assert plan["breakfast"] == "Oatmeal"
    assert plan["lunch"] == "Salad"
    async with test_session_factory() as session:
        count = await session.scalar(
            select(func.count()).select_from(MealPlan)
            .where(MealPlan.user_id == user.id),
        )
    assert count == 1


async def test_meal_prompt_marks_missing_meals(client, auth, fake_engine):
    await client.post("/api/stats/meal", headers=auth, json={"dinner": "Pasta"})

    _, (description,) = fake_engine.calls[0]
    assert description == (
        "Breakfast: None, Lunch: None, Dinner: Pasta, Snacks: None"
    )


async def test_meal_suggestion_failure_leaves_no_plan(
    client, auth, fake_engine, test_session_factory,
):
    fake_engine.fail = True
    res = await client.post("/api/stats/meal", headers=auth, json={"lunch": "Soup"})

    assert res.status_code == 404
    async with test_session_factory() as session:
        assert await session.scalar(select(func.count()).select_from(MealPlan)) == 0


async def test_list_meals_newest_first(client, user, auth, test_session_factory):
    async with test_session_factory() as session:
        session.add(MealPlan(
            user_id=user.id, breakfast="Old",
            date=datetime(2024, 1, 1, tzinfo=timezone.utc),
        ))
        session.add(MealPlan(
            user_id=user.id, breakfast="New",
            date=datetime(2024, 1, 2, tzinfo=timezone.utc),
        ))
        await session.commit()

    res = await client.get("/api/stats/meals", headers=auth)

    data = res.json()["data"]
    assert data["total"] == 2
    assert [p["breakfast"] for p in data["mealPlans"]] == ["New", "Old"]


async def test_meal_for_day_found(client, user, auth, test_session_factory):
    async with test_session_factory() as session:
        session.add(MealPlan(
            user_id=user.id, dinner="Curry",
            date=datetime(2024, 3, 5, tzinfo=timezone.utc),
        ))
        await session.commit()

    res = await client.get("/api/stats/meals/2024-03-05", headers=auth)

    assert res.status_code == 200
    assert res.json()["data"]["mealPlan"]["dinner"] == "Curry"


async def test_meal_for_day_missing_returns_404(client, auth):
    res = await client.get("/api/stats/meals/2024-03-05", headers=auth)
    assert res.status_code == 404
    assert res.json()["message"] == "No meal plan found for this date"


async def test_meal_for_day_bad_date_returns_400(client, auth):
    res = await client.get("/api/stats/meals/yesterday", headers=auth)
    assert res.status_code == 400
    assert res.json()["message"] == "Invalid date format. Use YYYY-MM-DD"


# ─── /weight-goal ────────────────────────────────────────────────

async def test_weight_goal_profile_and_suggestions(client, auth):
    res = await client.post(
        "/api/stats/weight-goal", headers=auth, json={"targetWeight": 65},
    )

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["userProfile"] == {
        "currentWeight": 70.0,
        "targetWeight": 65,
        "weightToChange": -5.0,
        "goalType": "weight loss",
        "currentBMI": 22.86,
        "targetBMI": 21.22,
    }
    assert data["suggestions"] == {
        "suggestedMealPlan": "High protein",
        "suggestedExercise": "Strength training",
        "toAvoid": "Sugary drinks",
    }


async def test_weight_goal_rejects_non_number(client, auth):
    res = await client.post(
        "/api/stats/weight-goal", headers=auth, json={"targetWeight": "sixty"},
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Target weight is required and must be a number"


async def test_weight_goal_rejects_out_of_range(client, auth):
    res = await client.post(
        "/api/stats/weight-goal", headers=auth, json={"targetWeight": 600},
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Target weight must be between 20 and 500 kg"


async def test_weight_goal_rejects_nan(client, auth, fake_engine):
    res = await client.post(
        "/api/stats/weight-goal",
        headers={**auth, "Content-Type": "application/json"},
        content='{"targetWeight": NaN}',
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Target weight is required and must be a number"
    assert fake_engine.calls == []


async def test_weight_goal_maintenance_within_one_kg(client, auth, fake_engine):
    await client.post(
        "/api/stats/weight-goal", headers=auth, json={"targetWeight": 70.5},
    )
    assert fake_engine.calls[0][1][1] == "maintenance"


# ─── /chat ───────────────────────────────────────────────────────

async def test_chat_rejects_blank_message(client, auth):
    res = await client.post("/api/stats/chat", headers=auth, json={"message": "  "})
    assert res.status_code == 400
    assert res.json()["message"] == (
        "Message is required and must be a non-empty string"
    )


async def test_chat_rejects_non_string_message(client, auth):
    res = await client.post("/api/stats/chat", headers=auth, json={"message": 42})
    assert res.status_code == 400


async def test_chat_relevant_reply_reports_context(
    client, user, auth, test_session_factory,
):
    start, _ = day_bounds()
    async with test_session_factory() as session:
        session.add(DailyStat(
            user_id=user.id, date=start, steps=8000, active_calories=400,
        ))
        await session.commit()

    res = await client.post(
        "/api/stats/chat", headers=auth, json={"message": "How much water?"},
    )

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["response"] == "Drink more water."
    assert data["contextUsed"] == {
        "hasStats": True, "hasMeals": False, "userBMI": 22.86,
    }


async def test_chat_context_includes_todays_stats(
    client, user, auth, fake_engine, test_session_factory,
):
    start, _ = day_bounds()
    async with test_session_factory() as session:
        session.add(DailyStat(
            user_id=user.id, date=start, steps=8123, active_calories=400,
        ))
        await session.commit()

    await client.post("/api/stats/chat", headers=auth, json={"message": "Steps?"})

    _, (message, context) = fake_engine.calls[0]
    assert message == "Steps?"
    assert "- Steps: 8123" in context
    assert "- No meals recorded yet" in context


async def test_chat_irrelevant_reply_returns_refusal(client, auth, fake_engine):
    fake_engine.chat = ChatReply(is_relevant=False, response="Sunny")
    res = await client.post(
        "/api/stats/chat", headers=auth, json={"message": "Weather tomorrow?"},
    )

    assert res.status_code == 200
    assert res.json()["data"] == {"response": OFF_TOPIC_REPLY}


async def test_chat_stores_interactions(client, auth):
    await client.post("/api/stats/chat", headers=auth, json={"message": "Protein?"})

    res = await client.get("/api/stats/chat/history", headers=auth)

    data = res.json()["data"]
    assert data["total"] == 1
    entry = data["interactions"][0]
    assert entry["question"] == "Protein?"
    assert entry["answer"] == "Drink more water."
    assert entry["isRelevant"] is True


async def test_chat_failure_stores_nothing(
    client, auth, fake_engine, test_session_factory,
):
    fake_engine.fail = True
    res = await client.post("/api/stats/chat", headers=auth, json={"message": "Hi?"})

    assert res.status_code == 404
    async with test_session_factory() as session:
        count = await session.scalar(
            select(func.count()).select_from(ChatbotInteraction),
        )
    assert count == 0


# ─── /activities, /health-records, /wearables ────────────────────

async def test_log_activity_estimates_calories(client, auth):
    res = await client.post(
        "/api/stats/activities", headers=auth,
        json={"name": "Cycling", "duration": 60},
    )

    assert res.status_code == 201
    activity = res.json()["data"]["activity"]
    assert activity["name"] == "Cycling"
    assert activity["caloriesBurnt"] == 420


async def test_log_activity_keeps_supplied_calories(client, auth):
    res = await client.post(
        "/api/stats/activities", headers=auth,
        json={"name": "Rowing", "duration": 20, "caloriesBurnt": 210},
    )
    assert res.status_code == 201
    assert res.json()["data"]["activity"]["caloriesBurnt"] == 210


async def test_log_unknown_activity_without_calories_returns_400(client, auth):
    res = await client.post(
        "/api/stats/activities", headers=auth,
        json={"name": "Rowing", "duration": 20},
    )
    assert res.status_code == 400


async def test_log_activity_requires_name_and_duration(client, auth):
    res = await client.post(
        "/api/stats/activities", headers=auth, json={"name": "Yoga"},
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Activity name and duration are required"


async def test_list_activities(client, auth):
    await client.post(
        "/api/stats/activities", headers=auth,
        json={"name": "Yoga", "duration": 30},
    )
    res = await client.get("/api/stats/activities", headers=auth)

    data = res.json()["data"]
    assert data["total"] == 1
    assert data["activities"][0]["caloriesBurnt"] == 90


async def test_health_record_roundtrip(client, auth):
    res = await client.post(
        "/api/stats/health-records", headers=auth,
        json={"diagnosis": "Sprained ankle", "weight": 71.2},
    )
    assert res.status_code == 201

    res = await client.get("/api/stats/health-records", headers=auth)
    data = res.json()["data"]
    assert data["total"] == 1
    assert data["healthRecords"][0]["diagnosis"] == "Sprained ankle"


async def test_empty_health_record_returns_400(client, auth):
    res = await client.post("/api/stats/health-records", headers=auth, json={})
    assert res.status_code == 400


async def test_wearable_data_roundtrip(client, auth):
    res = await client.post(
        "/api/stats/wearables", headers=auth,
        json={"steps": 9000, "heartRate": 72},
    )
    assert res.status_code == 201

    res = await client.get("/api/stats/wearables", headers=auth)
    entry = res.json()["data"]["wearableData"][0]
    assert entry["steps"] == 9000
    assert entry["heartRate"] == 72
    assert entry["sleepHours"] is None


async def test_wearable_data_requires_a_reading(client, auth):
    res = await client.post("/api/stats/wearables", headers=auth, json={})
    assert res.status_code == 400
