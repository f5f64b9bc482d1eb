"""Prompt Builders — template user data into language-model prompts.

Invariants:
    - Builders are PURE string functions: no IO, no clock
    - Every prompt ends with format_instructions() for its reply model
    - Missing optional profile data renders as "Not set", missing meals as "None"

Design Decisions:
    - Chat prompt embeds the relevance filter: the model decides relevance and answers in one call
"""

from fitsync.models.daily_stat import DailyStat
from fitsync.models.meal_plan import MealPlan
from fitsync.models.user import User
from fitsync.schemas.suggestion import (
    ActivityAdvice, BmiAdvice, ChatReply, MealAnalysis, WeightGoalAdvice,
    format_instructions,
)


NUTRITION_SYSTEM = (
    "You are a fitness and nutrition expert. "
    "Respond only in the required JSON format."
)
FITNESS_SYSTEM = (
    "You are a fitness expert. Respond only in the required JSON format."
)

OFF_TOPIC_REPLY = (
    "I can only help with fitness, health, nutrition, and wellness related "
    "questions. Please ask me about your workout routines, diet plans, health "
    "goals, or any fitness-related concerns!"
)


def _or_default(value, default: str = "Not set") -> str:
    return default if value in (None, "") else str(value)


def _number(value: float) -> str:
    """30.0 renders as "30"; fractional values are kept."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_bmi_prompt(bmi: float, category: str) -> str:
    return (
        f"My BMI is {bmi} ({category}). Suggest a healthy meal plan and "
        "lifestyle changes to reach a normal BMI. Output strictly as JSON with "
        "keys: mealPlan, suggestions.\n"
        f"{format_instructions(BmiAdvice)}"
    )


def build_activity_prompt(
    activity: str, minutes: float, weight_kg: float, calories: int | None,
) -> str:
    """With a local estimate the model only advises; without one it also estimates."""
    duration = _number(minutes)
    if calories is not None:
        head = (
            f"I did {duration} minutes of {activity}. My weight is {weight_kg}kg. "
            f"That burnt about {calories} kcal. Give a fitness suggestion. "
            f"Output strictly as JSON with keys: calorieBurnt (use {calories}), "
            "suggestions."
        )
    else:
        head = (
            f"How many calories does a {weight_kg}kg person burn in {duration} "
            f"minutes of {activity}? Output strictly as JSON with keys: "
            "calorieBurnt, suggestions."
        )
    return f"{head}\n{format_instructions(ActivityAdvice)}"


def describe_meals(
    breakfast: str | None, lunch: str | None,
    dinner: str | None, snacks: str | None,
) -> str:
    return (
        f"Breakfast: {breakfast or 'None'}, Lunch: {lunch or 'None'}, "
        f"Dinner: {dinner or 'None'}, Snacks: {snacks or 'None'}"
    )


def build_meal_prompt(user: User, meal_description: str) -> str:
    return (
        f"User profile: Weight {user.current_weight_kg}kg, Height "
        f"{user.height_cm}cm, Age {user.age}, Goal: {user.health_goal}, "
        f"Activity: {user.activity_level}.\n"
        f"Today's meals: {meal_description}.\n"
        "Analyze these meals and provide nutritional breakdown and suggestions "
        "for what to have next.\n"
        f"{format_instructions(MealAnalysis)}"
    )


def build_weight_goal_prompt(
    user: User,
    target_weight: float,
    goal_type: str,
    current_bmi: float,
    target_bmi: float,
) -> str:
    change = abs(target_weight - user.current_weight_kg)
    return (
        "User Profile:\n"
        f"- Name: {user.name}\n"
        f"- Current Weight: {user.current_weight_kg}kg\n"
        f"- Target Weight: {target_weight}kg\n"
        f"- Weight Change Needed: {change:.1f}kg ({goal_type})\n"
        f"- Height: {user.height_cm}cm\n"
        f"- Age: {user.age}\n"
        f"- Gender: {user.gender}\n"
        f"- Current BMI: {current_bmi}\n"
        f"- Target BMI: {target_bmi}\n"
        f"- Health Goal: {user.health_goal}\n"
        f"- Activity Level: {user.activity_level}\n\n"
        "Please provide a comprehensive plan to achieve the target weight "
        "safely and effectively.\n"
        f"{format_instructions(WeightGoalAdvice)}\n\n"
        "Respond with detailed meal plan, exercise recommendations, and things "
        "to avoid."
    )


def build_user_context(
    user: User, bmi: float,
    stats: DailyStat | None, meals: MealPlan | None,
) -> str:
    """Profile + today's stats + today's meals, as plain text."""
    deadline = (
        user.target_deadline.strftime("%a %b %d %Y")
        if user.target_deadline else "Not set"
    )
    lines = [
        "User Profile:",
        f"- Name: {user.name}",
        f"- Age: {user.age}",
        f"- Gender: {user.gender}",
        f"- Height: {user.height_cm}cm",
        f"- Current Weight: {user.current_weight_kg}kg",
        f"- Target Weight: {_or_default(user.target_weight_kg)}kg",
        f"- BMI: {bmi}",
        f"- Health Goal: {user.health_goal}",
        f"- Activity Level: {user.activity_level}",
        f"- Target Deadline: {deadline}",
        "",
        "Today's Stats:",
    ]
    if stats:
        lines += [
            f"- Steps: {stats.steps}",
            f"- Active Calories: {stats.active_calories}",
            f"- Heart Rate Avg: {_or_default(stats.heart_rate_avg)} bpm",
            f"- Sleep Hours: {_or_default(stats.sleep_hours)}",
            f"- Weight: {_or_default(stats.weight_kg)}kg",
        ]
    else:
        lines.append("- No daily stats recorded yet")

    lines += ["", "Today's Meals:"]
    if meals:
        lines += [
            f"- Breakfast: {_or_default(meals.breakfast, 'None')}",
            f"- Lunch: {_or_default(meals.lunch, 'None')}",
            f"- Dinner: {_or_default(meals.dinner, 'None')}",
            f"- Snacks: {_or_default(meals.snacks, 'None')}",
            f"- Total Calories: {meals.total_calories}",
            f"- Protein: {meals.protein_grams}g",
            f"- Carbs: {meals.carbs_grams}g",
            f"- Fats: {meals.fats_grams}g",
        ]
    else:
        lines.append("- No meals recorded yet")
    return "\n".join(lines)


def build_chat_prompt(message: str, user_context: str) -> str:
    return f"""You are a strict fitness and health assistant. Your job is to determine if a user's question is related to fitness, health, nutrition, exercise, wellness, or medical topics.

User Question: "{message}"

Determine if this question is relevant to fitness, health, nutrition, exercise, wellness, or medical topics.
If the topic is even 1% diverted from these areas, mark it as irrelevant.

Examples of RELEVANT topics: exercise routines, diet plans, calories, BMI, muscle building, weight loss, sleep, heart rate, nutrition, supplements, medical conditions, injuries, recovery, mental health related to fitness.

Examples of IRRELEVANT topics: weather, entertainment, technology (unless fitness tech), politics, general knowledge, cooking recipes (unless specifically for fitness diet), shopping, travel, etc.

{format_instructions(ChatReply)}

If isRelevant is false, set response to "I can only help with fitness, health, nutrition, and wellness related questions."
If isRelevant is true, provide a helpful response using the user's data below:

{user_context}
"""
