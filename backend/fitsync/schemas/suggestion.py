"""Suggestion Reply Schemas — the fixed JSON shapes expected back from the language model.

Invariants:
    - Every field is required; a reply missing one is rejected as a whole
    - Field aliases are camelCase and match the keys named in the prompt
    - format_instructions() is derived from the model, never hand-written
"""

import json

from pydantic import BaseModel

from fitsync.schemas.base import CamelModel


class BmiAdvice(CamelModel):
    meal_plan: str
    suggestions: str


class ActivityAdvice(CamelModel):
    calorie_burnt: float
    suggestions: str


class MealAnalysis(CamelModel):
    total_calories: float
    protein_grams: float
    carbs_grams: float
    fats_grams: float
    suggestions: str
    next_meal_recommendation: str


class WeightGoalAdvice(CamelModel):
    suggested_meal_plan: str
    suggested_exercise: str
    to_avoid: str


class ChatReply(CamelModel):
    is_relevant: bool
    response: str


def reply_schema(model: type[BaseModel]) -> dict:
    """JSON schema of a reply model using wire (camelCase) keys."""
    schema = model.model_json_schema(by_alias=True)
    schema.pop("title", None)
    for prop in schema.get("properties", {}).values():
        prop.pop("title", None)
    return schema


def format_instructions(model: type[BaseModel]) -> str:
    """Output-format block appended to every prompt."""
    return (
        "The output must be a single JSON object that conforms to the JSON "
        "schema below. Do not add commentary before or after it.\n"
        "```json\n"
        f"{json.dumps(reply_schema(model), indent=2)}\n"
        "```"
    )
