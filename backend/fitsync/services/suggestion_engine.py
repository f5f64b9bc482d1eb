"""Suggestion Engine — one language-model round trip per suggestion, validated against a reply schema.

Invariants:
    - generate() either returns a validated reply model or raises SuggestionUnavailableError
    - No retry at this level (transport retries live in ResilientAnthropicClient)
    - Failures are logged server-side with the reply model name; clients see a generic message

Design Decisions:
    - parse_reply_json accepts bare JSON or the first {...} block (fenced code, preamble)
    - Engine is a FastAPI dependency (api/deps.py) so route tests swap in a fake
"""

import json
import logging
import re
from typing import TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from fitsync.core.errors import AnthropicAPIError, SuggestionUnavailableError
from fitsync.infrastructure.anthropic_client import ResilientAnthropicClient
from fitsync.schemas.suggestion import (
    ActivityAdvice, BmiAdvice, ChatReply, MealAnalysis, WeightGoalAdvice,
)
from fitsync.services import prompts

logger = logging.getLogger(__name__)

ReplyT = TypeVar("ReplyT", bound=BaseModel)

_JSON_BLOCK = re.compile(r"\{[\s\S]*\}")


def parse_reply_json(text: str) -> dict:
    """Extract a JSON object from model text. Raises ValueError when none is found."""
    text = text.strip()
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        match = _JSON_BLOCK.search(text)
        if not match:
            raise ValueError("reply contains no JSON object")
        try:
            parsed = json.loads(match.group())
        except json.JSONDecodeError as e:
            raise ValueError(f"reply JSON is malformed: {e}") from e
    if not isinstance(parsed, dict):
        raise ValueError("reply JSON is not an object")
    return parsed


def extract_text(response) -> str:
    """Concatenate the text blocks of an Anthropic message."""
    return "".join(
        getattr(block, "text", "") for block in response.content
        if getattr(block, "type", "text") == "text"
    )


class SuggestionEngine:
    """Turns prompts into validated reply models."""

    def __init__(
        self,
        client: ResilientAnthropicClient,
        model: str,
        max_tokens: int = 1024,
        temperature: float = 0.2,
    ):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def generate(
        self,
        prompt: str,
        reply_model: type[ReplyT],
        *,
        system: str | None = None,
    ) -> ReplyT:
        try:
            response = await self.client.create_message(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                system=system,
                messages=[{"role": "user", "content": prompt}],
            )
            payload = parse_reply_json(extract_text(response))
            return reply_model.model_validate(payload)
        except (AnthropicAPIError, ValueError, PydanticValidationError) as e:
            logger.warning(
                f"Suggestion failed: {e}",
                extra={"reply_model": reply_model.__name__},
            )
            raise SuggestionUnavailableError(str(e)) from e

    async def bmi_advice(self, bmi: float, category: str) -> BmiAdvice:
        return await self.generate(
            prompts.build_bmi_prompt(bmi, category), BmiAdvice,
            system=prompts.NUTRITION_SYSTEM,
        )

    async def activity_advice(
        self, activity: str, minutes: float, weight_kg: float,
        calories: int | None,
    ) -> ActivityAdvice:
        return await self.generate(
            prompts.build_activity_prompt(activity, minutes, weight_kg, calories),
            ActivityAdvice,
            system=prompts.FITNESS_SYSTEM,
        )

    async def meal_analysis(self, user, meal_description: str) -> MealAnalysis:
        return await self.generate(
            prompts.build_meal_prompt(user, meal_description), MealAnalysis,
        )

    async def weight_goal_advice(
        self, user, target_weight: float, goal_type: str,
        current_bmi: float, target_bmi: float,
    ) -> WeightGoalAdvice:
        return await self.generate(
            prompts.build_weight_goal_prompt(
                user, target_weight, goal_type, current_bmi, target_bmi,
            ),
            WeightGoalAdvice,
        )

    async def chat_reply(self, message: str, user_context: str) -> ChatReply:
        return await self.generate(
            prompts.build_chat_prompt(message, user_context), ChatReply,
        )
