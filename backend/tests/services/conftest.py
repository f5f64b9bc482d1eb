"""Route test fixtures — async DB, FastAPI test client, fake suggestion engine, seeded users.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys enforced
    - get_db dependency overridden to use test DB sessions
    - db_manager patched so the readiness probe sees the test engine
    - get_suggestion_engine overridden with FakeSuggestionEngine: no network calls

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares one connection, hence one database
    - PRAGMA foreign_keys=ON on connect so ON DELETE CASCADE behaves as on PostgreSQL
    - Users are seeded directly through the ORM; tokens minted with create_access_token
"""

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from fitsync.api.deps import get_suggestion_engine
from fitsync.core.errors import SuggestionUnavailableError
from fitsync.db.base import Base
from fitsync.infrastructure.database import get_db, DatabaseSessionManager
from fitsync.infrastructure.security import create_access_token, hash_password
from fitsync.models.user import User
from fitsync.schemas.suggestion import (
    ActivityAdvice, BmiAdvice, ChatReply, MealAnalysis, WeightGoalAdvice,
)
import fitsync.infrastructure.database as db_module
import fitsync.models  # noqa: F401
from fitsync.main import app

PASSWORD = "secret123"


class FakeSuggestionEngine:
    """Canned replies in place of the language model.

    `calls` records (method, args) per call; set `fail = True` to make every
    call raise SuggestionUnavailableError.
    """

    def __init__(self):
        self.calls: list[tuple[str, tuple]] = []
        self.fail = False
        self.chat = ChatReply(is_relevant=True, response="Drink more water.")
        self.activity_calories = 123.0

    def _record(self, name: str, *args):
        self.calls.append((name, args))
        if self.fail:
            raise SuggestionUnavailableError("forced failure")

    async def bmi_advice(self, bmi, category):
        self._record("bmi_advice", bmi, category)
        return BmiAdvice(meal_plan="Oats and greens", suggestions="Walk daily")

    async def activity_advice(self, activity, minutes, weight_kg, calories):
        self._record("activity_advice", activity, minutes, weight_kg, calories)
        return ActivityAdvice(
            calorie_burnt=self.activity_calories, suggestions="Stretch after",
        )

    async def meal_analysis(self, user, meal_description):
        self._record("meal_analysis", meal_description)
        return MealAnalysis(
            total_calories=1500, protein_grams=90, carbs_grams=160,
            fats_grams=50, suggestions="More fibre",
            next_meal_recommendation="Grilled fish with salad",
        )

    async def weight_goal_advice(
        self, user, target_weight, goal_type, current_bmi, target_bmi,
    ):
        self._record(
            "weight_goal_advice", target_weight, goal_type,
            current_bmi, target_bmi,
        )
        return WeightGoalAdvice(
            suggested_meal_plan="High protein",
            suggested_exercise="Strength training",
            to_avoid="Sugary drinks",
        )

    async def chat_reply(self, message, user_context):
        self._record("chat_reply", message, user_context)
        return self.chat


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def fake_engine():
    return FakeSuggestionEngine()


@pytest.fixture
async def client(test_engine, test_session_factory, fake_engine):
    """FastAPI test client with DB and suggestion engine overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_suggestion_engine] = lambda: fake_engine

    saved_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = saved_manager


@pytest.fixture
def make_user(test_session_factory):
    """Factory: insert a user (defaults: 70 kg, 175 cm → BMI 22.86)."""
    counter = {"n": 0}

    async def _make(**overrides) -> User:
        counter["n"] += 1
        fields = {
            "name": f"User {counter['n']}",
            "email": f"user{counter['n']}@example.com",
            "password": hash_password(PASSWORD),
            "age": 30,
            "height_cm": 175.0,
            "current_weight_kg": 70.0,
            "gender": "MALE",
            "health_goal": "MAINTENANCE",
            "activity_level": "MODERATE",
        }
        fields.update(overrides)
        async with test_session_factory() as session:
            user = User(**fields)
            session.add(user)
            await session.commit()
            await session.refresh(user)
        return user

    return _make


@pytest.fixture
async def user(make_user):
    return await make_user()


def _bearer(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def auth_for():
    """Authorization header for any seeded user."""
    return _bearer


@pytest.fixture
def auth(user):
    return _bearer(user)
