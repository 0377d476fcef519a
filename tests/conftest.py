import asyncio
import copy
import json
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.ai import GenerativeClient
from app.config import Settings
from app.main import create_app
from app.plans.service import PlanService

VALID_API_KEY = "AIzaSyD-test-key-0123456789abcdefghij"

ANA = {
    "name": "Ana",
    "age": 30,
    "gender": "Female",
    "height": 165,
    "weight": 60,
    "fitnessGoal": "Weight Loss",
    "fitnessLevel": "Beginner",
    "workoutLocation": "Home",
    "dietaryPreferences": "Vegetarian",
}


def _routine(day: int) -> dict:
    if day == 7:
        return {"day": "Day 7", "exercises": [], "restTime": "Rest day", "totalDuration": "0 minutes"}
    return {
        "day": f"Day {day}",
        "exercises": [
            {
                "name": "Push-ups",
                "sets": 3,
                "reps": "10-12",
                "rest": "60 seconds",
                "description": "Keep your core tight",
            },
            {"name": "Squats", "sets": 4, "reps": 15, "rest": "90 seconds"},
        ],
        "restTime": "60-90 seconds between sets",
        "totalDuration": "45 minutes",
    }


WORKOUT_PLAN = {
    "dailyRoutines": [_routine(day) for day in range(1, 8)],
    "tips": ["Warm up first", "Stay hydrated", "Sleep well"],
    "motivation": "Small steps every day.",
}


def _daily_meals(day: int) -> dict:
    return {
        "day": f"Day {day}",
        "breakfast": {
            "items": [{"name": "Oatmeal", "quantity": "80g", "description": "With berries"}],
            "calories": 350,
            "timing": "8:00 AM",
        },
        "lunch": {
            "items": [{"name": "Lentil soup", "quantity": "300ml"}],
            "calories": 420,
            "timing": "1:00 PM",
        },
        "dinner": {
            "items": [
                {"name": "Tofu stir-fry", "quantity": "250g"},
                {"name": "Oatmeal", "quantity": "40g"},
            ],
            "calories": 300,
            "timing": "7:00 PM",
        },
        "snacks": [
            {"items": [{"name": "Greek yogurt", "quantity": "150g"}], "calories": 106, "timing": "4:00 PM"},
        ],
    }


DIET_PLAN = {
    "meals": [_daily_meals(day) for day in range(1, 8)],
    "dailyCalories": 1176,
    "macros": {"protein": 90, "carbs": 130.4, "fats": 40},
    "tips": ["Eat slowly", "Plan your meals"],
}

QUOTE = "Strength grows in the moments you think you can't go on."


def fenced(data: dict, tag: str = "json") -> str:
    return f"```{tag}\n{json.dumps(data, indent=2)}\n```"


class FakeCompletions:
    """Подмена chat.completions: отвечает по содержимому промпта и записывает вызовы."""

    def __init__(self, owner: "FakeOpenAI") -> None:
        self.owner = owner
        self.calls: list[dict] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def create(self, **params):
        self.calls.append(params)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.owner.delay:
                await asyncio.sleep(self.owner.delay)
            reply = self.owner.reply_for(params["messages"][-1]["content"])
        finally:
            self.in_flight -= 1

        if isinstance(reply, BaseException):
            raise reply
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=reply))])


class FakeOpenAI:
    def __init__(self, workout=None, diet=None, quote=QUOTE, delay: float = 0) -> None:
        self.replies = {
            "workout": fenced(WORKOUT_PLAN) if workout is None else workout,
            "diet": json.dumps(DIET_PLAN) if diet is None else diet,
            "quote": quote,
        }
        self.delay = delay
        self.closed = False
        self.chat = SimpleNamespace(completions=FakeCompletions(self))

    def reply_for(self, prompt: str):
        if "7-day workout plan" in prompt:
            return self.replies["workout"]
        if "7-day diet plan" in prompt:
            return self.replies["diet"]
        return self.replies["quote"]

    @property
    def calls(self) -> list[dict]:
        return self.chat.completions.calls

    def calls_for(self, kind: str) -> list[dict]:
        marker = {"workout": "7-day workout plan", "diet": "7-day diet plan"}.get(kind)
        if marker is None:
            return [
                c for c in self.calls
                if "7-day workout plan" not in c["messages"][-1]["content"]
                and "7-day diet plan" not in c["messages"][-1]["content"]
            ]
        return [c for c in self.calls if marker in c["messages"][-1]["content"]]

    async def close(self) -> None:
        self.closed = True


def make_settings(**overrides) -> Settings:
    values = {"google_ai_api_key": VALID_API_KEY, "elevenlabs_api_key": None}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def install_fake_ai(app, fake_openai: FakeOpenAI) -> None:
    settings = app.state.settings
    ai_client = GenerativeClient(settings, openai_client=fake_openai)
    app.state.ai_client = ai_client
    app.state.plan_service = PlanService(settings, ai_client)


@pytest.fixture
def ana() -> dict:
    return copy.deepcopy(ANA)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def fake_openai() -> FakeOpenAI:
    return FakeOpenAI()


@pytest.fixture
def app(settings, fake_openai):
    application = create_app(settings)
    install_fake_ai(application, fake_openai)
    return application


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
