"""Shared fixtures: an in-process stand-in for the Gemini async client."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from types import SimpleNamespace
from typing import Any, List

import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from stylist_app.app import StylistApp  # noqa: E402
from stylist_app.config import StylistConfig  # noqa: E402

SCENARIO_A_PAYLOAD = {
    "outfit": "Navy suit",
    "footwear": "Leather oxfords",
    "accessories": "Umbrella",
    "stylingTips": "Layer for rain",
}


class FakeModels:
    """Mimics ``client.aio.models``; each call pops the next scripted reply."""

    def __init__(self) -> None:
        self.calls: List[dict] = []
        self.replies: List[Any] = []
        self.gate: asyncio.Event | None = None

    def queue(self, *replies: Any) -> None:
        self.replies.extend(replies)

    async def generate_content(self, *, model: str, contents: str, config: Any) -> SimpleNamespace:
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.gate is not None:
            await self.gate.wait()
        reply = self.replies.pop(0) if self.replies else json.dumps(SCENARIO_A_PAYLOAD)
        if isinstance(reply, BaseException):
            raise reply
        if isinstance(reply, dict):
            reply = json.dumps(reply)
        return SimpleNamespace(text=reply)


class FakeChat:
    def __init__(self, owner: "FakeChats", system_instruction: str | None) -> None:
        self.owner = owner
        self.system_instruction = system_instruction

    async def send_message(self, message: str) -> SimpleNamespace:
        self.owner.sent.append({"message": message, "system_instruction": self.system_instruction})
        if self.owner.gate is not None:
            await self.owner.gate.wait()
        reply = self.owner.replies.pop(0) if self.owner.replies else "Try a burgundy silk tie."
        if isinstance(reply, BaseException):
            raise reply
        return SimpleNamespace(text=reply)


class FakeChats:
    """Mimics ``client.aio.chats``."""

    def __init__(self) -> None:
        self.created: List[dict] = []
        self.sent: List[dict] = []
        self.replies: List[Any] = []
        self.gate: asyncio.Event | None = None

    def queue(self, *replies: Any) -> None:
        self.replies.extend(replies)

    def create(self, *, model: str, config: Any) -> FakeChat:
        self.created.append({"model": model, "config": config})
        return FakeChat(self, getattr(config, "system_instruction", None))


class FakeGenAIClient:
    def __init__(self) -> None:
        self.models = FakeModels()
        self.chats = FakeChats()
        self.aio = SimpleNamespace(models=self.models, chats=self.chats)


@pytest.fixture()
def fake_client() -> FakeGenAIClient:
    return FakeGenAIClient()


@pytest.fixture()
def test_config() -> StylistConfig:
    return StylistConfig(api_key="dummy-key", model="gemini-test", log_level="WARNING")


@pytest.fixture()
def stylist(fake_client: FakeGenAIClient, test_config: StylistConfig) -> StylistApp:
    return StylistApp(config=test_config, client=fake_client)
