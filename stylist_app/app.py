"""AuraStyle app bootstrap."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from agents.chat_agent import ChatAgent
from agents.recommendation_agent import RecommendationAgent
from memory.session_store import SessionStore, StylistSession
from models.catalog import Occasion, Weather
from models.outcomes import ChatOutcome, RecommendationOutcome, RequestStatus
from stylist_app.config import StylistConfig
from stylist_app.genai_client import GenAIClientProvider
from stylist_app.logging_config import configure_logging, get_logger, log_event

LOGGER = get_logger(__name__)


class StylistApp:
    """Wires together config, the shared Gemini client, agents and sessions."""

    def __init__(
        self,
        config: StylistConfig | None = None,
        client: Any | None = None,
        session_store: SessionStore | None = None,
    ) -> None:
        self.config = config or StylistConfig.from_env()
        configure_logging(self.config.log_level)

        self.client_provider = GenAIClientProvider(self.config, client=client)
        self.session_store = session_store or SessionStore(
            max_sessions=self.config.session_limit,
            idle_seconds=self.config.session_idle_seconds,
        )
        self.recommendation_agent = RecommendationAgent(self.client_provider)
        self.chat_agent = ChatAgent(self.client_provider)

    def create_session(self) -> StylistSession:
        session = self.session_store.create_session()
        log_event(LOGGER, logging.INFO, "session_created", session_id=session.session_id)
        return session

    def get_session(self, session_id: str) -> StylistSession:
        return self.session_store.get(session_id)

    def select_occasion(self, session_id: str, occasion: Occasion | str) -> StylistSession:
        session = self.get_session(session_id)
        session.set_occasion(occasion)
        return session

    def select_weather(self, session_id: str, weather: Weather | str) -> StylistSession:
        session = self.get_session(session_id)
        session.set_weather(weather)
        return session

    async def request_recommendation(self, session_id: str) -> RecommendationOutcome:
        """Run a recommendation request to completion."""

        return await self.recommendation_agent.request_recommendation(self.get_session(session_id))

    def start_recommendation(self, session_id: str) -> RequestStatus:
        """Schedule a recommendation in the background and report whether it started.

        Must be called from inside the running event loop. The session's
        ``loading`` flag is claimed before this returns, so a page rendered
        right afterwards shows the loading view.
        """

        session = self.get_session(session_id)
        status, ticket = self.recommendation_agent.claim(session)
        if ticket is not None:
            task = asyncio.get_running_loop().create_task(self.recommendation_agent.fulfil(session, ticket))
            session.track(task)
        return status

    async def send_chat_message(self, session_id: str, text: str) -> ChatOutcome:
        return await self.chat_agent.send_chat_message(self.get_session(session_id), text)

    def start_chat_message(self, session_id: str, text: str) -> RequestStatus:
        """Schedule a chat turn in the background; the user message is appended immediately."""

        session = self.get_session(session_id)
        status, ticket = self.chat_agent.claim(session, text)
        if ticket is not None:
            task = asyncio.get_running_loop().create_task(self.chat_agent.fulfil(session, ticket))
            session.track(task)
        return status

    def open_chat(self, session_id: str) -> StylistSession:
        session = self.get_session(session_id)
        session.open_chat()
        return session

    def close_chat(self, session_id: str) -> StylistSession:
        session = self.get_session(session_id)
        session.close_chat()
        return session


__all__ = ["StylistApp"]
