"""In-memory stylist sessions and the store that hands them out per browser."""
from __future__ import annotations

import asyncio
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple
from uuid import uuid4

from logic.prompts import greeting
from logic.view_state import ResultsView, select_results_view
from models.catalog import Occasion, Weather
from models.recommendation import Message, Recommendation, Role
from stylist_app.errors import ChatUnavailableError, UnknownSessionError
from stylist_app.logging_config import get_logger, log_event

LOGGER = get_logger(__name__)


class ChatVisibility(str, Enum):
    CLOSED = "closed"
    OPEN = "open"


@dataclass(frozen=True)
class RecommendationTicket:
    """Selections captured when a recommendation request is issued."""

    epoch: int
    occasion: Occasion
    weather: Weather


@dataclass(frozen=True)
class ChatTicket:
    """Context captured when a chat message is sent."""

    message: Message
    occasion: Occasion
    weather: Weather
    recommendation: Recommendation
    generation: int

    @property
    def text(self) -> str:
        return self.message.text


class StylistSession:
    """UI state for one shopper.

    All mutations happen on the event loop thread and none of the guard
    methods await, so a check-and-set of ``loading`` or ``chat_loading`` is
    atomic with respect to other requests for the same session.
    """

    def __init__(self, session_id: str | None = None) -> None:
        self.session_id = session_id or str(uuid4())
        self.occasion: Optional[Occasion] = None
        self.weather: Optional[Weather] = None
        self.recommendation: Optional[Recommendation] = None
        self.loading = False
        self.last_request_failed = False
        self.chat_visibility = ChatVisibility.CLOSED
        self.chat_loading = False
        self._messages: List[Message] = []
        self._epoch = 0
        self._generation = 0
        self._tasks: set[asyncio.Task] = set()
        self.last_seen = 0.0

    # Selection panel

    def set_occasion(self, occasion: Occasion | str) -> None:
        self.occasion = Occasion(occasion)

    def set_weather(self, weather: Weather | str) -> None:
        self.weather = Weather(weather)

    # Recommendation lifecycle

    def begin_recommendation(self) -> Optional[RecommendationTicket]:
        """Claim the single recommendation slot, or return ``None`` if it is taken."""

        if self.occasion is None or self.weather is None:
            raise ValueError("Both occasion and weather must be selected")
        if self.loading:
            return None
        self._epoch += 1
        self.loading = True
        return RecommendationTicket(epoch=self._epoch, occasion=self.occasion, weather=self.weather)

    def is_current(self, ticket: RecommendationTicket) -> bool:
        return ticket.epoch == self._epoch

    def complete_recommendation(self, ticket: RecommendationTicket, recommendation: Recommendation) -> bool:
        """Install a fresh recommendation and reseed the transcript.

        Returns ``False`` without touching state when a newer request has
        been issued since ``ticket``.
        """

        if not self.is_current(ticket):
            return False
        self.recommendation = recommendation
        self._messages = [Message(role=Role.MODEL, text=greeting(ticket.occasion, ticket.weather))]
        self._generation += 1
        self.loading = False
        self.last_request_failed = False
        return True

    def fail_recommendation(self, ticket: RecommendationTicket) -> None:
        if not self.is_current(ticket):
            return
        self.loading = False
        self.last_request_failed = True

    # Chat

    @property
    def messages(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    def open_chat(self) -> None:
        if self.recommendation is None:
            raise ChatUnavailableError("Request a recommendation before asking the stylist")
        self.chat_visibility = ChatVisibility.OPEN

    def close_chat(self) -> None:
        self.chat_visibility = ChatVisibility.CLOSED

    def begin_chat(self, text: str) -> Optional[ChatTicket]:
        """Append the user's message and claim the chat slot.

        Returns ``None`` (and appends nothing) when the text is blank, no
        recommendation exists, or another chat call is still outstanding.
        """

        if not text or not text.strip():
            return None
        if self.chat_loading or self.recommendation is None:
            return None
        if self.occasion is None or self.weather is None:
            return None
        message = Message(role=Role.USER, text=text)
        self._messages.append(message)
        self.chat_loading = True
        return ChatTicket(
            message=message,
            occasion=self.occasion,
            weather=self.weather,
            recommendation=self.recommendation,
            generation=self._generation,
        )

    def finish_chat(self, ticket: ChatTicket, reply: str) -> Optional[Message]:
        """Append the model reply and release the chat slot.

        Returns ``None`` when a new recommendation reset the transcript after
        ``ticket`` was issued; the reply is dropped in that case.
        """

        self.chat_loading = False
        if ticket.generation != self._generation:
            return None
        message = Message(role=Role.MODEL, text=reply)
        self._messages.append(message)
        return message

    # Background work

    def track(self, task: asyncio.Task) -> None:
        """Hold a reference to a background request until it finishes."""

        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    @property
    def pending_tasks(self) -> Tuple[asyncio.Task, ...]:
        return tuple(self._tasks)

    @property
    def busy(self) -> bool:
        """True while a recommendation or chat request is outstanding."""

        return self.loading or self.chat_loading or bool(self._tasks)

    # Presentation

    @property
    def results_view(self) -> ResultsView:
        return select_results_view(self.recommendation is not None, self.loading)

    @property
    def can_request(self) -> bool:
        return self.occasion is not None and self.weather is not None and not self.loading

    def snapshot(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "occasion": self.occasion.value if self.occasion else None,
            "weather": self.weather.value if self.weather else None,
            "recommendation": self.recommendation.to_wire() if self.recommendation else None,
            "loading": self.loading,
            "last_request_failed": self.last_request_failed,
            "results_view": self.results_view.value,
            "chat": {
                "visibility": self.chat_visibility.value,
                "loading": self.chat_loading,
                "messages": [message.model_dump(mode="json") for message in self._messages],
            },
        }


class SessionStore:
    """Keeps live stylist sessions in process memory.

    Sessions are kept in least-recently-seen order. Creating a session first
    drops those idle for longer than ``idle_seconds``, then the oldest ones
    while ``max_sessions`` are held. A session with a request in flight is
    never dropped.
    """

    def __init__(
        self,
        max_sessions: int = 1000,
        idle_seconds: float = 3600,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.max_sessions = max_sessions
        self.idle_seconds = idle_seconds
        self._clock = clock
        self._sessions: "OrderedDict[str, StylistSession]" = OrderedDict()

    def create_session(self) -> StylistSession:
        self._evict()
        session = StylistSession()
        session.last_seen = self._clock()
        self._sessions[session.session_id] = session
        return session

    def session_exists(self, session_id: str | None) -> bool:
        return bool(session_id) and session_id in self._sessions

    def get(self, session_id: str) -> StylistSession:
        try:
            session = self._sessions[session_id]
        except KeyError:
            raise UnknownSessionError(session_id) from None
        self._touch(session)
        return session

    def get_or_create(self, session_id: str | None) -> StylistSession:
        if self.session_exists(session_id):
            return self.get(session_id)
        return self.create_session()

    def _touch(self, session: StylistSession) -> None:
        session.last_seen = self._clock()
        self._sessions.move_to_end(session.session_id)

    def _evict(self) -> List[str]:
        cutoff = self._clock() - self.idle_seconds
        removable = [sid for sid, session in self._sessions.items() if not session.busy]
        evicted = [sid for sid in removable if self._sessions[sid].last_seen < cutoff]
        overflow = len(self._sessions) - len(evicted) - self.max_sessions + 1
        if overflow > 0:
            expired = set(evicted)
            evicted += [sid for sid in removable if sid not in expired][:overflow]
        for session_id in evicted:
            del self._sessions[session_id]
        if evicted:
            log_event(LOGGER, logging.INFO, "sessions_evicted", count=len(evicted), remaining=len(self._sessions))
        return evicted

    def __len__(self) -> int:
        return len(self._sessions)


__all__ = [
    "ChatTicket",
    "ChatVisibility",
    "RecommendationTicket",
    "SessionStore",
    "StylistSession",
]
