"""Stylist chat agent grounded in the session's latest recommendation."""
from __future__ import annotations

import logging
from typing import Optional, Tuple

from google.genai import types

from logic.prompts import CHAT_EMPTY_REPLY, CHAT_FAILURE_REPLY, chat_system_instruction
from memory.session_store import ChatTicket, StylistSession
from models.outcomes import ChatOutcome, RequestStatus
from stylist_app.genai_client import GenAIClientProvider
from stylist_app.logging_config import get_logger, log_event, operation_context
from tools.observability import instrument_model_call

logger = get_logger(__name__)


class ChatAgent:
    """Answers follow-up styling questions one message at a time.

    Every turn opens a fresh Gemini chat whose system instruction embeds the
    occasion, weather and full recommendation captured when the message was
    sent, so replies never refer to a stale look.
    """

    def __init__(self, client_provider: GenAIClientProvider) -> None:
        self.client_provider = client_provider

    async def send_chat_message(self, session: StylistSession, text: str) -> ChatOutcome:
        """Append the user's message, ask the model, and append its reply."""

        status, ticket = self.claim(session, text)
        if ticket is None:
            return ChatOutcome(status=status)
        return await self.fulfil(session, ticket)

    def claim(self, session: StylistSession, text: str) -> Tuple[RequestStatus, Optional[ChatTicket]]:
        """Append the user message and take the chat slot without awaiting."""

        if session.chat_loading:
            return RequestStatus.BUSY, None
        ticket = session.begin_chat(text)
        if ticket is None:
            return RequestStatus.SKIPPED, None
        return RequestStatus.OK, ticket

    async def fulfil(self, session: StylistSession, ticket: ChatTicket) -> ChatOutcome:
        with operation_context("agent:chat.send_message", session_id=session.session_id) as correlation_id:
            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_started",
                agent="chat",
                method="send_chat_message",
                correlation_id=correlation_id,
                session_id=session.session_id,
                text=ticket.text,
            )
            status = RequestStatus.OK
            reply = CHAT_FAILURE_REPLY
            try:
                reply = await self._reply(ticket) or CHAT_EMPTY_REPLY
            except Exception as exc:  # noqa: BLE001
                status = RequestStatus.FAILED
                log_event(
                    logger,
                    level=logging.ERROR,
                    event="chat_failed",
                    agent="chat",
                    correlation_id=correlation_id,
                    session_id=session.session_id,
                    error_type=type(exc).__name__,
                    exc_info=True,
                )
            finally:
                model_message = session.finish_chat(ticket, reply)

            if model_message is None:
                log_event(
                    logger,
                    level=logging.INFO,
                    event="chat_reply_discarded_stale",
                    agent="chat",
                    correlation_id=correlation_id,
                    session_id=session.session_id,
                )
                return ChatOutcome(status=RequestStatus.STALE)

            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_completed",
                agent="chat",
                method="send_chat_message",
                correlation_id=correlation_id,
                session_id=session.session_id,
                status=status.value,
            )
            return ChatOutcome(status=status, appended=[ticket.message, model_message])

    @instrument_model_call("chat_send_message")
    async def _reply(self, ticket: ChatTicket) -> str | None:
        client = self.client_provider.get()
        chat = client.aio.chats.create(
            model=self.client_provider.model,
            config=types.GenerateContentConfig(
                system_instruction=chat_system_instruction(
                    ticket.occasion, ticket.weather, ticket.recommendation
                ),
            ),
        )
        response = await chat.send_message(ticket.text)
        return response.text


__all__ = ["ChatAgent"]
