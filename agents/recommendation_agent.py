"""Recommendation agent: one structured Gemini call per occasion/weather pair."""
from __future__ import annotations

import logging
from typing import Optional, Tuple

from google.genai import types

from logic.prompts import recommendation_prompt
from memory.session_store import RecommendationTicket, StylistSession
from models.outcomes import RecommendationOutcome, RequestStatus
from models.recommendation import Recommendation
from stylist_app.genai_client import GenAIClientProvider
from stylist_app.logging_config import get_logger, log_event, operation_context
from tools.observability import instrument_model_call

logger = get_logger(__name__)

RECOMMENDATION_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "outfit": types.Schema(type=types.Type.STRING, description="Detailed outfit recommendation"),
        "footwear": types.Schema(type=types.Type.STRING, description="Footwear suggestion"),
        "accessories": types.Schema(type=types.Type.STRING, description="Accessories recommendation"),
        "stylingTips": types.Schema(
            type=types.Type.STRING, description="Practical and trendy styling tips"
        ),
    },
    required=["outfit", "footwear", "accessories", "stylingTips"],
)


def parse_recommendation(raw_text: str | None) -> Recommendation:
    """Validate the model's JSON text against the four-field schema.

    Raises ``ValueError`` (pydantic's ``ValidationError`` included) when the
    text is empty, not JSON, or missing a required field.
    """

    if not raw_text or not raw_text.strip():
        raise ValueError("Model returned an empty recommendation")
    return Recommendation.model_validate_json(raw_text)


class RecommendationAgent:
    """Turns the shopper's selections into a structured outfit recommendation."""

    def __init__(self, client_provider: GenAIClientProvider) -> None:
        self.client_provider = client_provider

    async def request_recommendation(self, session: StylistSession) -> RecommendationOutcome:
        """Request a recommendation for the session's current selections.

        Missing selections make this a silent no-op and a request already in
        flight makes it ``busy``. Transport and parse failures are logged and
        leave the previous recommendation and transcript untouched.
        """

        status, ticket = self.claim(session)
        if ticket is None:
            return RecommendationOutcome(status=status)
        return await self.fulfil(session, ticket)

    def claim(self, session: StylistSession) -> Tuple[RequestStatus, Optional[RecommendationTicket]]:
        """Take the session's single recommendation slot without awaiting."""

        if session.occasion is None or session.weather is None:
            return RequestStatus.SKIPPED, None
        ticket = session.begin_recommendation()
        if ticket is None:
            return RequestStatus.BUSY, None
        return RequestStatus.OK, ticket

    async def fulfil(self, session: StylistSession, ticket: RecommendationTicket) -> RecommendationOutcome:
        """Call Gemini for a claimed ticket and settle the session state."""

        with operation_context("agent:recommendation.request", session_id=session.session_id) as correlation_id:
            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_started",
                agent="recommendation",
                method="request_recommendation",
                correlation_id=correlation_id,
                session_id=session.session_id,
                occasion=ticket.occasion.value,
                weather=ticket.weather.value,
                epoch=ticket.epoch,
            )
            try:
                try:
                    raw_text = await self._generate(recommendation_prompt(ticket.occasion, ticket.weather))
                    recommendation = parse_recommendation(raw_text)
                except Exception as exc:  # noqa: BLE001
                    log_event(
                        logger,
                        level=logging.ERROR,
                        event="recommendation_failed",
                        agent="recommendation",
                        correlation_id=correlation_id,
                        session_id=session.session_id,
                        error_type=type(exc).__name__,
                        exc_info=True,
                    )
                    session.fail_recommendation(ticket)
                    return RecommendationOutcome(status=RequestStatus.FAILED)

                if not session.complete_recommendation(ticket, recommendation):
                    log_event(
                        logger,
                        level=logging.INFO,
                        event="recommendation_discarded_stale",
                        agent="recommendation",
                        correlation_id=correlation_id,
                        session_id=session.session_id,
                        epoch=ticket.epoch,
                    )
                    return RecommendationOutcome(status=RequestStatus.STALE)
            finally:
                if session.loading and session.is_current(ticket):
                    # Cancelled mid-call: release the slot so the shopper can retry.
                    session.fail_recommendation(ticket)

            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_completed",
                agent="recommendation",
                method="request_recommendation",
                correlation_id=correlation_id,
                session_id=session.session_id,
            )
            return RecommendationOutcome(status=RequestStatus.OK, recommendation=recommendation)

    @instrument_model_call("generate_recommendation")
    async def _generate(self, prompt: str) -> str | None:
        client = self.client_provider.get()
        response = await client.aio.models.generate_content(
            model=self.client_provider.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=RECOMMENDATION_SCHEMA,
            ),
        )
        return response.text


__all__ = ["RECOMMENDATION_SCHEMA", "RecommendationAgent", "parse_recommendation"]
