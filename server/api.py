"""FastAPI server exposing the AuraStyle page and its JSON actions."""

from __future__ import annotations

from fastapi import Cookie, FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from memory.session_store import StylistSession
from models.catalog import Occasion, Weather, catalog_payload
from models.outcomes import RequestStatus
from server.render import render_page
from stylist_app.app import StylistApp
from stylist_app.errors import ChatUnavailableError, UnknownSessionError

SESSION_COOKIE = "aurastyle_session"


class OccasionSelection(BaseModel):
    label: Occasion


class WeatherSelection(BaseModel):
    label: Weather


class RecommendationTrigger(BaseModel):
    """Browser callers set ``wait=false`` and poll the page instead."""

    wait: bool = True


class ChatMessageRequest(BaseModel):
    text: str = Field("", max_length=2000)
    wait: bool = True


def create_app(stylist_app: StylistApp | None = None) -> FastAPI:
    """Build the FastAPI app around a :class:`StylistApp`."""

    stylist = stylist_app or StylistApp()
    app = FastAPI(title="AuraStyle", version="0.1.0")
    app.state.stylist = stylist

    def _session(session_id: str) -> StylistSession:
        try:
            return stylist.get_session(session_id)
        except UnknownSessionError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    def _raise_if_busy(status: RequestStatus) -> None:
        if status is RequestStatus.BUSY:
            raise HTTPException(status_code=409, detail="A request is already in progress")

    @app.get("/", response_class=HTMLResponse)
    async def index(aurastyle_session: str | None = Cookie(default=None)) -> HTMLResponse:
        session = stylist.session_store.get_or_create(aurastyle_session)
        response = HTMLResponse(render_page(session))
        if session.session_id != aurastyle_session:
            response.set_cookie(SESSION_COOKIE, session.session_id, httponly=True, samesite="lax")
        return response

    @app.get("/healthz")
    async def healthcheck() -> dict:
        """Lightweight readiness probe."""

        return {
            "status": "ok",
            "service": "aurastyle",
            "environment": stylist.config.environment or "local",
            "model": stylist.config.model,
        }

    @app.get("/api/catalogs")
    async def catalogs() -> dict:
        return catalog_payload()

    @app.post("/api/sessions")
    async def create_session() -> dict:
        return stylist.create_session().snapshot()

    @app.get("/api/sessions/{session_id}")
    async def get_session(session_id: str) -> dict:
        return _session(session_id).snapshot()

    @app.post("/api/sessions/{session_id}/occasion")
    async def select_occasion(session_id: str, request: OccasionSelection) -> dict:
        _session(session_id)
        return stylist.select_occasion(session_id, request.label).snapshot()

    @app.post("/api/sessions/{session_id}/weather")
    async def select_weather(session_id: str, request: WeatherSelection) -> dict:
        _session(session_id)
        return stylist.select_weather(session_id, request.label).snapshot()

    @app.post("/api/sessions/{session_id}/recommendation")
    async def request_recommendation(session_id: str, request: RecommendationTrigger) -> dict:
        """Request a recommendation; failures come back as an outcome, never an HTTP error."""

        session = _session(session_id)
        if request.wait:
            outcome = await stylist.request_recommendation(session_id)
            status = outcome.status
        else:
            status = stylist.start_recommendation(session_id)
        _raise_if_busy(status)
        return {"outcome": status.value, "session": session.snapshot()}

    @app.post("/api/sessions/{session_id}/chat/open")
    async def open_chat(session_id: str) -> dict:
        _session(session_id)
        try:
            return stylist.open_chat(session_id).snapshot()
        except ChatUnavailableError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc

    @app.post("/api/sessions/{session_id}/chat/close")
    async def close_chat(session_id: str) -> dict:
        _session(session_id)
        return stylist.close_chat(session_id).snapshot()

    @app.post("/api/sessions/{session_id}/chat/messages")
    async def send_chat_message(session_id: str, request: ChatMessageRequest) -> dict:
        session = _session(session_id)
        if request.wait:
            outcome = await stylist.send_chat_message(session_id, request.text)
            status = outcome.status
        else:
            status = stylist.start_chat_message(session_id, request.text)
        _raise_if_busy(status)
        return {"outcome": status.value, "session": session.snapshot()}

    return app


def get_app() -> FastAPI:
    """Application factory for ASGI servers (``uvicorn --factory``)."""

    return create_app()

