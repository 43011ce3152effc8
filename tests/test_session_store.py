"""Unit tests for stylist session state and the in-memory store."""

import pytest

from logic.view_state import ResultsView, select_results_view
from memory.session_store import ChatVisibility, SessionStore, StylistSession
from models.catalog import Occasion, Weather
from models.recommendation import Recommendation, Role
from stylist_app.errors import ChatUnavailableError, UnknownSessionError


def _recommendation() -> Recommendation:
    return Recommendation(
        outfit="Tailored trench over a knit dress",
        footwear="Waterproof Chelsea boots",
        accessories="Compact umbrella",
        stylingTips="Belt the trench",
    )


@pytest.mark.parametrize(
    "has_recommendation, is_loading, expected",
    [
        (False, False, ResultsView.EMPTY),
        (False, True, ResultsView.LOADING),
        (True, True, ResultsView.LOADING),
        (True, False, ResultsView.RESULT),
    ],
)
def test_results_view_is_exhaustive(has_recommendation: bool, is_loading: bool, expected: ResultsView) -> None:
    assert select_results_view(has_recommendation, is_loading) is expected


def test_selection_accepts_labels_and_rejects_unknown_values() -> None:
    session = StylistSession()
    session.set_occasion("Date Night")
    session.set_weather(Weather.WINDY)

    assert session.occasion is Occasion.DATE_NIGHT
    assert session.weather is Weather.WINDY
    with pytest.raises(ValueError):
        session.set_weather("Foggy")


def test_chat_visibility_requires_recommendation() -> None:
    session = StylistSession()
    with pytest.raises(ChatUnavailableError):
        session.open_chat()
    assert session.chat_visibility is ChatVisibility.CLOSED

    session.set_occasion(Occasion.CASUAL)
    session.set_weather(Weather.RAINY)
    ticket = session.begin_recommendation()
    session.complete_recommendation(ticket, _recommendation())

    session.open_chat()
    assert session.chat_visibility is ChatVisibility.OPEN
    session.close_chat()
    assert session.chat_visibility is ChatVisibility.CLOSED
    # Transcript survives a close/open cycle.
    session.open_chat()
    assert len(session.messages) == 1


def test_begin_recommendation_requires_both_selections() -> None:
    session = StylistSession()
    session.set_occasion(Occasion.PARTY)
    with pytest.raises(ValueError):
        session.begin_recommendation()


def test_snapshot_reports_wire_format() -> None:
    session = StylistSession()
    session.set_occasion(Occasion.WEDDING)
    session.set_weather(Weather.SUNNY)
    ticket = session.begin_recommendation()
    session.complete_recommendation(ticket, _recommendation())

    snapshot = session.snapshot()

    assert snapshot["occasion"] == "Wedding"
    assert snapshot["results_view"] == "result"
    assert snapshot["recommendation"]["stylingTips"] == "Belt the trench"
    assert snapshot["chat"]["messages"][0]["role"] == "model"
    assert "Wedding" in snapshot["chat"]["messages"][0]["text"]


def test_store_lookup_and_get_or_create() -> None:
    store = SessionStore()
    session = store.create_session()

    assert store.get(session.session_id) is session
    assert store.session_exists(session.session_id)
    assert store.get_or_create(session.session_id) is session
    assert store.get_or_create("missing") is not session
    assert len(store) == 2
    with pytest.raises(UnknownSessionError):
        store.get("nope")


class _Clock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def _loading_session(store: SessionStore) -> StylistSession:
    session = store.create_session()
    session.set_occasion(Occasion.PARTY)
    session.set_weather(Weather.HOT)
    session.begin_recommendation()
    return session


def test_store_drops_idle_sessions_on_create() -> None:
    clock = _Clock()
    store = SessionStore(max_sessions=10, idle_seconds=60, clock=clock)
    stale = store.create_session()
    clock.now += 30
    recent = store.create_session()

    clock.now += 45
    fresh = store.create_session()

    assert not store.session_exists(stale.session_id)
    assert store.session_exists(recent.session_id)
    assert store.session_exists(fresh.session_id)
    with pytest.raises(UnknownSessionError):
        store.get(stale.session_id)


def test_store_cap_evicts_least_recently_seen() -> None:
    clock = _Clock()
    store = SessionStore(max_sessions=2, idle_seconds=3600, clock=clock)
    first = store.create_session()
    clock.now += 1
    second = store.create_session()
    clock.now += 1
    store.get(first.session_id)

    third = store.create_session()

    assert len(store) == 2
    assert store.session_exists(first.session_id)
    assert not store.session_exists(second.session_id)
    assert store.session_exists(third.session_id)


def test_store_keeps_sessions_with_requests_in_flight() -> None:
    clock = _Clock()
    store = SessionStore(max_sessions=1, idle_seconds=60, clock=clock)
    busy = _loading_session(store)
    clock.now += 600

    newcomer = store.create_session()

    assert store.session_exists(busy.session_id)
    assert store.session_exists(newcomer.session_id)
    assert len(store) == 2


def test_store_size_stays_bounded_under_repeated_creation() -> None:
    store = SessionStore(max_sessions=5)
    for _ in range(50):
        store.create_session()
    assert len(store) == 5


def test_finish_chat_reports_dropped_reply() -> None:
    session = StylistSession()
    session.set_occasion(Occasion.CASUAL)
    session.set_weather(Weather.SUNNY)
    session.complete_recommendation(session.begin_recommendation(), _recommendation())
    ticket = session.begin_chat("Sandals?")
    session.complete_recommendation(session.begin_recommendation(), _recommendation())

    assert session.finish_chat(ticket, "Yes") is None
    assert session.chat_loading is False
    assert len(session.messages) == 1
    assert session.messages[0].role is Role.MODEL
