"""Model package exports."""

from models.catalog import OCCASIONS, WEATHERS, CatalogEntry, Occasion, Weather
from models.outcomes import ChatOutcome, RecommendationOutcome, RequestStatus
from models.recommendation import Message, Recommendation, Role

__all__ = [
    "CatalogEntry",
    "ChatOutcome",
    "Message",
    "OCCASIONS",
    "Occasion",
    "Recommendation",
    "RecommendationOutcome",
    "RequestStatus",
    "Role",
    "WEATHERS",
    "Weather",
]
