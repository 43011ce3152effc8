"""Result envelopes returned by the recommendation and chat agents."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from models.recommendation import Message, Recommendation


class RequestStatus(str, Enum):
    OK = "ok"
    SKIPPED = "skipped"
    BUSY = "busy"
    FAILED = "failed"
    STALE = "stale"


@dataclass
class RecommendationOutcome:
    status: RequestStatus
    recommendation: Optional[Recommendation] = None


@dataclass
class ChatOutcome:
    status: RequestStatus
    appended: List[Message] = field(default_factory=list)


__all__ = ["ChatOutcome", "RecommendationOutcome", "RequestStatus"]
