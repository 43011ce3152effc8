"""Recommendation and chat message schemas."""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Recommendation(BaseModel):
    """Structured stylist answer; all four fields are required plain text."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    outfit: str = Field(description="Detailed outfit recommendation")
    footwear: str = Field(description="Footwear suggestion")
    accessories: str = Field(description="Accessories recommendation")
    styling_tips: str = Field(alias="stylingTips", description="Practical and trendy styling tips")

    def to_wire(self) -> dict[str, str]:
        """Return the camelCase payload the model produced."""

        return self.model_dump(by_alias=True)


class Role(str, Enum):
    USER = "user"
    MODEL = "model"


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role
    text: str


__all__ = ["Message", "Recommendation", "Role"]
