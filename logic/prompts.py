"""Prompt, system instruction and fixed reply templates shared by the agents."""

from __future__ import annotations

import json

from models.catalog import Occasion, Weather
from models.recommendation import Recommendation

CHAT_EMPTY_REPLY = "I'm sorry, I couldn't process that."
CHAT_FAILURE_REPLY = "I'm having trouble connecting right now. Please try again."


def recommendation_prompt(occasion: Occasion, weather: Weather) -> str:
    """Instruction sent with the structured recommendation request."""

    return (
        "As a professional fashion stylist, generate a detailed outfit recommendation "
        f"for a {occasion.value} occasion in {weather.value} weather. "
        "Return the response in JSON format."
    )


def greeting(occasion: Occasion, weather: Weather) -> str:
    """Seed message that opens every fresh transcript."""

    return (
        f"Hello! I've generated a {occasion.value} look for {weather.value} weather. "
        "Do you have any specific questions about this outfit or need more styling advice?"
    )


def chat_system_instruction(
    occasion: Occasion, weather: Weather, recommendation: Recommendation
) -> str:
    """Ground the chat in the latest recommendation."""

    return (
        "You are a professional fashion stylist. You just recommended an outfit for a "
        f"{occasion.value} occasion in {weather.value} weather. "
        f"The recommendation was: {json.dumps(recommendation.to_wire())}. "
        "Answer the user's questions about fashion, styling, and this specific recommendation. "
        "Keep it trendy, practical, and encouraging."
    )


__all__ = [
    "CHAT_EMPTY_REPLY",
    "CHAT_FAILURE_REPLY",
    "chat_system_instruction",
    "greeting",
    "recommendation_prompt",
]
