"""Shared Google GenAI client handle.

The client is built once per app and handed to every agent that talks to
Gemini. Construction is deferred to the first model call so that a missing
``GEMINI_API_KEY`` shows up as a failed call instead of a startup crash.
"""
from __future__ import annotations

from typing import Any, Callable

from google import genai

from stylist_app.config import StylistConfig


class GenAIClientProvider:
    """Lazily create and cache a single ``genai.Client``."""

    def __init__(
        self,
        config: StylistConfig,
        client: Any | None = None,
        factory: Callable[[StylistConfig], Any] | None = None,
    ) -> None:
        self.config = config
        self._client = client
        self._factory = factory or _default_factory

    @property
    def model(self) -> str:
        return self.config.model

    def get(self) -> Any:
        """Return the shared client, constructing it on first use."""

        if self._client is None:
            self._client = self._factory(self.config)
        return self._client


def _default_factory(config: StylistConfig) -> genai.Client:
    return genai.Client(api_key=config.api_key)


__all__ = ["GenAIClientProvider"]
