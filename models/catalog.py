"""Closed catalogs of occasions and weather conditions shown in the selection panel."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple


class Occasion(str, Enum):
    CASUAL = "Casual"
    BUSINESS = "Business"
    WEDDING = "Wedding"
    DATE_NIGHT = "Date Night"
    PARTY = "Party"
    FORMAL_EVENT = "Formal Event"
    OUTDOOR_ADVENTURE = "Outdoor Adventure"


class Weather(str, Enum):
    SUNNY = "Sunny"
    RAINY = "Rainy"
    COLD = "Cold"
    HOT = "Hot"
    WINDY = "Windy"
    SNOWY = "Snowy"


@dataclass(frozen=True)
class CatalogEntry:
    """One selectable tile: the enum member plus the glyph rendered above it."""

    value: Occasion | Weather
    icon: str

    @property
    def label(self) -> str:
        return self.value.value


OCCASIONS: Tuple[CatalogEntry, ...] = (
    CatalogEntry(Occasion.CASUAL, "👕"),
    CatalogEntry(Occasion.BUSINESS, "💼"),
    CatalogEntry(Occasion.WEDDING, "✨"),
    CatalogEntry(Occasion.DATE_NIGHT, "❤"),
    CatalogEntry(Occasion.PARTY, "🎉"),
    CatalogEntry(Occasion.FORMAL_EVENT, "🎩"),
    CatalogEntry(Occasion.OUTDOOR_ADVENTURE, "⛰"),
)

WEATHERS: Tuple[CatalogEntry, ...] = (
    CatalogEntry(Weather.SUNNY, "☀"),
    CatalogEntry(Weather.RAINY, "🌧"),
    CatalogEntry(Weather.COLD, "❄"),
    CatalogEntry(Weather.HOT, "🌡"),
    CatalogEntry(Weather.WINDY, "🌬"),
    CatalogEntry(Weather.SNOWY, "☃"),
)


def catalog_payload() -> dict[str, List[dict[str, str]]]:
    """Serialisable view of both catalogs in display order."""

    return {
        "occasions": [{"label": entry.label, "icon": entry.icon} for entry in OCCASIONS],
        "weathers": [{"label": entry.label, "icon": entry.icon} for entry in WEATHERS],
    }


__all__ = ["CatalogEntry", "OCCASIONS", "Occasion", "WEATHERS", "Weather", "catalog_payload"]
