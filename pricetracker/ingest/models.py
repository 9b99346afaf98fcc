"""Ingestion data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence


@dataclass(slots=True, frozen=True)
class Paging:
    start: int
    count: int
    total: int

    @property
    def next_start(self) -> int:
        return self.start + self.count

    @property
    def exhausted(self) -> bool:
        return self.next_start >= self.total


@dataclass(slots=True, frozen=True)
class Page:
    elements: Sequence[Mapping[str, Any]]
    paging: Paging

    @classmethod
    def from_selection(cls, selection: Any) -> Page | None:
        """Build a page from a selector result, or ``None`` if it is not a usable page."""
        if not isinstance(selection, Mapping):
            return None
        elements = selection.get("elements")
        paging = selection.get("paging")
        if not isinstance(elements, list) or not isinstance(paging, Mapping):
            return None
        values = [paging.get(key) for key in ("start", "count", "total")]
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in values):
            return None
        start, count, total = values
        return cls(elements=elements, paging=Paging(start=start, count=count, total=total))


@dataclass(slots=True, frozen=True)
class Promotion:
    discount_price: int
    original_price: int
    discount_percent: float

    def as_row(self) -> list[int | float]:
        return [self.discount_price, self.original_price, self.discount_percent]


@dataclass(slots=True)
class TrackingStats:
    fetch_currencies_ms: int | None = None
    fetch_offer_prices_ms: int | None = None
    index_ms: int | None = None
    last_update: int | None = None
    last_update_string: str | None = None
    offers_saved: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "timeUnit": "ms",
            "fetchStoreCurrencies": self.fetch_currencies_ms,
            "fetchStoreOfferPricesTime": self.fetch_offer_prices_ms,
            "indexTime": self.index_ms,
            "lastUpdate": self.last_update,
            "lastUpdateString": self.last_update_string,
            "offersSaved": dict(self.offers_saved),
        }
