"""Offer snapshot and price history persistence."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Mapping

from pricetracker.store.layout import DatabaseLayout, read_json, write_json
from pricetracker.utils.dates import iso_timestamp_now
from pricetracker.utils.payloads import dump_payload

logger = logging.getLogger(__name__)


class OfferPersister:
    def __init__(self, layout: DatabaseLayout, *, clock: Callable[[], str] = iso_timestamp_now) -> None:
        self.layout = layout
        self.clock = clock

    def save(self, country: str, offer: Mapping[str, Any]) -> bool:
        """Write the offer snapshot and record a history entry if its price changed.

        Offers without a price are skipped. Snapshot and history failures are
        logged and isolated from each other and from the rest of the run.
        """
        if not offer.get("price"):
            return False
        offer_id = offer.get("id")
        if not offer_id:
            logger.warning("Skipping priced offer without id for %s\n%s", country, dump_payload(offer))
            return False
        try:
            write_json(self.layout.price_path(country, offer_id), offer, pretty=True)
        except (OSError, TypeError, ValueError):
            logger.exception("%s = ERROR writing snapshot for %s\n%s", offer_id, country, dump_payload(offer))
        try:
            self._update_history(country, offer_id, offer["price"]["totalPrice"]["discountPrice"])
        except (OSError, KeyError, TypeError, ValueError, IndexError):
            logger.exception("%s = CANNOT UPDATE PRICE HISTORY for %s\n%s", offer_id, country, dump_payload(offer))
        return True

    def read_history(self, country: str, offer_id: str) -> list[list[Any]]:
        path = self.layout.history_path(country, offer_id)
        if not path.exists():
            return []
        return read_json(path)

    def _update_history(self, country: str, offer_id: str, current_price: Any) -> None:
        history = self.read_history(country, offer_id)
        latest = history[0][1] if history and len(history[0]) > 1 else None
        if latest is None or latest != current_price:
            history.insert(0, [self.clock(), current_price])
        write_json(self.layout.history_path(country, offer_id), history)
