"""Promotion derivation from stored offer snapshots."""

from __future__ import annotations

import logging
import math
from numbers import Real
from typing import Any, Iterable, Mapping

from pricetracker.ingest.models import Promotion
from pricetracker.store.layout import DatabaseLayout, read_json, write_json

logger = logging.getLogger(__name__)


def discount_percent(discount_price: float, original_price: float) -> float:
    """Percent off ``original_price``, truncated to two decimals."""
    return round(math.floor((100 - discount_price / original_price * 100) * 100) / 100, 2)


def compute_promotion(offer: Mapping[str, Any]) -> Promotion | None:
    total = (offer.get("price") or {}).get("totalPrice") or {}
    original = total.get("originalPrice")
    discount = total.get("discountPrice")
    if original is None or discount is None:
        return None
    for value in (original, discount):
        if isinstance(value, bool) or not isinstance(value, Real):
            raise ValueError(f"Non-numeric price {value!r} for offer {offer.get('id')}")
    if original <= 0 or discount >= original:
        return None
    return Promotion(
        discount_price=discount,
        original_price=original,
        discount_percent=discount_percent(discount, original),
    )


def index_country(layout: DatabaseLayout, country: str) -> dict[str, list[int | float]]:
    """Rebuild ``promotions/<country>.json`` from the country's current snapshots."""
    promotions: dict[str, list[int | float]] = {}
    prices_dir = layout.prices_dir(country)
    paths = sorted(prices_dir.glob("*.json")) if prices_dir.is_dir() else []
    for path in paths:
        try:
            offer = read_json(path)
            promotion = compute_promotion(offer)
        except (OSError, ValueError, TypeError, AttributeError):
            logger.exception("Cannot index snapshot %s", path)
            continue
        if promotion is not None:
            promotions[str(offer.get("id", path.stem))] = promotion.as_row()
    layout.promotions_dir.mkdir(parents=True, exist_ok=True)
    write_json(layout.promotions_path(country), promotions)
    return promotions


def index_promotions(layout: DatabaseLayout, countries: Iterable[str]) -> dict[str, dict[str, list[int | float]]]:
    logger.info("Indexing...")
    result: dict[str, dict[str, list[int | float]]] = {}
    for country in countries:
        result[country] = index_country(layout, country)
        logger.info("Indexed %s promotions for %s", len(result[country]), country)
    return result
