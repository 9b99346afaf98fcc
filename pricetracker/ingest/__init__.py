"""Ingestion helpers."""

from __future__ import annotations

import os
import pathlib
from typing import Any, Mapping

import yaml

COUNTRIES_PATH = pathlib.Path(__file__).with_name("countries.yml")
QUERIES_DIR = pathlib.Path(__file__).with_name("queries")

CURRENCIES_QUERY = "FetchCurrenciesQuery"
STORE_OFFER_PRICE_QUERY = "FetchStoreOfferPriceQuery"


def load_query(name: str) -> str:
    return (QUERIES_DIR / f"{name}.graphql").read_text(encoding="utf-8")


def load_countries(value: str | None = None) -> list[str]:
    """Countries from a comma-separated ``COUNTRIES`` value, else the bundled list."""
    if value is None:
        value = os.environ.get("COUNTRIES")
    if value is not None:
        return [c.strip() for c in value.split(",") if c.strip()]
    data = yaml.safe_load(COUNTRIES_PATH.read_text()) or []
    return [str(item).strip() for item in data if str(item).strip()]


def select_path(*keys: str):
    """Return a selector that walks ``keys`` into a GraphQL ``data`` object."""

    def selector(data: Mapping[str, Any] | None) -> Any:
        node: Any = data
        for key in keys:
            if not isinstance(node, Mapping):
                return {}
            node = node.get(key)
        return node or {}

    return selector


select_currencies = select_path("Catalog", "supportedCurrencies")
select_search_store = select_path("Catalog", "searchStore")
