"""Rebuild promotion indexes from stored snapshots without fetching."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from pricetracker.config import load_settings
from pricetracker.logic.promotions import index_promotions
from pricetracker.store.layout import DatabaseLayout


def main() -> None:
    load_dotenv()
    logging.basicConfig(level=logging.INFO)
    settings = load_settings()
    layout = DatabaseLayout(settings.database_path)
    result = index_promotions(layout, settings.countries)
    for country, promotions in result.items():
        print(f"{country}: {len(promotions)} promotions")


if __name__ == "__main__":
    main()
