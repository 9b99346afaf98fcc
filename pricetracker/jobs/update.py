"""Price update job: currencies, offer prices, promotions index, publish."""

from __future__ import annotations

import asyncio
import logging
import os
import signal
import time
from dataclasses import dataclass
from typing import Any

from dotenv import load_dotenv

from pricetracker.config import Settings, load_settings
from pricetracker.ingest import (
    CURRENCIES_QUERY,
    STORE_OFFER_PRICE_QUERY,
    load_query,
    select_currencies,
    select_search_store,
)
from pricetracker.ingest.graphql import CatalogClient
from pricetracker.ingest.models import TrackingStats
from pricetracker.ingest.paginate import fetch_all_elements
from pricetracker.logic.promotions import index_promotions
from pricetracker.publish.git import GitPublisher
from pricetracker.store.layout import DatabaseLayout, write_json
from pricetracker.store.persist import OfferPersister
from pricetracker.utils.dates import epoch_millis, iso_timestamp, utc_now
from pricetracker.utils.retry import CancelToken

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class RunContext:
    settings: Settings
    layout: DatabaseLayout
    client: CatalogClient
    persister: OfferPersister
    cancel: CancelToken | None = None

    def fetch_all(self, query_name: str, params: dict[str, Any] | None, selector):
        return fetch_all_elements(
            self.client,
            load_query(query_name),
            params,
            selector,
            per_page=self.settings.per_page,
            page_delay=self.settings.page_delay,
            retry_delay=self.settings.retry_delay,
            cancel=self.cancel,
        )


async def fetch_currencies(ctx: RunContext) -> dict[str, Any]:
    currencies: dict[str, Any] = {}
    async for element in ctx.fetch_all(CURRENCIES_QUERY, None, select_currencies):
        currencies[element["code"]] = element
    ctx.layout.ensure_root()
    write_json(ctx.layout.currencies_path, currencies, pretty=True)
    logger.info("Saved %s currencies", len(currencies))
    return currencies


async def update_country_prices(ctx: RunContext, country: str) -> int:
    logger.info("Updating prices for country %s...", country)
    ctx.layout.ensure_country(country)
    params = {
        "country": country,
        "locale": ctx.settings.locale,
        "sortBy": "lastModifiedDate",
        "sortDir": "DESC",
    }
    saved = 0
    async for offer in ctx.fetch_all(STORE_OFFER_PRICE_QUERY, params, select_search_store):
        if ctx.persister.save(country, offer):
            saved += 1
    logger.info("Saved %s priced offers for %s", saved, country)
    return saved


async def run_update(
    settings: Settings | None = None,
    *,
    client: CatalogClient | None = None,
    publisher: GitPublisher | None = None,
    cancel: CancelToken | None = None,
) -> TrackingStats:
    settings = settings or load_settings()
    layout = DatabaseLayout(settings.database_path)
    owns_client = client is None
    client = client or CatalogClient(settings.graphql_url, origin=settings.graphql_origin)
    publisher = publisher or GitPublisher(
        layout,
        remote_url=settings.git_remote,
        branch=settings.git_branch,
        author_name=settings.git_author_name,
        author_email=settings.git_author_email,
    )
    ctx = RunContext(
        settings=settings,
        layout=layout,
        client=client,
        persister=OfferPersister(layout),
        cancel=cancel,
    )
    stats = TrackingStats()
    try:
        checkpoint = time.monotonic()
        await fetch_currencies(ctx)
        stats.fetch_currencies_ms = _elapsed_ms(checkpoint)

        checkpoint = time.monotonic()
        for country in settings.countries:
            stats.offers_saved[country] = await update_country_prices(ctx, country)
        stats.fetch_offer_prices_ms = _elapsed_ms(checkpoint)
    finally:
        if owns_client:
            await client.close()

    checkpoint = time.monotonic()
    await asyncio.get_running_loop().run_in_executor(None, index_promotions, layout, settings.countries)
    stats.index_ms = _elapsed_ms(checkpoint)

    finished = utc_now()
    stats.last_update = epoch_millis(finished)
    stats.last_update_string = iso_timestamp(finished)

    await asyncio.get_running_loop().run_in_executor(None, publisher.publish, stats)
    return stats


def _elapsed_ms(checkpoint: float) -> int:
    return int((time.monotonic() - checkpoint) * 1000)


async def _run_with_signals() -> TrackingStats:
    cancel = CancelToken()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, cancel.cancel)
        except NotImplementedError:  # pragma: no cover - Windows event loops
            pass
    return await run_update(cancel=cancel)


def main() -> None:
    load_dotenv()
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    stats = asyncio.run(_run_with_signals())
    logger.info("Update finished: %s", stats.to_dict())


if __name__ == "__main__":
    main()
