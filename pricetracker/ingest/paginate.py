"""Cursor-based retrieval of paginated catalog collections."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any, Mapping

from pricetracker.ingest.graphql import CatalogClient, GraphQLResponseError
from pricetracker.ingest.models import Page
from pricetracker.utils.payloads import dump_payload
from pricetracker.utils.retry import CancelToken, backoff_sleep

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 1000
PAGE_DELAY = 1.0
RETRY_DELAY = 5.0
MAX_STALLED_PAGES = 10

Selector = Callable[[Any], Any]
Sleep = Callable[[float], Awaitable[None]]


class PaginationError(RuntimeError):
    pass


async def fetch_page(
    client: CatalogClient,
    query: str,
    variables: Mapping[str, Any],
    selector: Selector,
    *,
    retry_delay: float = RETRY_DELAY,
    cancel: CancelToken | None = None,
    sleep: Sleep = asyncio.sleep,
) -> Page:
    """Fetch one page, retrying the same request until it yields a usable page.

    An error response whose ``data`` still selects to a valid page is
    accepted as-is. Any other error response is retried after
    ``retry_delay`` seconds with no attempt limit. Failures without a
    response propagate.
    """
    attempt = 0
    while True:
        if cancel is not None:
            cancel.raise_if_cancelled()
        attempt += 1
        try:
            data = await client.request(query, variables)
        except GraphQLResponseError as exc:
            page = Page.from_selection(selector(exc.data)) if exc.data is not None else None
            if page is not None:
                logger.info("Using page data from error response (%s)", exc.status_code)
                return page
            logger.warning(
                "Request failed (attempt %s, start=%s): %s\n%s",
                attempt,
                variables.get("start"),
                exc,
                dump_payload(exc.payload),
            )
            logger.warning("Next attempt in %ss...", retry_delay)
            await backoff_sleep(retry_delay, cancel, sleep=sleep)
            continue
        page = Page.from_selection(selector(data))
        if page is None:
            raise PaginationError(f"Response has no elements/paging: {dump_payload(data)}")
        return page


async def fetch_all_elements(
    client: CatalogClient,
    query: str,
    params: Mapping[str, Any] | None,
    selector: Selector,
    *,
    per_page: int = DEFAULT_PER_PAGE,
    page_delay: float = PAGE_DELAY,
    retry_delay: float = RETRY_DELAY,
    cancel: CancelToken | None = None,
    max_stalled_pages: int = MAX_STALLED_PAGES,
    sleep: Sleep = asyncio.sleep,
) -> AsyncIterator[Mapping[str, Any]]:
    """Yield every element of the collection in API order.

    Elements of a page are yielded before the next page is requested. The
    next request continues from ``paging.start + paging.count`` as returned by
    the API and the sequence ends once that reaches ``paging.total``. A page
    reporting ``count <= 0`` before the end is not consumed; the same cursor is
    requested again with ``per_page``, at most ``max_stalled_pages`` times in a
    row before :class:`PaginationError`.
    """
    start, count = 0, per_page
    stalled = 0
    while True:
        variables = {**(params or {}), "start": start, "count": count}
        page = await fetch_page(
            client, query, variables, selector, retry_delay=retry_delay, cancel=cancel, sleep=sleep
        )
        if page.paging.count <= 0 and page.paging.total > start:
            # No progress: ask for the same cursor again at full page size.
            stalled += 1
            if stalled > max_stalled_pages:
                raise PaginationError(
                    f"No progress at start={start} after {stalled} pages with count {page.paging.count}"
                )
            logger.warning(
                "Paging count %s at start=%s (total %s); requesting the page again",
                page.paging.count,
                start,
                page.paging.total,
            )
            await sleep(page_delay)
            count = per_page
            continue
        stalled = 0
        for element in page.elements:
            yield element
        await sleep(page_delay)
        if page.paging.exhausted or page.paging.count <= 0:
            break
        start, count = page.paging.next_start, page.paging.count
