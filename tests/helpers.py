"""Shared test doubles and record builders."""

from pricetracker.ingest.graphql import GraphQLResponseError


class FakeCatalog:
    """In-memory stand-in for ``CatalogClient`` serving one paginated collection.

    ``failures`` maps a page ``start`` to exceptions raised (in order) before
    that page is served.
    """

    def __init__(self, items, *, failures=None, path=("Catalog", "searchStore")):
        self.items = list(items)
        self.failures = {start: list(errors) for start, errors in (failures or {}).items()}
        self.path = path
        self.calls: list[dict] = []

    async def request(self, query, variables=None):
        variables = dict(variables or {})
        self.calls.append(variables)
        start = variables["start"]
        pending = self.failures.get(start)
        if pending:
            raise pending.pop(0)
        return self.page_data(start, variables["count"])

    def page_data(self, start, count):
        node = {
            "elements": self.items[start:start + count],
            "paging": {"start": start, "count": count, "total": len(self.items)},
        }
        for key in reversed(self.path):
            node = {key: node}
        return node


def offer(offer_id, discount, original=None, **extra):
    original = discount if original is None else original
    return {
        "id": offer_id,
        "title": f"Offer {offer_id}",
        "price": {"totalPrice": {"discountPrice": discount, "originalPrice": original}},
        **extra,
    }


def response_error(status_code=502, payload=None):
    return GraphQLResponseError(f"HTTP {status_code}", status_code=status_code, payload=payload)
