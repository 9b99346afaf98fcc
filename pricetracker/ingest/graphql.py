"""Catalog GraphQL client."""

from __future__ import annotations

import json
from typing import Any, Mapping

import httpx

DEFAULT_ENDPOINT = "https://graphql.epicgames.com/graphql"
DEFAULT_ORIGIN = "https://epicgames.com"


class GraphQLResponseError(RuntimeError):
    """The endpoint answered, but not with a clean GraphQL result.

    ``payload`` is the decoded response body (``None`` if it was not JSON) and
    ``data`` its ``data`` member, which may still hold a usable result.
    """

    def __init__(self, message: str, *, status_code: int, payload: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload

    @property
    def data(self) -> Any:
        if isinstance(self.payload, Mapping):
            return self.payload.get("data")
        return None


class CatalogClient:
    def __init__(
        self,
        url: str = DEFAULT_ENDPOINT,
        *,
        origin: str = DEFAULT_ORIGIN,
        session: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url
        self.headers = {"Origin": origin}
        self._owns_session = session is None
        self.session = session or httpx.AsyncClient(timeout=30.0)

    async def close(self) -> None:
        if self._owns_session:
            await self.session.aclose()

    async def request(self, query: str, variables: Mapping[str, Any] | None = None) -> Any:
        """POST ``query`` and return the result's ``data`` object.

        Transport failures without a response (``httpx.TransportError``)
        propagate unchanged.
        """
        response = await self.session.post(
            self.url,
            json={"query": query, "variables": dict(variables or {})},
            headers=self.headers,
        )
        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise GraphQLResponseError(
                f"Non-JSON response ({response.status_code})",
                status_code=response.status_code,
            ) from None
        if response.is_error:
            raise GraphQLResponseError(
                f"HTTP {response.status_code} from {self.url}",
                status_code=response.status_code,
                payload=payload,
            )
        if not isinstance(payload, Mapping):
            raise GraphQLResponseError(
                "Unexpected response body", status_code=response.status_code, payload=payload
            )
        if payload.get("errors"):
            raise GraphQLResponseError(
                f"GraphQL errors: {_summarize_errors(payload['errors'])}",
                status_code=response.status_code,
                payload=payload,
            )
        return payload.get("data")


def _summarize_errors(errors: Any) -> str:
    if not isinstance(errors, list):
        return str(errors)
    messages = [e.get("message", str(e)) if isinstance(e, Mapping) else str(e) for e in errors]
    return "; ".join(messages)
