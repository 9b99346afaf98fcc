"""Runtime settings loaded from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from pricetracker.ingest import load_countries
from pricetracker.ingest.graphql import DEFAULT_ENDPOINT, DEFAULT_ORIGIN
from pricetracker.ingest.paginate import DEFAULT_PER_PAGE, PAGE_DELAY, RETRY_DELAY
from pricetracker.store.layout import DEFAULT_DATABASE_PATH


@dataclass(slots=True, frozen=True)
class Settings:
    countries: list[str] = field(default_factory=list)
    database_path: Path = Path(DEFAULT_DATABASE_PATH)
    graphql_url: str = DEFAULT_ENDPOINT
    graphql_origin: str = DEFAULT_ORIGIN
    locale: str = "en"
    per_page: int = DEFAULT_PER_PAGE
    page_delay: float = PAGE_DELAY
    retry_delay: float = RETRY_DELAY
    git_remote: str | None = None
    git_branch: str = "master"
    git_author_name: str = "pricetracker"
    git_author_email: str = "pricetracker@localhost"
    # Accepted for compatibility; namespace discovery is not implemented.
    namespaces_url: str | None = None


def load_settings() -> Settings:
    """Create settings from environment variables (``.env`` is loaded by the caller)."""
    return Settings(
        countries=load_countries(),
        database_path=Path(os.environ.get("DATABASE_PATH", DEFAULT_DATABASE_PATH)),
        graphql_url=os.environ.get("GRAPHQL_URL", DEFAULT_ENDPOINT),
        graphql_origin=os.environ.get("GRAPHQL_ORIGIN", DEFAULT_ORIGIN),
        locale=os.environ.get("LOCALE", "en"),
        per_page=int(os.environ.get("PER_PAGE", DEFAULT_PER_PAGE)),
        page_delay=float(os.environ.get("PAGE_DELAY", PAGE_DELAY)),
        retry_delay=float(os.environ.get("RETRY_DELAY", RETRY_DELAY)),
        git_remote=os.environ.get("GIT_REMOTE") or None,
        git_branch=os.environ.get("GIT_BRANCH", "master"),
        git_author_name=os.environ.get("GIT_AUTHOR_NAME", "pricetracker"),
        git_author_email=os.environ.get("GIT_AUTHOR_EMAIL", "pricetracker@localhost"),
        namespaces_url=os.environ.get("NAMESPACES_URL") or None,
    )
