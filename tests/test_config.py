from pathlib import Path

import pendulum

from pricetracker.config import load_settings
from pricetracker.ingest import load_countries, load_query, select_search_store
from pricetracker.utils.dates import epoch_millis, iso_timestamp


def test_countries_from_env(monkeypatch):
    monkeypatch.setenv("COUNTRIES", " US, GB ,,PL ")
    assert load_countries() == ["US", "GB", "PL"]


def test_empty_countries_env_means_no_countries(monkeypatch):
    monkeypatch.setenv("COUNTRIES", "")
    assert load_countries() == []


def test_countries_fall_back_to_bundled_list(monkeypatch):
    monkeypatch.delenv("COUNTRIES", raising=False)
    countries = load_countries()
    assert "US" in countries
    assert all(c == c.strip() and c for c in countries)


def test_load_settings(monkeypatch):
    monkeypatch.setenv("COUNTRIES", "US")
    monkeypatch.setenv("DATABASE_PATH", "/tmp/prices-db")
    monkeypatch.setenv("PER_PAGE", "250")
    monkeypatch.setenv("GIT_REMOTE", "")
    monkeypatch.delenv("GIT_BRANCH", raising=False)

    settings = load_settings()

    assert settings.countries == ["US"]
    assert settings.database_path == Path("/tmp/prices-db")
    assert settings.per_page == 250
    assert settings.git_remote is None
    assert settings.git_branch == "master"
    assert settings.retry_delay == 5.0


def test_bundled_queries_request_paging():
    query = load_query("FetchStoreOfferPriceQuery")
    assert "searchStore" in query and "paging" in query


def test_selector_tolerates_missing_nodes():
    assert select_search_store(None) == {}
    assert select_search_store({"Catalog": None}) == {}
    assert select_search_store({"Catalog": {"searchStore": {"elements": []}}}) == {"elements": []}


def test_iso_timestamp_format():
    value = pendulum.datetime(2024, 5, 1, 14, 0, 0, 123000, tz="Europe/Warsaw")
    assert iso_timestamp(value) == "2024-05-01T12:00:00.123Z"
    assert epoch_millis(pendulum.datetime(1970, 1, 1, 0, 0, 1, tz="UTC")) == 1000
