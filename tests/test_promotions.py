import pytest

from pricetracker.ingest.models import Promotion
from pricetracker.logic.promotions import compute_promotion, discount_percent, index_country, index_promotions
from pricetracker.store.layout import read_json, write_json

from helpers import offer


def test_compute_promotion_basic():
    assert compute_promotion(offer("a", 750, 1000)) == Promotion(750, 1000, 25.0)


def test_no_promotion_when_not_discounted():
    assert compute_promotion(offer("a", 1000, 1000)) is None
    assert compute_promotion(offer("a", 1200, 1000)) is None


def test_no_promotion_for_zero_original_price():
    assert compute_promotion(offer("a", 0, 0)) is None
    assert compute_promotion(offer("a", -5, 0)) is None


def test_no_promotion_without_price():
    assert compute_promotion({"id": "a"}) is None
    assert compute_promotion({"id": "a", "price": {"totalPrice": {"originalPrice": 100}}}) is None


def test_non_numeric_price_raises():
    with pytest.raises(ValueError):
        compute_promotion(offer("a", "750", 1000))


def test_discount_percent_truncates():
    assert discount_percent(666, 999) == 33.33
    assert discount_percent(1, 3) == 66.66
    assert discount_percent(1999, 3999) == 50.01


def _store(layout, country, *offers):
    layout.ensure_country(country)
    for item in offers:
        write_json(layout.price_path(country, item["id"]), item, pretty=True)


def test_index_country_writes_mapping(layout):
    _store(layout, "US", offer("a", 750, 1000), offer("b", 500), offer("c", 0, 2000))

    result = index_country(layout, "US")

    assert result == {"a": [750, 1000, 25.0], "c": [0, 2000, 100.0]}
    assert read_json(layout.promotions_path("US")) == result
    assert layout.promotions_path("US").read_text() == '{"a":[750,1000,25.0],"c":[0,2000,100.0]}'


def test_index_replaces_previous_index(layout):
    _store(layout, "US", offer("a", 750, 1000))
    write_json(layout.promotions_path("US"), {"stale": [1, 2, 50.0]})

    index_country(layout, "US")

    assert read_json(layout.promotions_path("US")) == {"a": [750, 1000, 25.0]}


def test_bad_snapshot_is_excluded(layout, caplog):
    _store(layout, "US", offer("a", 750, 1000))
    layout.price_path("US", "broken").write_text("{oops")
    write_json(layout.price_path("US", "text"), offer("text", "cheap", 1000))
    (layout.prices_dir("US") / "notes.txt").write_text("ignored")

    result = index_country(layout, "US")

    assert result == {"a": [750, 1000, 25.0]}
    assert "broken.json" in caplog.text
    assert "text.json" in caplog.text


def test_countries_are_indexed_independently(layout):
    _store(layout, "US", offer("shared", 500, 1000), offer("us-only", 10, 20))
    _store(layout, "GB", offer("shared", 900, 1000))

    result = index_promotions(layout, ["US", "GB"])

    assert result["US"] == {"shared": [500, 1000, 50.0], "us-only": [10, 20, 50.0]}
    assert result["GB"] == {"shared": [900, 1000, 10.0]}
    assert read_json(layout.promotions_path("GB")) == {"shared": [900, 1000, 10.0]}


def test_missing_country_directory_gives_empty_index(layout):
    assert index_country(layout, "PL") == {}
    assert read_json(layout.promotions_path("PL")) == {}
