"""On-disk layout of the price database."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_DATABASE_PATH = "database"


@dataclass(slots=True, frozen=True)
class DatabaseLayout:
    root: Path

    @property
    def currencies_path(self) -> Path:
        return self.root / "currencies.json"

    @property
    def tracking_stats_path(self) -> Path:
        return self.root / "tracking-stats.json"

    @property
    def promotions_dir(self) -> Path:
        return self.root / "promotions"

    def prices_dir(self, country: str) -> Path:
        return self.root / "prices" / country

    def price_path(self, country: str, offer_id: str) -> Path:
        return self.prices_dir(country) / f"{offer_id}.json"

    def history_dir(self, country: str) -> Path:
        return self.root / "prices-history" / country

    def history_path(self, country: str, offer_id: str) -> Path:
        return self.history_dir(country) / f"{offer_id}.json"

    def promotions_path(self, country: str) -> Path:
        return self.promotions_dir / f"{country}.json"

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def ensure_country(self, country: str) -> None:
        for path in (self.prices_dir(country), self.history_dir(country), self.promotions_dir):
            path.mkdir(parents=True, exist_ok=True)


def write_json(path: Path, value: Any, *, pretty: bool = False) -> None:
    """Write ``value`` to a temp file beside ``path``, then replace ``path`` with it."""
    if pretty:
        text = json.dumps(value, indent=2, ensure_ascii=False)
    else:
        text = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        tmp_path.write_text(text, encoding="utf-8")
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))
