"""
Persistence and management of the salesperson collection.

The whole collection is one JSON document. Every change is a full cycle:
load the snapshot, change it in memory, write the snapshot back. There is
a single writer at a time, so no finer locking is done.

To swap the JSON file for a database:
    Replace SnapshotStore.load/save; the list-in, list-out operations
    below stay unchanged.
"""

import json
import logging
import uuid
from pathlib import Path
from typing import Callable

import pandas as pd

from .config import DEFAULT_PHOTO_URL, STORAGE_KEY, STORE_FILE
from .errors import SalespersonNotFoundError, SalespersonValidationError
from .loaders import empty_daily_frame
from .models import Salesperson
from .simulator import generate_salespeople

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Load / save the salesperson collection as one JSON document."""

    def __init__(self, path: str | Path | None = None, seed: bool = True):
        self.path = Path(path) if path is not None else STORE_FILE
        self.seed = seed

    def load(self) -> list[Salesperson]:
        """Read the snapshot; seed it with demo data if the file does not exist."""
        if not self.path.exists():
            people = generate_salespeople() if self.seed else []
            logger.info("No store at %s, starting with %d salespeople", self.path, len(people))
            self.save(people)
            return people

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.exception("Failed to read store: %s", self.path)
            raise

        people = [Salesperson.from_dict(item) for item in raw.get(STORAGE_KEY, [])]
        logger.info("Loaded %d salespeople from %s", len(people), self.path)
        return people

    def save(self, people: list[Salesperson]) -> None:
        """Overwrite the snapshot with the given collection."""
        doc = {STORAGE_KEY: [sp.to_dict() for sp in people]}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(doc, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(self.path)
        logger.info("Saved %d salespeople to %s", len(people), self.path)

    def mutate(self, change: Callable[..., list[Salesperson]], *args, **kwargs) -> list[Salesperson]:
        """Load, apply `change(people, *args, **kwargs)`, save and return the result.

        Nothing is written if `change` raises.
        """
        people = self.load()
        updated = change(people, *args, **kwargs)
        self.save(updated)
        return updated


# ---------------------------------------------------------------------------
# Collection operations: each returns a new list
# ---------------------------------------------------------------------------

def _require_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise SalespersonValidationError("O nome da vendedora é obrigatório.")
    return name


def _index_of(people: list[Salesperson], salesperson_id: str) -> int:
    for i, sp in enumerate(people):
        if sp.id == salesperson_id:
            return i
    raise SalespersonNotFoundError(f"Vendedora '{salesperson_id}' não encontrada.")


def find_salesperson(people: list[Salesperson], salesperson_id: str) -> Salesperson:
    return people[_index_of(people, salesperson_id)]


def add_salesperson(
    people: list[Salesperson],
    name: str,
    photo_url: str = "",
    google_sheet_id: str = "",
) -> list[Salesperson]:
    """Append a new salesperson with no data and a generated id."""
    name = _require_name(name)
    new = Salesperson(
        id=uuid.uuid4().hex,
        name=name,
        photo_url=photo_url or DEFAULT_PHOTO_URL.format(name=name),
        google_sheet_id=google_sheet_id or "",
    )
    logger.info("Added salesperson '%s' (%s)", name, new.id)
    return [*people, new]


def update_salesperson(
    people: list[Salesperson],
    salesperson_id: str,
    name: str,
    photo_url: str = "",
    google_sheet_id: str = "",
) -> list[Salesperson]:
    """Edit name, photo and sheet id; the daily records are kept."""
    name = _require_name(name)
    idx = _index_of(people, salesperson_id)
    current = people[idx]
    updated = Salesperson(
        id=current.id,
        name=name,
        photo_url=photo_url,
        google_sheet_id=google_sheet_id or "",
        data=current.data,
    )
    return [*people[:idx], updated, *people[idx + 1:]]


def remove_salesperson(people: list[Salesperson], salesperson_id: str) -> list[Salesperson]:
    _index_of(people, salesperson_id)
    return [sp for sp in people if sp.id != salesperson_id]


def import_daily_records(
    people: list[Salesperson],
    salesperson_id: str,
    records: pd.DataFrame,
) -> list[Salesperson]:
    """Replace one salesperson's records with a freshly parsed import."""
    idx = _index_of(people, salesperson_id)
    logger.info("Importing %d records for '%s'", len(records), people[idx].name)
    return [*people[:idx], people[idx].with_data(records), *people[idx + 1:]]


def has_any_data(people: list[Salesperson]) -> bool:
    return any(not sp.data.empty for sp in people)


def clear_all_data(people: list[Salesperson]) -> list[Salesperson]:
    """Empty every salesperson's records. Irreversible once saved."""
    logger.warning("Clearing daily records of %d salespeople", len(people))
    return [sp.with_data(empty_daily_frame()) for sp in people]


def refresh_sales_data(store: SnapshotStore) -> list[Salesperson]:
    """Stand-in for a Google Sheets sync: re-read the current snapshot."""
    logger.info("Refreshing sales data from %s", store.path)
    return store.load()
