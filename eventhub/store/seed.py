"""Loading of the initial dataset from a JSON document.

The document holds four named lists matching the record shapes::

    {"users": [...], "locations": [...], "events": [...], "participants": [...]}

Missing lists are treated as empty. Seed data is read once at startup and
then lives only in memory.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from eventhub.models import EntityKind, models_for
from eventhub.store.entity_store import EntityStore

logger = logging.getLogger(__name__)


class SeedDataError(Exception):
    """Raised when a seed document cannot be loaded into a store."""


def parse_seed(document: dict[str, Any]) -> EntityStore:
    """Build a store from an already-decoded seed document.

    Args:
        document: Mapping with optional users/locations/events/participants

    Returns:
        EntityStore populated with the seed records

    Raises:
        SeedDataError: If a record is malformed or an id repeats
    """
    records: dict[str, list] = {}
    for kind in EntityKind:
        raw_items = document.get(kind.plural) or []
        if not isinstance(raw_items, list):
            msg = f"Seed field '{kind.plural}' must be a list"
            raise SeedDataError(msg)

        record_cls = models_for(kind).record
        items = []
        seen: set[str] = set()
        for position, raw in enumerate(raw_items):
            try:
                item = record_cls.model_validate(raw)
            except ValidationError as e:
                msg = f"Invalid {kind.value} at position {position}: {e}"
                raise SeedDataError(msg) from e
            if item.id in seen:
                msg = f"Duplicate {kind.value} id in seed data: {item.id}"
                raise SeedDataError(msg)
            seen.add(item.id)
            items.append(item)
        records[kind.plural] = items

    return EntityStore(**records)


def load_seed(path: Path | str) -> EntityStore:
    """Read a seed JSON file and build a store from it.

    Args:
        path: Location of the seed document

    Returns:
        EntityStore populated with the seed records

    Raises:
        SeedDataError: If the file is missing, not JSON, or malformed
    """
    path = Path(path)
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        msg = f"Seed file not found: {path}"
        raise SeedDataError(msg) from e
    except json.JSONDecodeError as e:
        msg = f"Seed file is not valid JSON: {path}: {e}"
        raise SeedDataError(msg) from e

    if not isinstance(document, dict):
        msg = f"Seed file must contain a JSON object: {path}"
        raise SeedDataError(msg)

    store = parse_seed(document)
    logger.info(f"Loaded seed data from {path}: {store.counts()}")
    return store
