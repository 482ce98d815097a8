"""Bulk-import places from a JSON file.

Usage:
    python -m scripts.import_places data/had_places.json --provider had

The file holds a list of objects shaped like the POST /place body:

    {"name": {"zh_hk": "...", "en_us": "..."},
     "location": {"lat": 22.29, "lng": 114.17},
     "provider_id": "HAD-0001", "year_from": 1900, "year_to": 1950}

Entries without a provider take the one given on the command line. Each
entry goes through the same command service as the API, so manual entries
still get generated provider ids.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from db import SessionLocal, init_db
from domain.models import GeoPoint, PlaceDraft, PlaceProvider, PlaceValidationError
from services.place_command import PlaceCommandService

LOG = logging.getLogger("import_places")


def draft_from_entry(entry: dict, default_provider: PlaceProvider) -> PlaceDraft:
    location = entry["location"]
    provider = entry.get("provider")
    return PlaceDraft(
        location=GeoPoint(lng=float(location["lng"]), lat=float(location["lat"])),
        provider=PlaceProvider(provider) if provider else default_provider,
        provider_id=entry.get("provider_id"),
        name=entry.get("name"),
        description=entry.get("description"),
        address=entry.get("address"),
        year_from=entry.get("year_from"),
        year_to=entry.get("year_to"),
    )


def import_places(
    entries: List[dict],
    default_provider: PlaceProvider,
    session_factory=SessionLocal,
    service: Optional[PlaceCommandService] = None,
) -> tuple[int, int]:
    """Create a place per entry. Returns (imported, skipped)."""
    service = service or PlaceCommandService()
    imported = 0
    skipped = 0
    with session_factory() as session:
        for index, entry in enumerate(entries):
            try:
                draft = draft_from_entry(entry, default_provider)
            except (KeyError, TypeError, ValueError) as e:
                LOG.warning("entry %d: malformed (%s), skipped", index, e)
                skipped += 1
                continue
            try:
                service.create_place(session, draft)
            except PlaceValidationError as e:
                LOG.warning("entry %d: %s, skipped", index, e)
                skipped += 1
                continue
            imported += 1
    return imported, skipped


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("path", type=Path, help="JSON file with a list of places")
    parser.add_argument(
        "--provider",
        choices=[p.value for p in PlaceProvider],
        default=PlaceProvider.HAD.value,
        help="provider for entries that do not name one",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    try:
        entries = json.loads(args.path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        LOG.exception("Failed to read %s", args.path)
        return 2
    if not isinstance(entries, list):
        LOG.error("%s must contain a JSON list", args.path)
        return 2

    init_db()
    imported, skipped = import_places(entries, PlaceProvider(args.provider))
    LOG.info("Imported %d places, skipped %d", imported, skipped)
    return 0


if __name__ == "__main__":
    sys.exit(main())
