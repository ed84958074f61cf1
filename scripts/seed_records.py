from __future__ import annotations

import argparse
import json
from pathlib import Path

from careerfit.core.config import settings
from careerfit.stores import SqliteRecordStore

_SECTIONS = {
    "candidates": settings.candidates_collection_id,
    "jobs": settings.jobs_collection_id,
    "employers": settings.employers_collection_id,
}


def main() -> None:
    parser = argparse.ArgumentParser(description="Load candidate, job and employer records into the record store.")
    parser.add_argument("fixture", help="JSON file with 'candidates', 'jobs' and 'employers' lists")
    parser.add_argument("--db", default=settings.records_db_path, help="Record store SQLite path")
    parser.add_argument("--database-id", default=settings.database_id, help="Logical database id")
    args = parser.parse_args()

    data = json.loads(Path(args.fixture).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise SystemExit("Fixture must be a JSON object.")

    store = SqliteRecordStore(args.db, database_id=args.database_id)
    counts: dict[str, int] = {}
    try:
        for section, collection in _SECTIONS.items():
            records = data.get(section) or []
            for record in records:
                record_id = str(record.get("id") or "").strip()
                if not record_id:
                    raise SystemExit(f"Every entry in '{section}' needs an 'id'.")
                store.put_record(collection, record_id, record)
            counts[section] = len(records)
    finally:
        store.close()

    print(", ".join(f"{section}={count}" for section, count in counts.items()))


if __name__ == "__main__":
    main()
