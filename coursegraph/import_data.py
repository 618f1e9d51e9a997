import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from dotenv import load_dotenv
from pydantic import ValidationError
from rich import print

from coursegraph.config import Settings, configure_logging, load_settings
from coursegraph.graph.queries import QueryEngine
from coursegraph.graph.store import GraphStore
from coursegraph.models import CourseRecord

_LOGGER = logging.getLogger(__name__)

LIST_SEPARATOR = ";"


class CatalogLoadError(RuntimeError):
    """The course catalog file is missing or cannot be parsed."""


def read_csv(path):
    with open(path, "r", encoding="utf-8") as f:
        return list(csv.DictReader(f))


def _split_codes(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [c for c in value if isinstance(c, str)]
    return [c.strip() for c in str(value).split(LIST_SEPARATOR) if c.strip()]


def normalize_records(rows: List[Dict[str, Any]]) -> List[CourseRecord]:
    """Turn raw scraper rows into CourseRecords.

    Missing or null requirement lists become empty, non-string entries are
    dropped and unknown fields (including surplus CSV cells) are ignored.
    Rows without a code, or that still fail validation, are skipped with a
    warning.
    """
    records = []
    for i, row in enumerate(rows):
        if not isinstance(row, dict) or not row.get("code"):
            _LOGGER.warning("Skipping catalog row %d without a course code", i)
            continue
        if None in row:
            # csv.DictReader files surplus cells under None
            _LOGGER.warning("Ignoring %d surplus cell(s) of course %r", len(row[None] or ()), row.get("code"))
        row = {k: v for k, v in row.items() if k in CourseRecord.model_fields}
        row["prerequisites"] = _split_codes(row.get("prerequisites"))
        row["corequisites"] = _split_codes(row.get("corequisites"))
        try:
            records.append(CourseRecord(**row))
        except ValidationError as exc:
            _LOGGER.warning("Skipping malformed course %r: %s", row.get("code"), exc)
    return records


def load_courses(path) -> List[CourseRecord]:
    path = Path(path)
    try:
        if path.suffix.lower() == ".csv":
            rows = read_csv(path)
        else:
            rows = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise CatalogLoadError(f"Cannot load course data from {path}: {exc}") from exc

    if not isinstance(rows, list):
        raise CatalogLoadError(f"Expected a list of courses in {path}")
    return normalize_records(rows)


def build_engine(settings: Settings) -> QueryEngine:
    """Load the catalog and build a fresh engine; an unreadable catalog gives an empty graph."""
    store = GraphStore()
    try:
        records = load_courses(settings.data_path)
    except CatalogLoadError as exc:
        _LOGGER.warning("No existing course data found (%s). Run the scraper first.", exc)
        records = []
    store.build_from_courses(records)
    return QueryEngine(store, default_limit=settings.graph_limit)


def main():
    load_dotenv()
    settings = load_settings()
    configure_logging(settings.log_level)

    engine = build_engine(settings)
    print(engine.get_stats().model_dump(by_alias=True))


if __name__ == "__main__":
    main()
