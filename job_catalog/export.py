"""CSV and JSON output for catalog postings."""

from __future__ import annotations

import csv
import json
from dataclasses import asdict
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Sequence

from .models import JobPosting
from .summary import html_to_text

CSV_FIELDNAMES = (
    "slug",
    "title",
    "org_name",
    "employment_type",
    "categories",
    "pay",
    "work_hours",
    "area",
    "english_friendly",
    "duo",
    "featured",
    "summary",
    "link",
)


def write_csv(path: Path, postings: Iterable[JobPosting]) -> int:
    """Write one row per posting to *path* and return the row count."""

    path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=CSV_FIELDNAMES)
        writer.writeheader()
        for posting in postings:
            writer.writerow(
                {
                    "slug": posting.slug,
                    "title": posting.title,
                    "org_name": posting.org_name,
                    "employment_type": posting.employment_type.value,
                    "categories": ",".join(c.value for c in posting.categories),
                    "pay": posting.pay_range() or "",
                    "work_hours": posting.work_hours or "",
                    "area": posting.area or "",
                    "english_friendly": "Yes" if posting.english_friendly else "No",
                    "duo": "Yes" if posting.duo else "No",
                    "featured": "Yes" if posting.featured else "No",
                    "summary": posting.summary,
                    "link": posting.link_target(),
                }
            )
            count += 1
    return count


def postings_to_dicts(postings: Iterable[JobPosting]) -> list[dict[str, Any]]:
    """Plain, JSON-ready dicts including a decoded ``description_text``."""

    rows: list[dict[str, Any]] = []
    for posting in postings:
        row = {key: _jsonable(value) for key, value in asdict(posting).items()}
        row["description_text"] = html_to_text(posting.description_html)
        row["pay"] = posting.pay_range()
        row["link"] = posting.link_target()
        rows.append(row)
    return rows


def write_json(path: Path, postings: Sequence[JobPosting]) -> int:
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = postings_to_dicts(postings)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(rows, handle, ensure_ascii=False, indent=2)
        handle.write("\n")
    return len(rows)


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value
