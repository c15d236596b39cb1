"""
Export a converted audit to JSON or CSV.
"""
from __future__ import annotations

import csv
import json
from pathlib import Path

from .record import DegreeRecord

# (bucket label, record key) in CSV row order
_BUCKETS = (
    ("completed", "completedCourses"),
    ("in-progress", "inProgressCourses"),
    ("incomplete", "incompleteCourses"),
)

CSV_FIELDS = [
    "bucket",
    "code",
    "title",
    "grade",
    "credits",
    "term",
    "sbcCategory",
    "sbcFulfillment",
    "status",
    "note",
]


def export_json(record: DegreeRecord, out_path: str | Path, metadata: dict | None = None) -> None:
    """Export the record to JSON, optionally wrapped with source metadata."""
    payload = {"source": metadata, "audit": record} if metadata else record
    Path(out_path).write_text(
        json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8"
    )


def export_csv(record: DegreeRecord, out_path: str | Path) -> None:
    """Export every course (all three buckets) to CSV, one row per course."""
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=CSV_FIELDS, extrasaction="ignore")
        w.writeheader()
        for bucket, key in _BUCKETS:
            for course in record.get(key, []):
                row = {k: ("" if v is None else v) for k, v in course.items()}
                row["bucket"] = bucket
                w.writerow(row)


def export(record: DegreeRecord, out_path: str | Path, fmt: str, metadata: dict | None = None) -> None:
    """Export to the given format: json or csv."""
    fmt = fmt.lower()
    if fmt == "json":
        export_json(record, out_path, metadata)
    elif fmt == "csv":
        export_csv(record, out_path)
    else:
        raise ValueError(f"Unsupported format: {fmt}. Use json or csv.")


def summarize_record(record: DegreeRecord) -> dict:
    """Counts and credit progress, as shown on the dashboard header."""
    student = record["student"]
    required = student.get("creditsRequired") or 0
    applied = student.get("creditsApplied") or 0
    return {
        "student": student.get("name", ""),
        "requirements": len(record["requirements"]),
        "completed": len(record["completedCourses"]),
        "inProgress": len(record["inProgressCourses"]),
        "incomplete": len(record["incompleteCourses"]),
        "progressPercent": round(applied / required * 100) if required else 0,
    }
