"""
Degree Works HTML -> degree progress record.

``convert_audit_html`` is the entry point: parse the page once, run the
student / requirement / course extractors over the same tree and merge
their output with ``assemble_record``.
"""
from __future__ import annotations

import logging
import math
from typing import Dict, List, Mapping

from .courses_html import extract_courses
from .document import AuditParseError, parse_document
from .record import Course, DegreeRecord, Requirement, StudentInfo
from .requirements_html import extract_requirements
from .status import INCOMPLETE
from .student_html import extract_student
from .text import slugify

logger = logging.getLogger(__name__)

UNKNOWN_REQUIREMENT = "Unknown Requirement"
# Neither the card nor the student header names a catalog year.
UNKNOWN_CATALOG_YEAR = "Unknown"

__all__ = ["AuditParseError", "assemble_record", "convert_audit_html"]


def _finite_or_zero(value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value if math.isfinite(value) else 0


def _public_student(student: Mapping[str, object]) -> StudentInfo:
    """Only expose the fields consumers actually use."""
    return {
        "name": str(student.get("name") or ""),
        "major": str(student.get("major") or ""),
        "creditsRequired": _finite_or_zero(student.get("creditsRequired")),
        "creditsApplied": _finite_or_zero(student.get("creditsApplied")),
    }


def _backfill_requirement(req: Mapping[str, object], default_catalog_year: str) -> Requirement:
    filled: Dict[str, object] = dict(req)
    if not filled.get("id"):
        filled["id"] = slugify(str(filled.get("name") or "unknown"))
    if not filled.get("name"):
        filled["name"] = UNKNOWN_REQUIREMENT
    if not filled.get("status"):
        filled["status"] = INCOMPLETE
    if not filled.get("catalogYear"):
        filled["catalogYear"] = default_catalog_year
    return filled  # type: ignore[return-value]


def assemble_record(
    student: Mapping[str, object],
    requirements: List[Requirement],
    completed: List[Course],
    inprog: List[Course],
    incomplete: List[Course],
) -> DegreeRecord:
    """
    Merge extractor output into one record, filling in any required
    requirement field that extraction left empty. Never raises.
    """
    default_catalog_year = str(student.get("catalogYear") or UNKNOWN_CATALOG_YEAR)
    return {
        "student": _public_student(student),
        "requirements": [
            _backfill_requirement(r, default_catalog_year) for r in requirements
        ],
        "completedCourses": list(completed),
        "inProgressCourses": list(inprog),
        "incompleteCourses": list(incomplete),
        "unmetConditions": [],
    }


def convert_audit_html(html: str | bytes) -> DegreeRecord:
    """
    Convert a Degree Works audit page to a degree progress record.

    :param html: Raw HTML of the page (complete document or fragment).
    :raises AuditParseError: if the input cannot be parsed as HTML at all.
    """
    doc = parse_document(html)

    student = extract_student(doc)
    requirements = extract_requirements(doc, str(student.get("catalogYear") or ""))
    courses = extract_courses(doc)

    record = assemble_record(
        student,
        requirements,
        courses.completed,
        courses.inprog,
        courses.incomplete,
    )
    logger.debug(
        "converted audit for %r: %d requirement(s), %d/%d/%d course(s)",
        record["student"]["name"],
        len(record["requirements"]),
        len(record["completedCourses"]),
        len(record["inProgressCourses"]),
        len(record["incompleteCourses"]),
    )
    return record
