"""
Drop records that Degree Works repeats across blocks.

A course taken once usually shows up under every requirement it counts
toward, and some requirement headers are rendered in more than one place.
"""
from __future__ import annotations

from typing import Iterable, List

from .record import Course, Requirement
from .text import normalize


def code_key(code: str | None) -> str:
    """Canonical form of a course code for set membership checks."""
    return normalize(code).upper()


def course_key(course: Course) -> tuple:
    """Same code + title + term + credits => same course."""
    return (
        code_key(course.get("code")),
        normalize(course.get("title")).upper(),
        normalize(course.get("term")).upper(),
        course.get("credits", 0),
    )


def dedupe_courses(courses: Iterable[Course]) -> List[Course]:
    seen: set[tuple] = set()
    result: List[Course] = []
    for course in courses:
        key = course_key(course)
        if key in seen:
            continue
        seen.add(key)
        result.append(course)
    return result


def requirement_key(req: Requirement) -> tuple:
    return (
        req.get("name"),
        req.get("creditsRequired"),
        req.get("creditsApplied"),
        req.get("catalogYear"),
    )


def dedupe_requirements_by_key(requirements: Iterable[Requirement]) -> List[Requirement]:
    """Drop exact repeats (same name, credits and catalog year)."""
    seen: set[tuple] = set()
    result: List[Requirement] = []
    for req in requirements:
        key = requirement_key(req)
        if key in seen:
            continue
        seen.add(key)
        result.append(req)
    return result


def dedupe_requirements_by_name(requirements: Iterable[Requirement]) -> List[Requirement]:
    """Keep the first requirement for each name, preserving order."""
    names: set[str] = set()
    result: List[Requirement] = []
    for req in requirements:
        name = req.get("name")
        if name in names:
            continue
        names.add(name)
        result.append(req)
    return result


def drop_courses_in(courses: Iterable[Course], *others: Iterable[Course]) -> List[Course]:
    """Courses whose key does not already appear in any of ``others``."""
    taken = {course_key(c) for group in others for c in group}
    return [c for c in courses if course_key(c) not in taken]
