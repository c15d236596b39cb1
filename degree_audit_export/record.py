"""
Shapes of the records produced by the converter.

Everything is a plain dict so the result serializes to JSON with exactly
these field names.
"""
from __future__ import annotations

from typing import List, Optional, TypedDict


class StudentInfo(TypedDict):
    name: str
    major: str
    creditsRequired: float
    creditsApplied: float


class Requirement(TypedDict, total=False):
    id: str
    name: str
    status: str
    creditsRequired: int
    creditsApplied: int
    catalogYear: str


class Course(TypedDict, total=False):
    code: str
    title: str
    grade: Optional[str]
    credits: float
    term: str
    sbcCategory: str
    status: str
    sbcFulfillment: str
    note: str


class DegreeRecord(TypedDict):
    student: StudentInfo
    requirements: List[Requirement]
    completedCourses: List[Course]
    inProgressCourses: List[Course]
    incompleteCourses: List[Course]
    unmetConditions: list
