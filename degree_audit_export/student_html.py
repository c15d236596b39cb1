"""
Student header of a Degree Works audit: name, major and credit totals.

Usage pattern:
- The header is a Material-UI card with <dt>/<dd> pairs (Level, Major, ...)
  and a ``data-key="content-label"`` element holding the student name.
- Older / saved pages lose that markup, so every field falls back to a
  regex over the full page text.
"""
from __future__ import annotations

import logging
import re
from typing import Dict

from .document import Document
from .text import normalize, title_case_words

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(
    r"Academic Progress Report for\s+([A-Za-z,\s]+?)(?:Student Information|$)",
    re.I,
)
_MAJOR_RE = re.compile(
    r"Major in\s+(.+?)(?=\s*(?:Block|Section|Requirements?|College|Level"
    r"|Overall|Catalog|Credits|Audit|$))",
    re.I,
)
_CREDITS_REQUIRED_RE = re.compile(r"Credits required:\s*([\d.]+)", re.I)
_CREDITS_APPLIED_RE = re.compile(r"Credits applied:\s*([\d.]+)", re.I)
_LEADING_NUMBER_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def _parse_number(text: str) -> float:
    """Leading number of ``text`` ('120', '3.5', '12.0.'); 0 if none."""
    m = _LEADING_NUMBER_RE.match(text or "")
    if not m:
        return 0
    value = float(m.group(0))
    return int(value) if value.is_integer() else value


def _label_map(doc: Document) -> Dict[str, str]:
    """{'major': 'Computer Science', 'level': 'Undergraduate', ...}"""
    labels: Dict[str, str] = {}
    for dt in doc.select("dt"):
        label = dt.text.lower()
        if not label:
            continue
        sibling = dt.next_element_sibling()
        value = sibling.text if sibling is not None else ""
        if value:
            labels[label] = value
    return labels


def extract_student(doc: Document) -> Dict[str, object]:
    """
    Best-effort student info. Missing fields default to "" / 0.

    The returned dict also carries ``catalogYear`` (from a "Catalog year"
    label, "" otherwise), used as the default for requirement blocks.
    """
    student: Dict[str, object] = {
        "name": "",
        "major": "",
        "creditsRequired": 0,
        "creditsApplied": 0,
        "catalogYear": "",
    }

    text = doc.text
    labels = _label_map(doc)

    name_label = doc.select_one('[data-key="content-label"]')
    if name_label is not None:
        student["name"] = name_label.text
    else:
        m = _NAME_RE.search(text)
        if m:
            student["name"] = m.group(1).strip()

    if labels.get("major"):
        student["major"] = labels["major"]
    else:
        m = _MAJOR_RE.search(text)
        if m:
            student["major"] = m.group(1).strip()

    m = _CREDITS_REQUIRED_RE.search(text)
    if m:
        student["creditsRequired"] = _parse_number(m.group(1))
    m = _CREDITS_APPLIED_RE.search(text)
    if m:
        student["creditsApplied"] = _parse_number(m.group(1))

    catalog_year = labels.get("catalog year", "")
    if catalog_year:
        student["catalogYear"] = title_case_words(normalize(catalog_year))

    logger.debug(
        "student: name=%r major=%r credits=%s/%s",
        student["name"], student["major"],
        student["creditsApplied"], student["creditsRequired"],
    )
    return student
