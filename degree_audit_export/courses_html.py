"""
Course tables of a Degree Works audit.

The real HTML structure:
- Every requirement card holds a table whose header row reads
  "Course | Title | Grade | Credits | Term | SBC" (column order varies).
- Data rows list one course each. Courses not finished yet either have no
  grade, or show their credits in parentheses ("(3)").
- "Still needed: 1 Class in ECO 321" rows (or loose text outside any table)
  describe what is missing. They may name one course, several options
  ("ACC 210 or 311 or 314") or a range with exclusions ("Except ...").
"""
from __future__ import annotations

import logging
import re
from typing import Dict, List, NamedTuple, Optional, Set

from .dedupe import code_key, dedupe_courses, drop_courses_in
from .document import Document, Node
from .record import Course
from .status import COMPLETE, IN_PROGRESS, INCOMPLETE
from .text import collapse_repeated_halves, strip_boilerplate

logger = logging.getLogger(__name__)

PLANNED_NOTE = "Listed in audit without a term/grade (likely still needed / planned)."

# Parsed credit values above this are years picked up from the wrong column.
MAX_PLAUSIBLE_CREDITS = 10

_STILL_NEEDED_TAIL_RE = re.compile(r"Still needed:\s*(.*)$", re.I)
_STILL_NEEDED_PREFIX_RE = re.compile(r"^Still needed:\s*", re.I)
_COURSE_CODE_RE = re.compile(r"\b([A-Z]{3})\s*(\d{3}[A-Z]?)\b")
_EXCEPT_RE = re.compile(r"Except", re.I)
_OR_RE = re.compile(r"\bor\b", re.I)
_CREDITS_RE = re.compile(r"(\d+(\.\d+)?)")
_DIGIT_RE = re.compile(r"\d")
_PARENS_RE = re.compile(r"[()]")
_SEASON_TERM_RE = re.compile(r"\b(FALL|SPRING|SUMMER|WINTER)\s+20\d{2}\b", re.I)


class CourseBuckets(NamedTuple):
    completed: List[Course]
    inprog: List[Course]
    incomplete: List[Course]


# ──────────────────────────────────────────────────────────────────
#  Row helpers
# ──────────────────────────────────────────────────────────────────

def _row_cells(tr: Node) -> List[str]:
    return [cell.text for cell in tr.select("td, th")]


def _is_header_row(cells: List[str]) -> bool:
    """A header mentions course, title and credit somewhere, in any order."""
    lower = [c.lower() for c in cells]
    return (
        any("course" in c for c in lower)
        and any("title" in c for c in lower)
        and any("credit" in c for c in lower)
    )


def _header_index_map(cells: List[str]) -> Dict[str, int]:
    """
    Map field -> column index. A cell fills at most one field (tested in
    the order below) and the first column found for a field wins.
    """
    idx: Dict[str, int] = {}
    for i, text in enumerate(cells):
        t = text.lower()
        if "course" in t and "code" not in idx:
            idx["code"] = i
        elif "title" in t and "title" not in idx:
            idx["title"] = i
        elif "grade" in t and "grade" not in idx:
            idx["grade"] = i
        elif "credit" in t and "credits" not in idx:
            idx["credits"] = i
        elif "term" in t and "term" not in idx:
            idx["term"] = i
        elif ("sbc" in t or "category" in t) and "sbcCategory" not in idx:
            idx["sbcCategory"] = i
    return idx


def _cell(cells: List[str], idx: Dict[str, int], field: str) -> str:
    i = idx.get(field)
    if i is None or i >= len(cells):
        return ""
    return cells[i]


def _parse_credits(text: str) -> float:
    m = _CREDITS_RE.search(text or "")
    if not m:
        return 0
    value = float(m.group(1))
    return int(value) if value.is_integer() else value


def _find_course_codes(text: str) -> List[str]:
    """['ECO 321'] for '1 Class in ECO 321'; also accepts 'CSE310'."""
    return [f"{dept} {num}" for dept, num in _COURSE_CODE_RE.findall(text)]


def _single_missing_code(requirement_text: str) -> Optional[str]:
    """
    The course code when the text names exactly one course; None for
    multi-option ("or"), ranged ("Except") or code-less requirements.
    """
    if _EXCEPT_RE.search(requirement_text) or _OR_RE.search(requirement_text):
        return None
    codes = _find_course_codes(requirement_text)
    if len(codes) != 1:
        return None
    return codes[0]


def _still_needed_text(row_text: str) -> str:
    m = _STILL_NEEDED_TAIL_RE.search(row_text)
    if m and m.group(1).strip():
        return m.group(1).strip()
    return _STILL_NEEDED_PREFIX_RE.sub("", row_text).strip()


def sbc_fulfillment(sbc_category: str) -> str:
    return "PARTIAL" if "PARTIAL" in (sbc_category or "").upper() else "FULL"


def classify_course_row(grade: str, credits_text: str, term: str) -> str:
    """
    1. no grade and no term          -> INCOMPLETE (planned / still needed)
    2. no grade, credits in parens,
       or season-year term w/o grade -> IN-PROGRESS
    3. otherwise                     -> COMPLETE
    """
    grade_empty = not grade.strip()
    term_empty = not term.strip()
    if grade_empty and term_empty:
        return INCOMPLETE
    if (
        grade_empty
        or _PARENS_RE.search(credits_text)
        or (_SEASON_TERM_RE.search(term) and grade_empty)
    ):
        return IN_PROGRESS
    return COMPLETE


# ──────────────────────────────────────────────────────────────────
#  Builder
# ──────────────────────────────────────────────────────────────────

class _CourseBuilder:
    """Accumulates the three buckets for a single extraction run."""

    def __init__(self) -> None:
        self.completed: List[Course] = []
        self.inprog: List[Course] = []
        self.incomplete: List[Course] = []

    # -- still needed ------------------------------------------------

    def add_still_needed_row(self, cells: List[str], row_text: str, credits: float) -> None:
        requirement_text = _still_needed_text(row_text)
        if not requirement_text:
            return

        code = _single_missing_code(requirement_text)
        if code is not None:
            title = self._course_name_from_cell(cells[0] if cells else "")
            self.incomplete.append(
                _missing_course(code, title or requirement_text, credits)
            )
        else:
            # several options, "Except" or no code: keep it as one generic entry
            self.incomplete.append(_missing_course("", requirement_text, credits))

    @staticmethod
    def _course_name_from_cell(first_cell: str) -> str:
        if "STILL NEEDED" in first_cell.upper():
            # single-cell row: the cell is the narrative, not a course name
            return ""
        return collapse_repeated_halves(strip_boilerplate(first_cell))

    # -- normal rows -------------------------------------------------

    def add_course_row(self, cells: List[str], idx: Dict[str, int]) -> None:
        code = _cell(cells, idx, "code")
        title = _cell(cells, idx, "title")
        grade = _cell(cells, idx, "grade")
        credits_text = _cell(cells, idx, "credits")
        term = _cell(cells, idx, "term")
        sbc_category = _cell(cells, idx, "sbcCategory")

        if not code and not title:
            return

        credits = _parse_credits(credits_text)
        if credits > MAX_PLAUSIBLE_CREDITS:
            logger.debug("skipping row %r: credits %s look like a year", code, credits)
            return
        if not _DIGIT_RE.search(code):
            logger.debug("skipping row %r: not a course code", code)
            return

        course: Course = {
            "code": code,
            "title": title,
            "grade": grade or None,
            "credits": credits,
            "term": term,
            "sbcCategory": sbc_category,
            "sbcFulfillment": sbc_fulfillment(sbc_category),
        }

        status = classify_course_row(grade, credits_text, term)
        course["status"] = status
        if status == INCOMPLETE:
            course["note"] = PLANNED_NOTE
            self.incomplete.append(course)
        elif status == IN_PROGRESS:
            self.inprog.append(course)
        else:
            course["grade"] = grade
            self.completed.append(course)

    # -- table walk --------------------------------------------------

    def add_table(self, table: Node) -> None:
        """Read the first course block of a table (header row + body rows)."""
        rows = table.select("tr")
        for i, header_tr in enumerate(rows):
            header_cells = _row_cells(header_tr)
            if not _is_header_row(header_cells):
                continue

            idx = _header_index_map(header_cells)
            logger.debug("course table header: %s", header_cells)

            for tr in rows[i + 1:]:
                cells = _row_cells(tr)
                if not cells:
                    continue
                if _is_header_row(cells):
                    break
                row_text = " ".join(cells).strip()
                if not row_text:
                    continue

                if "STILL NEEDED" in row_text.upper():
                    credits = _parse_credits(_cell(cells, idx, "credits"))
                    self.add_still_needed_row(cells, row_text, credits)
                else:
                    self.add_course_row(cells, idx)

            # one course block per table
            return

    # -- loose "Still needed:" lines ------------------------------------

    def sweep_still_needed(self, elements: List[Node]) -> None:
        """
        Pick up single-course "Still needed:" lines that live outside any
        course table, unless the course is already taken or recorded.
        """
        taken: Set[str] = {
            code_key(c.get("code")) for c in self.completed + self.inprog
        }
        taken.discard("")
        recorded: Set[str] = {code_key(c.get("code")) for c in self.incomplete}
        recorded.discard("")

        for el in elements:
            text = el.text
            if not _STILL_NEEDED_PREFIX_RE.match(text):
                continue
            cleaned = _STILL_NEEDED_PREFIX_RE.sub("", text).strip()
            if not cleaned:
                continue

            code = _single_missing_code(cleaned)
            if code is None:
                continue
            key = code_key(code)
            if key in taken or key in recorded:
                continue

            self.incomplete.append(_missing_course(code, cleaned, 0))
            recorded.add(key)

    def buckets(self) -> CourseBuckets:
        """
        A course listed in several cards lands in one bucket only: completed
        wins over in-progress, and both win over a planned row. Still-needed
        entries (no note) are left alone.
        """
        completed = dedupe_courses(self.completed)
        inprog = drop_courses_in(dedupe_courses(self.inprog), completed)
        planned = drop_courses_in(
            [c for c in self.incomplete if "note" in c], completed, inprog
        )
        planned_ids = {id(c) for c in planned}
        incomplete = [
            c for c in self.incomplete if "note" not in c or id(c) in planned_ids
        ]
        return CourseBuckets(completed=completed, inprog=inprog, incomplete=incomplete)


def _missing_course(code: str, title: str, credits: float) -> Course:
    return {
        "code": code,
        "title": title,
        "grade": None,
        "credits": credits or 0,
        "term": "",
        "sbcCategory": "",
        "status": INCOMPLETE,
    }


# ──────────────────────────────────────────────────────────────────
#  Public API
# ──────────────────────────────────────────────────────────────────

def extract_courses(doc: Document) -> CourseBuckets:
    """
    Classify every course row in the audit into completed / in-progress /
    incomplete.

    Completed and in-progress lists are de-duplicated by
    (code, title, term, credits); incomplete entries are kept as found.
    A course sits in one bucket only (see ``_CourseBuilder.buckets``).
    """
    builder = _CourseBuilder()
    for table in doc.select("table"):
        builder.add_table(table)
    builder.sweep_still_needed(list(doc.descendants()))

    result = builder.buckets()
    logger.debug(
        "courses: %d completed, %d in progress, %d incomplete",
        len(result.completed), len(result.inprog), len(result.incomplete),
    )
    return result
