"""
Text helpers shared by every extractor: whitespace collapsing, Degree Works
boilerplate removal and the "label rendered twice" check.
"""
from __future__ import annotations

import re

_WS_RE = re.compile(r"\s+")
_NON_WORD_RE = re.compile(r"\W+")
_WORD_START_RE = re.compile(r"\b\w")

# Removed in this order; Degree Works appends them to block titles.
_BOILERPLATE_PATTERNS = (
    re.compile(r"Requirement is complete", re.I),
    re.compile(r"Not complete", re.I),
    re.compile(
        r"When the in[- ]progress classes are completed "
        r"this requirement should be complete",
        re.I,
    ),
)


def normalize(text: str | None) -> str:
    """Collapse whitespace runs to a single space and trim."""
    if not text:
        return ""
    return _WS_RE.sub(" ", text).strip()


def strip_boilerplate(text: str | None) -> str:
    """Remove the fixed status sentences from a title, then re-normalize."""
    name = text or ""
    for pattern in _BOILERPLATE_PATTERNS:
        name = pattern.sub("", name)
    return normalize(name)


def _repeated_half(text: str) -> str | None:
    """Return the first half if ``text`` is the same words said twice."""
    tokens = text.split()
    if len(tokens) < 2 or len(tokens) % 2:
        return None
    half = len(tokens) // 2
    first = " ".join(tokens[:half])
    second = " ".join(tokens[half:])
    if first.upper() == second.upper():
        return first
    return None


def deduplicate_repeated_halves(text: str | None) -> str:
    """
    Return "" for labels like "Software Engineering Software Engineering".

    The report generator sometimes renders a title twice with no separator;
    such requirement labels are discarded entirely.
    """
    normalized = normalize(text)
    if _repeated_half(normalized) is not None:
        return ""
    return text or ""


def collapse_repeated_halves(text: str | None) -> str:
    """Like ``deduplicate_repeated_halves`` but keeps one copy of the label."""
    normalized = normalize(text)
    first = _repeated_half(normalized)
    return first if first is not None else normalized


def slugify(name: str, limit: int = 64) -> str:
    """'Major Requirements: CS' -> 'major_requirements_cs'."""
    return _NON_WORD_RE.sub("_", (name or "").lower())[:limit]


def title_case_words(text: str) -> str:
    """Uppercase the first letter of every word, leave the rest alone."""
    return _WORD_START_RE.sub(lambda m: m.group(0).upper(), text or "")
