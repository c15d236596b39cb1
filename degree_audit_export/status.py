"""
Map Degree Works status sentences to the three status values.

The rules are evaluated top to bottom and the first match wins. Several
phrases can appear in the same block (the in-progress disclaimer also says
"complete"), so the order matters.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

COMPLETE = "COMPLETE"
IN_PROGRESS = "IN-PROGRESS"
INCOMPLETE = "INCOMPLETE"

STATUSES = (COMPLETE, IN_PROGRESS, INCOMPLETE)


def _contains(*phrases: str) -> Callable[[str], bool]:
    return lambda upper: any(p in upper for p in phrases)


# (predicate over uppercased text, status)
STATUS_RULES: Tuple[Tuple[Callable[[str], bool], str], ...] = (
    (_contains("REQUIREMENT IS COMPLETE"), COMPLETE),
    (_contains("IN-PROGRESS"), IN_PROGRESS),
    # "PARTIAL" language is folded into IN-PROGRESS
    (_contains("SHOULD BE COMPLETE"), IN_PROGRESS),
    (_contains("STILL NEEDED", "INCOMPLETE"), INCOMPLETE),
)

DEFAULT_STATUS = INCOMPLETE


def classify_from_text(text: str | None) -> str:
    upper = (text or "").upper()
    for predicate, status in STATUS_RULES:
        if predicate(upper):
            return status
    return DEFAULT_STATUS


def normalize_status_label(text: str | None) -> Optional[str]:
    """
    Read a status badge such as "Complete" or "In progress".

    Labels that already name a status are taken as-is; anything else is
    run through ``classify_from_text``. Empty labels give None.
    """
    label = " ".join((text or "").split())
    if not label:
        return None
    candidate = label.upper().replace("_", "-").replace(" ", "-")
    if candidate in STATUSES:
        return candidate
    return classify_from_text(label)
