"""
Requirement blocks of a Degree Works audit.

The real HTML structure:
- Each block is a Material-UI card (``div.MuiPaper-root``) whose heading is
  ``<h3 id="block-...">Major Requirements <span id="..._statusLabel">Complete</span></h3>``.
- Older layouts put the block title in a <th> instead.
- The card body carries lines like "Credits required: 40",
  "Credits applied: 36" and "Catalog year: Fall 2022".
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional

from .dedupe import dedupe_requirements_by_key, dedupe_requirements_by_name
from .document import Document, Node
from .record import Requirement
from .status import classify_from_text, normalize_status_label
from .text import deduplicate_repeated_halves, slugify, strip_boilerplate, title_case_words

logger = logging.getLogger(__name__)

BLOCK_HEADING_SELECTOR = 'h3[id^="block-"]'
STATUS_LABEL_SELECTOR = '[id$="_statusLabel"]'
CARD_CLASS = "MuiPaper-root"
CARD_SEARCH_DEPTH = 8

_REQUIREMENT_RE = re.compile(r"Requirement", re.I)
_DEGREE_IN_RE = re.compile(r"^(Degree in )", re.I)
_KNOWN_SECTION_RE = re.compile(
    r"(General Education Requirements|Upper Division Credit Requirement"
    r"|Major Requirements|Fall Through)",
    re.I,
)
_CREDITS_REQUIRED_RE = re.compile(r"Credits required:\s*(\d+)", re.I)
_CREDITS_APPLIED_RE = re.compile(r"Credits applied:\s*(\d+)", re.I)
_CATALOG_YEAR_RE = re.compile(r"Catalog year:\s*([A-Z]+\s+\d{4})", re.I)


def _is_block_heading(node: Node) -> bool:
    return node.name == "h3" and node.get("id").startswith("block-")


def _candidate_nodes(doc: Document) -> List[Node]:
    """All <th> cells, then all block headings, each in document order."""
    return list(doc.select("th")) + list(doc.select(BLOCK_HEADING_SELECTOR))


def _title_text(node: Node) -> str:
    if _is_block_heading(node):
        # direct text only, so child badges ("Complete") stay out of the title
        return node.own_text or node.text
    return node.text


def _looks_like_requirement(node: Node, title: str) -> bool:
    return bool(
        _is_block_heading(node)
        or _REQUIREMENT_RE.search(title)
        or _DEGREE_IN_RE.search(title)
        or _KNOWN_SECTION_RE.search(title)
    )


def clean_requirement_name(raw_title: str) -> str:
    """Strip boilerplate; "" means the title should be dropped."""
    name = strip_boilerplate(raw_title)
    if not name:
        return ""
    return deduplicate_repeated_halves(name)


def find_card(node: Node) -> Node:
    """Enclosing Paper card, else nearest <div>, else the node itself."""
    for ancestor in node.ancestors(CARD_SEARCH_DEPTH):
        if CARD_CLASS in ancestor.classes:
            return ancestor
    return node.closest("div") or node


def _requirement_status(node: Node, card_text: str) -> str:
    label: Optional[str] = None
    if _is_block_heading(node):
        badge = node.select_one(STATUS_LABEL_SELECTOR)
        if badge is not None:
            label = normalize_status_label(badge.text)
    return label or classify_from_text(card_text)


def _build_requirement(node: Node, name: str, default_catalog_year: str) -> Requirement:
    card_text = find_card(node).text
    req: Requirement = {
        "id": slugify(name),
        "name": name,
        "status": _requirement_status(node, card_text),
    }

    m = _CREDITS_REQUIRED_RE.search(card_text)
    if m:
        req["creditsRequired"] = int(m.group(1))
    m = _CREDITS_APPLIED_RE.search(card_text)
    if m:
        req["creditsApplied"] = int(m.group(1))

    m = _CATALOG_YEAR_RE.search(card_text)
    req["catalogYear"] = title_case_words(m.group(1)) if m else default_catalog_year
    return req


def extract_requirements(doc: Document, default_catalog_year: str = "") -> List[Requirement]:
    """
    Collect requirement blocks in discovery order.

    Exact repeats are dropped while collecting, then only the first
    requirement per name is kept.
    """
    collected: List[Requirement] = []

    for node in _candidate_nodes(doc):
        title = _title_text(node)
        if not title:
            continue
        if not _looks_like_requirement(node, title):
            continue

        name = clean_requirement_name(title)
        if not name:
            logger.debug("dropping requirement title %r", title)
            continue

        collected.append(_build_requirement(node, name, default_catalog_year))

    requirements = dedupe_requirements_by_name(dedupe_requirements_by_key(collected))
    logger.debug("found %d requirement block(s)", len(requirements))
    return requirements
