"""
Convert a saved Degree Works "Academic Progress Report" page into a
structured degree-progress record (requirements, courses, credit totals).
"""
from __future__ import annotations

__version__ = "0.1.0"

from .convert import AuditParseError, assemble_record, convert_audit_html

__all__ = [
    "__version__",
    "AuditParseError",
    "assemble_record",
    "convert_audit_html",
]
