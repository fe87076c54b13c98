"""orgtime: parse and compute with org-style timestamps."""

from orgtime.timestamps import (
    DateKind,
    OrgDate,
    SourceRange,
    Span,
    now,
    parse,
    scan_line,
    today,
)

__version__ = "0.1.0"

__all__ = [
    "DateKind",
    "OrgDate",
    "SourceRange",
    "Span",
    "now",
    "parse",
    "scan_line",
    "today",
    "__version__",
]
