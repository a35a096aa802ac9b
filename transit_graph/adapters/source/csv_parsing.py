"""Delimited-text parsing with header rows and scalar type inference."""

from __future__ import annotations

import csv
import io
import re
from typing import Any, Dict, List

from ...domain.errors import ParseError

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def infer_scalar(value: str) -> Any:
    """Convert a raw cell to None, bool, int, float or str.

    Examples:
        >>> infer_scalar("")
        >>> infer_scalar("TRUE")
        True
        >>> infer_scalar("12")
        12
        >>> infer_scalar("2.5e1")
        25.0
        >>> infer_scalar("R1")
        'R1'
    """
    text = value.strip()
    if not text:
        return None
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if _INT_RE.match(text):
        return int(text)
    if _FLOAT_RE.match(text):
        return float(text)
    return value


def parse_csv(
    text: str,
    *,
    delimiter: str = ",",
    location: str = "",
) -> List[Dict[str, Any]]:
    """Parse delimited text whose first row is a header.

    Blank lines are skipped and every cell goes through infer_scalar.

    Args:
        text: The full document.
        delimiter: Single-character field delimiter.
        location: Source location, reported in errors.

    Returns:
        One dict per data row, keyed by header field name.

    Raises:
        ParseError: If the header is missing or a row is ragged.
    """
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter)
    header: List[str] = []
    rows: List[Dict[str, Any]] = []

    try:
        for cells in reader:
            if not cells or all(not cell.strip() for cell in cells):
                continue
            if not header:
                header = [cell.strip() for cell in cells]
                if len(set(header)) != len(header):
                    raise ParseError(
                        "Duplicate column in header",
                        location=location,
                        line=reader.line_num,
                    )
                continue
            if len(cells) != len(header):
                raise ParseError(
                    f"Expected {len(header)} fields, got {len(cells)}",
                    location=location,
                    line=reader.line_num,
                )
            rows.append(
                {name: infer_scalar(cell) for name, cell in zip(header, cells)}
            )
    except csv.Error as e:
        raise ParseError(
            "Malformed delimited text",
            location=location,
            line=reader.line_num,
            cause=e,
        )

    if not header:
        raise ParseError("Missing header row", location=location)
    return rows
