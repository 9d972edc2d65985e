# src/swc2dot/parser.py
from __future__ import annotations

# General imports (stdlib)
import io
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

# Local imports
from .exceptions import MalformedRecord
from .structure import CompartmentRecord

logger = logging.getLogger(__name__)

# Standard SWC field order
FIELD_NAMES = ("id", "type", "x", "y", "z", "radius", "parent")


@dataclass
class ParseResult:
    """
    Outcome of scanning a whole SWC document.

    Attributes:
        records (List[CompartmentRecord]): Parsed records in file order.
        errors (List[MalformedRecord]): Lines skipped as malformed; always
            empty unless malformed lines were skipped.
    """
    records: List[CompartmentRecord] = field(default_factory=list)
    errors: List[MalformedRecord] = field(default_factory=list)


def _to_int(token: str, name: str, line_number: int, text: str) -> int:
    # int() and float() accept digit separators, SWC does not
    if "_" in token:
        raise MalformedRecord(line_number, text, f"{name} {token!r} is not an integer")
    try:
        return int(token)
    except ValueError:
        raise MalformedRecord(line_number, text, f"{name} {token!r} is not an integer") from None


def _to_float(token: str, name: str, line_number: int, text: str) -> float:
    if "_" in token:
        raise MalformedRecord(line_number, text, f"{name} {token!r} is not a number")
    try:
        return float(token)
    except ValueError:
        raise MalformedRecord(line_number, text, f"{name} {token!r} is not a number") from None


def parse_line(text: str, line_number: int, comment_marker: str = "#") -> Optional[CompartmentRecord]:
    """
    Parse one SWC line.

    Use:
        Blank lines and comment lines yield None. Every other line must hold
        exactly seven whitespace-separated fields `id type x y z radius parent`.

    Args:
        text (str): Raw line text (a trailing newline is fine).
        line_number (int): 1-based line number, reported in errors.
        comment_marker (str): Character that starts a comment line.

    Returns:
        Optional[CompartmentRecord]: The record, or None for blank/comment lines.

    Raises:
        MalformedRecord: If the field count is wrong, a field is not numeric,
            the id is not positive or the radius is negative.
    """
    # Skip blank and comment lines
    stripped = text.strip()
    if not stripped or stripped.startswith(comment_marker):
        return None

    raw = text.rstrip("\r\n")
    specs = stripped.split()
    if len(specs) != len(FIELD_NAMES):
        raise MalformedRecord(
            line_number, raw, f"expected {len(FIELD_NAMES)} fields, got {len(specs)}"
        )

    # Integer-like and float fields
    nid = _to_int(specs[0], "id", line_number, raw)
    type_code = _to_int(specs[1], "type", line_number, raw)
    x, y, z, radius = (
        _to_float(token, name, line_number, raw)
        for token, name in zip(specs[2:6], FIELD_NAMES[2:6])
    )
    parent_id = _to_int(specs[6], "parent", line_number, raw)

    # Same sanity checks SWC readers apply to ids and radii
    if nid <= 0:
        raise MalformedRecord(line_number, raw, f"id must be positive, got {nid}")
    if radius < 0:
        raise MalformedRecord(line_number, raw, f"radius must be non-negative, got {radius}")

    return CompartmentRecord(
        id=nid,
        type_code=type_code,
        x=x,
        y=y,
        z=z,
        radius=radius,
        parent_id=parent_id,
        line=line_number,
    )


def parse_lines(
    lines: Iterable[str],
    skip_malformed: bool = False,
    comment_marker: str = "#",
) -> ParseResult:
    """
    Parse every line of an SWC document.

    Args:
        lines (Iterable[str]): Document lines in file order.
        skip_malformed (bool): If True, collect malformed lines in
            `ParseResult.errors` and keep scanning; otherwise raise on the
            first one.
        comment_marker (str): Character that starts a comment line.

    Returns:
        ParseResult: Records in file order plus any skipped errors.

    Raises:
        MalformedRecord: On the first malformed line when skip_malformed is False.
    """
    result = ParseResult()
    for line_number, text in enumerate(lines, start=1):
        try:
            record = parse_line(text, line_number, comment_marker)
        except MalformedRecord as err:
            if not skip_malformed:
                raise
            logger.warning("Skipping %s", err)
            result.errors.append(err)
            continue
        if record is not None:
            result.records.append(record)

    logger.debug("Parsed %d records (%d skipped)", len(result.records), len(result.errors))
    return result


def parse_text(text: str, skip_malformed: bool = False, comment_marker: str = "#") -> ParseResult:
    # Split on line endings only; str.splitlines also breaks on form feeds and other separators
    return parse_lines(io.StringIO(text, newline=None), skip_malformed=skip_malformed, comment_marker=comment_marker)
