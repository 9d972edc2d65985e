# src/swc2dot/exceptions.py
from __future__ import annotations

class Swc2DotError(Exception):
    """Base for all domain errors."""

class ConfigError(Swc2DotError):
    """Invalid or missing configuration."""

class DataNotFound(Swc2DotError):
    """Required file(s) or directory not found."""

class StyleOverrideError(Swc2DotError):
    """Style override document unreadable or invalid."""

class FileAccessError(Swc2DotError):
    """File exists but cannot be read or written."""


class MalformedRecord(Swc2DotError):
    """An SWC line that cannot be parsed into a compartment record."""

    def __init__(self, line: int, text: str, reason: str = "") -> None:
        self.line = line
        self.text = text
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Malformed SWC record on line {line}{detail} ({text!r})")


class StructureError(Swc2DotError):
    """Records that do not form a valid rooted forest."""

class DuplicateId(StructureError):
    def __init__(self, id: int) -> None:
        self.id = id
        super().__init__(f"Compartment id {id} appears more than once")

class UnknownParent(StructureError):
    def __init__(self, child: int, parent: int) -> None:
        self.child = child
        self.parent = parent
        super().__init__(
            f"Compartment {child} references parent {parent}, which is not defined"
        )

class CycleDetected(StructureError):
    def __init__(self, id: int) -> None:
        self.id = id
        super().__init__(f"Parent chain through compartment {id} forms a cycle")
