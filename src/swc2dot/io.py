# src/swc2dot/io.py
from __future__ import annotations

# General imports (stdlib)
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

# Third-party imports
import yaml

# Local imports
from .config import Config
from .exceptions import DataNotFound, FileAccessError, StyleOverrideError
from .parser import ParseResult, parse_text
from .styles import stringify

StyleOverrides = Dict[str, Dict[str, Optional[str]]]


def discover_swc(directory: Path, suffix: str = ".swc") -> List[Path]:
    """
    Recursively collect morphology files under a directory.

    Args:
        directory (Path): Root directory to search.
        suffix (str): File suffix identifying SWC files, default ".swc".

    Returns:
        List[Path]: Matching files, sorted for a deterministic processing order.

    Raises:
        DataNotFound: If the directory does not exist or holds no matching files.
    """
    # Validate the root directory exists on disk
    root = Path(directory)
    if not root.is_dir():
        raise DataNotFound(f"Directory not found: {root}")

    # Normalize suffix
    if suffix and not suffix.startswith("."):
        suffix = "." + suffix

    # Walk the directory tree and keep files with the requested suffix
    found: List[Path] = []
    for dirpath, _dirnames, filenames in os.walk(str(root)):
        for item in filenames:
            if item.lower().endswith(suffix.lower()):
                found.append(Path(dirpath) / item)

    if not found:
        raise DataNotFound(f"No '*{suffix}' files found under: '{root}'")

    return sorted(found)


def read_swc_file(filepath: Path, cfg: Config) -> ParseResult:
    """
    Read an SWC file and parse it into compartment records.

    Args:
        filepath (Path): SWC file to read.
        cfg (Config): Supplies the comment marker and the malformed-line policy.

    Returns:
        ParseResult: Records in file order and any skipped malformed lines.

    Raises:
        DataNotFound: If the file does not exist.
        MalformedRecord: If a line is malformed and skipping is disabled.
    """
    path = Path(filepath)
    if not path.is_file():
        raise DataNotFound(f"SWC file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise FileAccessError(f"Could not read SWC file {path}: {e}") from e

    return parse_text(
        text,
        skip_malformed=cfg.parsing.skip_malformed,
        comment_marker=cfg.parsing.comment_marker,
    )


def _coerce_group(name: str, group: Any, source: Path) -> Dict[str, Optional[str]]:
    # An empty group ("soma:") overrides nothing
    if group is None:
        return {}
    if not isinstance(group, dict):
        raise StyleOverrideError(
            f"Expected style group '{name}' in {source} to be a mapping, got {type(group).__name__}."
        )

    attributes: Dict[str, Optional[str]] = {}
    for key, value in group.items():
        if value is not None and not isinstance(value, (str, int, float, bool)):
            raise StyleOverrideError(
                f"Expected value of '{name}.{key}' in {source} to be null or a scalar, "
                f"got {type(value).__name__}."
            )
        attributes[str(key)] = None if value is None else stringify(value)
    return attributes


def load_style_overrides(filepath: Path) -> StyleOverrides:
    """
    Load a YAML style override document.

    Use:
        The document maps style names (`soma`, `axon`, `dendrite`,
        `apicaldendrite`, `undefined`, `custom`, or a type code) to mappings
        of DOT node attributes. Scalar values are coerced to strings and null
        values are kept as None, which removes the attribute.

    Args:
        filepath (Path): YAML file to read.

    Returns:
        StyleOverrides: Style name -> attribute name -> value or None.

    Raises:
        DataNotFound: If the file does not exist.
        StyleOverrideError: If the file is not valid YAML or does not have
            the expected two-level shape.
    """
    path = Path(filepath)
    if not path.is_file():
        raise DataNotFound(f"Style file not found: {path}")

    try:
        document = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise FileAccessError(f"Could not read style file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise StyleOverrideError(f"Could not parse {path} as YAML: {e}") from e

    # An empty document means no overrides
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise StyleOverrideError(f"Expected contents of {path} to be a mapping.")

    return {str(name): _coerce_group(str(name), group, path) for name, group in document.items()}


def write_dot(filepath: Path, text: str) -> Path:
    """
    Write DOT text, creating parent directories as needed.

    Raises:
        FileAccessError: If the directory or file cannot be written.
    """
    path = Path(filepath)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise FileAccessError(f"Could not write {path}: {e}") from e
    return path
