# src/swc2dot/config.py
from __future__ import annotations

# General imports (stdlib)
from dataclasses import dataclass, replace
from typing import Optional

# Local imports
from .exceptions import ConfigError


@dataclass(frozen=True)
class Parsing:
    comment_marker: str = "#"                                                    # Lines starting with this character are comments
    skip_malformed: bool = False                                                 # Skip unparseable lines instead of aborting


@dataclass(frozen=True)
class Rendering:
    indent: int = 4                                                              # Spaces per indentation level in DOT output
    line_width: int = 80                                                         # Wrap id lists of style blocks at this column


@dataclass(frozen=True)
class Pathing:
    input_suffix: str = ".swc"                                                   # Suffix of morphology files in directory mode
    output_suffix: str = ".dot"                                                  # Suffix of written graph files


@dataclass(frozen=True)
class Config:
    parsing: Parsing = Parsing()                                                 # SWC reading behavior
    rendering: Rendering = Rendering()                                           # DOT layout
    pathing: Pathing = Pathing()                                                 # File naming in directory mode


MIN_LINE_WIDTH = 20


def make_config(
    parsing: Optional[Parsing] = None,
    rendering: Optional[Rendering] = None,
    pathing: Optional[Pathing] = None,
) -> Config:
    """
    Build and validate a Config object for a conversion run.

    Use:
        Construct a Config from defaults, replacing whole sections with the
        ones given, then validate and normalize the result.

    Args:
        parsing (Optional[Parsing]): Parsing section; defaults to Parsing().
        rendering (Optional[Rendering]): Rendering section; defaults to Rendering().
        pathing (Optional[Pathing]): Pathing section; defaults to Pathing().

    Returns:
        Config: Validated configuration with normalized file suffixes.

    Raises:
        ConfigError: If the comment marker is not a single non-blank character.
        ConfigError: If indent is negative or line_width is below MIN_LINE_WIDTH.
        ConfigError: If a file suffix is empty.
    """
    # Instantiate configuration, falling back to the dataclass defaults per section
    cfg = Config(
        parsing=parsing or Parsing(),
        rendering=rendering or Rendering(),
        pathing=pathing or Pathing(),
    )

    # Validate the comment marker
    marker = cfg.parsing.comment_marker
    if len(marker) != 1 or marker.isspace():
        raise ConfigError(
            f"Config: 'parsing.comment_marker' must be a single non-blank character, got {marker!r}."
        )

    # Validate rendering geometry
    if cfg.rendering.indent < 0:
        raise ConfigError(f"Config: 'rendering.indent' must be >= 0, got {cfg.rendering.indent}.")
    if cfg.rendering.line_width < MIN_LINE_WIDTH:
        raise ConfigError(
            f"Config: 'rendering.line_width' must be >= {MIN_LINE_WIDTH}, got {cfg.rendering.line_width}."
        )

    # Normalize suffixes so a leading "." is always present
    suffixes = {}
    for name in ("input_suffix", "output_suffix"):
        suffix = str(getattr(cfg.pathing, name)).strip()
        if not suffix or suffix == ".":
            raise ConfigError(f"Config: 'pathing.{name}' is empty.")
        if not suffix.startswith("."):
            suffix = "." + suffix
        suffixes[name] = suffix
    cfg = replace(cfg, pathing=replace(cfg.pathing, **suffixes))

    # Return the validated configuration
    return cfg
