# src/swc2dot/core.py
from __future__ import annotations

# General imports (stdlib)
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple

# Third-party imports
from tqdm import tqdm

# Local imports
from .config import Config, make_config
from .exceptions import Swc2DotError
from .io import discover_swc, read_swc_file, write_dot
from .logging_config import timed
from .parser import ParseResult, parse_text
from .structure import GraphSummary, MorphologyGraph
from .styles import StyleRegistry
from .topology import build_graph
from .writer import to_dot

logger = logging.getLogger(__name__)


@dataclass
class Conversion:
    """Result of converting one SWC document."""
    graph: MorphologyGraph
    dot: str
    errors: List[Swc2DotError] = field(default_factory=list)


@dataclass
class BatchReport:
    """Outcome of a directory run."""
    converted: List[Path] = field(default_factory=list)
    summaries: List[Tuple[Path, GraphSummary]] = field(default_factory=list)
    failed: List[Tuple[Path, Swc2DotError]] = field(default_factory=list)


def convert_text(
    text: str,
    overrides: Optional[Mapping[str, Mapping[str, Any]]] = None,
    cfg: Optional[Config] = None,
) -> str:
    """
    Convert SWC text to DOT text in one call.

    Args:
        text (str): SWC document.
        overrides: Optional style overrides, style name -> attributes.
        cfg (Optional[Config]): Configuration; defaults to make_config().

    Returns:
        str: DOT document.

    Raises:
        MalformedRecord: If a line is malformed and skipping is disabled.
        StructureError: If the records do not form a valid forest.
    """
    pipeline = ConversionPipeline(cfg or make_config(), StyleRegistry.from_overrides(overrides))
    return pipeline.convert(text).dot


class ConversionPipeline:
    """High-level orchestrator: parse, build, style, serialize."""

    def __init__(self, cfg: Config, registry: StyleRegistry | None = None) -> None:
        """
        Args:
            cfg (Config): Global configuration.
            registry (StyleRegistry | None): Node styling; defaults to the
                built-in styles.
        """
        self.cfg = cfg
        self.registry = registry or StyleRegistry()

    def render(self, parsed: ParseResult) -> Conversion:
        graph = build_graph(parsed.records)
        dot = to_dot(
            graph,
            self.registry,
            indent=self.cfg.rendering.indent,
            line_width=self.cfg.rendering.line_width,
        )
        return Conversion(graph=graph, dot=dot, errors=list(parsed.errors))

    def convert(self, text: str) -> Conversion:
        parsed = parse_text(
            text,
            skip_malformed=self.cfg.parsing.skip_malformed,
            comment_marker=self.cfg.parsing.comment_marker,
        )
        return self.render(parsed)

    def convert_file(self, src: Path, dst: Path) -> Conversion:
        """
        Convert one SWC file and write the DOT output.

        Raises:
            DataNotFound: If `src` does not exist.
            MalformedRecord: If a line is malformed and skipping is disabled.
            StructureError: If the records do not form a valid forest.
        """
        with timed(f"convert {Path(src).name}", logger):
            conversion = self.render(read_swc_file(src, self.cfg))
            write_dot(dst, conversion.dot)
        return conversion

    def output_path(self, src: Path, src_root: Path, dst_root: Path) -> Path:
        rel = Path(src).relative_to(src_root)
        return Path(dst_root) / rel.with_suffix(self.cfg.pathing.output_suffix)

    def run(self, src: Path, dst: Path) -> BatchReport:
        """
        Convert a single file, or every SWC file below a directory.

        Use:
            A file is converted to `dst` directly and any error propagates.
            For a directory, each discovered file is written to the mirrored
            path below `dst` with the output suffix; files that fail are
            logged and reported instead of stopping the batch.

        Args:
            src (Path): SWC file or directory.
            dst (Path): Output file (file mode) or output directory.

        Returns:
            BatchReport: Converted output paths and failures.

        Raises:
            DataNotFound: If `src` does not exist or the directory holds no
                SWC files.
        """
        src = Path(src)
        dst = Path(dst)
        report = BatchReport()

        if not src.is_dir():
            conversion = self.convert_file(src, dst)
            report.converted.append(dst)
            report.summaries.append((src, conversion.graph.summary()))
            return report

        files = discover_swc(src, self.cfg.pathing.input_suffix)
        for path in tqdm(files, desc="Converting", unit="file"):
            out = self.output_path(path, src, dst)
            try:
                conversion = self.convert_file(path, out)
            except Swc2DotError as e:
                logger.error("Failed to convert %s: %s", path, e)
                report.failed.append((path, e))
                continue
            report.converted.append(out)
            report.summaries.append((path, conversion.graph.summary()))

        logger.info("Converted %d of %d files", len(report.converted), len(files))
        return report
