# src/swc2dot/__main__.py
from __future__ import annotations

# General imports (stdlib)
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Local imports
from .config import Parsing, Rendering, make_config
from .core import ConversionPipeline
from .exceptions import Swc2DotError
from .io import load_style_overrides
from .logging_config import setup_logging
from .styles import StyleRegistry


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="swc2dot",
        description="Convert SWC neuron morphologies to DOT graph language.",
    )
    ap.add_argument("input", metavar="INPUT", type=Path,
                    help="SWC neuron morphology file, or a directory of them")
    ap.add_argument("-o", "--output", metavar="FILE", type=Path, required=True,
                    help="Output file for morphology in DOT format (a directory when INPUT is one)")
    ap.add_argument("-s", "--style", metavar="FILE", type=Path, default=None,
                    help="YAML file overriding node attributes per compartment type")
    ap.add_argument("--skip-malformed", action="store_true",
                    help="Skip unparseable lines instead of aborting")
    ap.add_argument("--indent", type=int, default=Rendering.indent,
                    help="Spaces per indentation level (default: %(default)s)")
    ap.add_argument("--line-width", type=int, default=Rendering.line_width,
                    help="Wrap style block id lists at this column (default: %(default)s)")
    ap.add_argument("--summary", action="store_true",
                    help="Log compartment, root, branch point and tip counts")
    ap.add_argument("--log-file", default=None, help="Also write log output to this file")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logger = setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    try:
        cfg = make_config(
            parsing=Parsing(skip_malformed=args.skip_malformed),
            rendering=Rendering(indent=args.indent, line_width=args.line_width),
        )
        registry = StyleRegistry()
        if args.style is not None:
            registry.apply_overrides(load_style_overrides(args.style))

        report = ConversionPipeline(cfg, registry).run(args.input, args.output)
    except Swc2DotError as e:
        logger.error(str(e))
        return 1

    if args.summary:
        for path, summary in report.summaries:
            logger.info("%s: %s", path, "; ".join(summary.lines()))

    return 1 if report.failed else 0


if __name__ == "__main__":
    sys.exit(main())
