# src/swc2dot/writer.py
from __future__ import annotations

# General imports (stdlib)
import textwrap
from typing import Dict, List, Mapping, Sequence

# Third-party imports
from graphviz.quoting import quote

# Local imports
from .structure import MorphologyGraph
from .styles import StyleRegistry


def dot_value(value: str) -> str:
    """Quote an attribute key or value unless it is a plain DOT ID that is not a keyword."""
    return quote(value)


def node_statement(attributes: Mapping[str, str]) -> str:
    pairs = ",".join(f"{dot_value(key)}={dot_value(val)}" for key, val in attributes.items())
    return f"node [{pairs}];"


def edge_statement(nid: int, child_ids: Sequence[int]) -> str:
    if not child_ids:
        return f"{nid};"
    if len(child_ids) == 1:
        return f"{nid} -- {child_ids[0]};"
    return f"{nid} -- {{{', '.join(str(c) for c in child_ids)}}};"


def group_by_style(graph: MorphologyGraph, registry: StyleRegistry) -> Dict[str, List[int]]:
    """
    Group node ids by the style rule their type code resolves to.

    Returns:
        Dict[str, List[int]]: Style name -> ascending ids, with groups in
            block order (ascending type code).
    """
    groups: Dict[str, List[int]] = {}
    for nid in graph:
        name = registry.style_name(graph.record(nid).type_code)
        groups.setdefault(name, []).append(nid)
    return {name: groups[name] for name in sorted(groups, key=StyleRegistry.block_order)}


def style_block(attributes: Mapping[str, str], ids: Sequence[int], indent: int, line_width: int) -> List[str]:
    outer = " " * indent
    inner = " " * (2 * indent)
    wrapped = textwrap.wrap(
        " ".join(f"{nid};" for nid in ids),
        width=line_width,
        initial_indent=inner,
        subsequent_indent=inner,
        break_long_words=False,
        break_on_hyphens=False,
    )
    return [f"{outer}{{", f"{inner}{node_statement(attributes)}", *wrapped, f"{outer}}}"]


def to_dot(
    graph: MorphologyGraph,
    registry: StyleRegistry,
    indent: int = 4,
    line_width: int = 80,
) -> str:
    """
    Serialize a morphology graph to DOT.

    Use:
        Emit one style block per compartment type present, then one
        structural line per node in ascending id order: an edge group for
        nodes with children and a bare declaration for leaves.

    Args:
        graph (MorphologyGraph): Validated forest.
        registry (StyleRegistry): Node attributes per type code.
        indent (int): Spaces per indentation level.
        line_width (int): Column at which style block id lists wrap.

    Returns:
        str: Complete `graph{ ... }` document ending in a newline.
    """
    lines = ["graph{"]

    # Style blocks, one per resolved style
    for name, ids in group_by_style(graph, registry).items():
        lines.extend(style_block(registry.rule(name), ids, indent, line_width))

    # Structure, one statement per node
    pad = " " * indent
    lines.extend(f"{pad}{edge_statement(nid, graph.child_ids(nid))}" for nid in graph)

    lines.append("}")
    return "\n".join(lines) + "\n"
