# src/swc2dot/topology.py
from __future__ import annotations

# General imports (stdlib)
import logging
from collections import defaultdict
from typing import DefaultDict, Dict, Iterable, List, Set

# Local imports
from .exceptions import CycleDetected, DuplicateId, UnknownParent
from .structure import ROOT_PARENT, CompartmentRecord, MorphologyGraph

logger = logging.getLogger(__name__)


def build_graph(records: Iterable[CompartmentRecord]) -> MorphologyGraph:
    """
    Build a validated MorphologyGraph from parsed SWC records.

    Use:
        Convert SWC parent pointers into an id -> children adjacency. The
        full id set is collected before any parent reference is checked,
        so a parent may appear later in the file than its children.

    Args:
        records (Iterable[CompartmentRecord]): Records in file order.

    Returns:
        MorphologyGraph: Forest whose child lists keep file order.

    Raises:
        DuplicateId: If an id occurs more than once.
        UnknownParent: If a non-root record references an id not present.
        CycleDetected: If following parent links from a node revisits it.
    """
    ordered: List[CompartmentRecord] = list(records)

    # First pass: index every record by id
    by_id: Dict[int, CompartmentRecord] = {}
    for rec in ordered:
        if rec.id in by_id:
            raise DuplicateId(rec.id)
        by_id[rec.id] = rec

    # Second pass: validate parent references and link children in file order
    children: DefaultDict[int, List[int]] = defaultdict(list)
    for rec in ordered:
        if rec.parent_id == ROOT_PARENT:
            continue
        if rec.parent_id not in by_id:
            raise UnknownParent(rec.id, rec.parent_id)
        children[rec.parent_id].append(rec.id)

    check_acyclic(by_id, [rec.id for rec in ordered])

    graph = MorphologyGraph(by_id, {nid: tuple(kids) for nid, kids in children.items()})
    logger.debug("Built graph with %d compartments and %d roots", len(graph), len(graph.roots()))
    return graph


def check_acyclic(by_id: Dict[int, CompartmentRecord], order: List[int]) -> None:
    """
    Verify that every parent chain ends at a root.

    Use:
        Walk from each node towards its root. Nodes already proven to reach
        a root stop the walk early, so every node is visited a bounded number
        of times. Revisiting a node on the current chain means a cycle.

    Args:
        by_id (Dict[int, CompartmentRecord]): Records keyed by id; all parent
            references must already be resolvable.
        order (List[int]): Ids in the order walks are started.

    Raises:
        CycleDetected: With the id at which the walk closed on itself.
    """
    grounded: Set[int] = set()
    for start in order:
        chain: List[int] = []
        on_chain: Set[int] = set()
        current = start
        while current != ROOT_PARENT and current not in grounded:
            if current in on_chain:
                raise CycleDetected(current)
            on_chain.add(current)
            chain.append(current)
            current = by_id[current].parent_id
        grounded.update(chain)
