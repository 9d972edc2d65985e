# src/swc2dot/structure.py
from __future__ import annotations

# General imports (stdlib)
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Iterator, List, Optional, Tuple

# Third-party imports
import numpy as np
import pandas as pd


ROOT_PARENT = -1
"""Parent id marking a compartment without a parent (a root)."""


class CompartmentKind(IntEnum):
    """
    SWC compartment type codes.

    Codes 0-4 are the standard SWC types; 5 and above are custom types.
    Anything outside the standard range resolves to CUSTOM.
    """
    UNDEFINED = 0
    SOMA = 1
    AXON = 2
    DENDRITE = 3
    APICAL_DENDRITE = 4
    CUSTOM = 5

    @classmethod
    def from_code(cls, code: int) -> "CompartmentKind":
        if 0 <= code < cls.CUSTOM:
            return cls(code)
        return cls.CUSTOM

    @property
    def style_name(self) -> str:
        return _STYLE_NAMES[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_STYLE_NAMES = {
    CompartmentKind.UNDEFINED: "undefined",
    CompartmentKind.SOMA: "soma",
    CompartmentKind.AXON: "axon",
    CompartmentKind.DENDRITE: "dendrite",
    CompartmentKind.APICAL_DENDRITE: "apicaldendrite",
    CompartmentKind.CUSTOM: "custom",
}

_DESCRIPTIONS = {
    CompartmentKind.UNDEFINED: "undefined",
    CompartmentKind.SOMA: "somatic",
    CompartmentKind.AXON: "axonal",
    CompartmentKind.DENDRITE: "(basal) dendritic",
    CompartmentKind.APICAL_DENDRITE: "apical dendritic",
    CompartmentKind.CUSTOM: "custom",
}


@dataclass(frozen=True)
class CompartmentRecord:
    """
    One SWC line.

    Attributes:
        id (int): Positive compartment id, unique within a file.
        type_code (int): Raw SWC type code (see CompartmentKind).
        x, y, z (float): Position; carried through, never interpreted.
        radius (float): Non-negative radius; carried through.
        parent_id (int): Id of the parent compartment, or -1 for a root.
        line (Optional[int]): 1-based source line, None if built in code.
    """
    id: int
    type_code: int
    x: float
    y: float
    z: float
    radius: float
    parent_id: int
    line: Optional[int] = field(default=None, compare=False)

    @property
    def kind(self) -> CompartmentKind:
        return CompartmentKind.from_code(self.type_code)

    @property
    def is_root(self) -> bool:
        return self.parent_id == ROOT_PARENT


@dataclass(frozen=True)
class GraphSummary:
    n_nodes: int
    n_roots: int
    n_branch_points: int
    n_tips: int
    kind_counts: Dict[str, int]

    def lines(self) -> List[str]:
        out = [
            f"compartments: {self.n_nodes}",
            f"roots: {self.n_roots}",
            f"branch points: {self.n_branch_points}",
            f"tips: {self.n_tips}",
        ]
        # Counts are keyed by style name but reported with the readable description
        descriptions = {kind.style_name: kind.description for kind in CompartmentKind}
        out.extend(f"{descriptions[name]}: {count}" for name, count in self.kind_counts.items())
        return out


class MorphologyGraph:
    """
    Validated forest of SWC compartments.

    Stored as an arena of records keyed by id plus an id -> child ids
    adjacency. Instances are produced by `topology.build_graph` and are not
    modified afterwards.
    """

    def __init__(
        self,
        records: Dict[int, CompartmentRecord],
        children: Dict[int, Tuple[int, ...]],
    ) -> None:
        self._records = dict(records)
        self._children = {nid: tuple(children.get(nid, ())) for nid in self._records}
        self._ids = tuple(sorted(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[int]:
        return iter(self._ids)

    def __contains__(self, nid: object) -> bool:
        return nid in self._records

    def record(self, nid: int) -> CompartmentRecord:
        return self._records[nid]

    def parent(self, nid: int) -> Optional[int]:
        rec = self._records[nid]
        return None if rec.is_root else rec.parent_id

    def child_ids(self, nid: int) -> Tuple[int, ...]:
        return self._children[nid]

    def roots(self) -> List[int]:
        return [nid for nid in self._ids if self._records[nid].is_root]

    def branch_points(self) -> List[int]:
        return [nid for nid in self._ids if len(self._children[nid]) > 1]

    def tips(self) -> List[int]:
        return [nid for nid in self._ids if not self._children[nid]]

    def ancestors(self, nid: int) -> List[int]:
        """
        Return the parent chain of `nid`, nearest parent first.

        The walk is bounded by the node count; the builder guarantees it
        terminates at a root well within that bound.
        """
        chain: List[int] = []
        current = self.parent(nid)
        while current is not None and len(chain) <= len(self._records):
            chain.append(current)
            current = self.parent(current)
        return chain

    def ids_by_kind(self) -> Dict[CompartmentKind, List[int]]:
        groups: Dict[CompartmentKind, List[int]] = {}
        for nid in self._ids:
            groups.setdefault(self._records[nid].kind, []).append(nid)
        return groups

    def to_dataframe(self) -> pd.DataFrame:
        """
        Export the compartments as an SWC-style DataFrame.

        Returns:
            pd.DataFrame: One row per compartment in ascending id order with
                columns ID, Type, X, Y, Z, Radius, Parent.
        """
        # Standard SWC column layout
        column_names = ["ID", "Type", "X", "Y", "Z", "Radius", "Parent"]
        records = [self._records[nid] for nid in self._ids]

        # Typed column arrays keep integer columns integral even for an empty graph
        columns = {
            "ID": np.array([r.id for r in records], dtype=np.int64),
            "Type": np.array([r.type_code for r in records], dtype=np.int64),
            "X": np.array([r.x for r in records], dtype=np.float64),
            "Y": np.array([r.y for r in records], dtype=np.float64),
            "Z": np.array([r.z for r in records], dtype=np.float64),
            "Radius": np.array([r.radius for r in records], dtype=np.float64),
            "Parent": np.array([r.parent_id for r in records], dtype=np.int64),
        }
        return pd.DataFrame(columns, columns=column_names)

    def summary(self) -> GraphSummary:
        df = self.to_dataframe()
        kinds = df["Type"].map(lambda code: CompartmentKind.from_code(int(code)).style_name)
        counts = kinds.value_counts()
        kind_counts = {
            kind.style_name: int(counts[kind.style_name])
            for kind in CompartmentKind
            if kind.style_name in counts.index
        }
        return GraphSummary(
            n_nodes=len(self),
            n_roots=len(self.roots()),
            n_branch_points=len(self.branch_points()),
            n_tips=len(self.tips()),
            kind_counts=kind_counts,
        )
