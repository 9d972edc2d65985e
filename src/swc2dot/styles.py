# src/swc2dot/styles.py
from __future__ import annotations

# General imports (stdlib)
import logging
from typing import Any, Dict, Mapping, Optional, Tuple

# Local imports
from .structure import CompartmentKind

logger = logging.getLogger(__name__)

StyleRule = Dict[str, str]

# Built-in node styling per compartment kind, in ascending type code order
BUILTIN_STYLES: Dict[str, StyleRule] = {
    CompartmentKind.UNDEFINED.style_name: {
        "shape": "circle",
        "style": "filled",
        "fillcolor": "gray",
        "fontcolor": "black",
    },
    CompartmentKind.SOMA.style_name: {
        "shape": "doublecircle",
        "style": "filled",
        "fillcolor": "black",
        "fontcolor": "white",
    },
    CompartmentKind.AXON.style_name: {
        "shape": "circle",
        "style": "filled",
        "fillcolor": "blue",
        "fontcolor": "white",
    },
    CompartmentKind.DENDRITE.style_name: {
        "shape": "circle",
        "style": "filled",
        "fillcolor": "red",
        "fontcolor": "white",
    },
    CompartmentKind.APICAL_DENDRITE.style_name: {
        "shape": "circle",
        "style": "filled",
        "fillcolor": "purple",
        "fontcolor": "white",
    },
    CompartmentKind.CUSTOM.style_name: {
        "shape": "circle",
        "style": "filled",
        "fillcolor": "green",
        "fontcolor": "black",
    },
}

_KIND_BY_NAME = {kind.style_name: kind for kind in CompartmentKind}


def stringify(value: Any) -> str:
    """Render an override scalar the way it reads in a YAML document."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def merge_attributes(base: Mapping[str, str], overrides: Mapping[str, Any]) -> StyleRule:
    """
    Overlay `overrides` on `base` attribute by attribute.

    Keys in `overrides` win; a None value drops that attribute. Keys not in
    `overrides` keep their `base` value and position.
    """
    merged = dict(base)
    for key, value in overrides.items():
        if value is None:
            merged.pop(key, None)
        else:
            merged[key] = stringify(value)
    return merged


class StyleRegistry:
    """
    Node attributes per compartment type.

    Rules are keyed by style name: the built-in kind names (`soma`, `axon`,
    ...) or a decimal type code (e.g. `"7"`) that pins a rule to one exact
    code. Codes without a rule of their own use their kind's rule, and codes
    outside the standard range fall back to `custom`.
    """

    def __init__(self, rules: Optional[Mapping[str, Mapping[str, str]]] = None) -> None:
        source = BUILTIN_STYLES if rules is None else rules
        self._rules: Dict[str, StyleRule] = {k: dict(v) for k, v in source.items()}

    @classmethod
    def from_overrides(cls, overrides: Optional[Mapping[str, Mapping[str, Any]]]) -> "StyleRegistry":
        registry = cls()
        if overrides:
            registry.apply_overrides(overrides)
        return registry

    def apply_overrides(self, overrides: Mapping[str, Mapping[str, Any]]) -> None:
        """
        Merge caller-supplied attributes into the registry.

        Args:
            overrides: Mapping style name -> attribute mapping. Names not
                known yet create new rules.
        """
        for name, attributes in overrides.items():
            name = str(name).strip()
            if name not in self._rules:
                logger.debug("Adding style rule %r", name)
            self._rules[name] = merge_attributes(self._rules.get(name, {}), attributes or {})

    def names(self) -> Tuple[str, ...]:
        return tuple(self._rules)

    def rule(self, name: str) -> StyleRule:
        return dict(self._rules.get(name, {}))

    def style_name(self, type_code: int) -> str:
        if str(type_code) in self._rules:
            return str(type_code)
        name = CompartmentKind.from_code(type_code).style_name
        if name in self._rules:
            return name
        return CompartmentKind.CUSTOM.style_name

    def resolve(self, type_code: int) -> StyleRule:
        return self.rule(self.style_name(type_code))

    @staticmethod
    def block_order(name: str) -> Tuple[int, str]:
        """Sort key placing style blocks in ascending type code order."""
        if name in _KIND_BY_NAME:
            return int(_KIND_BY_NAME[name]), name
        return int(name), name
