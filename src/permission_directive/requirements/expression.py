"""Requirement expression model.

A requirement arrives from the host as a plain value: a string, a list, or
a ``{"permissions": [...], "mode": "..."}`` mapping.  The validator decodes
that value once into the closed set of node types defined here, and the
evaluator works exclusively on those nodes.

Node types
----------
- :class:`Wildcard` -- the ``"*"`` sentinel, always satisfied
- :class:`Single`   -- one permission, satisfied by exact membership
- :class:`AnyOf`    -- list of child nodes, satisfied when any child is
- :class:`Group`    -- permissions combined under a :class:`MatchMode`
- :class:`Rejected` -- a list item that failed the deep group check; it
  evaluates to ``False`` and reports its diagnostic when evaluated
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from permission_directive.diagnostics import DiagnosticKind

WILDCARD = "*"


class MatchMode(str, Enum):
    """Comparison strategy applied by a :class:`Group`."""

    AND = "and"
    OR = "or"
    EXACT = "exact"
    START_WITH = "startWith"
    END_WITH = "endWith"
    REGEX = "regex"

    @classmethod
    def values(cls) -> list[str]:
        """Return the wire literals in declaration order."""
        return [mode.value for mode in cls]

    @classmethod
    def from_value(cls, value: object) -> MatchMode | None:
        """Return the mode for a wire literal, or ``None`` if unknown."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class Wildcard:
    """Always satisfied."""

    def __str__(self) -> str:
        return WILDCARD


@dataclass(frozen=True)
class Single:
    """Satisfied when *permission* is held exactly."""

    permission: str

    def __str__(self) -> str:
        return self.permission


@dataclass(frozen=True)
class Group:
    """Permissions combined under a match mode.

    Attributes
    ----------
    permissions:
        Requirement strings: exact names, prefixes, suffixes or regular
        expressions depending on *mode*.
    mode:
        How the strings are compared with held permissions.
    """

    permissions: tuple[str, ...]
    mode: MatchMode

    def __str__(self) -> str:
        # Programmatic groups may carry a raw mode string.
        mode = getattr(self.mode, "value", self.mode)
        return f"{mode}({', '.join(map(str, self.permissions))})"


@dataclass(frozen=True)
class AnyOf:
    """Satisfied when at least one child expression is satisfied."""

    items: tuple[RequirementExpression, ...]

    def __str__(self) -> str:
        return "[" + ", ".join(str(item) for item in self.items) + "]"


@dataclass(frozen=True)
class Rejected:
    """Placeholder for a list item whose group definition is unusable."""

    kind: DiagnosticKind
    message: str
    raw: object = None

    def __str__(self) -> str:
        return f"<rejected: {self.kind.value}>"


RequirementExpression = Union[Wildcard, Single, Group, AnyOf, Rejected]
