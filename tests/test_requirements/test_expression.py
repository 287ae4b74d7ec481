"""Tests for the requirement expression model."""
from __future__ import annotations

import pytest

from permission_directive.diagnostics import DiagnosticKind
from permission_directive.requirements.expression import (
    AnyOf,
    Group,
    MatchMode,
    Rejected,
    Single,
    Wildcard,
)


class TestMatchMode:
    def test_wire_literals(self) -> None:
        assert MatchMode.values() == ["and", "or", "exact", "startWith", "endWith", "regex"]

    @pytest.mark.parametrize("literal", ["and", "or", "exact", "startWith", "endWith", "regex"])
    def test_from_value_known(self, literal: str) -> None:
        mode = MatchMode.from_value(literal)
        assert mode is not None
        assert mode.value == literal

    @pytest.mark.parametrize("literal", ["bogus", "AND", "start_with", "", None, 3])
    def test_from_value_unknown(self, literal: object) -> None:
        assert MatchMode.from_value(literal) is None

    def test_from_value_passes_enum_through(self) -> None:
        assert MatchMode.from_value(MatchMode.REGEX) is MatchMode.REGEX

    def test_is_str_enum(self) -> None:
        assert MatchMode.START_WITH == "startWith"


class TestNodes:
    def test_nodes_are_hashable_and_comparable(self) -> None:
        group = Group(permissions=("a", "b"), mode=MatchMode.AND)
        assert group == Group(permissions=("a", "b"), mode=MatchMode.AND)
        assert len({Single("a"), Single("a"), Wildcard()}) == 2

    def test_nodes_are_frozen(self) -> None:
        node = Single("a")
        with pytest.raises(AttributeError):
            node.permission = "b"  # type: ignore[misc]

    def test_str_rendering(self) -> None:
        expression = AnyOf(
            (
                Single("read"),
                Group(permissions=("admin.",), mode=MatchMode.START_WITH),
                Wildcard(),
            )
        )
        assert str(expression) == "[read, startWith(admin.), *]"

    def test_rejected_str(self) -> None:
        node = Rejected(kind=DiagnosticKind.UNKNOWN_MODE, message="Unknown mode: x")
        assert str(node) == "<rejected: unknown_mode>"
