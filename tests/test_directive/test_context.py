"""Tests for PermissionContext and PermissionCell."""
from __future__ import annotations

import threading

from permission_directive.diagnostics import DiagnosticCollector, DiagnosticKind
from permission_directive.directive.context import (
    ObservableCell,
    PermissionCell,
    PermissionContext,
)


class TestPermissionCell:
    def test_initial_value_copied(self) -> None:
        source = ["read"]
        cell = PermissionCell(source)
        source.append("write")
        assert cell.value == ["read"]

    def test_default_empty(self) -> None:
        assert PermissionCell().value == []

    def test_set_replaces(self) -> None:
        cell = PermissionCell(["read"])
        cell.set(["write"])
        assert cell.value == ["write"]

    def test_value_setter(self) -> None:
        cell = PermissionCell()
        cell.value = ("a", "b")
        assert cell.value == ["a", "b"]

    def test_value_returns_copy(self) -> None:
        cell = PermissionCell(["read"])
        cell.value.append("write")
        assert cell.value == ["read"]

    def test_satisfies_observable_protocol(self) -> None:
        assert isinstance(PermissionCell(), ObservableCell)
        assert not isinstance(["read"], ObservableCell)


class TestPermissionContext:
    def test_unconfigured_by_default(self) -> None:
        context = PermissionContext()
        assert context.is_configured is False
        assert context.snapshot() is None

    def test_static_list_snapshot(self) -> None:
        held = ["read"]
        context = PermissionContext(held)
        assert context.is_configured is True
        assert context.snapshot() is held

    def test_cell_snapshot_reads_current_value(self) -> None:
        cell = PermissionCell(["read"])
        context = PermissionContext(cell)
        cell.set(["write"])
        assert context.snapshot() == ["write"]

    def test_configure_last_write_wins(self) -> None:
        context = PermissionContext(["read"])
        context.configure(["write"])
        context.configure(["delete"])
        assert context.snapshot() == ["delete"]

    def test_configure_none_unconfigures(self) -> None:
        context = PermissionContext(["read"])
        context.configure(None)
        assert context.is_configured is False

    def test_development_toggle(self) -> None:
        collector = DiagnosticCollector()
        context = PermissionContext(development=False, sink=collector)
        context.reporter.report(DiagnosticKind.MISSING_VALUE, "hidden")
        context.development = True
        context.reporter.report(DiagnosticKind.MISSING_VALUE, "shown")
        assert context.development is True
        assert [d.message for d in collector.diagnostics] == ["shown"]

    def test_concurrent_configure_and_snapshot(self) -> None:
        context = PermissionContext(["a"])
        seen: list[object] = []

        def writer() -> None:
            for i in range(200):
                context.configure([f"p{i}"])

        def reader() -> None:
            for _ in range(200):
                seen.append(context.snapshot())

        threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert all(isinstance(s, list) and len(s) == 1 for s in seen)
