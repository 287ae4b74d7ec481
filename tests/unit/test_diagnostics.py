"""Tests for DiagnosticReporter and DiagnosticCollector."""
from __future__ import annotations

import logging

import pytest

from permission_directive.diagnostics import (
    Diagnostic,
    DiagnosticCollector,
    DiagnosticKind,
    DiagnosticReporter,
)


class TestDiagnostic:
    def test_render_has_prefix(self) -> None:
        diagnostic = Diagnostic(kind=DiagnosticKind.UNKNOWN_MODE, message="Unknown mode: x")
        assert diagnostic.render() == "[v-permission]: Unknown mode: x"

    def test_kind_values_are_snake_case(self) -> None:
        assert DiagnosticKind.REGEX_COMPILE_FAILURE.value == "regex_compile_failure"
        assert len({k.value for k in DiagnosticKind}) == len(DiagnosticKind)


class TestDiagnosticReporter:
    def test_default_is_production(self) -> None:
        assert DiagnosticReporter().development is False

    def test_report_returns_diagnostic_even_when_silent(self) -> None:
        collector = DiagnosticCollector()
        reporter = DiagnosticReporter(sink=collector)
        diagnostic = reporter.report(DiagnosticKind.MISSING_VALUE, "missing", value=None)
        assert diagnostic.kind == DiagnosticKind.MISSING_VALUE
        assert diagnostic.details == {"value": None}
        assert collector.diagnostics == []

    def test_development_forwards_to_sink(self) -> None:
        collector = DiagnosticCollector()
        reporter = DiagnosticReporter(development=True, sink=collector)
        reporter.report(DiagnosticKind.UNSUPPORTED_TYPE, "bad type")
        reporter.report(DiagnosticKind.MISSING_FIELDS, "missing fields")
        assert collector.kinds() == [
            DiagnosticKind.UNSUPPORTED_TYPE,
            DiagnosticKind.MISSING_FIELDS,
        ]

    def test_development_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        reporter = DiagnosticReporter(development=True)
        with caplog.at_level(logging.WARNING, logger="permission_directive"):
            reporter.report(DiagnosticKind.UNKNOWN_MODE, "Unknown mode: x")
        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.levelno == logging.WARNING
        assert record.getMessage() == "[v-permission]: Unknown mode: x"
        assert record.diagnostic_kind == "unknown_mode"  # type: ignore[attr-defined]

    def test_production_logs_nothing(self, caplog: pytest.LogCaptureFixture) -> None:
        reporter = DiagnosticReporter()
        with caplog.at_level(logging.DEBUG):
            reporter.report(DiagnosticKind.UNKNOWN_MODE, "Unknown mode: x")
        assert caplog.records == []

    def test_toggle(self) -> None:
        collector = DiagnosticCollector()
        reporter = DiagnosticReporter(sink=collector)
        reporter.development = True
        reporter.report(DiagnosticKind.MISSING_VALUE, "on")
        reporter.development = False
        reporter.report(DiagnosticKind.MISSING_VALUE, "off")
        assert [d.message for d in collector.diagnostics] == ["on"]


class TestDiagnosticCollector:
    def test_clear(self) -> None:
        collector = DiagnosticCollector()
        collector(Diagnostic(kind=DiagnosticKind.MISSING_VALUE, message="x"))
        collector.clear()
        assert collector.diagnostics == []

    def test_diagnostics_returns_copy(self) -> None:
        collector = DiagnosticCollector()
        collector(Diagnostic(kind=DiagnosticKind.MISSING_VALUE, message="x"))
        collector.diagnostics.clear()
        assert len(collector.diagnostics) == 1
