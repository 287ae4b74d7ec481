"""Advisory diagnostics for requirement validation and evaluation.

Nothing in the evaluation path raises on a bad requirement.  Problems are
turned into :class:`Diagnostic` records and handed to a
:class:`DiagnosticReporter`, which only emits them while development mode
is switched on.  In production the reporter is silent and the guarded
element is simply treated as unauthorised.

Example
-------
>>> reporter = DiagnosticReporter(development=True)
>>> diagnostic = reporter.report(DiagnosticKind.UNKNOWN_MODE, 'Invalid mode "bogus"')
>>> diagnostic.kind.value
'unknown_mode'
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)

_PREFIX = "[v-permission]"


class DiagnosticKind(str, Enum):
    """Every condition that causes a requirement to be denied."""

    MISSING_VALUE = "missing_value"
    MALFORMED_ARRAY_ITEM = "malformed_array_item"
    MISSING_FIELDS = "missing_fields"
    PERMISSIONS_NOT_ARRAY = "permissions_not_array"
    PERMISSIONS_NOT_STRINGS = "permissions_not_strings"
    UNKNOWN_MODE = "unknown_mode"
    UNSUPPORTED_TYPE = "unsupported_type"
    REGEX_COMPILE_FAILURE = "regex_compile_failure"
    PERMISSIONS_NOT_CONFIGURED = "permissions_not_configured"
    UNEXPECTED_EVALUATION_FAILURE = "unexpected_evaluation_failure"


@dataclass(frozen=True)
class Diagnostic:
    """A single advisory diagnostic.

    Attributes
    ----------
    kind:
        The category of the problem.
    message:
        Human-readable description.
    details:
        Extra context (the offending value, the pattern, the error text).
    """

    kind: DiagnosticKind
    message: str
    details: dict[str, object] = field(default_factory=dict)

    def render(self) -> str:
        """Return the log line for this diagnostic."""
        return f"{_PREFIX}: {self.message}"


DiagnosticSink = Callable[[Diagnostic], None]


class DiagnosticReporter:
    """Gatekeeper for diagnostic output.

    Parameters
    ----------
    development:
        When ``True`` diagnostics are logged at WARNING and forwarded to
        *sink*.  When ``False`` (default) :meth:`report` still returns the
        diagnostic but emits nothing.
    sink:
        Optional callable receiving every emitted diagnostic, e.g. a test
        collector or a host-side console bridge.
    """

    def __init__(
        self,
        development: bool = False,
        sink: DiagnosticSink | None = None,
    ) -> None:
        self._development = development
        self._sink = sink

    @property
    def development(self) -> bool:
        """Whether diagnostics are currently emitted."""
        return self._development

    @development.setter
    def development(self, enabled: bool) -> None:
        self._development = bool(enabled)

    def report(
        self,
        kind: DiagnosticKind,
        message: str,
        **details: object,
    ) -> Diagnostic:
        """Build a diagnostic and emit it if development mode is on.

        Parameters
        ----------
        kind:
            Diagnostic category.
        message:
            Human-readable description.
        **details:
            Extra context stored on the diagnostic and attached to the log
            record.

        Returns
        -------
        Diagnostic
            The diagnostic, whether or not it was emitted.
        """
        diagnostic = Diagnostic(kind=kind, message=message, details=dict(details))
        if not self._development:
            return diagnostic

        logger.warning(
            diagnostic.render(),
            extra={"diagnostic_kind": kind.value, "diagnostic_details": diagnostic.details},
        )
        if self._sink is not None:
            self._sink(diagnostic)
        return diagnostic


class DiagnosticCollector:
    """Sink that keeps every diagnostic it receives, in order."""

    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []

    def __call__(self, diagnostic: Diagnostic) -> None:
        self._diagnostics.append(diagnostic)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return list(self._diagnostics)

    def kinds(self) -> list[DiagnosticKind]:
        """Return the kinds of all collected diagnostics."""
        return [d.kind for d in self._diagnostics]

    def clear(self) -> None:
        self._diagnostics.clear()
