"""Permission context: where the directive reads held permissions from.

A :class:`PermissionContext` is created once at application start-up and
passed explicitly to the directive.  It holds:

- the held-permission *source*, either a static collection or an
  observable cell (any object with a ``value`` attribute, e.g.
  :class:`PermissionCell`);
- the development flag that gates diagnostic output.

The source is read at evaluation time, so a cell that the host updates
after login is picked up by the next evaluation.  Swapping the source with
:meth:`PermissionContext.configure` replaces it outright (last write wins).

Example
-------
>>> cell = PermissionCell(["read"])
>>> context = PermissionContext(cell)
>>> context.snapshot()
['read']
>>> cell.set(["read", "write"])
>>> context.snapshot()
['read', 'write']
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Collection
from typing import Protocol, Union, runtime_checkable

from permission_directive.diagnostics import DiagnosticReporter, DiagnosticSink

logger = logging.getLogger(__name__)


@runtime_checkable
class ObservableCell(Protocol):
    """Anything exposing the current held permissions as ``value``."""

    @property
    def value(self) -> object: ...


PermissionSource = Union[Collection[str], ObservableCell]


class PermissionCell:
    """Minimal observable cell holding a held-permission list.

    Parameters
    ----------
    initial:
        Initial permissions.  Copied into a list.
    """

    def __init__(self, initial: Collection[str] | None = None) -> None:
        self._value: list[str] = list(initial or [])
        self._lock = threading.Lock()

    @property
    def value(self) -> list[str]:
        with self._lock:
            return list(self._value)

    @value.setter
    def value(self, permissions: Collection[str]) -> None:
        self.set(permissions)

    def set(self, permissions: Collection[str]) -> None:
        """Replace the held permissions."""
        with self._lock:
            self._value = list(permissions)

    def __repr__(self) -> str:
        return f"PermissionCell({self._value!r})"


class PermissionContext:
    """Explicit configuration shared by the directive and its evaluator.

    Parameters
    ----------
    permissions:
        Initial held-permission source, or ``None`` to start unconfigured.
    development:
        Whether diagnostics are emitted.  Default ``False``.
    sink:
        Optional diagnostic sink forwarded to the reporter.
    """

    def __init__(
        self,
        permissions: PermissionSource | None = None,
        development: bool = False,
        sink: DiagnosticSink | None = None,
    ) -> None:
        self._source: PermissionSource | None = permissions
        self._reporter = DiagnosticReporter(development=development, sink=sink)
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def configure(self, permissions: PermissionSource | None) -> None:
        """Store *permissions* as the held-permission source.

        Any previous source is discarded.  Passing ``None`` returns the
        context to the unconfigured state.
        """
        with self._lock:
            self._source = permissions
        logger.info(
            "Permission source configured (%s)",
            type(permissions).__name__ if permissions is not None else "none",
        )

    @property
    def is_configured(self) -> bool:
        """True once a source has been set.  An empty collection counts."""
        with self._lock:
            return self._source is not None

    @property
    def development(self) -> bool:
        return self._reporter.development

    @development.setter
    def development(self, enabled: bool) -> None:
        self._reporter.development = enabled

    @property
    def reporter(self) -> DiagnosticReporter:
        """The diagnostic reporter bound to this context."""
        return self._reporter

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def snapshot(self) -> object:
        """Return the current held permissions.

        For an observable cell this is ``cell.value`` read right now; for a
        static collection it is the collection itself.  ``None`` when
        unconfigured.  The result is not validated here: the evaluator
        treats anything that is not a list, tuple or set as holding nothing.
        """
        with self._lock:
            source = self._source
        if source is None:
            return None
        if isinstance(source, (list, tuple, set, frozenset)):
            return source
        if isinstance(source, ObservableCell):
            return source.value
        return source
