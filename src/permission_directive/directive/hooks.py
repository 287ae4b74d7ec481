"""Per-element permission directive.

:class:`PermissionDirective` is registered with a UI host and invoked once
per element when that element is attached.  It decides whether the actor
may see the element and detaches the element from its parent when not.

Decision order for :meth:`PermissionDirective.mounted`:

1. ``"*"`` is always satisfied, nothing else runs.
2. No held-permission source configured: diagnostic, denied.
3. Invalid requirement value: diagnostic, denied.
4. Otherwise the evaluator decides against the current snapshot.
5. Denied elements are detached (no-op when already detached).
6. Any unexpected failure is reported and the element is denied.

Example
-------
>>> context = PermissionContext(["read", "write"])
>>> directive = PermissionDirective(context)
>>> root = ElementNode("root")
>>> button = root.append(ElementNode("delete-button"))
>>> directive.mounted(button, "admin")
False
>>> button.parent is None
True
"""
from __future__ import annotations

import logging
from typing import Protocol

from permission_directive.diagnostics import DiagnosticKind
from permission_directive.directive.context import PermissionContext, PermissionSource
from permission_directive.requirements.evaluator import RequirementEvaluator
from permission_directive.requirements.expression import WILDCARD
from permission_directive.requirements.validator import RequirementValidator

logger = logging.getLogger(__name__)


class ParentNode(Protocol):
    def remove_child(self, child: object) -> None: ...


class Element(Protocol):
    """An element of the host's presentation tree."""

    parent: ParentNode | None


class ElementNode:
    """Minimal presentation-tree node implementing :class:`Element`.

    Parameters
    ----------
    name:
        Identifier used in ``repr`` and log output.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.parent: ElementNode | None = None
        self.children: list[ElementNode] = []

    def append(self, child: ElementNode) -> ElementNode:
        """Attach *child* under this node and return it."""
        if child.parent is not None:
            child.parent.remove_child(child)
        child.parent = self
        self.children.append(child)
        return child

    def remove_child(self, child: ElementNode) -> None:
        """Detach *child* from this node.

        Raises
        ------
        ValueError
            If *child* is not a child of this node.
        """
        self.children.remove(child)
        child.parent = None

    @property
    def attached(self) -> bool:
        return self.parent is not None

    def __repr__(self) -> str:
        return f"ElementNode({self.name!r})"


class PermissionDirective:
    """Hides elements whose requirement the current actor does not satisfy.

    Parameters
    ----------
    context:
        Shared permission context.  Its source and development flag are
        read on every call, so swapping them takes effect immediately.
    """

    def __init__(self, context: PermissionContext) -> None:
        self._context = context
        self._validator = RequirementValidator(context.reporter)
        self._evaluator = RequirementEvaluator(context.reporter, self._validator)

    @property
    def context(self) -> PermissionContext:
        return self._context

    # ------------------------------------------------------------------
    # Host hooks
    # ------------------------------------------------------------------

    def mounted(self, element: Element, value: object) -> bool:
        """Evaluate *value* for *element* and detach the element if denied.

        Parameters
        ----------
        element:
            The element being attached.
        value:
            The requirement bound to the element (string, list or group
            mapping).

        Returns
        -------
        bool
            ``True`` when the element stays visible.
        """
        allowed = self.check(value, element=element)
        if not allowed:
            self._detach(element)
        return allowed

    def check(self, value: object, element: object = None) -> bool:
        """Return the decision for *value* without touching any element.

        Never raises: unexpected errors are reported and denied.
        """
        if isinstance(value, str) and value == WILDCARD:
            return True

        try:
            if not self._context.is_configured:
                self._context.reporter.report(
                    DiagnosticKind.PERMISSIONS_NOT_CONFIGURED,
                    "Permissions are not available. Make sure to configure them "
                    "using configure_permission_directive().",
                    value=value,
                    element=element,
                )
                return False

            expression = self._validator.parse(value)
            if expression is None:
                return False

            return self._evaluator.evaluate(expression, self._context.snapshot())
        except Exception as exc:
            self._context.reporter.report(
                DiagnosticKind.UNEXPECTED_EVALUATION_FAILURE,
                f"Error evaluating permissions: {exc}",
                value=value,
                element=element,
            )
            return False

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _detach(self, element: object) -> None:
        parent = getattr(element, "parent", None)
        if parent is None:
            return
        try:
            parent.remove_child(element)
        except Exception as exc:
            self._context.reporter.report(
                DiagnosticKind.UNEXPECTED_EVALUATION_FAILURE,
                f"Could not detach element: {exc}",
                element=element,
            )
            return
        logger.debug("Detached %r from %r", element, parent)


def configure_permission_directive(
    permissions: PermissionSource,
    development: bool = False,
) -> PermissionDirective:
    """Build a directive bound to a fresh context holding *permissions*.

    Parameters
    ----------
    permissions:
        Static collection or observable cell of held permissions.
    development:
        Whether diagnostics are emitted.

    Returns
    -------
    PermissionDirective
    """
    context = PermissionContext(permissions, development=development)
    return PermissionDirective(context)
