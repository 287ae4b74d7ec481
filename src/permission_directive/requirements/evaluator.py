"""Requirement evaluator.

Recursively interprets a decoded requirement expression against a snapshot
of held permissions and returns a boolean decision.  Evaluation is pure:
the snapshot is never mutated and the only side effect is diagnostic
reporting.  It is also fail-closed: nothing raised inside a subtree
escapes, the subtree is simply treated as unsatisfied.

Example
-------
>>> evaluator = RequirementEvaluator()
>>> evaluator.evaluate_value(["read", "delete"], ["read", "write"])
True
>>> evaluator.evaluate_value({"permissions": ["admin."], "mode": "startWith"}, ["admin.users"])
True
"""
from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable

from permission_directive.diagnostics import DiagnosticKind, DiagnosticReporter
from permission_directive.requirements.expression import (
    AnyOf,
    Group,
    MatchMode,
    Rejected,
    RequirementExpression,
    Single,
    Wildcard,
)
from permission_directive.requirements.validator import RequirementValidator

logger = logging.getLogger(__name__)

_SNAPSHOT_TYPES = (list, tuple, set, frozenset)


class RequirementEvaluator:
    """Decides whether held permissions satisfy a requirement.

    Parameters
    ----------
    reporter:
        Destination for diagnostics raised during evaluation.  Defaults to
        a silent reporter.
    validator:
        Validator used by :meth:`evaluate_value`.  Built from *reporter*
        when omitted.
    """

    def __init__(
        self,
        reporter: DiagnosticReporter | None = None,
        validator: RequirementValidator | None = None,
    ) -> None:
        self._reporter = reporter or DiagnosticReporter()
        self._validator = validator or RequirementValidator(self._reporter)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def evaluate(self, expression: RequirementExpression, held: object) -> bool:
        """Evaluate a decoded expression against a held-permission snapshot.

        Parameters
        ----------
        expression:
            Output of :meth:`RequirementValidator.parse`.
        held:
            Snapshot of held permissions.  Anything other than a list,
            tuple, set or frozenset satisfies nothing.

        Returns
        -------
        bool
            ``True`` when the requirement is satisfied.  Never raises.
        """
        decision = self._evaluate_guarded(expression, held)
        logger.debug(
            "Requirement %s: %s", "ALLOW" if decision else "DENY", expression
        )
        return decision

    def evaluate_value(self, value: object, held: object) -> bool:
        """Validate a raw requirement value, then evaluate it.

        Invalid values are denied (after their diagnostic is reported).
        """
        expression = self._validator.parse(value)
        if expression is None:
            return False
        return self.evaluate(expression, held)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _evaluate_guarded(self, expression: RequirementExpression, held: object) -> bool:
        try:
            return self._evaluate(expression, held)
        except Exception as exc:
            self._reporter.report(
                DiagnosticKind.UNEXPECTED_EVALUATION_FAILURE,
                f"Error evaluating permissions: {exc}",
                expression=str(expression),
            )
            return False

    def _evaluate(self, expression: RequirementExpression, held: object) -> bool:
        match expression:
            case Wildcard():
                return True
            case Single(permission=permission):
                return self._has(permission, held)
            case Group():
                return self._evaluate_group(expression, held)
            case AnyOf(items=items):
                # Every branch runs so each one's diagnostics are reported.
                results = [self._evaluate_guarded(item, held) for item in items]
                return any(results)
            case Rejected(kind=kind, message=message, raw=raw):
                self._reporter.report(kind, message, value=raw)
                return False
            case _:
                self._reporter.report(
                    DiagnosticKind.UNSUPPORTED_TYPE,
                    "Unsupported permission value format",
                    value=expression,
                )
                return False

    def _evaluate_group(self, group: Group, held: object) -> bool:
        permissions = group.permissions
        if not isinstance(permissions, (list, tuple)):
            self._reporter.report(
                DiagnosticKind.PERMISSIONS_NOT_ARRAY,
                "Permissions must be an array",
                value=permissions,
            )
            return False
        if any(not isinstance(p, str) for p in permissions):
            self._reporter.report(
                DiagnosticKind.PERMISSIONS_NOT_STRINGS,
                "All permissions in array must be strings",
                value=list(permissions),
            )
            return False
        if not permissions:
            return False

        mode = MatchMode.from_value(group.mode)
        match mode:
            case MatchMode.AND:
                results = [self._has(p, held) for p in permissions]
                return all(results)
            case MatchMode.OR | MatchMode.EXACT:
                results = [self._has(p, held) for p in permissions]
                return any(results)
            case MatchMode.START_WITH:
                return self._any_pair(permissions, held, str.startswith)
            case MatchMode.END_WITH:
                return self._any_pair(permissions, held, str.endswith)
            case MatchMode.REGEX:
                return self._any_regex(permissions, held)
            case _:
                self._reporter.report(
                    DiagnosticKind.UNKNOWN_MODE,
                    f"Unknown mode: {group.mode}",
                    value=group.mode,
                )
                return False

    # ------------------------------------------------------------------
    # Matching helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _held_strings(held: object) -> list[str] | None:
        """Return the string entries of *held*, or ``None`` if unusable."""
        if not isinstance(held, _SNAPSHOT_TYPES):
            return None
        return [p for p in held if isinstance(p, str)]

    def _has(self, permission: str, held: object) -> bool:
        current = self._held_strings(held)
        return current is not None and permission in current

    def _any_pair(
        self,
        permissions: Iterable[str],
        held: object,
        test: Callable[[str, str], bool],
    ) -> bool:
        current = self._held_strings(held)
        if current is None:
            return False
        return any(test(user_perm, perm) for perm in permissions for user_perm in current)

    def _any_regex(self, patterns: Iterable[str], held: object) -> bool:
        current = self._held_strings(held)
        if current is None:
            return False

        for pattern in patterns:
            try:
                compiled = re.compile(pattern)
            except re.error as exc:
                self._reporter.report(
                    DiagnosticKind.REGEX_COMPILE_FAILURE,
                    f'Invalid regex pattern: "{pattern}". Error: {exc}',
                    pattern=pattern,
                )
                continue
            if any(compiled.search(user_perm) for user_perm in current):
                return True
        return False
