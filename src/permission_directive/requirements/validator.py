"""Structural validation and decoding of raw requirement values.

Validation is deliberately two-tier:

- a top-level group mapping is checked deeply (fields present, permissions
  is a list, mode is recognised);
- list items are checked shallowly (a string, or a mapping that has
  ``permissions`` and ``mode``).  A list item whose group turns out to be
  unusable is decoded into a :class:`Rejected` node so that only that
  branch is denied when the list is evaluated.

Example
-------
>>> validator = RequirementValidator()
>>> validator.validate({"permissions": ["a"], "mode": "bogus"}).reason
<DiagnosticKind.UNKNOWN_MODE: 'unknown_mode'>
>>> validator.parse(["read", {"permissions": ["admin."], "mode": "startWith"}])
AnyOf(items=(Single(permission='read'), Group(permissions=('admin.',), mode=<MatchMode.START_WITH: 'startWith'>)))
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from permission_directive.diagnostics import DiagnosticKind, DiagnosticReporter
from permission_directive.requirements.expression import (
    WILDCARD,
    AnyOf,
    Group,
    MatchMode,
    Rejected,
    RequirementExpression,
    Single,
    Wildcard,
)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of :meth:`RequirementValidator.validate`.

    Attributes
    ----------
    valid:
        Whether the value is structurally usable.
    reason:
        The diagnostic kind explaining the failure, ``None`` when valid.
    message:
        Human-readable explanation, empty when valid.
    """

    valid: bool
    reason: DiagnosticKind | None = None
    message: str = ""

    def __bool__(self) -> bool:
        return self.valid

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(valid=True)

    @classmethod
    def invalid(cls, reason: DiagnosticKind, message: str) -> ValidationResult:
        return cls(valid=False, reason=reason, message=message)


def _is_sequence(value: object) -> bool:
    return isinstance(value, (list, tuple))


def _is_present(value: object) -> bool:
    # Containers count as present even when empty; scalars use truthiness.
    if isinstance(value, (list, tuple, Mapping)):
        return True
    return bool(value)


def _is_group_like(value: object) -> bool:
    return (
        isinstance(value, Mapping)
        and _is_present(value.get("permissions"))
        and _is_present(value.get("mode"))
    )


class RequirementValidator:
    """Checks raw requirement values and decodes them into expressions.

    Parameters
    ----------
    reporter:
        Receives one diagnostic per invalid value.  Defaults to a silent
        (production-mode) reporter.
    """

    def __init__(self, reporter: DiagnosticReporter | None = None) -> None:
        self._reporter = reporter or DiagnosticReporter()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate(self, value: object) -> ValidationResult:
        """Return whether *value* is a well-formed requirement.

        Never raises.  Every invalid outcome is reported through the
        reporter before it is returned.
        """
        result = self._check(value)
        if result.reason is not None:
            self._reporter.report(result.reason, result.message, value=value)
        return result

    def parse(self, value: object) -> RequirementExpression | None:
        """Validate *value* and decode it into a requirement expression.

        Returns
        -------
        RequirementExpression | None
            The decoded expression, or ``None`` when *value* is invalid.
        """
        if not self.validate(value):
            return None
        return self._decode(value)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _check(self, value: object) -> ValidationResult:
        if value is None:
            return ValidationResult.invalid(
                DiagnosticKind.MISSING_VALUE, "Permission value is null or undefined"
            )

        if isinstance(value, str):
            return ValidationResult.ok()

        if _is_sequence(value):
            if any(not isinstance(item, str) and not _is_group_like(item) for item in value):  # type: ignore[union-attr]
                return ValidationResult.invalid(
                    DiagnosticKind.MALFORMED_ARRAY_ITEM,
                    "Array contains invalid permission items. "
                    "Expected string or object with permissions and mode properties",
                )
            return ValidationResult.ok()

        if isinstance(value, Mapping):
            return self._check_group(value)

        return ValidationResult.invalid(
            DiagnosticKind.UNSUPPORTED_TYPE,
            "Permission value must be a string, array, or object",
        )

    def _check_group(self, value: Mapping[str, object]) -> ValidationResult:
        permissions = value.get("permissions")
        mode = value.get("mode")

        if not permissions or not mode:
            return ValidationResult.invalid(
                DiagnosticKind.MISSING_FIELDS,
                'Object must have both "permissions" and "mode" properties',
            )
        if not _is_sequence(permissions):
            return ValidationResult.invalid(
                DiagnosticKind.PERMISSIONS_NOT_ARRAY,
                "Object permissions property must be an array",
            )
        if MatchMode.from_value(mode) is None:
            return ValidationResult.invalid(
                DiagnosticKind.UNKNOWN_MODE,
                f'Invalid mode "{mode}". Valid modes: {", ".join(MatchMode.values())}',
            )
        return ValidationResult.ok()

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def _decode(self, value: object) -> RequirementExpression:
        if isinstance(value, str):
            return Wildcard() if value == WILDCARD else Single(value)
        if _is_sequence(value):
            return AnyOf(tuple(self._decode_item(item) for item in value))  # type: ignore[union-attr]
        return self._decode_group(value)  # type: ignore[arg-type]

    def _decode_item(self, item: object) -> RequirementExpression:
        # Inside a list "*" is an ordinary permission name.
        if isinstance(item, str):
            return Single(item)
        if _is_group_like(item):
            return self._decode_group(item)  # type: ignore[arg-type]
        return Rejected(
            kind=DiagnosticKind.MALFORMED_ARRAY_ITEM,
            message="Invalid array item type. Expected string or object with permissions and mode",
            raw=item,
        )

    def _decode_group(self, raw: Mapping[str, object]) -> RequirementExpression:
        permissions = raw.get("permissions")
        mode_raw = raw.get("mode")

        if not _is_sequence(permissions):
            return Rejected(
                kind=DiagnosticKind.PERMISSIONS_NOT_ARRAY,
                message="Permissions must be an array",
                raw=dict(raw),
            )
        if any(not isinstance(p, str) for p in permissions):  # type: ignore[union-attr]
            return Rejected(
                kind=DiagnosticKind.PERMISSIONS_NOT_STRINGS,
                message="All permissions in array must be strings",
                raw=dict(raw),
            )
        mode = MatchMode.from_value(mode_raw)
        if mode is None:
            return Rejected(
                kind=DiagnosticKind.UNKNOWN_MODE,
                message=f"Unknown mode: {mode_raw}",
                raw=dict(raw),
            )
        return Group(permissions=tuple(permissions), mode=mode)  # type: ignore[arg-type]
