"""Requirement expressions: model, validation and evaluation.

Example
-------
::

    from permission_directive.requirements import RequirementEvaluator

    evaluator = RequirementEvaluator()
    assert evaluator.evaluate_value("read", ["read", "write"])
    assert not evaluator.evaluate_value({"permissions": ["a", "b"], "mode": "and"}, ["a"])
"""
from __future__ import annotations

from permission_directive.requirements.evaluator import RequirementEvaluator
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
from permission_directive.requirements.validator import (
    RequirementValidator,
    ValidationResult,
)

__all__ = [
    # Model
    "WILDCARD",
    "AnyOf",
    "Group",
    "MatchMode",
    "Rejected",
    "RequirementExpression",
    "Single",
    "Wildcard",
    # Validation
    "RequirementValidator",
    "ValidationResult",
    # Evaluation
    "RequirementEvaluator",
]
