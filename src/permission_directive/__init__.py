"""permission-directive: declarative permission checks for UI elements.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import permission_directive as pd
>>> pd.__version__
'2.0.0'
>>> directive = pd.configure_permission_directive(["read", "admin.users"])
>>> directive.check({"permissions": ["admin."], "mode": "startWith"})
True
>>> directive.check("delete")
False
"""
from __future__ import annotations

__version__: str = "2.0.0"

# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------
from permission_directive.diagnostics import (
    Diagnostic,
    DiagnosticCollector,
    DiagnosticKind,
    DiagnosticReporter,
)

# ---------------------------------------------------------------------------
# Requirements
# ---------------------------------------------------------------------------
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

# ---------------------------------------------------------------------------
# Directive
# ---------------------------------------------------------------------------
from permission_directive.directive.config_loader import ConfigLoader, DirectiveConfig
from permission_directive.directive.context import (
    PermissionCell,
    PermissionContext,
)
from permission_directive.directive.hooks import (
    ElementNode,
    PermissionDirective,
    configure_permission_directive,
)

__all__ = [
    "__version__",
    # Diagnostics
    "Diagnostic",
    "DiagnosticCollector",
    "DiagnosticKind",
    "DiagnosticReporter",
    # Requirements
    "WILDCARD",
    "AnyOf",
    "Group",
    "MatchMode",
    "Rejected",
    "RequirementEvaluator",
    "RequirementExpression",
    "RequirementValidator",
    "Single",
    "ValidationResult",
    "Wildcard",
    # Directive
    "ConfigLoader",
    "DirectiveConfig",
    "ElementNode",
    "PermissionCell",
    "PermissionContext",
    "PermissionDirective",
    "configure_permission_directive",
]
