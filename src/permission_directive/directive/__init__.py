"""Directive package for permission-directive.

Exports the per-element directive hook, the permission context it reads
from, and the YAML configuration loader.
"""
from __future__ import annotations

from permission_directive.directive.config_loader import ConfigLoader, DirectiveConfig
from permission_directive.directive.context import (
    ObservableCell,
    PermissionCell,
    PermissionContext,
    PermissionSource,
)
from permission_directive.directive.hooks import (
    Element,
    ElementNode,
    PermissionDirective,
    configure_permission_directive,
)

__all__ = [
    "ConfigLoader",
    "DirectiveConfig",
    "Element",
    "ElementNode",
    "ObservableCell",
    "PermissionCell",
    "PermissionContext",
    "PermissionDirective",
    "PermissionSource",
    "configure_permission_directive",
]
