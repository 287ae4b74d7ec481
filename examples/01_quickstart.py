#!/usr/bin/env python3
"""Example: Quickstart for permission-directive

Attach the directive to a small element tree and watch denied elements
disappear.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install permission-directive
"""
from __future__ import annotations

import logging

import permission_directive as pd


def main() -> None:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(message)s")
    print(f"permission-directive version: {pd.__version__}")

    # Step 1: Held permissions live in a cell the host updates after login
    held = pd.PermissionCell(["posts.read", "posts.edit"])
    context = pd.PermissionContext(held, development=True)
    directive = pd.PermissionDirective(context)

    # Step 2: Build a toolbar and mount each button with its requirement
    toolbar = pd.ElementNode("toolbar")
    requirements: dict[str, object] = {
        "view": "*",
        "edit": "posts.edit",
        "delete": ["posts.delete", {"permissions": ["admin."], "mode": "startWith"}],
        "publish": {"permissions": ["posts.edit", "posts.publish"], "mode": "and"},
        "broken": {"permissions": ["posts.edit"], "mode": "sometimes"},
    }
    for name, requirement in requirements.items():
        button = toolbar.append(pd.ElementNode(name))
        directive.mounted(button, requirement)

    print("Visible buttons:", [child.name for child in toolbar.children])

    # Step 3: Permissions change; the next evaluation sees the new snapshot
    held.set(["posts.read", "admin.users"])
    print("Can delete now:", directive.check(requirements["delete"]))


if __name__ == "__main__":
    main()
