"""CLI entry point for permission-directive.

Invoked as::

    permission-directive [OPTIONS] COMMAND [ARGS]...

or during development::

    python -m permission_directive.cli.main

Commands
--------
- validate      Check that a requirement value is well-formed
- check         Evaluate a requirement against held permissions
- check-config  Evaluate every named requirement in a config file
- version       Show version information

Requirement arguments are JSON (``'["read", "delete"]'``,
``'{"permissions": ["admin."], "mode": "startWith"}'``); anything that is
not valid JSON is taken as a single permission name.
"""
from __future__ import annotations

import json
import sys
from pathlib import Path

import click
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from permission_directive.diagnostics import DiagnosticCollector, DiagnosticReporter

console = Console()
err_console = Console(stderr=True)


def _parse_requirement(text: str) -> object:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _print_diagnostics(collector: DiagnosticCollector) -> None:
    diagnostics = collector.diagnostics
    if not diagnostics:
        return
    console.print("[bold]Diagnostics[/bold]")
    for diagnostic in diagnostics:
        console.print(f"  [yellow]{diagnostic.kind.value}[/yellow] {escape(diagnostic.message)}")


# ---------------------------------------------------------------------------
# Root command group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="permission-directive")
def cli() -> None:
    """Permission directive CLI: validate and evaluate permission requirements."""


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from permission_directive import __version__

    console.print(
        Panel(
            f"[bold]permission-directive[/bold]  v[cyan]{__version__}[/cyan]\n"
            "Declarative permission checks for UI elements.",
            title="Version",
            border_style="blue",
        )
    )


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


@cli.command(name="validate")
@click.argument("requirement")
def validate_command(requirement: str) -> None:
    """Check that REQUIREMENT is a well-formed permission requirement."""
    from permission_directive.requirements.validator import RequirementValidator

    collector = DiagnosticCollector()
    validator = RequirementValidator(DiagnosticReporter(development=True, sink=collector))
    result = validator.validate(_parse_requirement(requirement))

    if result.valid:
        console.print(Panel("[green]VALID[/green]", title="Validation Result", border_style="blue"))
        sys.exit(0)

    reason = result.reason.value if result.reason is not None else "unknown"
    console.print(Panel("[red]INVALID[/red]", title="Validation Result", border_style="blue"))
    console.print(f"  Reason: [bold red]{reason}[/bold red]")
    console.print(f"  Message: {escape(result.message)}")
    sys.exit(1)


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.argument("requirement")
@click.option(
    "--held",
    "-p",
    "held",
    multiple=True,
    help="A held permission. Repeat for each permission.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    default=None,
    type=click.Path(exists=True),
    help="Directive YAML config supplying held permissions.",
)
@click.option(
    "--none",
    "hold_nothing",
    is_flag=True,
    default=False,
    help="Hold no permissions at all (configured but empty).",
)
@click.option("--dev", is_flag=True, default=False, help="Show diagnostics.")
def check_command(
    requirement: str,
    held: tuple[str, ...],
    config_path: str | None,
    hold_nothing: bool,
    dev: bool,
) -> None:
    """Evaluate REQUIREMENT against held permissions.

    Held permissions come from --held, else from --config.  With neither,
    permissions are unconfigured and only "*" is allowed; pass --none to
    evaluate against an empty held set instead.
    """
    from pydantic import ValidationError

    from permission_directive.directive.config_loader import ConfigLoader
    from permission_directive.directive.hooks import PermissionDirective

    loader = ConfigLoader()
    try:
        config = loader.load(Path(config_path)) if config_path else loader.defaults()
    except ValidationError as exc:
        err_console.print(f"[red]Invalid config:[/red] {escape(str(exc))}")
        sys.exit(1)
    if held:
        config.permissions = list(held)
    elif hold_nothing:
        config.permissions = []

    collector = DiagnosticCollector()
    context = config.build_context(sink=collector)
    context.development = dev or config.development
    directive = PermissionDirective(context)

    allowed = directive.check(_parse_requirement(requirement))
    status_str = "[green]ALLOWED[/green]" if allowed else "[red]DENIED[/red]"
    console.print(Panel(status_str, title="Permission Check Result", border_style="blue"))
    _print_diagnostics(collector)
    sys.exit(0 if allowed else 1)


# ---------------------------------------------------------------------------
# check-config
# ---------------------------------------------------------------------------


@cli.command(name="check-config")
@click.option(
    "--config",
    "-c",
    "config_path",
    required=True,
    type=click.Path(exists=True),
    help="Directive YAML config with permissions and requirements.",
)
def check_config_command(config_path: str) -> None:
    """Evaluate every named requirement in a config file."""
    from pydantic import ValidationError

    from permission_directive.directive.config_loader import ConfigLoader
    from permission_directive.directive.hooks import PermissionDirective

    try:
        config = ConfigLoader().load(Path(config_path))
    except ValidationError as exc:
        err_console.print(f"[red]Invalid config:[/red] {escape(str(exc))}")
        sys.exit(1)

    collector = DiagnosticCollector()
    directive = PermissionDirective(config.build_context(sink=collector))

    if not config.requirements:
        console.print("[yellow]No requirements defined.[/yellow]")
        return

    table = Table(title="Requirements", box=box.SIMPLE)
    table.add_column("Name", style="cyan")
    table.add_column("Requirement")
    table.add_column("Decision")
    for name, requirement in config.requirements.items():
        allowed = directive.check(requirement)
        decision = "[green]ALLOWED[/green]" if allowed else "[red]DENIED[/red]"
        table.add_row(name, escape(json.dumps(requirement, default=str)), decision)

    console.print(table)
    _print_diagnostics(collector)


if __name__ == "__main__":
    cli()
