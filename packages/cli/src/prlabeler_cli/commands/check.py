"""check command — validate a labeler config file."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from prlabeler_core.config import load_rules
from prlabeler_core.errors import ConfigError

console = Console()


def _condition(value) -> str:
    if value is None or value == "":
        return "[dim]any[/dim]"
    return str(value).lower() if isinstance(value, bool) else escape(str(value))


@click.command("check")
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False))
def check_cmd(config_file: str):
    """Validate CONFIG_FILE and list its rules in evaluation order."""
    try:
        rules = load_rules(Path(config_file).read_bytes())
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    if not rules:
        console.print("[yellow]No rules defined.[/yellow]")
        return

    table = Table(title=f"Rules — {escape(config_file)}", show_header=True, header_style="bold cyan")
    table.add_column("Label", style="bold")
    table.add_column("Approved")
    table.add_column("Changes requested")
    table.add_column("Draft")
    table.add_column("Title")
    table.add_column("Branch")

    for label, rule in rules.items():
        table.add_row(
            escape(label),
            _condition(rule.approved),
            _condition(rule.changes_requested),
            _condition(rule.draft),
            _condition(rule.title),
            _condition(rule.branch_name),
        )

    console.print(table)
    console.print(f"[green]{len(rules)} rule(s) OK.[/green]")
