"""evaluate command — compute labels for a live pull request."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from prlabeler_core.config import load_rules
from prlabeler_core.errors import LabelerError
from prlabeler_core.gh.repository import RepositoryClient
from prlabeler_core.labeler import reconcile

console = Console()


def _print_comparison(current: list[str], desired: list[str]) -> None:
    table = Table(title="Labels", show_header=True, header_style="bold cyan")
    table.add_column("Label")
    table.add_column("Change", width=10)

    for label in current:
        if label in desired:
            table.add_row(escape(label), "[dim]kept[/dim]")
        else:
            table.add_row(escape(label), "[red]removed[/red]")
    for label in desired:
        if label not in current:
            table.add_row(escape(label), "[green]added[/green]")

    console.print(table)


@click.command("evaluate")
@click.option("--repo", required=True, help="GitHub repository in owner/name format.")
@click.option("--pr", "pr_number", type=int, required=True, help="Pull request number.")
@click.option(
    "--config-path",
    default=".github/labeler.yml",
    show_default=True,
    help="Path of the labeler config on the repository's default branch.",
)
@click.option(
    "--local-config",
    "local_config",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Read rules from a local file instead of the repository.",
)
@click.option("--apply", "apply_labels", is_flag=True, help="Write the computed labels to GitHub.")
def evaluate_cmd(repo: str, pr_number: int, config_path: str, local_config: str | None, apply_labels: bool):
    """Show which labels the rules would give a pull request.

    Nothing is written unless --apply is passed and the labels differ.
    """
    from prlabeler_cli.auth import resolve_github_token

    token = resolve_github_token()
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )

    try:
        client = RepositoryClient.from_token(token, repo)
        if local_config:
            rules = load_rules(Path(local_config).read_bytes())
        else:
            rules = load_rules(client.download_file_from_default_branch(config_path))
        state = client.pull_request_state(pr_number)
        result = reconcile(client, rules, state, dry_run=not apply_labels)
    except LabelerError as e:
        raise click.ClickException(str(e)) from e

    console.print(
        f"\n#{state.issue_number}  draft={state.draft}  approved={state.approved}  "
        f"changes_requested={state.changes_requested}  branch={state.branch_name}"
    )
    _print_comparison(result.current, result.desired)
