"""run command — the GitHub Action entry point."""

from __future__ import annotations

from pathlib import Path

import click

from prlabeler_core.errors import LabelerError
from prlabeler_core.gh.repository import RepositoryClient
from prlabeler_core.labeler import run_labeler


@click.command("run")
@click.option(
    "--config-path",
    default=None,
    help="Path of the labeler config in the repository. Defaults to INPUT_CONFIG_PATH.",
)
@click.option("--dry-run", is_flag=True, help="Compute labels without writing them to GitHub.")
def run_cmd(config_path: str | None, dry_run: bool):
    """Label the pull request named by the triggering webhook event.

    \b
    Reads the GitHub Actions environment:
      GITHUB_REPOSITORY    owner/name of the repository
      GITHUB_EVENT_NAME    name of the triggering event
      GITHUB_EVENT_PATH    path to the event payload JSON
      INPUT_GITHUB_TOKEN   token used for API calls (or GITHUB_TOKEN)
      INPUT_CONFIG_PATH    labeler config path on the default branch
    """
    from prlabeler_core.config import load_config
    from prlabeler_cli.auth import resolve_github_token

    config = load_config(cli_overrides={"config_path": config_path, "dry_run": dry_run or None})

    token = config.get("github_token") or resolve_github_token()
    if not token:
        raise click.UsageError("No GitHub token found. Set the github_token input or GITHUB_TOKEN.")
    for key, env_var in (
        ("repository", "GITHUB_REPOSITORY"),
        ("event_name", "GITHUB_EVENT_NAME"),
        ("event_path", "GITHUB_EVENT_PATH"),
    ):
        if not config.get(key):
            raise click.UsageError(f"{env_var} is not set.")

    try:
        payload = Path(config["event_path"]).read_bytes()
    except OSError as e:
        raise click.ClickException(f"Action failed to complete: failed to read event payload: {e}") from e

    try:
        client = RepositoryClient.from_token(token, config["repository"])
        run_labeler(
            client,
            config_path=config["config_path"],
            event_name=config["event_name"],
            payload=payload,
            dry_run=config["dry_run"],
        )
    except LabelerError as e:
        raise click.ClickException(f"Action failed to complete: {e}") from e
