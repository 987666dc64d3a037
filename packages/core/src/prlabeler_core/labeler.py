"""Label reconciliation for a single pull request."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, Sequence

from rich.console import Console
from rich.markup import escape

from prlabeler_core.config import load_rules
from prlabeler_core.reviews import Review
from prlabeler_core.rules import Rule, labels_for_pr_state
from prlabeler_core.state import PRState, pr_state_from_event

console = Console()
logger = logging.getLogger(__name__)


class LabelerClient(Protocol):
    def download_file_from_default_branch(self, path: str) -> bytes: ...

    def pull_request_reviews(self, number: int) -> list[Review]: ...

    def replace_labels_for_issue(self, number: int, labels: list[str]) -> None: ...


@dataclass
class LabelerResult:
    """Outcome of one labeler run."""

    issue_number: int
    current: list[str]
    desired: list[str]
    written: bool = False

    @property
    def changed(self) -> bool:
        return labels_differ(self.current, self.desired)


def _format(labels: Sequence[str]) -> str:
    return escape(", ".join(labels)) if labels else "(none)"


def labels_differ(current: Sequence[str], desired: Sequence[str], ordered: bool = True) -> bool:
    """Return True when a label write is needed.

    The rule engine keeps existing labels in place, so its output is compared
    as a sequence. Pass ``ordered=False`` for results whose order carries no
    meaning, such as workflow-state operations.
    """
    if ordered:
        return list(current) != list(desired)
    return set(current) != set(desired)


def reconcile(client: LabelerClient, rules: dict[str, Rule], state: PRState, dry_run: bool = False) -> LabelerResult:
    """Evaluate rules for a snapshot and write labels only if they changed."""
    desired = labels_for_pr_state(rules, state)
    result = LabelerResult(issue_number=state.issue_number, current=list(state.labels), desired=desired)

    if not result.changed:
        logger.debug("Labels on #%s already up to date; skipping write.", state.issue_number)
        console.print(f"[dim]Labels on #{state.issue_number} are up to date.[/dim]")
        return result

    if dry_run:
        console.print(f"[yellow]Dry run: would set labels on #{state.issue_number} to {_format(desired)}[/yellow]")
        return result

    client.replace_labels_for_issue(state.issue_number, desired)
    result.written = True
    console.print(f"[green]Labels on #{state.issue_number} set to {_format(desired)}[/green]")
    return result


def run_labeler(
    client: LabelerClient,
    config_path: str,
    event_name: str,
    payload: bytes | str,
    dry_run: bool = False,
) -> LabelerResult:
    """Run the labeler for one webhook delivery.

    Loads rules from the default branch, snapshots the PR named by the event,
    and replaces its labels when the rules call for a change. Any failure
    raises before a write is attempted.
    """
    rules = load_rules(client.download_file_from_default_branch(config_path))
    logger.debug("Loaded %d rule(s) from %s", len(rules), config_path)
    console.print(f"Loaded action config: {escape(config_path)}")

    state = pr_state_from_event(client, event_name, payload)
    return reconcile(client, rules, state, dry_run=dry_run)
