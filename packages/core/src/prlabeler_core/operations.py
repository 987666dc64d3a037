"""Set-like label list operations.

Labels are kept as an ordered list so existing labels keep their position
and new ones are appended. Nothing here mutates its input.

Besides the primitives used by the rule engine, this module carries the
older workflow-state configuration format, where one of a few named PR
states selects a fixed ``remove``/``set`` pair::

    approved:
      remove: [Awaiting Code Review, Changes Requested]
      set: [Code Review Approved]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Sequence

from prlabeler_core.errors import ConfigError

if TYPE_CHECKING:
    from prlabeler_core.state import PRState

logger = logging.getLogger(__name__)

WORKFLOW_STATES = ("draft", "changes_requested", "approved", "ready_for_review")


def remove_label(labels: Sequence[str], removal: str) -> list[str]:
    """Return labels without any occurrence of ``removal``."""
    return [label for label in labels if label != removal]


def add_label(labels: Sequence[str], addition: str) -> list[str]:
    """Return labels with ``addition`` appended unless it is already present."""
    if addition in labels:
        return list(labels)
    return [*labels, addition]


@dataclass(frozen=True)
class Operations:
    """Labels to strip and labels to ensure, applied in that order."""

    remove: tuple[str, ...] = ()
    set: tuple[str, ...] = ()

    def apply(self, labels: Sequence[str]) -> list[str]:
        remove = set(self.remove)
        result = [label for label in labels if label not in remove]
        for label in self.set:
            if label not in result:
                result.append(label)
        return result


def workflow_state(state: PRState) -> str:
    """Collapse a PR snapshot into one workflow state name.

    Drafts win over review verdicts, and a change request wins over an
    approval when reviewers disagree.
    """
    if state.draft:
        return "draft"
    if state.changes_requested:
        return "changes_requested"
    if state.approved:
        return "approved"
    return "ready_for_review"


def _string_list(value: Any, where: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{where} must be a list of label names")
    return tuple(value)


def parse_operations(document: Any) -> dict[str, Operations]:
    """Build the workflow-state → Operations mapping from a parsed YAML document."""
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ConfigError("operations config must be a mapping of workflow state to operations")

    result: dict[str, Operations] = {}
    for name, body in document.items():
        body = body or {}
        if not isinstance(body, dict):
            raise ConfigError(f"operations for state {name!r} must be a mapping")
        if name not in WORKFLOW_STATES:
            logger.warning("Operations configured for unknown workflow state %r will never apply", name)
        result[str(name)] = Operations(
            remove=_string_list(body.get("remove"), f"{name}.remove"),
            set=_string_list(body.get("set"), f"{name}.set"),
        )
    return result


def labels_for_workflow_state(config: dict[str, Operations], state: PRState) -> list[str]:
    """Apply the operations configured for the snapshot's workflow state.

    A state with no configured operations leaves the labels untouched.
    """
    operations = config.get(workflow_state(state), Operations())
    return operations.apply(state.labels)
