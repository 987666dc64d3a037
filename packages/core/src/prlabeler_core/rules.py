"""Condition rules mapping label names to pull request states.

A labeler config is an ordered mapping of label → conditions, e.g.::

    WIP:
      draft: true
    Bug:
      branch_name: "^(bug|issue)/"
    Code Review Approved:
      draft: false
      changes_requested: false
      approved: true

Every rule is checked against the same snapshot. When all of a rule's
conditions hold its label is added, otherwise its label is removed.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Optional

from prlabeler_core.errors import ConfigError, RuleError
from prlabeler_core.operations import add_label, remove_label
from prlabeler_core.state import PRState

logger = logging.getLogger(__name__)

_BOOL_KEYS = ("draft", "approved", "changes_requested")
PATTERN_KEYS = ("title", "branch_name")


@dataclass(frozen=True)
class Rule:
    """Optional conditions for one label. Unset conditions always hold."""

    draft: Optional[bool] = None
    approved: Optional[bool] = None
    changes_requested: Optional[bool] = None
    title: str = ""
    branch_name: str = ""


def _search(label: str, field: str, pattern: str, value: str) -> bool:
    try:
        return re.search(pattern, value) is not None
    except re.error as e:
        raise RuleError(label, field, e) from e


def _mismatch(label: str, rule: Rule, state: PRState) -> str | None:
    """Return the name of the first condition that fails, or None if all hold."""
    if rule.approved is not None and rule.approved != state.approved:
        return "approved"
    if rule.changes_requested is not None and rule.changes_requested != state.changes_requested:
        return "changes_requested"
    if rule.draft is not None and rule.draft != state.draft:
        return "draft"
    if rule.title and not _search(label, "title", rule.title, state.title):
        return "title"
    if rule.branch_name and not _search(label, "branch name", rule.branch_name, state.branch_name):
        return "branch_name"
    return None


def labels_for_pr_state(rules: dict[str, Rule], state: PRState) -> list[str]:
    """Compute the label list the PR should carry.

    Existing labels keep their order; labels added by rules are appended in
    rule order. Raises RuleError if a pattern does not compile, in which case
    no labels are returned.
    """
    labels = list(state.labels)
    for label, rule in rules.items():
        failed = _mismatch(label, rule, state)
        if failed:
            logger.debug("Rule %r did not match on %s", label, failed)
            labels = remove_label(labels, label)
        else:
            logger.debug("Rule %r matched", label)
            labels = add_label(labels, label)
    return labels


def _parse_rule(label: str, body: Any) -> Rule:
    if body is None:
        return Rule()
    if not isinstance(body, dict):
        raise ConfigError(f"rule for label {label!r} must be a mapping of conditions")

    unknown = set(body) - set(_BOOL_KEYS) - set(PATTERN_KEYS)
    if unknown:
        logger.warning("Ignoring unknown keys for label %r: %s", label, ", ".join(sorted(map(str, unknown))))

    fields: dict[str, Any] = {}
    for key in _BOOL_KEYS:
        value = body.get(key)
        if value is not None and not isinstance(value, bool):
            raise ConfigError(f"{key} for label {label!r} must be true or false, got {value!r}")
        fields[key] = value
    for key in PATTERN_KEYS:
        value = body.get(key)
        if value is None:
            value = ""
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str):
            raise ConfigError(f"{key} for label {label!r} must be a regular expression string")
        if value:
            try:
                re.compile(value)
            except re.error as e:
                raise RuleError(label, key.replace("_", " "), e) from e
        fields[key] = value
    return Rule(**fields)


def parse_rules(document: Any) -> dict[str, Rule]:
    """Build the ordered label → Rule mapping from a parsed YAML document."""
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ConfigError("labeler config must be a mapping of label names to conditions")
    rules: dict[str, Rule] = {}
    for label, body in document.items():
        if not isinstance(label, str):
            raise ConfigError(f"label name {label!r} must be a string; quote it in the config")
        rules[label] = _parse_rule(label, body)
    return rules
