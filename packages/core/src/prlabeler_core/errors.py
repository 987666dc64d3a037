"""Exception hierarchy for prlabeler.

Every failure that should abort a run derives from LabelerError so the CLI
can report it in one place without issuing any label write.
"""

from __future__ import annotations


class LabelerError(Exception):
    """Base class for all prlabeler failures."""


class ConfigError(LabelerError):
    """The labeler configuration could not be parsed or is invalid."""


class RuleError(ConfigError):
    """A rule pattern failed to compile while evaluating labels."""

    def __init__(self, label: str, field: str, error: Exception):
        self.label = label
        self.field = field
        super().__init__(f"failed to compile {field} regexp for label {label!r}: {error}")


class InvalidRepositoryError(ConfigError):
    """The repository identifier is not in ``owner/name`` form."""

    def __init__(self, repository: str):
        self.repository = repository
        super().__init__(f"invalid repository format: {repository!r}")


class EventError(LabelerError):
    """The webhook payload is unusable or does not relate to a pull request."""


class RemoteError(LabelerError):
    """A GitHub API call failed. The message names the operation."""


class DirectoryPathError(RemoteError):
    """A directory was supplied where a file path was expected."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"directory path supplied: {path!r}")
