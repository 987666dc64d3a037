"""Tests for label list operations and workflow-state configs."""

import pytest

from prlabeler_core.errors import ConfigError
from prlabeler_core.operations import (
    Operations,
    add_label,
    labels_for_workflow_state,
    parse_operations,
    remove_label,
    workflow_state,
)
from prlabeler_core.state import PRState


class TestAddLabel:
    def test_empty(self):
        assert add_label([], "Ready for Review") == ["Ready for Review"]

    def test_exists(self):
        assert add_label(["Bug", "Changes Requested"], "Changes Requested") == ["Bug", "Changes Requested"]

    def test_appends(self):
        assert add_label(["Bug"], "Changes Requested") == ["Bug", "Changes Requested"]

    def test_does_not_mutate_input(self):
        labels = ["Bug"]
        add_label(labels, "WIP")
        assert labels == ["Bug"]


class TestRemoveLabel:
    def test_empty(self):
        assert remove_label([], "remove this") == []

    def test_no_matches(self):
        assert remove_label(["I", "Have", "Labels"], "remove_this") == ["I", "Have", "Labels"]

    def test_removes_match(self):
        assert remove_label(["Ready for Review", "Don't Touch"], "Ready for Review") == ["Don't Touch"]

    def test_removes_every_occurrence(self):
        labels = ["Ready for Review", "Don't Touch", "Ready for Review"]
        assert remove_label(labels, "Ready for Review") == ["Don't Touch"]


class TestOperationsApply:
    def test_empty(self):
        assert Operations().apply([]) == []

    def test_untouched(self):
        assert Operations().apply(["I", "Have", "Labels"]) == ["I", "Have", "Labels"]

    def test_removes(self):
        ops = Operations(remove=("Ready for Review",))
        assert ops.apply(["Ready for Review", "Don't Touch"]) == ["Don't Touch"]

    def test_sets(self):
        ops = Operations(set=("Ready for Review", "Bug"))
        assert ops.apply(["Ready for Review", "Don't Touch"]) == ["Ready for Review", "Don't Touch", "Bug"]

    def test_sets_and_removes(self):
        ops = Operations(remove=("Remove Me",), set=("Ready for Review", "Bug"))
        assert ops.apply(["Ready for Review", "Remove Me"]) == ["Ready for Review", "Bug"]

    def test_label_in_both_ends_up_set(self):
        ops = Operations(remove=("Bug",), set=("Bug",))
        assert ops.apply(["Bug", "Other"]) == ["Other", "Bug"]

    def test_set_never_duplicates(self):
        ops = Operations(set=("Bug", "Bug"))
        assert ops.apply(["Bug"]) == ["Bug"]

    def test_input_not_mutated(self):
        labels = ["Remove Me", "Keep"]
        Operations(remove=("Remove Me",), set=("New",)).apply(labels)
        assert labels == ["Remove Me", "Keep"]


class TestWorkflowState:
    def test_draft_wins(self):
        assert workflow_state(PRState(1, draft=True, approved=True, changes_requested=True)) == "draft"

    def test_changes_requested_over_approved(self):
        assert workflow_state(PRState(1, approved=True, changes_requested=True)) == "changes_requested"

    def test_approved(self):
        assert workflow_state(PRState(1, approved=True)) == "approved"

    def test_ready_for_review(self):
        assert workflow_state(PRState(1)) == "ready_for_review"


class TestParseOperations:
    def test_parses_lists(self):
        config = parse_operations({"approved": {"remove": ["Awaiting Review"], "set": ["Approved"]}})
        assert config["approved"] == Operations(remove=("Awaiting Review",), set=("Approved",))

    def test_missing_phases_are_empty(self):
        assert parse_operations({"draft": None})["draft"] == Operations()

    def test_single_string_accepted(self):
        assert parse_operations({"draft": {"set": "WIP"}})["draft"].set == ("WIP",)

    def test_rejects_non_mapping(self):
        with pytest.raises(ConfigError):
            parse_operations(["approved"])

    def test_rejects_non_string_labels(self):
        with pytest.raises(ConfigError):
            parse_operations({"approved": {"set": [1, 2]}})


class TestLabelsForWorkflowState:
    def test_applies_matching_state(self):
        config = parse_operations(
            {
                "approved": {"remove": ["Awaiting Review"], "set": ["Approved"]},
                "ready_for_review": {"set": ["Awaiting Review"]},
            }
        )
        state = PRState(1, labels=("Epic", "Awaiting Review"), approved=True)
        assert labels_for_workflow_state(config, state) == ["Epic", "Approved"]

    def test_unconfigured_state_is_no_op(self):
        state = PRState(1, labels=("Epic",), draft=True)
        assert labels_for_workflow_state({}, state) == ["Epic"]
