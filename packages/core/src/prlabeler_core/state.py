"""Pull request snapshot used as rule input."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Protocol

from prlabeler_core.events import pull_request_from_event
from prlabeler_core.reviews import Review, aggregate_verdicts

logger = logging.getLogger(__name__)


class ReviewsLister(Protocol):
    def pull_request_reviews(self, number: int) -> list[Review]: ...


@dataclass(frozen=True)
class PRState:
    """The signals rules can match on, captured once per run."""

    issue_number: int
    labels: tuple[str, ...] = ()
    draft: bool = False
    branch_name: str = ""
    title: str = ""
    approved: bool = False
    changes_requested: bool = False


def label_names(labels: Iterable[dict] | None) -> tuple[str, ...]:
    """Extract label names from the ``labels`` array of a pull request payload."""
    return tuple(label.get("name", "") for label in labels or ())


def pr_state_from_reviews(pr: dict, reviews: Iterable[Review]) -> PRState:
    """Build a snapshot from a pull request payload and its review history."""
    approved, changes_requested = aggregate_verdicts(reviews)
    return PRState(
        issue_number=pr["number"],
        labels=label_names(pr.get("labels")),
        draft=bool(pr.get("draft", False)),
        branch_name=(pr.get("head") or {}).get("ref") or "",
        title=pr.get("title") or "",
        approved=approved,
        changes_requested=changes_requested,
    )


def pr_state_from_event(client: ReviewsLister, event_name: str, payload: bytes | str) -> PRState:
    """Parse a webhook event and fetch the PR's reviews to build its snapshot."""
    pr = pull_request_from_event(event_name, payload)
    reviews = client.pull_request_reviews(pr["number"])
    state = pr_state_from_reviews(pr, reviews)
    logger.debug(
        "PR #%s: draft=%s approved=%s changes_requested=%s (%d review(s))",
        state.issue_number,
        state.draft,
        state.approved,
        state.changes_requested,
        len(reviews),
    )
    return state
