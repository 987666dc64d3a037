"""Review verdict aggregation.

GitHub keeps every review a user has ever submitted on a pull request. Only
the latest substantive verdict per reviewer matters for labelling, so the
chronological review list is reduced to one verdict per reviewer here.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterable

logger = logging.getLogger(__name__)


class ReviewVerdict(enum.Enum):
    APPROVED = "approved"
    CHANGES_REQUESTED = "changes_requested"
    DISMISSED = "dismissed"
    COMMENTED = "commented"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, state: str | None) -> ReviewVerdict:
        """Map a GitHub review state string (any case) to a verdict."""
        try:
            return cls((state or "").strip().lower())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class Review:
    """A single submitted review, as listed by the GitHub API."""

    reviewer_id: int
    state: str


def normalize_reviews(reviews: Iterable[Review]) -> dict[int, ReviewVerdict]:
    """Reduce chronological reviews (oldest first) to the latest verdict per reviewer.

    Commented and unrecognised states are skipped: they are never recorded and
    do not clear a verdict the reviewer gave earlier. A dismissal is recorded
    and replaces whatever the reviewer said before it.
    """
    verdicts: dict[int, ReviewVerdict] = {}
    for review in reviews:
        verdict = ReviewVerdict.parse(review.state)
        if verdict is ReviewVerdict.UNKNOWN:
            logger.debug("Ignoring review state %r from reviewer %s", review.state, review.reviewer_id)
            continue
        if verdict is ReviewVerdict.COMMENTED:
            continue
        verdicts[review.reviewer_id] = verdict
    return verdicts


def aggregate_verdicts(reviews: Iterable[Review]) -> tuple[bool, bool]:
    """Return ``(approved, changes_requested)`` across all reviewers.

    Both may be true at once when reviewers disagree.
    """
    verdicts = set(normalize_reviews(reviews).values())
    return ReviewVerdict.APPROVED in verdicts, ReviewVerdict.CHANGES_REQUESTED in verdicts
