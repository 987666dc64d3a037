"""GitHub access for a single repository."""

from __future__ import annotations

import logging

from github import Github, GithubException

from prlabeler_core.errors import DirectoryPathError, InvalidRepositoryError, RemoteError
from prlabeler_core.reviews import Review
from prlabeler_core.state import PRState, pr_state_from_reviews

logger = logging.getLogger(__name__)


def split_repository(repository: str) -> tuple[str, str]:
    """Split ``owner/name`` into its parts."""
    parts = (repository or "").split("/")
    if len(parts) != 2 or not all(parts):
        raise InvalidRepositoryError(repository)
    return parts[0], parts[1]


class RepositoryClient:
    """Operations the labeler needs against one GitHub repository."""

    def __init__(self, repo):
        self._repo = repo

    @classmethod
    def from_token(cls, token: str, repository: str) -> RepositoryClient:
        owner, name = split_repository(repository)
        try:
            repo = Github(token).get_repo(f"{owner}/{name}")
        except GithubException as e:
            raise RemoteError(f"failed to open repository {repository}: {e}") from e
        return cls(repo)

    def download_file_from_default_branch(self, path: str) -> bytes:
        """Return the content of ``path`` on the repository's default branch."""
        try:
            content = self._repo.get_contents(path)
        except GithubException as e:
            raise RemoteError(f"failed to retrieve {path}: {e}") from e

        # get_contents returns a listing when the path is a directory.
        if isinstance(content, list):
            raise DirectoryPathError(path)
        return content.decoded_content

    def pull_request_reviews(self, number: int) -> list[Review]:
        """Return every review on the PR, oldest first.

        Iterating the paginated list fetches all pages; a failure on any page
        discards what was collected so far.
        """
        try:
            reviews = [
                Review(reviewer_id=review.user.id, state=review.state)
                for review in self._repo.get_pull(number).get_reviews()
                if review.user is not None
            ]
        except GithubException as e:
            raise RemoteError(f"couldn't list pull request reviews for #{number}: {e}") from e
        logger.debug("Fetched %d review(s) for #%s", len(reviews), number)
        return reviews

    def pull_request_state(self, number: int) -> PRState:
        """Build a snapshot from the live pull request rather than a webhook payload."""
        try:
            pr = self._repo.get_pull(number)
            payload = {
                "number": pr.number,
                "labels": [{"name": label.name} for label in pr.labels],
                "draft": pr.draft,
                "title": pr.title,
                "head": {"ref": pr.head.ref},
            }
        except GithubException as e:
            raise RemoteError(f"failed to fetch pull request #{number}: {e}") from e
        return pr_state_from_reviews(payload, self.pull_request_reviews(number))

    def replace_labels_for_issue(self, number: int, labels: list[str]) -> None:
        """Replace the full label set on an issue or pull request."""
        try:
            self._repo.get_issue(number).set_labels(*labels)
        except GithubException as e:
            raise RemoteError(f"failed to replace labels on #{number}: {e}") from e
