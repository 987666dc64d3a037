"""Webhook payload parsing.

Only the pull-request part of an event is used, so the payload is kept as
the decoded JSON mapping rather than modelled in full.
"""

from __future__ import annotations

import json

from prlabeler_core.errors import EventError

# Events whose payload carries a top-level "pull_request" object.
PULL_REQUEST_EVENTS = frozenset(
    {
        "pull_request",
        "pull_request_target",
        "pull_request_review",
        "pull_request_review_comment",
        "pull_request_review_thread",
    }
)


def parse_webhook(event_name: str, payload: bytes | str) -> dict:
    """Decode a webhook payload, rejecting anything that is not a JSON object."""
    if not event_name:
        raise EventError("missing event name")
    try:
        event = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise EventError(f"failed to parse {event_name} event data: {e}") from e
    if not isinstance(event, dict):
        raise EventError(f"{event_name} event data is not a JSON object")
    return event


def pull_request_from_event(event_name: str, payload: bytes | str) -> dict:
    """Return the ``pull_request`` object of a pull-request related event."""
    event = parse_webhook(event_name, payload)
    pr = event.get("pull_request")
    if event_name not in PULL_REQUEST_EVENTS or not isinstance(pr, dict):
        raise EventError(f"{event_name} event didn't relate to pull request")
    if not isinstance(pr.get("number"), int):
        raise EventError(f"{event_name} event pull request has no number")
    return pr
