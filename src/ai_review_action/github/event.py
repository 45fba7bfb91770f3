"""
GitHub Event Payload

Loads the webhook payload GitHub Actions writes to ``GITHUB_EVENT_PATH``
and exposes the fields the review action reads.
"""

import os
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..exceptions import EventPayloadError


logger = logging.getLogger(__name__)


@dataclass
class PullRequestEvent:
    """Fields of a ``pull_request`` event used by the review action."""
    action: Optional[str]
    owner: str
    repo: str
    pull_number: int
    labels: List[str] = field(default_factory=list)
    before: Optional[str] = None
    after: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "PullRequestEvent":
        """
        Build an event from a decoded webhook payload.

        Raises:
            EventPayloadError: If repository or pull request fields are missing
        """
        if not isinstance(payload, dict):
            raise EventPayloadError("Event payload must be a JSON object")

        pull_request = payload.get('pull_request') or {}
        repository = payload.get('repository') or {}

        try:
            owner = repository['owner']['login']
            repo = repository['name']
        except (KeyError, TypeError) as e:
            raise EventPayloadError(f"Event payload has no repository information: {e}") from e

        number = payload.get('number', pull_request.get('number'))
        try:
            pull_number = int(number)
        except (TypeError, ValueError) as e:
            raise EventPayloadError(f"Event payload has no valid pull request number: {number!r}") from e

        labels = [
            label.get('name')
            for label in pull_request.get('labels') or []
            if isinstance(label, dict) and label.get('name')
        ]

        return cls(
            action=payload.get('action'),
            owner=owner,
            repo=repo,
            pull_number=pull_number,
            labels=labels,
            before=payload.get('before'),
            after=payload.get('after'),
        )


def load_event(event_path: Optional[str] = None) -> PullRequestEvent:
    """
    Read and decode the event payload.

    Args:
        event_path: Payload file path, defaults to ``$GITHUB_EVENT_PATH``

    Returns:
        Parsed pull request event
    """
    path = event_path or os.getenv('GITHUB_EVENT_PATH')
    if not path:
        raise EventPayloadError("GITHUB_EVENT_PATH is not set")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise EventPayloadError(f"Cannot read event payload {path}: {e}") from e

    event = PullRequestEvent.from_payload(payload)
    logger.info(
        f"Loaded '{os.getenv('GITHUB_EVENT_NAME', 'pull_request')}' event "
        f"(action: {event.action}) for {event.owner}/{event.repo}#{event.pull_number}"
    )
    return event
