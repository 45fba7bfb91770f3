"""
Action Dispatcher

Selects which review action an event triggers and runs it once.
"""

import logging
from typing import Iterable, Optional

from .api import AIReviewer
from .github.event import PullRequestEvent
from .llm.prompts import REVIEW_ACTION, SUMMARY_ACTION, NAMING_ACTION
from .models.review import ActionResult


logger = logging.getLogger(__name__)


SUPPORTED_EVENT_ACTIONS = frozenset({"opened", "labeled", "synchronize"})

# Priority order: the first label found in this list wins.
LABEL_ACTIONS = (
    ("ai-review", REVIEW_ACTION),
    ("ai-summary", SUMMARY_ACTION),
    ("ai-naming", NAMING_ACTION),
)


def select_action(labels: Iterable[str]) -> Optional[str]:
    """
    Pick the action for a set of applied labels.

    Args:
        labels: Names of labels applied to the pull request

    Returns:
        Action name, or None when no supported label is applied
    """
    applied = list(labels)
    known = {label for label, _ in LABEL_ACTIONS}
    for label in applied:
        if label not in known:
            logger.info(f"Unsupported label {label}")

    for label, action in LABEL_ACTIONS:
        if label in applied:
            logger.info(f"Running action for label: {label}")
            return action
    return None


class ActionDispatcher:
    """Routes a pull request event to one review action."""

    def __init__(self, reviewer: AIReviewer):
        self.reviewer = reviewer

    def dispatch(self, event: PullRequestEvent) -> Optional[ActionResult]:
        """
        Run the action selected by the event's labels.

        Unsupported event actions and unlabeled pull requests return before
        any network call.

        Returns:
            Result of the action, or None when nothing ran
        """
        if event.action not in SUPPORTED_EVENT_ACTIONS:
            logger.info(f"Unsupported event action: {event.action}")
            return None

        action = select_action(event.labels)
        if action is None:
            logger.info("No supported label set")
            return None

        pr_details = self.reviewer.get_pr_details(event)
        files = self.reviewer.get_parsed_diff(event, pr_details)
        if not files:
            logger.info("No diff to review.")
            return None

        return self.reviewer.run(action, files, pr_details)
