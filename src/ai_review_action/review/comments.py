"""
Comment Mapper

Converts the model's review suggestions into PR review comments.
"""

import logging
from typing import Any, Iterable, List, Union

from ..models.review import ModelSuggestion, ReviewComment


logger = logging.getLogger(__name__)


def coerce_line_number(value: Any) -> Union[int, Any]:
    """
    Convert a line number given as a string or a float into an integer.

    ``"12"``, ``12.0`` and ``"12.0"`` all become ``12``. Values that are not
    integral are returned unchanged so the review API reports them.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        number = None
    if number is None or not number.is_integer():
        logger.warning(f"Passing through malformed line number: {value!r}")
        return value
    return int(number)


def create_comments(suggestions: Iterable[ModelSuggestion]) -> List[ReviewComment]:
    """
    Map model suggestions to review comments.

    Suggestions without a target path are dropped.
    """
    comments = []
    for suggestion in suggestions:
        if not suggestion.path:
            logger.debug(f"Dropping suggestion without path: {suggestion.reviewComment[:80]!r}")
            continue
        comments.append(ReviewComment(
            path=suggestion.path,
            line=coerce_line_number(suggestion.lineNumber),
            body=suggestion.reviewComment,
        ))
    return comments
