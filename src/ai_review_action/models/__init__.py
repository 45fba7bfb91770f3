"""
Data Models

AI Review Action의 핵심 데이터 모델들
"""

from .pr_diff import PRDetails, FileDiff, Hunk, LineChange
from .review import (
    ReviewComment,
    ActionResult,
    ModelSuggestion,
    ReviewSuggestions,
    PullRequestSummary,
)

__all__ = [
    "PRDetails",
    "FileDiff",
    "Hunk",
    "LineChange",
    "ReviewComment",
    "ActionResult",
    "ModelSuggestion",
    "ReviewSuggestions",
    "PullRequestSummary",
]
