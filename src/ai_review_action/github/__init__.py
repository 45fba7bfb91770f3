"""
GitHub Integration Layer

This module provides GitHub API access for PR metadata, diff retrieval
and review creation, unified diff parsing, and event payload loading.
"""

from .client import GitHubClient, GitHubAPIError, RateLimitExceeded
from .parser import DiffParser
from .event import PullRequestEvent, load_event

__all__ = [
    'GitHubClient',
    'GitHubAPIError',
    'RateLimitExceeded',
    'DiffParser',
    'PullRequestEvent',
    'load_event',
]
