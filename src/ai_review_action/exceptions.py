"""
Exceptions

Error types raised across the review action.
"""


class AIReviewActionError(Exception):
    """Base class for review action errors"""


class ConfigurationError(AIReviewActionError, ValueError):
    """Invalid or incomplete configuration"""


class EventPayloadError(AIReviewActionError):
    """Missing or malformed GitHub event payload"""
