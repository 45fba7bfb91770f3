"""
Review Processing

This module provides path exclusion filtering and mapping of model
suggestions to PR review comments.
"""

from .filter import filter_files, matches_any
from .comments import create_comments, coerce_line_number

__all__ = ['filter_files', 'matches_any', 'create_comments', 'coerce_line_number']
