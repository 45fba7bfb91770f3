"""
AI Review Action

GitHub Pull Request에 LLM 리뷰 코멘트, 네이밍 제안, 요약을 남기는 GitHub Action
"""

__version__ = "1.0.0"

from .api import AIReviewer
from .dispatcher import ActionDispatcher, select_action

__all__ = ["AIReviewer", "ActionDispatcher", "select_action"]
