"""
LLM Layer

This module provides prompt building per review action and the chat
completion client that returns the model's structured reply.
"""

from .prompts import PromptBuilder, REVIEW_ACTION, NAMING_ACTION, SUMMARY_ACTION
from .client import ModelClient

__all__ = ['PromptBuilder', 'ModelClient', 'REVIEW_ACTION', 'NAMING_ACTION', 'SUMMARY_ACTION']
