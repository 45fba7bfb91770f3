"""
Prompt Builder

Builds the system instruction and user prompt sent to the chat model
for each review action.
"""

import logging
from typing import Dict, Sequence

from ..models.pr_diff import FileDiff, Hunk, PRDetails


logger = logging.getLogger(__name__)


REVIEW_ACTION = "review"
NAMING_ACTION = "naming"
SUMMARY_ACTION = "summary"


_REVIEW_FORMAT = (
    '- Provide the response in following JSON format:  '
    '{"reviews": [{"path": <path_to_file>, "lineNumber":  <line_number>, '
    '"reviewComment": "<review comment>"}]}'
)


class PromptBuilder:
    """
    Builds prompts for the chat model.

    Every action shares one user prompt layout (PR title, description and
    file diffs); the system instruction decides what the model does with it.
    """

    def __init__(self):
        """Initialize prompt builder."""
        self.templates = self._load_templates()

    def system_instruction(self, action: str) -> str:
        """
        Get the system instruction for an action.

        Args:
            action: One of ``review``, ``naming`` or ``summary``

        Returns:
            System instruction text
        """
        if action not in self.templates:
            raise ValueError(f"Unknown action: {action}")
        return self.templates[action]["system"]

    def build_prompt(self, action: str, files: Sequence[FileDiff], pr_details: PRDetails) -> str:
        """
        Build the user prompt for an action.

        Args:
            action: One of ``review``, ``naming`` or ``summary``
            files: File diffs to include
            pr_details: Pull request title and description

        Returns:
            Complete prompt string
        """
        if action not in self.templates:
            raise ValueError(f"Unknown action: {action}")

        logger.debug(f"Building {action} prompt for {len(files)} files")

        return "\n".join([
            "",
            self.templates[action]["task"],
            "",
            f"Pull request title: {pr_details.title}",
            "Pull request description:",
            "",
            "---",
            pr_details.description,
            "---",
            "",
            "File diffs below:",
            self.merge_diffs(files),
            "",
        ])

    def merge_diffs(self, files: Sequence[FileDiff]) -> str:
        """Render file diffs as ``path:``/``diff:`` sections with fenced hunks."""
        return "\n\n".join(self._format_file(file_diff) for file_diff in files)

    def _format_file(self, file_diff: FileDiff) -> str:
        chunks = "".join(self._format_hunk(hunk) for hunk in file_diff.chunks)
        return f"\npath: {file_diff.path}\ndiff: {chunks}"

    def _format_hunk(self, hunk: Hunk) -> str:
        """Format a hunk as its header followed by numbered line changes."""
        lines = "\n".join(
            f"{change.line_number} {change.content}" for change in hunk.changes
        )
        return f"\n```diff\n{hunk.header}\n{lines}\n```\n"

    def _load_templates(self) -> Dict[str, Dict[str, str]]:
        """Load task lines and system instructions per action."""
        review_task = (
            "Review the following code diffs and take the pull request title "
            "and description into account when writing the response."
        )
        return {
            REVIEW_ACTION: {
                "task": review_task,
                "system": "\n".join([
                    "Your task is to review pull requests. Instructions:",
                    _REVIEW_FORMAT,
                    "- Do not give positive comments or compliments.",
                    '- Provide comments and suggestions ONLY if there is something to improve, '
                    'otherwise "reviews" should be an empty array.',
                    "- Write the comment in GitHub Markdown format.",
                    "- Use the given description only for the overall context and only comment the code.",
                    "- IMPORTANT: NEVER suggest adding comments to the code.",
                ]),
            },
            NAMING_ACTION: {
                "task": review_task,
                "system": "\n".join([
                    "Your task is to review pull requests. Instructions:",
                    _REVIEW_FORMAT,
                    "- Do not give positive comments or compliments.",
                    '- Provide comments and suggestions ONLY if there is something to improve, '
                    'otherwise "reviews" should be an empty array.',
                    "- Write the comment in GitHub Markdown format.",
                    "- Use the given description only for the overall context and only comment the code.",
                    "- Only give suggestions on naming of functions and variables",
                    "- a suggestion comment can be written with the following syntax:",
                    "```suggestion",
                    "<new_code_suggestion>",
                    "```",
                    "- IMPORTANT: NEVER suggest adding comments to the code.",
                ]),
            },
            SUMMARY_ACTION: {
                "task": (
                    "Summarize the following code diffs and take the pull request "
                    "title and description into account when writing the response."
                ),
                "system": "\n".join([
                    "Your task is to summarize changes in a pull requests. Instructions:",
                    '- Provide the full response in following JSON format:  {"summary": "<review comment>"}',
                    "- The response MUST be in a valid JSON format",
                    "- Write the summary in GitHub Markdown format and stringified for JSON",
                    "- It should be in bullet point format",
                    "- Include important code in the comment as a code block",
                    "- I'm looking for a detailed summary, highlighting key changes in the code, "
                    "any new features, bug fixes, or major refactors.",
                    "- Additionally, include a section on recommended manual testing procedures. "
                    "This should detail steps to validate that the new changes are working as expected, "
                    "covering any new features or bug fixes introduced in this pull request.",
                    "- Finally, based on the changes you've summarized, offer a prediction on the outcome "
                    "of the review process. Should this pull request be approved based on the changes made, "
                    "or do the changes warrant further inspection by a human developer? Consider factors "
                    "like the complexity of changes, potential impact on existing functionality, and "
                    "adherence to project guidelines in your assessment.",
                ]),
            },
        }
