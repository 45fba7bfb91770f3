"""
AI Reviewer

Runs one review action end to end: fetches the pull request and its
diff, asks the model, and posts the result back as a review.
"""

import logging
from typing import List, Optional, Sequence

from .config import AppConfig
from .github.client import GitHubClient
from .github.event import PullRequestEvent
from .github.parser import DiffParser
from .llm.client import ModelClient
from .llm.prompts import PromptBuilder, REVIEW_ACTION, NAMING_ACTION, SUMMARY_ACTION
from .models.pr_diff import FileDiff, PRDetails
from .models.review import ActionResult, ReviewComment
from .review.comments import create_comments
from .review.filter import filter_files


logger = logging.getLogger(__name__)


class AIReviewer:
    """
    Review pipeline for a single pull request event.

    Steps:
    1. Fetch PR details and the diff for the event
    2. Parse the diff and drop excluded paths
    3. Ask the model for review comments, naming suggestions or a summary
    4. Post the result as a pull request review
    """

    def __init__(
        self,
        config: AppConfig,
        github_client: Optional[GitHubClient] = None,
        model_client: Optional[ModelClient] = None,
    ):
        """
        Initialize AI reviewer.

        Args:
            config: Application configuration
            github_client: GitHub client, created from config if omitted
            model_client: Model client, created from config if omitted
        """
        self.config = config
        self.github = github_client or GitHubClient(
            token=config.github.token,
            base_url=config.github.api_base_url,
            timeout=config.github.timeout_seconds,
        )
        self.model = model_client or ModelClient(config.model)
        self.parser = DiffParser()
        self.prompt_builder = PromptBuilder()

    def get_pr_details(self, event: PullRequestEvent) -> PRDetails:
        return self.github.get_pr_details(event.owner, event.repo, event.pull_number)

    def get_diff(self, event: PullRequestEvent, pr_details: PRDetails) -> Optional[str]:
        """
        Fetch the diff to review for an event.

        ``synchronize`` events review only the pushed commits; other events
        review the whole pull request.
        """
        if event.action == "synchronize":
            if not event.before or not event.after:
                logger.warning("Synchronize event without before/after commits")
                return None
            return self.github.compare_commits_diff(
                pr_details.owner, pr_details.repo, event.before, event.after
            )
        return self.github.get_pull_request_diff(
            pr_details.owner, pr_details.repo, pr_details.pull_number
        )

    def get_parsed_diff(self, event: PullRequestEvent, pr_details: PRDetails) -> List[FileDiff]:
        """Fetch, parse and filter the diff; an empty list means nothing to review."""
        diff = self.get_diff(event, pr_details)
        if not diff:
            logger.info("No diff found")
            return []

        text_files = []
        for file_diff in self.parser.parse(diff):
            if file_diff.binary:
                logger.info(f"Skipping binary file {file_diff.path}")
                continue
            text_files.append(file_diff)

        files = filter_files(text_files, self.config.review.exclude_patterns)
        changed = sum(len(f.changed_lines()) for f in files)
        logger.info(
            f"Reviewing {len(files)} files with {changed} changed lines in "
            f"{pr_details.full_name}#{pr_details.pull_number}"
        )
        return files

    def analyze_code(self, files: Sequence[FileDiff], pr_details: PRDetails, action: str = REVIEW_ACTION) -> List[ReviewComment]:
        """
        Ask the model for review comments on the given files.

        Returns:
            Review comments, empty when the model call or its reply fails
        """
        prompt = self.prompt_builder.build_prompt(action, files, pr_details)
        system = self.prompt_builder.system_instruction(action)

        suggestions = self.model.get_review_suggestions(prompt, system)
        if suggestions is None:
            return []

        comments = create_comments(suggestions.reviews)
        logger.info(f"comments: {len(comments)} of {len(suggestions.reviews)} suggestions kept")
        return comments

    def review(self, files: Sequence[FileDiff], pr_details: PRDetails) -> ActionResult:
        """Post general review comments."""
        return self._comment_action(REVIEW_ACTION, files, pr_details)

    def review_naming(self, files: Sequence[FileDiff], pr_details: PRDetails) -> ActionResult:
        """Post naming suggestions for functions and variables."""
        return self._comment_action(NAMING_ACTION, files, pr_details)

    def summarize(self, files: Sequence[FileDiff], pr_details: PRDetails) -> ActionResult:
        """Post a summary of the pull request as the review body."""
        prompt = self.prompt_builder.build_prompt(SUMMARY_ACTION, files, pr_details)
        system = self.prompt_builder.system_instruction(SUMMARY_ACTION)

        response = self.model.get_summary(prompt, system)
        result = ActionResult(action=SUMMARY_ACTION)
        if response is None or not response.summary:
            logger.info("Nothing to summarize")
            return result

        result.summary = response.summary
        if self.config.review.dry_run:
            logger.info(f"Dry run, summary not posted:\n{response.summary}")
            return result

        self.github.create_review(
            pr_details.owner,
            pr_details.repo,
            pr_details.pull_number,
            body=response.summary,
            event="COMMENT",
        )
        result.posted = True
        return result

    def run(self, action: str, files: Sequence[FileDiff], pr_details: PRDetails) -> ActionResult:
        handlers = {
            REVIEW_ACTION: self.review,
            NAMING_ACTION: self.review_naming,
            SUMMARY_ACTION: self.summarize,
        }
        if action not in handlers:
            raise ValueError(f"Unknown action: {action}")
        return handlers[action](files, pr_details)

    def _comment_action(self, action: str, files: Sequence[FileDiff], pr_details: PRDetails) -> ActionResult:
        comments = self.analyze_code(files, pr_details, action)
        result = ActionResult(action=action, comments=comments)
        if not comments:
            logger.info("No review comments to post")
            return result

        if self.config.review.dry_run:
            for comment in comments:
                logger.info(f"Dry run, comment not posted: {comment.path}:{comment.line} {comment.body}")
            return result

        self.github.create_review(
            pr_details.owner,
            pr_details.repo,
            pr_details.pull_number,
            comments=comments,
            event="COMMENT",
        )
        result.posted = True
        return result
