"""
GitHub API Client

Handles GitHub API authentication, rate limit tracking, and communication.
Provides methods for PR metadata, diff retrieval, and review creation.
"""

import time
import logging
from typing import Dict, List, Optional
from datetime import datetime
import requests

from ..exceptions import AIReviewActionError
from ..models.pr_diff import PRDetails
from ..models.review import ReviewComment


logger = logging.getLogger(__name__)

DIFF_MEDIA_TYPE = 'application/vnd.github.v3.diff'


class GitHubAPIError(AIReviewActionError):
    """GitHub API related errors"""
    def __init__(self, message: str, status_code: Optional[int] = None, response_data: Optional[Dict] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


class RateLimitExceeded(GitHubAPIError):
    """GitHub API rate limit exceeded"""
    def __init__(self, reset_time: datetime, status_code: Optional[int] = None):
        super().__init__(f"Rate limit exceeded. Resets at {reset_time}", status_code=status_code)
        self.reset_time = reset_time


class GitHubClient:
    """
    GitHub API client with authentication and error handling.

    Provides methods for:
    - Pull request metadata and diff retrieval
    - Commit comparison diffs for pushes to an open PR
    - Review creation with inline comments or a summary body
    """

    def __init__(self, token: str, base_url: str = "https://api.github.com", timeout: Optional[float] = 30):
        """
        Initialize GitHub client.

        Args:
            token: GitHub access token
            base_url: GitHub API base URL (default: https://api.github.com)
            timeout: Request timeout in seconds, None for no timeout
        """
        if not token:
            raise ValueError("GitHub token is required")

        self.token = token
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = self._create_session()
        self.rate_limit_remaining: Optional[int] = None
        self.rate_limit_reset: Optional[datetime] = None

    def _create_session(self) -> requests.Session:
        """Create requests session with authentication headers."""
        session = requests.Session()

        session.headers.update({
            'Authorization': f'token {self.token}',
            'Accept': 'application/vnd.github.v3+json',
            'User-Agent': 'AI-Review-Action/1.0'
        })

        return session

    def _update_rate_limit(self, response: requests.Response) -> None:
        """Update rate limit information from response headers."""
        if 'X-RateLimit-Remaining' in response.headers:
            self.rate_limit_remaining = int(response.headers['X-RateLimit-Remaining'])

        if 'X-RateLimit-Reset' in response.headers:
            reset_timestamp = int(response.headers['X-RateLimit-Reset'])
            self.rate_limit_reset = datetime.fromtimestamp(reset_timestamp)

    def _is_rate_limited(self, response: requests.Response) -> bool:
        if response.status_code == 429:
            return True
        return response.status_code == 403 and response.headers.get('X-RateLimit-Remaining') == '0'

    def _make_request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """
        Make authenticated request to GitHub API.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint (without base URL)
            **kwargs: Additional arguments for requests

        Returns:
            Response object

        Raises:
            GitHubAPIError: For API errors
            RateLimitExceeded: When rate limit is exceeded
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        kwargs.setdefault('timeout', self.timeout)

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Request failed: {e}")
            raise GitHubAPIError(f"Request failed: {str(e)}") from e

        self._update_rate_limit(response)

        if self._is_rate_limited(response):
            reset_time = self.rate_limit_reset or datetime.fromtimestamp(time.time() + 3600)
            raise RateLimitExceeded(reset_time, status_code=response.status_code)

        if not response.ok:
            try:
                error_data = response.json() if response.content else {}
            except ValueError:
                error_data = {'message': response.text}
            if not isinstance(error_data, dict):
                error_data = {'message': str(error_data)}
            raise GitHubAPIError(
                f"GitHub API error: {response.status_code} - {error_data.get('message', 'Unknown error')}",
                status_code=response.status_code,
                response_data=error_data
            )

        if self.rate_limit_remaining is not None:
            logger.debug(
                f"GitHub rate limit remaining: {self.rate_limit_remaining} (resets at {self.rate_limit_reset})"
            )

        return response

    def get_pull_request(self, owner: str, repo: str, pr_number: int) -> Dict:
        """
        Get pull request information.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number

        Returns:
            Pull request data
        """
        logger.info(f"Fetching PR {owner}/{repo}#{pr_number}")

        response = self._make_request('GET', f'/repos/{owner}/{repo}/pulls/{pr_number}')
        return response.json()

    def get_pr_details(self, owner: str, repo: str, pr_number: int) -> PRDetails:
        """Fetch the pull request and keep the fields the review prompt needs."""
        pr_data = self.get_pull_request(owner, repo, pr_number)
        return PRDetails(
            owner=owner,
            repo=repo,
            pull_number=pr_number,
            title=pr_data.get('title') or '',
            description=pr_data.get('body') or '',
        )

    def get_pull_request_diff(self, owner: str, repo: str, pr_number: int) -> str:
        """
        Get the unified diff of a whole pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number

        Returns:
            Raw unified diff text
        """
        logger.info(f"Fetching diff for {owner}/{repo}#{pr_number}")

        response = self._make_request(
            'GET',
            f'/repos/{owner}/{repo}/pulls/{pr_number}',
            headers={'Accept': DIFF_MEDIA_TYPE}
        )
        return response.text

    def compare_commits_diff(self, owner: str, repo: str, base: str, head: str) -> str:
        """
        Get the unified diff between two commits.

        Args:
            owner: Repository owner
            repo: Repository name
            base: Base commit SHA
            head: Head commit SHA

        Returns:
            Raw unified diff text
        """
        logger.info(f"Comparing {owner}/{repo} {base[:7]}...{head[:7]}")

        response = self._make_request(
            'GET',
            f'/repos/{owner}/{repo}/compare/{base}...{head}',
            headers={'Accept': DIFF_MEDIA_TYPE}
        )
        return response.text

    def create_review(
        self,
        owner: str,
        repo: str,
        pr_number: int,
        comments: Optional[List[ReviewComment]] = None,
        body: Optional[str] = None,
        event: str = 'COMMENT'
    ) -> Dict:
        """
        Create a pull request review.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number
            comments: Inline review comments
            body: Review body text
            event: Review event (COMMENT, APPROVE, REQUEST_CHANGES)

        Returns:
            Created review data
        """
        payload: Dict = {'event': event}
        if comments:
            payload['comments'] = [comment.to_dict() for comment in comments]
        if body:
            payload['body'] = body

        logger.info(
            f"Creating review on {owner}/{repo}#{pr_number} "
            f"({len(comments or [])} comments, body: {'yes' if body else 'no'})"
        )

        response = self._make_request(
            'POST',
            f'/repos/{owner}/{repo}/pulls/{pr_number}/reviews',
            json=payload
        )
        return response.json()
