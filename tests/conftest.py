"""Shared fixtures for the review action tests."""

import json
from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from ai_review_action.config import AppConfig, GitHubConfig, ModelConfig, ReviewConfig


TWO_FILE_DIFF = (
    "diff --git a/src/app.py b/src/app.py\n"
    "index 83db48f..bf269f4 100644\n"
    "--- a/src/app.py\n"
    "+++ b/src/app.py\n"
    "@@ -1,4 +1,5 @@\n"
    " import os\n"
    "+import sys\n"
    " \n"
    " def main():\n"
    "-    pass\n"
    "+    return 0\n"
    "diff --git a/README.md b/README.md\n"
    "new file mode 100644\n"
    "index 0000000..e69de29\n"
    "--- /dev/null\n"
    "+++ b/README.md\n"
    "@@ -0,0 +1,2 @@\n"
    "+# Title\n"
    "+Body\n"
)


@pytest.fixture
def two_file_diff():
    return TWO_FILE_DIFF


@pytest.fixture
def app_config():
    return AppConfig(
        github=GitHubConfig(token="ghp_test_token"),
        model=ModelConfig(api_key="sk-test"),
        review=ReviewConfig(exclude_patterns=["**/*.md"]),
    )


def make_event_payload(action="labeled", labels=("ai-review",), **extra):
    payload = {
        "action": action,
        "number": 42,
        "repository": {"name": "widgets", "owner": {"login": "acme"}},
        "pull_request": {
            "number": 42,
            "labels": [{"name": name} for name in labels],
        },
    }
    payload.update(extra)
    return payload


@pytest.fixture
def event_payload():
    return make_event_payload()


@pytest.fixture
def event_file(tmp_path, event_payload):
    path = tmp_path / "event.json"
    path.write_text(json.dumps(event_payload), encoding="utf-8")
    return path


def chat_completion(content):
    """Build an object shaped like an OpenAI chat completion response."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )


@pytest.fixture
def fake_openai():
    client = Mock()
    client.chat.completions.create.return_value = chat_completion('{"reviews": []}')
    return client
