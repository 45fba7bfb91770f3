"""
Integration tests for the command line entry point.
"""

import json
import logging
from unittest.mock import patch

import pytest

from ai_review_action import cli
from ai_review_action.models.review import ActionResult

from conftest import make_event_payload


@pytest.fixture
def action_env(monkeypatch):
    monkeypatch.setenv("INPUT_GITHUB_TOKEN", "ghp_test_token")
    monkeypatch.setenv("INPUT_AI_API_KEY", "sk-test")
    monkeypatch.delenv("GITHUB_EVENT_PATH", raising=False)


def _write_event(tmp_path, payload):
    path = tmp_path / "event.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


class TestCli:
    """Exit codes and option handling."""

    def test_unsupported_event_exits_cleanly(self, tmp_path, action_env):
        event_path = _write_event(tmp_path, make_event_payload(action="closed"))

        with patch("ai_review_action.github.client.requests.Session.request") as mock_request:
            assert cli.main(["--event-path", event_path]) == 0

        mock_request.assert_not_called()

    def test_unlabeled_pr_exits_cleanly(self, tmp_path, action_env, monkeypatch):
        monkeypatch.setenv("GITHUB_EVENT_PATH", _write_event(tmp_path, make_event_payload(labels=("bug",))))

        with patch("ai_review_action.github.client.requests.Session.request") as mock_request:
            assert cli.main([]) == 0

        mock_request.assert_not_called()

    def test_missing_event_payload_fails(self, action_env):
        assert cli.main([]) == 1

    def test_missing_credentials_fails(self, tmp_path, monkeypatch):
        for name in ("INPUT_GITHUB_TOKEN", "GITHUB_TOKEN", "INPUT_AI_API_KEY", "AI_API_KEY"):
            monkeypatch.delenv(name, raising=False)
        event_path = _write_event(tmp_path, make_event_payload())

        assert cli.main(["--event-path", event_path]) == 1

    def test_uncaught_error_exits_with_one(self, tmp_path, action_env):
        event_path = _write_event(tmp_path, make_event_payload())

        with patch.object(cli.ActionDispatcher, "dispatch", side_effect=RuntimeError("boom")):
            assert cli.main(["--event-path", event_path]) == 1

    def test_dry_run_and_log_level_options(self, tmp_path, action_env):
        event_path = _write_event(tmp_path, make_event_payload())
        seen = {}

        def dispatch(dispatcher, event):
            seen["config"] = dispatcher.reviewer.config
            return ActionResult(action="review")

        with patch.object(cli.ActionDispatcher, "dispatch", autospec=True, side_effect=dispatch):
            assert cli.main(["--event-path", event_path, "--dry-run", "--log-level", "DEBUG"]) == 0

        assert seen["config"].review.dry_run is True
        assert seen["config"].logging.level == "DEBUG"

    def test_startup_logs_configuration_without_secrets(self, tmp_path, action_env, caplog):
        event_path = _write_event(tmp_path, make_event_payload(action="closed"))
        caplog.set_level(logging.DEBUG, logger="ai_review_action.cli")

        assert cli.main(["--event-path", event_path]) == 0

        assert "Configuration:" in caplog.text
        assert "gpt-4-1106-preview" in caplog.text
        assert "sk-test" not in caplog.text
        assert "ghp_test_token" not in caplog.text

    def test_yaml_config_with_env_secrets(self, tmp_path, action_env):
        config_path = tmp_path / "review.yml"
        config_path.write_text("model:\n  model: gpt-4o\nreview:\n  exclude_patterns: '**/*.lock'\n", encoding="utf-8")

        args = cli.build_parser().parse_args(["--config", str(config_path)])
        config = cli.load_config(args)

        assert config.model.model == "gpt-4o"
        assert config.model.api_key == "sk-test"
        assert config.github.token == "ghp_test_token"
        assert config.review.exclude_patterns == ["**/*.lock"]
