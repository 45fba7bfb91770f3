"""
Command Line Entry Point

Runs the review action for the event GitHub Actions triggered.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .api import AIReviewer
from .config import AppConfig, setup_logging
from .dispatcher import ActionDispatcher
from .github.event import load_event


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ai-review-action",
        description="Review, summarize or suggest naming for a pull request with an LLM.",
    )
    parser.add_argument("--event-path", help="Event payload file (default: $GITHUB_EVENT_PATH)")
    parser.add_argument("--config", help="YAML config file; secrets fall back to the environment")
    parser.add_argument("--dry-run", action="store_true", help="Run the model but do not post to GitHub")
    parser.add_argument("--log-level", help="Override the configured log level")
    return parser


def load_config(args: argparse.Namespace) -> AppConfig:
    if args.config:
        config = AppConfig.from_yaml(args.config).merge_env()
    else:
        config = AppConfig.from_env()

    if args.dry_run:
        config.review.dry_run = True
    if args.log_level:
        config.logging.level = args.log_level
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the action.

    Returns:
        0 on success or when nothing had to be done, 1 on failure
    """
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
        setup_logging(config.logging)
        config.validate()
        logger.debug(f"Configuration: {config.to_dict()}")

        event = load_event(args.event_path)
        dispatcher = ActionDispatcher(AIReviewer(config))
        result = dispatcher.dispatch(event)
    except Exception:
        logger.exception("Error")
        return 1

    if result is not None:
        logger.info(
            f"Finished '{result.action}' action: {len(result.comments)} comments, "
            f"summary: {'yes' if result.summary else 'no'}, posted: {result.posted}"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
