"""
Model Client

Sends one chat completion request per review run and decodes the JSON
object in the reply. Failures are logged and reported as ``None`` so a
run degrades to posting nothing.
"""

import json
import logging
from typing import Any, Dict, Optional

import openai
from openai import OpenAI
from pydantic import ValidationError

from ..config import ModelConfig
from ..models.review import ReviewSuggestions, PullRequestSummary


logger = logging.getLogger(__name__)


class ModelClient:
    """
    Chat completion client for an OpenAI-compatible API.

    Uses the ``openai`` SDK; ``base_url`` points it at other compatible
    providers.
    """

    def __init__(self, config: ModelConfig, client: Optional[OpenAI] = None):
        """
        Initialize model client.

        Args:
            config: Model settings
            client: Preconfigured OpenAI client, created from config if omitted
        """
        self.config = config
        self.client = client or OpenAI(api_key=config.api_key, base_url=config.base_url)

    def _request_params(self, prompt: str, system: str) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            'model': self.config.model,
            'temperature': self.config.temperature,
            'max_tokens': self.config.max_tokens,
            'top_p': self.config.top_p,
            'frequency_penalty': self.config.frequency_penalty,
            'presence_penalty': self.config.presence_penalty,
            'messages': [
                {'role': 'system', 'content': system},
                {'role': 'user', 'content': prompt},
            ],
        }
        if self.config.supports_json_mode:
            params['response_format'] = {'type': 'json_object'}
        return params

    def complete(self, prompt: str, system: str) -> Optional[Dict[str, Any]]:
        """
        Request a completion and decode its JSON object.

        Args:
            prompt: User prompt
            system: System instruction

        Returns:
            Decoded JSON object, or None on transport or parse failure
        """
        logger.info(f"system: {system}")
        logger.info(f"prompt: {prompt}")

        try:
            response = self.client.chat.completions.create(**self._request_params(prompt, system))
        except openai.OpenAIError as e:
            logger.error(f"Chat completion request failed: {e}")
            return None

        content = ''
        if response.choices:
            content = (response.choices[0].message.content or '').strip()
        content = content or '{}'
        logger.info(f"Model response: {content}")

        return self._parse_json(content)

    def _parse_json(self, content: str) -> Optional[Dict[str, Any]]:
        """Decode the reply, falling back to its outermost ``{...}`` span."""
        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            start, end = content.find('{'), content.rfind('}')
            if start == -1 or end <= start:
                logger.error("Model response is not valid JSON")
                return None
            try:
                data = json.loads(content[start:end + 1])
            except json.JSONDecodeError as e:
                logger.error(f"Model response is not valid JSON: {e}")
                return None

        if not isinstance(data, dict):
            logger.error(f"Model response is not a JSON object: {type(data).__name__}")
            return None
        return data

    def get_review_suggestions(self, prompt: str, system: str) -> Optional[ReviewSuggestions]:
        """Request review suggestions (``{"reviews": [...]}``)."""
        data = self.complete(prompt, system)
        if data is None:
            return None
        try:
            return ReviewSuggestions.model_validate(data)
        except ValidationError as e:
            logger.error(f"Unexpected review response shape: {e}")
            return None

    def get_summary(self, prompt: str, system: str) -> Optional[PullRequestSummary]:
        """Request a pull request summary (``{"summary": "..."}``)."""
        data = self.complete(prompt, system)
        if data is None:
            return None
        try:
            return PullRequestSummary.model_validate(data)
        except ValidationError as e:
            logger.error(f"Unexpected summary response shape: {e}")
            return None
