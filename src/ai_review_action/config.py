"""
Configuration Management

액션 설정 관리
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, Mapping
from pathlib import Path
import logging

from .exceptions import ConfigurationError


DEFAULT_MODEL = "gpt-4-1106-preview"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _input(env: Mapping[str, str], name: str, *fallbacks: str, default: Optional[str] = None) -> Optional[str]:
    """GitHub Actions 입력값(INPUT_<NAME>) 우선, 일반 환경 변수는 대체값"""
    for key in (f"INPUT_{name.upper()}", *fallbacks):
        value = env.get(key)
        if value is not None and value.strip() != "":
            return value.strip()
    return default


def _flag(value: Optional[str]) -> bool:
    return (value or "false").strip().lower() in {"true", "1", "yes"}


def split_patterns(raw: Optional[str]) -> List[str]:
    """쉼표로 구분된 glob 패턴 문자열을 리스트로 변환"""
    if not raw:
        return []
    return [pattern.strip() for pattern in raw.split(",") if pattern.strip()]


@dataclass
class GitHubConfig:
    """GitHub API 설정"""
    token: Optional[str] = None
    api_base_url: str = "https://api.github.com"
    timeout_seconds: int = 30


@dataclass
class ModelConfig:
    """Chat completion 모델 설정"""
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    base_url: Optional[str] = None
    temperature: float = 0.2
    max_tokens: int = 700
    top_p: float = 1.0
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.0
    json_mode_models: List[str] = field(default_factory=lambda: [DEFAULT_MODEL])

    @property
    def supports_json_mode(self) -> bool:
        """JSON 응답 형식(response_format) 지원 모델 여부"""
        return self.model in self.json_mode_models


@dataclass
class ReviewConfig:
    """리뷰 실행 설정"""
    exclude_patterns: List[str] = field(default_factory=list)
    dry_run: bool = False


@dataclass
class LoggingConfig:
    """로깅 설정"""
    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT


@dataclass
class AppConfig:
    """전체 애플리케이션 설정"""
    github: GitHubConfig = field(default_factory=GitHubConfig)
    model: ModelConfig = field(default_factory=ModelConfig)
    review: ReviewConfig = field(default_factory=ReviewConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """환경 변수에서 설정 로드"""
        env = os.environ if environ is None else environ
        json_mode = _input(env, "AI_JSON_MODE_MODELS", "AI_JSON_MODE_MODELS")

        return cls(
            github=GitHubConfig(
                token=_input(env, "GITHUB_TOKEN", "GITHUB_TOKEN"),
                api_base_url=_input(env, "GITHUB_API_URL", "GITHUB_API_URL", default="https://api.github.com"),
                timeout_seconds=int(_input(env, "GITHUB_TIMEOUT", "GITHUB_TIMEOUT", default="30")),
            ),
            model=ModelConfig(
                api_key=_input(env, "AI_API_KEY", "AI_API_KEY"),
                model=_input(env, "AI_API_MODEL", "AI_API_MODEL", default=DEFAULT_MODEL),
                base_url=_input(env, "AI_API_BASE_URL", "AI_API_BASE_URL"),
                temperature=float(_input(env, "AI_TEMPERATURE", "AI_TEMPERATURE", default="0.2")),
                max_tokens=int(_input(env, "AI_MAX_TOKENS", "AI_MAX_TOKENS", default="700")),
                json_mode_models=split_patterns(json_mode) if json_mode else [DEFAULT_MODEL],
            ),
            review=ReviewConfig(
                exclude_patterns=split_patterns(_input(env, "EXCLUDE", "EXCLUDE")),
                dry_run=_flag(_input(env, "DRY_RUN", "AI_REVIEW_DRY_RUN")),
            ),
            logging=LoggingConfig(
                level=_input(env, "LOG_LEVEL", "LOG_LEVEL", default="INFO"),
                format=_input(env, "LOG_FORMAT", "LOG_FORMAT", default=DEFAULT_LOG_FORMAT),
            ),
        )

    @classmethod
    def from_yaml(cls, config_path: str) -> "AppConfig":
        """YAML 파일에서 설정 로드"""
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        review_data = dict(config_data.get('review', {}))
        if isinstance(review_data.get('exclude_patterns'), str):
            review_data['exclude_patterns'] = split_patterns(review_data['exclude_patterns'])

        try:
            return cls(
                github=GitHubConfig(**config_data.get('github', {})),
                model=ModelConfig(**config_data.get('model', {})),
                review=ReviewConfig(**review_data),
                logging=LoggingConfig(**config_data.get('logging', {})),
            )
        except TypeError as e:
            raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e

    def merge_env(self, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """YAML 설정에 비어있는 비밀값을 환경 변수로 채움"""
        env_config = AppConfig.from_env(environ)
        if not self.github.token:
            self.github.token = env_config.github.token
        if not self.model.api_key:
            self.model.api_key = env_config.model.api_key
        return self

    def validate(self) -> None:
        """설정 유효성 검사"""
        errors = []

        # 인증 정보 필수 확인
        if not self.github.token:
            errors.append("GitHub token is required")
        if not self.model.api_key:
            errors.append("AI API key is required")

        if not self.model.model:
            errors.append("AI model name is required")

        if self.model.max_tokens <= 0:
            errors.append("max_tokens must be positive")

        if not 0.0 <= self.model.temperature <= 2.0:
            errors.append("Temperature must be between 0.0 and 2.0")

        if self.github.timeout_seconds <= 0:
            errors.append("GitHub timeout must be positive")

        # 로그 레벨 검증
        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.logging.level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.logging.level}")

        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """설정을 딕셔너리로 변환"""
        return {
            'github': {
                'api_base_url': self.github.api_base_url,
                'timeout_seconds': self.github.timeout_seconds,
                # 보안상 토큰은 제외
            },
            'model': {
                'model': self.model.model,
                'base_url': self.model.base_url,
                'temperature': self.model.temperature,
                'max_tokens': self.model.max_tokens,
                'top_p': self.model.top_p,
                'frequency_penalty': self.model.frequency_penalty,
                'presence_penalty': self.model.presence_penalty,
                'json_mode_models': list(self.model.json_mode_models),
            },
            'review': {
                'exclude_patterns': list(self.review.exclude_patterns),
                'dry_run': self.review.dry_run,
            },
            'logging': {
                'level': self.logging.level,
                'format': self.logging.format,
            },
        }


def setup_logging(config: LoggingConfig) -> None:
    """로깅 설정"""
    logging.basicConfig(
        level=getattr(logging, config.level.upper(), logging.INFO),
        format=config.format,
    )
