"""
Review Data Models

리뷰 코멘트와 모델 응답 관련 데이터 모델들
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, field_validator


@dataclass
class ReviewComment:
    """GitHub PR 리뷰 코멘트 형식"""
    path: str
    line: Union[int, str]
    body: str

    def to_dict(self) -> Dict[str, Any]:
        """GitHub API 요청용 딕셔너리로 변환"""
        return asdict(self)


@dataclass
class ActionResult:
    """한 번의 액션 실행 결과"""
    action: str
    comments: List[ReviewComment] = field(default_factory=list)
    summary: Optional[str] = None
    posted: bool = False


# Pydantic models for validating the model's JSON reply
class ModelSuggestion(BaseModel):
    """모델이 제안한 개별 리뷰 항목"""
    model_config = ConfigDict(extra='ignore')

    path: Optional[str] = None
    lineNumber: Any = None
    reviewComment: str = ''

    @field_validator('path', mode='before')
    @classmethod
    def validate_path(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator('reviewComment', mode='before')
    @classmethod
    def validate_comment(cls, v):
        if v is None:
            return ''
        return str(v)


class ReviewSuggestions(BaseModel):
    """리뷰/네이밍 액션의 모델 응답"""
    model_config = ConfigDict(extra='ignore')

    reviews: List[ModelSuggestion] = []

    @field_validator('reviews', mode='before')
    @classmethod
    def validate_reviews(cls, v):
        if v is None:
            return []
        if isinstance(v, list):
            return [item for item in v if isinstance(item, dict)]
        return v


class PullRequestSummary(BaseModel):
    """요약 액션의 모델 응답"""
    model_config = ConfigDict(extra='ignore')

    summary: Optional[str] = None

    @field_validator('summary', mode='before')
    @classmethod
    def validate_summary(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None
