"""
PR Diff Data Models

Pull Request metadata and parsed unified-diff records
"""

from dataclasses import dataclass, field
from typing import List, Optional


ADDED = 'add'
REMOVED = 'del'
CONTEXT = 'normal'

DEV_NULL = '/dev/null'


@dataclass(frozen=True)
class PRDetails:
    """Pull Request 기본 정보"""
    owner: str
    repo: str
    pull_number: int
    title: str
    description: str

    def __post_init__(self):
        """데이터 검증"""
        if self.pull_number <= 0:
            raise ValueError("Pull number must be positive")
        if not self.owner or not self.repo:
            raise ValueError("Owner and repo are required")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass
class LineChange:
    """Hunk 안의 한 줄 변경사항"""
    type: str  # 'add', 'del', 'normal'
    content: str
    old_line: Optional[int] = None
    new_line: Optional[int] = None

    def __post_init__(self):
        """데이터 검증"""
        valid_types = {ADDED, REMOVED, CONTEXT}
        if self.type not in valid_types:
            raise ValueError(f"Invalid line change type: {self.type}")

    @property
    def line_number(self) -> Optional[int]:
        """Line number shown to the model: new-file side unless the line was removed."""
        if self.type == REMOVED:
            return self.old_line
        return self.new_line


@dataclass
class Hunk:
    """Diff의 개별 hunk (@@ 헤더와 변경 라인들)"""
    header: str
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    changes: List[LineChange] = field(default_factory=list)

    def __post_init__(self):
        """데이터 검증"""
        if self.old_start < 0 or self.new_start < 0:
            raise ValueError("Line numbers must be non-negative")
        if self.old_lines < 0 or self.new_lines < 0:
            raise ValueError("Line counts must be non-negative")


@dataclass
class FileDiff:
    """파일 하나의 변경사항"""
    from_path: Optional[str] = None
    to_path: Optional[str] = None
    chunks: List[Hunk] = field(default_factory=list)
    additions: int = 0
    deletions: int = 0
    binary: bool = False

    @property
    def path(self) -> str:
        """Target path of the change; ``/dev/null`` for deleted files."""
        return self.to_path or ''

    def changed_lines(self) -> List[LineChange]:
        """추가/삭제된 라인들만 반환"""
        return [
            change
            for chunk in self.chunks
            for change in chunk.changes
            if change.type != CONTEXT
        ]
