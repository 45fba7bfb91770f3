"""
Path Filter

Drops file diffs whose target path matches an exclusion glob.
"""

import re
import logging
from functools import lru_cache
from typing import Iterable, List, Sequence

from ..models.pr_diff import FileDiff


logger = logging.getLogger(__name__)

_NO_DOT = r'(?!\.)'
_SEGMENT = _NO_DOT + r'[^/]*'


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> "re.Pattern":
    """
    Compile a glob into a regular expression.

    ``*`` and ``?`` stay within one path segment, ``**`` spans segments and
    ``**/`` may match no directory at all, so ``**/*.md`` also matches
    ``README.md``. Character classes (``[abc]``, ``[!abc]``) are supported.
    Wildcards never match a segment that starts with ``.``; dotfiles are
    only matched by patterns that spell out the dot.
    """
    i, n = 0, len(pattern)
    parts = []
    while i < n:
        c = pattern[i]
        segment_start = i == 0 or pattern[i - 1] == '/'
        if c == '*':
            if pattern.startswith('**', i):
                i += 2
                if pattern.startswith('/', i):
                    i += 1
                    parts.append(f'(?:{_SEGMENT}/)*')
                else:
                    parts.append(f'(?:{_SEGMENT}(?:/{_SEGMENT})*)?')
                continue
            parts.append(_NO_DOT + '[^/]*' if segment_start else '[^/]*')
        elif c == '?':
            parts.append(_NO_DOT + '[^/]' if segment_start else '[^/]')
        elif c == '[':
            end = pattern.find(']', i + 1)
            if end <= i + 1:
                parts.append(re.escape(c))
            else:
                body = pattern[i + 1:end]
                if body.startswith('!'):
                    body = '^' + body[1:]
                body = body.replace('\\', '\\\\')
                parts.append(f'{_NO_DOT if segment_start else ""}[{body}]')
                i = end
        else:
            parts.append(re.escape(c))
        i += 1
    return re.compile(''.join(parts) + r'\Z')


def matches_any(path: str, patterns: Iterable[str]) -> bool:
    """Check whether a path matches any of the glob patterns."""
    return any(compile_glob(pattern).match(path) for pattern in patterns if pattern)


def filter_files(files: Sequence[FileDiff], exclude_patterns: Sequence[str]) -> List[FileDiff]:
    """
    Remove excluded files, keeping the order of the rest.

    Args:
        files: Parsed file diffs
        exclude_patterns: Glob patterns matched against each file's target path

    Returns:
        File diffs whose path matches none of the patterns
    """
    patterns = [p for p in exclude_patterns if p]
    if not patterns:
        return list(files)

    kept = []
    for file_diff in files:
        if matches_any(file_diff.path, patterns):
            logger.debug(f"Excluding {file_diff.path}")
            continue
        kept.append(file_diff)

    logger.info(f"Filtered to {len(kept)} of {len(files)} files")
    return kept
