"""
Unified Diff Parser

Parses unified diff text returned by GitHub into structured file,
hunk, and line change records.
"""

import re
import logging
from typing import List, Optional

from ..models.pr_diff import FileDiff, Hunk, LineChange, ADDED, REMOVED, CONTEXT, DEV_NULL


logger = logging.getLogger(__name__)


class DiffParser:
    """
    Parser for unified diff text.

    Handles ``git diff`` output with extended headers as well as plain
    unified diffs. Fragments that cannot be attributed to a file or a
    hunk are skipped.
    """

    def __init__(self):
        """Initialize diff parser."""
        self.hunk_header_pattern = re.compile(r'^@@\s*-(\d+)(?:,(\d+))?\s*\+(\d+)(?:,(\d+))?\s*@@(.*)$')
        self.git_header_pattern = re.compile(r'^diff --git "?a/(.+?)"? "?b/(.+?)"?$')
        self.binary_file_pattern = re.compile(r'^Binary files? .* differ')

    def parse(self, diff_text: Optional[str]) -> List[FileDiff]:
        """
        Parse unified diff text into file diffs.

        Args:
            diff_text: Raw unified diff

        Returns:
            FileDiff records in the order they appear in the diff
        """
        if not diff_text:
            return []

        files: List[FileDiff] = []
        current: Optional[FileDiff] = None
        from_header_seen = False
        hunk: Optional[Hunk] = None
        old_line = new_line = 0
        old_remaining = new_remaining = 0

        lines = diff_text.split('\n')
        if lines[-1] == '':
            lines.pop()

        for line in lines:
            if line.endswith('\r'):
                line = line[:-1]
            if hunk is not None and (old_remaining > 0 or new_remaining > 0):
                if line.startswith('\\'):
                    continue
                if line.startswith('+'):
                    hunk.changes.append(LineChange(type=ADDED, content=line, new_line=new_line))
                    current.additions += 1
                    new_line += 1
                    new_remaining -= 1
                    continue
                if line.startswith('-'):
                    hunk.changes.append(LineChange(type=REMOVED, content=line, old_line=old_line))
                    current.deletions += 1
                    old_line += 1
                    old_remaining -= 1
                    continue
                if line.startswith(' ') or line == '':
                    hunk.changes.append(
                        LineChange(type=CONTEXT, content=line or ' ', old_line=old_line, new_line=new_line)
                    )
                    old_line += 1
                    new_line += 1
                    old_remaining -= 1
                    new_remaining -= 1
                    continue
                # Hunk ended early; treat the line as a header.
                logger.debug(f"Truncated hunk in {current.path}: {hunk.header}")
                hunk = None

            if line.startswith('\\'):
                continue

            if line.startswith('diff --git '):
                current = self._start_file(files)
                from_header_seen = False
                hunk = None
                match = self.git_header_pattern.match(line)
                if match:
                    current.from_path = match.group(1)
                    current.to_path = match.group(2)
                continue

            if line.startswith('--- '):
                if current is None or current.chunks or from_header_seen:
                    current = self._start_file(files)
                current.from_path = self._strip_path(line[4:])
                from_header_seen = True
                hunk = None
                continue

            if line.startswith('+++ '):
                if current is None:
                    current = self._start_file(files)
                current.to_path = self._strip_path(line[4:])
                hunk = None
                continue

            if current is None:
                continue

            if line.startswith('new file mode'):
                current.from_path = DEV_NULL
            elif line.startswith('deleted file mode'):
                current.to_path = DEV_NULL
            elif line.startswith('rename from '):
                current.from_path = line[len('rename from '):]
            elif line.startswith('rename to '):
                current.to_path = line[len('rename to '):]
            elif self.binary_file_pattern.match(line) or line.startswith('GIT binary patch'):
                current.binary = True
            else:
                header_match = self.hunk_header_pattern.match(line)
                if header_match:
                    hunk = self._start_hunk(line, header_match)
                    current.chunks.append(hunk)
                    old_line, new_line = hunk.old_start, hunk.new_start
                    old_remaining, new_remaining = hunk.old_lines, hunk.new_lines

        parsed = [f for f in files if f.to_path or f.from_path]
        logger.info(f"Parsed diff: {len(parsed)} files, {sum(len(f.chunks) for f in parsed)} hunks")
        return parsed

    def _start_file(self, files: List[FileDiff]) -> FileDiff:
        file_diff = FileDiff()
        files.append(file_diff)
        return file_diff

    def _start_hunk(self, header: str, header_match) -> Hunk:
        """Build an empty hunk from its ``@@`` header."""
        return Hunk(
            header=header,
            old_start=int(header_match.group(1)),
            old_lines=int(header_match.group(2) if header_match.group(2) is not None else 1),
            new_start=int(header_match.group(3)),
            new_lines=int(header_match.group(4) if header_match.group(4) is not None else 1),
        )

    def _strip_path(self, raw: str) -> str:
        """
        Normalize a ``---``/``+++`` path.

        Drops trailing timestamps, surrounding quotes and the ``a/``/``b/``
        prefixes git adds.
        """
        path = raw.split('\t', 1)[0].strip()
        if len(path) >= 2 and path[0] == '"' and path[-1] == '"':
            path = path[1:-1]
        if path == DEV_NULL:
            return path
        if path.startswith(('a/', 'b/')):
            return path[2:]
        return path
