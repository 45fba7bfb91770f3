"""
Unit tests for the unified diff parser.
"""

import pytest

from ai_review_action.github.parser import DiffParser
from ai_review_action.models.pr_diff import ADDED, REMOVED, CONTEXT, DEV_NULL


class TestDiffParser:
    """Unit tests for DiffParser class."""

    def setup_method(self):
        self.parser = DiffParser()

    def test_two_file_diff(self, two_file_diff):
        """Test a two-file diff yields both files with correct line numbers."""
        files = self.parser.parse(two_file_diff)

        assert [f.path for f in files] == ["src/app.py", "README.md"]

        app = files[0]
        assert app.from_path == "src/app.py"
        assert app.additions == 2
        assert app.deletions == 1
        assert len(app.chunks) == 1

        hunk = app.chunks[0]
        assert hunk.header == "@@ -1,4 +1,5 @@"
        assert (hunk.old_start, hunk.old_lines, hunk.new_start, hunk.new_lines) == (1, 4, 1, 5)
        assert [(c.type, c.line_number, c.content) for c in hunk.changes] == [
            (CONTEXT, 1, " import os"),
            (ADDED, 2, "+import sys"),
            (CONTEXT, 3, " "),
            (CONTEXT, 4, " def main():"),
            (REMOVED, 4, "-    pass"),
            (ADDED, 5, "+    return 0"),
        ]
        assert [(c.old_line, c.new_line) for c in hunk.changes if c.type == CONTEXT] == [
            (1, 1), (2, 3), (3, 4)
        ]

        readme = files[1]
        assert readme.from_path == DEV_NULL
        assert readme.chunks[0].old_lines == 0
        assert [(c.line_number, c.content) for c in readme.chunks[0].changes] == [
            (1, "+# Title"),
            (2, "+Body"),
        ]

    def test_empty_and_none_input(self):
        """Test empty input yields nothing to review."""
        assert self.parser.parse("") == []
        assert self.parser.parse(None) == []

    def test_garbage_is_omitted(self):
        """Test text that is not a diff is skipped."""
        assert self.parser.parse("hello\nworld\n@@ not a hunk @@\n") == []

    def test_hunk_without_file_header_is_omitted(self):
        """Test a hunk that cannot be attributed to a file is skipped."""
        assert self.parser.parse("@@ -1,1 +1,1 @@\n-a\n+b\n") == []

    def test_multiple_hunks_per_file(self):
        """Test hunks keep their order and header context."""
        diff = (
            "--- a/lib.py\n"
            "+++ b/lib.py\n"
            "@@ -1,2 +1,2 @@ import os\n"
            "-x = 1\n"
            "+x = 2\n"
            " y = 3\n"
            "@@ -10,1 +10,2 @@ def helper():\n"
            "     return x\n"
            "+    # done\n"
        )
        files = self.parser.parse(diff)

        assert len(files) == 1
        first, second = files[0].chunks
        assert first.header == "@@ -1,2 +1,2 @@ import os"
        assert second.header == "@@ -10,1 +10,2 @@ def helper():"
        assert [c.line_number for c in second.changes] == [10, 11]

    def test_plain_unified_diff_with_two_files(self):
        """Test plain diffs without git headers start a file at each --- line."""
        diff = (
            "--- a/one.txt\t2024-01-01 00:00:00\n"
            "+++ b/one.txt\t2024-01-02 00:00:00\n"
            "@@ -1 +1 @@\n"
            "-old\n"
            "+new\n"
            "--- a/two.txt\n"
            "+++ b/two.txt\n"
            "@@ -3 +3 @@\n"
            "-foo\n"
            "+bar\n"
        )
        files = self.parser.parse(diff)

        assert [f.path for f in files] == ["one.txt", "two.txt"]
        assert files[1].chunks[0].changes[0].line_number == 3

    def test_removed_line_that_looks_like_header(self):
        """Test content lines starting with --- stay inside the hunk."""
        diff = (
            "diff --git a/schema.sql b/schema.sql\n"
            "--- a/schema.sql\n"
            "+++ b/schema.sql\n"
            "@@ -1,2 +1,2 @@\n"
            "--- old comment\n"
            "+++ new comment\n"
            " SELECT 1;\n"
        )
        files = self.parser.parse(diff)

        assert len(files) == 1
        changes = files[0].chunks[0].changes
        assert [(c.type, c.content) for c in changes] == [
            (REMOVED, "--- old comment"),
            (ADDED, "+++ new comment"),
            (CONTEXT, " SELECT 1;"),
        ]

    def test_blank_context_line_without_space(self):
        """Test stripped blank context lines are still counted."""
        diff = (
            "--- a/f.py\n"
            "+++ b/f.py\n"
            "@@ -1,3 +1,3 @@\n"
            " a\n"
            "\n"
            "-b\n"
            "+c\n"
        )
        changes = self.parser.parse(diff)[0].chunks[0].changes

        assert [c.type for c in changes] == [CONTEXT, CONTEXT, REMOVED, ADDED]
        assert changes[3].line_number == 3

    def test_no_newline_marker_is_ignored(self):
        diff = (
            "--- a/f.txt\n"
            "+++ b/f.txt\n"
            "@@ -1 +1 @@\n"
            "-a\n"
            "\\ No newline at end of file\n"
            "+b\n"
            "\\ No newline at end of file\n"
        )
        changes = self.parser.parse(diff)[0].chunks[0].changes

        assert [c.content for c in changes] == ["-a", "+b"]

    def test_unicode_line_separators_stay_in_line(self):
        """Test only newlines end a diff line; other separators are content."""
        diff = (
            "--- a/app.js\n"
            "+++ b/app.js\n"
            "@@ -1,1 +1,4 @@\n"
            " a = 1\n"
            "+const s = 'x\u2028y';\n"
            "+page\x0cbreak\x85end\n"
            "+  return 2 }\n"
        )
        changes = self.parser.parse(diff)[0].chunks[0].changes

        assert [(c.line_number, c.content) for c in changes] == [
            (1, " a = 1"),
            (2, "+const s = 'x\u2028y';"),
            (3, "+page\x0cbreak\x85end"),
            (4, "+  return 2 }"),
        ]

    def test_crlf_line_endings(self):
        diff = "--- a/a.py\r\n+++ b/a.py\r\n@@ -1 +1 @@\r\n-x\r\n+y\r\n"
        file_diff = self.parser.parse(diff)[0]

        assert file_diff.path == "a.py"
        assert [c.content for c in file_diff.chunks[0].changes] == ["-x", "+y"]

    def test_deleted_file_targets_dev_null(self):
        diff = (
            "diff --git a/old.py b/old.py\n"
            "deleted file mode 100644\n"
            "--- a/old.py\n"
            "+++ /dev/null\n"
            "@@ -1,2 +0,0 @@\n"
            "-a\n"
            "-b\n"
        )
        file_diff = self.parser.parse(diff)[0]

        assert file_diff.path == DEV_NULL
        assert file_diff.from_path == "old.py"
        assert file_diff.deletions == 2

    def test_pure_rename(self):
        diff = (
            "diff --git a/old_name.py b/new_name.py\n"
            "similarity index 100%\n"
            "rename from old_name.py\n"
            "rename to new_name.py\n"
        )
        files = self.parser.parse(diff)

        assert len(files) == 1
        assert files[0].from_path == "old_name.py"
        assert files[0].path == "new_name.py"
        assert files[0].chunks == []

    def test_binary_file(self):
        diff = (
            "diff --git a/logo.png b/logo.png\n"
            "index 1111111..2222222 100644\n"
            "Binary files a/logo.png and b/logo.png differ\n"
        )
        files = self.parser.parse(diff)

        assert files[0].binary is True
        assert files[0].path == "logo.png"
        assert files[0].chunks == []

    def test_truncated_hunk_does_not_swallow_next_file(self):
        """Test a hunk shorter than its header claims ends at the next file."""
        diff = (
            "diff --git a/a.py b/a.py\n"
            "--- a/a.py\n"
            "+++ b/a.py\n"
            "@@ -1,5 +1,5 @@\n"
            "-x\n"
            "+y\n"
            "diff --git a/b.py b/b.py\n"
            "--- a/b.py\n"
            "+++ b/b.py\n"
            "@@ -1 +1 @@\n"
            "-p\n"
            "+q\n"
        )
        files = self.parser.parse(diff)

        assert [f.path for f in files] == ["a.py", "b.py"]
        assert len(files[0].chunks[0].changes) == 2

    @pytest.mark.parametrize("raw, expected", [
        ("a/src/x.py", "src/x.py"),
        ("b/src/x.py", "src/x.py"),
        ("/dev/null", DEV_NULL),
        ('"b/with space.py"', "with space.py"),
        ("plain.txt\t2024-01-01", "plain.txt"),
    ])
    def test_strip_path(self, raw, expected):
        assert self.parser._strip_path(raw) == expected
