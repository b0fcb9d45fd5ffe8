"""Tests for list, view and comment."""

import json
from unittest.mock import patch

import pytest

from conftest import completed
from ghi import browse
from ghi.ui import QUIT

ISSUES = [
    {"number": 12, "title": "Login redirect loops", "state": "OPEN",
     "createdAt": "2024-03-05T10:00:00Z"},
    {"number": 3, "title": "x" * 90, "state": "CLOSED",
     "createdAt": "2023-12-31T23:59:59Z"},
]


class TestFormatting:
    """Row formatting for the issue table."""

    def test_date_is_truncated_to_day(self):
        assert browse.format_date("2024-03-05T10:00:00Z") == "2024-03-05"

    @pytest.mark.parametrize("timestamp,expected", [
        ("2024-03-05T23:00:00-05:00", "2024-03-06"),
        ("2024-03-06T01:30:00+02:00", "2024-03-05"),
        ("2024-03-05T10:00:00", "2024-03-05"),
        ("not-a-dateTjunk", "not-a-date"),
    ])
    def test_date_is_normalised_to_utc(self, timestamp, expected):
        assert browse.format_date(timestamp) == expected

    def test_missing_date(self):
        assert browse.format_date(None) == ""

    def test_row_layout(self):
        row = browse.format_issue_row(ISSUES[0])
        assert row == "2024-03-05  #12   OPEN    Login redirect loops"

    def test_long_title_is_truncated(self):
        row = browse.format_issue_row(ISSUES[1])
        assert row.endswith("x" * 67 + "...")
        assert "CLOSED  " in row

    def test_title_of_exactly_70_chars_is_kept(self):
        issue = dict(ISSUES[0], title="y" * 70)
        assert browse.format_issue_row(issue).endswith("y" * 70)

    @pytest.mark.parametrize("raw,expected", [
        ("42", 42), ("#42", 42), (" #7 ", 7), ("abc", None), ("0", None), ("-3", None),
    ])
    def test_parse_issue_number(self, raw, expected):
        assert browse.parse_issue_number(raw) == expected


class TestList:
    """list command output."""

    def test_prints_table(self, fake_gh, capsys):
        fake_gh.responses[("issue", "list")] = completed(stdout=json.dumps(ISSUES))
        assert browse.list_issues() == 0
        out = capsys.readouterr().out
        lines = out.splitlines()
        assert "DATE       ID    STATE   TITLE" in lines
        assert "─" * 80 in lines
        assert "2024-03-05  #12   OPEN    Login redirect loops" in lines
        assert fake_gh.calls[0][3:7] == ["--state", "open", "--limit", "30"]

    def test_empty_list(self, fake_gh, capsys):
        fake_gh.responses[("issue", "list")] = completed(stdout="[]")
        assert browse.list_issues("closed") == 0
        assert "No issues found." in capsys.readouterr().out

    def test_plain_output(self, fake_gh, capsys):
        fake_gh.responses[("issue", "list")] = completed(stdout="12\tOPEN\tLogin\n")
        assert browse.list_issues("all", 30, plain=True) == 0
        assert capsys.readouterr().out == "12\tOPEN\tLogin\n"
        assert "--json" not in fake_gh.calls[0]

    def test_failure(self, fake_gh, capsys):
        fake_gh.responses[("issue", "list")] = completed(returncode=1, stderr="not a repo")
        assert browse.list_issues() == 1
        assert "Failed to list issues: not a repo" in capsys.readouterr().err

    def test_unexpected_json_shape(self, fake_gh, capsys):
        fake_gh.responses[("issue", "list")] = completed(stdout='[{"number": 1}]')
        assert browse.list_issues() == 1
        assert "Failed to list issues" in capsys.readouterr().err


class TestView:
    """view command output."""

    URL = "https://github.com/acme/widgets/issues/42"

    def test_ends_with_url(self, fake_gh, capsys):
        fake_gh.responses[("issue", "view")] = completed(
            stdout="Crash on start #42\nOpen • alice opened about 1 day ago\n\nbody\n")
        fake_gh.responses[("issue", "view", "42", "--json")] = completed(
            stdout=json.dumps({"url": self.URL}))
        assert browse.view_issue(42) == 0
        out = capsys.readouterr().out
        assert "42" in out
        assert out.rstrip("\n").splitlines()[-1] == self.URL
        assert "\n--\n" + self.URL in out

    def test_failure(self, fake_gh, capsys):
        fake_gh.responses[("issue", "view")] = completed(returncode=1, stderr="not found")
        assert browse.view_issue(42) == 1
        captured = capsys.readouterr()
        assert "Failed to view issue: not found" in captured.err
        assert captured.out == ""


class TestComment:
    """comment command flow."""

    def test_posts_editor_text(self, capsys):
        with patch("ghi.browse.editor", return_value="Looks good") as ed, \
             patch("ghi.gh.subprocess.run", return_value=completed()) as run:
            assert browse.comment_issue(5) == 0
        ed.assert_called_once()
        run.assert_called_once_with(["gh", "issue", "comment", "5", "--body", "Looks good"])
        assert "Comment added successfully!" in capsys.readouterr().out

    def test_uninstalled_editor_still_posts(self, monkeypatch):
        monkeypatch.setenv("VISUAL", "no-such-editor-xyz")
        calls = []

        def run(cmd, *args, **kwargs):
            calls.append(cmd)
            if cmd[0] == "no-such-editor-xyz":
                raise FileNotFoundError(2, "No such file or directory")
            return completed(cmd)

        with patch("subprocess.run", side_effect=run), \
             patch("builtins.input", side_effect=["typed instead", ""]):
            assert browse.comment_issue(7) == 0
        assert calls[-1] == ["gh", "issue", "comment", "7", "--body", "typed instead"]

    def test_cancelled(self):
        with patch("ghi.browse.editor", return_value=QUIT), \
             patch("ghi.gh.subprocess.run") as run:
            assert browse.comment_issue(5) == 130
        run.assert_not_called()

    def test_failure(self, capsys):
        with patch("ghi.browse.editor", return_value="hi"), \
             patch("ghi.gh.subprocess.run", return_value=completed(returncode=1)):
            assert browse.comment_issue(5) == 1
        assert "Failed to add comment" in capsys.readouterr().err
