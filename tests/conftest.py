"""Pytest configuration and shared fixtures."""

import subprocess
from unittest.mock import patch

import pytest

from ghi import gh


def completed(argv=None, returncode=0, stdout="", stderr=""):
    """Build a CompletedProcess like subprocess.run returns."""
    return subprocess.CompletedProcess(argv or [], returncode, stdout=stdout, stderr=stderr)


@pytest.fixture(autouse=True)
def reset_gh_settings():
    """Each test starts with no --repo and no --verbose."""
    gh.configure(repo=None, verbose=False)
    yield
    gh.configure(repo=None, verbose=False)


@pytest.fixture
def no_editor(monkeypatch):
    monkeypatch.delenv("VISUAL", raising=False)
    monkeypatch.delenv("EDITOR", raising=False)


class FakeGh:
    """Stand-in for subprocess.run that answers gh invocations by subcommand.

    `responses` maps a tuple prefix of the gh arguments (without "gh") to a
    CompletedProcess; unmatched calls succeed with empty output.
    """

    def __init__(self, responses=None):
        self.responses = responses or {}
        self.calls = []

    def __call__(self, cmd, *args, **kwargs):
        self.calls.append(list(cmd))
        gh_args = tuple(cmd[1:])
        best = None
        for prefix, result in self.responses.items():
            if gh_args[:len(prefix)] == prefix:
                if best is None or len(prefix) > len(best[0]):
                    best = (prefix, result)
        if best is not None:
            return best[1]
        return completed(cmd)

    def commands(self, *prefix):
        """Calls whose gh arguments start with `prefix`."""
        return [c for c in self.calls if tuple(c[1:1 + len(prefix)]) == prefix]


@pytest.fixture
def fake_gh():
    fake = FakeGh()
    with patch("ghi.gh.subprocess.run", side_effect=fake):
        yield fake
