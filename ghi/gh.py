"""
gh — GitHub CLI wrappers and data fetchers.

Every call builds an argument array; nothing is passed through a shell.
"""

import json
import shlex
import subprocess
import sys

from .config import INSTALL_URL
from .ui import DIM, RESET, error, hint


class GhError(Exception):
    """A gh invocation failed or produced output we could not parse."""

    def __init__(self, message, returncode=None):
        super().__init__(message)
        self.returncode = returncode


# Set from the command line; see cli.main.
REPO = None
VERBOSE = False


def configure(repo=None, verbose=False):
    global REPO, VERBOSE
    REPO = repo
    VERBOSE = verbose


def format_command(argv):
    """Render an argument array as a line a POSIX shell parses back to it."""
    return shlex.join(argv)


def _argv(args):
    cmd = ["gh"] + [str(a) for a in args]
    if VERBOSE:
        print(f"{DIM}$ {format_command(cmd)}{RESET}", file=sys.stderr)
    return cmd


def _with_repo(args):
    if REPO:
        return list(args) + ["--repo", REPO]
    return list(args)


# ── Low-level gh CLI ─────────────────────────────────────────────────────

def gh(*args, json_output=False):
    cmd = _argv(args)
    try:
        r = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError as exc:
        raise GhError(f"{cmd[0]} not found") from exc
    if r.returncode != 0:
        raise GhError(r.stderr.strip() or f"gh exited with status {r.returncode}",
                      returncode=r.returncode)
    if json_output:
        try:
            return json.loads(r.stdout)
        except json.JSONDecodeError as exc:
            raise GhError(f"could not parse gh output: {exc}") from exc
    return r.stdout.strip()


def gh_interactive(*args):
    """Run gh attached to the terminal (stdin/stdout/stderr inherited)."""
    cmd = _argv(args)
    try:
        r = subprocess.run(cmd)
    except FileNotFoundError as exc:
        raise GhError(f"{cmd[0]} not found") from exc
    if r.returncode != 0:
        raise GhError(f"gh exited with status {r.returncode}", returncode=r.returncode)


# ── Dependency check ─────────────────────────────────────────────────────

def check_installed():
    """Exit with status 1 unless `gh --version` succeeds."""
    try:
        r = subprocess.run(["gh", "--version"],
                           stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
        ok = r.returncode == 0
    except OSError:
        ok = False
    if not ok:
        error("GitHub CLI (gh) is not installed. Please install it first:")
        hint(INSTALL_URL)
        sys.exit(1)


# ── Collaborators ────────────────────────────────────────────────────────

def fetch_collaborators():
    """Login names of the repo's collaborators, or [] when they can't be fetched."""
    if REPO:
        endpoint = f"repos/{REPO}/collaborators"
    else:
        endpoint = "repos/{owner}/{repo}/collaborators"
    try:
        out = gh("api", endpoint, "--jq", ".[].login")
    except GhError as exc:
        error(f"Failed to fetch collaborators: {exc}")
        return []
    return [line.strip() for line in out.splitlines() if line.strip()]


# ── Issue queries ─────────────────────────────────────────────────────────

def fetch_issues(state="open", limit=30):
    """List issues as dicts with number, title, state and createdAt."""
    issues = gh(*_with_repo([
        "issue", "list",
        "--state", state,
        "--limit", str(limit),
        "--json", "number,title,state,createdAt",
    ]), json_output=True)
    if not isinstance(issues, list):
        raise GhError("unexpected gh output: expected a JSON array")
    return issues


def list_issues_text(state="open", limit=30):
    return gh(*_with_repo(["issue", "list", "--state", state, "--limit", str(limit)]))


def issue_view_text(number):
    return gh(*_with_repo(["issue", "view", str(number)]))


def fetch_issue_url(number):
    data = gh(*_with_repo(["issue", "view", str(number), "--json", "url"]),
              json_output=True)
    try:
        return data["url"]
    except (TypeError, KeyError) as exc:
        raise GhError("unexpected gh output: no url field") from exc


# ── Issue mutations ──────────────────────────────────────────────────────

def create_issue(title, body, assignee=None):
    """Create an issue and return its URL."""
    cmd = ["issue", "create", "--title", title, "--body", body]
    if assignee:
        cmd.extend(["--assignee", assignee])
    return gh(*_with_repo(cmd))


def add_issue_comment(number, comment_body):
    """Add a comment to an issue; gh's own output goes to the terminal."""
    gh_interactive(*_with_repo(["issue", "comment", str(number), "--body", comment_body]))
