"""
browse — List, view, and comment on existing GitHub issues.
"""

import datetime

from .gh import (
    GhError,
    fetch_issues, list_issues_text, issue_view_text, fetch_issue_url,
    add_issue_comment,
)
from .ui import DIM, GREEN, RESET, QUIT, EXIT_CANCELLED, error, editor

TITLE_WIDTH = 70


def format_date(timestamp):
    """UTC date of an ISO-8601 timestamp: '2024-03-05T10:00:00Z' -> '2024-03-05'.

    Offsets are normalised to UTC first; anything unparsable is cut at 'T'.
    """
    if not timestamp:
        return ""
    try:
        moment = datetime.datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return timestamp.split("T")[0]
    if moment.tzinfo is not None:
        moment = moment.astimezone(datetime.timezone.utc)
    return moment.date().isoformat()


def parse_issue_number(raw):
    """Extract an issue number from input like '42' or '#42'."""
    if raw is None:
        return None
    raw = str(raw).strip().lstrip("#")
    try:
        number = int(raw)
    except ValueError:
        return None
    return number if number > 0 else None


# ═════════════════════════════════════════════════════════════════════════════
# LIST
# ═════════════════════════════════════════════════════════════════════════════

def format_issue_row(issue):
    title = issue["title"]
    if len(title) > TITLE_WIDTH:
        title = title[:TITLE_WIDTH - 3] + "..."
    number = f"#{issue['number']}"
    return (f"{format_date(issue.get('createdAt'))}  "
            f"{number:<6}"
            f"{issue['state'].upper():<8}"
            f"{title}")


def _print_issue_table(issues):
    print()
    print("DATE       ID    STATE   TITLE")
    print("─" * 80)
    for issue in issues:
        print(format_issue_row(issue))
    print()


def list_issues(state="open", limit=30, *, plain=False):
    """Print up to `limit` issues in `state`. Returns an exit status."""
    try:
        if plain:
            print(list_issues_text(state, limit))
            return 0
        issues = fetch_issues(state, limit)
        if not issues:
            print(f"\n  {DIM}No issues found.{RESET}\n")
            return 0
        _print_issue_table(issues)
    except (GhError, KeyError, TypeError) as exc:
        error(f"Failed to list issues: {exc}")
        return 1
    return 0


# ═════════════════════════════════════════════════════════════════════════════
# VIEW
# ═════════════════════════════════════════════════════════════════════════════

def view_issue(number):
    """Print the issue as gh renders it, followed by its web URL."""
    try:
        url = fetch_issue_url(number)
        detail = issue_view_text(number)
    except GhError as exc:
        error(f"Failed to view issue: {exc}")
        return 1
    print(detail)
    print(f"\n--\n{url}\n")
    return 0


# ═════════════════════════════════════════════════════════════════════════════
# COMMENT
# ═════════════════════════════════════════════════════════════════════════════

def comment_issue(number):
    """Prompt for a comment in the editor and post it."""
    body = editor(f"Comment on #{number}:")
    if body == QUIT:
        print(f"\n  {DIM}Cancelled.{RESET}")
        return EXIT_CANCELLED
    try:
        add_issue_comment(number, body or "")
    except GhError as exc:
        error(f"Failed to add comment: {exc}")
        return 1
    print(f"  {GREEN}✅ Comment added successfully!{RESET}")
    return 0
