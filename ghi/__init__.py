"""
ghi — Quick GitHub issue management from the terminal.

Usage:
    ghi create [title] [body] [--ai]   # create an issue, prompting for the rest
    ghi list [open|closed|all]         # list up to 30 issues
    ghi view <number>                  # show an issue and its URL
    ghi comment <number>               # comment on an issue

Requires: gh CLI authenticated (gh auth login).
"""

__version__ = "1.0.0"

from .cli import main  # noqa: E402
