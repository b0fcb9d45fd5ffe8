"""
cli — Argparse entry point and command dispatch.
"""

import argparse
import asyncio
import sys
import textwrap

from . import __version__, gh
from .browse import list_issues, view_issue, comment_issue, parse_issue_number
from .config import DEFAULT_REPO, LIST_LIMIT
from .ui import DIM, RESET, EXIT_CANCELLED, error
from .wizard import create, build_generator

STATES = ("open", "closed", "all")


def _issue_number(raw):
    number = parse_issue_number(raw)
    if number is None:
        raise argparse.ArgumentTypeError(f"invalid issue number: {raw!r}")
    return number


# ═════════════════════════════════════════════════════════════════════════════
# HANDLERS
# ═════════════════════════════════════════════════════════════════════════════

def cmd_create(args):
    generator = build_generator() if args.ai else None
    try:
        return asyncio.run(create(args.title, args.body, ai=args.ai,
                                  assignee=args.assignee, generator=generator))
    except KeyboardInterrupt:
        print(f"\n  {DIM}Cancelled.{RESET}")
        return EXIT_CANCELLED
    except Exception as exc:
        error(f"Error: {exc}")
        return 1


def cmd_list(args):
    return list_issues(args.state, LIST_LIMIT, plain=args.plain)


def cmd_view(args):
    return view_issue(args.number)


def cmd_comment(args):
    return comment_issue(args.number)


# ═════════════════════════════════════════════════════════════════════════════
# MAIN
# ═════════════════════════════════════════════════════════════════════════════

def build_parser():
    parser = argparse.ArgumentParser(
        prog="ghi",
        description="Quick GitHub issue management",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            Requires the GitHub CLI (gh), authenticated with `gh auth login`.

            Examples:
              ghi create "Fix login redirect" --ai
              ghi list closed
              ghi view 42
              ghi comment 42
        """),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-R", "--repo", default=DEFAULT_REPO, metavar="OWNER/REPO",
                        help="Repository to operate on (default: the current one)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Print each gh command before running it")
    sub = parser.add_subparsers(dest="command")

    p_create = sub.add_parser("create", help="Create a new issue")
    p_create.add_argument("title", nargs="?", help="Issue title")
    p_create.add_argument("body", nargs="?", help="Issue body")
    p_create.add_argument("--ai", action="store_true", help="Generate issue body using AI")
    p_create.add_argument("-a", "--assignee", help="Assign to this user without prompting")
    p_create.set_defaults(handler=cmd_create)

    p_list = sub.add_parser("list", help="List repository issues")
    p_list.add_argument("state_arg", nargs="?", choices=STATES, metavar="state",
                        help="Issue state (open/closed/all)")
    p_list.add_argument("-s", "--state", choices=STATES, help="Issue state (open/closed/all)")
    p_list.add_argument("--plain", action="store_true",
                        help="Print gh's own listing instead of the table")
    p_list.set_defaults(handler=cmd_list)

    p_view = sub.add_parser("view", help="View issue details")
    p_view.add_argument("number", type=_issue_number, help="Issue number")
    p_view.set_defaults(handler=cmd_view)

    p_comment = sub.add_parser("comment", help="Comment on an issue")
    p_comment.add_argument("number", type=_issue_number, help="Issue number")
    p_comment.set_defaults(handler=cmd_comment)

    return parser


def run(argv=None):
    """Parse `argv`, check for gh, and dispatch. Returns the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "list":
        if args.state and args.state_arg and args.state != args.state_arg:
            parser.error(f"conflicting states: {args.state_arg!r} and --state {args.state!r}")
        args.state = args.state or args.state_arg or "open"

    gh.configure(repo=args.repo, verbose=args.verbose)
    gh.check_installed()
    return args.handler(args)


def main(argv=None):
    sys.exit(run(argv))
