"""
wizard — Issue creation: collect the draft, then hand it to gh.

    title → body (AI draft or editor) → assignee → gh issue create
"""

from dataclasses import dataclass

from .ai import GeneratorUnavailable, TextGenerator
from .gh import GhError, create_issue, fetch_collaborators
from .ui import (
    BOLD, DIM, GREEN, YELLOW, RESET,
    QUIT, EXIT_CANCELLED,
    error, choose, editor, required,
)

NO_ASSIGNEE = "none"


class Cancelled(Exception):
    """The user backed out of a prompt."""


@dataclass
class IssueDraft:
    title: str = ""
    body: str = ""
    assignee: str = NO_ASSIGNEE


def _answer(value):
    if value == QUIT:
        raise Cancelled()
    return value


# ── Create steps ─────────────────────────────────────────────────────────

def step_title(draft):
    draft.title = _answer(required("Issue title"))


def step_body(draft):
    draft.body = _answer(editor("Issue description:")) or ""


async def step_generate_body(draft, generator):
    """Draft the body with the text generator, then let the user edit it."""
    generated = None
    if generator is not None:
        print(f"  {DIM}Generating issue description...{RESET}")
        try:
            generated = await generator.generate_body(draft.title)
        except Exception as exc:
            error(f"Failed to generate issue body: {exc}")
    if not isinstance(generated, str) or not generated.strip():
        generated = None
        print(f"  {YELLOW}⚠ Failed to generate issue description. "
              f"Falling back to manual input.{RESET}")
    draft.body = _answer(editor("Issue description (generated content):",
                                default=generated or "")) or ""


def step_assignee(draft, collaborators):
    if not collaborators:
        print(f"  {DIM}No collaborators found; leaving the issue unassigned.{RESET}")
        draft.assignee = NO_ASSIGNEE
        return
    draft.assignee = _answer(choose("Assign to:", [NO_ASSIGNEE] + list(collaborators),
                                    default=NO_ASSIGNEE))


def build_generator():
    """Construct the text generator, or None when the SDK is unavailable."""
    try:
        return TextGenerator()
    except GeneratorUnavailable as exc:
        error(str(exc))
        return None


# ═════════════════════════════════════════════════════════════════════════════
# CREATE
# ═════════════════════════════════════════════════════════════════════════════

async def create(title=None, body=None, *, ai=False, assignee=None, generator=None):
    """Create one issue, prompting for whatever wasn't given. Returns an exit status."""
    draft = IssueDraft(title=title or "", body=body or "",
                       assignee=assignee or NO_ASSIGNEE)
    collaborators = fetch_collaborators()
    scripted = bool(title) and bool(body) and not ai

    try:
        if not draft.title:
            step_title(draft)
        if ai:
            await step_generate_body(draft, generator)
        elif body is None:
            step_body(draft)
        if assignee is None and not scripted:
            step_assignee(draft, collaborators)
    except Cancelled:
        print(f"\n  {DIM}Cancelled.{RESET}")
        return EXIT_CANCELLED

    return execute_create(draft)


# ═════════════════════════════════════════════════════════════════════════════
# EXECUTION
# ═════════════════════════════════════════════════════════════════════════════

def execute_create(draft):
    """Run `gh issue create` for the draft."""
    assignee = draft.assignee if draft.assignee != NO_ASSIGNEE else None
    print(f"\n  ⏳ Creating {BOLD}{draft.title}{RESET}...")
    try:
        url = create_issue(draft.title, draft.body, assignee=assignee)
    except GhError as exc:
        error(f"Failed to create issue: {exc}")
        return 1
    print(f"  {GREEN}✅ Issue created successfully: {url}{RESET}")
    return 0
