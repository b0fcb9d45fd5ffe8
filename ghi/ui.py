"""
ui — Terminal UI primitives for ghi.

Colours, error output, prompts, the editor and the single-choice picker.
"""

import os
import shlex
import subprocess
import sys
import tempfile

# ── Colour constants ─────────────────────────────────────────────────────

CYAN    = "\033[36m"
BOLD    = "\033[1m"
DIM     = "\033[2m"
GREEN   = "\033[32m"
YELLOW  = "\033[33m"
RED     = "\033[31m"
RESET   = "\033[0m"

QUIT = "__QUIT__"

# Exit status when the user cancels a prompt (128 + SIGINT).
EXIT_CANCELLED = 130


# ── Output helpers ───────────────────────────────────────────────────────

def error(text):
    print(f"  {RED}❌ {text}{RESET}", file=sys.stderr)


def hint(text):
    print(f"  {DIM}{text}{RESET}", file=sys.stderr)


# ── Input primitives ─────────────────────────────────────────────────────

def prompt(text, default=None):
    """Prompt for text input. Returns QUIT on EOF or Ctrl-C."""
    suffix = f" {DIM}[{default}]{RESET}" if default else ""
    try:
        raw = input(f"  {CYAN}▸{RESET} {text}{suffix}: ").strip()
    except (EOFError, KeyboardInterrupt):
        print()
        return QUIT
    return raw if raw else default


def required(text):
    """Prompt until a non-empty answer is given."""
    while True:
        raw = prompt(text)
        if raw == QUIT or raw:
            return raw
        print(f"    {RED}{text} is required.{RESET}")


def multiline(title, default="", hint_text="blank line to finish"):
    """Multi-line input. Keeps `default` when nothing is typed."""
    print(f"  {BOLD}{title}{RESET}  {DIM}({hint_text}){RESET}\n")
    if default:
        for ln in default.split("\n"):
            print(f"    {DIM}│ {ln}{RESET}")
        print(f"    {DIM}(press enter on an empty first line to keep the text above){RESET}\n")
    lines = []
    while True:
        try:
            line = input(f"    {DIM}│{RESET} ")
        except (EOFError, KeyboardInterrupt):
            print()
            return QUIT
        if line == "":
            break
        lines.append(line)
    if not lines:
        return default
    return "\n".join(lines)


def _editor_command():
    return os.environ.get("VISUAL") or os.environ.get("EDITOR")


def editor(title, default=""):
    """Edit text in $VISUAL / $EDITOR, falling back to multi-line input.

    The editor gets a temporary Markdown file pre-filled with `default`;
    whatever is saved (possibly empty) is returned.
    """
    command = _editor_command()
    if not command:
        return multiline(title, default=default)

    print(f"  {BOLD}{title}{RESET}  {DIM}(opening {command}){RESET}")
    fd, path = tempfile.mkstemp(prefix="ghi-", suffix=".md")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(default or "")
        try:
            r = subprocess.run(shlex.split(command) + [path])
        except KeyboardInterrupt:
            return QUIT
        except (OSError, ValueError) as exc:
            print(f"    {YELLOW}⚠ Could not start editor {command!r}: {exc}{RESET}")
            return multiline(title, default=default)
        if r.returncode != 0:
            print(f"    {YELLOW}⚠ Editor exited with status {r.returncode}{RESET}")
            return QUIT
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    finally:
        os.unlink(path)


def choose(title, choices, default=None):
    """
    Display numbered choices and return the chosen one.
    Empty input picks `default`; a number or unique name prefix selects.
    Returns QUIT on EOF or Ctrl-C.
    """
    print(f"  {BOLD}{title}{RESET}\n")
    for i, c in enumerate(choices, 1):
        marker = f"  {DIM}(default){RESET}" if c == default else ""
        print(f"    {CYAN}{i:>2}{RESET}  {c}{marker}")
    print()

    while True:
        raw = prompt("Choose")
        if raw == QUIT:
            return raw
        if raw is None and default is not None:
            return default
        if raw and raw.isdigit():
            idx = int(raw) - 1
            if 0 <= idx < len(choices):
                return choices[idx]
        elif raw in choices:
            return raw
        elif raw:
            lower = raw.lower()
            matches = [c for c in choices if c.lower().startswith(lower)]
            if len(matches) == 1:
                return matches[0]
        print(f"    {DIM}Enter a number (1-{len(choices)}) or name prefix{RESET}")
