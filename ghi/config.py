"""
config — Runtime configuration for ghi.

Configuration can be provided with a JSON file.
Search order:
1) $GHI_CONFIG (explicit path)
2) <cwd>/.ghi/config.json
3) ~/.ghi/config.json

If no config file exists, built-in defaults are used.
"""

import json
import os
import sys


_DEFAULT_CONFIG = {
    "default_repo": None,
    "list_limit": 30,
    "ai_model": "claude-sonnet-4.5",
    "ai_timeout": 120,
    "ai_word_budget": 300,
    "install_url": "https://cli.github.com",
}


def _candidate_paths():
    return [
        os.getenv("GHI_CONFIG"),
        os.path.join(os.getcwd(), ".ghi", "config.json"),
        os.path.expanduser("~/.ghi/config.json"),
    ]


def _positive(kind):
    def convert(value):
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise ValueError(f"expected a number, got {value!r}")
        number = kind(value)
        if number <= 0:
            raise ValueError(f"must be positive, got {value!r}")
        return number
    return convert


def _text(value):
    if not isinstance(value, str) or not value:
        raise ValueError(f"expected a non-empty string, got {value!r}")
    return value


def _optional_text(value):
    return None if value is None else _text(value)


_CONVERTERS = {
    "default_repo": _optional_text,
    "list_limit": _positive(int),
    "ai_model": _text,
    "ai_timeout": _positive(float),
    "ai_word_budget": _positive(int),
    "install_url": _text,
}


def _apply(data, path):
    """Overlay known keys from `data` on the defaults; bad values keep the default."""
    cfg = dict(_DEFAULT_CONFIG)
    for key, convert in _CONVERTERS.items():
        if key not in data:
            continue
        try:
            cfg[key] = convert(data[key])
        except (TypeError, ValueError) as exc:
            print(f"[ghi] Ignoring {key!r} in {path}: {exc}", file=sys.stderr)
    return cfg


def load_config():
    """Return the first config file found merged over the defaults."""
    for path in _candidate_paths():
        if not path:
            continue
        if not os.path.isfile(path):
            continue
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("Config root must be a JSON object")
        except (OSError, ValueError) as exc:
            print(f"[ghi] Failed to load config at {path}: {exc}", file=sys.stderr)
            break
        return _apply(data, path)
    return dict(_DEFAULT_CONFIG)


_CONFIG = load_config()

DEFAULT_REPO = _CONFIG["default_repo"]
LIST_LIMIT = _CONFIG["list_limit"]
AI_MODEL = _CONFIG["ai_model"]
AI_TIMEOUT = _CONFIG["ai_timeout"]
AI_WORD_BUDGET = _CONFIG["ai_word_budget"]
INSTALL_URL = _CONFIG["install_url"]
