"""Centralized path helpers for persisted scores and settings.

Environment-first, with robust fallbacks that still work when installed
as a package or executed from arbitrary CWDs.
"""

from __future__ import annotations

import os
from pathlib import Path


def _find_git_root(start: Path) -> Path | None:
    cur = start
    for _ in range(5):
        if (cur / ".git").exists():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent
    return None


def repo_root() -> Path:
    """Best-effort repository root.

    Order: env var TTT_REPO_ROOT -> nearest parent containing .git -> CWD.
    Avoids writing under site-packages when installed as a library.
    """
    env = os.getenv("TTT_REPO_ROOT")
    if env:
        return Path(env)
    here = Path(__file__).resolve()
    git_root = _find_git_root(here)
    if git_root is not None:
        return git_root
    # final fallback: current working directory
    return Path.cwd()


def data_dir() -> Path:
    p = os.getenv("TTT_DATA_DIR")
    return Path(p) if p else repo_root() / ".ttt"


def scores_path() -> Path:
    return data_dir() / "scores.json"


def settings_path() -> Path:
    return data_dir() / "settings.json"
