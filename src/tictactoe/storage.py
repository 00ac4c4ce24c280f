"""
Persistence of scores and settings as small JSON files.

Stored values are merged over the defaults, so files written by older
versions keep loading. Persistence never interrupts a game: unreadable files
fall back to defaults and failed writes are only logged.
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar

from .paths import data_dir, scores_path, settings_path

T = TypeVar("T")


@dataclass
class Scores:
    player1_wins: int = 0
    player2_wins: int = 0
    ai_wins: int = 0
    draws: int = 0


@dataclass
class Settings:
    music_enabled: bool = True
    sfx_enabled: bool = True
    ai_delay: float = 0.6


def _accepts(default: Any, value: Any) -> bool:
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(value, bool):
        return False
    if isinstance(default, float):
        return isinstance(value, (int, float))
    return isinstance(value, type(default))


def _merge(cls: Type[T], stored: Dict[str, Any]) -> T:
    defaults = cls()
    kept: Dict[str, Any] = {}
    for f in fields(cls):
        if f.name not in stored:
            continue
        v = stored[f.name]
        if _accepts(getattr(defaults, f.name), v):
            kept[f.name] = float(v) if isinstance(getattr(defaults, f.name), float) else v
        else:
            logging.warning("Ignoring stored %s=%r: expected %s",
                            f.name, v, type(getattr(defaults, f.name)).__name__)
    return cls(**kept)


def _load(cls: Type[T], path: Path) -> T:
    if not path.exists():
        return cls()
    try:
        stored = json.loads(path.read_text())
        if not isinstance(stored, dict):
            raise ValueError(f"expected a JSON object, got {type(stored).__name__}")
        return _merge(cls, stored)
    except (OSError, ValueError, TypeError) as e:
        logging.warning("Failed to load %s: %s", path, e)
        return cls()


def _save(obj: Any, path: Path) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(asdict(obj), indent=2, sort_keys=True))
    except OSError as e:
        logging.warning("Failed to save %s: %s", path, e)


def load_scores(path: Optional[Path] = None) -> Scores:
    return _load(Scores, path or scores_path())


def save_scores(scores: Scores, path: Optional[Path] = None) -> None:
    _save(scores, path or scores_path())


def reset_scores(path: Optional[Path] = None) -> Scores:
    scores = Scores()
    save_scores(scores, path)
    return scores


def load_settings(path: Optional[Path] = None) -> Settings:
    return _load(Settings, path or settings_path())


def save_settings(settings: Settings, path: Optional[Path] = None) -> None:
    _save(settings, path or settings_path())


def update_setting(key: str, value: Any, path: Optional[Path] = None) -> Settings:
    settings = load_settings(path)
    if key not in {f.name for f in fields(Settings)}:
        raise ValueError(f"Unknown setting: {key!r}")
    setattr(settings, key, value)
    save_settings(settings, path)
    return settings


def clear_all(directory: Optional[Path] = None) -> None:
    base = directory or data_dir()
    for name in ("scores.json", "settings.json"):
        try:
            (base / name).unlink(missing_ok=True)
        except OSError as e:
            logging.warning("Failed to remove %s: %s", base / name, e)
