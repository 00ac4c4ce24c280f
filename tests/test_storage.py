import json
import logging
from pathlib import Path

import pytest

from tictactoe.storage import (
    Scores,
    Settings,
    clear_all,
    load_scores,
    load_settings,
    reset_scores,
    save_scores,
    update_setting,
)


def test_defaults_when_missing(tmp_path: Path):
    assert load_scores(tmp_path / "scores.json") == Scores()
    assert load_settings(tmp_path / "settings.json") == Settings()


def test_scores_round_trip(tmp_path: Path):
    p = tmp_path / "nested" / "scores.json"
    save_scores(Scores(player1_wins=3, ai_wins=2, draws=1), p)
    assert load_scores(p) == Scores(player1_wins=3, player2_wins=0, ai_wins=2, draws=1)


def test_partial_file_merges_over_defaults(tmp_path: Path):
    p = tmp_path / "scores.json"
    p.write_text(json.dumps({"draws": 4, "legacy_field": 9}))
    s = load_scores(p)
    assert s.draws == 4
    assert s.player1_wins == 0


@pytest.mark.parametrize("payload", ["{not json", "[1, 2, 3]"])
def test_corrupt_file_falls_back(tmp_path: Path, caplog, payload: str):
    p = tmp_path / "settings.json"
    p.write_text(payload)
    with caplog.at_level(logging.WARNING):
        assert load_settings(p) == Settings()
    assert "Failed to load" in caplog.text


def test_reset_scores(tmp_path: Path):
    p = tmp_path / "scores.json"
    save_scores(Scores(draws=5), p)
    assert reset_scores(p) == Scores()
    assert load_scores(p) == Scores()


def test_update_setting(tmp_path: Path):
    p = tmp_path / "settings.json"
    st = update_setting("music_enabled", False, p)
    assert st.music_enabled is False
    assert load_settings(p).music_enabled is False
    assert load_settings(p).sfx_enabled is True
    with pytest.raises(ValueError):
        update_setting("volume", 11, p)


def test_clear_all_uses_data_dir(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("TTT_DATA_DIR", str(tmp_path))
    save_scores(Scores(draws=1))
    update_setting("sfx_enabled", False)
    assert (tmp_path / "scores.json").exists()
    assert (tmp_path / "settings.json").exists()
    clear_all()
    assert not (tmp_path / "scores.json").exists()
    assert not (tmp_path / "settings.json").exists()
    # clearing twice is fine
    clear_all()


@pytest.mark.parametrize("payload", [
    {"draws": None, "player1_wins": "3"},
    {"ai_wins": True},
    {"player2_wins": 1.5},
])
def test_mistyped_scores_fall_back_per_field(tmp_path: Path, caplog, payload):
    p = tmp_path / "scores.json"
    p.write_text(json.dumps(payload))
    with caplog.at_level(logging.WARNING):
        s = load_scores(p)
    assert "Ignoring stored" in caplog.text
    for name in ("player1_wins", "player2_wins", "ai_wins", "draws"):
        assert type(getattr(s, name)) is int
    # loaded scores keep counting
    s.draws += 1
    s.player1_wins += 1


@pytest.mark.parametrize("payload, field", [
    ({"ai_delay": "slow"}, "ai_delay"),
    ({"ai_delay": None}, "ai_delay"),
    ({"music_enabled": 1}, "music_enabled"),
    ({"sfx_enabled": "off"}, "sfx_enabled"),
])
def test_mistyped_settings_use_defaults(tmp_path: Path, caplog, payload, field):
    p = tmp_path / "settings.json"
    p.write_text(json.dumps(payload))
    with caplog.at_level(logging.WARNING):
        st = load_settings(p)
    assert getattr(st, field) == getattr(Settings(), field)
    assert "Ignoring stored" in caplog.text
    assert max(0.0, st.ai_delay) >= 0.0


def test_integer_delay_is_accepted(tmp_path: Path):
    p = tmp_path / "settings.json"
    p.write_text(json.dumps({"ai_delay": 2}))
    st = load_settings(p)
    assert st.ai_delay == 2.0 and isinstance(st.ai_delay, float)


def test_mistyped_scores_do_not_break_a_session(tmp_path: Path):
    from tictactoe.session import TWO_PLAYER, GameSession

    p = tmp_path / "scores.json"
    p.write_text(json.dumps({"draws": None, "player1_wins": "3"}))
    s = GameSession(mode=TWO_PLAYER, scores=load_scores(p))
    for idx in (0, 3, 1, 4, 2):
        s.play(idx)
    assert s.scores.player1_wins == 1
