from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import List, Optional

import numpy as np

from .arena import evaluate
from .game_basics import O, X, current_player, is_terminal, parse_board, render_board
from .policy import Strength, select_move
from .session import DRAW, ONE_PLAYER, TWO_PLAYER, Event, GameSession
from .solver import optimal_move, score_moves
from .storage import load_scores, load_settings, reset_scores, save_scores, update_setting


def _strength(text: str) -> Strength:
    try:
        return Strength.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _on_off(text: str) -> bool:
    if text.lower() in ("on", "true", "1", "yes"):
        return True
    if text.lower() in ("off", "false", "0", "no"):
        return False
    raise argparse.ArgumentTypeError(f"expected on/off, got {text!r}")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt", description="Tic-tac-toe CLI")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )
    p.add_argument("--seed", type=int, default=None, help="Seed for the random move source")

    # move
    p_move = sub.add_parser("move", help="Pick the computer's move for a board (9 digits, 0=empty,1=X,2=O)")
    p_move.add_argument("--board", required=True, help="Board string, e.g., 100020000")
    p_move.add_argument("--strength", type=_strength, default=Strength.HIGH, help="low|medium|high")
    p_move.add_argument("--mark", type=int, choices=[X, O], default=None,
                        help="Computer mark (default: side to move)")

    # analyze
    p_an = sub.add_parser("analyze", help="Show the search score of every empty slot")
    p_an.add_argument("--board", required=True, help="Board string, e.g., 100020000")
    p_an.add_argument("--mark", type=int, choices=[X, O], default=None,
                      help="Computer mark (default: side to move)")

    # play
    p_play = sub.add_parser("play", help="Play an interactive game on stdin")
    p_play.add_argument("--mode", choices=[ONE_PLAYER, TWO_PLAYER], default=ONE_PLAYER)
    p_play.add_argument("--strength", type=_strength, default=Strength.HIGH, help="low|medium|high")
    p_play.add_argument("--delay", type=float, default=None,
                        help="Seconds to pause before the computer moves (default: from settings)")

    # evaluate
    p_ev = sub.add_parser("evaluate", help="Play the engine against a random opponent")
    p_ev.add_argument("--strength", type=_strength, default=Strength.HIGH, help="low|medium|high")
    p_ev.add_argument("--games", type=int, default=100)
    p_ev.add_argument("--mark", type=int, choices=[X, O], default=O, help="Computer mark")

    # scores
    p_sc = sub.add_parser("scores", help="Show persisted scores")
    p_sc.add_argument("--reset", action="store_true", help="Reset all scores to zero")

    # settings
    p_set = sub.add_parser("settings", help="Show or update persisted settings")
    p_set.add_argument("--music", type=_on_off, default=None, help="on|off")
    p_set.add_argument("--sfx", type=_on_off, default=None, help="on|off")
    p_set.add_argument("--delay", type=float, default=None, help="Computer thinking delay in seconds")

    return p


def _print_info() -> None:
    import importlib.util
    import platform

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["numpy"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _read_board(raw: str) -> Optional[List[int]]:
    b = parse_board(raw)
    if b is None:
        logging.error("Invalid board string. Must be 9 chars of 0/1/2.")
        return None
    return b


def _render(events: List[Event], session: GameSession) -> None:
    for ev in events:
        if ev.kind == "move_made":
            print(f"{'X' if ev.data['player'] == X else 'O'} -> {ev.data['index']}")
            print(render_board(ev.data["board"]))
        elif ev.kind == "rejected":
            print(f"Move rejected: {ev.data['reason']}")
        elif ev.kind == "game_over":
            if ev.data["winner"] == DRAW:
                print("It's a draw!")
            elif session.mode == ONE_PLAYER and ev.data["winner"] == session.computer_mark:
                print(f"The computer wins (line {ev.data['winning_cells']})")
            else:
                name = "X" if ev.data["winner"] == X else "O"
                print(f"{name} wins (line {ev.data['winning_cells']})")


def _play(ns: argparse.Namespace, rng: np.random.Generator) -> int:
    settings = load_settings()
    delay = settings.ai_delay if ns.delay is None else ns.delay
    session = GameSession(mode=ns.mode, strength=ns.strength, scores=load_scores())
    print(render_board(session.board))
    while True:
        while not session.is_over:
            if session.computer_to_move:
                time.sleep(max(0.0, delay))
                _render(session.computer_turn(rng), session)
                continue
            line = sys.stdin.readline()
            if not line:
                save_scores(session.scores)
                return 0
            raw = line.strip()
            if raw in ("q", "quit"):
                save_scores(session.scores)
                return 0
            if not raw.isdigit():
                print("Enter a cell index 0-8 (q to quit)")
                continue
            _render(session.play(int(raw)), session)
        save_scores(session.scores)
        s = session.scores
        logging.info("scores: p1=%d p2=%d ai=%d draws=%d",
                     s.player1_wins, s.player2_wins, s.ai_wins, s.draws)
        print("Play again? [y/N]")
        answer = sys.stdin.readline().strip().lower()
        if answer not in ("y", "yes"):
            return 0
        session.reset()
        print(render_board(session.board))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    # Early exits
    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("tictactoe"))
        except Exception:
            print("unknown")
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    rng = np.random.default_rng(ns.seed)

    if ns.cmd in ("move", "analyze"):
        b = _read_board(ns.board)
        if b is None:
            return 2
        mark = ns.mark if ns.mark is not None else current_player(b)
        if ns.cmd == "move":
            mv = select_move(b, ns.strength, mark, rng)
            logging.info("strength=%s mark=%d move=%s", ns.strength.value, mark, mv)
            return 0
        if is_terminal(b):
            logging.info("terminal position, nothing to analyze")
            return 0
        scores = score_moves(b, mark)
        best = optimal_move(b, mark)
        logging.info("mark=%d scores=%s best=%d", mark, scores, best)
        return 0

    if ns.cmd == "play":
        return _play(ns, rng)

    if ns.cmd == "evaluate":
        if ns.games <= 0:
            logging.error("--games must be positive: %s", ns.games)
            return 2
        res = evaluate(ns.strength, games=ns.games, seed=ns.seed, computer_mark=ns.mark)
        logging.info("wins=%d draws=%d losses=%d", res["wins"], res["draws"], res["losses"])
        return 0

    if ns.cmd == "scores":
        s = reset_scores() if ns.reset else load_scores()
        logging.info("player1=%d player2=%d ai=%d draws=%d",
                     s.player1_wins, s.player2_wins, s.ai_wins, s.draws)
        return 0

    if ns.cmd == "settings":
        st = load_settings()
        if ns.music is not None:
            st = update_setting("music_enabled", ns.music)
        if ns.sfx is not None:
            st = update_setting("sfx_enabled", ns.sfx)
        if ns.delay is not None:
            if ns.delay < 0:
                logging.error("Delay must be non-negative: %s", ns.delay)
                return 2
            st = update_setting("ai_delay", ns.delay)
        logging.info("music=%s sfx=%s delay=%s", st.music_enabled, st.sfx_enabled, st.ai_delay)
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
