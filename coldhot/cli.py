"""
Console front end.

    cold-hot --new          play a new game
    cold-hot --list         show saved games
    cold-hot --replay ID    show every attempt of a saved game
    cold-hot --help

Games are saved through the same DB store the API uses.
"""

import argparse
import sys
from typing import Callable, List, Optional

from .bootstrap_db import create_all
from .config import configure_logging
from .db import SessionLocal
from .engine import hints_to_text
from .repository import DBGameStore
from .session import GameSession, start_game, submit_guess
from .store import GameRecord, GameStore
from .types import Secret

RULES = """
===========================================
   Welcome to Cold-Hot!
===========================================

Rules:
  - The computer picked a three-digit number with no repeated digits
  - The first digit is never zero
  - After every guess you get one hint per digit:
    * Горячо  - right digit, right place
    * Тепло   - the digit is in the number, somewhere else
    * Холодно - the digit is not in the number
  - Hints are shown sorted, so they don't tell you which digit is which
"""

ROW = "{:<4} | {:<20} | {:<15} | {:<6} | {:<11}"


def _outcome_label(game: GameRecord) -> str:
    return game.outcome or "in progress"


def _secret_label(game: GameRecord) -> str:
    return game.secret_number if game.status == "won" else "***"


def run_new_game(
    store: GameStore,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
    secret_source: Optional[Callable[[], Secret]] = None,
) -> GameSession:
    write(RULES)

    name = ""
    while not name.strip():
        name = read("Your name: ")
        if not name.strip():
            write("Error: name can't be empty")

    session = start_game(store, name, secret_source=secret_source)

    while True:
        result = submit_guess(session, read("Enter a three-digit number: "))
        if not result.accepted:
            write("Error: enter exactly three digits, ex. 123")
            continue

        if result.won:
            write(f"\nCongratulations! You guessed {session.secret} in {result.attempt_number} attempt(s)!\n")
            return session

        write(f"Hints: {hints_to_text(result.hints)}")


def run_list_games(store: GameStore, write: Callable[[str], None] = print) -> List[GameRecord]:
    games = store.list_games()
    if not games:
        write("No saved games yet. Start one with --new or -n")
        return games

    write(ROW.format("ID", "Date", "Player", "Number", "Outcome"))
    write("-" * 68)
    for game in games:
        write(ROW.format(
            game.id,
            game.created_at.strftime("%Y-%m-%d %H:%M:%S"),
            game.player_name,
            _secret_label(game),
            _outcome_label(game),
        ))
    return games


def run_replay_game(store: GameStore, game_id: int, write: Callable[[str], None] = print) -> bool:
    game = store.get_game(game_id)
    if game is None:
        write(f"Game with ID {game_id} not found.")
        return False

    write(f"=== Replay of game #{game.id} ===")
    write(f"Player: {game.player_name}")
    write(f"Date: {game.created_at.strftime('%Y-%m-%d %H:%M:%S')}")
    write(f"Number: {_secret_label(game)}")
    write(f"Outcome: {_outcome_label(game)}")

    attempts = store.list_attempts(game_id)
    if not attempts:
        write("No attempts.")
        return True

    write("Attempts:")
    for attempt in attempts:
        write(f"  {attempt.attempt_number}. {attempt.guess} -> {attempt.hints}")
    return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cold-hot",
        description="Guess the three-digit number from Горячо / Тепло / Холодно hints.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("-n", "--new", action="store_true", help="start a new game")
    mode.add_argument("-l", "--list", action="store_true", help="list saved games")
    mode.add_argument("-r", "--replay", type=int, metavar="ID", help="replay a saved game by ID")
    return parser


def _dispatch(args: argparse.Namespace, store: GameStore) -> int:
    if args.new:
        run_new_game(store)
        return 0
    if args.list:
        run_list_games(store)
        return 0
    return 0 if run_replay_game(store, args.replay) else 1


def main(argv: Optional[List[str]] = None, store: Optional[GameStore] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not (args.new or args.list or args.replay is not None):
        parser.print_help()
        return 0

    # quiet by default so log lines don't interleave with the prompts
    configure_logging(default="WARNING")

    try:
        if store is not None:
            return _dispatch(args, store)

        create_all()
        db = SessionLocal()
        try:
            return _dispatch(args, DBGameStore(db))
        finally:
            db.close()
    except (EOFError, KeyboardInterrupt):
        print("\nBye.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
