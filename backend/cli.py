import argparse
import asyncio
import sys
from pathlib import Path

from explain.core import explain_position
from explain.result import Explained
from explain.utils import fen_problem, side_to_move
from settings import load_settings


def parse_top_move(value: str) -> dict:
    """Parse 'SAN:SCORE' (e.g. 'e4:0.3') into a topMoves entry."""
    san, sep, score = value.rpartition(":")
    if not sep or not san or not score:
        raise argparse.ArgumentTypeError(f"expected SAN:SCORE, got {value!r}")
    try:
        parsed: int | float | str = int(score)
    except ValueError:
        try:
            parsed = float(score)
        except ValueError:
            parsed = score
    return {"san": san, "score": parsed}


def build_body(args: argparse.Namespace) -> dict:
    body: dict = {
        "fen": args.fen,
        "guesses": args.guess,
        "topMoves": args.top_move,
        "playerColor": args.color or side_to_move(args.fen),
    }
    if args.follow_up:
        body["messages"] = [{"role": "user", "content": q} for q in args.follow_up]
    return body


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Chess Explain Proxy (CLI)")
    p.add_argument("--fen", required=True, help="FEN string")
    p.add_argument("--guess", action="append", default=[], help="Move you played (repeatable)")
    p.add_argument("--top-move", action="append", type=parse_top_move, default=[], help="Engine move as SAN:SCORE (repeatable)")
    p.add_argument("--color", choices=["w", "b"], help="Your color; defaults to the side to move")
    p.add_argument("--follow-up", action="append", default=[], help="Follow-up question (repeatable)")
    p.add_argument("--env-file", type=Path, help="KEY=value file to read settings from")
    args = p.parse_args(argv)

    problem = fen_problem(args.fen)
    if problem:
        print(problem, file=sys.stderr)
        return 2

    settings = load_settings(args.env_file)
    result = asyncio.run(explain_position(build_body(args), settings))
    if isinstance(result, Explained):
        print(result.explanation)
        return 0
    print(f"Error ({result.status_code}): {result.error}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
