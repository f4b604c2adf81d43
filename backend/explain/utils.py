"""Local position checks used before a request is sent to the model."""

import chess


def fen_problem(fen: str) -> str | None:
    """Say why a FEN is not worth an API call, or return None if it is.

    The position must parse and pass python-chess's legality checks
    (kings present, no pawns on the back rank, side not to move not in check).
    """
    try:
        board = chess.Board(fen)
    except ValueError as e:
        return f"Unreadable FEN {fen!r}: {e}"

    status = board.status()
    if status != chess.STATUS_VALID:
        flags = [flag.name.lower().replace("_", " ") for flag in chess.Status if flag and flag in status]
        return f"Illegal position in FEN {fen!r}: {', '.join(flags)}"
    return None


def side_to_move(fen: str) -> str:
    """Return 'w' or 'b' for the side to move in a valid FEN."""
    return "w" if chess.Board(fen).turn == chess.WHITE else "b"
