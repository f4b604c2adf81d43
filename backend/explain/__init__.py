"""Chess position explanation module.

This module turns a position, the engine's candidate moves and the player's
attempts into a prompt for a chess-coach language model, and maps the
model's reply into an explanation or a caller-facing failure. The request
flow itself lives in ``explain.core``.
"""
from .prompts import (
    FOLLOW_UP_MAX_TOKENS,
    INITIAL_MAX_TOKENS,
    SYSTEM_PROMPT,
    build_messages,
    build_opening_message,
    render_player_color,
    render_top_moves,
    select_max_tokens,
)
from .result import Explained, ExplainResult, Failed
from .utils import fen_problem

__all__ = [
    "FOLLOW_UP_MAX_TOKENS",
    "INITIAL_MAX_TOKENS",
    "SYSTEM_PROMPT",
    "build_messages",
    "build_opening_message",
    "render_player_color",
    "render_top_moves",
    "select_max_tokens",
    "Explained",
    "ExplainResult",
    "Failed",
    "fen_problem",
]
