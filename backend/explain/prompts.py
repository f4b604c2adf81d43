"""Prompt text and message assembly for the chess coach model."""
from schemas import ConversationTurn, ExplainRequest, TopMove

SYSTEM_PROMPT = (
    "Chess coach. Plain text, no markdown. "
    "Initial explanation: 1-2 sentences - why the best move is good, "
    "whether the player's move was reasonable. "
    "Follow-up answers: match the depth of the question, stay concise."
)

# Response token allowance for the first explanation vs. a follow-up answer
INITIAL_MAX_TOKENS = 150
FOLLOW_UP_MAX_TOKENS = 400


def format_score(score: int | float | str) -> str:
    """Render a score the way it appears in JSON: 1.0 -> "1", 0.3 -> "0.3"."""
    if isinstance(score, float) and score.is_integer():
        return str(int(score))
    return str(score)


def render_top_moves(top_moves: list[TopMove]) -> str:
    """Render engine moves as a 1-indexed list, one per line.

    Example:
        [e4 (0.3), d4 (0.1)] -> "1. e4 (0.3)\\n2. d4 (0.1)"
    """
    return "\n".join(f"{i}. {m.san} ({format_score(m.score)})" for i, m in enumerate(top_moves, start=1))


def render_player_color(player_color: str) -> str:
    return "White" if player_color == "w" else "Black"


def build_opening_message(request: ExplainRequest) -> str:
    """Compose the position summary that always opens the conversation."""
    return (
        f"FEN: {request.fen}\n"
        f"I play {render_player_color(request.player_color)}. I played: {', '.join(request.guesses)}\n"
        f"Engine top moves:\n{render_top_moves(request.top_moves)}"
    )


def is_follow_up(history: list[ConversationTurn] | None) -> bool:
    return bool(history)


def build_messages(request: ExplainRequest) -> list[dict]:
    """Opening message first, then any caller history in order."""
    messages: list[dict] = [{"role": "user", "content": build_opening_message(request)}]
    if is_follow_up(request.messages):
        messages.extend(turn.model_dump() for turn in request.messages)
    return messages


def select_max_tokens(request: ExplainRequest) -> int:
    return FOLLOW_UP_MAX_TOKENS if is_follow_up(request.messages) else INITIAL_MAX_TOKENS
