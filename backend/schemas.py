from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr


class TopMove(BaseModel):
    san: str = Field(..., description="Engine candidate move in SAN (e.g., 'Nf3')")
    score: StrictInt | StrictFloat | StrictStr = Field(..., description="Engine score; booleans and nulls are rejected")


class ConversationTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str | list[dict[str, Any]]


class ExplainRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    fen: str = Field(..., description="FEN string of the position")
    guesses: list[str] = Field(..., description="Moves the player tried, in order")
    top_moves: list[TopMove] = Field(..., alias="topMoves")
    player_color: str = Field(..., alias="playerColor", description="'w' for White, anything else is Black")
    messages: list[ConversationTurn] | None = Field(None, description="Prior conversation for follow-ups")


class ExplainResponse(BaseModel):
    explanation: str


class ErrorResponse(BaseModel):
    error: str
