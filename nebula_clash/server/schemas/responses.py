"""Pydantic response schemas for API endpoints."""

from pydantic import BaseModel, Field


class EffectResponse(BaseModel):
    """A toast or attack cue produced by a command."""

    kind: str
    title: str
    description: str = ""
    variant: str = "default"
    cells: list[list[int]] = Field(default_factory=list)


class GameStateResponse(BaseModel):
    """Response containing current game state."""

    gameId: str  # noqa: N815
    phase: str
    turn: str
    turnNumber: int  # noqa: N815
    winner: str | None
    state: dict


class CreateGameResponse(BaseModel):
    """Response after creating a new game."""

    gameId: str  # noqa: N815
    seed: int
    restored: bool = False
    state: dict


class SubmitCommandResponse(BaseModel):
    """Response after submitting a command.

    When the human ends their turn, ``aiTurn`` summarizes the computer's reply.
    """

    accepted: bool
    reason: str | None = None
    effects: list[EffectResponse] = Field(default_factory=list)
    aiTurn: dict | None = None  # noqa: N815
    winner: str | None = None
    state: dict
