"""Pydantic request schemas for API endpoints.

Commands are posted as a JSON object whose ``type`` field selects the
command; cells are ``[row, col]`` pairs.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from ...models import command as cmd
from ...models.component import ComponentKind
from ...models.game import GameSettings
from ...utils.constants import DEFAULT_BOARD_SIZE, DEFAULT_DIFFICULTY

Cell = tuple[int, int]


class CreateGameRequest(BaseModel):
    """Request to create a new game."""

    seed: int | None = Field(default=None, description="Optional RNG seed for determinism")
    boardSize: int | None = Field(  # noqa: N815
        default=None, description="Start placing immediately on a 5, 10 or 15 board"
    )
    difficulty: str = Field(
        default=DEFAULT_DIFFICULTY, description="AI difficulty: 'easy', 'medium', 'hard'"
    )
    restore: bool = Field(
        default=False, description="Resume the saved game from the snapshot slot if present"
    )


class StartGameRequest(BaseModel):
    type: Literal["START_GAME"]
    boardSize: int = DEFAULT_BOARD_SIZE  # noqa: N815
    difficulty: str = DEFAULT_DIFFICULTY

    def to_command(self) -> cmd.StartGame:
        return cmd.StartGame(GameSettings(board_size=self.boardSize, difficulty=self.difficulty))


class SelectComponentKindRequest(BaseModel):
    type: Literal["SELECT_COMPONENT_KIND"]
    kind: ComponentKind

    def to_command(self) -> cmd.SelectComponentKind:
        return cmd.SelectComponentKind(self.kind)


class PlaceComponentRequest(BaseModel):
    type: Literal["PLACE_COMPONENT"]
    cell: Cell
    kind: ComponentKind | None = None

    def to_command(self) -> cmd.PlaceComponent:
        return cmd.PlaceComponent(self.cell, self.kind)


class PlaceAllRandomlyRequest(BaseModel):
    type: Literal["PLACE_ALL_RANDOMLY"]

    def to_command(self) -> cmd.PlaceAllRandomly:
        return cmd.PlaceAllRandomly()


class FinishPlacingRequest(BaseModel):
    type: Literal["FINISH_PLACING"]

    def to_command(self) -> cmd.FinishPlacing:
        return cmd.FinishPlacing()


class SelectWeaponRequest(BaseModel):
    type: Literal["SELECT_WEAPON"]
    cell: Cell

    def to_command(self) -> cmd.SelectWeapon:
        return cmd.SelectWeapon(self.cell)


class SelectResourceRequest(BaseModel):
    type: Literal["SELECT_RESOURCE"]
    cell: Cell

    def to_command(self) -> cmd.SelectResource:
        return cmd.SelectResource(self.cell)


class AllocateEnergyRequest(BaseModel):
    type: Literal["ALLOCATE_ENERGY"]
    producer: Cell
    consumer: Cell

    def to_command(self) -> cmd.AllocateEnergy:
        return cmd.AllocateEnergy(self.producer, self.consumer)


class AllocateAmmoRequest(BaseModel):
    type: Literal["ALLOCATE_AMMO"]
    producer: Cell
    weapon: Cell
    amount: int = Field(default=1, gt=0)

    def to_command(self) -> cmd.AllocateAmmo:
        return cmd.AllocateAmmo(self.producer, self.weapon, self.amount)


class CancelAllocationRequest(BaseModel):
    type: Literal["CANCEL_ALLOCATION"]

    def to_command(self) -> cmd.CancelAllocation:
        return cmd.CancelAllocation()


class FireWeaponRequest(BaseModel):
    type: Literal["FIRE_WEAPON"]
    target: Cell

    def to_command(self) -> cmd.FireWeapon:
        return cmd.FireWeapon(self.target)


class EndTurnRequest(BaseModel):
    type: Literal["END_TURN"]

    def to_command(self) -> cmd.EndTurn:
        return cmd.EndTurn()


class ResetGameRequest(BaseModel):
    type: Literal["RESET_GAME"]

    def to_command(self) -> cmd.ResetGame:
        return cmd.ResetGame()


class ToggleDebugViewRequest(BaseModel):
    type: Literal["TOGGLE_DEBUG_VIEW"]

    def to_command(self) -> cmd.ToggleDebugView:
        return cmd.ToggleDebugView()


CommandRequest = Annotated[
    Union[
        StartGameRequest,
        SelectComponentKindRequest,
        PlaceComponentRequest,
        PlaceAllRandomlyRequest,
        FinishPlacingRequest,
        SelectWeaponRequest,
        SelectResourceRequest,
        AllocateEnergyRequest,
        AllocateAmmoRequest,
        CancelAllocationRequest,
        FireWeaponRequest,
        EndTurnRequest,
        ResetGameRequest,
        ToggleDebugViewRequest,
    ],
    Field(discriminator="type"),
]


class SubmitCommandRequest(BaseModel):
    """Envelope for one command."""

    command: CommandRequest
