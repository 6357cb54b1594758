"""Game state container."""

from dataclasses import dataclass, field

from ..utils import AI, BOARD_SIZES, DIFFICULTIES, HUMAN, POINTS_BY_BOARD_SIZE, GameRNG
from ..utils.coordinates import Coord
from .component import ComponentKind
from .player import PlayerState

PHASES = ("setup", "placing", "playing", "over")
ALLOCATION_MODES = ("energy", "ammo")


@dataclass
class GameSettings:
    """Per-game settings chosen at the setup screen."""

    board_size: int = 10
    difficulty: str = "medium"
    initial_points: int | None = None  # Derived from board_size when omitted

    def __post_init__(self):
        """Validate settings and derive the placement budget."""
        if self.board_size not in BOARD_SIZES:
            raise ValueError(
                f"Invalid board_size: {self.board_size} (must be one of {BOARD_SIZES})"
            )
        if self.difficulty not in DIFFICULTIES:
            raise ValueError(
                f"Invalid difficulty: {self.difficulty} (must be one of {DIFFICULTIES})"
            )
        if self.initial_points is None:
            self.initial_points = POINTS_BY_BOARD_SIZE[self.board_size]


@dataclass
class AIMemory:
    """Targeting memory carried between shots by the opponent controller."""

    last_hit: Coord | None = None
    hunt_direction: str | None = None  # "up", "down", "left", "right" or None
    search_and_destroy: bool = False
    potential_targets: list[Coord] = field(default_factory=list)  # FIFO


@dataclass
class GameState:
    """Root game state.

    Holds both boards, whose turn it is, the human's pending selections and
    the seeded RNG. Every command operates on this state and returns a new
    copy of it.
    """

    seed: int  # RNG seed
    player: PlayerState  # The human side
    ai: PlayerState  # The computer opponent
    settings: GameSettings = field(default_factory=GameSettings)
    phase: str = "setup"
    turn: str = HUMAN  # "human" or "ai"
    turn_number: int = 0
    winner: str | None = None  # "human", "ai", "draw" or None
    message: str = "New game started. Select your settings."
    selected_component_kind: ComponentKind | None = ComponentKind.STRUCTURE
    selected_weapon_id: str | None = None
    allocation_mode: str | None = None  # "energy", "ammo" or None
    selected_resource: Coord | None = None
    debug: bool = False
    ai_memory: dict[str, AIMemory] = field(
        default_factory=lambda: {HUMAN: AIMemory(), AI: AIMemory()}
    )  # Targeting memory per side (the human side is only used by simulations)
    last_attack: dict | None = None  # Summary of the last settled attack
    rng: GameRNG | None = None  # Seeded RNG instance

    def __post_init__(self):
        """Initialize RNG if not provided and validate state."""
        if self.rng is None:
            self.rng = GameRNG(self.seed)
        if self.phase not in PHASES:
            raise ValueError(f"Invalid phase: {self.phase} (must be one of {PHASES})")
        if self.turn not in (HUMAN, AI):
            raise ValueError(f"Invalid turn: {self.turn} (must be 'human' or 'ai')")
        if self.turn_number < 0:
            raise ValueError(f"Invalid turn_number: {self.turn_number} (must be >= 0)")
        if self.winner not in (None, HUMAN, AI, "draw"):
            raise ValueError(
                f"Invalid winner: {self.winner} (must be None, 'human', 'ai', or 'draw')"
            )
        if self.allocation_mode not in (None, *ALLOCATION_MODES):
            raise ValueError(f"Invalid allocation_mode: {self.allocation_mode}")

    def player_for(self, side: str) -> PlayerState:
        return self.player if side == HUMAN else self.ai

    def opponent_for(self, side: str) -> PlayerState:
        return self.ai if side == HUMAN else self.player

    @staticmethod
    def other_side(side: str) -> str:
        return AI if side == HUMAN else HUMAN

    def clear_selection(self) -> None:
        """Drop the pending weapon and resource selection."""
        self.selected_weapon_id = None
        self.allocation_mode = None
        self.selected_resource = None
