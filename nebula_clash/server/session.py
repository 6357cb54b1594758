"""Game session management for Human vs AI gameplay."""

import asyncio
import logging
import os
import uuid
from dataclasses import asdict, dataclass, field

from ..agent.advisory import (
    DifficultyCalibrator,
    MoveAdvisor,
    calibrate_difficulty,
    create_collaborators_from_env,
)
from ..agent.opponent import OpponentController
from ..engine.game_engine import GameEngine
from ..engine.placement import new_game
from ..models.command import (
    Command,
    CommandResult,
    EndTurn,
    ResetGame,
    StartGame,
    ToggleDebugView,
)
from ..models.game import GameSettings, GameState
from ..utils.constants import AI, DEFAULT_DIFFICULTY
from ..utils.serialization import load_game, save_game, to_view

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """Manages one game session (Human vs AI).

    Holds the current state, applies the human's commands through the engine
    and lets the opponent controller answer every human EndTurn. When a
    snapshot slot is configured the state is saved after every accepted
    command.
    """

    id: str
    state: GameState
    engine: GameEngine
    controller: OpponentController
    calibrator: DifficultyCalibrator | None = None
    state_file: str | None = None
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    def get_state_for_human(self, debug: bool | None = None) -> dict:
        """Serialize game state for the human player.

        Args:
            debug: If True, reveal the enemy board; None follows the game's debug toggle

        Returns:
            Dictionary with the enemy's components hidden unless in debug view
        """
        return to_view(self.state, debug=debug)

    async def submit(self, command: Command) -> tuple[CommandResult, dict | None]:
        """Apply a human command and, after EndTurn, play the AI's reply.

        Commands are handled one at a time. A command that arrives while the AI
        is still playing waits for that turn to finish before it is applied.

        Args:
            command: Command issued by the human player

        Returns:
            Tuple of (command result, AI turn summary or None)
        """
        async with self._lock:
            return await self._submit(command)

    async def _submit(self, command: Command) -> tuple[CommandResult, dict | None]:
        if self.state.phase == "playing" and self.state.turn == AI and not isinstance(
            command, (ResetGame, ToggleDebugView)
        ):
            return (
                CommandResult(
                    ok=False, state=self.state, reason="It is not your turn.", effects=[]
                ),
                None,
            )

        result = self.engine.apply(self.state, command)
        if not result.ok:
            logger.debug(f"Game {self.id}: {type(command).__name__} rejected: {result.reason}")
            return result, None

        self.state = result.state
        ai_turn = None

        if isinstance(command, StartGame):
            # Calibration talks to an LLM; keep it off the event loop
            await asyncio.to_thread(
                calibrate_difficulty, self.calibrator, command.settings.difficulty
            )

        if isinstance(command, EndTurn) and self.state.phase == "playing":
            logger.info(f"Game {self.id}: AI playing turn {self.state.turn_number}")
            self.state, summary = await asyncio.to_thread(self.controller.play_turn, self.state)
            ai_turn = asdict(summary)
            if self.state.winner:
                logger.info(f"Game {self.id} ended: winner = {self.state.winner}")

        self._persist()
        return result, ai_turn

    def _persist(self) -> None:
        if self.state_file:
            save_game(self.state, self.state_file)


class GameSessionManager:
    """Manages all active game sessions.

    In-memory storage; only the snapshot slot outlives the process.
    """

    def __init__(
        self,
        advisor: MoveAdvisor | None = None,
        calibrator: DifficultyCalibrator | None = None,
        state_file: str | None = None,
    ):
        """Initialize manager.

        Args:
            advisor: Move advisory oracle; read from the environment when both
                collaborators are omitted
            calibrator: Difficulty calibration collaborator
            state_file: Snapshot slot; defaults to NEBULA_CLASH_STATE_FILE
        """
        self.sessions: dict[str, GameSession] = {}
        self._collaborators = (advisor, calibrator) if advisor or calibrator else None
        self.state_file = state_file or os.getenv("NEBULA_CLASH_STATE_FILE")

    def _get_collaborators(self) -> tuple[MoveAdvisor | None, DifficultyCalibrator | None]:
        if self._collaborators is None:
            self._collaborators = create_collaborators_from_env()
        return self._collaborators

    async def create_session(
        self,
        seed: int | None = None,
        board_size: int | None = None,
        difficulty: str = DEFAULT_DIFFICULTY,
        restore: bool = False,
    ) -> tuple[GameSession, bool]:
        """Create a new game session with the AI opponent.

        Args:
            seed: Optional RNG seed for determinism
            board_size: If given, skip the setup screen and start placing
            difficulty: AI difficulty used together with board_size
            restore: Resume the saved game in the snapshot slot when there is one

        Returns:
            Tuple of (newly created GameSession, whether a saved game was restored)

        Raises:
            ValueError: If the settings are invalid
        """
        game_id = f"game-{uuid.uuid4().hex[:8]}"
        advisor, calibrator = self._get_collaborators()
        engine = GameEngine()

        state = load_game(self.state_file) if restore and self.state_file else None
        restored = state is not None
        if state is None:
            if seed is None:
                seed = uuid.uuid4().int % (2**32)
            state = new_game(seed)

        session = GameSession(
            id=game_id,
            state=state,
            engine=engine,
            controller=OpponentController(engine=engine, advisor=advisor),
            calibrator=calibrator,
            state_file=self.state_file,
        )

        if board_size is not None and not restored:
            settings = GameSettings(board_size=board_size, difficulty=difficulty)
            result, _ = await session.submit(StartGame(settings))
            if not result.ok:
                raise ValueError(result.reason)

        self.sessions[game_id] = session
        logger.info(
            f"Created game {game_id}: seed={session.state.seed}, "
            f"phase={session.state.phase}, restored={restored}"
        )
        return session, restored

    def get(self, game_id: str) -> GameSession | None:
        """Get a game session by ID."""
        return self.sessions.get(game_id)

    def delete(self, game_id: str) -> bool:
        """Delete a game session.

        Returns:
            True if deleted, False if not found
        """
        if game_id in self.sessions:
            del self.sessions[game_id]
            logger.info(f"Deleted game {game_id}")
            return True
        return False

    async def cleanup_all(self):
        """Clean up all sessions (called on shutdown)."""
        logger.info(f"Cleaning up {len(self.sessions)} game sessions")
        self.sessions.clear()
