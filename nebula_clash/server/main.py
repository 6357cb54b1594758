"""FastAPI server for Nebula Clash.

Provides an HTTP API for a human player to play against the computer
opponent. The human drives the game with commands; every accepted EndTurn
is answered by a complete AI turn before the response is sent.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .schemas.requests import CreateGameRequest, SubmitCommandRequest
from .schemas.responses import (
    CreateGameResponse,
    EffectResponse,
    GameStateResponse,
    SubmitCommandResponse,
)
from .session import GameSessionManager

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Global session manager
sessions = GameSessionManager()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown."""
    logger.info("Nebula Clash server starting...")
    yield
    logger.info("Nebula Clash server shutting down...")
    await sessions.cleanup_all()


app = FastAPI(
    title="Nebula Clash API",
    description="Web API for human vs AI gameplay in Nebula Clash",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================
# API ENDPOINTS
# ============================================


@app.get("/api")
async def api_root():
    """API root endpoint - server health check."""
    return {
        "service": "Nebula Clash",
        "status": "operational",
        "activeGames": len(sessions.sessions),
    }


@app.post("/api/games", response_model=CreateGameResponse)
async def create_game(request: CreateGameRequest):
    """Create a new Human vs AI game.

    Example:
        POST /api/games
        {"seed": 42, "boardSize": 10, "difficulty": "hard"}
    """
    try:
        session, restored = await sessions.create_session(
            seed=request.seed,
            board_size=request.boardSize,
            difficulty=request.difficulty,
            restore=request.restore,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create game: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to create game: {str(e)}")

    return CreateGameResponse(
        gameId=session.id,
        seed=session.state.seed,
        restored=restored,
        state=session.get_state_for_human(),
    )


@app.get("/api/games/{game_id}/state", response_model=GameStateResponse)
async def get_game_state(game_id: str, debug: bool | None = None):
    """Get current game state.

    Args:
        game_id: Game session ID
        debug: If True, reveal the enemy board regardless of the debug toggle

    Example:
        GET /api/games/game-abc123/state?debug=true
    """
    session = sessions.get(game_id)
    if not session:
        raise HTTPException(status_code=404, detail="Game not found")

    state = session.state
    return GameStateResponse(
        gameId=game_id,
        phase=state.phase,
        turn=state.turn,
        turnNumber=state.turn_number,
        winner=state.winner,
        state=session.get_state_for_human(debug=debug),
    )


@app.post("/api/games/{game_id}/commands", response_model=SubmitCommandResponse)
async def submit_command(game_id: str, request: SubmitCommandRequest):
    """Apply one human command.

    Rule violations are not HTTP errors: they come back with ``accepted``
    false and the reason. An accepted END_TURN also plays the AI's turn,
    which may take a while when the move advisor is enabled.

    Example:
        POST /api/games/game-abc123/commands
        {"command": {"type": "FIRE_WEAPON", "target": [4, 7]}}
    """
    session = sessions.get(game_id)
    if not session:
        raise HTTPException(status_code=404, detail="Game not found")

    try:
        command = request.command.to_command()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        result, ai_turn = await session.submit(command)
    except Exception as e:
        logger.error(f"Game {game_id}: command failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to apply command: {str(e)}")

    return SubmitCommandResponse(
        accepted=result.ok,
        reason=result.reason,
        effects=[
            EffectResponse(
                kind=e.kind,
                title=e.title,
                description=e.description,
                variant=e.variant,
                cells=[list(c) for c in e.cells],
            )
            for e in result.effects
        ],
        aiTurn=ai_turn,
        winner=session.state.winner,
        state=session.get_state_for_human(),
    )


@app.delete("/api/games/{game_id}")
async def delete_game(game_id: str):
    """Delete a game session."""
    if sessions.delete(game_id):
        return {"message": f"Game {game_id} deleted"}
    raise HTTPException(status_code=404, detail="Game not found")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
