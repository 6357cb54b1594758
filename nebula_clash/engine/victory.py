"""Victory condition checking.

This module handles:
1. Checking whether each fleet has been destroyed
2. Breaking a simultaneous destruction by fleet value
3. Determining winner (human, ai, draw, or None)
"""

import logging

from ..models.game import GameState
from ..models.player import PlayerState
from ..utils import AI, HUMAN

logger = logging.getLogger(__name__)

VICTORY_MESSAGES = {
    HUMAN: "You have conquered the nebula.",
    AI: "Your fleet has been destroyed.",
    "draw": "Both fleets have been destroyed. The battle is a draw.",
}


def check_winner(player: PlayerState, opponent: PlayerState) -> str | None:
    """Decide the winner between the human side and the AI side.

    Victory logic:
    - Both fleets destroyed → higher total_points wins, equal totals → "draw"
    - Only the human fleet destroyed → "ai"
    - Only the AI fleet destroyed → "human"
    - Neither destroyed → None (continue)

    A fleet with no ships at all is never considered destroyed.

    Args:
        player: Human player state (ships must be current)
        opponent: AI player state (ships must be current)

    Returns:
        "human", "ai", "draw", or None
    """
    player_destroyed = player.fleet_destroyed
    opponent_destroyed = opponent.fleet_destroyed

    if player_destroyed and opponent_destroyed:
        if player.total_points > opponent.total_points:
            return HUMAN
        if opponent.total_points > player.total_points:
            return AI
        return "draw"
    if player_destroyed:
        return AI
    if opponent_destroyed:
        return HUMAN
    return None


def check_victory(state: GameState) -> bool:
    """Evaluate the win condition and end the game if it is met.

    Args:
        state: Current game state (player ships must be current)

    Returns:
        True if the game has a winner (including draw), False otherwise
    """
    winner = check_winner(state.player, state.ai)
    if winner is None:
        return False

    state.winner = winner
    state.phase = "over"
    state.message = VICTORY_MESSAGES[winner]
    state.clear_selection()
    logger.info(f"Game over after turn {state.turn_number}: winner = {winner}")
    return True
