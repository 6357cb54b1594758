"""Game creation and point-budgeted component placement."""

import logging

from ..models.cell import Grid
from ..models.component import COMPONENT_SPECS, Component, ComponentKind
from ..models.game import AIMemory, GameSettings, GameState
from ..models.player import PlayerState
from ..utils import AI, HUMAN, GameRNG
from ..utils.constants import RANDOM_PLACEMENT_ATTEMPTS
from ..utils.coordinates import Coord, coord_label, orthogonal_neighbors
from .errors import InvalidPlacement, InvalidSelection
from .ship_identifier import identify_ships

logger = logging.getLogger(__name__)

# Random fleets are grown as clusters of this many components
CLUSTER_SIZE_RANGE = (4, 8)


def create_player_state(settings: GameSettings) -> PlayerState:
    """Empty board with the full placement budget."""
    return PlayerState(
        grid=Grid(size=settings.board_size),
        budget=settings.initial_points,
        points=settings.initial_points,
    )


def new_game(seed: int, settings: GameSettings | None = None) -> GameState:
    """Create a game in the setup phase.

    Args:
        seed: RNG seed for deterministic placement and targeting
        settings: Board size and difficulty (defaults to 10x10, medium)

    Returns:
        Fresh GameState with empty boards
    """
    settings = settings or GameSettings()
    return GameState(
        seed=seed,
        settings=settings,
        player=create_player_state(settings),
        ai=create_player_state(settings),
    )


def start_placing(state: GameState, settings: GameSettings) -> GameState:
    """Leave setup: fresh boards for the chosen settings, human starts placing."""
    state.settings = settings
    state.player = create_player_state(settings)
    state.ai = create_player_state(settings)
    state.phase = "placing"
    state.turn = HUMAN
    state.turn_number = 0
    state.winner = None
    state.selected_component_kind = ComponentKind.STRUCTURE
    state.ai_memory = {HUMAN: AIMemory(), AI: AIMemory()}
    state.last_attack = None
    state.clear_selection()
    state.message = "Place your ship cells."
    return state


def check_affordable(player: PlayerState, kind: ComponentKind) -> int:
    """Return the cost of a kind, or reject it if the budget cannot cover it."""
    cost = COMPONENT_SPECS[ComponentKind(kind)].points
    if player.points < cost:
        raise InvalidSelection(
            f"You need {cost} points to place a {ComponentKind(kind).value} part.",
            title="Not Enough Points",
        )
    return cost


def place_component(player: PlayerState, coord: Coord, kind: ComponentKind) -> Component:
    """Place one component and charge it to the budget.

    Args:
        player: Side placing the component
        coord: Target cell
        kind: Component kind

    Returns:
        The placed component

    Raises:
        InvalidPlacement: If the cell is off the board or occupied, or the budget is short
    """
    kind = ComponentKind(kind)
    grid = player.grid
    if not grid.in_bounds(coord):
        raise InvalidPlacement(f"Cell {coord} is off the board")
    cell = grid.cell(coord)
    if cell.is_occupied:
        raise InvalidPlacement("You've already placed a part here.", title="Cell Occupied")

    cost = COMPONENT_SPECS[kind].points
    if player.points < cost:
        raise InvalidPlacement(
            f"You need {cost} points for this part.", title="Not Enough Points"
        )

    row, col = coord
    cell.component = Component(id=f"{row}-{col}-{kind.value}", kind=kind)
    player.points -= cost
    player.total_points += cost
    player.ships = identify_ships(grid)
    logger.debug(f"Placed {kind.value} at {coord_label(coord)}, {player.points} points left")
    return cell.component


def place_randomly(player: PlayerState, rng: GameRNG) -> PlayerState:
    """Spend a fresh budget on randomly placed components.

    Components are grown into connected clusters so that random fleets form
    ships able to power and fire their weapons. Each placement picks a random
    affordable kind. Placement stops when nothing is affordable or after a
    fixed number of attempts.

    Args:
        player: Side to re-place (its board is discarded)
        rng: Game RNG

    Returns:
        New PlayerState with the random fleet
    """
    size = player.grid.size
    fresh = PlayerState(grid=Grid(size=size), budget=player.budget, points=player.budget)
    cluster: list[Coord] = []
    cluster_target = rng.choice(range(CLUSTER_SIZE_RANGE[0], CLUSTER_SIZE_RANGE[1] + 1))

    attempts = 0
    while fresh.points > 0 and attempts < RANDOM_PLACEMENT_ATTEMPTS:
        attempts += 1
        affordable = [k for k, spec in COMPONENT_SPECS.items() if spec.points <= fresh.points]
        if not affordable:
            break

        coord = _next_cell(fresh.grid, cluster, rng)
        if coord is None or len(cluster) >= cluster_target:
            cluster = []
            cluster_target = rng.choice(range(CLUSTER_SIZE_RANGE[0], CLUSTER_SIZE_RANGE[1] + 1))
            coord = (rng.randrange(size), rng.randrange(size))
        if fresh.grid.cell(coord).is_occupied:
            continue

        place_component(fresh, coord, rng.choice(affordable))
        cluster.append(coord)

    fresh.ships = identify_ships(fresh.grid)
    logger.info(
        f"Random placement: {fresh.total_points}/{fresh.budget} points "
        f"in {len(fresh.ships)} ship(s)"
    )
    return fresh


def _next_cell(grid: Grid, cluster: list[Coord], rng: GameRNG) -> Coord | None:
    """Pick a free cell touching the current cluster, or None if it cannot grow."""
    frontier = sorted(
        {
            neighbor
            for coord in cluster
            for neighbor in orthogonal_neighbors(coord, grid.size)
            if not grid.cell(neighbor).is_occupied
        }
    )
    if not frontier:
        return None
    return rng.choice(frontier)
