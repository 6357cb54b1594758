"""Coordinate helpers for the square battle grid."""

Coord = tuple[int, int]

# Orthogonal steps keyed by hunt direction
DIRECTIONS: dict[str, Coord] = {
    "up": (-1, 0),
    "down": (1, 0),
    "left": (0, -1),
    "right": (0, 1),
}


def in_bounds(coord: Coord, size: int) -> bool:
    """Check whether a coordinate lies on a size x size board."""
    row, col = coord
    return 0 <= row < size and 0 <= col < size


def orthogonal_neighbors(coord: Coord, size: int) -> list[Coord]:
    """Return the in-bounds 4-neighbours of a cell in up, down, left, right order."""
    row, col = coord
    neighbors = []
    for d_row, d_col in DIRECTIONS.values():
        candidate = (row + d_row, col + d_col)
        if in_bounds(candidate, size):
            neighbors.append(candidate)
    return neighbors


def direction_between(start: Coord, end: Coord) -> str | None:
    """Name the direction of a single orthogonal step from start to end.

    Returns None if the cells are not orthogonally adjacent.
    """
    step = (end[0] - start[0], end[1] - start[1])
    for name, delta in DIRECTIONS.items():
        if delta == step:
            return name
    return None


def coord_label(coord: Coord) -> str:
    """Format a coordinate as a row letter and 1-based column.

    Examples:
        >>> coord_label((0, 4))
        'A5'
        >>> coord_label((1, 1))
        'B2'
    """
    row, col = coord
    return f"{chr(ord('A') + row)}{col + 1}"
