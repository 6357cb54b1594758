"""ASCII board rendering.

Renders a board either as its owner sees it (every component shown) or as
the opponent sees it (only shot results, unless the debug view reveals the
hidden fleet). The opponent view is also the board snapshot handed to the
move advisor.
"""

from ..models.cell import Cell, Grid
from ..models.component import ComponentKind

COMPONENT_SYMBOLS = {
    ComponentKind.STRUCTURE: "#",
    ComponentKind.WEAPON_SMALL: "s",
    ComponentKind.WEAPON_MEDIUM: "m",
    ComponentKind.WEAPON_LARGE: "L",
    ComponentKind.AMMO_PRODUCER: "a",
    ComponentKind.ENERGY_PRODUCER: "e",
    ComponentKind.MEDICAL_BAY: "+",
}


class BoardRenderer:
    """Renders a grid as rows of single-character cells.

    Output format (5x5 board, own view):
           1 2 3 4 5
        A  . # e . .
        B  . X L . .
        ...

    Legend:
    - '.' = empty / untried water
    - 'X' = hit component (or hit cell on the enemy view)
    - 'r' = hit component under repair (own view only)
    - 'o' = miss
    - other symbols = intact components (see COMPONENT_SYMBOLS)
    """

    def render_own(self, grid: Grid) -> str:
        """Render a board from its owner's perspective."""
        return self._render(grid, self._own_symbol)

    def render_target(self, grid: Grid, reveal: bool = False) -> str:
        """Render an enemy board from the shooter's perspective.

        Args:
            grid: Enemy board
            reveal: Show unhit components too (debug view)
        """
        if reveal:
            return self._render(grid, self._revealed_symbol)
        return self._render(grid, self._target_symbol)

    def _render(self, grid: Grid, symbol) -> str:
        width = len(str(grid.size))
        header = "   " + " ".join(f"{col + 1:>{width}}" for col in range(grid.size))
        lines = [header]
        for row in range(grid.size):
            label = chr(ord("A") + row)
            cells = " ".join(
                f"{symbol(grid.cells[row][col]):>{width}}" for col in range(grid.size)
            )
            lines.append(f"{label}  {cells}")
        return "\n".join(lines)

    @staticmethod
    def _own_symbol(cell: Cell) -> str:
        if cell.is_miss:
            return "o"
        if cell.component is None:
            return "."
        if cell.is_hit:
            return "r" if cell.repair_turns_left else "X"
        return COMPONENT_SYMBOLS[cell.component.kind]

    @staticmethod
    def _target_symbol(cell: Cell) -> str:
        if cell.is_hit:
            return "X"
        if cell.is_miss:
            return "o"
        return "."

    @staticmethod
    def _revealed_symbol(cell: Cell) -> str:
        if cell.is_hit:
            return "X"
        if cell.is_miss:
            return "o"
        if cell.component is None:
            return "."
        return COMPONENT_SYMBOLS[cell.component.kind]
