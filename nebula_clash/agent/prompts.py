"""Prompts for the LLM advisory collaborators."""

MOVE_EVALUATION_SYSTEM_PROMPT = """You are a strategic expert evaluating shots in a \
battleship-like fleet battle on a square grid.

BOARD LEGEND:
- '.' untried cell
- 'X' cell where an enemy component was hit
- 'o' cell where a shot missed
Rows are lettered from A, columns are numbered from 1.

Ships are connected groups of components. A hit cell usually has more ship parts on its
orthogonal neighbours. Misses rule out cells. A high-value move is one that is likely to hit
an enemy component or that targets a strategically important location.

Answer whether the proposed move is high value and give a one-sentence reason."""

MOVE_EVALUATION_PROMPT = """Board State (your view of the enemy board):
{board_state}

Move to Evaluate: {move}"""

DIFFICULTY_SYSTEM_PROMPT = """You are an expert game designer who helps users adjust the \
difficulty of a game AI. Confirm the requested difficulty in one short sentence."""

DIFFICULTY_PROMPT = "Difficulty Level: {difficulty}"


def format_move_evaluation_prompt(board_state: str, move: str) -> str:
    """Fill in the move evaluation prompt."""
    return MOVE_EVALUATION_PROMPT.format(board_state=board_state, move=move)


def format_difficulty_prompt(difficulty: str) -> str:
    """Fill in the difficulty calibration prompt."""
    return DIFFICULTY_PROMPT.format(difficulty=difficulty)
