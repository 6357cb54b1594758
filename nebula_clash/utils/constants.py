"""Game configuration constants."""

# Board sizes and their placement budgets
BOARD_SIZES = (5, 10, 15)
POINTS_BY_BOARD_SIZE = {5: 20, 10: 50, 15: 100}
DEFAULT_BOARD_SIZE = 10

# AI difficulty levels
DIFFICULTIES = ("easy", "medium", "hard")
DEFAULT_DIFFICULTY = "medium"

# Sides
HUMAN = "human"
AI = "ai"

# Repairs
REPAIR_TURNS = 3  # Turns a medical bay needs to restore a hit cell

# Random placement
RANDOM_PLACEMENT_ATTEMPTS = 200

# Targeting
ADVISORY_SAMPLE_SIZE = 5  # Candidates scored by the advisory oracle on hard
ADVISORY_TIMEOUT_SECONDS = 10.0

# Persistence
SNAPSHOT_VERSION = 1
DEFAULT_STATE_FILE = "nebula_clash_state.json"

# Simulations
RNG_SEED_DEFAULT = 42  # Default seed for the command line runner
