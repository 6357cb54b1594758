"""Game rule violations.

Every error here is recoverable: the command that raised it is rejected and
the game state is left as it was. ``title`` is a short headline suitable for
a toast, the message is the detail line.
"""


class GameRuleError(ValueError):
    """Base class for a command that breaks a game rule."""

    title = "Invalid Action"

    def __init__(self, message: str, title: str | None = None):
        super().__init__(message)
        self.message = message
        if title is not None:
            self.title = title


class InvalidPlacement(GameRuleError):
    """Occupied or off-board cell, or not enough budget."""

    title = "Invalid Placement"


class InvalidSelection(GameRuleError):
    """Selecting a kind, weapon or resource that cannot be used right now."""

    title = "Invalid Selection"


class NotEnergized(GameRuleError):
    title = "Not Energized"


class WeaponNotEnergized(NotEnergized):
    title = "Weapon Not Energized"


class InsufficientAmmo(GameRuleError):
    title = "Not Enough Ammo"


class WeaponNotReady(InsufficientAmmo):
    title = "Weapon Not Ready"


class InvalidTarget(GameRuleError):
    """Allocation across ships or onto the wrong kind, or an unusable attack target."""

    title = "Invalid Target"


class AlreadyFull(GameRuleError):
    title = "Weapon Fully Charged"
