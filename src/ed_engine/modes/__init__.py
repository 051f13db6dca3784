"""Mode manager and the Command/Input modes."""

from .base_mode import Action, Mode, ModeBus, ModeContext, ModeResult
from .command_mode import CommandMode
from .input_mode import InputMode
from .mode_manager import ModeManager

__all__ = [
    "Action",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "CommandMode",
    "InputMode",
    "ModeManager",
]
