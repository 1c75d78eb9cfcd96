from klondike.Selection import (
    AutoComplete,
    AutoMove,
    Cancel,
    Direction,
    Draw,
    MoveCursor,
    Quit,
    Redo,
    Select,
    Undo,
)

TOP_SLOT_LABELS = ("Stock", "Waste", "♠", "♥", "♦", "♣")
LOG_LEVEL_ORDER = ("DEBUG", "INFO", "WARNING", "ERROR")
CELL_WIDTH = 6

# One token per command; several tokens may share a line ("l l space").
KEY_COMMANDS = {
    "h": MoveCursor(Direction.LEFT),
    "left": MoveCursor(Direction.LEFT),
    "l": MoveCursor(Direction.RIGHT),
    "right": MoveCursor(Direction.RIGHT),
    "k": MoveCursor(Direction.UP),
    "up": MoveCursor(Direction.UP),
    "j": MoveCursor(Direction.DOWN),
    "down": MoveCursor(Direction.DOWN),
    "space": Select(),
    "enter": Select(),
    ".": Select(),
    "x": Cancel(),
    "esc": Cancel(),
    "d": Draw(),
    "u": Undo(),
    "r": Redo(),
    "a": AutoComplete(),
    "m": AutoMove(),
    "q": Quit(),
    "quit": Quit(),
}

CONTROLS_HELP = (
    "h/j/k/l or left/down/up/right - Move cursor    space/enter/. - Select/Place    x/esc - Cancel\n"
    "d - Draw    u - Undo    r - Redo    a - Auto-complete    m - Auto-move    q - Quit"
)
