from __future__ import annotations

import argparse
import logging
import sys

from klondike.Core import Core, GameEvent
from klondike.Interface import Interface
from klondike.Selection import Command, SelectionController
from console_ui import settings_store
from console_ui.adapter import CoreAdapter
from console_ui.ui_config import CELL_WIDTH, CONTROLS_HELP, KEY_COMMANDS, TOP_SLOT_LABELS
from console_ui.view_model import CardView, GameViewModel

logger = logging.getLogger(__name__)


def parse_commands(line: str) -> tuple[list[Command], list[str]]:
    """Splits an input line into known commands and the tokens that matched none."""
    commands = []
    unknown = []
    for token in line.strip().lower().split():
        command = KEY_COMMANDS.get(token)
        if command is None:
            unknown.append(token)
        else:
            commands.append(command)
    return commands, unknown


def _cell(card: CardView | None, empty: str = "[  ]") -> str:
    text = empty if card is None else card.label
    return text.ljust(CELL_WIDTH)


def _mark(text: str, cursor: bool, selected: bool) -> str:
    if cursor:
        return ">" + text[:-1]
    if selected:
        return "*" + text[:-1]
    return text


def render_board(vm: GameViewModel) -> list[str]:
    """Plain-text board: top row, then the tableau row by row. '>' is the cursor, '*' the selection."""
    cursor = vm.cursor
    selected = vm.selected
    top_cells = [
        f"{vm.stock_count:>2}".ljust(CELL_WIDTH) if vm.stock_count else _cell(None),
        _cell(vm.waste_top),
    ]
    for stack in vm.foundations:
        top_cells.append(_cell(stack.cards[-1] if stack.cards else None))
    waste_selected = vm.selection == "waste_card_selected"
    line = ""
    for x, text in enumerate(top_cells):
        on_cursor = cursor is not None and cursor.top and cursor.x == x
        line += _mark(text, on_cursor, waste_selected and x == 1)
    lines = ["".join(label.ljust(CELL_WIDTH) for label in TOP_SLOT_LABELS), line, ""]

    lines.append("".join(f"{x + 1}".ljust(CELL_WIDTH) for x in range(len(vm.stacks))))
    depth = max([len(stack.cards) for stack in vm.stacks] + [1])
    for y in range(depth):
        line = ""
        for x, stack in enumerate(vm.stacks):
            if y < len(stack.cards):
                text = _cell(stack.cards[y])
            elif y == 0:
                text = _cell(None)
            else:
                text = " " * CELL_WIDTH
            on_cursor = cursor is not None and not cursor.top and cursor.x == x and cursor.y == y
            in_selection = selected is not None and selected.x == x and y >= selected.y and y < len(stack.cards)
            line += _mark(text, on_cursor, in_selection)
        lines.append(line.rstrip())
    return lines


class CommandLineInterface(Interface):

    def __init__(self, show_controls=True, out=None):
        super().__init__()
        self.controller: SelectionController | None = None
        self.show_controls = show_controls
        self.out = out if out is not None else sys.stdout
        self.messages: list[str] = []

    def write(self, text=""):
        self.out.write(text + "\n")

    def printAll(self):
        vm = CoreAdapter.snapshot(self.core, self.controller)
        self.write(f"Moves: {vm.move_count}")
        for line in render_board(vm):
            self.write(line)
        for message in self.messages:
            self.write(message)
        self.messages.clear()
        if self.show_controls:
            self.write()
            self.write(CONTROLS_HELP)
        self.write()

    def onStart(self):
        self.write("Game started!")

    def onEvent(self, event: GameEvent):
        self.messages.append(CoreAdapter.describe_event(event))

    def onRestore(self, kind: str):
        self.messages.append("Undid last move" if kind == "undo" else "Redid last move")

    def onWin(self):
        self.messages.append("Congratulations! You've won!")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Klondike Solitaire on the command line.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible deal.")
    parser.add_argument("--settings", type=str, default=None, help="Path to a settings.ini file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging.")
    return parser.parse_args(argv)


def run(core: Core, ui: CommandLineInterface, lines) -> None:
    """Feeds input lines to the selection controller until quit, win, or end of input."""
    controller = ui.controller
    ui.printAll()
    for line in lines:
        commands, unknown = parse_commands(line)
        for token in unknown:
            ui.messages.append(f"Unknown key: {token}")
        for command in commands:
            outcome = controller.handle(command)
            if not outcome:
                ui.messages.append(outcome.message)
            elif outcome.moves:
                ui.messages.append(f"Auto-completed {outcome.moves} moves")
            if controller.quitRequested:
                return
        ui.printAll()
        if core.won:
            return


def _stdin_lines():
    while True:
        try:
            yield input("> ")
        except (EOFError, KeyboardInterrupt):
            return


def main(argv=None) -> None:
    args = parse_args(argv)
    settings = settings_store.load_settings(args.settings)
    level = logging.DEBUG if args.verbose else getattr(logging, settings["log_level"])
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    config = settings_store.game_config(settings)
    if args.seed is not None:
        config.seed = args.seed

    core = Core()
    ui = CommandLineInterface(show_controls=settings["show_controls"] == "yes")
    ui.controller = SelectionController(core)
    core.registerInterface(ui)
    core.initialize(config)
    run(core, ui, _stdin_lines())
    logger.info("Session ended after %d moves (won=%s)", core.moveCount, core.won)


if __name__ == "__main__":
    main()
