import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from klondike.Core import (
    STOCK_SLOT,
    TABLEAU_COUNT,
    TOP_SLOT_COUNT,
    WASTE_SLOT,
    Core,
    Position,
    foundationSlotSuit,
)
from klondike.Outcome import MoveReason, Outcome

logger = logging.getLogger(__name__)


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class Command:
    pass


@dataclass(frozen=True)
class MoveCursor(Command):
    direction: Direction


@dataclass(frozen=True)
class Select(Command):
    pass


@dataclass(frozen=True)
class Cancel(Command):
    pass


@dataclass(frozen=True)
class Draw(Command):
    pass


@dataclass(frozen=True)
class Undo(Command):
    pass


@dataclass(frozen=True)
class Redo(Command):
    pass


@dataclass(frozen=True)
class AutoComplete(Command):
    pass


@dataclass(frozen=True)
class AutoMove(Command):
    pass


@dataclass(frozen=True)
class Quit(Command):
    pass


class SelectionState(Enum):
    BROWSING = "browsing"
    TABLEAU_CARD_SELECTED = "tableau_card_selected"
    WASTE_CARD_SELECTED = "waste_card_selected"


def firstFaceUp(column):
    for y, card in enumerate(column):
        if card.faceUp:
            return y
    return 0


def restingRow(column, y):
    """
    Row the cursor lands on when it enters ``column`` at depth ``y``: the same
    row if that card is face up, else the next face-up card below, else the
    nearest face-up card above, else row 0.
    """
    newY = max(0, y)
    while newY < len(column) and not column[newY].faceUp:
        newY += 1
    if newY >= len(column):
        newY = y
        while newY >= 0 and (newY >= len(column) or not column[newY].faceUp):
            newY -= 1
    return max(0, newY)


class SelectionController:
    """
    Turns abstract commands into cursor movement and moves on a Core.

    States: BROWSING, TABLEAU_CARD_SELECTED (selectedPosition set) and
    WASTE_CARD_SELECTED. A second Select always goes back to BROWSING, whether
    the move it attempted succeeded or not.
    """

    def __init__(self, core: Core):
        self.core = core
        self.cursor = Position(0, 0)
        self.state = SelectionState.BROWSING
        self.selectedPosition: Optional[Position] = None
        self.quitRequested = False

    @property
    def isInTableau(self):
        return not self.cursor.top

    @property
    def hasSelection(self):
        return self.state is SelectionState.TABLEAU_CARD_SELECTED

    @property
    def isWasteSelected(self):
        return self.state is SelectionState.WASTE_CARD_SELECTED

    def handle(self, command: Command) -> Outcome:
        if isinstance(command, MoveCursor):
            return self.moveCursor(command.direction)
        if isinstance(command, Select):
            return self.select()
        if isinstance(command, Cancel):
            return self.cancel()
        if isinstance(command, Quit):
            self.quitRequested = True
            return Outcome.success()

        core = self.core
        if isinstance(command, Draw):
            outcome = core.draw()
        elif isinstance(command, Undo):
            outcome = core.undo()
        elif isinstance(command, Redo):
            outcome = core.redo()
        elif isinstance(command, AutoComplete):
            outcome = core.autoComplete()
        elif isinstance(command, AutoMove):
            outcome = core.autoMoveCard(self.cursor)
        else:
            raise TypeError(f"unknown command: {command!r}")
        # piles may have changed under a pending selection
        self.__browse()
        self.settleCursor()
        return outcome

    def select(self) -> Outcome:
        if self.state is SelectionState.BROWSING:
            self.__pick()
            return Outcome.success()
        if self.state is SelectionState.TABLEAU_CARD_SELECTED:
            outcome = self.__placeTableauSelection()
        else:
            outcome = self.__placeWasteSelection()
        self.__browse()
        self.settleCursor()
        return outcome

    def cancel(self) -> Outcome:
        self.__browse()
        return Outcome.success()

    def __browse(self):
        self.state = SelectionState.BROWSING
        self.selectedPosition = None

    def __pick(self):
        core = self.core
        cursor = self.cursor
        if cursor.top:
            if cursor.x == WASTE_SLOT and core.waste:
                self.state = SelectionState.WASTE_CARD_SELECTED
                column = core.tableau[0]
                self.cursor = Position(0, len(column) - 1 if column else 0)
            return
        card = core.cardAt(cursor)
        if card is not None and card.faceUp:
            self.state = SelectionState.TABLEAU_CARD_SELECTED
            self.selectedPosition = cursor
            logger.debug("Selected %s at column %d", card, cursor.x)

    def __placeTableauSelection(self):
        src = self.selectedPosition
        if not self.cursor.top:
            return self.core.moveTableauToTableau(src, self.cursor)
        if foundationSlotSuit(self.cursor.x) is not None:
            return self.core.moveToFoundationFrom(src)
        return Outcome.invalid(MoveReason.BAD_DESTINATION)

    def __placeWasteSelection(self):
        if not self.cursor.top:
            return self.core.moveWasteToTableau(self.cursor)
        if foundationSlotSuit(self.cursor.x) is not None:
            return self.core.moveToFoundationFrom(Position(WASTE_SLOT, top=True))
        return Outcome.invalid(MoveReason.BAD_DESTINATION)

    def moveCursor(self, direction: Direction) -> Outcome:
        if direction is Direction.UP:
            self.__up()
        elif direction is Direction.DOWN:
            self.__down()
        elif direction is Direction.LEFT:
            self.__sideways(-1)
        else:
            self.__sideways(1)
        return Outcome.success()

    def __up(self):
        if self.cursor.top:
            return
        column = self.core.tableau[self.cursor.x]
        y = min(self.cursor.y, len(column)) - 1
        while y >= 0 and not column[y].faceUp:
            y -= 1
        if y >= 0:
            self.cursor = Position(self.cursor.x, y)
        else:
            self.cursor = Position(STOCK_SLOT, top=True)

    def __down(self):
        tableau = self.core.tableau
        if self.cursor.top:
            self.cursor = Position(0, firstFaceUp(tableau[0]))
            return
        column = tableau[self.cursor.x]
        y = self.cursor.y + 1
        while y < len(column) and not column[y].faceUp:
            y += 1
        if y < len(column):
            self.cursor = Position(self.cursor.x, y)

    def __sideways(self, step):
        if self.cursor.top:
            self.cursor = Position((self.cursor.x + step) % TOP_SLOT_COUNT, top=True)
            return
        x = (self.cursor.x + step) % TABLEAU_COUNT
        self.cursor = Position(x, restingRow(self.core.tableau[x], self.cursor.y))

    def settleCursor(self):
        if self.cursor.top:
            return
        column = self.core.tableau[self.cursor.x]
        self.cursor = Position(self.cursor.x, restingRow(column, self.cursor.y))
