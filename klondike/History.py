import logging

from klondike.Outcome import Outcome

logger = logging.getLogger(__name__)


class HistoryRecorder:
    """
    Linear undo/redo over full snapshots of the core's GameState.

    Every mutating operation of the core calls saveState() before it touches
    any pile. A snapshot is never shared with the live state: it is cloned on
    the way in and handed over only after it has been popped.
    """

    def __init__(self, core):
        self.core = core
        self.undoStack = []
        self.redoStack = []

    def saveState(self):
        self.undoStack.append(self.core.state.clone())
        self.redoStack.clear()

    def canUndo(self) -> bool:
        return len(self.undoStack) > 0

    def canRedo(self) -> bool:
        return len(self.redoStack) > 0

    def undo(self) -> Outcome:
        if not self.undoStack:
            return Outcome.noHistory("Nothing to undo")
        self.redoStack.append(self.core.state.clone())
        self.core.state = self.undoStack.pop()
        logger.debug("Undid last move, %d left", len(self.undoStack))
        return Outcome.success()

    def redo(self) -> Outcome:
        if not self.redoStack:
            return Outcome.noHistory("Nothing to redo")
        self.undoStack.append(self.core.state.clone())
        self.core.state = self.redoStack.pop()
        logger.debug("Redid last move, %d left", len(self.redoStack))
        return Outcome.success()

    def clear(self):
        self.undoStack.clear()
        self.redoStack.clear()
