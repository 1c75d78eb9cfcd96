from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    INVALID_MOVE = "Invalid move"
    NO_HISTORY = "No history"
    NO_VALID_MOVE = "No valid move for this card"


class MoveReason(Enum):
    WRONG_RANK = "Cards must be in descending order (e.g., 8 on 9)"
    WRONG_COLOR = "Cards must alternate colors (red/black)"
    EMPTY_COLUMN_NEEDS_KING = "Only Kings can be placed in empty columns"
    FACE_DOWN_SOURCE = "Can only move face-up cards"
    SAME_COLUMN_MOVE = "Cannot move cards to the same column"
    FOUNDATION_WRONG_START = "Only Aces can start a foundation pile"
    FOUNDATION_WRONG_SEQUENCE = "Cards in foundation must be in ascending order of same suit"
    FACE_DOWN_DESTINATION = "Destination card is face down"
    NO_CARD = "There is no card to move"
    NOT_TOP_CARD = "Only the top card of a pile can go to a foundation"
    NOTHING_TO_DRAW = "Stock and waste are both empty"
    BAD_DESTINATION = "Cards can only be placed on the tableau or a foundation"


@dataclass(frozen=True)
class Outcome:
    """
    Result of an engine operation. Truthy on success, so callers can write
    ``if not core.draw(): ...`` the same way they test a bool.
    """
    kind: Optional[ErrorKind] = None
    reason: Optional[MoveReason] = None
    note: str = ""
    moves: int = 0

    @property
    def ok(self) -> bool:
        return self.kind is None

    def __bool__(self):
        return self.ok

    @property
    def message(self) -> str:
        if self.ok:
            return ""
        if self.note:
            return self.note
        if self.reason is not None:
            return self.reason.value
        return self.kind.value

    @staticmethod
    def success(moves=0):
        return Outcome(moves=moves)

    @staticmethod
    def invalid(reason: MoveReason):
        return Outcome(kind=ErrorKind.INVALID_MOVE, reason=reason)

    @staticmethod
    def noHistory(note=""):
        return Outcome(kind=ErrorKind.NO_HISTORY, note=note)

    @staticmethod
    def noValidMove():
        return Outcome(kind=ErrorKind.NO_VALID_MOVE)
