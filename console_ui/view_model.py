from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CardView:
    id: int
    suit: int
    rank: int
    face_up: bool
    label: str


@dataclass(frozen=True)
class StackView:
    cards: tuple[CardView, ...]


@dataclass(frozen=True)
class CursorView:
    x: int
    y: int
    top: bool


@dataclass(frozen=True)
class GameViewModel:
    stock_count: int
    waste_top: Optional[CardView]
    foundations: tuple[StackView, ...]
    stacks: tuple[StackView, ...]
    won: bool
    move_count: int
    cursor: Optional[CursorView] = None
    selection: str = "browsing"
    selected: Optional[CursorView] = None
