from typing import Optional

from klondike.Core import (
    FOUNDATION_SLOT_ORDER,
    Card,
    CardMove,
    Core,
    DrawCard,
    FoundationMove,
    GameEvent,
    Position,
    RecycleWaste,
    RevealTop,
    WasteMove,
    topOf,
)
from klondike.Selection import SelectionController
from console_ui.view_model import CardView, CursorView, GameViewModel, StackView


class CoreAdapter:
    """Bridges the Core piles, the cursor and the game events to a renderer-friendly model."""

    @staticmethod
    def card_view(card: Card) -> CardView:
        return CardView(id=card.id, suit=int(card.suit), rank=card.rank, face_up=card.faceUp, label=card.gameStr())

    @staticmethod
    def _cursor_view(pos: Optional[Position]) -> Optional[CursorView]:
        if pos is None:
            return None
        return CursorView(x=pos.x, y=pos.y, top=pos.top)

    @staticmethod
    def snapshot(core: Core, controller: Optional[SelectionController] = None) -> GameViewModel:
        def stack_view(pile):
            return StackView(cards=tuple(CoreAdapter.card_view(card) for card in pile))

        waste_top = topOf(core.waste)
        cursor = None
        selection = "browsing"
        selected = None
        if controller is not None:
            cursor = CoreAdapter._cursor_view(controller.cursor)
            selection = controller.state.value
            selected = CoreAdapter._cursor_view(controller.selectedPosition)
        return GameViewModel(
            stock_count=len(core.stock),
            waste_top=None if waste_top is None else CoreAdapter.card_view(waste_top),
            foundations=tuple(stack_view(core.foundations[suit]) for suit in FOUNDATION_SLOT_ORDER),
            stacks=tuple(stack_view(column) for column in core.tableau),
            won=core.won,
            move_count=core.moveCount,
            cursor=cursor,
            selection=selection,
            selected=selected,
        )

    @staticmethod
    def describe_event(event: GameEvent) -> str:
        if isinstance(event, CardMove):
            noun = "card" if event.count == 1 else "cards"
            return f"Moved {event.count} {noun} from column {event.src + 1} to column {event.dest + 1}"
        if isinstance(event, WasteMove):
            return f"Moved {event.card} from waste to column {event.dest + 1}"
        if isinstance(event, FoundationMove):
            source = "waste" if event.source == "waste" else f"column {event.source + 1}"
            return f"Moved {event.card} from {source} to its foundation"
        if isinstance(event, DrawCard):
            return f"Drew {event.card}"
        if isinstance(event, RecycleWaste):
            return f"Recycled {event.count} cards back to stock"
        if isinstance(event, RevealTop):
            return f"Revealed a card in column {event.idx + 1}"
        return type(event).__name__
