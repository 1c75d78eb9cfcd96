import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from klondike.History import HistoryRecorder
from klondike.Outcome import MoveReason, Outcome

logger = logging.getLogger(__name__)

TABLEAU_COUNT = 7
NUM_PER_SUIT = 13
ACE = 0
KING = NUM_PER_SUIT - 1
RANKS = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")
SUIT_SYMBOLS = ("♥", "♦", "♣", "♠")

# top row: stock, waste, then one slot per foundation
STOCK_SLOT = 0
WASTE_SLOT = 1
TOP_SLOT_COUNT = 6


def lastOf(lst):
    return lst[len(lst) - 1]


def topOf(pile):
    if len(pile) == 0:
        return None
    return lastOf(pile)


class Suit(IntEnum):
    HEARTS = 0
    DIAMONDS = 1
    CLUBS = 2
    SPADES = 3

    @property
    def symbol(self):
        return SUIT_SYMBOLS[self]

    def isRed(self):
        return self in (Suit.HEARTS, Suit.DIAMONDS)


FOUNDATION_SLOT_ORDER = (Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS)


def foundationSlotSuit(x: int) -> Optional[Suit]:
    idx = x - 2
    if 0 <= idx < len(FOUNDATION_SLOT_ORDER):
        return FOUNDATION_SLOT_ORDER[idx]
    return None


class Card:
    """
    A playing card. Suit and rank never change once the card exists; only
    ``faceUp`` does. ``rank`` is the index into RANKS, so Ace is 0 and King 12.
    """

    def __init__(self, suit, rank, faceUp=False):
        self._suit = Suit(suit)
        self._rank = rank
        self.faceUp = faceUp

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def rank(self) -> int:
        return self._rank

    @property
    def id(self):
        return self._suit * NUM_PER_SUIT + self._rank

    def key(self):
        return self._suit, self._rank

    def isRed(self):
        return self._suit.isRed()

    def color(self):
        if self.isRed():
            return "red"
        return "black"

    def flip(self):
        self.faceUp = not self.faceUp

    def copy(self):
        return Card(self._suit, self._rank, self.faceUp)

    def gameStr(self):
        if not self.faceUp:
            return "--"
        return str(self)

    def __eq__(self, other):
        if not isinstance(other, Card):
            return NotImplemented
        return self.key() == other.key() and self.faceUp == other.faceUp

    __hash__ = None

    def __str__(self):
        return RANKS[self._rank] + self._suit.symbol

    def __repr__(self):
        if self.faceUp:
            return f"Card({self})"
        return f"Card({self}, down)"


@dataclass(frozen=True)
class Position:
    """
    A cursor address. With ``top`` unset, ``x`` is a tableau column and ``y`` the
    depth inside it; with ``top`` set, ``x`` is a top-row slot (0 stock,
    1 waste, 2..5 foundations in FOUNDATION_SLOT_ORDER) and ``y`` is unused.
    """
    x: int
    y: int = 0
    top: bool = False


def newDeck():
    return [Card(suit, rank) for suit in Suit for rank in range(NUM_PER_SUIT)]


FULL_DECK_KEYS = sorted(card.key() for card in newDeck())


class GameState:
    """The piles of one game. Owned by a single Core; also used as a history snapshot."""

    def __init__(self, tableau=None, stock=None, waste=None, foundations=None):
        self.tableau = tableau if tableau is not None else [[] for _ in range(TABLEAU_COUNT)]
        self.stock = stock if stock is not None else []
        self.waste = waste if waste is not None else []
        self.foundations = foundations if foundations is not None else [[] for _ in Suit]

    def clone(self):
        def copyPile(pile):
            return [card.copy() for card in pile]

        return GameState(
            [copyPile(column) for column in self.tableau],
            copyPile(self.stock),
            copyPile(self.waste),
            [copyPile(pile) for pile in self.foundations],
        )

    def piles(self):
        yield from self.tableau
        yield self.stock
        yield self.waste
        yield from self.foundations

    def allCards(self):
        for pile in self.piles():
            yield from pile

    def cardCount(self):
        return sum(len(pile) for pile in self.piles())

    def foundationCount(self):
        return sum(len(pile) for pile in self.foundations)

    def isWon(self):
        return all(len(pile) == NUM_PER_SUIT for pile in self.foundations)

    def checkCardCount(self):
        keys = sorted(card.key() for card in self.allCards())
        if keys != FULL_DECK_KEYS:
            raise AssertionError(f"card set corrupted: {len(keys)} cards present")

    def __eq__(self, other):
        if not isinstance(other, GameState):
            return NotImplemented
        return (self.tableau == other.tableau and self.stock == other.stock
                and self.waste == other.waste and self.foundations == other.foundations)

    __hash__ = None


def dealGame(rng=None):
    """
    Shuffles a fresh deck and deals it row by row: column i ends up with i + 1
    cards, only the last one face up. The 24 cards left over become the stock.
    """
    deck = newDeck()
    (rng or random).shuffle(deck)
    tableau = [[] for _ in range(TABLEAU_COUNT)]
    for i in range(TABLEAU_COUNT):
        for j in range(i, TABLEAU_COUNT):
            tableau[j].append(deck.pop())
        lastOf(tableau[i]).faceUp = True
    return GameState(tableau, deck, [], None)


def tableauRejection(card: Card, destTop: Optional[Card]) -> Optional[MoveReason]:
    if destTop is None:
        if card.rank == KING:
            return None
        return MoveReason.EMPTY_COLUMN_NEEDS_KING
    if not destTop.faceUp:
        return MoveReason.FACE_DOWN_DESTINATION
    if card.isRed() == destTop.isRed():
        return MoveReason.WRONG_COLOR
    if card.rank + 1 != destTop.rank:
        return MoveReason.WRONG_RANK
    return None


def tableauMoveAllowed(card: Card, destTop: Optional[Card]) -> bool:
    return tableauRejection(card, destTop) is None


def foundationRejection(card: Card, foundationTop: Optional[Card]) -> Optional[MoveReason]:
    # the suit is implied: callers always pass foundations[card.suit]
    if foundationTop is None:
        if card.rank == ACE:
            return None
        return MoveReason.FOUNDATION_WRONG_START
    if card.rank != foundationTop.rank + 1:
        return MoveReason.FOUNDATION_WRONG_SEQUENCE
    return None


def foundationMoveAllowed(card: Card, foundationTop: Optional[Card]) -> bool:
    return foundationRejection(card, foundationTop) is None


class GameConfig:
    def __init__(self, seed=None):
        self.seed = seed

    def makeRandom(self):
        if self.seed is None:
            return random.Random()
        return random.Random(self.seed)


class GameEvent:
    pass


class CardMove(GameEvent):
    def __init__(self, src: int, start: int, dest: int, count: int):
        self.src = src
        self.start = start
        self.dest = dest
        self.count = count


class WasteMove(GameEvent):
    def __init__(self, card: Card, dest: int):
        self.card = card
        self.dest = dest


class FoundationMove(GameEvent):
    def __init__(self, card: Card, source):
        self.card = card
        self.source = source  # tableau column index, or "waste"


class DrawCard(GameEvent):
    def __init__(self, card: Card):
        self.card = card


class RecycleWaste(GameEvent):
    def __init__(self, count: int):
        self.count = count


class RevealTop(GameEvent):
    def __init__(self, idx: int):
        self.idx = idx


class Core:
    """
    The game controller. Every mutating operation validates first, then calls
    history.saveState(), then mutates; a refused move returns a failed Outcome
    and leaves the piles untouched.
    """
    DEFAULT_CONFIG = GameConfig()

    def __init__(self):
        self.interface = None
        self.state: GameState = None
        self.history: HistoryRecorder = None
        self.won = False
        self.moveCount = 0

    def registerInterface(self, interface):
        self.interface = interface
        interface.core = self

    def initialize(self, gameConfig: GameConfig = DEFAULT_CONFIG):
        self.state = dealGame(gameConfig.makeRandom())
        self.history = HistoryRecorder(self)
        self.won = False
        self.moveCount = 0
        logger.info("New game dealt (seed=%s)", gameConfig.seed)
        if self.interface is not None:
            self.interface.onStart()

    def loadState(self, state: GameState):
        """Starts from a prepared position, with an empty history."""
        self.state = state
        self.history = HistoryRecorder(self)
        self.won = state.isWon()
        self.moveCount = 0
        if self.interface is not None:
            self.interface.onStart()

    @property
    def tableau(self):
        return self.state.tableau

    @property
    def stock(self):
        return self.state.stock

    @property
    def waste(self):
        return self.state.waste

    @property
    def foundations(self):
        return self.state.foundations

    def pileAt(self, pos: Position):
        if pos.top:
            if pos.x == STOCK_SLOT:
                return self.state.stock
            if pos.x == WASTE_SLOT:
                return self.state.waste
            suit = foundationSlotSuit(pos.x)
            if suit is None:
                return None
            return self.state.foundations[suit]
        if 0 <= pos.x < TABLEAU_COUNT:
            return self.state.tableau[pos.x]
        return None

    def cardAt(self, pos: Position) -> Optional[Card]:
        pile = self.pileAt(pos)
        if pile is None:
            return None
        if pos.top:
            return topOf(pile)
        if 0 <= pos.y < len(pile):
            return pile[pos.y]
        return None

    def __emit(self, event: GameEvent):
        if self.interface is not None:
            self.interface.onEvent(event)

    def __refuse(self, outcome: Outcome) -> Outcome:
        logger.debug("Refused: %s", outcome.message)
        return outcome

    def __finish(self, event: GameEvent) -> Outcome:
        self.moveCount += 1
        self.__emit(event)
        return Outcome.success()

    def __revealTop(self, idx: int):
        column = self.state.tableau[idx]
        if len(column) > 0 and not lastOf(column).faceUp:
            lastOf(column).faceUp = True
            self.__emit(RevealTop(idx))

    def draw(self) -> Outcome:
        state = self.state
        if not state.stock and not state.waste:
            return self.__refuse(Outcome.invalid(MoveReason.NOTHING_TO_DRAW))
        self.history.saveState()
        if not state.stock:
            count = len(state.waste)
            for card in state.waste:
                card.faceUp = False
            state.stock.extend(reversed(state.waste))
            state.waste.clear()
            logger.debug("Recycled %d waste cards back to stock", count)
            return self.__finish(RecycleWaste(count))
        card = state.stock.pop()
        card.faceUp = True
        state.waste.append(card)
        logger.debug("Drew %s", card)
        return self.__finish(DrawCard(card))

    def moveTableauToTableau(self, src: Position, dest: Position) -> Outcome:
        tableau = self.state.tableau
        if src.top or dest.top or not (0 <= src.x < TABLEAU_COUNT and 0 <= dest.x < TABLEAU_COUNT):
            return self.__refuse(Outcome.invalid(MoveReason.BAD_DESTINATION))
        source = tableau[src.x]
        if not 0 <= src.y < len(source):
            return self.__refuse(Outcome.invalid(MoveReason.NO_CARD))
        if src.x == dest.x:
            return self.__refuse(Outcome.invalid(MoveReason.SAME_COLUMN_MOVE))
        card = source[src.y]
        if not card.faceUp:
            return self.__refuse(Outcome.invalid(MoveReason.FACE_DOWN_SOURCE))
        destination = tableau[dest.x]
        # the run above card is already ordered, so only its base is checked
        reason = tableauRejection(card, topOf(destination))
        if reason is not None:
            return self.__refuse(Outcome.invalid(reason))

        self.history.saveState()
        run = source[src.y:]
        del source[src.y:]
        destination.extend(run)
        logger.debug("Moved %d card(s) from column %d to column %d", len(run), src.x, dest.x)
        outcome = self.__finish(CardMove(src.x, src.y, dest.x, len(run)))
        self.__revealTop(src.x)
        self.checkWinCondition()
        return outcome

    def moveWasteToTableau(self, dest: Position) -> Outcome:
        waste = self.state.waste
        if dest.top or not 0 <= dest.x < TABLEAU_COUNT:
            return self.__refuse(Outcome.invalid(MoveReason.BAD_DESTINATION))
        if not waste:
            return self.__refuse(Outcome.invalid(MoveReason.NO_CARD))
        card = lastOf(waste)
        destination = self.state.tableau[dest.x]
        reason = tableauRejection(card, topOf(destination))
        if reason is not None:
            return self.__refuse(Outcome.invalid(reason))

        self.history.saveState()
        destination.append(waste.pop())
        logger.debug("Moved %s from waste to column %d", card, dest.x)
        outcome = self.__finish(WasteMove(card, dest.x))
        self.checkWinCondition()
        return outcome

    def moveToFoundation(self, card: Card, source) -> Outcome:
        """
        Moves ``card``, which must be the top card of ``source`` (the waste or a
        tableau column), onto the foundation of its own suit.
        """
        if card is None or not source:
            return self.__refuse(Outcome.invalid(MoveReason.NO_CARD))
        if lastOf(source) is not card:
            return self.__refuse(Outcome.invalid(MoveReason.NOT_TOP_CARD))
        if not card.faceUp:
            return self.__refuse(Outcome.invalid(MoveReason.FACE_DOWN_SOURCE))
        foundation = self.state.foundations[card.suit]
        reason = foundationRejection(card, topOf(foundation))
        if reason is not None:
            return self.__refuse(Outcome.invalid(reason))

        column = self.__columnIndex(source)
        self.history.saveState()
        foundation.append(source.pop())
        logger.debug("Moved %s to its foundation", card)
        outcome = self.__finish(FoundationMove(card, "waste" if column is None else column))
        if column is not None:
            self.__revealTop(column)
        self.checkWinCondition()
        return outcome

    def moveToFoundationFrom(self, pos: Position) -> Outcome:
        if pos.top and pos.x != WASTE_SLOT:
            return self.__refuse(Outcome.invalid(MoveReason.BAD_DESTINATION))
        return self.moveToFoundation(self.cardAt(pos), self.pileAt(pos))

    def __columnIndex(self, pile):
        for idx, column in enumerate(self.state.tableau):
            if column is pile:
                return idx
        return None

    def autoComplete(self) -> Outcome:
        moves = 0
        while self.__autoCompleteStep():
            moves += 1
        if moves > 0:
            logger.info("Auto-completed %d moves", moves)
        else:
            logger.info("No moves available for auto-complete")
        return Outcome.success(moves)

    def __autoCompleteStep(self):
        state = self.state
        for pile in state.tableau + [state.waste]:
            card = topOf(pile)
            if card is None or not card.faceUp:
                continue
            if foundationMoveAllowed(card, topOf(state.foundations[card.suit])):
                return bool(self.moveToFoundation(card, pile))
        return False

    def autoMoveCard(self, pos: Position) -> Outcome:
        """
        Sends the card at ``pos`` (the waste top when ``pos`` is the waste slot)
        to its foundation if it can go there, otherwise to the first tableau
        column that accepts it.
        """
        fromWaste = pos.top
        if fromWaste and pos.x != WASTE_SLOT:
            return self.__refuse(Outcome.noValidMove())
        card = self.cardAt(pos)
        if card is None or not card.faceUp:
            return self.__refuse(Outcome.noValidMove())
        source = self.pileAt(pos)

        if lastOf(source) is card and foundationMoveAllowed(card, topOf(self.state.foundations[card.suit])):
            return self.moveToFoundation(card, source)
        for col in range(TABLEAU_COUNT):
            if not fromWaste and col == pos.x:
                continue
            if tableauMoveAllowed(card, topOf(self.state.tableau[col])):
                if fromWaste:
                    return self.moveWasteToTableau(Position(col))
                return self.moveTableauToTableau(pos, Position(col))
        return self.__refuse(Outcome.noValidMove())

    def checkWinCondition(self) -> bool:
        isWon = self.state.isWon()
        if isWon and not self.won:
            self.won = True
            self.history.saveState()
            logger.info("Game won after %d moves", self.moveCount)
            if self.interface is not None:
                self.interface.onWin()
        return isWon

    def undo(self) -> Outcome:
        return self.__afterRestore(self.history.undo(), "undo")

    def redo(self) -> Outcome:
        return self.__afterRestore(self.history.redo(), "redo")

    def __afterRestore(self, outcome: Outcome, kind: str) -> Outcome:
        if not outcome:
            return self.__refuse(outcome)
        self.won = self.state.isWon()
        if self.interface is not None:
            self.interface.onRestore(kind)
        return outcome
