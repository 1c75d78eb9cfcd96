import unittest

from klondike.Core import (
    Card,
    CardMove,
    Core,
    DrawCard,
    FoundationMove,
    GameConfig,
    GameState,
    RecycleWaste,
    RevealTop,
    Suit,
    WasteMove,
)
from klondike.Selection import Select, SelectionController
from console_ui.adapter import CoreAdapter


class ConsoleAdapterTestCase(unittest.TestCase):
    def test_snapshot_empty_core(self):
        core = Core()
        core.loadState(GameState())

        vm = CoreAdapter.snapshot(core)
        self.assertEqual(0, vm.stock_count)
        self.assertIsNone(vm.waste_top)
        self.assertEqual(7, len(vm.stacks))
        self.assertEqual(4, len(vm.foundations))
        self.assertFalse(vm.won)
        self.assertIsNone(vm.cursor)
        self.assertEqual("browsing", vm.selection)

    def test_snapshot_dealt_game_with_selection(self):
        core = Core()
        core.initialize(GameConfig(1))
        controller = SelectionController(core)
        controller.handle(Select())

        vm = CoreAdapter.snapshot(core, controller)
        self.assertEqual(24, vm.stock_count)
        self.assertEqual([1, 2, 3, 4, 5, 6, 7], [len(s.cards) for s in vm.stacks])
        self.assertEqual("--", vm.stacks[6].cards[0].label)
        self.assertTrue(vm.stacks[6].cards[-1].face_up)
        self.assertEqual("tableau_card_selected", vm.selection)
        self.assertEqual(0, vm.selected.x)
        self.assertFalse(vm.cursor.top)

    def test_foundations_follow_slot_order(self):
        foundations = [[] for _ in Suit]
        foundations[Suit.SPADES] = [Card(Suit.SPADES, 0, faceUp=True)]
        core = Core()
        core.loadState(GameState(foundations=foundations))
        vm = CoreAdapter.snapshot(core)
        self.assertEqual("A♠", vm.foundations[0].cards[-1].label)

    def test_event_descriptions(self):
        card = Card(Suit.HEARTS, 9, faceUp=True)
        self.assertEqual("Moved 2 cards from column 1 to column 3", CoreAdapter.describe_event(CardMove(0, 1, 2, 2)))
        self.assertEqual("Moved 10♥ from waste to column 5", CoreAdapter.describe_event(WasteMove(card, 4)))
        self.assertEqual("Moved 10♥ from waste to its foundation", CoreAdapter.describe_event(FoundationMove(card, "waste")))
        self.assertEqual("Moved 10♥ from column 2 to its foundation", CoreAdapter.describe_event(FoundationMove(card, 1)))
        self.assertEqual("Drew 10♥", CoreAdapter.describe_event(DrawCard(card)))
        self.assertEqual("Recycled 5 cards back to stock", CoreAdapter.describe_event(RecycleWaste(5)))
        self.assertEqual("Revealed a card in column 7", CoreAdapter.describe_event(RevealTop(6)))


if __name__ == "__main__":
    unittest.main()
