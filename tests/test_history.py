import unittest

from klondike.Core import Card, Core, GameConfig, GameState, Position, Suit, TABLEAU_COUNT
from klondike.History import HistoryRecorder
from klondike.Outcome import ErrorKind


def up(suit, rank):
    return Card(suit, rank, faceUp=True)


def down(suit, rank):
    return Card(suit, rank)


class HistoryTestCase(unittest.TestCase):
    def make_core(self):
        core = Core()
        core.initialize(GameConfig(99))
        return core

    def make_reveal_core(self):
        tableau = [[] for _ in range(TABLEAU_COUNT)]
        tableau[0] = [down(Suit.CLUBS, 3), up(Suit.HEARTS, 7)]
        tableau[1] = [up(Suit.SPADES, 8)]
        core = Core()
        core.loadState(GameState(tableau))
        return core

    def test_undo_restores_pre_mutation_state_and_redo_reapplies(self):
        core = self.make_core()
        before = core.state.clone()
        self.assertTrue(core.draw())
        after = core.state.clone()

        self.assertTrue(core.undo())
        self.assertEqual(before, core.state)
        self.assertTrue(core.redo())
        self.assertEqual(after, core.state)

    def test_undo_reverts_face_flips(self):
        core = self.make_reveal_core()
        self.assertTrue(core.moveTableauToTableau(Position(0, 1), Position(1)))
        self.assertTrue(core.tableau[0][0].faceUp)
        self.assertTrue(core.undo())
        self.assertFalse(core.tableau[0][0].faceUp)
        self.assertEqual(2, len(core.tableau[0]))
        self.assertEqual(1, len(core.tableau[1]))

    def test_new_mutation_after_undo_clears_redo(self):
        core = self.make_core()
        core.draw()
        core.draw()
        self.assertTrue(core.undo())
        self.assertTrue(core.history.canRedo())
        core.draw()
        self.assertFalse(core.history.canRedo())
        outcome = core.redo()
        self.assertEqual(ErrorKind.NO_HISTORY, outcome.kind)
        self.assertEqual("Nothing to redo", outcome.message)

    def test_empty_history(self):
        core = self.make_core()
        before = core.state.clone()
        outcome = core.undo()
        self.assertFalse(outcome)
        self.assertEqual(ErrorKind.NO_HISTORY, outcome.kind)
        self.assertEqual("Nothing to undo", outcome.message)
        self.assertEqual(ErrorKind.NO_HISTORY, core.redo().kind)
        self.assertEqual(before, core.state)

    def test_snapshots_are_not_aliased_with_live_state(self):
        core = self.make_core()
        history = HistoryRecorder(core)
        history.saveState()
        snapshot = history.undoStack[-1]
        self.assertEqual(snapshot, core.state)
        core.tableau[0][0].flip()
        core.stock.pop()
        self.assertNotEqual(snapshot, core.state)
        self.assertEqual(24, len(snapshot.stock))
        self.assertTrue(snapshot.tableau[0][0].faceUp)

    def test_undo_and_redo_walk_several_steps(self):
        core = self.make_core()
        states = [core.state.clone()]
        for _ in range(5):
            core.draw()
            states.append(core.state.clone())
        for expected in reversed(states[:-1]):
            self.assertTrue(core.undo())
            self.assertEqual(expected, core.state)
        self.assertFalse(core.undo())
        for expected in states[1:]:
            self.assertTrue(core.redo())
            self.assertEqual(expected, core.state)
        self.assertFalse(core.redo())

    def test_clear(self):
        core = self.make_core()
        core.draw()
        core.undo()
        core.history.clear()
        self.assertFalse(core.history.canUndo())
        self.assertFalse(core.history.canRedo())


if __name__ == "__main__":
    unittest.main()
