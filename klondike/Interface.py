from klondike.Core import Core, GameEvent


class Interface:

    def __init__(self):
        self.core: Core = None

    def onStart(self):
        pass

    def onEvent(self, event: GameEvent):
        """
        Invoked when a game event is performed.
        :param event:
        :return:
        """
        self.notifyRedraw()

    def onRestore(self, kind: str):
        """
        Invoked after the whole state was swapped by an undo or a redo.
        :param kind: "undo" or "redo"
        :return:
        """
        self.notifyRedraw()

    def notifyRedraw(self):
        pass

    def onWin(self):
        pass
