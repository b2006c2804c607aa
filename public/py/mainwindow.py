# mainwindow.py
import argparse
import logging
import sys

from PyQt5.QtWidgets import QAction, QActionGroup, QApplication, QMainWindow

from graphwidget import MODES, MODE_NAMES, GraphWidget

logger = logging.getLogger(__name__)

MODE_SHORTCUTS = {"select": "S", "addv": "V", "adde": "E", "delete": "X"}


class MainWindow(QMainWindow):
    def __init__(self, theme: str = "dark"):
        super().__init__()
        self.setWindowTitle("Triangulation Flip Editor")
        self.resize(1000, 720)

        self.graphWidget = GraphWidget(self)
        self.setCentralWidget(self.graphWidget)
        self.statusBar().showMessage("Status: ready")

        toolbar = self.addToolBar("Editor")
        self.modeActions = {}
        group = QActionGroup(self)
        group.setExclusive(True)
        for mode in MODES:
            act = QAction(MODE_NAMES[mode], self, checkable=True)
            act.setShortcut(MODE_SHORTCUTS[mode])
            act.triggered.connect(lambda _checked, m=mode: self.graphWidget.setMode(m))
            group.addAction(act)
            toolbar.addAction(act)
            self.modeActions[mode] = act
        self.modeActions["select"].setChecked(True)

        toolbar.addSeparator()
        toolbar.addAction("Validate", self.graphWidget.validateTriangulation)
        toolbar.addAction("Flip (F)", self.graphWidget.flipSelected)
        toolbar.addAction("Clear", self.graphWidget.clearGraph)
        toolbar.addAction("Sample", self.graphWidget.seedSample)
        toolbar.addAction("Triangles", self.graphWidget.toggleTriangles)
        toolbar.addAction("Center", self.graphWidget.centerGraph)

        self.applyTheme(theme)

    def applyTheme(self, mode: str):
        self.graphWidget.setTheme(mode)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Interactive triangulation edge-flip editor")
    parser.add_argument("--sample", action="store_true", help="Start with the sample hexagon")
    parser.add_argument("--theme", choices=("dark", "light"), default="dark")
    parser.add_argument("--log-level", default="WARNING",
                        choices=("DEBUG", "INFO", "WARNING", "ERROR"))
    args, qt_args = parser.parse_known_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    app = QApplication([sys.argv[0]] + qt_args)
    win = MainWindow(theme=args.theme)
    if args.sample:
        win.graphWidget.seedSample()
    win.show()
    logger.info("editor started")
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
