"""
Main Application Window
=======================
The primary GUI container: a "Choose File" button above the diagram surface.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects user actions (File -> Open) to the controller and the
   controller's signals back to the diagram view.
3. Collaborators: It owns the file-selection dialog and the error message box.
"""
from __future__ import annotations

import logging
import os
from typing import Optional

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QPushButton, QFileDialog, QMessageBox
)
from PySide6.QtCore import Qt, QSettings
from PySide6.QtGui import QAction

from sankeyplot import config
from sankeyplot.controller.loader import DiagramController
from sankeyplot.model.dataset import LoadError
from sankeyplot.model.diagram import Diagram
from sankeyplot.model.state import AppStatus
from sankeyplot.model.viewport import ViewportScaler
from sankeyplot.view.widgets.diagram_view import DiagramView

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "Sankey Plot"

ERROR_TITLE = "Error Processing File"
ERROR_MESSAGE = "There was an error processing the selected file. Please check the file format."

FILE_FILTER = "Text Files (*.txt);;All Files (*)"
LAST_DIR_KEY = "ui/last_directory"


class MainWindow(QMainWindow):
    def __init__(self, controller: DiagramController) -> None:
        super().__init__()
        self.controller: DiagramController = controller

        self.update_window_title()
        self.resize(int(config.BASE_WIDTH), int(config.BASE_HEIGHT))

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)

        main_layout = QVBoxLayout(main_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        self.btn_choose = QPushButton("Choose File")
        self.btn_choose.clicked.connect(self.on_file_open)
        main_layout.addWidget(self.btn_choose, 0, Qt.AlignmentFlag.AlignHCenter)

        self.scaler = ViewportScaler(config.BASE_WIDTH, config.BASE_HEIGHT)
        self.diagram_view = DiagramView(self.scaler)
        main_layout.addWidget(self.diagram_view, 1)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        # --- SIGNAL CONNECTIONS ---
        self.controller.diagram_changed.connect(self.on_diagram_changed)
        self.controller.status_changed.connect(self.on_status_changed)
        self.controller.load_failed.connect(self.on_load_failed)

        # Initial Render (a controller may already hold a diagram)
        self.on_diagram_changed(self.controller.diagram)

    def _create_actions(self) -> None:
        self.act_open = QAction("Open...", self)
        self.act_open.setShortcut("Ctrl+O")
        self.act_open.triggered.connect(self.on_file_open)

        self.act_sample = QAction("Open Example", self)
        self.act_sample.triggered.connect(self.on_open_sample)
        self.act_sample.setEnabled(os.path.exists(config.SAMPLE_DATA_PATH))

        self.act_clear = QAction("Clear", self)
        self.act_clear.triggered.connect(self.controller.clear)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        file_menu = self.menuBar().addMenu("&File")
        file_menu.addAction(self.act_open)
        file_menu.addAction(self.act_sample)
        file_menu.addSeparator()
        file_menu.addAction(self.act_clear)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

    # --- COLLABORATORS ---

    def ask_for_file(self) -> Optional[str]:
        """Show the file-selection dialog. Returns None if the user cancelled."""
        settings = QSettings()
        start_dir = str(settings.value(LAST_DIR_KEY, "", type=str))
        fname, _ = QFileDialog.getOpenFileName(self, "Select Data File", start_dir, FILE_FILTER)
        if not fname:
            return None
        settings.setValue(LAST_DIR_KEY, os.path.dirname(fname))
        return fname

    def notify_error(self) -> None:
        """Tell the user a load failed. The message is deliberately generic."""
        QMessageBox.critical(self, ERROR_TITLE, ERROR_MESSAGE)

    # --- HELPER METHODS ---

    def update_window_title(self) -> None:
        diagram = self.controller.diagram
        if diagram is not None and diagram.title:
            self.setWindowTitle(f"{VISIBLE_APP_NAME} - [{diagram.title}]")
        else:
            self.setWindowTitle(VISIBLE_APP_NAME)

    # --- SLOTS ---

    def on_file_open(self) -> None:
        self.controller.load_file(self.ask_for_file())

    def on_open_sample(self) -> None:
        self.controller.load_file(config.SAMPLE_DATA_PATH)

    def on_diagram_changed(self, diagram: Optional[Diagram]) -> None:
        self.diagram_view.set_diagram(diagram)
        self.act_clear.setEnabled(diagram is not None)
        self.update_window_title()

        filepath = self.controller.state.filepath
        if diagram is not None and filepath:
            self.statusBar().showMessage(os.path.basename(filepath))
        else:
            self.statusBar().clearMessage()

    def on_status_changed(self, status: AppStatus) -> None:
        logger.debug(f"Application status: {status}")
        if status == AppStatus.ERROR:
            self.statusBar().showMessage("Last file could not be loaded.")

    def on_load_failed(self, error: LoadError) -> None:
        # Details go to the log only; the previous diagram stays visible
        logger.error(f"Could not load '{error.path}' ({error.kind}): {error.message}")
        self.notify_error()
