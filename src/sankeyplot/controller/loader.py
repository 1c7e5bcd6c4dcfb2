"""
Load Controller
===============
Connects the file parser to the application state and tells the views about
every change through Qt signals.

Why is this file needed?
------------------------
1. Ownership: It is the only code that writes the DiagramState.
2. Atomicity: A new Dataset and its Diagram are built completely before the
   state is touched, so a failed load never leaves half-updated data behind.
3. Signals: Views subscribe to `diagram_changed`, `status_changed` and
   `load_failed` instead of polling the state.

Loads run synchronously on the GUI thread; data files are small.
"""
from __future__ import annotations

import logging
import os
from typing import Optional, Union

from PySide6.QtCore import QObject, Signal

from sankeyplot.model.dataset import Dataset, DatasetError, LoadError, LoadResult
from sankeyplot.model.diagram import Diagram, build_diagram
from sankeyplot.model.layout import LayoutSettings
from sankeyplot.model.parser import parse_text, read_dataset
from sankeyplot.model.state import AppStatus, DiagramState

logger = logging.getLogger(__name__)


class DiagramController(QObject):
    """Runs loads and owns the DiagramState."""
    diagram_changed = Signal(object)  # Diagram | None
    status_changed = Signal(object)  # AppStatus
    load_failed = Signal(object)  # LoadError

    def __init__(self, state: Optional[DiagramState] = None, settings: Optional[LayoutSettings] = None) -> None:
        super().__init__()
        self.state: DiagramState = state if state is not None else DiagramState()
        self.settings: LayoutSettings = settings or LayoutSettings()

    # --- READ ACCESS ---

    @property
    def status(self) -> AppStatus:
        return self.state.status

    @property
    def dataset(self) -> Optional[Dataset]:
        return self.state.dataset

    @property
    def diagram(self) -> Optional[Diagram]:
        return self.state.diagram

    @property
    def last_error(self) -> Optional[LoadError]:
        return self.state.last_error

    # --- ACTIONS ---

    def load_file(self, path: Optional[Union[str, os.PathLike]]) -> bool:
        """
        Load a data file. `None` means the user cancelled the file dialog and
        is a no-op.

        Returns:
            True if a new diagram was committed.
        """
        if path is None:
            logger.debug("File selection cancelled.")
            return False
        path = os.fspath(path)
        return self._apply(read_dataset(path), filepath=path)

    def load_text(self, text: str) -> bool:
        """Load a dataset from in-memory text (same format as the data file)."""
        try:
            result = LoadResult.success(parse_text(text))
        except DatasetError as e:
            logger.error(f"Invalid data: {e}")
            result = LoadResult.failure(LoadError.from_exception(e))
        return self._apply(result, filepath=None)

    def clear(self) -> None:
        previous = self.state.status
        self.state.reset()
        self.diagram_changed.emit(None)
        if previous != AppStatus.EMPTY:
            self.status_changed.emit(self.state.status)

    def relayout(self) -> None:
        """Rebuild the diagram of the current dataset, e.g. after `settings` changed."""
        if self.state.dataset is None:
            return
        diagram = build_diagram(self.state.dataset, self.settings)
        self.state.diagram = diagram
        self.diagram_changed.emit(diagram)

    # --- INTERNAL ---

    def _apply(self, result: LoadResult, filepath: Optional[str]) -> bool:
        previous = self.state.status

        if not result.ok:
            self.state.fail(result.error)
            logger.warning(f"Load failed ({result.error.kind}); keeping previous diagram: {result.error.message}")
            if previous != self.state.status:
                self.status_changed.emit(self.state.status)
            self.load_failed.emit(result.error)
            return False

        # Build the complete diagram first, then swap it in
        diagram = build_diagram(result.dataset, self.settings)
        self.state.commit(result.dataset, diagram, filepath)
        logger.info(f"Diagram '{diagram.title}' ready ({len(diagram.target_rects)} targets).")

        self.diagram_changed.emit(diagram)
        if previous != self.state.status:
            self.status_changed.emit(self.state.status)
        return True
