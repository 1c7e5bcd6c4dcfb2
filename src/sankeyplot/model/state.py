"""
Application State (Data Model)
==============================
This module defines the state of the running application.

Why is this file needed?
------------------------
1. State Management: It holds the one long-lived value of the program, the
   current Dataset, together with the Diagram derived from it.
2. Decoupling: Views read from this object; the controller is the only
   writer.

Classes:
    AppStatus: Empty / Loaded / Error.
    DiagramState: The container class.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
import logging
from typing import Optional

from sankeyplot.model.dataset import Dataset, LoadError
from sankeyplot.model.diagram import Diagram

logger = logging.getLogger(__name__)


class AppStatus(StrEnum):
    EMPTY = "empty"
    LOADED = "loaded"
    ERROR = "error"


@dataclass
class DiagramState:
    """
    Current dataset and diagram.

    After a failed load the status is ERROR but `dataset` and `diagram` still
    hold the last successful load, which therefore stays on screen.
    """
    status: AppStatus = AppStatus.EMPTY
    dataset: Optional[Dataset] = None
    diagram: Optional[Diagram] = None
    filepath: Optional[str] = None
    last_error: Optional[LoadError] = None

    @property
    def has_diagram(self) -> bool:
        return self.diagram is not None

    def commit(self, dataset: Dataset, diagram: Diagram, filepath: Optional[str] = None) -> None:
        """Replace dataset and diagram in one step."""
        self.dataset = dataset
        self.diagram = diagram
        self.filepath = filepath
        self.last_error = None
        self.status = AppStatus.LOADED

    def fail(self, error: LoadError) -> None:
        """Record a failed load. The previous dataset/diagram are kept."""
        self.last_error = error
        self.status = AppStatus.ERROR

    def reset(self) -> None:
        """Back to an empty window."""
        self.status = AppStatus.EMPTY
        self.dataset = None
        self.diagram = None
        self.filepath = None
        self.last_error = None
        logger.info("Diagram state has been reset.")
