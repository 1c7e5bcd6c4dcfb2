"""
Node Layout
===========
Computes the rectangles of the source node and of every target node.

All heights share one normalization basis (by default the largest single
value), so the tallest target is exactly MAX_NODE_HEIGHT high and the source,
which carries the sum of all flows, is as tall as all targets together.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Sequence, TYPE_CHECKING

import numpy as np

from sankeyplot import config

if TYPE_CHECKING:
    import numpy.typing as npt
    from sankeyplot.model.dataset import Dataset


class NodeRole(StrEnum):
    SOURCE = "source"
    TARGET = "target"


class BasisMode(StrEnum):
    """What a node of MAX_NODE_HEIGHT stands for."""
    MAX_VALUE = "max"  # the largest single record
    TOTAL = "total"  # the sum of all records (the source is then exactly MAX_NODE_HEIGHT)


@dataclass(frozen=True)
class LayoutSettings:
    """Fixed anchors and sizes of the two node columns (diagram units)."""
    max_node_height: float = config.MAX_NODE_HEIGHT
    source_x: float = config.SOURCE_X
    source_y: float = config.SOURCE_Y
    source_width: float = config.SOURCE_WIDTH
    target_x: float = config.TARGET_X
    target_width: float = config.TARGET_WIDTH
    row_spacing: float = config.ROW_SPACING
    node_gap: float = config.NODE_GAP
    label_offset: float = config.LABEL_OFFSET
    title_offset: float = config.TITLE_OFFSET
    margin: float = config.DIAGRAM_MARGIN
    basis_mode: BasisMode = BasisMode.MAX_VALUE


@dataclass(frozen=True)
class NodeGeometry:
    """An axis-aligned node rectangle. y grows downwards."""
    label: str
    x: float
    y: float
    width: float
    height: float
    role: NodeRole
    value: float = 0.0

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2


@dataclass(frozen=True)
class DiagramLayout:
    source: NodeGeometry
    targets: tuple[NodeGeometry, ...]
    total: float
    basis: float

    @property
    def nodes(self) -> tuple[NodeGeometry, ...]:
        return (self.source, *self.targets)


def normalization_basis(values: Sequence[float], mode: BasisMode = BasisMode.MAX_VALUE) -> float:
    """
    The largest single value (or the sum, for BasisMode.TOTAL), or 1.0 when
    there is nothing to normalize against (no records, or a basis of exactly
    zero).
    """
    if len(values) == 0:
        return 1.0
    if mode == BasisMode.TOTAL:
        basis = float(sum(values))
    else:
        basis = float(np.max(values))
    if basis == 0.0:
        return 1.0
    return basis


def node_height(value: float, basis: float, max_height: float = config.MAX_NODE_HEIGHT) -> float:
    """Height of a node carrying `value`, scaled so that `basis` maps to `max_height`."""
    return (value / basis) * max_height


def node_heights(
    values: Sequence[float],
    basis: float,
    max_height: float = config.MAX_NODE_HEIGHT
) -> npt.NDArray[np.float64]:
    """Vectorized `node_height` for all records."""
    return (np.asarray(values, dtype=np.float64) / basis) * max_height


def target_positions(
    heights: npt.NDArray[np.float64],
    settings: LayoutSettings
) -> npt.NDArray[np.float64]:
    """
    Top y of each target. The column starts half of `count * row_spacing`
    above the source anchor and each node is followed by `node_gap`.
    """
    count = len(heights)
    start_y = settings.source_y - (count * settings.row_spacing) / 2
    if count == 0:
        return np.empty(0, dtype=np.float64)
    steps = np.cumsum(heights + settings.node_gap)
    return start_y + np.concatenate(([0.0], steps[:-1]))


def compute_layout(dataset: Dataset, settings: LayoutSettings | None = None) -> DiagramLayout:
    """
    Lay out the source node and the target nodes of `dataset`.

    Targets keep dataset order. The source height is the sum of the target
    heights taken in that order, i.e. height(total) computed with the same
    basis, so the two columns match to the last bit.
    """
    settings = settings or LayoutSettings()
    values = dataset.values
    basis = normalization_basis(values, settings.basis_mode)

    heights = node_heights(values, basis, settings.max_node_height).tolist()
    ys = target_positions(np.asarray(heights, dtype=np.float64), settings).tolist()

    targets = tuple(
        NodeGeometry(
            label=record.label,
            x=settings.target_x,
            y=y,
            width=settings.target_width,
            height=h,
            role=NodeRole.TARGET,
            value=record.value,
        )
        for record, y, h in zip(dataset.records, ys, heights)
    )

    source = NodeGeometry(
        label=dataset.source_label,
        x=settings.source_x,
        y=settings.source_y,
        width=settings.source_width,
        height=float(sum(heights)),
        role=NodeRole.SOURCE,
        value=dataset.total,
    )

    return DiagramLayout(source=source, targets=targets, total=dataset.total, basis=basis)
