"""
Diagram Description
===================
Assembles everything the rendering surface needs for one Dataset: coloured
node rectangles, the compound ribbon path and the text labels, together with
the bounding box used for fitting the diagram into the viewport.

The rendering surface only consumes these descriptors; nothing in here draws.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
import logging
from typing import Optional, TYPE_CHECKING

import numpy as np

from sankeyplot import config
from sankeyplot.model.layout import LayoutSettings, NodeGeometry, DiagramLayout, compute_layout
from sankeyplot.model.ribbons import RibbonPath, build_ribbons
from sankeyplot.model.viewport import Bounds

if TYPE_CHECKING:
    from sankeyplot.model.dataset import Dataset

logger = logging.getLogger(__name__)

# Average glyph width as a fraction of the font size, used to estimate label extents
_GLYPH_WIDTH_RATIO = 0.6


class TextRole(StrEnum):
    TITLE = "title"
    SOURCE = "source"
    TARGET = "target"


@dataclass(frozen=True)
class RectShape:
    node: NodeGeometry
    fill_color: str

    @property
    def label(self) -> str:
        return self.node.label


@dataclass(frozen=True)
class TextShape:
    """A single-line label. `y` is the baseline."""
    text: str
    x: float
    y: float
    role: TextRole
    font_size: float = config.LABEL_FONT_SIZE
    font_family: str = config.FONT_FAMILY
    color: str = config.TEXT_COLOR

    def approx_bounds(self) -> Bounds:
        width = len(self.text) * self.font_size * _GLYPH_WIDTH_RATIO
        return Bounds(self.x, self.y - self.font_size, self.x + width, self.y)


@dataclass(frozen=True)
class Diagram:
    title: str
    layout: DiagramLayout
    rects: tuple[RectShape, ...]
    ribbons: RibbonPath
    texts: tuple[TextShape, ...] = field(default_factory=tuple)
    bounds: Optional[Bounds] = None

    @property
    def source_rect(self) -> RectShape:
        return self.rects[0]

    @property
    def target_rects(self) -> tuple[RectShape, ...]:
        return self.rects[1:]


def format_value(value: float) -> str:
    """
    Numbers are shown as floats, e.g. 500 -> '500.0'.

    Magnitudes outside [1e-3, 1e7) switch to scientific notation with the
    shortest mantissa, e.g. 1e7 -> '1.0E7' and 0.0001 -> '1.0E-4'.
    """
    value = float(value)
    if value == 0 or not np.isfinite(value) or 1e-3 <= abs(value) < 1e7:
        return str(value)
    text = np.format_float_scientific(value, unique=True, trim="0", exp_digits=1)
    return text.replace("e+", "E").replace("e", "E")


def node_label(node: NodeGeometry) -> str:
    return f"{node.label}: {format_value(node.value)}"


def _node_text(node: NodeGeometry, role: TextRole, settings: LayoutSettings) -> TextShape:
    return TextShape(
        text=node_label(node),
        x=node.right + settings.label_offset,
        y=node.center_y,
        role=role,
    )


def diagram_bounds(
    rects: tuple[RectShape, ...],
    ribbons: RibbonPath,
    texts: tuple[TextShape, ...],
    margin: float = 0.0
) -> Optional[Bounds]:
    points: list[tuple[float, float]] = []
    for rect in rects:
        n = rect.node
        points.append((n.x, n.y))
        points.append((n.right, n.bottom))
    points.extend(ribbons.points())
    for text in texts:
        b = text.approx_bounds()
        points.append((b.left, b.top))
        points.append((b.right, b.bottom))

    bounds = Bounds.from_points(points)
    return bounds.padded(margin) if bounds is not None else None


def build_diagram(dataset: Dataset, settings: LayoutSettings | None = None) -> Diagram:
    """Lay out `dataset` and describe every shape of the resulting diagram."""
    settings = settings or LayoutSettings()
    layout = compute_layout(dataset, settings)
    source = layout.source

    rects = (RectShape(source, config.SOURCE_COLOR),) + tuple(
        RectShape(target, config.TARGET_COLOR) for target in layout.targets
    )
    ribbons = build_ribbons(source, layout.targets)

    texts = [_node_text(source, TextRole.SOURCE, settings)]
    texts.extend(_node_text(target, TextRole.TARGET, settings) for target in layout.targets)
    texts.append(
        TextShape(
            text=dataset.title,
            x=source.x,
            y=source.bottom + settings.title_offset,
            role=TextRole.TITLE,
            font_size=config.TITLE_FONT_SIZE,
        )
    )
    texts_t = tuple(texts)

    bounds = diagram_bounds(rects, ribbons, texts_t, settings.margin)
    logger.debug(f"Built diagram '{dataset.title}': {len(layout.targets)} targets, bounds {bounds}")

    return Diagram(
        title=dataset.title,
        layout=layout,
        rects=rects,
        ribbons=ribbons,
        texts=texts_t,
        bounds=bounds,
    )
