"""
Diagram Rendering Surface
=========================
A QGraphicsView that turns the model's shape descriptors into scene items.

All items live in one QGraphicsItemGroup. The group's transform comes from a
ViewportScaler; resizeEvent feeds the scaler, the scaler calls back
`apply_transform`, so the diagram stays fitted and centred while the window
is resized.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt, QRectF
from PySide6.QtGui import QPen, QBrush, QColor, QPainter, QPainterPath, QFont, QFontMetricsF, QTransform
from PySide6.QtWidgets import (
    QWidget, QFrame, QGraphicsView, QGraphicsScene, QGraphicsItemGroup,
    QGraphicsRectItem, QGraphicsPathItem, QGraphicsSimpleTextItem
)

from sankeyplot.model.diagram import Diagram, RectShape, TextShape
from sankeyplot.model.ribbons import RibbonPath, MoveTo, LineTo, CubicTo, FillRule
from sankeyplot.model.viewport import ViewportScaler, ViewportTransform

logger = logging.getLogger(__name__)

# QGraphicsItem.data() key holding the node label
LABEL_KEY = 0


def ribbon_to_painter_path(ribbon: RibbonPath) -> QPainterPath:
    """Replay the ribbon commands into a QPainterPath."""
    path = QPainterPath()
    path.setFillRule(Qt.FillRule.OddEvenFill if ribbon.fill_rule == FillRule.EVEN_ODD else Qt.FillRule.WindingFill)
    for cmd in ribbon.commands:
        if isinstance(cmd, MoveTo):
            path.moveTo(cmd.x, cmd.y)
        elif isinstance(cmd, LineTo):
            path.lineTo(cmd.x, cmd.y)
        elif isinstance(cmd, CubicTo):
            path.cubicTo(cmd.c1x, cmd.c1y, cmd.c2x, cmd.c2y, cmd.x, cmd.y)
        else:
            raise TypeError(f"Unknown path command: {cmd!r}")
    return path


def to_qtransform(transform: ViewportTransform) -> QTransform:
    return QTransform(transform.scale, 0.0, 0.0, transform.scale, transform.dx, transform.dy)


class DiagramView(QGraphicsView):
    def __init__(self, scaler: Optional[ViewportScaler] = None, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setRenderHints(self.renderHints() | QPainter.RenderHint.Antialiasing | QPainter.RenderHint.TextAntialiasing)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setFrameShape(QFrame.Shape.NoFrame)
        # Scene coordinates == viewport pixels
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)

        self._scene = QGraphicsScene(self)
        self._scene.setBackgroundBrush(QBrush(QColor("white")))
        self.setScene(self._scene)

        self.group = QGraphicsItemGroup()
        self._scene.addItem(self.group)

        # Items
        self.rect_items: list[QGraphicsRectItem] = []
        self.text_items: list[QGraphicsSimpleTextItem] = []
        self.path_item: Optional[QGraphicsPathItem] = None
        self.diagram: Optional[Diagram] = None

        self.scaler = scaler or ViewportScaler()
        self._unsubscribe = self.scaler.subscribe(self.apply_transform)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def set_diagram(self, diagram: Optional[Diagram]) -> None:
        """Replace the displayed diagram. `None` clears the view."""
        self._clear_items()
        self.diagram = diagram

        if diagram is not None:
            # Ribbons underneath, nodes on top
            self.path_item = self._add_ribbons(diagram.ribbons)
            self.rect_items = [self._add_rect(rect) for rect in diagram.rects]
            self.text_items = [self._add_text(text) for text in diagram.texts]

        self.scaler.set_content(diagram.bounds if diagram is not None else None)
        self.viewport().update()

    def apply_transform(self, transform: ViewportTransform) -> None:
        self.group.setTransform(to_qtransform(transform))

    def find_node_item(self, label: str) -> Optional[QGraphicsRectItem]:
        for item in self.rect_items:
            if item.data(LABEL_KEY) == label:
                return item
        return None

    # ------------------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------------------

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        size = self.viewport().size()
        self.setSceneRect(QRectF(0.0, 0.0, size.width(), size.height()))
        self.scaler.resize(size.width(), size.height())

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _clear_items(self) -> None:
        for item in self.group.childItems():
            self._scene.removeItem(item)
        self.rect_items = []
        self.text_items = []
        self.path_item = None

    def _add_ribbons(self, ribbon: RibbonPath) -> QGraphicsPathItem:
        item = QGraphicsPathItem(ribbon_to_painter_path(ribbon))
        if ribbon.stroke_width <= 0:
            item.setPen(QPen(Qt.PenStyle.NoPen))
        else:
            item.setPen(QPen(QColor(ribbon.fill_color), ribbon.stroke_width))
        item.setBrush(QBrush(QColor(ribbon.fill_color)))
        # setParentItem keeps local coordinates; addToGroup would undo the group transform
        item.setParentItem(self.group)
        return item

    def _add_rect(self, rect: RectShape) -> QGraphicsRectItem:
        node = rect.node
        item = QGraphicsRectItem(QRectF(node.x, node.y, node.width, node.height).normalized())
        item.setPen(QPen(Qt.PenStyle.NoPen))
        item.setBrush(QBrush(QColor(rect.fill_color)))
        item.setData(LABEL_KEY, rect.label)
        item.setToolTip(rect.label)
        item.setParentItem(self.group)
        return item

    def _add_text(self, text: TextShape) -> QGraphicsSimpleTextItem:
        font = QFont(text.font_family)
        font.setPixelSize(max(1, round(text.font_size)))

        item = QGraphicsSimpleTextItem(text.text)
        item.setFont(font)
        item.setBrush(QBrush(QColor(text.color)))
        # TextShape.y is the baseline, item positions are top-left
        item.setPos(text.x, text.y - QFontMetricsF(font).ascent())
        item.setParentItem(self.group)
        return item
