"""
Flow Ribbons
============
Builds the curved bands that connect the source node to each target.

Every ribbon is a closed sub-path:

    anchor on the source's right edge
      -> cubic curve to the target's top-left corner
      -> straight down the target's left edge
      -> mirrored cubic curve back to the source
      -> straight up to the anchor

The anchors are stacked down the source's right edge, one target height at a
time. All sub-paths go into one path filled with the even-odd rule.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Iterator, Sequence, Union

from sankeyplot import config
from sankeyplot.model.layout import NodeGeometry


class FillRule(StrEnum):
    EVEN_ODD = "even-odd"
    NON_ZERO = "non-zero"


# ------------------------------------------------------------------------------
# Path commands
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float


@dataclass(frozen=True)
class CubicTo:
    """Cubic Bezier segment from the current point through two control points to (x, y)."""
    c1x: float
    c1y: float
    c2x: float
    c2y: float
    x: float
    y: float


PathCommand = Union[MoveTo, LineTo, CubicTo]


@dataclass(frozen=True)
class RibbonPath:
    """One compound path holding a closed sub-path per target."""
    commands: tuple[PathCommand, ...] = field(default_factory=tuple)
    fill_rule: FillRule = FillRule.EVEN_ODD
    fill_color: str = config.RIBBON_COLOR
    stroke_width: float = 0.0

    def subpaths(self) -> Iterator[tuple[PathCommand, ...]]:
        """Yield the commands of each ribbon, split at every MoveTo."""
        current: list[PathCommand] = []
        for cmd in self.commands:
            if isinstance(cmd, MoveTo) and current:
                yield tuple(current)
                current = []
            current.append(cmd)
        if current:
            yield tuple(current)

    def points(self) -> list[tuple[float, float]]:
        """All end and control points. The curves lie inside their convex hull."""
        pts: list[tuple[float, float]] = []
        for cmd in self.commands:
            if isinstance(cmd, CubicTo):
                pts.append((cmd.c1x, cmd.c1y))
                pts.append((cmd.c2x, cmd.c2y))
            pts.append((cmd.x, cmd.y))
        return pts


def flow_curve(start_x: float, start_y: float, end_x: float, end_y: float) -> CubicTo:
    """
    S-shaped cubic from (start_x, start_y) to (end_x, end_y) with horizontal
    tangents at both ends: control points sit one third of the horizontal
    span in from each end, at the height of their endpoint.
    """
    third = (end_x - start_x) / 3
    return CubicTo(
        c1x=start_x + third,
        c1y=start_y,
        c2x=end_x - third,
        c2y=end_y,
        x=end_x,
        y=end_y,
    )


def ribbon_commands(anchor_x: float, anchor_y: float, target: NodeGeometry) -> tuple[PathCommand, ...]:
    """The five commands of a single closed ribbon."""
    end_x = target.x
    end_y = target.y
    return (
        MoveTo(anchor_x, anchor_y),
        flow_curve(anchor_x, anchor_y, end_x, end_y),
        LineTo(end_x, end_y + target.height),
        flow_curve(end_x, end_y + target.height, anchor_x, anchor_y + target.height),
        LineTo(anchor_x, anchor_y),
    )


def build_ribbons(
    source: NodeGeometry,
    targets: Sequence[NodeGeometry],
    fill_color: str = config.RIBBON_COLOR
) -> RibbonPath:
    """Connect `source` to every target, in list order, with one ribbon each."""
    anchor_x = source.right
    cursor = source.y

    commands: list[PathCommand] = []
    for target in targets:
        commands.extend(ribbon_commands(anchor_x, cursor, target))
        cursor += target.height

    return RibbonPath(commands=tuple(commands), fill_color=fill_color)
