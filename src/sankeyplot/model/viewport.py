"""
Viewport Fitting
================
Keeps the diagram scaled and centred inside a resizable viewport.

The scale is uniform (aspect preserving) and relative to a reference
viewport size: at BASE_WIDTH x BASE_HEIGHT the diagram is drawn 1:1, and
growing the window by a factor k grows the diagram by k.

There is no implicit binding: the owner of the viewport calls `resize()`
whenever its size changes and every subscriber gets the new transform
straight away.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Iterable, Optional

from sankeyplot import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned box in diagram units."""
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center(self) -> tuple[float, float]:
        return (self.left + self.right) / 2, (self.top + self.bottom) / 2

    def padded(self, margin: float) -> Bounds:
        return Bounds(self.left - margin, self.top - margin, self.right + margin, self.bottom + margin)

    @classmethod
    def from_points(cls, points: Iterable[tuple[float, float]]) -> Optional[Bounds]:
        pts = list(points)
        if not pts:
            return None
        xs = [p[0] for p in pts]
        ys = [p[1] for p in pts]
        return cls(min(xs), min(ys), max(xs), max(ys))


@dataclass(frozen=True)
class ViewportTransform:
    """Uniform scale followed by a translation: p' = scale * p + (dx, dy)."""
    scale: float = 1.0
    dx: float = 0.0
    dy: float = 0.0

    def map_point(self, x: float, y: float) -> tuple[float, float]:
        return self.scale * x + self.dx, self.scale * y + self.dy


def fit_scale(viewport_width: float, viewport_height: float, base_width: float, base_height: float) -> float:
    return min(viewport_width / base_width, viewport_height / base_height)


def fit_transform(
    viewport_width: float,
    viewport_height: float,
    base_width: float = config.BASE_WIDTH,
    base_height: float = config.BASE_HEIGHT,
    content: Optional[Bounds] = None
) -> ViewportTransform:
    """
    Transform that scales by `fit_scale` and puts the centre of `content` on
    the centre of the viewport. Without content only the scale is applied.
    """
    scale = fit_scale(viewport_width, viewport_height, base_width, base_height)
    if content is None:
        return ViewportTransform(scale=scale)

    cx, cy = content.center
    return ViewportTransform(
        scale=scale,
        dx=viewport_width / 2 - scale * cx,
        dy=viewport_height / 2 - scale * cy,
    )


TransformCallback = Callable[[ViewportTransform], None]


class ViewportScaler:
    """
    Holds the current viewport size and diagram bounds and pushes a fresh
    ViewportTransform to its subscribers whenever either of them changes.
    """

    def __init__(self, base_width: float = config.BASE_WIDTH, base_height: float = config.BASE_HEIGHT) -> None:
        if base_width <= 0 or base_height <= 0:
            raise ValueError("Base viewport size must be positive.")
        self.base_width = base_width
        self.base_height = base_height

        self._viewport: Optional[tuple[float, float]] = None
        self._content: Optional[Bounds] = None
        self._transform = ViewportTransform()
        self._subscribers: list[TransformCallback] = []

    @property
    def transform(self) -> ViewportTransform:
        return self._transform

    @property
    def viewport_size(self) -> Optional[tuple[float, float]]:
        return self._viewport

    @property
    def content(self) -> Optional[Bounds]:
        return self._content

    def subscribe(self, callback: TransformCallback) -> Callable[[], None]:
        """
        Register `callback` for transform updates. It is called immediately if
        a viewport size is already known. Returns a function that unsubscribes.
        """
        self._subscribers.append(callback)
        if self._viewport is not None:
            callback(self._transform)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def resize(self, width: float, height: float) -> ViewportTransform:
        """Viewport size changed. Sizes <= 0 (minimized/unmapped widgets) are ignored."""
        if width <= 0 or height <= 0:
            logger.debug(f"Ignoring degenerate viewport size {width}x{height}")
            return self._transform
        self._viewport = (float(width), float(height))
        return self._recompute()

    def set_content(self, bounds: Optional[Bounds]) -> ViewportTransform:
        """Diagram changed (or was cleared)."""
        self._content = bounds
        return self._recompute()

    def _recompute(self) -> ViewportTransform:
        if self._viewport is None:
            return self._transform

        width, height = self._viewport
        self._transform = fit_transform(width, height, self.base_width, self.base_height, self._content)
        for callback in list(self._subscribers):
            callback(self._transform)
        return self._transform
