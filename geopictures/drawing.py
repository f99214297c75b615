"""Matplotlib rendering of single pictures, for inspection and debugging."""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes
from matplotlib.patches import Circle as CirclePatch

from .analytic import AnalyticObject, Circle, Line, Point
from .contextual_picture import ContextualPicture
from .picture import Picture

logger = logging.getLogger(__name__)

_DEFAULT_COLOR = "#1f77b4"
_NEW_COLOR = "red"
_IMPLICIT_COLOR = "0.65"


def _bounds(objects: Iterable[AnalyticObject]) -> Tuple[float, float, float, float]:
    xs: List[float] = []
    ys: List[float] = []
    for analytic_object in objects:
        if isinstance(analytic_object, Point):
            xs.append(analytic_object.x)
            ys.append(analytic_object.y)
        elif isinstance(analytic_object, Circle):
            center, radius = analytic_object.center, analytic_object.radius
            xs.extend((center.x - radius, center.x + radius))
            ys.extend((center.y - radius, center.y + radius))
    min_x, max_x = min(xs, default=0.0), max(xs, default=1.0)
    min_y, max_y = min(ys, default=0.0), max(ys, default=1.0)
    span = max(max_x - min_x, max_y - min_y, 1.0)
    return min_x - 0.1 * span, max_x + 0.1 * span, min_y - 0.1 * span, max_y + 0.1 * span


def _line_segment(line: Line, bounds: Tuple[float, float, float, float]) -> Tuple[np.ndarray, np.ndarray]:
    min_x, max_x, min_y, max_y = bounds
    center = Point((min_x + max_x) / 2, (min_y + max_y) / 2)
    foot = line.projection_of(center)
    # long enough to cross the whole view box; the axes clip the rest
    reach = math.hypot(max_x - min_x, max_y - min_y)
    direction = np.array([-line.b, line.a])
    start = np.array([foot.x, foot.y]) - reach * direction
    end = np.array([foot.x, foot.y]) + reach * direction
    return start, end


def _draw(
    ax: Axes,
    analytic_object: AnalyticObject,
    bounds: Tuple[float, float, float, float],
    *,
    label: Optional[str],
    color: str,
    linestyle: str = "-",
) -> None:
    if isinstance(analytic_object, Point):
        ax.scatter([analytic_object.x], [analytic_object.y], c=color, s=30, zorder=3)
        if label:
            ax.text(analytic_object.x, analytic_object.y, label, fontsize=8, ha="left", va="bottom")
    elif isinstance(analytic_object, Line):
        start, end = _line_segment(analytic_object, bounds)
        ax.plot([start[0], end[0]], [start[1], end[1]], color=color, linewidth=1.0, linestyle=linestyle)
    elif isinstance(analytic_object, Circle):
        ax.add_patch(
            CirclePatch(
                (analytic_object.center.x, analytic_object.center.y),
                analytic_object.radius,
                fill=False,
                edgecolor=color,
                linewidth=1.0,
                linestyle=linestyle,
            )
        )
    else:  # pragma: no cover - closed union
        raise TypeError(f"Cannot draw {analytic_object!r}")


def _prepare_axes(ax: Optional[Axes]) -> Axes:
    if ax is None:
        _, ax = plt.subplots(figsize=(4, 4))
    return ax


def _finish_axes(ax: Axes, bounds: Tuple[float, float, float, float], title: Optional[str]) -> None:
    min_x, max_x, min_y, max_y = bounds
    ax.set_aspect("equal", adjustable="box")
    ax.set_xlim(min_x, max_x)
    ax.set_ylim(min_y, max_y)
    if title:
        ax.set_title(title)
    ax.grid(True, linestyle="--", linewidth=0.5, alpha=0.5)


def draw_picture(picture: Picture, ax: Optional[Axes] = None, *, title: Optional[str] = None) -> Axes:
    """Draw every object of ``picture``; points are labelled by name."""

    ax = _prepare_axes(ax)
    bounds = _bounds(analytic_object for _, analytic_object in picture.items())
    for configuration_object, analytic_object in picture.items():
        _draw(ax, analytic_object, bounds, label=configuration_object.name, color=_DEFAULT_COLOR)
    _finish_axes(ax, bounds, title)
    logger.debug("Drew %r", picture)
    return ax


def draw_contextual_picture(
    contextual_picture: ContextualPicture, picture_index: int = 0, ax: Optional[Axes] = None
) -> Axes:
    """Draw one picture of a contextual picture, including implied lines and circles.

    New objects are drawn in red; lines and circles without a configuration
    object are dashed and grey.
    """

    ax = _prepare_axes(ax)
    picture = contextual_picture.pictures[picture_index]
    bounds = _bounds(analytic_object for _, analytic_object in picture.items())

    for geometric_object in [*contextual_picture.lines_and_circles(), *contextual_picture.points()]:
        analytic_object = contextual_picture.get_analytic_object(geometric_object, picture)
        explicit = geometric_object.configuration_object is not None
        if contextual_picture.is_new(geometric_object):
            color = _NEW_COLOR
        elif explicit:
            color = _DEFAULT_COLOR
        else:
            color = _IMPLICIT_COLOR
        label = geometric_object.configuration_object.name if explicit else None  # type: ignore[union-attr]
        _draw(ax, analytic_object, bounds, label=label, color=color, linestyle="-" if explicit else "--")

    _finish_axes(ax, bounds, f"{contextual_picture.configuration.last_constructed_object} (picture {picture_index})")
    return ax


__all__ = ["draw_contextual_picture", "draw_picture"]
