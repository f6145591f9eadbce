"""
Bounds computation and canvas normalization.

The canvas origin is the top-left corner of the projected extent: x grows with
u from min_u, y grows as v falls from max_v. The scale is a fixed policy value,
never fitted to a target size.
"""

import numpy as np

from view2svg.models import Bounds2D, Canvas, RenderSegment


def compute_bounds(points2d):
    """
    Componentwise min/max over all projected points.

    Raises ValueError for an empty point set.
    """
    pts = np.asarray(points2d, dtype=float).reshape(-1, 2)
    if len(pts) == 0:
        raise ValueError("Cannot compute bounds of an empty point set")

    mins = pts.min(axis=0)
    maxs = pts.max(axis=0)
    return Bounds2D(
        min_u=float(mins[0]),
        max_u=float(maxs[0]),
        min_v=float(mins[1]),
        max_v=float(maxs[1]),
    )


def compute_canvas(bounds, scale=100.0):
    """Canvas size for the given bounds at a fixed scale."""
    if scale <= 0:
        raise ValueError(f"Scale must be positive, got {scale}")
    return Canvas(
        width=bounds.width * scale,
        height=bounds.height * scale,
        scale=scale,
    )


def normalize_points(points2d, bounds, scale=100.0):
    """Map (u, v) points to canvas (x, y) with y pointing down."""
    pts = np.asarray(points2d, dtype=float)
    out = np.empty_like(pts)
    out[..., 0] = (pts[..., 0] - bounds.min_u) * scale
    out[..., 1] = (bounds.max_v - pts[..., 1]) * scale
    return out


def to_render_segments(projected, bounds, scale=100.0, precision=None):
    """
    Convert (N, 2, 2) projected endpoint pairs into canvas segments.

    With precision set, coordinates are rounded to that many decimals.
    """
    canvas_pts = normalize_points(projected, bounds, scale)
    if precision is not None:
        canvas_pts = np.round(canvas_pts, precision)

    return [
        RenderSegment(
            x1=float(pair[0, 0]),
            y1=float(pair[0, 1]),
            x2=float(pair[1, 0]),
            y2=float(pair[1, 1]),
        )
        for pair in canvas_pts
    ]
