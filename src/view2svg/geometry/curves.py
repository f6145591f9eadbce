"""
Curve evaluation and tessellation.

Curves are discretized either by a fixed number of equal parameter steps or
by the curve's own adaptive sampling. Both produce straight segments ordered
from the curve start to its end; degenerate segments are dropped one by one.
"""

import math

import numpy as np

from view2svg.config import TessellationConfig
from view2svg.models import Arc, Bezier, Line, Segment3D


def make_segment(p0, p1, min_length=1e-9):
    """
    Build a segment between two points.

    Returns None when either point is not finite or the points are closer
    than min_length.
    """
    a = np.asarray(p0, dtype=float)
    b = np.asarray(p1, dtype=float)

    if not (np.all(np.isfinite(a)) and np.all(np.isfinite(b))):
        return None
    if np.linalg.norm(b - a) <= min_length:
        return None

    return Segment3D(p0=tuple(a.tolist()), p1=tuple(b.tolist()))


def points_to_segments(points, min_length=1e-9):
    """Join consecutive points into segments, skipping degenerate pairs."""
    segments = []
    for i in range(len(points) - 1):
        segment = make_segment(points[i], points[i + 1], min_length)
        if segment is not None:
            segments.append(segment)
    return segments


def parameter_range(curve):
    """Return (start, end) parameters of a bounded curve."""
    if isinstance(curve, Arc):
        return curve.start_parameter, curve.end_parameter
    if isinstance(curve, (Line, Bezier)):
        return 0.0, 1.0
    raise TypeError(f"Unsupported curve type: {type(curve).__name__}")


def evaluate_curve(curve, t):
    """Evaluate a curve at parameter t, returning a 3-vector."""
    if isinstance(curve, Arc):
        return _evaluate_arc(curve, t)
    if isinstance(curve, Bezier):
        return evaluate_bezier(np.asarray(curve.control_points, dtype=float), t)
    if isinstance(curve, Line):
        start = np.asarray(curve.start, dtype=float)
        end = np.asarray(curve.end, dtype=float)
        return start + (end - start) * t
    raise TypeError(f"Unsupported curve type: {type(curve).__name__}")


def _evaluate_arc(arc, t):
    center = np.asarray(arc.center, dtype=float)
    x_dir = np.asarray(arc.x_direction, dtype=float)
    y_dir = np.asarray(arc.y_direction, dtype=float)
    y_radius = arc.y_radius if arc.is_elliptical else arc.radius
    return center + arc.radius * math.cos(t) * x_dir + y_radius * math.sin(t) * y_dir


def evaluate_bezier(control_points, t):
    """Evaluate a Bezier curve of any degree with de Casteljau's algorithm."""
    pts = np.array(control_points, dtype=float)
    while len(pts) > 1:
        pts = (1 - t) * pts[:-1] + t * pts[1:]
    return pts[0]


def split_bezier(control_points, t=0.5):
    """Split a Bezier control polygon at t into left and right halves."""
    pts = np.array(control_points, dtype=float)
    left = [pts[0]]
    right = [pts[-1]]
    while len(pts) > 1:
        pts = (1 - t) * pts[:-1] + t * pts[1:]
        left.append(pts[0])
        right.append(pts[-1])
    return np.array(left), np.array(right[::-1])


def sample_fixed(curve, segments):
    """
    Sample segments + 1 points at equal parameter steps over the curve range.
    """
    if segments < 1:
        raise ValueError(f"segments must be positive, got {segments}")

    start, end = parameter_range(curve)
    return [
        evaluate_curve(curve, start + (end - start) * i / segments)
        for i in range(segments + 1)
    ]


def sample_native(curve, config=None):
    """
    The curve's own polyline approximation.

    Lines keep their endpoints; arcs use an angular step bounded by both the
    maximum angle and the chord tolerance; Beziers are subdivided until flat.
    """
    config = config or TessellationConfig()

    if isinstance(curve, Line):
        return [np.asarray(curve.start, dtype=float), np.asarray(curve.end, dtype=float)]
    if isinstance(curve, Arc):
        count = arc_segment_count(curve, config)
        return sample_fixed(curve, count)
    if isinstance(curve, Bezier):
        return _flatten_bezier(np.asarray(curve.control_points, dtype=float), config)
    raise TypeError(f"Unsupported curve type: {type(curve).__name__}")


def arc_segment_count(arc, config):
    """Number of equal angular steps needed for an arc under the tolerances."""
    sweep = abs(arc.end_parameter - arc.start_parameter)
    if sweep == 0:
        return 1

    step = math.radians(config.max_angle_degrees)

    # Ellipses are bounded by their larger semi-axis
    radius = max(arc.radius, arc.y_radius) if arc.is_elliptical else arc.radius
    tolerance = config.chord_tolerance
    if 0 < tolerance < radius:
        # Sagitta of a chord spanning angle a is r * (1 - cos(a / 2))
        step = min(step, 2 * math.acos(1 - tolerance / radius))

    return max(1, int(math.ceil(sweep / step - 1e-9)))


def _flatten_bezier(control_points, config):
    points = [control_points[0]]
    _subdivide(control_points, config.bezier_flatness, config.max_subdivision_depth, points)
    return points


def _subdivide(control_points, flatness, depth, out):
    if depth <= 0 or _control_polygon_deviation(control_points) <= flatness:
        out.append(control_points[-1])
        return
    left, right = split_bezier(control_points)
    _subdivide(left, flatness, depth - 1, out)
    _subdivide(right, flatness, depth - 1, out)


def _control_polygon_deviation(control_points):
    """Largest distance from an inner control point to the chord."""
    if len(control_points) <= 2:
        return 0.0

    start = control_points[0]
    chord = control_points[-1] - start
    chord_len = np.linalg.norm(chord)
    inner = control_points[1:-1] - start

    if chord_len == 0:
        return float(np.max(np.linalg.norm(inner, axis=1)))

    # Perpendicular component relative to the chord direction
    along = inner @ (chord / chord_len)
    perpendicular = inner - np.outer(along, chord / chord_len)
    return float(np.max(np.linalg.norm(perpendicular, axis=1)))


def tessellate(curve, fixed_segments=None, config=None, min_length=1e-9):
    """
    Discretize a curve into straight segments.

    With fixed_segments the parameter range is split into that many equal
    steps; otherwise the curve's native sampling is used. Fewer than two
    sample points yield no segments.
    """
    if fixed_segments is not None:
        points = sample_fixed(curve, fixed_segments)
    else:
        points = sample_native(curve, config)

    return points_to_segments(points, min_length)
