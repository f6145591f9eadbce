"""
Projection of model-space points onto a view plane.

A point p maps to (u, v) = (right . (p - origin), up . (p - origin)). The
frame axes are trusted to be unit length and perpendicular.
"""

import numpy as np


def frame_basis(frame):
    """Return (origin, basis) arrays; basis rows are the right and up axes."""
    origin = np.asarray(frame.origin, dtype=float)
    basis = np.array([frame.right, frame.up], dtype=float)
    return origin, basis


def project_point(point, frame):
    """Project a single 3D point into view coordinates."""
    origin, basis = frame_basis(frame)
    u, v = basis @ (np.asarray(point, dtype=float) - origin)
    return float(u), float(v)


def project_points(points, frame):
    """Project an (N, 3) array of points to an (N, 2) array."""
    pts = np.asarray(points, dtype=float).reshape(-1, 3)
    origin, basis = frame_basis(frame)
    return (pts - origin) @ basis.T


def segment_endpoints(segments):
    """Stack segment endpoints into an (N, 2, 3) array."""
    if not segments:
        return np.empty((0, 2, 3))
    return np.array([[s.p0, s.p1] for s in segments], dtype=float)


def project_segments(segments, frame):
    """Project segment endpoints, giving an (N, 2, 2) array of (u, v) pairs."""
    endpoints = segment_endpoints(segments)
    return project_points(endpoints.reshape(-1, 3), frame).reshape(-1, 2, 2)
