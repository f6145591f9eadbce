"""
Geometry flattening.

Reduces the geometry graph of a view element to straight 3D segments. Node
kinds are handled in one place; anything not recognized is an error that the
caller's element boundary deals with.
"""

from view2svg.config import ExportConfig
from view2svg.geometry.curves import make_segment, points_to_segments, tessellate
from view2svg.models import Arc, Bezier, Instance, Line, Polyline, Solid


class GeometryError(ValueError):
    """Raised when an element's geometry cannot be flattened."""


class UnsupportedGeometryError(GeometryError):
    """Raised for a node or curve kind the flattener does not know."""


class GeometryDepthError(GeometryError):
    """Raised when instance nesting exceeds the configured depth."""


def flatten_node(node, out, config=None, depth=0):
    """
    Append the straight segments of one geometry node to `out`.

    Lines and polylines are taken as they are, curves met as nodes get fixed
    subdivision, solid edges get native curve sampling, and instances are
    traversed recursively.
    """
    config = config or ExportConfig()
    min_length = config.geometry.min_segment_length

    if isinstance(node, Line):
        if node.bound:
            segment = make_segment(node.start, node.end, min_length)
            if segment is not None:
                out.append(segment)

    elif isinstance(node, Polyline):
        out.extend(points_to_segments(node.points, min_length))

    elif isinstance(node, (Arc, Bezier)):
        if node.bound:
            out.extend(tessellate(
                node,
                fixed_segments=config.tessellation.arc_segments,
                min_length=min_length,
            ))

    elif isinstance(node, Solid):
        _flatten_solid(node, out, config)

    elif isinstance(node, Instance):
        if depth >= config.geometry.max_instance_depth:
            raise GeometryDepthError(
                f"Instance nesting deeper than {config.geometry.max_instance_depth} levels"
            )
        for child in node.children:
            flatten_node(child, out, config, depth + 1)

    else:
        raise UnsupportedGeometryError(f"Unsupported geometry node: {type(node).__name__}")


def _flatten_solid(solid, out, config):
    min_length = config.geometry.min_segment_length

    for face in solid.faces:
        for loop in face.edge_loops:
            for edge in loop:
                curve = edge.curve
                if not isinstance(curve, (Line, Arc, Bezier)):
                    raise UnsupportedGeometryError(
                        f"Unsupported edge curve: {type(curve).__name__}"
                    )
                if not curve.bound:
                    continue
                if isinstance(curve, Line):
                    segment = make_segment(curve.start, curve.end, min_length)
                    if segment is not None:
                        out.append(segment)
                else:
                    out.extend(tessellate(curve, config=config.tessellation, min_length=min_length))


def flatten_element(element, config=None):
    """
    Flatten all geometry of one element into a new segment list.

    Elements without geometry yield an empty list. Errors propagate so the
    caller can discard the whole element.
    """
    config = config or ExportConfig()

    segments = []
    geometry = element.geometry
    if geometry is None:
        return segments

    for node in geometry:
        flatten_node(node, segments, config)

    return segments
