"""
SVG emission for view2svg.

Writes canvas segments as plain <line> elements inside one stroked group.
"""

import svgwrite

from view2svg.tracer import get_tracer, trace


@trace(label="emit_svg")
def emit_svg(segments, width, height, stroke_width=1, stroke_color="black"):
    """
    Create an SVG document containing one line per segment.

    Args:
        segments: list of RenderSegment objects in canvas coordinates
        width: canvas width, may be zero
        height: canvas height, may be zero
        stroke_width: uniform line width
        stroke_color: uniform line colour

    Returns:
        svgwrite.Drawing object
    """
    tracer = get_tracer()

    width = float(width)
    height = float(height)

    dwg = svgwrite.Drawing(size=(width, height))
    # svgwrite.viewbox() joins with commas
    dwg["viewBox"] = f"0 0 {width} {height}"

    line_group = dwg.g(stroke=stroke_color, stroke_width=stroke_width, fill="none")

    for seg in segments:
        line_group.add(dwg.line(start=(seg.x1, seg.y1), end=(seg.x2, seg.y2)))

    dwg.add(line_group)

    tracer.event(f"SVG emitted with {len(segments)} lines", width=width, height=height)

    return dwg


def emit_svg_string(segments, width, height, stroke_width=1, stroke_color="black"):
    """Serialize the emitted document to SVG text."""
    dwg = emit_svg(segments, width, height, stroke_width=stroke_width, stroke_color=stroke_color)
    return dwg.tostring()
