"""
Main pipeline orchestrator for view2svg.

Runs collecting, projecting, bounding and emitting in sequence for one view
and reports the outcome as an ExportResult.
"""

import os

from view2svg.config import ExportConfig, load_config
from view2svg.export.report import generate_report
from view2svg.export.svg_emit import emit_svg_string
from view2svg.geometry.flatten import flatten_element
from view2svg.io.load_scene import load_scene, validate_scene_input
from view2svg.io.save_artifacts import ensure_dir, save_svg
from view2svg.models import (
    PLAN_VIEW_KINDS, ExportResult, ExportStatus, PipelineState, SkippedElement,
)
from view2svg.projection.bounds import compute_bounds, compute_canvas, to_render_segments
from view2svg.projection.projector import project_segments
from view2svg.tracer import get_tracer, trace


NO_CONTENT_MESSAGE = "No lines found in view."
VIEW_NOT_SUPPORTED_MESSAGE = "Only valid, non-template plan views can be exported."


def is_exportable_view(scene):
    """A view is exportable when it is a valid plan view and not a template."""
    return scene.kind in PLAN_VIEW_KINDS and not scene.is_template and scene.is_valid


def collect_segments(elements, config):
    """
    Flatten every element into one segment list.

    Each element is flattened on its own; an element that fails contributes
    nothing and is reported back instead.

    Returns (segments, element_count, skipped_elements).
    """
    tracer = get_tracer()

    segments = []
    skipped = []
    element_count = 0

    for element in elements:
        element_count += 1
        element_id = str(getattr(element, "element_id", element_count - 1))
        try:
            element_segments = flatten_element(element, config)
        except Exception as e:
            skipped.append(SkippedElement(
                element_id=element_id,
                error_type=type(e).__name__,
                message=str(e),
            ))
            tracer.event(
                f"Skipped element {element_id}: {type(e).__name__}: {str(e)[:100]}",
                level="WARN",
            )
            continue
        segments.extend(element_segments)

    return segments, element_count, skipped


@trace(label="export_elements")
def export_elements(elements, frame, config=None, view_id=""):
    """
    Convert the geometry of a view's elements into an SVG document.

    Args:
        elements: iterable of objects with `element_id` and `geometry`
        frame: ViewFrame of the view
        config: ExportConfig (optional)
        view_id: identifier carried into the result

    Returns:
        ExportResult; status is NO_CONTENT when no segment was found
    """
    tracer = get_tracer()
    config = config or ExportConfig()
    scale = config.projection.scale

    state = PipelineState.COLLECTING
    with tracer.span(state.value, module="pipeline"):
        segments, element_count, skipped = collect_segments(elements, config)
        tracer.event(f"Collected {len(segments)} segments from {element_count} elements")

    if not segments:
        tracer.event(NO_CONTENT_MESSAGE, level="WARN")
        return ExportResult(
            view_id=view_id,
            status=ExportStatus.NO_CONTENT,
            final_state=PipelineState.ABORTED,
            element_count=element_count,
            skipped_elements=skipped,
            message=NO_CONTENT_MESSAGE,
        )

    state = PipelineState.PROJECTING
    with tracer.span(state.value, module="pipeline"):
        projected = project_segments(segments, frame)

    state = PipelineState.BOUNDING
    with tracer.span(state.value, module="pipeline"):
        bounds = compute_bounds(projected.reshape(-1, 2))
        canvas = compute_canvas(bounds, scale)
        tracer.event(f"Canvas {canvas.width:g}x{canvas.height:g}", scale=scale)

    state = PipelineState.EMITTING
    with tracer.span(state.value, module="pipeline"):
        render_segments = to_render_segments(
            projected, bounds, scale, precision=config.projection.precision,
        )
        svg = emit_svg_string(
            render_segments, canvas.width, canvas.height,
            stroke_width=config.stroke.width,
            stroke_color=config.stroke.color,
        )

    return ExportResult(
        view_id=view_id,
        status=ExportStatus.EXPORTED,
        final_state=PipelineState.DONE,
        svg=svg,
        canvas=canvas,
        bounds=bounds,
        element_count=element_count,
        segment_count=len(render_segments),
        skipped_elements=skipped,
    )


def export_view(scene, config=None):
    """
    Export a whole view scene.

    Views that are not plan views, are templates or are invalid are reported
    as VIEW_NOT_SUPPORTED without looking at their elements.
    """
    tracer = get_tracer()

    if not is_exportable_view(scene):
        tracer.event(f"View {scene.view_id} not exportable", level="WARN", kind=scene.kind.value)
        return ExportResult(
            view_id=scene.view_id,
            status=ExportStatus.VIEW_NOT_SUPPORTED,
            final_state=PipelineState.ABORTED,
            message=VIEW_NOT_SUPPORTED_MESSAGE,
        )

    return export_elements(scene.elements, scene.frame, config, view_id=scene.view_id)


@trace(label="run_export")
def run_export(scene_path, out_dir, config=None, config_path=None):
    """
    Load a scene file, export it and write the artifacts.

    Args:
        scene_path: path to a scene JSON file
        out_dir: output directory
        config: ExportConfig object (optional)
        config_path: path to YAML config file (optional)

    Returns:
        ExportResult with output paths filled in
    """
    tracer = get_tracer()

    if config is None:
        config = load_config(config_path)

    errors = validate_scene_input(scene_path)
    if errors:
        for error in errors:
            tracer.event(error, level="ERROR")
        raise ValueError(f"Input validation failed: {errors}")

    scene = load_scene(scene_path)
    result = export_view(scene, config)

    ensure_dir(out_dir)

    if result.has_document:
        svg_path = os.path.join(out_dir, config.output.filename)
        save_svg(result.svg, svg_path)
        result.output_path = svg_path

    if config.output.write_report:
        report_path, _ = generate_report(result, out_dir)
        result.report_path = report_path

    tracer.event(f"Export finished: {result.status.value}, {result.segment_count} segments")

    return result
