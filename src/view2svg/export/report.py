"""
Export report generation for view2svg.

Records the outcome of a run, including any elements that were skipped.
"""

import os

from view2svg.io.save_artifacts import save_json, save_text
from view2svg.tracer import get_tracer, trace


@trace(label="generate_report")
def generate_report(result, out_dir):
    """
    Write the export report files.

    Creates:
    - export_report.json: the run result without the SVG body
    - export_summary.txt: human-readable summary
    """
    tracer = get_tracer()

    report_path = os.path.join(out_dir, "export_report.json")
    save_json(result.model_dump(mode="json", exclude={"svg"}), report_path)

    summary_path = os.path.join(out_dir, "export_summary.txt")
    save_text(format_summary(result), summary_path)

    tracer.event(
        f"Report saved: status={result.status.value}, "
        f"{len(result.skipped_elements)} skipped elements"
    )

    return report_path, summary_path


def format_summary(result):
    """Human-readable summary of an export result."""
    lines = ["view2svg Export Report", "=" * 40, ""]

    lines.append(f"View: {result.view_id}")
    lines.append(f"Status: {result.status.value}")
    lines.append(f"Elements: {result.element_count}")
    lines.append(f"Segments: {result.segment_count}")

    if result.canvas is not None:
        lines.append(f"Canvas: {result.canvas.width:g} x {result.canvas.height:g} (scale {result.canvas.scale:g})")
    if result.message:
        lines.append(f"Message: {result.message}")
    lines.append("")

    if result.skipped_elements:
        lines.append("SKIPPED ELEMENTS:")
        lines.append("-" * 40)
        for skipped in result.skipped_elements:
            lines.append(f"[{skipped.error_type}] {skipped.element_id}: {skipped.message}")
        lines.append("")

    return "\n".join(lines)
