"""
Command-line interface for view2svg.

Provides commands for exporting a view scene and writing a default config.
"""

import argparse
import sys

from view2svg.config import load_config, save_default_config
from view2svg.models import ExportStatus
from view2svg.tracer import configure_tracer, get_tracer


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="view2svg: flatten the geometry of a plan view into an SVG line drawing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Export a view scene to SVG")
    run_parser.add_argument(
        "--scene", "-s",
        required=True,
        help="View scene JSON file",
    )
    run_parser.add_argument(
        "--out", "-o",
        required=True,
        help="Output directory",
    )
    run_parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML configuration file",
    )
    run_parser.add_argument(
        "--scale",
        type=float,
        default=None,
        help="Output units per world unit (overrides config)",
    )
    run_parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable runtime tracing",
    )
    run_parser.add_argument(
        "--trace-level",
        default="INFO",
        choices=["ERROR", "WARN", "INFO", "DEBUG"],
        help="Trace log level",
    )
    run_parser.add_argument(
        "--trace-file",
        default=None,
        help="Path to write trace logs",
    )
    run_parser.add_argument(
        "--trace-json",
        action="store_true",
        help="Enable JSON trace output",
    )

    init_parser = subparsers.add_parser("init-config", help="Create default config file")
    init_parser.add_argument(
        "--out", "-o",
        default="view2svg_config.yaml",
        help="Output path for config file",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "run":
        return handle_run(args)
    elif args.command == "init-config":
        return handle_init_config(args)

    return 0


def handle_run(args):
    """Handle the run command."""
    config = load_config(args.config)
    if args.scale is not None:
        config.projection.scale = args.scale

    configure_tracer(
        enabled=args.trace or config.tracing.enabled,
        level=args.trace_level if args.trace else config.tracing.level,
        file_path=args.trace_file or config.tracing.file_path,
        json_output=args.trace_json or config.tracing.json_output,
    )

    tracer = get_tracer()

    try:
        from view2svg.pipeline import run_export

        with tracer.span("cli_run", module="cli"):
            result = run_export(
                scene_path=args.scene,
                out_dir=args.out,
                config=config,
            )
    except Exception as e:
        tracer.event(f"Export failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1
    finally:
        tracer.config.close()

    if result.status != ExportStatus.EXPORTED:
        print(f"\n{result.message}")
        return 0

    print("\nExport completed.")
    print(f"  View: {result.view_id}")
    print(f"  Elements processed: {result.element_count}")
    print(f"  Line segments: {result.segment_count}")
    print(f"  Canvas: {result.canvas.width:g} x {result.canvas.height:g}")
    if result.skipped_elements:
        print(f"  Skipped elements: {len(result.skipped_elements)}")
    print(f"\nSVG saved to: {result.output_path}")

    return 0


def handle_init_config(args):
    """Handle the init-config command."""
    save_default_config(args.out)
    print(f"Default configuration saved to: {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
