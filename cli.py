#!/usr/bin/env python
"""
Command-line interface for Media Planner.

Usage:
    python cli.py plan --config plan.yaml --output results/
    python cli.py template --output plan.yaml
    python cli.py sweep --config plan.yaml --parameter efficiency_rate --values 0 2 5
    python cli.py serve --port 8000
"""

import argparse
import sys
import logging
from pathlib import Path
from datetime import datetime

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Media Planner - user acquisition budget planning CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Plan command
    plan_parser = subparsers.add_parser("plan", help="Compute a media plan")
    plan_parser.add_argument(
        "--config", "-c",
        type=str,
        required=True,
        help="Path to YAML plan file"
    )
    plan_parser.add_argument(
        "--output", "-o",
        type=str,
        default="./output",
        help="Output directory for reports"
    )
    plan_parser.add_argument(
        "--format",
        type=str,
        choices=["csv", "json", "all"],
        default="all",
        help="Report format"
    )

    # Template command
    template_parser = subparsers.add_parser("template", help="Write a template plan file")
    template_parser.add_argument(
        "--output", "-o",
        type=str,
        default="plan.yaml",
        help="Where to write the template"
    )

    # Sweep command
    sweep_parser = subparsers.add_parser("sweep", help="Evaluate a plan across values of one setting")
    sweep_parser.add_argument(
        "--config", "-c",
        type=str,
        required=True,
        help="Path to YAML plan file"
    )
    sweep_parser.add_argument(
        "--parameter", "-p",
        type=str,
        required=True,
        help="Setting to vary (e.g. efficiency_rate)"
    )
    sweep_parser.add_argument(
        "--values", "-v",
        type=float,
        nargs="+",
        required=True,
        help="Values to try"
    )
    sweep_parser.add_argument(
        "--output", "-o",
        type=str,
        help="Optional: CSV file for the comparison table"
    )

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Launch the HTTP API")
    serve_parser.add_argument(
        "--port", "-p",
        type=int,
        default=8000,
        help="Port to serve on"
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    # Route to command handlers
    if args.command == "plan":
        cmd_plan(args)
    elif args.command == "template":
        cmd_template(args)
    elif args.command == "sweep":
        cmd_sweep(args)
    elif args.command == "serve":
        cmd_serve(args)


def _load_plan(path: str):
    from media_planner.config.loader import ConfigLoader

    logger.info(f"Loading plan from: {path}")
    try:
        return ConfigLoader.from_yaml(path)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        sys.exit(1)


def cmd_plan(args):
    """Compute a plan and write reports."""
    from media_planner.analysis.reporting import ReportGenerator

    logger.info("=" * 60)
    logger.info("Media Planner - Plan")
    logger.info("=" * 60)

    plan = _load_plan(args.config)
    report_gen = ReportGenerator(plan)
    totals = report_gen.result.totals

    logger.info(
        f"Total spend: ${totals.spend:,.2f} | Installs: {totals.installs:,.0f} | "
        f"Onboarded: {totals.onboarded:,.0f} | Avg CPI: ${totals.avg_cpi:,.2f}"
    )

    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    if args.format in ("csv", "all"):
        report_gen.export_report_csv(output_dir / f"media_plan_report_{timestamp}.csv")
        report_gen.export_monthly_csv(output_dir / f"monthly_{timestamp}.csv")
        logger.info("Exported CSV")

    if args.format in ("json", "all"):
        report_gen.generate_json_report(output_dir / f"report_{timestamp}.json")
        logger.info("Exported JSON")

    logger.info(f"Reports saved to: {output_dir}")


def cmd_template(args):
    """Write a template plan file."""
    from media_planner.config.loader import ConfigLoader

    config = ConfigLoader.from_dict(ConfigLoader.get_template())
    ConfigLoader.to_yaml(config, args.output)


def cmd_sweep(args):
    """Evaluate a plan across values of one setting."""
    from media_planner.planning.scenarios import sweep_parameter

    plan = _load_plan(args.config)
    try:
        df = sweep_parameter(plan, args.parameter, args.values)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    print("\n" + df.to_string(index=False, float_format=lambda x: f"{x:,.2f}"))

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(output_path, index=False)
        logger.info(f"Sweep saved to: {output_path}")


def cmd_serve(args):
    """Launch the HTTP API."""
    import uvicorn

    logger.info("Launching Media Planner API...")
    logger.info(f"Access at: http://localhost:{args.port}")

    uvicorn.run("media_planner.api.server:app", host="localhost", port=args.port)


if __name__ == "__main__":
    main()
