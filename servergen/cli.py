"""Command-line entry point.

Usage::

    servergen                         # interactive
    servergen --name demo --yes       # accept every default
    python -m servergen -o ~/code --no-client
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from servergen.config import ScaffoldConfig
from servergen.prompts import Answers, collect_answers, validate_project_name
from servergen.scaffolder import ProjectGenerator, ScaffoldError, ScaffoldResult
from servergen.utils import (
    console,
    format_duration,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="servergen",
        description="Scaffold a Node/Express backend project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  servergen\n"
            "  servergen --name my-api --yes --no-client\n"
            "  servergen -o ./projects --port 3001\n"
        ),
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Parent directory for the project (default: $SERVERGEN_OUTPUT_DIR or .)",
    )
    parser.add_argument("--name", "-n", default=None, help="Project name (skips the question)")
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Accept every default without asking (requires --name)",
    )
    parser.add_argument(
        "--skip-install",
        action="store_true",
        help="Do not run npm install for the backend dependencies",
    )
    parser.add_argument(
        "--no-client",
        action="store_true",
        help="Never create the React client",
    )
    parser.add_argument("--port", type=int, default=None, help="Backend port (default: 8080)")
    return parser


def _build_config(args: argparse.Namespace) -> ScaffoldConfig:
    config = ScaffoldConfig.from_env()
    update: dict[str, Any] = {}
    if args.output is not None:
        update["output_dir"] = Path(args.output)
    if args.port is not None:
        update["backend_port"] = args.port
    if args.skip_install:
        update["install_dependencies"] = False
    # model_validate re-runs the Field constraints that model_copy would skip
    return ScaffoldConfig.model_validate({**config.model_dump(), **update})


def _print_result(result: ScaffoldResult) -> None:
    summary = {
        "Project": str(result.project_root),
        "Files written": str(len(result.files_written)),
        "Commands run": str(len(result.commands)),
        "React client": str(result.client_root) if result.client_root else "no",
        "Duration": format_duration(result.duration_seconds),
    }
    console.print()
    print_summary_table(summary, title="servergen")
    for output, error in result.files_failed.items():
        print_warning(f"Not written: {output} ({error})")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``servergen`` and ``python -m servergen``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.name is not None:
        error = validate_project_name(args.name)
        if error:
            parser.error(error)
    if args.yes and args.name is None:
        parser.error("--yes requires --name")

    try:
        config = _build_config(args)
    except (ValidationError, ValueError) as exc:
        parser.error(f"Invalid configuration: {exc}")

    preset: dict[str, Any] = {}
    if args.name is not None:
        preset["project_name"] = args.name
    if args.no_client:
        preset["react_client"] = False

    try:
        if args.yes:
            answers = Answers.from_mapping(preset)
        else:
            answers = collect_answers(preset=preset)
        result = asyncio.run(ProjectGenerator(answers, config).generate())
    except KeyboardInterrupt:
        print_error("Aborted.")
        sys.exit(130)
    except EOFError:
        print_error("No input available. Pass --name and --yes to run without prompts.")
        sys.exit(1)
    except ScaffoldError as exc:
        print_error(f"Scaffolding failed: {exc}")
        sys.exit(1)

    _print_result(result)
    if not result.success:
        print_error("Project created with errors.")
        sys.exit(1)
    print_success(f"Project ready. cd {result.project_root} && npm run dev")


if __name__ == "__main__":
    main()
