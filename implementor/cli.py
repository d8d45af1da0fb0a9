"""
Command-line interface.

``implementor <type>`` writes the implementation source into the current
directory; ``implementor -jar <type> <archive>`` compiles it and packages
the result.
"""

import argparse
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from .codegen.core.catalog import TypeNotFoundError
from .codegen.core.config import ConfigError, get_config_manager
from .codegen.core.generator import GenerationError
from .logging_config import get_logger, setup_logging
from .orchestrator import Implementor
from .utils import DescriptorLoadError, load_catalog

logger = get_logger(__name__)

USAGE = "Usage: implementor <type>\n       implementor -jar <type> <archive>"
DEFAULT_TYPES_FILE = "types.json"

console = Console()


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="implementor",
        description="Generate minimal Java implementations of classes and interfaces",
        add_help=True,
    )
    parser.add_argument(
        "-jar",
        dest="jar",
        action="store_true",
        help="Compile the implementation and package it into an archive",
    )
    parser.add_argument("arguments", nargs="*", metavar="ARG", help="<type> or <type> <archive>")
    parser.add_argument(
        "--types",
        action="append",
        metavar="SOURCE",
        help=f"Type descriptor file or URL, repeatable (default: {DEFAULT_TYPES_FILE})",
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: IMPLEMENTOR_LOG_LEVEL or WARNING)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command line.

    Returns:
        Exit code: 0 on success, 1 on failure, 2 on wrong usage
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    expected = 2 if args.jar else 1
    if len(args.arguments) != expected:
        console.print(USAGE, markup=False, highlight=False)
        return 2

    setup_logging(args.log_level)

    try:
        manager = get_config_manager()
        config = manager.get_config(config_file=args.config)
        for warning in manager.validate_config(config):
            console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")

        catalog = load_catalog(args.types or [DEFAULT_TYPES_FILE])
        target = catalog.get(args.arguments[0])

        implementor = Implementor(config)
        for warning in implementor.generator.collect_warnings(target):
            logger.warning(warning)

        if args.jar:
            path = implementor.implement_jar(target, Path(args.arguments[1]))
        else:
            path = implementor.implement(target, Path.cwd())

    except TypeNotFoundError as e:
        logger.error("Unknown type: %s", e.type_name)
        console.print(f"[red]Invalid type name:[/red] {escape(e.type_name)}", highlight=False)
        return 1
    except GenerationError as e:
        console.print(f"[red]✗ Generation failed:[/red] {escape(str(e))}", highlight=False)
        return 1
    except (ConfigError, DescriptorLoadError) as e:
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}", highlight=False)
        return 1

    console.print(f"[green]✓[/green] Wrote {escape(str(path))}", highlight=False)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
