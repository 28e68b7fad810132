"""
Web-Socketizer CLI - Command Line Interface

This module provides the command-line interface for extracting REST service
blueprints from a Java project.
"""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

from loguru import logger

from websocketizer.config.config import configs
from websocketizer.extractors.base_extractor import ServiceExtractor
from websocketizer.extractors.java.rest_service_extractor import RestServiceExtractor
from websocketizer.models.domain_models import BufferPolicy, FileOutcome
from websocketizer.utils.common import export_blueprints, export_json


def setup_logging(verbose: bool = False) -> None:
    """
    Configure loguru sinks for the application.

    Args:
        verbose: Enable verbose (DEBUG) logging
    """
    level = "DEBUG" if verbose else configs.LOG_LEVEL
    logger.remove()
    logger.add(sys.stderr, level=level)
    logger.add(configs.LOG_FILE, level=level)


def validate_environment() -> bool:
    """Validate extraction configuration."""
    try:
        configs.validate_extraction_config()
    except ValueError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return False
    return True


def extract_command(args: argparse.Namespace) -> int:
    """
    Execute the extract command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    setup_logging(args.verbose)
    start_time = time.perf_counter()

    if not validate_environment():
        return 1

    project_path = Path(args.project_path)
    if not project_path.exists():
        logger.error(f"Project path does not exist: {project_path}")
        return 1

    if not project_path.is_dir():
        logger.error(f"Project path is not a directory: {project_path}")
        return 1

    outcomes: List[FileOutcome] = []
    extractor: ServiceExtractor = RestServiceExtractor(
        extension=args.extension,
        buffer_policy=BufferPolicy(args.policy),
        diagnostics=outcomes.append,
    )
    blueprints = extractor.extract_blueprints(project_path)

    skipped = [o for o in outcomes if o.skipped]
    for blueprint in blueprints:
        print(f"{blueprint.method_type.value:7} {blueprint.endpoint}  ->  "
              f"{blueprint.request_context.class_path}#{blueprint.handler.method_name}")

    if args.output:
        output_path = Path(args.output)
        export_blueprints(blueprints, output_path)
        export_json(outcomes, output_path, "diagnostics.json")

    elapsed = time.perf_counter() - start_time
    logger.info(f"Scanned {len(outcomes)} files, skipped {len(skipped)}, "
                f"found {len(blueprints)} blueprints in {elapsed:.2f}s")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog='websocketizer',
        description='Web-Socketizer - extract REST service blueprints from annotated Java sources',
    )

    parser.add_argument(
        '--version',
        action='version',
        version='Web-Socketizer 0.1.0'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    extract_parser = subparsers.add_parser(
        'extract',
        help='Extract service blueprints from a source tree'
    )

    extract_parser.add_argument(
        'project_path',
        type=str,
        help='Path to the project to scan'
    )

    extract_parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output directory for blueprints.json and diagnostics.json (optional)'
    )

    extract_parser.add_argument(
        '--extension', '-e',
        type=str,
        default=configs.SOURCE_EXTENSION,
        help=f'Source file extension (default: {configs.SOURCE_EXTENSION})'
    )

    extract_parser.add_argument(
        '--policy',
        type=str,
        choices=[policy.value for policy in BufferPolicy],
        default=configs.BUFFER_POLICY,
        help='How candidates are shared between service classes of one file (default: per_class)'
    )

    extract_parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose (DEBUG) logging'
    )

    extract_parser.set_defaults(func=extract_command)

    return parser


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv)

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, 'func'):
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
