"""Main CLI entry point for newproject."""

import argparse
import sys
from typing import Optional

from .commands import edit_recipes, init_project


COMMANDS = {'init', 'edit'}
VALUE_OPTIONS = {'--log-level', '--recipes-dir', '-e', '--editor'}


def first_positional(argv: list) -> Optional[str]:
    """First argument that is neither an option nor an option's value."""
    skip_next = False
    for arg in argv:
        if skip_next:
            skip_next = False
            continue
        if arg == '--':
            return None
        if arg.startswith('-'):
            skip_next = arg in VALUE_OPTIONS
            continue
        return arg
    return None


def add_logging_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress non-error output'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default='warn',
        help='Set log level'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the newproject CLI."""
    parser = argparse.ArgumentParser(
        prog='new',
        description='Create a new project from a template recipe'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Init command
    init_parser = subparsers.add_parser('init', help='Create a new project from a template')
    init_parser.add_argument(
        'template',
        nargs='?',
        help='Template recipe to use for the new project'
    )
    init_parser.add_argument(
        'directory',
        nargs='?',
        help='Directory where to create the new project'
    )
    init_parser.add_argument(
        '--recipes-dir',
        type=str,
        help='Override the recipes directory'
    )
    add_logging_arguments(init_parser)

    # Edit command
    edit_parser = subparsers.add_parser('edit', help='Open the recipes directory in your preferred editor')
    edit_parser.add_argument(
        '-e', '--editor',
        type=str,
        help='Editor to use'
    )
    edit_parser.add_argument(
        '--recipes-dir',
        type=str,
        help='Override the recipes directory'
    )
    add_logging_arguments(edit_parser)

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    argv = list(sys.argv[1:] if args is None else args)

    # `new [options] <template> [directory]` is shorthand for `new init ...`
    first = first_positional(argv)
    if first is not None and first not in COMMANDS:
        argv.insert(0, 'init')

    parser = create_parser()
    parsed_args = parser.parse_args(argv)

    if not parsed_args.command:
        parser.print_help()
        return 1

    if parsed_args.command == 'init':
        return init_project(parsed_args)
    elif parsed_args.command == 'edit':
        return edit_recipes(parsed_args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
