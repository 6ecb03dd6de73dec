"""Shared helpers for CLI command handlers."""

import logging
from argparse import Namespace

from newproject.exceptions import RecipeValidationError, format_error_chain


logger = logging.getLogger(__name__)


def configure_logging(args: Namespace) -> None:
    """Set up logging from the --log-level/--debug/--quiet/--verbose flags."""
    log_level = getattr(logging, args.log_level.upper().replace('WARN', 'WARNING'))
    if args.debug:
        log_level = logging.DEBUG
    elif args.quiet:
        log_level = logging.ERROR
    elif args.verbose:
        log_level = logging.INFO

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def report_error(error: Exception) -> int:
    """Log an error with its cause chain and return the exit code for it."""
    if isinstance(error, RecipeValidationError):
        for validation_error in error.errors:
            location = f"{validation_error.path}: " if validation_error.path else ""
            logger.error(f"Validation error: {location}{validation_error.message}")
        return error.exit_code

    logger.error(format_error_chain(error))
    return getattr(error, 'exit_code', 1)
