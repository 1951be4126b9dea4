"""Command-line entry point for the aries container launcher."""

import logging
import os
import sys

from .config import verbose_from_env
from .errors import ExecFailure
from .launcher import exec_plan, plan_launch

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the launcher.

    By default, logging does not output to console, so the only thing the
    launcher ever prints is the config file notice.
    In verbose mode, DEBUG-level logs are shown on stderr.
    """
    # Remove any existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    if verbose:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        root_logger.addHandler(console_handler)
        root_logger.setLevel(logging.DEBUG)
    else:
        # Default mode: no console output from logging. The NullHandler keeps
        # logging's last-resort stderr handler from firing on errors.
        root_logger.addHandler(logging.NullHandler())
        root_logger.setLevel(logging.DEBUG)


def announce_config_file(config_file: str) -> None:
    """Print the config file notice; a failed write does not stop the launch."""
    try:
        print(f"Using config file: {config_file}")
    except OSError as e:
        logger.warning("Could not write config file notice: %s", e)


def main() -> int:
    """Main entry point.

    Does not return if the target starts. Command-line arguments given to
    the launcher are ignored and not forwarded.

    Returns:
        Shell-style exit status when exec fails (127 or 126)
    """
    setup_logging(verbose_from_env(os.environ))

    plan = plan_launch()

    if plan.config_file is not None:
        announce_config_file(plan.config_file)

    try:
        exec_plan(plan)
    except ExecFailure as e:
        logger.error("%s", e)
        return e.exit_code


if __name__ == "__main__":
    sys.exit(main())
