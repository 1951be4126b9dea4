"""Process hand-off for the aries entrypoint.

This module builds the environment and argument vector for the target binary
and then replaces the current process with it. Nothing runs after a
successful exec, so all decisions are made up front in a LaunchPlan.
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping, NoReturn

from .config import (
    BASE_DIR_ENV_VAR,
    DEFAULT_BASE_DIR,
    TARGET_EXECUTABLE,
    find_config_file,
)
from .errors import ExecFailure

logger = logging.getLogger(__name__)


def build_launch_env(
    base_dir: str | Path,
    environ: Mapping[str, str] | None = None
) -> dict[str, str]:
    """Build the environment the target process will inherit.

    The inherited environment is copied and MEGA_BASE_DIR is set on the copy.
    A value already present in the caller's environment is overwritten.

    Args:
        base_dir: Value for MEGA_BASE_DIR.
        environ: Environment to start from. If None, uses os.environ.
            The mapping itself is never modified.

    Returns:
        Dictionary of environment variable names to values.
    """
    if environ is None:
        environ = os.environ
    env = dict(environ)

    previous = env.get(BASE_DIR_ENV_VAR)
    if previous is not None and previous != str(base_dir):
        logger.debug(
            "Overriding %s=%s with %s", BASE_DIR_ENV_VAR, previous, base_dir
        )
    env[BASE_DIR_ENV_VAR] = str(base_dir)

    return env


def build_args(config_file: str | Path | None) -> list[str]:
    """Build the target's arguments (excluding argv[0]).

    Args:
        config_file: Path to the config file, or None if there isn't one.

    Returns:
        ["-c", <config_file>] when a config file is given, otherwise [].
    """
    if config_file is None:
        return []
    return ["-c", str(config_file)]


@dataclass(frozen=True)
class LaunchPlan:
    """Everything needed to exec the target.

    Attributes:
        executable: Absolute path of the binary to exec.
        args: Arguments passed after argv[0].
        env: Complete environment for the new process image.
        config_file: Config file passed via -c, or None.
    """
    executable: str
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)
    config_file: str | None = None

    @property
    def argv(self) -> list[str]:
        """Full argument vector; argv[0] is the executable path."""
        return [self.executable, *self.args]


def plan_launch(
    base_dir: str | Path = DEFAULT_BASE_DIR,
    executable: str = TARGET_EXECUTABLE,
    environ: Mapping[str, str] | None = None
) -> LaunchPlan:
    """Decide how the target will be invoked.

    Sets MEGA_BASE_DIR in the launch environment, derives the config path
    from it, and checks whether that file exists. The only side effect is
    the filesystem stat.

    Args:
        base_dir: MEGA base directory (default: /opt/mega).
        executable: Target binary (default: /usr/local/bin/aries).
        environ: Environment to inherit. If None, uses os.environ.

    Returns:
        LaunchPlan with `-c <config>` arguments if the config file exists,
        or no arguments if it doesn't.
    """
    env = build_launch_env(base_dir, environ)

    # Derive from the value placed in the environment, not the caller's
    found = find_config_file(env[BASE_DIR_ENV_VAR])
    config_file = str(found) if found is not None else None

    plan = LaunchPlan(
        executable=executable,
        args=build_args(config_file),
        env=env,
        config_file=config_file,
    )
    logger.debug("Launch plan: argv=%s", plan.argv)
    return plan


def flush_std_streams() -> None:
    """Flush stdout and stderr, ignoring streams that are closed or broken.

    A launcher started with fd 1 closed has sys.stdout set to None, and one
    writing into a pipe nobody reads gets BrokenPipeError on flush. Neither
    may stop the hand-off to the target.
    """
    for stream in (sys.stdout, sys.stderr):
        if stream is None:
            continue
        try:
            stream.flush()
        except (OSError, ValueError) as e:
            # ValueError: flush on a stream that was already closed
            logger.debug("Could not flush %r before exec: %s", stream, e)


def exec_plan(
    plan: LaunchPlan,
    execve: Callable[[str, list[str], dict[str, str]], None] = os.execve
) -> NoReturn:
    """Replace the current process with the planned target.

    Standard streams are flushed first, since buffered output would
    otherwise be discarded along with the old process image.

    Args:
        plan: The launch plan to execute.
        execve: Exec implementation; os.execve unless a test substitutes one.

    Raises:
        ExecFailure: If the executable is missing or cannot be executed.
            There is no retry and no fallback.
    """
    flush_std_streams()

    try:
        execve(plan.executable, plan.argv, plan.env)
    except OSError as e:
        raise ExecFailure.from_os_error(plan.executable, e) from e

    # Only reachable when a substituted execve returns
    raise ExecFailure(plan.executable, 1, "exec returned unexpectedly")
