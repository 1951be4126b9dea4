"""Launch configuration for the aries entrypoint.

The launcher's settings are fixed: the base directory is always /opt/mega and
the target is always /usr/local/bin/aries. The only thing discovered at
runtime is whether `etc/config.toml` exists under the base directory. Its
contents are never read here; that is the job of aries itself.
"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Union

logger = logging.getLogger(__name__)

BASE_DIR_ENV_VAR = "MEGA_BASE_DIR"
DEFAULT_BASE_DIR = "/opt/mega"
CONFIG_RELATIVE_PATH = "etc/config.toml"
TARGET_EXECUTABLE = "/usr/local/bin/aries"

# Diagnostics only; has no effect on what gets executed
VERBOSE_ENV_VAR = "MEGA_LAUNCHER_VERBOSE"
_TRUTHY = {"1", "true", "yes", "on"}


def config_file_path(base_dir: Union[str, Path]) -> Path:
    """Return the config file location derived from base_dir.

    Args:
        base_dir: The MEGA base directory

    Returns:
        Path to `<base_dir>/etc/config.toml` (whether or not it exists)
    """
    return Path(base_dir) / CONFIG_RELATIVE_PATH


def find_config_file(base_dir: Union[str, Path]) -> Optional[Path]:
    """Return the config file under base_dir if it is a regular file.

    Same test as the shell's `[ -f ]`: symlinks are followed, directories and
    missing paths count as absent. Readability is not checked.

    Args:
        base_dir: The MEGA base directory

    Returns:
        Path to the config file if present, None otherwise
    """
    config_file = config_file_path(base_dir)
    if config_file.is_file():
        logger.debug("Found config file at %s", config_file)
        return config_file

    logger.debug("No config file at %s", config_file)
    return None


def verbose_from_env(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Check whether verbose launcher logging was requested.

    Args:
        environ: Environment to inspect. If None, uses os.environ

    Returns:
        True if MEGA_LAUNCHER_VERBOSE is set to a truthy value
    """
    if environ is None:
        environ = os.environ
    value = environ.get(VERBOSE_ENV_VAR, "")
    return value.strip().lower() in _TRUTHY
