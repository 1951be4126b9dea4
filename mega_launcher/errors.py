"""Exception classes for launcher errors.

LauncherError is the base for everything the launcher raises on its own
behalf. ExecFailure is the only concrete failure: the target binary could not
be executed.
"""

# Exit statuses used by POSIX shells when exec fails
EXIT_NOT_FOUND = 127
EXIT_NOT_EXECUTABLE = 126


class LauncherError(Exception):
    """Base exception for launcher errors."""
    pass


class ExecFailure(LauncherError):
    """Raised when the target executable cannot replace the current process.

    Attributes:
        executable: Path of the binary that failed to execute.
        exit_code: Shell-style exit status (127 if missing, 126 otherwise).
    """

    def __init__(self, executable: str, exit_code: int, reason: str):
        self.executable = executable
        self.exit_code = exit_code
        super().__init__(f"Cannot execute '{executable}': {reason}")

    @classmethod
    def from_os_error(cls, executable: str, error: OSError) -> "ExecFailure":
        """Build an ExecFailure from the OSError raised by exec."""
        if isinstance(error, (FileNotFoundError, NotADirectoryError)):
            exit_code = EXIT_NOT_FOUND
        else:
            exit_code = EXIT_NOT_EXECUTABLE
        reason = error.strerror or str(error)
        return cls(executable, exit_code, reason)


__all__ = [
    'EXIT_NOT_FOUND',
    'EXIT_NOT_EXECUTABLE',
    'LauncherError',
    'ExecFailure',
]
