"""Exception hierarchy for freshen.

Every error raised by the change tracker or a fingerprint store derives from
``FreshenError`` so callers can guard an evaluation with a single ``except``.
"""

from __future__ import annotations


class FreshenError(Exception):
    """Base exception for all freshen errors."""


class NotFoundError(FreshenError):
    """Raised when a declared tracked input file does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Tracked file not found: {path}")


class ConfigurationError(FreshenError):
    """Raised when a path expected to be a file is a directory, or config is invalid."""


class StorageError(FreshenError):
    """Raised on read, write or sync failure against the fingerprint store."""


class SizingError(StorageError):
    """Raised when an in-place update would change the stored value's encoded length.

    Attributes:
        key: Key whose value was being replaced
        expected: Encoded length of the stored value
        actual: Encoded length of the rejected value
    """

    def __init__(self, key: str, expected: int, actual: int) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Value for key {key!r} is of illegal size: {actual} bytes "
            f"(stored value is {expected} bytes)"
        )


class FingerprintError(FreshenError):
    """Raised when an existing tracked file cannot be read for hashing."""


class CommandError(FreshenError):
    """Raised when a child process started by ``run_command`` fails.

    Attributes:
        argv: Command line that was executed
        returncode: Exit status (None if the process never started)
        stdout: Captured standard output
        stderr: Captured standard error
    """

    def __init__(
        self,
        argv: list[str],
        returncode: int | None,
        stdout: str = "",
        stderr: str = "",
        message: str | None = None,
    ) -> None:
        self.argv = argv
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        if message is None:
            message = (
                f"Command {argv[0]!r} failed with exit code {returncode}: "
                f'stderr: "{stderr.strip()}", stdout: "{stdout.strip()}"'
            )
        super().__init__(message)
