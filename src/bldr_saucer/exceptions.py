"""Exception hierarchy for bldr-saucer.

Every error raised by the package derives from :class:`BldrSaucerError`.
Lookup failures additionally derive from :class:`FileNotFoundError` so
callers that only care about missing files can catch the builtin.
"""

from typing import Optional


class BldrSaucerError(RuntimeError):
    """Base class for all bldr-saucer errors."""


class NotFoundError(BldrSaucerError, FileNotFoundError):
    """Raised when a path is not part of a resource bundle.

    Args:
        message: Human-readable error message.
        path: The path that was requested.
    """

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class EmbedError(BldrSaucerError):
    """Raised when an embed pattern is malformed or matches no files.

    Args:
        message: Human-readable error message.
        pattern: The offending embed pattern.
    """

    def __init__(self, message: str, pattern: str) -> None:
        super().__init__(message)
        self.pattern = pattern


class ManifestError(BldrSaucerError):
    """Raised when the vendoring manifest cannot be parsed or validated.

    Args:
        message: Human-readable error message.
        source: Where the manifest was read from.
    """

    def __init__(self, message: str, source: str) -> None:
        super().__init__(message)
        self.source = source


class BinaryNotFoundError(BldrSaucerError, FileNotFoundError):
    """Raised when no bldr-saucer binary is available for this platform.

    Args:
        message: Human-readable error message.
        platform: Platform key, e.g. ``linux-x64``.
    """

    def __init__(self, message: str, platform: str) -> None:
        super().__init__(message)
        self.platform = platform


class BuildError(BldrSaucerError):
    """Raised when building bldr-saucer from source fails.

    Args:
        message: Human-readable error message.
        step: Build step that failed (``tools``, ``configure``, ``build``
            or ``verify``).
        returncode: Exit status of the failing subprocess, if any.
    """

    def __init__(
        self, message: str, step: str, returncode: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.step = step
        self.returncode = returncode


class ConfigError(BldrSaucerError):
    """Raised when the merged configuration fails validation.

    Args:
        message: Human-readable error message.
        fields: Names of the settings that were rejected.
    """

    def __init__(self, message: str, fields: Optional[list[str]] = None) -> None:
        super().__init__(message)
        self.fields = fields or []
