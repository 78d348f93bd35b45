"""Exception and warning types raised by the scaffolder.

Every error the generator raises derives from :class:`ScaffoldError` so the
CLI can report them uniformly.  Each one also derives from the closest
built-in exception (``ValueError``, ``FileExistsError``, ``LookupError``) so
callers that do not know about this module can still catch them sensibly.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for all scaffolding failures."""


class InvalidNameError(ScaffoldError, ValueError):
    """Raised when a project name fails the syntactic or reserved-word rules."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(reason)


class DirectoryExistsError(ScaffoldError, FileExistsError):
    """Raised when the target project directory is already present."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f'Directory "{self.path.name}" already exists')

    def __str__(self) -> str:
        return self.args[0]


class UnknownTemplateError(ScaffoldError, LookupError):
    """Raised when a template kind is not present in the registry."""

    def __init__(self, kind: str, available: list[str] | None = None) -> None:
        self.kind = kind
        self.available = sorted(available or [])
        message = f'Template "{kind}" not found'
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


class GenerationError(ScaffoldError):
    """Raised when a template fails partway through writing its files."""

    def __init__(self, kind: str, path: Path, message: str) -> None:
        self.kind = kind
        self.path = Path(path)
        super().__init__(f"Failed to generate {kind} template at {self.path}: {message}")


class CleanupWarning(UserWarning):
    """Emitted when a partially generated directory could not be removed."""
