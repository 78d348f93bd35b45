"""Project name validation.

Names become both a directory name and the ``name`` field of the generated
``package.json``, so they follow npm's package naming rules closely enough to
be safe for both.
"""

from __future__ import annotations

import re

from .errors import InvalidNameError

MAX_NAME_LENGTH = 214

RESERVED_NAMES: frozenset[str] = frozenset(
    {"node_modules", "favicon.ico", "package.json", "package-lock.json"}
)

_VALID_NAME_RE = re.compile(r"[a-z0-9_-]+", re.IGNORECASE | re.ASCII)


def validate_project_name(name: str) -> None:
    """Raise :class:`InvalidNameError` if *name* is not a usable project name.

    Checks, in order: non-empty, at most 214 characters, only letters, digits,
    hyphens and underscores, no leading dot or hyphen, and not a reserved
    name (compared case-insensitively).  Returns ``None`` when the name passes.
    """
    if not name or not name.strip():
        raise InvalidNameError(name, "Project name cannot be empty")

    if len(name) > MAX_NAME_LENGTH:
        raise InvalidNameError(
            name, f"Project name cannot be longer than {MAX_NAME_LENGTH} characters"
        )

    if not _VALID_NAME_RE.fullmatch(name):
        raise InvalidNameError(
            name,
            "Project name can only contain letters, numbers, hyphens, and underscores",
        )

    if name.startswith((".", "-")):
        raise InvalidNameError(name, "Project name cannot start with a dot or hyphen")

    if name.lower() in RESERVED_NAMES:
        raise InvalidNameError(name, f'"{name}" is a reserved name and cannot be used')
