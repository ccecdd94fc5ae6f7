"""Exceptions raised by the scaffolder.

All fatal failures derive from ``CquverError`` so the CLI can report them
uniformly.  Module-file update problems are *not* exceptions; they are
reported through ``ModuleUpdateResult``.
"""

from __future__ import annotations

from pathlib import Path


class CquverError(Exception):
    """Base class for fatal scaffolding errors."""


class PreconditionError(CquverError):
    """Raised when the target application directory is missing or unusable."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(message)


class ScaffoldError(CquverError):
    """Raised when a directory cannot be created for a reason other than existing."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Could not create directory {path}: {reason}")


class WriteError(CquverError):
    """Raised when a generated file cannot be written.

    Files written before the failure are left on disk.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Could not write {path}: {reason}")
