"""Directory skeleton creation for layered NestJS applications.

Directory creation is idempotent: an existing directory is reported and
treated as success, and nothing is ever deleted.  Independent directories
are created concurrently since their paths never overlap.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from cquver.utils import print_created_dir, print_existing_dir

from .errors import PreconditionError, ScaffoldError
from .kinds import ComponentKind, get_spec
from .models import LayoutReport


# ---------------------------------------------------------------------------
# Layered layout
# ---------------------------------------------------------------------------

# Leaves only: parents are created by mkdir(parents=True), so no two
# concurrent creations target the same path.
LAYOUT_DIRECTORIES: tuple[str, ...] = (
    "application/commands",
    "application/events",
    "application/queries",
    "application/usecases",
    "domain/constants",
    "domain/entities",
    "domain/services",
    "infrastructure/adapters",
    "infrastructure/persistence",
    "controllers",
    "dto/requests",
    "dto/responses",
    "ports",
)


def check_app_root(app_root: Path) -> None:
    """Verify that *app_root* exists and is a directory.

    Raises:
        PreconditionError: If the directory is missing or is not a directory.
    """
    if not app_root.exists():
        raise PreconditionError(
            app_root,
            f"App directory {app_root} does not exist. "
            f"Create the app first (e.g. `nest generate app {app_root.name}`).",
        )
    if not app_root.is_dir():
        raise PreconditionError(app_root, f"{app_root} exists but is not a directory.")


def ensure_directory(path: Path) -> bool:
    """Create *path* (and parents) unless it already exists.

    Returns:
        ``True`` if the directory was created, ``False`` if it already existed.

    Another worker may create *path* between the first check and ``mkdir``;
    that still counts as success.

    Raises:
        ScaffoldError: If *path* exists as a non-directory or cannot be created.
    """
    if path.is_dir():
        print_existing_dir(path)
        return False
    try:
        path.mkdir(parents=True, exist_ok=True)
    except FileExistsError as exc:
        raise ScaffoldError(path, "a file with that name already exists") from exc
    except OSError as exc:
        raise ScaffoldError(path, exc.strerror or str(exc)) from exc
    if not path.is_dir():
        raise ScaffoldError(path, "a file with that name already exists")
    print_created_dir(path)
    return True


async def initialize_layout(source_root: Path) -> LayoutReport:
    """Create every layered directory under *source_root*.

    All directories are created concurrently; the first failure propagates
    once every creation has finished.
    """
    paths = [source_root / rel for rel in LAYOUT_DIRECTORIES]
    outcomes = await asyncio.gather(
        *(asyncio.to_thread(ensure_directory, p) for p in paths),
        return_exceptions=True,
    )

    report = LayoutReport()
    for path, outcome in zip(paths, outcomes):
        if isinstance(outcome, BaseException):
            raise outcome
        if outcome:
            report.created.append(path)
        else:
            report.existing.append(path)
    return report


def component_dir(source_root: Path, kind: ComponentKind | str, folder_name: str) -> Path:
    """Directory holding one component, e.g. ``application/commands/create-user``."""
    return type_folder(source_root, kind) / folder_name


def type_folder(source_root: Path, kind: ComponentKind | str) -> Path:
    """Directory holding every component of *kind*."""
    spec = get_spec(kind)
    return source_root / spec.layer / spec.folder


async def scaffold_component_dir(
    source_root: Path, kind: ComponentKind | str, folder_name: str
) -> Path:
    """Ensure the component's own directory exists and return it."""
    path = component_dir(source_root, kind, folder_name)
    await asyncio.to_thread(ensure_directory, path)
    return path
