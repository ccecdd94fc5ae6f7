"""Aggregate (barrel) and module-file maintenance.

Nothing about previously generated components is persisted.  Every rebuild
re-scans the type folder, reads each component's marker file and derives the
current set of entries from the file contents.  Deleting a component folder
or editing files by hand between runs is therefore picked up automatically.

Two ownership models apply:

* Type barrels (``commands/index.ts`` and friends) and the application
  barrel are owned by the tool and regenerated wholesale on every run.
* The DI module file is shared with the user.  It is created once from a
  skeleton and afterwards only patched additively: missing aggregate imports
  and ``...XHandlers`` provider spreads are inserted, every other byte is left
  as it was.

Concurrent invocations against the same app are not supported; each rebuild
is a read-modify-write of a shared file.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from cquver.config import Config
from cquver.utils import print_updated_file, replace_file, replace_text_file

from .kinds import HANDLER_KINDS, ComponentKind, get_spec
from .models import HandlerEntry, ModuleUpdateResult, ModuleUpdateStatus
from .naming import main_class_name
from .patterns import (
    append_element,
    barrel_entries,
    contains_spread,
    detect_newline,
    element_indent,
    extract_class_name,
    extract_handler_name,
    find_decorator_object,
    find_providers_array,
    insert_import,
)
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Module-file fragments
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AggregateFragment:
    """Well-known import statement and provider spread for one handler aggregate."""
    name: str
    path: str

    @property
    def import_statement(self) -> str:
        return f"import {{ {self.name} }} from '{self.path}';"

    @property
    def spread(self) -> str:
        return f"...{self.name}"


MODULE_FRAGMENTS: tuple[AggregateFragment, ...] = tuple(
    AggregateFragment(
        name=get_spec(kind).aggregate_name,
        path=f"./{get_spec(kind).type_path}",
    )
    for kind in HANDLER_KINDS
)


@dataclass
class ModulePatch:
    """Outcome of patching module-file text in memory."""
    content: str
    added_imports: list[str] = field(default_factory=list)
    added_providers: list[str] = field(default_factory=list)
    skipped_providers: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added_imports or self.added_providers)


def patch_module_text(
    content: str,
    fragments: tuple[AggregateFragment, ...] = MODULE_FRAGMENTS,
    decorator: str = "Module",
) -> ModulePatch:
    """Add missing aggregate imports and provider spreads to *content*.

    * An import statement is only added when the exact statement text is
      absent; it goes right after the last existing import.
    * A spread is only added when the exact token is absent; it becomes the
      last element of ``providers: [...]``.  Without a providers array a new
      ``providers`` property is appended to the decorator's object.  Without
      a decorator object the spread is reported in ``skipped_providers``.
    """
    newline = detect_newline(content)
    patch = ModulePatch(content=content)

    for fragment in fragments:
        if fragment.import_statement in patch.content:
            continue
        patch.content = insert_import(patch.content, fragment.import_statement, newline)
        patch.added_imports.append(fragment.import_statement)

    for fragment in fragments:
        if contains_spread(patch.content, fragment.spread):
            continue
        updated = _add_provider(patch.content, fragment.spread, decorator, newline)
        if updated is None:
            patch.skipped_providers.append(fragment.spread)
            continue
        patch.content = updated
        patch.added_providers.append(fragment.spread)

    return patch


def _add_provider(content: str, spread: str, decorator: str, newline: str) -> Optional[str]:
    providers = find_providers_array(content, decorator)
    if providers is not None:
        return append_element(content, *providers, spread, newline)

    module_object = find_decorator_object(content, decorator)
    if module_object is None:
        return None

    indent = element_indent(content, *module_object)
    prop = f"providers: [{newline}{indent}  {spread},{newline}{indent}]"
    return append_element(content, *module_object, prop, newline)


# ---------------------------------------------------------------------------
# AggregateRebuilder
# ---------------------------------------------------------------------------


class AggregateRebuilder:
    """Rebuilds barrels and patches the module file from what is on disk."""

    def __init__(self, config: Config, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()

    # -- Scanning ----------------------------------------------------------

    def scan_handlers(self, type_folder: Path) -> list[HandlerEntry]:
        """Return the handler classes found under *type_folder*.

        Each immediate subdirectory ``<sub>`` contributes the handler class
        declared in ``<sub>/<sub>.handler.<ext>``.  Subdirectories without that
        file, or whose file has no ``export class ...Handler`` line, are
        skipped.
        """
        entries: list[HandlerEntry] = []
        for sub in _subdirectories(type_folder):
            content = _read_marker_file(sub / self.config.file_name(sub.name, "handler"))
            name = extract_handler_name(content) if content is not None else None
            if name:
                entries.append(HandlerEntry(name=name, path=f"./{sub.name}"))
        return _dedupe(entries)

    def scan_classes(self, type_folder: Path, kind: ComponentKind | str) -> list[HandlerEntry]:
        """Return the primary classes of *kind* found under *type_folder*."""
        spec = get_spec(kind)
        entries: list[HandlerEntry] = []
        for sub in _subdirectories(type_folder):
            content = _read_marker_file(sub / self.config.file_name(sub.name, spec.file_tag))
            name = extract_class_name(content, spec.suffix) if content is not None else None
            if name:
                entries.append(HandlerEntry(name=name, path=f"./{sub.name}"))
        return _dedupe(entries)

    def barrel_order(self, type_folder: Path) -> dict[str, int]:
        """Position of each name in the array of *type_folder*'s current barrel."""
        content = _read_marker_file(type_folder / self.config.file_name("index"))
        rank: dict[str, int] = {}
        for name in barrel_entries(content or ""):
            rank.setdefault(name, len(rank))
        return rank

    def ordered_scan(self, type_folder: Path, kind: ComponentKind | str) -> list[HandlerEntry]:
        """Scan *type_folder* and keep the order of the current barrel.

        Entries the barrel already lists keep their position; the others
        follow, sorted by folder name.
        """
        if get_spec(kind).has_handler:
            entries = self.scan_handlers(type_folder)
        else:
            entries = self.scan_classes(type_folder, kind)
        return order_entries(entries, self.barrel_order(type_folder))

    # -- Type barrels ------------------------------------------------------

    async def rebuild_type_index(
        self,
        type_folder: Path,
        kind: ComponentKind | str,
        new_entry: HandlerEntry,
    ) -> Path:
        """Regenerate the handler barrel of a command/query/event folder.

        The barrel imports every handler together with its main class,
        exports the ``<Kind>Handlers`` array and re-exports each main class.
        """
        spec = get_spec(kind)
        entries = await asyncio.to_thread(self.ordered_scan, type_folder, kind)
        entries = merge_entry(entries, new_entry)
        content = self.render_index(
            entries,
            aggregate_name=spec.aggregate_name,
            kind=spec.file_tag,
            with_handlers=True,
        )
        return await self._write_index(type_folder / self.config.file_name("index"), content)

    async def rebuild_class_index(
        self,
        type_folder: Path,
        kind: ComponentKind | str,
        new_entry: HandlerEntry,
    ) -> Path:
        """Regenerate the barrel of a service/usecase folder."""
        spec = get_spec(kind)
        entries = await asyncio.to_thread(self.ordered_scan, type_folder, kind)
        entries = merge_entry(entries, new_entry)
        content = self.render_index(
            entries,
            aggregate_name=spec.aggregate_name,
            kind=spec.file_tag,
            with_handlers=False,
        )
        return await self._write_index(type_folder / self.config.file_name("index"), content)

    def render_index(
        self,
        entries: list[HandlerEntry],
        *,
        aggregate_name: str,
        kind: str,
        with_handlers: bool,
    ) -> str:
        """Render barrel text for *entries*."""
        rows: list[dict[str, Any]] = [
            {
                "name": entry.name,
                "path": entry.path,
                "main": main_class_name(entry.name) if with_handlers else entry.name,
            }
            for entry in entries
        ]
        return self.renderer.render(
            "type_index.ts.j2",
            {
                "entries": rows,
                "aggregate_name": aggregate_name,
                "kind": kind,
                "with_handlers": with_handlers,
            },
        )

    # -- Application barrel ------------------------------------------------

    async def rebuild_application_index(self, source_root: Path) -> Path:
        """Regenerate ``application/index`` re-exporting every CQRS main class."""
        application = source_root / "application"

        def _scan() -> list[HandlerEntry]:
            found: list[HandlerEntry] = []
            for kind in HANDLER_KINDS:
                spec = get_spec(kind)
                folder = application / spec.folder
                rank = {
                    main_class_name(name): position
                    for name, position in self.barrel_order(folder).items()
                }
                for entry in order_entries(self.scan_classes(folder, kind), rank):
                    found.append(
                        HandlerEntry(
                            name=entry.name,
                            path=f"./{spec.folder}/{entry.path.removeprefix('./')}",
                        )
                    )
            return _dedupe(found)

        entries = await asyncio.to_thread(_scan)
        content = self.renderer.render(
            "application_index.ts.j2",
            {"entries": [entry.model_dump() for entry in entries]},
        )
        return await self._write_index(
            application / self.config.file_name("index"), content, label="application index"
        )

    # -- Module file -------------------------------------------------------

    async def rebuild_module_file(self, app_name: str) -> ModuleUpdateResult:
        """Create or additively patch the app's DI module file.

        This step is best-effort: I/O problems are returned as a ``FAILED``
        result instead of being raised.
        """
        path = self.config.module_path(app_name)
        try:
            result = await asyncio.to_thread(self._update_module_file, app_name, path)
        except (OSError, UnicodeDecodeError) as exc:
            return ModuleUpdateResult(
                path=path, status=ModuleUpdateStatus.FAILED, error=str(exc)
            )

        if result.status != ModuleUpdateStatus.UNCHANGED:
            print_updated_file(path, "module")
        return result

    def render_module_skeleton(self, app_name: str) -> str:
        """Minimal module file registering the three handler aggregates."""
        return self.renderer.render(
            "module.ts.j2",
            {"app_name": app_name, "aggregates": MODULE_FRAGMENTS},
        )

    def _update_module_file(self, app_name: str, path: Path) -> ModuleUpdateResult:
        if not path.exists():
            replace_file(path, self.render_module_skeleton(app_name))
            return ModuleUpdateResult(
                path=path,
                status=ModuleUpdateStatus.CREATED,
                added_imports=[f.import_statement for f in MODULE_FRAGMENTS],
                added_providers=[f.spread for f in MODULE_FRAGMENTS],
            )

        with path.open("r", encoding="utf-8", newline="") as handle:
            original = handle.read()

        patch = patch_module_text(original, MODULE_FRAGMENTS, self.config.module_decorator)
        if patch.changed:
            replace_file(path, patch.content)

        return ModuleUpdateResult(
            path=path,
            status=ModuleUpdateStatus.UPDATED if patch.changed else ModuleUpdateStatus.UNCHANGED,
            added_imports=patch.added_imports,
            added_providers=patch.added_providers,
            skipped_providers=patch.skipped_providers,
        )

    # -- Internal helpers --------------------------------------------------

    async def _write_index(self, path: Path, content: str, label: str = "index") -> Path:
        await replace_text_file(path, content)
        print_updated_file(path, label)
        return path


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def merge_entry(entries: list[HandlerEntry], new_entry: HandlerEntry) -> list[HandlerEntry]:
    """Return *entries* with *new_entry* appended unless its name is present."""
    if any(entry.name == new_entry.name for entry in entries):
        return list(entries)
    return [*entries, new_entry]


def order_entries(entries: list[HandlerEntry], rank: dict[str, int]) -> list[HandlerEntry]:
    """Sort *entries* by *rank*; unranked entries keep their relative order at the end."""
    return sorted(entries, key=lambda entry: rank.get(entry.name, len(rank)))


def _dedupe(entries: list[HandlerEntry]) -> list[HandlerEntry]:
    seen: set[str] = set()
    unique: list[HandlerEntry] = []
    for entry in entries:
        if entry.name in seen:
            continue
        seen.add(entry.name)
        unique.append(entry)
    return unique


def _subdirectories(folder: Path) -> list[Path]:
    """Immediate subdirectories of *folder*, sorted by name; empty if it is missing."""
    if not folder.is_dir():
        return []
    return sorted((p for p in folder.iterdir() if p.is_dir()), key=lambda p: p.name)


def _read_marker_file(path: Path) -> Optional[str]:
    """Return the text of *path*, or ``None`` when it is absent or unreadable."""
    if not path.is_file():
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
