"""Pydantic v2 models for the component scaffolder.

Defines the per-invocation component descriptor, the entries reconstructed
from disk when aggregate files are rebuilt, and the result objects returned
by the generator.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from .kinds import ComponentKind, KindSpec, get_spec
from .naming import ensure_suffix, handler_name, to_kebab_case, to_pascal_case


# ---------------------------------------------------------------------------
# Component descriptor
# ---------------------------------------------------------------------------

class ComponentDescriptor(BaseModel):
    """Everything needed to name and place one generated component."""

    kind: ComponentKind = Field(..., description="Component kind")
    raw_name: str = Field(..., description="Name as typed by the user")
    class_name: str = Field(..., description="PascalCase class name with the kind suffix")
    handler_name: Optional[str] = Field(
        default=None, description="Handler class name; None for kinds without handlers"
    )
    file_base_name: str = Field(..., description="kebab-case base for file names")
    folder_name: str = Field(..., description="Component's own subdirectory name")

    @classmethod
    def build(cls, kind: ComponentKind | str, raw_name: str) -> "ComponentDescriptor":
        """Derive every name for *raw_name* according to the conventions of *kind*."""
        kind = ComponentKind(kind)
        spec = get_spec(kind)
        class_name = ensure_suffix(to_pascal_case(raw_name), spec.suffix)
        # user_created, user-created and UserCreated all map to user-created.
        base_name = to_kebab_case(to_pascal_case(raw_name))
        return cls(
            kind=kind,
            raw_name=raw_name,
            class_name=class_name,
            handler_name=handler_name(class_name) if spec.has_handler else None,
            file_base_name=base_name,
            folder_name=base_name,
        )

    @property
    def spec(self) -> KindSpec:
        return get_spec(self.kind)

    @property
    def aggregate_entry(self) -> "HandlerEntry":
        """Entry this component contributes to its type barrel."""
        return HandlerEntry(
            name=self.handler_name or self.class_name,
            path=f"./{self.folder_name}",
        )


# ---------------------------------------------------------------------------
# Reconstructed aggregate entries
# ---------------------------------------------------------------------------

class HandlerEntry(BaseModel):
    """An exported class found in (or about to be added to) a type folder."""
    name: str = Field(..., description="Exported class name")
    path: str = Field(..., description="Relative import path, e.g. './create-user'")


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class ModuleUpdateStatus(str, Enum):
    """Outcome of a module-file update."""
    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    FAILED = "failed"


class ModuleUpdateResult(BaseModel):
    """Result of the best-effort module-file update.

    A ``FAILED`` status is never raised; the generator turns it into a
    warning because the component files already exist at that point.
    """
    path: Path
    status: ModuleUpdateStatus
    added_imports: list[str] = Field(default_factory=list)
    added_providers: list[str] = Field(default_factory=list)
    skipped_providers: list[str] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status != ModuleUpdateStatus.FAILED


class LayoutReport(BaseModel):
    """Directories created or found by a layout pass."""
    created: list[Path] = Field(default_factory=list)
    existing: list[Path] = Field(default_factory=list)


class GenerationResult(BaseModel):
    """Summary of one ``generate`` invocation."""
    descriptor: ComponentDescriptor
    written: list[Path] = Field(default_factory=list)
    module: Optional[ModuleUpdateResult] = None
    warnings: list[str] = Field(default_factory=list)
