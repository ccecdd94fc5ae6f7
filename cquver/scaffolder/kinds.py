"""Component kinds and their layout/naming conventions.

Every kind the generator understands is listed in ``KIND_SPECS``.  Adding a
new kind means adding one enum member and one table row; nothing else in
the scaffolder branches on the kind directly.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ComponentKind(str, Enum):
    """The closed set of component kinds that can be generated."""
    COMMAND = "command"
    QUERY = "query"
    EVENT = "event"
    SERVICE = "service"
    USECASE = "usecase"


# ---------------------------------------------------------------------------
# Kind specification table
# ---------------------------------------------------------------------------

class KindSpec(BaseModel):
    """Static conventions attached to a ``ComponentKind``."""

    model_config = ConfigDict(frozen=True)

    layer: str = Field(..., description="Top-level layer folder, e.g. 'application'")
    folder: str = Field(..., description="Plural type folder, e.g. 'commands'")
    suffix: str = Field(..., description="Class-name suffix, e.g. 'Command'")
    file_tag: str = Field(..., description="Middle segment of the primary file name")
    has_handler: bool = Field(..., description="Whether a handler class is generated")
    aggregate_name: str = Field(..., description="Exported array name in the type barrel")

    @property
    def type_path(self) -> str:
        """Path of the type folder relative to the app source root."""
        return f"{self.layer}/{self.folder}"


KIND_SPECS: dict[ComponentKind, KindSpec] = {
    ComponentKind.COMMAND: KindSpec(
        layer="application",
        folder="commands",
        suffix="Command",
        file_tag="command",
        has_handler=True,
        aggregate_name="CommandHandlers",
    ),
    ComponentKind.QUERY: KindSpec(
        layer="application",
        folder="queries",
        suffix="Query",
        file_tag="query",
        has_handler=True,
        aggregate_name="QueryHandlers",
    ),
    ComponentKind.EVENT: KindSpec(
        layer="application",
        folder="events",
        suffix="Event",
        file_tag="event",
        has_handler=True,
        aggregate_name="EventHandlers",
    ),
    ComponentKind.SERVICE: KindSpec(
        layer="domain",
        folder="services",
        suffix="Service",
        file_tag="service",
        has_handler=False,
        aggregate_name="Services",
    ),
    ComponentKind.USECASE: KindSpec(
        layer="application",
        folder="usecases",
        suffix="UseCase",
        file_tag="usecase",
        has_handler=False,
        aggregate_name="UseCases",
    ),
}

# Kinds whose handler aggregates are registered in the module file, in
# registration order.
HANDLER_KINDS: tuple[ComponentKind, ...] = (
    ComponentKind.COMMAND,
    ComponentKind.EVENT,
    ComponentKind.QUERY,
)


def get_spec(kind: ComponentKind | str) -> KindSpec:
    """Return the ``KindSpec`` for *kind* (enum member or its string value).

    Raises:
        ValueError: If *kind* is not a known component kind.
    """
    return KIND_SPECS[ComponentKind(kind)]


def kind_choices() -> list[str]:
    """Return the CLI-facing names of all kinds, in declaration order."""
    return [kind.value for kind in ComponentKind]
