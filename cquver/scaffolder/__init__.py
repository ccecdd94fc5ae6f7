"""cquver scaffolder -- generates DDD/CQRS components inside a NestJS app.

Takes a component kind and a name and writes the component files, then keeps
the type barrels and the app's DI module file in sync with what is on disk.

Quick usage::

    from cquver.config import Config
    from cquver.scaffolder import ComponentGenerator

    generator = ComponentGenerator(Config(apps_dir=Path("apps")))
    await generator.initialize_service("user-service")
    await generator.generate("user-service", "command", "create-user")
"""

from cquver.scaffolder.aggregates import AggregateRebuilder
from cquver.scaffolder.errors import CquverError, PreconditionError, ScaffoldError, WriteError
from cquver.scaffolder.generator import ComponentGenerator
from cquver.scaffolder.kinds import ComponentKind
from cquver.scaffolder.models import (
    ComponentDescriptor,
    GenerationResult,
    LayoutReport,
    ModuleUpdateResult,
    ModuleUpdateStatus,
)
from cquver.scaffolder.templates import TemplateRenderer

__all__ = [
    "AggregateRebuilder",
    "ComponentDescriptor",
    "ComponentGenerator",
    "ComponentKind",
    "CquverError",
    "GenerationResult",
    "LayoutReport",
    "ModuleUpdateResult",
    "ModuleUpdateStatus",
    "PreconditionError",
    "ScaffoldError",
    "TemplateRenderer",
    "WriteError",
]
