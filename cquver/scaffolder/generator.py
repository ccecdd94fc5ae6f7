"""Component generation orchestrator.

Sequences one ``create`` invocation: derive names, ensure the component
directory, render and write the component files, then rebuild the type
barrel and patch the module file.  Also exposes ``init``, which lays out the
layered folder skeleton for an existing app.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from cquver.config import Config
from cquver.utils import print_created_file, print_warning, write_text_file

from .aggregates import AggregateRebuilder
from .errors import WriteError
from .kinds import ComponentKind
from .layout import check_app_root, initialize_layout, scaffold_component_dir, type_folder
from .models import ComponentDescriptor, GenerationResult, LayoutReport, ModuleUpdateStatus
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ComponentGenerator:
    """Generates commands, queries, events, services and use-cases.

    Typical usage::

        generator = ComponentGenerator(Config())
        await generator.initialize_service("user-service")
        await generator.generate("user-service", "command", "CreateUser")

    Running ``generate`` again for the same component rewrites its files and
    leaves the barrels and module file unchanged in content.  Two invocations
    against the same app must not run at the same time.
    """

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()
        self.renderer = TemplateRenderer()
        self.aggregates = AggregateRebuilder(self.config, self.renderer)

    # -- Public API --------------------------------------------------------

    async def generate(
        self, app_name: str, kind: ComponentKind | str, raw_name: str
    ) -> GenerationResult:
        """Generate one component and register it with its aggregates.

        Args:
            app_name: Directory name of the app under the apps directory.
            kind: Component kind (``"command"``, ``"query"``, ...).
            raw_name: Component name in any casing, e.g. ``"create_user"``.

        Returns:
            A ``GenerationResult`` listing every file written.

        Raises:
            ScaffoldError: If the component directory cannot be created.
            WriteError: If a component file or barrel cannot be written.
                Files written before the failure stay on disk.
        """
        descriptor = ComponentDescriptor.build(kind, raw_name)
        spec = descriptor.spec
        source_root = self.config.source_root(app_name)

        # 1. Component directory
        component_root = await scaffold_component_dir(
            source_root, descriptor.kind, descriptor.folder_name
        )

        # 2. Render and write the component's own files
        written = await self._write_component(component_root, descriptor)
        result = GenerationResult(descriptor=descriptor, written=written)

        # 3. Aggregates
        folder = type_folder(source_root, descriptor.kind)
        try:
            if spec.has_handler:
                result.written.append(
                    await self.aggregates.rebuild_type_index(
                        folder, descriptor.kind, descriptor.aggregate_entry
                    )
                )
                result.written.append(
                    await self.aggregates.rebuild_application_index(source_root)
                )
            else:
                result.written.append(
                    await self.aggregates.rebuild_class_index(
                        folder, descriptor.kind, descriptor.aggregate_entry
                    )
                )
        except OSError as exc:
            raise WriteError(folder, exc.strerror or str(exc)) from exc

        # 4. Module file (best-effort)
        module = await self.aggregates.rebuild_module_file(app_name)
        result.module = module
        if module.status == ModuleUpdateStatus.FAILED:
            result.warnings.append(f"Could not update module file: {module.error}")
        elif module.status != ModuleUpdateStatus.UNCHANGED:
            result.written.append(module.path)
        if module.skipped_providers:
            result.warnings.append(
                f"No @{self.config.module_decorator}() decorator found in {module.path}; "
                f"add {', '.join(module.skipped_providers)} to its providers manually."
            )

        for warning in result.warnings:
            print_warning(warning)
        return result

    async def initialize_service(self, app_name: str) -> LayoutReport:
        """Create the layered folder skeleton inside an existing app.

        Raises:
            PreconditionError: If the app directory is missing or not a directory.
            ScaffoldError: If a directory cannot be created.
        """
        check_app_root(self.config.app_root(app_name))
        return await initialize_layout(self.config.source_root(app_name))

    # -- Component files ---------------------------------------------------

    async def _write_component(
        self, component_root: Path, descriptor: ComponentDescriptor
    ) -> list[Path]:
        """Render the component templates and write them concurrently."""
        rendered = self.renderer.render_component(descriptor)
        base = descriptor.file_base_name
        tag = descriptor.spec.file_tag

        files: list[tuple[Path, str]] = [
            (component_root / self.config.file_name(base, tag), rendered.primary),
        ]
        if rendered.handler is not None:
            files.append(
                (component_root / self.config.file_name(base, "handler"), rendered.handler)
            )
        files.append((component_root / self.config.file_name("index"), rendered.local_index))

        outcomes = await asyncio.gather(
            *(write_text_file(path, content) for path, content in files),
            return_exceptions=True,
        )
        for (path, _), outcome in zip(files, outcomes):
            if isinstance(outcome, OSError):
                raise WriteError(path, outcome.strerror or str(outcome)) from outcome
            if isinstance(outcome, BaseException):
                raise outcome

        for path, _ in files:
            print_created_file(path)
        return [path for path, _ in files]
