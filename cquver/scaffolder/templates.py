"""Jinja2 template rendering for component scaffolding.

Provides the TemplateRenderer class which loads the TypeScript templates
from the ``cquver/scaffolder/templates/`` directory and renders them for a
single component.  Rendering is pure: writing the results to disk is the
generator's job.

Template naming convention, per kind ``<tag>``:

* ``<tag>.ts.j2``          -- primary artifact (command, event, service, ...)
* ``<tag>.handler.ts.j2``  -- handler class, only for kinds with handlers
* ``<tag>.index.ts.j2``    -- the component folder's own barrel
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import BaseModel

from .models import ComponentDescriptor
from .naming import to_pascal_case


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# Rendered output
# ---------------------------------------------------------------------------

class RenderedComponent(BaseModel):
    """File bodies produced for one component."""
    primary: str
    handler: Optional[str] = None
    local_index: str


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for component scaffolding.

    Every rendered primary file contains an ``export class <ClassName>`` line
    and every handler file an ``export class <HandlerName>`` line; the
    aggregate rebuilder relies on those markers to rediscover components.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["pascal_case"] = to_pascal_case

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"command.handler.ts.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    # -- Component rendering -----------------------------------------------

    def render_component(self, descriptor: ComponentDescriptor) -> RenderedComponent:
        """Render the primary, handler and local index files for *descriptor*.

        ``handler`` is ``None`` for kinds without a handler (service, usecase).
        """
        spec = descriptor.spec
        tag = spec.file_tag
        context = {
            "class_name": descriptor.class_name,
            "handler_name": descriptor.handler_name,
            "file_base_name": descriptor.file_base_name,
        }

        handler = None
        if spec.has_handler:
            handler = self.render(f"{tag}.handler.ts.j2", context)

        return RenderedComponent(
            primary=self.render(f"{tag}.ts.j2", context),
            handler=handler,
            local_index=self.render(f"{tag}.index.ts.j2", context),
        )
