"""cquver configuration.

Typed configuration for the generator.  Settings use a Pydantic v2 model so
they are validated at construction time and can be read from environment
variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator


class Config(BaseModel):
    """Global cquver configuration.

    Holds the filesystem conventions of the target monorepo.  Instances are
    created once by the CLI entry point and passed to the generator.

    Layout::

        <apps_dir>/<app>/                   app root (must exist for ``init``)
        <apps_dir>/<app>/<source_dir>/      layered source tree
        <apps_dir>/<app>/<source_dir>/<app>.module.<extension>
    """

    apps_dir: Path = Field(default=Path("apps"))
    source_dir: str = Field(default="src")
    extension: str = Field(default="ts", description="Extension of generated files")
    module_decorator: str = Field(default="Module", description="DI module decorator name")

    @field_validator("extension")
    @classmethod
    def _strip_leading_dot(cls, value: str) -> str:
        value = value.strip().lstrip(".")
        if not value:
            raise ValueError("extension must not be empty")
        return value

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def app_root(self, app_name: str) -> Path:
        """Root directory of *app_name* (``apps/<app>``)."""
        return self.apps_dir / app_name

    def source_root(self, app_name: str) -> Path:
        """Source tree holding the layered folders (``apps/<app>/src``)."""
        return self.app_root(app_name) / self.source_dir

    def module_path(self, app_name: str) -> Path:
        """Path of the app's DI module file."""
        return self.source_root(app_name) / f"{app_name}.module.{self.extension}"

    def file_name(self, base: str, tag: str | None = None) -> str:
        """Build ``<base>.<tag>.<ext>`` (or ``<base>.<ext>`` without a tag)."""
        if tag:
            return f"{base}.{tag}.{self.extension}"
        return f"{base}.{self.extension}"

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, **overrides: Any) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            CQUVER_APPS_DIR, CQUVER_SOURCE_DIR, CQUVER_EXTENSION.

        Keyword *overrides* that are not ``None`` win over the environment.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CQUVER_APPS_DIR"):
            kwargs["apps_dir"] = Path(os.environ["CQUVER_APPS_DIR"])
        if os.environ.get("CQUVER_SOURCE_DIR"):
            kwargs["source_dir"] = os.environ["CQUVER_SOURCE_DIR"]
        if os.environ.get("CQUVER_EXTENSION"):
            kwargs["extension"] = os.environ["CQUVER_EXTENSION"]

        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
