"""Shared pytest fixtures for the cquver test suite.

Provides reusable fixtures for:
- A temporary monorepo with an ``apps/`` directory
- An existing app root and its source tree
- A ``Config`` / ``ComponentGenerator`` pointed at the temporary monorepo
- Sample module-file contents in the shapes found in real projects
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from cquver.config import Config
from cquver.scaffolder.generator import ComponentGenerator
from cquver.utils import console


APP_NAME = "user-service"


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _unwrapped_console(monkeypatch):
    """Keep long temporary paths on one line so messages can be matched."""
    monkeypatch.setattr(console, "soft_wrap", True)


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def apps_dir(tmp_path: Path) -> Path:
    """Temporary ``apps/`` directory (auto-cleanup)."""
    path = tmp_path / "apps"
    path.mkdir()
    return path


@pytest.fixture
def app_name() -> str:
    return APP_NAME


@pytest.fixture
def app_root(apps_dir: Path, app_name: str) -> Path:
    """An existing, empty app directory, as ``nest generate app`` would leave it."""
    path = apps_dir / app_name
    path.mkdir()
    return path


@pytest.fixture
def source_root(app_root: Path) -> Path:
    path = app_root / "src"
    path.mkdir()
    return path


@pytest.fixture
def module_path(source_root: Path, app_name: str) -> Path:
    return source_root / f"{app_name}.module.ts"


# ---------------------------------------------------------------------------
# Configuration & Generator
# ---------------------------------------------------------------------------

@pytest.fixture
def config(apps_dir: Path) -> Config:
    return Config(apps_dir=apps_dir)


@pytest.fixture
def generator(config: Config) -> ComponentGenerator:
    return ComponentGenerator(config)


# ---------------------------------------------------------------------------
# Module-file samples
# ---------------------------------------------------------------------------

@pytest.fixture
def hand_written_module() -> str:
    """A module file the user has edited: one service provider, no handlers."""
    return textwrap.dedent(
        """\
        import { Module } from '@nestjs/common';
        import { CqrsModule } from '@nestjs/cqrs';
        import { FooService } from './domain/services/foo';

        @Module({
          imports: [CqrsModule],
          providers: [
            FooService,
          ],
        })
        export class UserServiceModule {}
        """
    )


@pytest.fixture
def module_without_providers() -> str:
    """A module file whose decorator has no ``providers`` property."""
    return textwrap.dedent(
        """\
        import { Module } from '@nestjs/common';

        @Module({
          imports: [],
        })
        export class UserServiceModule {}
        """
    )
