"""Tests for the command-line interface (cquver.cli).

Covers:
- Argument parsing (actions, kind choices, --apps-dir)
- Exit codes for success, usage errors and fatal errors
- End-user messages for init and create
"""

from __future__ import annotations

from pathlib import Path

import pytest

from cquver.cli import build_parser, main


pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("CQUVER_APPS_DIR", "CQUVER_SOURCE_DIR", "CQUVER_EXTENSION"):
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParser:
    def test_init(self):
        args = build_parser().parse_args(["user-service", "init"])
        assert args.app_name == "user-service"
        assert args.action == "init"
        assert args.apps_dir is None

    def test_create(self):
        args = build_parser().parse_args(
            ["--apps-dir", "svc", "billing", "create", "query", "get-invoice"]
        )
        assert args.apps_dir == "svc"
        assert (args.kind, args.name) == ("query", "get-invoice")

    def test_unknown_kind_exits_1(self, capsys):
        assert main(["billing", "create", "repository", "x"]) == 1
        assert "invalid choice" in capsys.readouterr().err

    def test_missing_action_exits_1(self):
        assert main(["billing"]) == 1

    def test_help_exits_0(self, capsys):
        assert main(["--help"]) == 0
        assert "NestJS DDD/CQRS Boilerplate Generator" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# Running
# ---------------------------------------------------------------------------


class TestMain:
    def test_init_success(self, apps_dir: Path, app_root: Path, capsys):
        code = main(["--apps-dir", str(apps_dir), "user-service", "init"])

        assert code == 0
        assert (app_root / "src" / "application" / "events").is_dir()
        assert "Successfully initialized" in capsys.readouterr().out

    def test_init_missing_app(self, apps_dir: Path, capsys):
        code = main(["--apps-dir", str(apps_dir), "ghost", "init"])

        assert code == 1
        out = capsys.readouterr().out
        assert "Error:" in out
        assert "does not exist" in out

    def test_create_success(self, apps_dir: Path, app_root: Path, capsys):
        code = main(["--apps-dir", str(apps_dir), "user-service", "create", "command", "create-user"])

        assert code == 0
        assert (
            app_root / "src" / "application" / "commands" / "create-user" / "index.ts"
        ).is_file()
        assert "Successfully generated command" in capsys.readouterr().out

    def test_create_empty_name(self, apps_dir: Path, app_root: Path, capsys):
        code = main(["--apps-dir", str(apps_dir), "user-service", "create", "event", "  "])

        assert code == 1
        assert "must not be empty" in capsys.readouterr().out

    def test_apps_dir_from_env(self, apps_dir: Path, app_root: Path, monkeypatch):
        monkeypatch.setenv("CQUVER_APPS_DIR", str(apps_dir))

        assert main(["user-service", "create", "service", "billing"]) == 0
        assert (app_root / "src" / "domain" / "services" / "billing").is_dir()

    def test_fatal_error_exits_1(self, apps_dir: Path, app_root: Path, capsys):
        (app_root / "src").write_text("not a directory")

        code = main(["--apps-dir", str(apps_dir), "user-service", "create", "query", "get-user"])

        assert code == 1
        assert "Error:" in capsys.readouterr().out
