"""Tests for the command line entry point."""

import sys
from pathlib import Path

import pytest

from checkvault.cli.main import create_parser, main

_SETTINGS = """\
checklist_filters:
  - filter_name: Todo
    todos_match: todo
    limit_todos: 0
    group_by: page
  - filter_name: Ideas
    todos_match: idea
    group_by: tag
selected_checklist_filter: Todo
"""


@pytest.fixture
def cli_vault(tmp_path: Path, monkeypatch) -> Path:
    vault = tmp_path / "vault"
    vault.mkdir()
    (vault / "Inbox.md").write_text("## Tasks #todo\n- [ ] call Bob\n- [x] done\n## Later #idea\n- [ ] garden\n")
    settings = tmp_path / "settings.yaml"
    settings.write_text(_SETTINGS)
    for name in ("CHECKVAULT_CONFIG", "CHECKVAULT_VAULT", "CHECKVAULT_SETTINGS"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


def _run(monkeypatch, *argv: str) -> int:
    monkeypatch.setattr(sys, "argv", ["checkvault", *argv])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


class TestParser:
    """Tests for create_parser."""

    def test_show_options(self):
        args = create_parser().parse_args(["--vault", "notes", "show", "-f", "Todo", "-s", "bob"])

        assert args.command == "show"
        assert args.vault == "notes"
        assert args.filter_name == "Todo"
        assert args.search == "bob"

    def test_watch_options(self):
        args = create_parser().parse_args(["watch", "-s", "bob"])

        assert args.command == "watch"
        assert args.search == "bob"
        assert args.filter_name is None


class TestMain:
    """Tests for main."""

    def test_show_selected_filter(self, cli_vault: Path, monkeypatch, capsys):
        code = _run(
            monkeypatch,
            "--vault", str(cli_vault / "vault"),
            "--settings", str(cli_vault / "settings.yaml"),
            "show",
        )

        assert code == 0
        assert capsys.readouterr().out == "Inbox\n  - [ ] call Bob\n"

    def test_show_named_filter(self, cli_vault: Path, monkeypatch, capsys):
        _run(
            monkeypatch,
            "--vault", str(cli_vault / "vault"),
            "--settings", str(cli_vault / "settings.yaml"),
            "show", "--filter", "Ideas",
        )

        assert capsys.readouterr().out == "#idea\n  - [ ] garden\n"

    def test_unknown_filter_exits_with_error(self, cli_vault: Path, monkeypatch, capsys):
        code = _run(
            monkeypatch,
            "--vault", str(cli_vault / "vault"),
            "--settings", str(cli_vault / "settings.yaml"),
            "show", "--filter", "Nope",
        )

        assert code == 1
        assert "Checklist filter not found: Nope" in capsys.readouterr().err

    def test_missing_settings_exits_with_error(self, cli_vault: Path, monkeypatch, capsys):
        code = _run(monkeypatch, "--settings", str(cli_vault / "missing.yaml"), "filters")

        assert code == 1
        assert "Settings file not found" in capsys.readouterr().err

    def test_filters_lists_selection(self, cli_vault: Path, monkeypatch, capsys):
        _run(monkeypatch, "--settings", str(cli_vault / "settings.yaml"), "filters")

        out = capsys.readouterr().out.splitlines()
        assert out[0] == "* Todo: group by page, limit all"
        assert out[1] == "    tags:  todo"
        assert out[2] == "  Ideas: group by tag, limit 3"
