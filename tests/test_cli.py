"""Tests for the click entry point."""

import pytest
from click.testing import CliRunner

from sigil_todo import cli


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    """Keep the CLI from replacing pytest's logging handlers."""
    calls = []
    monkeypatch.setattr(cli, "setup_logging", lambda *args: calls.append(args))
    return calls


@pytest.fixture
def run(tmp_path, todo_paths):
    """Invoke the CLI against temporary files and a missing config."""
    primary, archive = todo_paths

    def _run(*args, input=None, config=None):
        config_path = tmp_path / "config.yaml"
        if config is not None:
            config_path.write_text(config, encoding="utf-8")
        base = ["--config", str(config_path), "--file", str(primary),
                "--archive", str(archive)]
        return CliRunner().invoke(cli.main, base + list(args), input=input)

    return _run


class TestShellCommand:
    """Tests for the default interactive command."""

    def test_session_saves_on_quit(self, run, todo_paths):
        primary, archive = todo_paths
        primary.write_text("?task one\n.task two\n\n-task three\n", encoding="utf-8")

        result = run(input="add hello world\nedit 1 -s 4\ndelete 0\nquit\n")

        assert result.exit_code == 0, result.output
        assert primary.read_text(encoding="utf-8") == ".hello world\n"
        assert archive.read_text(encoding="utf-8") == "-task two\n-task three\n"

    def test_end_of_input_saves(self, run, todo_paths):
        primary, _ = todo_paths

        result = run(input="add from a pipe\n")

        assert result.exit_code == 0, result.output
        assert primary.read_text(encoding="utf-8") == ".from a pipe\n"

    def test_explicit_shell_subcommand(self, run, todo_paths):
        primary, _ = todo_paths

        result = run("shell", input="add x\nquit\n")

        assert result.exit_code == 0, result.output
        assert primary.read_text(encoding="utf-8") == ".x\n"

    def test_output_shows_list(self, run, todo_paths):
        primary, _ = todo_paths
        primary.write_text("!done\n", encoding="utf-8")

        result = run(input="quit\n")

        assert "0) [!] done" in result.output
        assert ">: " in result.output

    def test_missing_file_is_fatal_without_create(self, run, todo_paths):
        primary, _ = todo_paths

        result = run(input="quit\n", config="create_missing: false\n")

        assert result.exit_code == 1
        assert "Error" in result.output
        assert not primary.exists()

    def test_undecodable_file_is_fatal(self, run, todo_paths):
        primary, _ = todo_paths
        primary.write_bytes(b".ok\n\xff\xfe bad\n")

        result = run(input="quit\n")

        assert result.exit_code == 1
        assert "Error" in result.output
        assert primary.read_bytes() == b".ok\n\xff\xfe bad\n"

    def test_missing_archive_is_fatal_without_create(self, run, todo_paths):
        primary, archive = todo_paths
        primary.write_text(".a\n", encoding="utf-8")

        result = run(input="quit\n", config="create_missing: false\n")

        assert result.exit_code == 1
        assert not archive.exists()

    def test_wrong_config_type_uses_defaults(self, run, todo_paths, no_logging_setup):
        primary, _ = todo_paths
        primary.write_text(".a\n", encoding="utf-8")

        result = run("list", config="log_level: 10\n")

        assert result.exit_code == 0, result.output
        assert no_logging_setup[-1][0] == "WARNING"

    def test_verbose_selects_debug(self, run, no_logging_setup):
        run("-v", input="quit\n")
        assert no_logging_setup[-1][0] == "DEBUG"

    def test_log_level_from_config(self, run, no_logging_setup):
        run(input="quit\n", config="log_level: INFO\n")
        assert no_logging_setup[-1][0] == "INFO"


class TestListCommand:
    """Tests for the list subcommand."""

    def test_list_prints_without_saving(self, run, todo_paths):
        primary, archive = todo_paths
        primary.write_text("?a\n-b\n", encoding="utf-8")

        result = run("list")

        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == ["0) [?] a", "1) [#] b"]
        assert primary.read_text(encoding="utf-8") == "?a\n-b\n"
        assert not archive.exists()

    def test_list_creates_no_files(self, run, todo_paths):
        primary, archive = todo_paths

        result = run("list")

        assert result.exit_code == 0, result.output
        assert "No todos yet" in result.output
        assert not primary.exists()
        assert not archive.exists()

    def test_list_read_only_file(self, run, todo_paths):
        primary, _ = todo_paths
        primary.write_text(".locked\n", encoding="utf-8")
        primary.chmod(0o444)

        try:
            result = run("list")
        finally:
            primary.chmod(0o644)

        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == ["0) [-] locked"]

    def test_list_missing_file_is_fatal_without_create(self, run, todo_paths):
        primary, _ = todo_paths

        result = run("list", config="create_missing: false\n")

        assert result.exit_code == 1
        assert "Error" in result.output
        assert not primary.exists()

    def test_list_undecodable_file(self, run, todo_paths):
        primary, _ = todo_paths
        primary.write_bytes(b"\xff\xfe\n")

        result = run("list")

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_hide_closed(self, run, todo_paths):
        primary, _ = todo_paths
        primary.write_text("?a\n-b\n", encoding="utf-8")

        result = run("--hide-closed", "list")

        assert result.output.splitlines() == ["0) [?] a"]

    def test_hide_closed_from_config(self, run, todo_paths):
        primary, _ = todo_paths
        primary.write_text("-b\n.c\n", encoding="utf-8")

        result = run("list", config="show_closed: false\n")

        assert result.output.splitlines() == ["1) [-] c"]


class TestPathsCommand:
    def test_paths(self, run, tmp_path, todo_paths):
        primary, archive = todo_paths

        result = run("paths")

        assert result.exit_code == 0
        assert str(primary.resolve()) in result.output
        assert str(archive.resolve()) in result.output
        assert str(tmp_path / "config.yaml") in result.output
