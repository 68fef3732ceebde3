"""Tests for the nest-repl command line."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from nest_repl.__main__ import cli
from nest_repl.config import reload_settings
from nest_repl.utils.exceptions import ValidationError


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _last_line(output: str) -> str:
    return output.strip().splitlines()[-1]


class TestExtractCommand:
    """Tests for `nest-repl extract`."""

    def test_cursor(self, runner, users_service_file: Path) -> None:
        result = runner.invoke(cli, ["extract", str(users_service_file), "--line", "10"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["class_name"] == "UsersService"
        assert data["method"]["name"] == "findOne"
        assert data["method"]["args"][1] == {
            "name": "name",
            "type": "string",
            "optional": True,
        }
        assert data["range"] == {"start_line": 9, "end_line": 11}

    def test_selection(self, runner, users_service_file: Path) -> None:
        result = runner.invoke(
            cli, ["extract", str(users_service_file), "--start", "16", "--end", "14"]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["method"]["name"] == "count"

    def test_no_method(self, runner, users_service_file: Path) -> None:
        result = runner.invoke(cli, ["extract", str(users_service_file), "--line", "1"])

        assert result.exit_code == 1
        assert "No method found at cursor position" in result.output

    def test_requires_target(self, runner, users_service_file: Path) -> None:
        result = runner.invoke(cli, ["extract", str(users_service_file)])
        assert result.exit_code == 2

    @pytest.mark.parametrize("args", [["--line", "0"], ["--line", "-3"], ["--start", "0"]])
    def test_rejects_non_positive_lines(self, runner, users_service_file: Path, args) -> None:
        result = runner.invoke(cli, ["extract", str(users_service_file), *args])

        assert result.exit_code == 2
        assert not isinstance(result.exception, ValidationError)

    def test_unreadable_file(self, runner, tmp_path: Path) -> None:
        path = tmp_path / "broken.ts"
        path.write_bytes(b"class A {\n  m() { return '\xff'; }\n}\n")

        result = runner.invoke(cli, ["extract", str(path), "--line", "2"])

        assert result.exit_code == 1
        assert "Could not read file as UTF-8 text" in result.output

    def test_line_and_range_conflict(self, runner, users_service_file: Path) -> None:
        result = runner.invoke(
            cli, ["extract", str(users_service_file), "--line", "3", "--start", "2"]
        )
        assert result.exit_code == 2


class TestInvokeCommand:
    """Tests for `nest-repl invoke`."""

    def test_with_arguments(self, runner, users_service_file: Path) -> None:
        result = runner.invoke(
            cli,
            ["invoke", str(users_service_file), "--line", "8", "--arg", "1", "--arg", '"bob"'],
        )

        assert result.exit_code == 0, result.output
        assert _last_line(result.output) == 'await $(UsersService).findOne(1, "bob")'

    def test_prompts_for_missing_arguments(self, runner, users_service_file: Path) -> None:
        result = runner.invoke(
            cli,
            ["invoke", str(users_service_file), "--line", "8"],
            input='1\n"bob"\n',
        )

        assert result.exit_code == 0, result.output
        assert "id: number" in result.output
        assert "name: string" in result.output
        assert _last_line(result.output) == 'await $(UsersService).findOne(1, "bob")'

    def test_assign_without_arguments(self, runner, users_service_file: Path) -> None:
        result = runner.invoke(
            cli, ["invoke", str(users_service_file), "--line", "15", "--assign"]
        )

        assert result.exit_code == 0, result.output
        assert _last_line(result.output) == "let count = $(UsersService).count()"

    def test_too_many_arguments(self, runner, users_service_file: Path) -> None:
        result = runner.invoke(
            cli, ["invoke", str(users_service_file), "--line", "15", "--arg", "1"]
        )
        assert result.exit_code == 2

    def test_not_typescript(self, runner, tmp_path: Path) -> None:
        path = tmp_path / "main.py"
        path.write_text("class A: pass\n")

        result = runner.invoke(cli, ["invoke", str(path), "--line", "1"])

        assert result.exit_code == 1
        assert "Not a TypeScript/JavaScript file" in result.output


class TestRootCommand:
    """Tests for `nest-repl root`."""

    def test_project_root(self, runner, tmp_path: Path) -> None:
        (tmp_path / "nest-cli.json").write_text("{}")
        source_dir = tmp_path / "src"
        source_dir.mkdir()

        result = runner.invoke(cli, ["root", str(source_dir)])

        assert result.exit_code == 0, result.output
        lines = result.stdout.strip().splitlines()
        assert lines[0] == str(tmp_path.resolve())
        assert lines[1] == f"cd {tmp_path.resolve()} && npx nest repl"

    def test_not_a_project(self, runner, tmp_path: Path) -> None:
        if any((p / "nest-cli.json").is_file() for p in tmp_path.resolve().parents):
            pytest.skip("temporary directory lives inside a NestJS project")

        result = runner.invoke(cli, ["root", str(tmp_path)])

        assert result.exit_code == 1
        assert "Not in a NestJS project directory" in result.output


class TestConfigOption:
    """Tests for the --config group option."""

    @pytest.fixture(autouse=True)
    def restore_settings(self):
        yield
        reload_settings()

    def test_config_file(self, runner, tmp_path: Path) -> None:
        (tmp_path / "nest-cli.json").write_text("{}")
        config = tmp_path / "nest-repl.yaml"
        config.write_text("repl:\n  command: pnpm nest repl\n")

        result = runner.invoke(cli, ["--config", str(config), "root", str(tmp_path)])

        assert result.exit_code == 0, result.output
        lines = result.stdout.strip().splitlines()
        assert lines[1] == f"cd {tmp_path.resolve()} && pnpm nest repl"

    def test_missing_config_file(self, runner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["--config", str(tmp_path / "none.yaml"), "root"])
        assert result.exit_code == 2
