"""Tests for shapeguard CLI."""

import json
from pathlib import Path

import yaml
from typer.testing import CliRunner

# Note: In Click 8.0+, mix_stderr is no longer a CliRunner parameter.
# Stderr output is combined with stdout by default when using CliRunner.invoke()
runner = CliRunner()

USER_SCHEMA = """{
  id: number;
  name: string;
  email?: string;
  tags: string[];
  createdAt: Date;
}"""


def _write(tmp_path: Path, name: str, content: str) -> str:
    path = tmp_path / name
    path.write_text(content)
    return str(path)


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_version_flag(self) -> None:
        """--version shows version info."""
        from shapeguard.cli import app

        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "shapeguard version" in result.stdout

    def test_help_flag(self) -> None:
        """--help shows available commands."""
        from shapeguard.cli import app

        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "validate" in result.stdout
        assert "parse" in result.stdout
        assert "plugins" in result.stdout


class TestValidateCommand:
    """shapeguard validate."""

    def test_valid_input_exits_zero(self, tmp_path: Path) -> None:
        from shapeguard.cli import app

        schema = _write(tmp_path, "user.schema", USER_SCHEMA)
        data = _write(
            tmp_path,
            "user.json",
            json.dumps({"id": 1, "name": "Ada", "tags": [], "createdAt": "2024-01-15T10:30:00Z"}),
        )

        result = runner.invoke(app, ["validate", "--schema", schema, "--input", data])
        assert result.exit_code == 0
        assert "Valid" in result.stdout

    def test_invalid_input_lists_errors(self, tmp_path: Path) -> None:
        from shapeguard.cli import app

        schema = _write(tmp_path, "user.schema", USER_SCHEMA)
        data = _write(
            tmp_path,
            "user.json",
            json.dumps({"name": "Ada", "tags": ["a", 1], "createdAt": "2024-01-15T10:30:00Z"}),
        )

        result = runner.invoke(app, ["validate", "-s", schema, "-i", data])
        assert result.exit_code == 1
        assert "Invalid: 2 error(s)" in result.stdout
        assert "Missing required field: id" in result.stdout
        assert "Array item at tags[1] should be a string (found number)" in result.stdout

    def test_json_output(self, tmp_path: Path) -> None:
        from shapeguard.cli import app

        schema = _write(tmp_path, "s.schema", "{ id: number; }")
        data = _write(tmp_path, "d.json", '{"id": "x"}')

        result = runner.invoke(app, ["validate", "-s", schema, "-i", data, "--json"])
        assert result.exit_code == 1
        output = json.loads(result.stdout)
        assert output["valid"] is False
        assert output["errors"] == ["Field id should be a number (found string)"]
        assert output["duration_ms"] >= 0

    def test_no_dates_flag(self, tmp_path: Path) -> None:
        from shapeguard.cli import app

        schema = _write(tmp_path, "s.schema", "{ at: Date; }")
        data = _write(tmp_path, "d.json", '{"at": "2024-01-15T10:30:00Z"}')

        assert runner.invoke(app, ["validate", "-s", schema, "-i", data]).exit_code == 0
        result = runner.invoke(app, ["validate", "-s", schema, "-i", data, "--no-dates"])
        assert result.exit_code == 1
        assert "Field at should be a Date (found string)" in result.stdout

    def test_timestamp_in_string_field_is_valid(self, tmp_path: Path) -> None:
        from shapeguard.cli import app

        schema = _write(tmp_path, "s.schema", "{ label: string; at: Date; }")
        data = _write(tmp_path, "d.json", '{"label": "2024-01-15T10:30:00Z", "at": "2024-01-15T10:30:00Z"}')

        result = runner.invoke(app, ["validate", "-s", schema, "-i", data])
        assert result.exit_code == 0
        assert "Valid" in result.stdout

    def test_strict_flag_reports_parse_error(self, tmp_path: Path) -> None:
        from shapeguard.cli import app

        schema = _write(tmp_path, "s.schema", "{ id number; }")
        data = _write(tmp_path, "d.json", '{"id": 1}')

        result = runner.invoke(app, ["validate", "-s", schema, "-i", data, "--strict"])
        assert result.exit_code == 1
        assert "Schema parsing error: Expected ':'" in result.stdout

    def test_reject_unknown_allows_builtin_plugins(self, tmp_path: Path) -> None:
        from shapeguard.cli import app

        schema = _write(tmp_path, "s.schema", "{ contact: email; id: UserId; }")
        data = _write(tmp_path, "d.json", '{"contact": "a@b.co", "id": 1}')

        result = runner.invoke(app, ["validate", "-s", schema, "-i", data, "--reject-unknown"])
        assert result.exit_code == 1
        assert "Unknown type 'UserId'" in result.stdout
        assert "Unknown type 'email'" not in result.stdout

    def test_settings_file(self, tmp_path: Path) -> None:
        from shapeguard.cli import app

        settings = _write(tmp_path, "settings.yaml", yaml.dump({"parser": {"strict_syntax": True}}))
        schema = _write(tmp_path, "s.schema", "{ junk; id: number; }")
        data = _write(tmp_path, "d.json", '{"id": 1}')

        result = runner.invoke(app, ["validate", "-s", schema, "-i", data, "--settings", settings])
        assert result.exit_code == 1
        assert "Schema parsing error" in result.stdout

    def test_verbose_shows_settings(self, tmp_path: Path) -> None:
        from shapeguard.cli import app

        schema = _write(tmp_path, "s.schema", "{ id: number; }")
        data = _write(tmp_path, "d.json", '{"id": 1}')

        result = runner.invoke(app, ["validate", "-s", schema, "-i", data, "--verbose"])
        assert result.exit_code == 0
        assert "Duration:" in result.stdout
        assert '"cache_size": 128' in result.stdout

    def test_missing_schema_file(self, tmp_path: Path) -> None:
        from shapeguard.cli import app

        data = _write(tmp_path, "d.json", "{}")
        result = runner.invoke(app, ["validate", "-s", str(tmp_path / "nope.schema"), "-i", data])
        assert result.exit_code == 1
        assert "Schema file not found" in result.output

    def test_invalid_json_input(self, tmp_path: Path) -> None:
        from shapeguard.cli import app

        schema = _write(tmp_path, "s.schema", "{ id: number; }")
        data = _write(tmp_path, "d.json", "{not json")

        result = runner.invoke(app, ["validate", "-s", schema, "-i", data])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_missing_settings_file(self, tmp_path: Path) -> None:
        from shapeguard.cli import app

        schema = _write(tmp_path, "s.schema", "{ id: number; }")
        data = _write(tmp_path, "d.json", '{"id": 1}')

        result = runner.invoke(
            app, ["validate", "-s", schema, "-i", data, "--settings", str(tmp_path / "missing.yaml")]
        )
        assert result.exit_code == 1
        assert "Settings file not found" in result.output

    def test_invalid_settings(self, tmp_path: Path) -> None:
        from shapeguard.cli import app

        settings = _write(tmp_path, "settings.yaml", yaml.dump({"parser": {"cache_size": -1}}))
        schema = _write(tmp_path, "s.schema", "{ id: number; }")
        data = _write(tmp_path, "d.json", '{"id": 1}')

        result = runner.invoke(app, ["validate", "-s", schema, "-i", data, "--settings", settings])
        assert result.exit_code == 1
        assert "Configuration errors" in result.output
        assert "parser.cache_size" in result.output


class TestParseCommand:
    """shapeguard parse."""

    def test_prints_tree(self, tmp_path: Path) -> None:
        from shapeguard.cli import app

        schema = _write(tmp_path, "s.schema", "{ tags?: string[]; }")

        result = runner.invoke(app, ["parse", "--schema", schema])
        assert result.exit_code == 0
        tree = json.loads(result.stdout)
        assert tree["tags"]["optional"] is True
        assert tree["tags"]["type"]["kind"] == "array"

    def test_strict_syntax_error(self, tmp_path: Path) -> None:
        from shapeguard.cli import app

        schema = _write(tmp_path, "s.schema", "{ a: { b: string; }")

        result = runner.invoke(app, ["parse", "-s", schema, "--strict"])
        assert result.exit_code == 1
        assert "Schema syntax error" in result.output

    def test_deeply_nested_schema(self, tmp_path: Path) -> None:
        from shapeguard.cli import app

        depth = 1000
        schema = _write(tmp_path, "s.schema", "a: { " * depth + "}" * depth)

        result = runner.invoke(app, ["parse", "-s", schema])
        assert result.exit_code == 1
        assert "nested too deeply" in result.output
        assert not isinstance(result.exception, RecursionError)


class TestPluginsCommand:
    """shapeguard plugins list."""

    def test_lists_builtin_plugins(self) -> None:
        from shapeguard.cli import app

        result = runner.invoke(app, ["plugins", "list"])
        assert result.exit_code == 0
        assert "PLUGINS:" in result.stdout
        for name in ("email", "url", "uuid", "iso8601_date"):
            assert name in result.stdout
