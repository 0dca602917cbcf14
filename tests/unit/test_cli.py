"""
Unit tests for the ddlkit CLI interface.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import yaml
from click.testing import CliRunner

from ddlkit.cli import main
from ddlkit.platform import PostgreSqlPlatform
from ddlkit.schema_file import parse_schema

from tests.conftest import SHOP_SCHEMA_YAML


EXTENDED_SCHEMA_YAML = SHOP_SCHEMA_YAML + """
  - name: supplier
    columns:
      - {name: id, type: INTEGER, primary_key: true, required: true}
      - {name: name, type: VARCHAR, size: 80}
"""


@pytest.fixture
def runner():
    """Click test runner."""
    return CliRunner()


@pytest.fixture
def config_file(tmp_path, sample_config_dict):
    path = tmp_path / "ddlkit.yaml"
    path.write_text(yaml.safe_dump(sample_config_dict), encoding="utf-8")
    return str(path)


@pytest.fixture
def extended_schema_file(tmp_path):
    path = tmp_path / "extended.yaml"
    path.write_text(EXTENDED_SCHEMA_YAML, encoding="utf-8")
    return str(path)


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("ddlkit.cli.setup_logging") as mock_setup:
        yield mock_setup


@pytest.fixture
def live_database(mock_pool):
    """Patches the connection pool and the live model read."""
    current = parse_schema(SHOP_SCHEMA_YAML)
    current.find_table("purchase").find_column("total").default_value = "0"

    pool_context = MagicMock()
    pool_context.__aenter__ = AsyncMock(return_value=mock_pool)
    pool_context.__aexit__ = AsyncMock(return_value=False)

    with patch("ddlkit.cli.ConnectionPool", return_value=pool_context) as mock_pool_class, \
            patch.object(
                PostgreSqlPlatform, "read_model_from_database", new=AsyncMock(return_value=current)
            ):
        yield mock_pool_class


class TestCLIMain:
    """Test main CLI functionality."""

    def test_cli_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "cross-database schema definition" in result.output

    def test_cli_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0

    def test_platforms(self, runner):
        result = runner.invoke(main, ["platforms"])
        assert result.exit_code == 0
        assert "PostgreSql" in result.output
        assert "Oracle8" in result.output


class TestSqlCommands:
    """Test the commands generating SQL from schema files."""

    def test_create_sql(self, runner, shop_schema_file):
        result = runner.invoke(main, ["create-sql", shop_schema_file, "-p", "PostgreSql"])
        assert result.exit_code == 0
        assert "CREATE TABLE customer" in result.output
        assert "FOREIGN KEY (customer_id) REFERENCES customer (id)" in result.output

    def test_create_sql_drop_first_delimited(self, runner, shop_schema_file):
        result = runner.invoke(
            main, ["create-sql", shop_schema_file, "-p", "MySQL", "--drop-first", "--delimited"]
        )
        assert result.exit_code == 0
        assert result.output.index("DROP TABLE `customer`") < result.output.index("CREATE TABLE `customer`")

    def test_create_sql_to_file(self, runner, tmp_path, shop_schema_file):
        output = tmp_path / "create.sql"
        result = runner.invoke(main, ["create-sql", shop_schema_file, "-p", "Generic", "-o", str(output)])
        assert result.exit_code == 0
        assert "Written to" in result.output
        assert output.read_text(encoding="utf-8").count("CREATE TABLE") == 2

    def test_drop_sql(self, runner, shop_schema_file):
        result = runner.invoke(main, ["drop-sql", shop_schema_file, "-p", "Oracle8"])
        assert result.exit_code == 0
        assert "DROP TABLE purchase CASCADE CONSTRAINTS" in result.output

    def test_unknown_platform(self, runner, shop_schema_file):
        result = runner.invoke(main, ["create-sql", shop_schema_file, "-p", "Access"])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "Access" in result.output

    def test_invalid_schema_file(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("tables: [unclosed", encoding="utf-8")
        result = runner.invoke(main, ["create-sql", str(path), "-p", "Generic"])
        assert result.exit_code == 1
        assert "Invalid YAML" in result.output

    def test_diff_equal(self, runner, shop_schema_file):
        result = runner.invoke(main, ["diff", shop_schema_file, shop_schema_file, "-p", "Generic"])
        assert result.exit_code == 0
        assert "Schemas are equal" in result.output

    def test_diff_new_table(self, runner, shop_schema_file, extended_schema_file):
        result = runner.invoke(
            main, ["diff", shop_schema_file, extended_schema_file, "-p", "Generic"]
        )
        assert result.exit_code == 0
        assert result.output.startswith("CREATE TABLE supplier")

    def test_diff_without_drops(self, runner, shop_schema_file, extended_schema_file):
        result = runner.invoke(
            main, ["diff", extended_schema_file, shop_schema_file, "-p", "Generic", "--no-drops"]
        )
        assert result.exit_code == 0
        assert "Schemas are equal" in result.output

    def test_diff_to_file_shows_changes(self, runner, tmp_path, shop_schema_file, extended_schema_file):
        output = tmp_path / "alter.sql"
        result = runner.invoke(
            main, ["diff", extended_schema_file, shop_schema_file, "-p", "Generic", "-o", str(output)]
        )
        assert result.exit_code == 0
        assert "Schema changes" in result.output
        assert output.read_text(encoding="utf-8") == "DROP TABLE supplier;\n\n"


class TestConfigCommands:
    """Test the commands working on a configuration file."""

    def test_validate_config(self, runner, config_file, no_logging_setup):
        result = runner.invoke(main, ["validate-config", "-c", config_file])
        assert result.exit_code == 0
        assert "Configuration is valid" in result.output
        assert "main" in result.output
        no_logging_setup.assert_called_once()

    def test_validate_config_invalid(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("databases:\n  - name: x\n    url: foo://localhost/db\n", encoding="utf-8")
        result = runner.invoke(main, ["validate-config", "-c", str(path)])
        assert result.exit_code == 1
        assert "Configuration error" in result.output

    def test_validate_config_file_not_exists(self, runner):
        result = runner.invoke(main, ["validate-config", "-c", "nonexistent.yaml"])
        assert result.exit_code != 0

    def test_dump_requires_postgresql(self, runner, config_file):
        result = runner.invoke(main, ["dump", "-c", config_file, "--database", "legacy"])
        assert result.exit_code == 1
        assert "only supported for PostgreSQL" in result.output

    def test_dump_unknown_database(self, runner, config_file):
        result = runner.invoke(main, ["dump", "-c", config_file, "--database", "nope"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_dump(self, runner, config_file, live_database):
        result = runner.invoke(main, ["dump", "-c", config_file, "--database", "main"])

        assert result.exit_code == 0
        document = yaml.safe_load(result.output)
        assert [t["name"] for t in document["tables"]] == ["customer", "purchase"]
        live_database.assert_called_once()

    def test_alter_prints_sql(self, runner, config_file, shop_schema_file, live_database, mock_pool):
        result = runner.invoke(
            main, ["alter", "-c", config_file, "--database", "main", shop_schema_file]
        )

        assert result.exit_code == 0
        assert "Schema changes" in result.output
        assert "DROP DEFAULT" in result.output
        mock_pool.execute.assert_not_called()

    def test_alter_execute(self, runner, config_file, shop_schema_file, live_database, mock_pool):
        result = runner.invoke(
            main, ["alter", "-c", config_file, "--database", "main", shop_schema_file, "--execute"]
        )

        assert result.exit_code == 0
        assert "Executed 1 of 1 statements" in result.output
        mock_pool.execute.assert_awaited_once()

    def test_alter_nothing_to_do(self, runner, config_file, tmp_path, live_database):
        path = tmp_path / "current.yaml"
        path.write_text(
            SHOP_SCHEMA_YAML.replace('size: "10,2"}', 'size: "10,2", default: "0"}'),
            encoding="utf-8",
        )
        result = runner.invoke(main, ["alter", "-c", config_file, "--database", "main", str(path)])

        assert result.exit_code == 0
        assert "already matches" in result.output

    def test_alter_failed_statement(self, runner, config_file, shop_schema_file, live_database, mock_pool):
        mock_pool.execute = AsyncMock(side_effect=RuntimeError("locked"))
        result = runner.invoke(
            main, ["alter", "-c", config_file, "--database", "main", shop_schema_file, "--execute"]
        )

        assert result.exit_code == 1
        assert "locked" in result.output
