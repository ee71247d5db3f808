"""Tests for the stationdb schema management CLI."""
from click.testing import CliRunner

from edifm.database.cli import cli


def _invoke(tmp_dir, *args):
    runner = CliRunner()
    return runner.invoke(
        cli,
        [
            "--database-url",
            f"sqlite:///{tmp_dir / 'cli.db'}",
            "--log-dir",
            str(tmp_dir / "logs"),
            *args,
        ],
        obj={},
    )


class TestInitCommand:
    """Tests for `stationdb init`."""

    def test_init_creates_database(self, tmp_dir):
        """init builds the schema and reports the revision."""
        result = _invoke(tmp_dir, "init")

        assert result.exit_code == 0, result.output
        assert "Schema revision: 3c1f8a2d9e47" in result.output
        assert (tmp_dir / "cli.db").exists()

    def test_init_reports_failure(self, tmp_dir):
        """A broken URL exits non-zero with a short message."""
        result = CliRunner().invoke(
            cli,
            ["--database-url", "notadialect://x", "--log-dir", str(tmp_dir), "init"],
            obj={},
        )

        assert result.exit_code == 1
        assert "DatabaseError" in result.output


class TestMigrationCommands:
    """Tests for `stationdb migration ...`."""

    def test_status_after_init(self, tmp_dir):
        """status shows the stamped head revision."""
        _invoke(tmp_dir, "init")
        result = _invoke(tmp_dir, "migration", "status")

        assert result.exit_code == 0, result.output
        assert "Current Revision: 3c1f8a2d9e47" in result.output
        assert "up_to_date" in result.output

    def test_upgrade_is_noop_at_head(self, tmp_dir):
        """upgrade on a current database succeeds."""
        _invoke(tmp_dir, "init")
        result = _invoke(tmp_dir, "migration", "upgrade")

        assert result.exit_code == 0, result.output
        assert "upgraded successfully" in result.output
