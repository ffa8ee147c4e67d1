"""
Tests for the env-mage command line.
"""

import json
import pytest
import tempfile
from pathlib import Path
from click.testing import CliRunner
from envmage import __version__
from envmage.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def tmp():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class TestGroup:
    """Test the top-level command group."""

    def test_help(self, runner):
        result = runner.invoke(cli, ['-h'])
        assert result.exit_code == 0
        for name in ['init', 'validate', 'sync', 'diff', 'lint', 'typegen', 'envjson', 'scan']:
            assert name in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_unknown_command(self, runner):
        result = runner.invoke(cli, ['explode'])
        assert result.exit_code != 0


class TestInitCli:
    def test_init(self, runner, tmp):
        env = tmp / ".env"
        env.write_text("A=1\nB=2\n")
        output = tmp / ".env.example"

        result = runner.invoke(cli, ['init', '-e', str(env), '-o', str(output), '--no-backup'])

        assert result.exit_code == 0
        assert "2 keys" in result.output
        assert output.read_text() == "A=\nB=\n"

    def test_init_missing_env(self, runner, tmp):
        result = runner.invoke(cli, ['init', '-e', str(tmp / ".env"), '-o', str(tmp / "out")])
        assert result.exit_code == 1
        assert "not found" in result.output


class TestValidateCli:
    def test_valid(self, runner, tmp):
        (tmp / ".env").write_text("A=1\nB=2")
        (tmp / ".env.example").write_text("A=\nB=")

        result = runner.invoke(cli, ['validate', '-e', str(tmp / ".env")])

        assert result.exit_code == 0
        assert "validated" in result.output

    def test_missing_keys(self, runner, tmp):
        (tmp / ".env").write_text("A=1")
        (tmp / ".env.example").write_text("A=\nB=")

        result = runner.invoke(cli, ['validate', '-e', str(tmp / ".env")])

        assert result.exit_code == 1
        assert "B" in result.output

    def test_strict_extra(self, runner, tmp):
        (tmp / ".env").write_text("A=1\nEXTRA=2")
        (tmp / "tmpl").write_text("A=")

        relaxed = runner.invoke(cli, ['validate', '-e', str(tmp / ".env"), '-x', str(tmp / "tmpl")])
        strict = runner.invoke(cli, ['validate', '-e', str(tmp / ".env"), '-x', str(tmp / "tmpl"), '--strict'])

        assert relaxed.exit_code == 0
        assert strict.exit_code == 1


class TestSyncCli:
    def test_sync_overwrite(self, runner, tmp):
        source = tmp / ".env"
        target = tmp / ".env.example"
        source.write_text("A=1\nB=2")
        target.write_text("A=x\nC=z")

        result = runner.invoke(cli, [
            'sync', '-s', str(source), '-t', str(target), '-S', 'overwrite', '--no-backup'
        ])

        assert result.exit_code == 0
        assert target.read_text() == "A=1\nB=2\n"
        assert not (tmp / ".env.example.backup").exists()

    def test_sync_backup(self, runner, tmp):
        source = tmp / ".env"
        target = tmp / ".env.example"
        source.write_text("A=1")
        target.write_text("OLD=1")

        result = runner.invoke(cli, ['sync', '-s', str(source), '-t', str(target)])

        assert result.exit_code == 0
        assert (tmp / ".env.example.backup").read_text() == "OLD=1"

    def test_sync_bad_strategy(self, runner, tmp):
        result = runner.invoke(cli, ['sync', '-S', 'union'])
        assert result.exit_code == 2

    def test_sync_missing_target(self, runner, tmp):
        source = tmp / ".env"
        source.write_text("A=1")
        result = runner.invoke(cli, ['sync', '-s', str(source), '-t', str(tmp / "nope")])
        assert result.exit_code == 1
        assert "Target file not found" in result.output


class TestDiffCli:
    def test_diff(self, runner, tmp):
        (tmp / "a").write_text("A=1\nB=2")
        (tmp / "b").write_text("A=1\nB=2\nC=3")

        result = runner.invoke(cli, ['diff', '-f', str(tmp / "a"), '-t', str(tmp / "b")])

        assert result.exit_code == 0
        assert "+ C" in result.output

    def test_identical(self, runner, tmp):
        (tmp / "a").write_text("A=1")
        (tmp / "b").write_text("A=1")

        result = runner.invoke(cli, ['diff', '-f', str(tmp / "a"), '-t', str(tmp / "b")])

        assert result.exit_code == 0
        assert "identical" in result.output


class TestLintCli:
    def test_clean(self, runner, tmp):
        (tmp / ".env").write_text("A=1\nB=2")
        result = runner.invoke(cli, ['lint', '-f', str(tmp / ".env")])
        assert result.exit_code == 0
        assert "No issues found" in result.output

    def test_errors(self, runner, tmp):
        (tmp / ".env").write_text("BROKEN\n1BAD=x")
        result = runner.invoke(cli, ['lint', '-f', str(tmp / ".env")])
        assert result.exit_code == 1
        assert "Line 1" in result.output
        assert "Line 2" in result.output

    def test_strict_warnings(self, runner, tmp):
        (tmp / ".env").write_text("DESCRIPTION=has spaces")

        relaxed = runner.invoke(cli, ['lint', '-f', str(tmp / ".env")])
        strict = runner.invoke(cli, ['lint', '-f', str(tmp / ".env"), '--strict', '-w'])

        assert relaxed.exit_code == 0
        assert strict.exit_code == 1
        assert "Line 1" in strict.output


class TestTypegenCli:
    def test_typegen(self, runner, tmp):
        (tmp / ".env").write_text("PORT=3000")
        output = tmp / "env.types.ts"

        result = runner.invoke(cli, ['typegen', '-e', str(tmp / ".env"), '-o', str(output), '-f', 'type'])

        assert result.exit_code == 0
        assert "PORT: number;" in output.read_text()


class TestEnvJsonCli:
    def test_envjson(self, runner, tmp):
        (tmp / ".env").write_text("A=1")
        output = tmp / ".env.json"

        result = runner.invoke(cli, ['envjson', '-e', str(tmp / ".env"), '-o', str(output), '--values'])

        assert result.exit_code == 0
        assert json.loads(output.read_text()) == {"A": "1"}


class TestScanCli:
    def test_scan(self, runner, tmp):
        (tmp / "app.js").write_text("process.env.DATABASE_URL")
        (tmp / "skip").mkdir()
        (tmp / "skip" / "lib.js").write_text("process.env.HIDDEN")

        result = runner.invoke(cli, ['scan', '-p', str(tmp), '-x', 'skip'])

        assert result.exit_code == 0
        assert "DATABASE_URL" in result.output
        assert "HIDDEN" not in result.output

    def test_scan_missing_path(self, runner, tmp):
        result = runner.invoke(cli, ['scan', '-p', str(tmp / "nope")])
        assert result.exit_code == 1
