"""
Tests for the command-line interface.
"""

import io
from pathlib import Path

import pytest
from click.testing import CliRunner
from rich.console import Console

from simdist.cli import cli
from simdist.core.reporting import ConsoleWriter, detect_terminal_width
from simdist.core.results import ResultsSet

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def env():
    return {"SIMDIST_SHOW_PROGRESS": "false", "SIMDIST_WIDTH": "100"}


class TestCli:
    """Test the simdist command."""

    def test_compact_output(self, runner, env):
        result = runner.invoke(cli, ["--path", str(FIXTURES / "disjoint.csv")], env=env)

        assert result.exit_code == 0, result.output
        assert result.output.strip().splitlines() == ["0", "0", "0"]

    def test_short_path_option(self, runner, env):
        result = runner.invoke(cli, ["-p", str(FIXTURES / "records.csv")], env=env)

        assert result.exit_code == 0, result.output
        assert len(result.output.strip().splitlines()) == 3

    def test_display_output(self, runner, env):
        result = runner.invoke(cli, ["--path", str(FIXTURES / "disjoint.csv"), "--display"], env=env)

        assert result.exit_code == 0, result.output
        lines = result.output.rstrip("\n").split("\n")
        assert lines[-1] == "Total similarities: 3"
        assert lines[-2] == "Mean: 0"
        assert lines[-4] == "|" + "-" * 99

    def test_missing_file(self, runner, env, tmp_path):
        path = tmp_path / "test1.csv"

        result = runner.invoke(cli, ["--path", str(path)], env=env)

        assert result.exit_code == 1
        assert f"the file `{path}` does not exist" in result.output

    def test_error_reported_once(self, runner, env, tmp_path):
        path = tmp_path / "test1.csv"

        result = runner.invoke(cli, ["--path", str(path)], env=env)

        assert result.exit_code == 1
        assert result.output.count(f"the file `{path}` does not exist") == 1
        assert result.output.count("Error:") == 1

    def test_empty_file(self, runner, env, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("uid,content\n")

        result = runner.invoke(cli, ["--path", str(path)], env=env)

        assert result.exit_code == 1
        assert "is empty" in result.output

    def test_path_required(self, runner):
        result = runner.invoke(cli, [])
        assert result.exit_code != 0

    def test_invalid_config(self, runner, tmp_path):
        path = tmp_path / "records.csv"
        path.write_text("uid,content\n1,a\n")

        result = runner.invoke(cli, ["--path", str(path)], env={"SIMDIST_PRECISION": "many"})

        assert result.exit_code == 1
        assert "SIMDIST_PRECISION" in result.output
        assert result.output.count("Invalid value for SIMDIST_PRECISION") == 1

    def test_no_version_flag(self, runner, env):
        result = runner.invoke(cli, ["--path", str(FIXTURES / "disjoint.csv"), "--version"], env=env)
        assert result.exit_code == 2

    def test_config_file_applies(self, runner, env, tmp_path):
        (tmp_path / ".simdist.yml").write_text("analysis:\n  precision: 1\n")
        path = tmp_path / "records.csv"
        path.write_text("uid,content\n1,a\n2,a b c\n")

        result = runner.invoke(cli, ["--path", str(path)], env=env)

        assert result.exit_code == 0, result.output
        assert result.output.strip() == "0.3"


class TestConsoleWriter:
    """Test the console sink."""

    def _writer(self):
        output = io.StringIO()
        return ConsoleWriter(Console(file=output, width=200)), output

    def test_compact(self):
        writer, output = self._writer()
        results = ResultsSet(scores=(0.5, 0.25), mean=0.375, min=0.0, max=0.5)

        writer.write_results(results, display=False)

        assert output.getvalue() == "0.5\n0.25\n"

    def test_markup_is_not_interpreted(self):
        writer, output = self._writer()
        writer.add_line("[bold]not markup[/bold]")
        writer.add_line("second")
        writer.flush()

        assert output.getvalue() == "[bold]not markup[/bold]\nsecond\n"

    def test_flush_empty_buffer(self):
        writer, output = self._writer()
        writer.flush()
        assert output.getvalue() == ""

    def test_display(self):
        writer, output = self._writer()
        results = ResultsSet(scores=(0.0, 0.5, 1.0), mean=0.5, min=0.0, max=1.0)

        writer.write_results(results, display=True, width=20)

        assert output.getvalue().endswith("Mean: 0.5\nTotal similarities: 3\n")

    def test_width_fallback_when_not_a_terminal(self):
        console = Console(file=io.StringIO(), force_terminal=False)
        assert detect_terminal_width(console, fallback=100) == 100

    def test_width_from_terminal(self):
        console = Console(file=io.StringIO(), force_terminal=True, width=132)
        assert detect_terminal_width(console) == 132
