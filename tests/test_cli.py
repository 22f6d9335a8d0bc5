from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from cli.main import app
from core.resources_loader import DEFAULT_GREETING, write_greeting_fixture

runner = CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for key in (
        "CLOSING_DEMO_ENABLED_ROUTINES",
        "CLOSING_DEMO_GREETING_PATH",
        "CLOSING_DEMO_MISSING_PATH",
        "CLOSING_DEMO_COPY_PATH",
        "CLOSING_DEMO_SHOW_EXCEPTION_CHAIN",
    ):
        monkeypatch.delenv(key, raising=False)
    write_greeting_fixture(tmp_path / "greeting.txt")
    return tmp_path


def _section(output: str, title: str, next_title: str | None = None) -> str:
    start = output.index(title)
    end = output.index(next_title, start) if next_title else len(output)
    return output[start:end]


def test_default_run_copies_with_the_with_statement(workdir):
    result = runner.invoke(app, [])

    assert result.exit_code == 0, result.output
    out = result.output.splitlines()
    assert "Copy Line By Line (with statement)" in [line.strip() for line in out]
    for line in DEFAULT_GREETING.splitlines():
        assert line in out
    assert out[-4:] == [
        "LoggingFileWriter closing ...",
        "LoggingBufferedWriter closing ...",
        "LoggingFileReader closing ...",
        "LoggingBufferedReader closing ...",
    ]
    assert (workdir / "greeting_copy.txt").read_text() == DEFAULT_GREETING


def test_run_reports_masked_and_original_errors_and_still_succeeds(workdir):
    result = runner.invoke(app, ["run", "-r", "read-missing", "-r", "read-missing-scoped"])

    assert result.exit_code == 0, result.output
    unguarded = _section(result.output, "Greeting Missing (try / finally)", "Greeting Missing (with statement)")
    scoped = _section(result.output, "Greeting Missing (with statement)")
    assert "AttributeError" in unguarded
    assert "FileNotFoundError" not in unguarded
    assert "FileNotFoundError" in scoped
    assert "closing ..." not in result.output


def test_show_chain_reveals_the_masked_error(workdir):
    result = runner.invoke(app, ["run", "-r", "read-missing", "--show-chain"])
    assert result.exit_code == 0, result.output
    assert "AttributeError" in result.output
    assert "FileNotFoundError" in result.output


def test_fail_on_error_sets_exit_status(workdir):
    result = runner.invoke(app, ["run", "-r", "read-missing-guarded", "--fail-on-error"])
    assert result.exit_code == 1


def test_enabled_routines_come_from_the_environment(workdir, monkeypatch):
    monkeypatch.setenv("CLOSING_DEMO_ENABLED_ROUTINES", '["read-greeting"]')
    result = runner.invoke(app, ["run"])
    assert result.exit_code == 0, result.output
    assert "Read Greeting (try / finally)" in result.output
    assert not (workdir / "greeting_copy.txt").exists()


def test_all_runs_every_routine_in_catalog_order(workdir):
    result = runner.invoke(app, ["run", "--all", "--width", "60"])
    assert result.exit_code == 0, result.output
    titles = [line.strip() for line in result.output.splitlines() if line.strip().endswith(")")]
    assert titles[0] == "Read Greeting (try / finally)"
    assert "-" * 60 in result.output.splitlines()


def test_all_and_routine_are_mutually_exclusive(workdir):
    result = runner.invoke(app, ["run", "--all", "-r", "read-greeting"])
    assert result.exit_code != 0


def test_unknown_routine_is_a_usage_error(workdir):
    result = runner.invoke(app, ["run", "-r", "read-everything"])
    assert result.exit_code == 2


def test_json_output_records_outcomes(workdir):
    report = workdir / "reports" / "run.json"
    result = runner.invoke(app, ["run", "-r", "read-missing", "-r", "read-greeting-scoped", "--json-output", str(report)])

    assert result.exit_code == 0, result.output
    data = json.loads(report.read_text(encoding="utf-8"))
    first, second = data["routines"]
    assert first["name"] == "read-missing"
    assert first["error_type"] == "AttributeError"
    assert first["masked_error_type"] == "FileNotFoundError"
    assert second["succeeded"] is True
    assert second["closures"] == ["LoggingFileReader closing ...", "LoggingBufferedReader closing ..."]


def test_list_shows_every_routine(workdir):
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0, result.output
    for name in ("read-greeting", "read-missing-guarded", "copy-line-by-line-scoped"):
        assert name in result.output


def test_init_writes_the_fixture_once(workdir):
    (workdir / "greeting.txt").unlink()

    first = runner.invoke(app, ["init"])
    assert first.exit_code == 0, first.output
    assert (workdir / "greeting.txt").read_text(encoding="utf-8") == DEFAULT_GREETING

    (workdir / "greeting.txt").write_text("changed\n", encoding="utf-8")
    second = runner.invoke(app, ["init"])
    assert second.exit_code == 0
    assert (workdir / "greeting.txt").read_text(encoding="utf-8") == "changed\n"


def test_doctor_reports_fixture_status(workdir):
    result = runner.invoke(app, ["doctor"])
    assert result.exit_code == 0, result.output
    assert "Greeting fixture" in result.output
    assert "FAIL" not in result.output


def test_module_entry_point_runs_the_cli(workdir, monkeypatch, capsys):
    import main

    monkeypatch.setattr("sys.argv", ["closing-demo", "run", "-r", "read-greeting-scoped"])
    with pytest.raises(SystemExit) as info:
        main.main()
    assert info.value.code == 0
    assert "LoggingBufferedReader closing ..." in capsys.readouterr().out
