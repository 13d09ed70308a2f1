"""
CLI tests for exswallow.cli.

Tests only:
  - Argument parsing
  - Exit status for clean, failing and broken inputs
  - Configuration flags reaching the rule

Does NOT test exact output wording beyond key markers.
"""
import json
import subprocess
import sys
import tempfile
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from exswallow.cli import EXIT_ERROR, EXIT_ISSUES, EXIT_OK, main

SILENT = "try:\n    a()\nexcept Exception:\n    pass\n"
CUSTOM = "try:\n    a()\nexcept Exception as e:\n    MyApp.Handler.report(e)\n"


def _run(*args, cwd=ROOT):
    return subprocess.run(
        [sys.executable, "-m", "exswallow.cli", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
    )


class TestCLI:

    def test_clean_directory(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "ok.py").write_text("x = 1\n")

            result = _run("check", tmpdir)

            assert result.returncode == EXIT_OK, result.stderr
            assert "Checked 1 file(s): 0 issues." in result.stdout

    def test_issues_exit_status(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "bad.py").write_text(SILENT)

            result = _run("check", tmpdir)

            assert result.returncode == EXIT_ISSUES
            assert "bad.py:3: [H] EX9001" in result.stdout
            assert "silently swallows exception" in result.stdout

    def test_json_output(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "bad.py").write_text(SILENT)

            result = _run("check", tmpdir, "--format", "json")

            document = json.loads(result.stdout)
            assert document["summary"]["issues"] == 1
            assert document["issues"][0]["line_no"] == 3

    def test_nonexistent_path_returns_error(self):
        result = _run("check", "/nonexistent/path")
        assert result.returncode == EXIT_ERROR
        assert "Path does not exist" in result.stderr

    def test_missing_subcommand(self):
        result = _run()
        assert result.returncode != 0


def test_acceptable_call_flag(capsys):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "custom.py"
        path.write_text(CUSTOM)

        assert main(["check", str(path)]) == EXIT_ISSUES
        assert main(["check", str(path), "--acceptable-call", "MyApp.Handler.report"]) == EXIT_OK


def test_config_file_override(capsys):
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "custom.py").write_text(CUSTOM + SILENT.replace("pass", "Logger.error(e)"))
        config = root / "exswallow.toml"
        config.write_text('acceptable_calls = ["MyApp.Handler.report"]\n')

        status = main(["check", str(root / "custom.py"), "--config", str(config)])
        out = capsys.readouterr().out

        # Logger.error is no longer in the list
        assert status == EXIT_ISSUES
        assert "custom.py:7:" in out
        assert "custom.py:3:" not in out


def test_test_files_flags(capsys):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "tests" / "test_app.py"
        path.parent.mkdir()
        path.write_text(SILENT)

        assert main(["check", str(path)]) == EXIT_OK
        assert main(["check", str(path), "--no-skip-test-files"]) == EXIT_ISSUES


def test_syntax_error_exit_status(capsys):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "broken.py"
        path.write_text("def broken(:\n")

        assert main(["check", str(path)]) == EXIT_ERROR
        assert "broken.py: error:" in capsys.readouterr().out


def test_invalid_config_exit_status(capsys):
    with tempfile.TemporaryDirectory() as tmpdir:
        config = Path(tmpdir) / "bad.toml"
        config.write_text('priority = "urgent"\n')

        assert main(["check", tmpdir, "--config", str(config)]) == EXIT_ERROR
        assert "priority" in capsys.readouterr().err


def test_explain(capsys):
    assert main(["explain", "--acceptable-call", "MyApp.Handler.report"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "  - Logger.error" in out
    assert "  - MyApp.Handler.report" in out


def test_config_found_from_checked_path(capsys, monkeypatch):
    with tempfile.TemporaryDirectory() as project, tempfile.TemporaryDirectory() as elsewhere:
        root = Path(project)
        (root / "pyproject.toml").write_text(
            '[tool.exswallow]\nacceptable_calls = ["MyApp.Handler.report"]\n'
        )
        (root / "custom.py").write_text(CUSTOM)
        monkeypatch.chdir(elsewhere)

        assert main(["check", str(root)]) == EXIT_OK
