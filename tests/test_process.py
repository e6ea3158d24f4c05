"""Tests for specrefresh.process."""

from __future__ import annotations

from pathlib import Path

from specrefresh.process import MISSING_EXECUTABLE_EXIT_CODE, DotnetToolchain, ProcessResult, ProcessRunner


def test_execute_prefixes_executable_name() -> None:
    seen = []

    def fake(command, cwd):
        seen.append((list(command), cwd))
        return ProcessResult(exit_code=0, stdout="done")

    result = ProcessRunner(runner=fake).execute("kiota", "/work", ["generate", "-l", "CSharp"])

    assert result.ok
    assert result.stdout == "done"
    assert seen == [(["kiota", "generate", "-l", "CSharp"], Path("/work"))]


def test_missing_executable_reports_exit_code() -> None:
    result = ProcessRunner().execute("specrefresh-definitely-not-installed", None, ["--version"])

    assert result.exit_code == MISSING_EXECUTABLE_EXIT_CODE
    assert not result.ok
    assert "specrefresh-definitely-not-installed" in result.stderr


def test_build_succeeded_reflects_exit_code(tmp_path: Path) -> None:
    project = tmp_path / "src" / "Client.csproj"

    def failing(command, cwd):
        return ProcessResult(exit_code=1 if command[1] == "build" else 0)

    toolchain = DotnetToolchain(ProcessRunner(runner=failing))

    assert toolchain.restore(project).ok
    assert toolchain.build_succeeded(project) is False
