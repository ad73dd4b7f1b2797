## kari — CLI integration tests

import os, sys
import subprocess
from pathlib import Path


def run_cli(*cli_args: str | Path, stdin: str | None = None, extra_args: list[str] | None = None) -> subprocess.CompletedProcess:
    args = [sys.executable, "-m", "kari", "--plain"]
    if extra_args:
        args.extend(extra_args)
    args.extend(str(arg) for arg in cli_args)
    return subprocess.run(args, input=stdin if stdin is not None else "", capture_output=True, text=True, env=os.environ.copy())


def _strip_output_lines(output: str) -> list[str]:
    return [line for line in output.splitlines() if line.strip()]


def test_cli_runs_file(tmp_path: Path):
    program = tmp_path / "hello.kr"
    program.write_text('"RUNFILE" print\n', encoding='utf-8')

    result = run_cli(program)

    assert result.returncode == 0
    assert _strip_output_lines(result.stdout) == ["RUNFILE"]


def test_cli_reads_standard_input():
    result = run_cli(stdin="3 4 + print")
    assert result.returncode == 0
    assert result.stdout.strip() == "7"


def test_cli_loads_prelude_unless_disabled():
    result = run_cli(stdin="3 square print")
    assert result.returncode == 0
    assert result.stdout.strip() == "9"

    result = run_cli(stdin="3 square print", extra_args=["--no-prelude"])
    assert result.returncode == 1
    assert "Unknown function: `square`" in result.stdout


def test_cli_missing_file_exits_with_error(tmp_path: Path):
    result = run_cli(tmp_path / "does-not-exist.kr")
    assert result.returncode != 0


def test_cli_error_shows_source_and_callers(tmp_path: Path):
    program = tmp_path / "broken.kr"
    program.write_text("[ 1 nope ] [ helper ] define\nhelper\n", encoding='utf-8')

    result = run_cli(program)

    assert result.returncode == 1
    out = result.stdout
    assert "ERROR: Unknown function: `nope`." in out
    assert "    1 | [ 1 nope ] [ helper ] define" in out
    assert "Called by:" in out
    assert f"{program}:2:1" in out


def test_cli_stdin_errors_name_the_stream():
    result = run_cli(stdin="[ 1 2")
    assert result.returncode == 1
    assert "Unterminated list" in result.stdout
    assert "<stdin>:1:1" in result.stdout


def test_cli_stats_and_verbose():
    result = run_cli(stdin="1 2 +", extra_args=["--stats", "--no-prelude", "-v"])
    assert result.returncode == 0
    assert "STATISTICS." in result.stdout
    assert result.stdout.count("<=>") == 3
