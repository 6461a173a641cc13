## typescala — CLI integration tests

import os, sys
import subprocess
from pathlib import Path


def repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def run_cli(*cli_args: str | Path, stdin: str | None = None, extra_args: list[str] | None = None) -> subprocess.CompletedProcess:
    args = [sys.executable, "-m", "typescala", "--plain"]
    if extra_args:
        args.extend(extra_args)
    args.extend(str(arg) for arg in cli_args)
    merged_env = os.environ.copy()
    merged_env['PYTHONPATH'] = os.pathsep.join(filter(None, [str(repo_root() / "src"), merged_env.get('PYTHONPATH')]))
    return subprocess.run(args, input=stdin, capture_output=True, text=True, env=merged_env)


def test_cli_command_prints_result():
    result = run_cli("-c", "1 plus 2 times 3")
    assert result.returncode == 0
    assert result.stdout.strip() == "9"


def test_cli_print_output_and_null_result():
    result = run_cli("-c", 'print("hi", 1.5, true)')
    assert result.returncode == 0
    assert result.stdout == "hi 1.5 true\n"


def test_cli_runs_file(tmp_path):
    script = tmp_path / "answer.ts"
    script.write_text("let a = 2\na * 21\n", encoding="utf-8")
    result = run_cli(script)
    assert result.returncode == 0
    assert result.stdout.strip() == "42"


def test_cli_reads_stdin():
    result = run_cli(stdin="let s = \"a\"\ns + 1\n")
    assert result.returncode == 0
    assert result.stdout.strip() == "a1"


def test_cli_syntax_error_shows_context():
    result = run_cli("-c", "let = 1")
    assert result.returncode != 0
    out = result.stdout
    assert "SYNTAX ERROR." in out
    assert "File \"<INPUT_1>\", line 1, column 5" in out
    assert "\033[" not in out


def test_cli_runtime_error_shows_context():
    result = run_cli("-c", "let a = 1\nlet b = missing + a")
    assert result.returncode != 0
    out = result.stdout
    assert "RUNTIME ERROR." in out
    assert "Undefined variable `missing`" in out
    assert "UnresolvedNameError" in out
    assert "line 2" in out


def test_cli_ignore_continues_after_errors():
    result = run_cli("-c", "missing", "1 + 1", extra_args=["-i"])
    assert result.returncode == 1
    assert "RUNTIME ERROR." in result.stdout
    assert result.stdout.rstrip().endswith("2")


def test_cli_stats_banner():
    result = run_cli("-c", "let a = 1\na", extra_args=["--stats"])
    assert result.returncode == 0
    assert "STATISTICS." in result.stdout
    assert "step\t2" in result.stdout


def test_cli_verbose_traces_statements():
    result = run_cli("-c", "let a = 1\na + 1", extra_args=["-v"])
    assert result.returncode == 0
    assert "let a = 1" in result.stdout
    assert result.stdout.rstrip().endswith("2")


def test_cli_lists_and_runs_demos():
    listing = run_cli("demo")
    assert listing.returncode == 0
    assert "fibonacci" in listing.stdout and "mandelbrot-canvas" in listing.stdout

    result = run_cli("demo", "factorial")
    assert result.returncode == 0
    assert result.stdout.strip() == "120"


def test_cli_unknown_demo_fails():
    result = run_cli("demo", "nope")
    assert result.returncode != 0


def test_cli_missing_file():
    result = run_cli("does-not-exist.ts")
    assert result.returncode != 0
    assert "not found" in result.stderr
