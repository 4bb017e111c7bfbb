import os
import subprocess
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def run_pylox(*args, input=None):
    return subprocess.run(
        [sys.executable, "-m", "pylox", *args],
        input=input,
        text=True,
        capture_output=True,
        cwd=ROOT,
        timeout=30,
    )


def test_runs_a_file(tmp_path):
    script = tmp_path / "hello.lox"
    script.write_text("print \"hello\";\nprint 1 + 1;\n")
    proc = run_pylox(str(script))
    assert proc.returncode == 0
    assert proc.stdout.splitlines() == ["hello", "2"]


def test_static_error_exit_code(tmp_path):
    script = tmp_path / "bad.lox"
    script.write_text("print ;")
    proc = run_pylox(str(script))
    assert proc.returncode == 65
    assert "Expected expression." in proc.stderr


def test_runtime_error_exit_code(tmp_path):
    script = tmp_path / "boom.lox"
    script.write_text("print \"before\";\nprint nil + 1;\nprint \"after\";\n")
    proc = run_pylox(str(script))
    assert proc.returncode == 70
    assert proc.stdout.splitlines() == ["before"]
    assert proc.stderr.strip() == (
        "[line 2] Error: Operands must be two numbers or two strings.")


def test_missing_file(tmp_path):
    proc = run_pylox(str(tmp_path / "nope.lox"))
    assert proc.returncode == 66


def test_prompt_keeps_state_and_survives_errors():
    proc = run_pylox(input="var a = 2;\nprint a +;\nprint a * 3;\n")
    assert proc.returncode == 0
    assert "6" in proc.stdout
    assert "Expected expression." in proc.stderr
