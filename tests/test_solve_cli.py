import io
from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))
from numberlink import solve_cli  # noqa: E402


def test_main_prints_witness_and_count(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("2 1\n1 1\n0 0\n"))
    assert solve_cli.main([]) == 0
    out = capsys.readouterr().out
    assert out == "+---+---+\n|001#001|\n+---+---+\n# of solutions: 1\n"


def test_main_without_solution_prints_only_count(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("1 1\n5\n"))
    assert solve_cli.main([]) == 0
    assert capsys.readouterr().out == "# of solutions: 0\n"


def test_main_color_and_unknown_arguments(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("2 1\n1 1\n"))
    assert solve_cli.main(["--color", "--unknown=1", "extra"]) == 0
    out = capsys.readouterr().out
    assert "\x1b[32m" in out
    assert out.endswith("# of solutions: 1\n")


def test_main_handles_multiple_puzzles(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    text = "4 3\n1 0 0 2\n0 3 1 0\n3 2 0 0\n1 2\n1\n1\n"
    monkeypatch.setattr(sys, "stdin", io.StringIO(text))
    assert solve_cli.main([]) == 0
    counts = [
        line for line in capsys.readouterr().out.splitlines() if line.startswith("#")
    ]
    assert len(counts) == 2
    assert counts[1] == "# of solutions: 1"


@pytest.mark.parametrize("argv", [["-h"], ["--help"], ["--col"], ["--colo"]])
def test_main_ignores_help_and_abbreviations(
    argv: list, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("2 1\n1 1\n"))
    assert solve_cli.main(argv) == 0
    out = capsys.readouterr().out
    assert "\x1b[32m" not in out
    assert out == "+---+---+\n|001#001|\n+---+---+\n# of solutions: 1\n"


@pytest.mark.parametrize("argv", [["--color=1"], ["--color=0"], ["--color="]])
def test_main_accepts_color_with_value(
    argv: list, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("2 1\n1 1\n"))
    assert solve_cli.main(argv) == 0
    out = capsys.readouterr().out
    assert "\x1b[32m" in out
    assert out.endswith("# of solutions: 1\n")
