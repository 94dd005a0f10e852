from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))
import numberlink  # noqa: E402
from numberlink import bench  # noqa: E402
from numberlink.puzzle_types import Grid  # noqa: E402


def test_bench_run_reports_average(capsys: pytest.CaptureFixture[str]) -> None:
    grid = Grid.from_rows([[1, 0, 0, 2], [0, 3, 1, 0], [3, 2, 0, 0]])
    avg = bench.run(grid, 2)
    assert avg >= 0.0
    assert "平均求解時間" in capsys.readouterr().out


def test_package_exports_are_lazy() -> None:
    assert numberlink.count_solutions(Grid.from_rows([[1, 1]])) == 1
    assert callable(numberlink.witness_to_ascii)
    with pytest.raises(AttributeError):
        getattr(numberlink, "no_such_name")
