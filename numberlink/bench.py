import time

from .puzzle_types import Grid
from .solver import NumberLinkSolver


def run(grid: Grid, n: int = 1, *, exact_keys: bool = False) -> float:
    """指定回数盤面を解いて平均時間を返す簡易ベンチマーク関数"""
    total = 0.0
    entries = 0
    for _ in range(n):
        solver = NumberLinkSolver(grid, exact_keys=exact_keys)
        start = time.perf_counter()
        solver.count()
        total += time.perf_counter() - start
        entries = solver.stats()["memo_entries"]
    avg = total / n if n else 0.0
    print(f"平均求解時間: {avg:.3f} 秒 (メモ表 {entries} 件)")
    return avg


if __name__ == "__main__":
    import argparse
    import sys

    from .puzzle_io import read_puzzles

    parser = argparse.ArgumentParser(description="ナンバーリンク求解ベンチマーク")
    parser.add_argument("-n", type=int, default=1, help="求解回数")
    parser.add_argument(
        "--exact-keys", action="store_true", help="メモ表のキーにハッシュを使わない"
    )
    args = parser.parse_args()
    for puzzle in read_puzzles(sys.stdin):
        run(puzzle, args.n, exact_keys=args.exact_keys)
