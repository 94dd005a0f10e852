"""解の証拠がナンバーリンクのルールを満たすか確認するモジュール"""

from __future__ import annotations

from typing import List, Set, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from numberlink.constants import BLANK
    from numberlink.puzzle_types import Grid, Witness
else:
    try:
        # パッケージとして実行された場合の相対インポート
        from .constants import BLANK
        from .puzzle_types import Grid, Witness
    except ImportError:  # pragma: no cover - スクリプト実行時のフォールバック
        # スクリプトとして直接実行されたときは同じディレクトリからインポートする
        from constants import BLANK
        from puzzle_types import Grid, Witness


def _collect_path(
    witness: Witness, start: Tuple[int, int], visited: Set[Tuple[int, int]]
) -> List[Tuple[int, int]]:
    """``start`` から線をたどり、連結しているマスをすべて集める"""

    component = []
    stack = [start]
    visited.add(start)
    while stack:
        cell = stack.pop()
        component.append(cell)
        for nxt in witness.neighbors(*cell):
            if nxt not in visited:
                visited.add(nxt)
                stack.append(nxt)
    return component


def validate_witness(grid: Grid, witness: Witness) -> None:
    """解がルールを満たすか確認し、満たさなければ ``ValueError`` を送出する"""

    if witness.grid != grid:
        raise ValueError("解の盤面が指定された盤面と一致しません")
    if len(witness.horizontal) != grid.height or len(witness.vertical) != max(
        grid.height - 1, 0
    ):
        raise ValueError("辺情報の行数が盤面サイズと一致しません")
    for row in witness.horizontal:
        if len(row) != max(grid.width - 1, 0):
            raise ValueError("horizontal 配列の列数が不正です")
    for row in witness.vertical:
        if len(row) != grid.width:
            raise ValueError("vertical 配列の列数が不正です")

    for y in range(grid.height):
        for x in range(grid.width):
            degree = witness.degree(x, y)
            if degree > 2:
                raise ValueError(f"マス ({x}, {y}) で線が分岐しています")
            if grid.label(x, y) != BLANK:
                if degree != 1:
                    raise ValueError(f"数字マス ({x}, {y}) が線の端点になっていません")
            elif degree != 2:
                raise ValueError(f"空白マス ({x}, {y}) を線が通過していません")

    # 連結成分ごとに、両端が同じ数字の 1 本の線になっているか調べる
    visited: Set[Tuple[int, int]] = set()
    for y in range(grid.height):
        for x in range(grid.width):
            if (x, y) in visited:
                continue
            component = _collect_path(witness, (x, y), visited)
            ends = [grid.label(cx, cy) for cx, cy in component if grid.label(cx, cy)]
            if not ends:
                raise ValueError(f"マス ({x}, {y}) を含む線がループしています")
            if len(ends) != 2 or ends[0] != ends[1]:
                raise ValueError(f"マス ({x}, {y}) を含む線が異なる数字を結んでいます")


__all__ = ["validate_witness"]
