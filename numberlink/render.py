"""解を ASCII アートで描画するモジュール"""

from __future__ import annotations

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from numberlink.constants import ANSI_GREEN, ANSI_RESET
    from numberlink.puzzle_types import Witness
else:
    try:
        # パッケージとして実行された場合の相対インポート
        from .constants import ANSI_GREEN, ANSI_RESET
        from .puzzle_types import Witness
    except ImportError:  # pragma: no cover - スクリプト実行時のフォールバック
        from constants import ANSI_GREEN, ANSI_RESET
        from puzzle_types import Witness


def _frame(text: str, color: bool) -> str:
    """外枠の記号を必要に応じて緑色で囲む"""
    return f"{ANSI_GREEN}{text}{ANSI_RESET}" if color else text


def witness_to_ascii(witness: Witness, *, color: bool = False) -> str:
    """解を ``+`` と ``|`` で囲んだテキスト盤面へ変換する

    線は ``#`` で描く。数字マスは 3 桁のゼロ埋めで表示する。

    :param color: True なら外枠に ANSI カラーを付ける
    """

    grid = witness.grid
    width, height = grid.width, grid.height
    lines: List[str] = []
    for y in range(height + 1):
        # 偶数行: マスの境界。上下のマスがつながっていれば中央に線を描く
        line = ""
        for x in range(width):
            line += _frame("+", color)
            if y % height == 0:
                line += _frame("---", color)
            else:
                line += " # " if witness.linked_up(x, y) else "   "
        line += _frame("+", color)
        lines.append(line)
        if y >= height:
            break

        # 奇数行: マスの中身と左右の接続
        line = ""
        for x in range(width):
            if x == 0:
                line += _frame("|", color)
            else:
                line += "#" if witness.linked_left(x, y) else " "
            value = grid.label(x, y)
            if value:
                line += f"{value:03d}"
            else:
                line += "#" if witness.linked_left(x, y) else " "
                line += "#" if witness.degree(x, y) else " "
                line += "#" if x + 1 < width and witness.linked_left(x + 1, y) else " "
        line += _frame("|", color)
        lines.append(line)

    return "\n".join(lines)


__all__ = ["witness_to_ascii"]
