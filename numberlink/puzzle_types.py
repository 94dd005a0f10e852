"""盤面・メイト状態・解の証拠を表す型をまとめたモジュール

Python 標準ライブラリの ``types`` モジュールと名前が衝突しないよう、
このファイル名を ``puzzle_types`` としている。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Grid:
    """ナンバーリンクの盤面を表すデータクラス

    ``cells[y][x]`` が 0 なら空白マス、正の値なら端点の数字を表す。
    """

    width: int
    height: int
    cells: Tuple[Tuple[int, ...], ...]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        """二次元リストから盤面を作成する"""

        height = len(rows)
        width = len(rows[0]) if height > 0 else 0
        for row in rows:
            if len(row) != width:
                raise ValueError("盤面の各行の長さが揃っていません")
            for value in row:
                if value < 0:
                    raise ValueError("マスの数字に負の値は使えません")
        return cls(width, height, tuple(tuple(int(v) for v in row) for row in rows))

    @property
    def size(self) -> int:
        return self.width * self.height

    def label(self, x: int, y: int) -> int:
        return self.cells[y][x]

    def labels(self) -> List[int]:
        """盤面に現れる数字を重複なしで昇順に返す"""
        return sorted({v for row in self.cells for v in row if v > 0})

    def with_label(self, x: int, y: int, value: int) -> "Grid":
        """1 マスだけ数字を書き換えた新しい盤面を返す"""
        rows = [list(row) for row in self.cells]
        rows[y][x] = value
        return Grid.from_rows(rows)


class MateKind(Enum):
    """各マスのメイト状態の種類"""

    # まだ相手のいない端点 (自分自身がメイト)
    ENDPOINT = "endpoint"
    # 線が 2 本つながり、これ以上接続できない
    CLOSED = "closed"
    # 途中まで引いた線の端点で、反対側の端点と対になっている
    PAIRED = "paired"


@dataclass(frozen=True)
class Mate:
    """1 マス分のメイト状態

    ``partner`` は ``kind`` が ``PAIRED`` のときだけ意味を持つ。
    """

    kind: MateKind
    partner: Optional[int] = None


ENDPOINT = Mate(MateKind.ENDPOINT)
CLOSED = Mate(MateKind.CLOSED)


def paired(partner: int) -> Mate:
    return Mate(MateKind.PAIRED, partner)


@dataclass
class Witness:
    """見つかった解の 1 つを辺の集合として保持するデータクラス

    ``horizontal[y][x]`` はマス ``(x, y)`` と ``(x + 1, y)`` の接続、
    ``vertical[y][x]`` はマス ``(x, y)`` と ``(x, y + 1)`` の接続を表す。
    """

    grid: Grid
    horizontal: List[List[bool]]
    vertical: List[List[bool]]

    @classmethod
    def empty(cls, grid: Grid) -> "Witness":
        horizontal = [[False] * max(grid.width - 1, 0) for _ in range(grid.height)]
        vertical = [[False] * grid.width for _ in range(max(grid.height - 1, 0))]
        return cls(grid, horizontal, vertical)

    def linked_left(self, x: int, y: int) -> bool:
        return x > 0 and self.horizontal[y][x - 1]

    def linked_up(self, x: int, y: int) -> bool:
        return y > 0 and self.vertical[y - 1][x]

    def neighbors(self, x: int, y: int) -> Iterator[Tuple[int, int]]:
        """``(x, y)`` と線でつながっているマスを列挙する"""
        if self.linked_left(x, y):
            yield x - 1, y
        if x + 1 < self.grid.width and self.horizontal[y][x]:
            yield x + 1, y
        if self.linked_up(x, y):
            yield x, y - 1
        if y + 1 < self.grid.height and self.vertical[y][x]:
            yield x, y + 1

    def degree(self, x: int, y: int) -> int:
        return sum(1 for _ in self.neighbors(x, y))


__all__ = [
    "Grid",
    "MateKind",
    "Mate",
    "ENDPOINT",
    "CLOSED",
    "paired",
    "Witness",
]
