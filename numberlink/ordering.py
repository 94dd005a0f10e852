"""マスを訪問する順序 (斜め走査) を計算するモジュール

左上のマスから始め、右上から左下へ向かう斜めの列を順にたどる。
4x4 の盤面では次の順番になる。

    00 01 03 06
    02 04 07 10
    05 08 11 13
    09 12 14 15

この順序で埋めていくと、訪問済みと未訪問の境界 (フロンティア) の幅が
盤面の短辺程度に収まり、フロンティアの状態でのメモ化が効きやすくなる。
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class CellOrder:
    """座標と訪問順序 (ポジション) の対応表を保持するデータクラス

    ``keys[y, x]`` が座標からポジション、``cell_x`` と ``cell_y`` がその逆写像。
    ``start[p]`` はポジション ``p`` に来た時点でまだ状態が変わりうる
    最も古いポジションで、``start[size] == size`` を番兵として持つ。
    """

    width: int
    height: int
    keys: np.ndarray
    cell_x: np.ndarray
    cell_y: np.ndarray
    start: np.ndarray

    @staticmethod
    def for_size(width: int, height: int) -> "CellOrder":
        """盤面サイズごとに 1 度だけ表を作成して使い回す"""
        return _build_order(width, height)

    @property
    def size(self) -> int:
        return self.width * self.height

    def key(self, x: int, y: int) -> int:
        return int(self.keys[y, x])

    def coord(self, pos: int) -> Tuple[int, int]:
        return int(self.cell_x[pos]), int(self.cell_y[pos])

    def up(self, pos: int) -> Optional[int]:
        """上のマスのポジション。最上段なら ``None``"""
        x, y = self.coord(pos)
        return self.key(x, y - 1) if y > 0 else None

    def left(self, pos: int) -> Optional[int]:
        """左のマスのポジション。左端なら ``None``"""
        x, y = self.coord(pos)
        return self.key(x - 1, y) if x > 0 else None

    def settle(self, pos: int) -> int:
        """``pos`` 未満でこの値より前のポジションは状態が確定している"""
        return int(self.start[pos])


@lru_cache(maxsize=None)
def _build_order(width: int, height: int) -> CellOrder:
    size = width * height
    keys = np.zeros((height, width), dtype=np.int32)
    cell_x = np.zeros(size, dtype=np.int32)
    cell_y = np.zeros(size, dtype=np.int32)

    # 斜めの列 d = x + y ごとに x の大きい方から走査し、盤面外は飛ばす
    pos = 0
    for d in range(width + height - 1):
        for x in range(min(d, width - 1), max(0, d - height + 1) - 1, -1):
            y = d - x
            keys[y, x] = pos
            cell_x[pos] = x
            cell_y[pos] = y
            pos += 1

    # 上のマス、なければ左のマスより前は確定済みとみなせる
    start = np.zeros(size + 1, dtype=np.int32)
    for p in range(size):
        x, y = int(cell_x[p]), int(cell_y[p])
        if y > 0:
            start[p] = keys[y - 1, x]
        elif x > 0:
            start[p] = keys[y, x - 1]
        else:
            start[p] = 0
    # 番兵
    start[size] = size

    # 表は共有されるため書き換えを禁止しておく
    for arr in (keys, cell_x, cell_y, start):
        arr.setflags(write=False)
    return CellOrder(width, height, keys, cell_x, cell_y, start)


__all__ = ["CellOrder"]
