"""フロンティアのメイト状態と取り消し履歴を管理するモジュール

訪問済みのマスごとに「どのマスと線の両端で対になっているか」を
メイトとして記録する。線を 1 本つなぐたびに変更前の値を履歴へ積み、
探索から戻るときは履歴を巻き戻して元の状態を復元する。
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Sequence, Tuple

import numpy as np
from numba import njit

try:
    from .constants import BLANK, CLOSED_CODE, XORSHIFT_SEED
    from .puzzle_types import CLOSED, ENDPOINT, Mate, paired
except ImportError:  # pragma: no cover - スクリプト実行時のフォールバック
    from constants import BLANK, CLOSED_CODE, XORSHIFT_SEED
    from puzzle_types import CLOSED, ENDPOINT, Mate, paired

_SEED_X, _SEED_Y, _SEED_Z, _SEED_W = XORSHIFT_SEED
_MASK32 = 0xFFFFFFFF


@njit(cache=True)
def _xorshift_words(codes: np.ndarray) -> tuple[int, int, int, int]:
    """XorShift の状態にメイト値を 1 つずつ混ぜ込み 4 ワードを返す"""

    x = _SEED_X
    y = _SEED_Y
    z = _SEED_Z
    w = _SEED_W
    for i in range(codes.shape[0]):
        t = (x ^ (x << 11)) & _MASK32
        x = y
        y = z
        z = w
        # 負のコードは 32bit 符号なし整数として扱う
        w = ((w ^ (w >> 19)) ^ ((t ^ (t >> 8)) + (codes[i] & _MASK32))) & _MASK32
    return x, y, z, w


def frontier_hash(codes: np.ndarray) -> Tuple[int, int]:
    """メイト値の列から 128bit のハッシュ (64bit x 2) を計算する

    暗号学的ハッシュではないため衝突の可能性はゼロではない。
    """

    x, y, z, w = _xorshift_words(codes)
    return (x << 32) | y, (z << 32) | w


class FrontierState:
    """メイト配列と変更履歴をまとめたクラス

    内部では ``int32`` の配列に、自分自身のポジション (端点)、
    ``CLOSED_CODE`` (線が 2 本)、相手のポジション (対になった端点) を格納する。
    外部へは ``Mate`` として返す。
    """

    def __init__(self, labels: Sequence[int]) -> None:
        # labels はポジション順に並べたマスの数字
        self._labels: List[int] = [int(v) for v in labels]
        self._mates = np.arange(len(self._labels), dtype=np.int32)
        self._history: List[Tuple[int, int]] = []

    def __len__(self) -> int:
        return len(self._labels)

    def label(self, pos: int) -> int:
        return self._labels[pos]

    def mate(self, pos: int) -> Mate:
        """``pos`` のメイト状態を返す"""
        code = int(self._mates[pos])
        if code == CLOSED_CODE:
            return CLOSED
        if code == pos:
            return ENDPOINT
        return paired(code)

    def codes(self, start: int, stop: int) -> np.ndarray:
        """ハッシュ計算用にメイト配列の区間をそのまま返す"""
        return self._mates[start:stop]

    def snapshot(self) -> Tuple[int, ...]:
        return tuple(int(v) for v in self._mates)

    def mark(self) -> int:
        """現在の履歴の深さ"""
        return len(self._history)

    def _change(self, pos: int, value: int) -> None:
        """メイトを書き換え、変更前の値を履歴に積む"""
        last = int(self._mates[pos])
        if last != value:
            self._history.append((pos, last))
            self._mates[pos] = value

    def revert(self, mark: int) -> None:
        """履歴を ``mark`` の深さまで巻き戻す"""
        history = self._history
        mates = self._mates
        while len(history) > mark:
            pos, value = history.pop()
            mates[pos] = value

    @contextmanager
    def checkpoint(self) -> Iterator[int]:
        """ブロックを抜けるときに必ずその時点の状態へ戻す"""
        mark = len(self._history)
        try:
            yield mark
        finally:
            self.revert(mark)

    def unite(self, a: int, b: int) -> bool:
        """マス ``a`` と ``b`` を線でつなぐ

        つなげない場合は ``False`` を返す。失敗時も変更は履歴に残るため、
        呼び出し側で ``revert`` (または ``checkpoint``) により戻すこと。
        """

        mates = self._mates
        end_a = int(mates[a])
        end_b = int(mates[b])
        # すでに線が 2 本あるマスは分岐になるためつなげない
        if end_a == CLOSED_CODE or end_b == CLOSED_CODE:
            return False
        # 同じ線の両端同士をつなぐとループになる
        if a == end_b and b == end_a:
            return False

        self._change(a, CLOSED_CODE)
        self._change(b, CLOSED_CODE)
        self._change(end_a, end_b)
        self._change(end_b, end_a)

        labels = self._labels
        # 数字マスは線の端点でなければならない
        if mates[a] == CLOSED_CODE and labels[a] != BLANK:
            return False
        if mates[b] == CLOSED_CODE and labels[b] != BLANK:
            return False
        # 異なる数字同士はつなげない
        if (
            labels[end_a] != BLANK
            and labels[end_b] != BLANK
            and labels[end_a] != labels[end_b]
        ):
            return False
        return True


__all__ = ["FrontierState", "frontier_hash"]
