# ナンバーリンク用の解数え上げソルバーモジュール
#
# 斜め順にマスを 1 つずつ訪問し、上と左の訪問済みマスへ線をつなぐかどうかを
# 全通り試す。フロンティアのメイト状態が同じ部分問題は解の個数も同じなので、
# ポジションごとのメモ表に結果を記録して再利用する (ZDD と同じ状態の集約)。

from __future__ import annotations

import logging
import sys
import time
from typing import Dict, Hashable, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from numberlink.constants import BLANK
    from numberlink.frontier import FrontierState, frontier_hash
    from numberlink.ordering import CellOrder
    from numberlink.puzzle_types import Grid, MateKind, Witness
    from numberlink.validator import validate_witness
else:
    try:
        # パッケージ実行時は相対インポート
        from .constants import BLANK
        from .frontier import FrontierState, frontier_hash
        from .ordering import CellOrder
        from .puzzle_types import Grid, MateKind, Witness
        from .validator import validate_witness
    except ImportError:  # pragma: no cover - スクリプト実行時のフォールバック
        # スクリプトとして直接実行されたときは同じディレクトリからインポートする
        from constants import BLANK
        from frontier import FrontierState, frontier_hash
        from ordering import CellOrder
        from puzzle_types import Grid, MateKind, Witness
        from validator import validate_witness

logger = logging.getLogger(__name__)


class NumberLinkSolver:
    """1 つの盤面について解の個数を数えるクラス

    :param grid: 解く盤面
    :param exact_keys: True ならメモ表のキーにハッシュではなく
        メイト値の列そのものを使う。メモリは増えるが衝突が起きない
    """

    def __init__(self, grid: Grid, *, exact_keys: bool = False) -> None:
        self.grid = grid
        self.exact_keys = exact_keys
        self.order = CellOrder.for_size(grid.width, grid.height)
        size = self.order.size
        labels = [grid.label(*self.order.coord(pos)) for pos in range(size)]
        self.frontier = FrontierState(labels)
        # 上と左の隣接マスは何度も参照するので先に引いておく
        self._up = [self.order.up(pos) for pos in range(size)]
        self._left = [self.order.left(pos) for pos in range(size)]
        self._start = [self.order.settle(pos) for pos in range(size + 1)]
        # 描画用に、現在有効な左・上への接続を記録する
        self._link_left = [False] * size
        self._link_up = [False] * size
        self._memo: List[Dict[Hashable, float]] = [{} for _ in range(size)]
        self.witness: Optional[Witness] = None
        self.steps = 0
        self.memo_hits = 0
        self.max_frontier = 0

    @property
    def size(self) -> int:
        return self.order.size

    def clear_memo(self) -> None:
        """全ポジションのメモ表を空にする"""
        for table in self._memo:
            table.clear()

    def stats(self) -> Dict[str, int]:
        """探索統計を辞書で返す"""
        return {
            "steps": self.steps,
            "memo_hits": self.memo_hits,
            "memo_entries": sum(len(table) for table in self._memo),
            "max_frontier": self.max_frontier,
        }

    def count(self) -> float:
        """解の個数を数える

        最初に見つかった解は ``witness`` に保存される。
        """

        self.clear_memo()
        self.witness = None
        self.steps = 0
        self.memo_hits = 0
        self.max_frontier = 0

        if self.size == 0:
            # マスのない盤面には線を引く端点もない
            logger.warning("空の盤面が指定されました")
            return 0.0

        # 再帰の深さは高々マス数の 2 倍程度なので上限を引き上げておく
        needed = 2 * self.size + 200
        if sys.getrecursionlimit() < needed:
            sys.setrecursionlimit(needed)

        start = time.perf_counter()
        logger.info(
            "解の数え上げ開始: %dx%d", self.grid.width, self.grid.height
        )
        total = self.solve(0)
        logger.info(
            "解の数え上げ終了: %.0f 通り %.3f 秒", total, time.perf_counter() - start
        )
        logger.debug("探索統計: %s", self.stats())

        if self.witness is not None:
            # 見つけた解が条件を満たしているか念のため確認する
            validate_witness(self.grid, self.witness)
        return total

    def _settled_ok(self, pos: int) -> bool:
        """直前に確定したマスのメイト状態が矛盾していないか調べる"""
        frontier = self.frontier
        for hidden in range(self._start[pos - 1], self._start[pos]):
            kind = frontier.mate(hidden).kind
            if frontier.label(hidden) == BLANK:
                # 空白マスは必ずどれかの線の途中になっていなければならない
                if kind is not MateKind.CLOSED:
                    return False
            elif kind is MateKind.ENDPOINT:
                # 数字マスから線が 1 本も出ていない
                return False
        return True

    def _memo_key(self, pos: int) -> Hashable:
        codes = self.frontier.codes(self._start[pos], pos)
        if len(codes) > self.max_frontier:
            self.max_frontier = len(codes)
        if self.exact_keys:
            return tuple(codes.tolist())
        return frontier_hash(codes)

    def solve(self, pos: int = 0) -> float:
        """ポジション ``pos`` 以降の埋め方の個数を返す"""

        self.steps += 1
        if pos > 0 and not self._settled_ok(pos):
            return 0.0

        # すべてのマスを埋め終えた
        if pos == self.size:
            if self.witness is None:
                self.witness = self._capture_witness()
            return 1.0

        key = self._memo_key(pos)
        table = self._memo[pos]
        cached = table.get(key)
        if cached is not None:
            self.memo_hits += 1
            return cached
        result = self._connect(pos)
        table[key] = result
        return result

    def _connect(self, pos: int) -> float:
        """マス ``pos`` を上・左のマスとつなぐ 4 通りを試して合計する"""

        frontier = self.frontier
        up = self._up[pos]
        left = self._left[pos]

        # どこともつながない
        solution_count = self.solve(pos + 1)

        # 上のマスとつなぐ
        if up is not None:
            with frontier.checkpoint():
                if frontier.unite(pos, up):
                    self._link_up[pos] = True
                    solution_count += self.solve(pos + 1)
                    self._link_up[pos] = False

        # 左のマスとつなぐ
        if left is not None:
            with frontier.checkpoint():
                if frontier.unite(pos, left):
                    self._link_left[pos] = True
                    solution_count += self.solve(pos + 1)
                    # 左とつないだ状態のまま上ともつなぐ
                    if up is not None and frontier.unite(pos, up):
                        self._link_up[pos] = True
                        solution_count += self.solve(pos + 1)
                        self._link_up[pos] = False
                    self._link_left[pos] = False

        return solution_count

    def _capture_witness(self) -> Witness:
        """現在有効な接続を解の証拠として書き出す"""
        witness = Witness.empty(self.grid)
        for pos in range(self.size):
            x, y = self.order.coord(pos)
            if self._link_left[pos]:
                witness.horizontal[y][x - 1] = True
            if self._link_up[pos]:
                witness.vertical[y - 1][x] = True
        return witness


def count_solutions(
    grid: Grid,
    *,
    exact_keys: bool = False,
    return_stats: bool = False,
) -> float | tuple[float, Dict[str, int]]:
    """盤面の解の個数を返す

    :param exact_keys: メモ表のキーにハッシュを使わない場合は True
    :param return_stats: True なら ``(解の個数, 探索統計)`` を返す
    """

    solver = NumberLinkSolver(grid, exact_keys=exact_keys)
    total = solver.count()
    if return_stats:
        return total, solver.stats()
    return total


__all__ = ["NumberLinkSolver", "count_solutions"]
