"""標準入力の盤面を順に解いて解の個数を表示するスクリプト"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from numberlink.puzzle_io import format_count, read_puzzles
    from numberlink.render import witness_to_ascii
    from numberlink.solver import NumberLinkSolver
else:
    try:
        # パッケージ実行時は相対インポート
        from .puzzle_io import format_count, read_puzzles
        from .render import witness_to_ascii
        from .solver import NumberLinkSolver
    except ImportError:  # pragma: no cover - スクリプト実行時のフォールバック
        # スクリプトとして直接実行されたときは同じディレクトリからインポートする
        from puzzle_io import format_count, read_puzzles
        from render import witness_to_ascii
        from solver import NumberLinkSolver

logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.INFO) -> None:
    """ログ出力の設定を行う関数

    ``basicConfig`` でフォーマットと出力レベルをまとめて設定します。
    ログは標準エラーへ出るため、標準出力には描画と解の個数だけが残ります。

    :param level: 表示するログの重要度。``logging.INFO`` などを指定
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    """引数を解釈し、入力された盤面をすべて解く"""

    if argv is None:
        argv = sys.argv[1:]
    # --color=値 の形式も値によらず --color として扱う
    argv = ["--color" if arg.startswith("--color=") else arg for arg in argv]

    # -h や --col のような省略形は解釈せず、未知の引数として読み飛ばす
    parser = argparse.ArgumentParser(
        description="ナンバーリンクの解の個数を数え、解の 1 つを表示します",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        "--color",
        action="store_true",
        help="解の描画に ANSI カラーを使う",
    )
    # 知らない引数はそのまま無視する
    args, rest = parser.parse_known_args(argv)
    if rest:
        logger.debug("未使用の引数: %s", rest)

    solved = 0
    for grid in read_puzzles(sys.stdin):
        solver = NumberLinkSolver(grid)
        solution_count = solver.count()
        # 解が見つかった場合は、個数の前に解の 1 つを描画する
        if solver.witness is not None:
            print(witness_to_ascii(solver.witness, color=args.color))
        print(f"# of solutions: {format_count(solution_count)}")
        sys.stdout.flush()
        solved += 1

    logger.info("%d 個の盤面を処理しました", solved)
    return 0


def cli() -> None:
    """コンソールスクリプト用の入口"""
    # ログ設定を行ってからメイン処理を呼び出す
    setup_logging()
    sys.exit(main())


if __name__ == "__main__":
    cli()
