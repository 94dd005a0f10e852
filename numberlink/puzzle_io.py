"""パズルの読み込みと解の個数の出力形式をまとめたモジュール"""

from __future__ import annotations

from typing import Iterable, Iterator, List, TextIO, TYPE_CHECKING

if TYPE_CHECKING:
    from numberlink.constants import SCIENTIFIC_THRESHOLD
    from numberlink.puzzle_types import Grid
else:
    try:
        # パッケージとして実行された場合の相対インポート
        from .constants import SCIENTIFIC_THRESHOLD
        from .puzzle_types import Grid
    except ImportError:  # pragma: no cover - スクリプト実行時のフォールバック
        # スクリプトとして直接実行されたときは同じディレクトリからインポートする
        from constants import SCIENTIFIC_THRESHOLD
        from puzzle_types import Grid


def _iter_tokens(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        yield from line.split()


def _parse_tokens(tokens: Iterator[str]) -> Iterator[Grid]:
    """トークン列から盤面を順に取り出す

    先頭に ``幅 高さ``、続いて ``高さ`` 行 x ``幅`` 個の数字が並ぶ形式を
    繰り返し読む。入力の終わりか、幅・高さに 0 が現れたところで終了する。
    改行位置は区別せず空白区切りのトークン列として扱う。
    """

    while True:
        try:
            width = int(next(tokens))
        except StopIteration:
            return
        try:
            height = int(next(tokens))
        except StopIteration:
            raise ValueError("盤面の高さが指定されていません") from None
        if width == 0 or height == 0:
            return
        rows: List[List[int]] = []
        for _ in range(height):
            row = []
            for _ in range(width):
                try:
                    row.append(int(next(tokens)))
                except StopIteration:
                    raise ValueError("盤面の途中で入力が終了しました") from None
            rows.append(row)
        yield Grid.from_rows(rows)


def parse_puzzles(text: str) -> Iterator[Grid]:
    """文字列から盤面を読み込む"""
    return _parse_tokens(iter(text.split()))


def read_puzzles(stream: TextIO) -> Iterator[Grid]:
    """ファイルや標準入力から盤面を読み込む

    1 盤面分のトークンが揃った時点で返すため、前の盤面を解いている間は
    次の盤面を読み込まない。
    """
    return _parse_tokens(_iter_tokens(stream))


def format_count(count: float) -> str:
    """解の個数を出力用の文字列に変換する

    double の精度で整数として正確に表せる範囲では整数表記、
    それを超える場合は指数表記にする。
    """

    if count < SCIENTIFIC_THRESHOLD:
        return f"{count:.0f}"
    return f"{count:.13e}"


__all__ = ["parse_puzzles", "read_puzzles", "format_count"]
