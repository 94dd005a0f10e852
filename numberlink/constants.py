"""共通定数をまとめたモジュール"""

from __future__ import annotations

# 空白マスを表す数字
BLANK = 0

# メイト配列で「線が 2 本つながった」状態を表す内部コード
CLOSED_CODE = -1

# フロンティアのハッシュに使う XorShift の初期状態 (4 ワード)
XORSHIFT_SEED = (123456789, 362436069, 521288629, 88675123)

# 解の個数がこの値以上なら指数表記で出力する
# double の仮数部で正確に表せる範囲を超えたときに桁を偽らないため
SCIENTIFIC_THRESHOLD = 1e13

# 解の描画に使う ANSI エスケープシーケンス
ANSI_GREEN = "\x1b[32m"
ANSI_RESET = "\x1b[0m"


__all__ = [
    "BLANK",
    "CLOSED_CODE",
    "XORSHIFT_SEED",
    "SCIENTIFIC_THRESHOLD",
    "ANSI_GREEN",
    "ANSI_RESET",
]
