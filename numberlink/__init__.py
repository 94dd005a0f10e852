"""ソルバーや入出力モジュールの関数を公開するパッケージ用モジュール"""

from importlib import import_module
from typing import Any

__all__ = [
    "Grid",
    "Witness",
    "NumberLinkSolver",
    "count_solutions",
    "parse_puzzles",
    "read_puzzles",
    "format_count",
    "witness_to_ascii",
    "validate_witness",
    "find_solution",
    "is_unique",
]


def __getattr__(name: str) -> Any:
    """必要になったタイミングで対象モジュールを読み込む"""

    if name in {"Grid", "Witness"}:
        module = import_module(".puzzle_types", __name__)
        return getattr(module, name)

    if name in {"NumberLinkSolver", "count_solutions"}:
        module = import_module(".solver", __name__)
        return getattr(module, name)

    if name in {"parse_puzzles", "read_puzzles", "format_count"}:
        module = import_module(".puzzle_io", __name__)
        return getattr(module, name)

    if name == "witness_to_ascii":
        module = import_module(".render", __name__)
        return getattr(module, name)

    if name == "validate_witness":
        module = import_module(".validator", __name__)
        return getattr(module, name)

    if name in {"find_solution", "is_unique"}:
        module = import_module(".sat_unique", __name__)
        return getattr(module, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name}")
