from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))
from numberlink.ordering import CellOrder  # noqa: E402


def _neighbors(order: CellOrder, x: int, y: int) -> list[int]:
    result = []
    for nx, ny in ((x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)):
        if 0 <= nx < order.width and 0 <= ny < order.height:
            result.append(order.key(nx, ny))
    return result


def test_square_order_matches_diagonal_table() -> None:
    order = CellOrder.for_size(4, 4)
    expected = [
        [0, 1, 3, 6],
        [2, 4, 7, 10],
        [5, 8, 11, 13],
        [9, 12, 14, 15],
    ]
    assert [[order.key(x, y) for x in range(4)] for y in range(4)] == expected


def test_wide_grid_skips_outside_cells() -> None:
    order = CellOrder.for_size(4, 3)
    coords = [order.coord(p) for p in range(order.size)]
    assert coords == [
        (0, 0),
        (1, 0),
        (0, 1),
        (2, 0),
        (1, 1),
        (0, 2),
        (3, 0),
        (2, 1),
        (1, 2),
        (3, 1),
        (2, 2),
        (3, 2),
    ]


@pytest.mark.parametrize("width,height", [(1, 1), (1, 5), (5, 1), (3, 5), (5, 3), (6, 6)])
def test_order_is_bijection(width: int, height: int) -> None:
    order = CellOrder.for_size(width, height)
    seen = set()
    for y in range(height):
        for x in range(width):
            pos = order.key(x, y)
            assert order.coord(pos) == (x, y)
            seen.add(pos)
    assert seen == set(range(width * height))


def test_settle_boundary_values() -> None:
    order = CellOrder.for_size(4, 4)
    starts = [order.settle(p) for p in range(order.size + 1)]
    assert starts == [0, 0, 0, 1, 1, 2, 3, 3, 4, 5, 6, 7, 8, 10, 11, 13, 16]


@pytest.mark.parametrize("width,height", [(1, 4), (4, 1), (3, 5), (5, 3), (4, 4), (7, 2)])
def test_settled_cells_have_no_unvisited_neighbors(width: int, height: int) -> None:
    order = CellOrder.for_size(width, height)
    for p in range(order.size):
        # 非減少であること
        assert order.settle(p) <= order.settle(p + 1)
        for cell in range(order.settle(p)):
            x, y = order.coord(cell)
            assert all(n <= p for n in _neighbors(order, x, y))


@pytest.mark.parametrize("width,height", [(3, 8), (8, 3), (6, 6), (2, 9)])
def test_frontier_width_bounded_by_short_side(width: int, height: int) -> None:
    order = CellOrder.for_size(width, height)
    widest = max(p - order.settle(p) for p in range(order.size))
    assert widest <= min(width, height) + 1


def test_up_and_left_neighbors() -> None:
    order = CellOrder.for_size(3, 3)
    center = order.key(1, 1)
    assert order.up(center) == order.key(1, 0)
    assert order.left(center) == order.key(0, 1)
    assert order.up(order.key(2, 0)) is None
    assert order.left(order.key(0, 2)) is None


def test_order_is_cached_per_size() -> None:
    assert CellOrder.for_size(5, 4) is CellOrder.for_size(5, 4)
