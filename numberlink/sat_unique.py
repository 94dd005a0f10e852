"""PySAT を使った解の存在・一意性チェックモジュール

数え上げソルバーとは独立した方法で解を求め、結果の照合に使う。
"""

from __future__ import annotations

from typing import Dict, List, Optional, Set, Tuple

from pysat.formula import CNF, IDPool

# EncType は PySAT で定義されている列挙型で、
# エンコーディング方式を数値で表現します
from pysat.card import CardEnc, EncType
from pysat.solvers import Minisat22

try:
    from .constants import BLANK
    from .puzzle_types import Grid, Witness
except ImportError:  # pragma: no cover
    from constants import BLANK
    from puzzle_types import Grid, Witness

Cell = Tuple[int, int]
Edge = Tuple[Cell, Cell]


def _grid_edges(grid: Grid) -> List[Edge]:
    """隣接するマスの組をすべて列挙する"""
    edges: List[Edge] = []
    for y in range(grid.height):
        for x in range(grid.width):
            if x + 1 < grid.width:
                edges.append(((x, y), (x + 1, y)))
            if y + 1 < grid.height:
                edges.append(((x, y), (x, y + 1)))
    return edges


def _build_cnf(
    grid: Grid, pool: IDPool, edges: List[Edge]
) -> Optional[Tuple[CNF, Dict[Edge, int]]]:
    """盤面の制約を CNF にする。明らかに解がない場合は ``None``"""

    labels = grid.labels()
    if not labels:
        # 空白マスだけでは端点がないので線を引けない
        return None

    edge_vars = {e: pool.id(f"e_{e[0][0]}_{e[0][1]}_{e[1][0]}_{e[1][1]}") for e in edges}
    color = {
        (x, y, k): pool.id(f"c_{x}_{y}_{k}")
        for y in range(grid.height)
        for x in range(grid.width)
        for k in labels
    }
    incident: Dict[Cell, List[int]] = {
        (x, y): [] for y in range(grid.height) for x in range(grid.width)
    }
    for (a, b), var in edge_vars.items():
        incident[a].append(var)
        incident[b].append(var)

    cnf = CNF()
    for y in range(grid.height):
        for x in range(grid.width):
            value = grid.label(x, y)
            # 各マスの色 (どの数字の線に属するか) はちょうど 1 つ
            cnf.extend(
                CardEnc.equals(
                    [color[(x, y, k)] for k in labels],
                    1,
                    vpool=pool,
                    encoding=EncType.seqcounter,
                ).clauses
            )
            if value != BLANK:
                cnf.append([color[(x, y, value)]])

            # 数字マスは次数 1、空白マスは次数 2
            degree = 1 if value != BLANK else 2
            lits = incident[(x, y)]
            if len(lits) < degree:
                return None
            cnf.extend(
                CardEnc.equals(
                    lits, degree, vpool=pool, encoding=EncType.seqcounter
                ).clauses
            )

    # 線でつながったマスは同じ色
    for (a, b), var in edge_vars.items():
        for k in labels:
            cnf.append([-var, -color[(*a, k)], color[(*b, k)]])
            cnf.append([-var, -color[(*b, k)], color[(*a, k)]])
    return cnf, edge_vars


def _find_cycles(grid: Grid, chosen: List[Edge]) -> List[List[Edge]]:
    """数字マスを含まない連結成分 (空白マスだけのループ) を返す"""

    adjacency: Dict[Cell, List[Edge]] = {}
    for e in chosen:
        adjacency.setdefault(e[0], []).append(e)
        adjacency.setdefault(e[1], []).append(e)

    cycles: List[List[Edge]] = []
    seen: Set[Cell] = set()
    for cell in adjacency:
        if cell in seen:
            continue
        stack = [cell]
        seen.add(cell)
        members: List[Cell] = []
        component_edges: Set[Edge] = set()
        while stack:
            cur = stack.pop()
            members.append(cur)
            for e in adjacency[cur]:
                component_edges.add(e)
                nxt = e[1] if e[0] == cur else e[0]
                if nxt not in seen:
                    seen.add(nxt)
                    stack.append(nxt)
        if all(grid.label(x, y) == BLANK for x, y in members):
            cycles.append(sorted(component_edges))
    return cycles


def _next_solution(
    solver: Minisat22, grid: Grid, edge_vars: Dict[Edge, int]
) -> Optional[List[Edge]]:
    """ループを含まない解が見つかるまでモデルを探す"""

    while solver.solve():
        model = set(lit for lit in solver.get_model() if lit > 0)
        chosen = [e for e, var in edge_vars.items() if var in model]
        cycles = _find_cycles(grid, chosen)
        if not cycles:
            return chosen
        # 見つかったループを禁止して再度解く
        for cycle in cycles:
            solver.add_clause([-edge_vars[e] for e in cycle])
    return None


def _to_witness(grid: Grid, chosen: List[Edge]) -> Witness:
    witness = Witness.empty(grid)
    for (ax, ay), (bx, by) in chosen:
        if ay == by:
            witness.horizontal[ay][min(ax, bx)] = True
        else:
            witness.vertical[min(ay, by)][ax] = True
    return witness


def find_solution(grid: Grid) -> Optional[Witness]:
    """解を 1 つ求める。解がなければ ``None`` を返す"""

    pool = IDPool()
    edges = _grid_edges(grid)
    built = _build_cnf(grid, pool, edges)
    if built is None:
        return None
    cnf, edge_vars = built
    with Minisat22(bootstrap_with=cnf.clauses) as solver:
        chosen = _next_solution(solver, grid, edge_vars)
    if chosen is None:
        return None
    return _to_witness(grid, chosen)


def is_unique(grid: Grid) -> bool:
    """与えられた盤面の解がちょうど 1 つか確認する"""

    pool = IDPool()
    edges = _grid_edges(grid)
    built = _build_cnf(grid, pool, edges)
    if built is None:
        return False
    cnf, edge_vars = built
    with Minisat22(bootstrap_with=cnf.clauses) as solver:
        first = _next_solution(solver, grid, edge_vars)
        if first is None:
            return False
        # 辺の選び方が同じ解を禁止する (色は辺から一意に決まる)
        chosen = set(first)
        solver.add_clause(
            [-var if e in chosen else var for e, var in edge_vars.items()]
        )
        unique = _next_solution(solver, grid, edge_vars) is None
    return unique


__all__ = ["find_solution", "is_unique"]
