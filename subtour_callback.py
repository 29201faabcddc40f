"""
Lazy subtour elimination.

The cut logic is a pure function of a candidate assignment {(i, j): value};
SubtourCallback adapts it to Gurobi's MIPSOL callback. Solutions of the
assignment relaxation are unions of disjoint cycles. Each candidate is traced
from the depot; if that cycle misses any node, the exact set of traced edges
is forbidden with sum(x[e]) <= k - 1.
"""
from typing import Dict, List, Optional

import gurobipy as gp
from gurobipy import GRB

import seam_utils.logging as logging
from data_structures import DEPOT, Edge, SubtourCut
from exceptions import SolverError

logger = logging.getLogger(__name__)

# Binary values come back as floats; anything above this counts as a chosen edge
SELECTED = 0.5


def successors(values: Dict[Edge, float]) -> Dict[int, int]:
    """Map each node to the head of its chosen outgoing edge."""
    succ: Dict[int, int] = {}
    for (i, j), v in values.items():
        if v > SELECTED:
            if i in succ:
                raise SolverError(f"Node {i} has more than one chosen outgoing edge")
            succ[i] = j
    return succ


def trace_cycle(succ: Dict[int, int], start: int = DEPOT) -> List[Edge]:
    """Follow chosen edges from `start` until a node repeats; return the edges walked."""
    edges: List[Edge] = []
    visited = set()
    node = start
    while node not in visited:
        visited.add(node)
        if node not in succ:
            raise SolverError(f"Node {node} has no chosen outgoing edge")
        nxt = succ[node]
        edges.append((node, nxt))
        node = nxt
    return edges


def depot_subtour_cut(values: Dict[Edge, float], n_nodes: int) -> Optional[SubtourCut]:
    """
    Cut for the cycle through the depot, or None if that cycle visits all
    `n_nodes` nodes (depot included).
    """
    edges = trace_cycle(successors(values))
    if len(edges) == n_nodes:
        return None
    return SubtourCut(tuple(edges), len(edges) - 1)


def all_subtour_cuts(values: Dict[Edge, float], n_nodes: int) -> List[SubtourCut]:
    """One cut per disjoint cycle, or [] if the candidate is a single full tour."""
    succ = successors(values)
    cycles: List[List[Edge]] = []
    seen = set()
    for start in [DEPOT] + sorted(succ):
        if start in seen:
            continue
        cycle = trace_cycle(succ, start)
        seen.update(i for i, _ in cycle)
        cycles.append(cycle)
    if len(cycles) == 1 and len(cycles[0]) == n_nodes:
        return []
    return [SubtourCut(tuple(c), len(c) - 1) for c in cycles]


class SubtourCallback:
    """
    Gurobi callback object: at MIPSOL, read the candidate, derive the cut(s)
    and submit them with cbLazy. Exceptions are logged, the search is
    terminated and the error is kept on `self.error` for the caller.
    """

    def __init__(self, x: gp.tupledict, n_nodes: int, cut_all: bool = False):
        self.x = x
        self.n_nodes = n_nodes
        self.cut_all = cut_all
        self.error: Optional[BaseException] = None

    def __call__(self, model, where):
        if where == GRB.Callback.MIPSOL:
            try:
                self.eliminate_subtours(model)
            except Exception as e:
                logger.exception("Exception occurred in MIPSOL callback")
                self.error = e
                model.terminate()

    def cuts_for(self, values: Dict[Edge, float]) -> List[SubtourCut]:
        if self.cut_all:
            return all_subtour_cuts(values, self.n_nodes)
        cut = depot_subtour_cut(values, self.n_nodes)
        return [cut] if cut is not None else []

    def eliminate_subtours(self, model):
        values = model.cbGetSolution(self.x)
        for cut in self.cuts_for(values):
            logger.debug("Lazy cut: %d edges <= %d %s", len(cut.edges), cut.rhs, list(cut.edges))
            model.cbLazy(gp.quicksum(self.x[e] for e in cut.edges), GRB.LESS_EQUAL, cut.rhs)
