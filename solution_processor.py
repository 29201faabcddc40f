"""Turns the solved assignment back into an ordering."""
from typing import Dict, List, Sequence

import seam_utils.logging as logging
from data_structures import DEPOT, Edge, as_value_matrix
from exceptions import SolverError
from subtour_callback import successors

logger = logging.getLogger(__name__)


def reconstruct_path(values: Dict[Edge, float], n_nodes: int) -> List[int]:
    """
    Walk the chosen edges from the depot back to the depot.
    Returns the real nodes in visiting order (depot excluded); the result is
    a permutation of 1..n_nodes-1 or SolverError is raised.
    """
    succ = successors(values)
    path: List[int] = []
    node = DEPOT
    for _ in range(n_nodes):
        if node not in succ:
            raise SolverError(f"Node {node} has no chosen outgoing edge")
        node = succ[node]
        if node == DEPOT:
            break
        path.append(node)
    else:
        raise SolverError("Chosen edges do not return to the depot")

    if sorted(path) != list(range(1, n_nodes)):
        raise SolverError(f"Solution is not a single tour over all nodes: {path}")
    return path


def tour_cost(cost, order: Sequence[int]) -> int:
    """Cost of depot -> order[0] -> ... -> order[-1] -> depot."""
    values = as_value_matrix(cost)
    stops = [DEPOT] + list(order) + [DEPOT]
    return int(sum(values[a, b] for a, b in zip(stops, stops[1:])))
