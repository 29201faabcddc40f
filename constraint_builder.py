"""Assignment-style formulation of the ordering problem on a Gurobi model."""
from typing import Optional, Tuple

import gurobipy as gp
from gurobipy import GRB
import numpy as np

import seam_utils.logging as logging
from config import SOLVER, SolverConfig
from data_structures import DEPOT, as_value_matrix
from exceptions import FormulationError

logger = logging.getLogger(__name__)


def validate_cost_matrix(cost) -> np.ndarray:
    values = as_value_matrix(cost)
    if values.ndim != 2 or values.shape[0] != values.shape[1]:
        raise FormulationError(f"Cost matrix must be square, got shape {values.shape}")
    if values.shape[0] < 2:
        raise FormulationError("Cost matrix needs the depot plus at least one node")
    if not np.issubdtype(values.dtype, np.number):
        raise FormulationError(f"Cost matrix must be numeric, got dtype {values.dtype}")
    if (values < 0).any():
        raise FormulationError("Cost matrix has negative entries")
    return values


def add_leave_once_constraints(model, x, nodes):
    # sum_j x[k,j] = 1
    for k in nodes:
        model.addConstr(
            gp.quicksum(x[(k, j)] for j in nodes if j != k) == 1,
            name=f"leave_once_{k}",
        )


def add_enter_once_constraints(model, x, nodes):
    # sum_i x[i,k] = 1
    for k in nodes:
        model.addConstr(
            gp.quicksum(x[(i, k)] for i in nodes if i != k) == 1,
            name=f"enter_once_{k}",
        )


def add_depot_degree_constraints(model, x, nodes):
    """
    Single outgoing/incoming depot edge. Already implied by the leave-once and
    enter-once rows for node 0.
    """
    model.addConstr(
        gp.quicksum(x[(DEPOT, j)] for j in nodes if j != DEPOT) == 1,
        name="start_node",
    )
    model.addConstr(
        gp.quicksum(x[(i, DEPOT)] for i in nodes if i != DEPOT) == 1,
        name="end_node",
    )


def build_model(cost, env=None, config: Optional[SolverConfig] = None) -> Tuple[gp.Model, gp.tupledict]:
    """
    Builds the relaxed ordering model: one binary x[i,j] per ordered pair i != j,
    objective min sum cost[i,j] * x[i,j], and degree-1 in/out rows per node.
    Disjoint cycles are still feasible here; they are cut lazily during search.

    Returns (model, x). The model is updated (frozen) before returning.
    """
    config = config if config is not None else SOLVER
    values = validate_cost_matrix(cost)
    size = values.shape[0]
    nodes = range(size)

    model = gp.Model("seam_order", env=env) if env is not None else gp.Model("seam_order")

    # Decision variables
    x = gp.tupledict()
    for i in nodes:
        for j in nodes:
            if i != j:
                x[(i, j)] = model.addVar(vtype=GRB.BINARY, name=f"x_{i}_{j}")

    model.setObjective(
        gp.quicksum(float(values[i, j]) * var for (i, j), var in x.items()),
        GRB.MINIMIZE,
    )

    add_leave_once_constraints(model, x, nodes)
    add_enter_once_constraints(model, x, nodes)
    if config.AddDepotDegreeConstrs:
        add_depot_degree_constraints(model, x, nodes)

    model.update()
    logger.info("Formulated model: nodes=%d, vars=%d, constrs=%d", size, model.NumVars, model.NumConstrs)
    return model, x
