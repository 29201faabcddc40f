from typing import Optional

import gurobipy as gp
from gurobipy import GRB

import seam_utils.logging as logging
from config import SOLVER, SolverConfig
from constraint_builder import build_model
from data_structures import OrderingResult, as_value_matrix
from exceptions import SolverError
from seam_utils.decorators import log_and_time
from solution_processor import reconstruct_path, tour_cost
from subtour_callback import SubtourCallback

logger = logging.getLogger(__name__)

STATUS_NAMES = {
    GRB.OPTIMAL: "OPTIMAL",
    GRB.INFEASIBLE: "INFEASIBLE",
    GRB.INF_OR_UNBD: "INF_OR_UNBD",
    GRB.UNBOUNDED: "UNBOUNDED",
    GRB.TIME_LIMIT: "TIME_LIMIT",
    GRB.INTERRUPTED: "INTERRUPTED",
    GRB.SOLUTION_LIMIT: "SOLUTION_LIMIT",
    GRB.NODE_LIMIT: "NODE_LIMIT",
    GRB.ITERATION_LIMIT: "ITERATION_LIMIT",
}

# Stopped early; an incumbent, if any, is still a complete tour
STOPPED_EARLY = {
    GRB.TIME_LIMIT, GRB.INTERRUPTED, GRB.SOLUTION_LIMIT,
    GRB.NODE_LIMIT, GRB.ITERATION_LIMIT,
}


def _open_env(config: SolverConfig) -> gp.Env:
    env = gp.Env(empty=True)
    env.setParam("OutputFlag", int(config.OutputFlag))
    env.start()
    return env


@log_and_time("solve_ordering", error_cls=SolverError)
def solve_ordering(cost, config: Optional[SolverConfig] = None) -> OrderingResult:
    """
    Solves the ordering model to optimality with lazy subtour cuts.
    Returns the order (depot excluded) and the objective value.
    """
    config = config if config is not None else SOLVER

    with _open_env(config) as env:
        model, x = build_model(cost, env=env, config=config)
        with model:
            n_nodes = as_value_matrix(cost).shape[0]
            for name, value in config.gurobi_params().items():
                model.setParam(name, value)
            model.Params.LazyConstraints = 1

            callback = SubtourCallback(x, n_nodes, cut_all=bool(config.CutAllSubtours))
            logger.info("CHECKPOINT: solving ordering model, nodes=%d ...", n_nodes)
            model.optimize(callback)

            if callback.error is not None:
                raise SolverError(f"Subtour callback failed: {callback.error}") from callback.error

            status = model.Status
            status_name = STATUS_NAMES.get(status, str(status))
            if status == GRB.OPTIMAL:
                logger.info("Ordering model => OPTIMAL, ObjVal=%s", model.ObjVal)
            elif status in STOPPED_EARLY and model.SolCount > 0:
                logger.warning(
                    "Ordering model => %s, returning incumbent ObjVal=%s (gap %.4f)",
                    status_name, model.ObjVal, model.MIPGap,
                )
            else:
                raise SolverError(f"Ordering model ended with status={status_name}, no solution")

            values = {key: var.X for key, var in x.items()}
            objective = model.ObjVal
            runtime = model.Runtime

    order = reconstruct_path(values, n_nodes)
    recomputed = tour_cost(cost, order)
    if abs(recomputed - objective) > 0.5:
        raise SolverError(f"Objective {objective} does not match recomputed tour cost {recomputed}")

    logger.info("Order: %s", " ".join(str(k) for k in order))
    return OrderingResult(
        order=order,
        objective=float(recomputed),
        status=status_name,
        optimal=status == GRB.OPTIMAL,
        runtime=runtime,
    )
