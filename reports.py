"""Output file and optional CSV reports."""

import csv
from typing import Sequence

import seam_utils.logging as logging
from cost_builder import pairwise_costs
from data_structures import DEPOT, CostMatrix
from exceptions import ReportWriteError
from seam_utils.decorators import log_and_time

logger = logging.getLogger(__name__)


@log_and_time("write_order_file", error_cls=ReportWriteError)
def write_order_file(final_filename, order: Sequence[int]):
    """One line: the 1-based node indices in order, space separated."""
    try:
        with open(final_filename, "w", encoding="utf-8") as f:
            f.write(" ".join(str(k) for k in order))
            f.write("\n")
    except OSError as e:
        raise ReportWriteError(f"Cannot write order file {final_filename}: {e}") from e

    logger.info(f"[OK] Wrote order file: {final_filename} with {len(order)} nodes.")


def write_cost_csv(final_filename, cost: CostMatrix):
    """
    Every unordered pair of images with the seam cost in both directions.
    """
    header = ["NODE_I", "NODE_J", "COST_I_TO_J", "COST_J_TO_I"]
    rows = list(pairwise_costs(cost))

    try:
        with open(final_filename, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(header)
            writer.writerows(rows)
    except OSError as e:
        raise ReportWriteError(f"Cannot write cost report {final_filename}: {e}") from e

    logger.info(f"[OK] Wrote Cost CSV: {final_filename} with {len(rows)} rows.")


def write_transition_csv(final_filename, cost: CostMatrix, order: Sequence[int]):
    """
    One row per transition of the chosen order, depot legs included,
    with the running total in the last column.
    """
    header = ["STEP", "FROM_NODE", "TO_NODE", "COST", "CUMULATIVE_COST"]
    stops = [DEPOT] + list(order) + [DEPOT]

    rows = []
    total = 0
    for step, (a, b) in enumerate(zip(stops, stops[1:]), start=1):
        step_cost = cost[a, b]
        total += step_cost
        rows.append([step, a, b, step_cost, total])

    try:
        with open(final_filename, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(header)
            writer.writerows(rows)
    except OSError as e:
        raise ReportWriteError(f"Cannot write transition report {final_filename}: {e}") from e

    logger.info(f"[OK] Wrote Transition CSV: {final_filename} with {len(rows)} rows.")
