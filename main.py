import argparse
import os
import uuid
from typing import Optional, Sequence

import config as cfg
import cost_builder
import data_loader
import ordering_solver
import reports
import seam_utils.logging as logging
from data_structures import OrderingResult
from exceptions import ArgumentValidationError
from seam_utils.context import run_context


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seam-order",
        description="Order image strips so that adjacent seams match as closely as possible.",
    )
    parser.add_argument("input", help="input file: '<n> <width> <height>' then one line of pixels per image")
    parser.add_argument("output", help="output file for the space-separated 1-based order")
    parser.add_argument("--time-limit", type=float, default=None, help="Gurobi TimeLimit in seconds")
    parser.add_argument("--threads", type=int, default=None, help="Gurobi Threads")
    parser.add_argument("--mip-gap", type=float, default=None, help="Gurobi MIPGap")
    parser.add_argument("--solution-limit", type=int, default=None, help="Gurobi SolutionLimit")
    parser.add_argument("--solver-output", action="store_true", help="show the Gurobi log")
    parser.add_argument("--cut-all-subtours", action="store_true",
                        help="cut every disjoint cycle of a candidate, not only the depot's")
    parser.add_argument("--depot-degree-constrs", action="store_true",
                        help="add the (redundant) start/end depot constraints")
    parser.add_argument("--cost-report", default=None, help="write pairwise seam costs to this CSV")
    parser.add_argument("--transition-report", default=None, help="write the chosen transitions to this CSV")
    parser.add_argument("--log-dir", default=None, help="directory for app.log / errors.log")
    parser.add_argument("--log-level", default=None, help="logging level (DEBUG, INFO, ...)")
    return parser


def validate_args(args: argparse.Namespace) -> None:
    missing = [name for name in ("input", "output") if not (getattr(args, name, None) or "").strip()]
    if missing:
        raise ArgumentValidationError(f"Required argument(s) empty: {', '.join(missing)}")


def run_pipeline(input_path, output_path, config: Optional[cfg.SolverConfig] = None,
                 cost_report=None, transition_report=None) -> OrderingResult:
    config = config if config is not None else cfg.SOLVER
    logger = logging.getLogger(__name__)

    with run_context(run_id=uuid.uuid4().hex[:8], input_name=os.path.basename(str(input_path))):
        logger.info("Config: %s", config.as_dict())

        images = data_loader.load_images(input_path)
        cost = cost_builder.build_cost_matrix(images)
        if cost_report:
            reports.write_cost_csv(cost_report, cost)

        result = ordering_solver.solve_ordering(cost, config)
        logger.info("Obj value: %s (%s)", result.objective, result.status)
        logger.info("Result: %s", result.as_dict())

        reports.write_order_file(output_path, result.order)
        if transition_report:
            reports.write_transition_csv(transition_report, cost, result.order)

    return result


def main(argv: Optional[Sequence[str]] = None) -> OrderingResult:
    args = build_arg_parser().parse_args(argv)
    validate_args(args)

    config = cfg.update_from_args(args, cfg.SOLVER.copy())
    logging.setup(log_dir=config.LogDir, level=config.LogLevel)

    # stage failures are already logged with a traceback by log_and_time
    return run_pipeline(
        args.input,
        args.output,
        config=config,
        cost_report=args.cost_report,
        transition_report=args.transition_report,
    )


if __name__ == '__main__':
    main()
