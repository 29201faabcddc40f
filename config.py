# config.py
"""
Centralized solver and run configuration.
Works with main.py's update_from_args(...) so CLI flags override the defaults.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional

from exceptions import ConfigError


@dataclass
class SolverConfig:
    # Gurobi search controls
    TimeLimit: Optional[float] = None  # seconds, None = run to optimality
    Threads: int = 0  # 0 = let Gurobi decide
    MIPGap: Optional[float] = None
    SolutionLimit: Optional[int] = None  # stop after this many incumbents
    OutputFlag: int = 0

    # Formulation / cut controls
    CutAllSubtours: int = 0
    AddDepotDegreeConstrs: int = 0

    # Logging
    LogDir: str = "logs"
    LogLevel: str = "INFO"

    def update(self, **kwargs) -> None:
        """
        Programmatic override of fields, with safety for unknown keys.
        Example:
            SOLVER.update(TimeLimit=60, Threads=4)
        """
        for k, v in kwargs.items():
            if hasattr(self, k):
                setattr(self, k, v)
            else:
                raise ConfigError(f"Unknown config field: {k}")

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def gurobi_params(self) -> Dict[str, Any]:
        """Parameters to push onto the Gurobi model; unset limits are left to Gurobi."""
        params: Dict[str, Any] = {"OutputFlag": int(self.OutputFlag)}
        if self.TimeLimit is not None:
            params["TimeLimit"] = float(self.TimeLimit)
        if self.Threads:
            params["Threads"] = int(self.Threads)
        if self.MIPGap is not None:
            params["MIPGap"] = float(self.MIPGap)
        if self.SolutionLimit is not None:
            params["SolutionLimit"] = int(self.SolutionLimit)
        return params

    def copy(self) -> "SolverConfig":
        return SolverConfig(**self.as_dict())


# Singleton instance
SOLVER = SolverConfig()

# CLI option name -> config field
_ARG_FIELDS = {
    "time_limit": "TimeLimit",
    "threads": "Threads",
    "mip_gap": "MIPGap",
    "solution_limit": "SolutionLimit",
    "solver_output": "OutputFlag",
    "cut_all_subtours": "CutAllSubtours",
    "depot_degree_constrs": "AddDepotDegreeConstrs",
    "log_dir": "LogDir",
    "log_level": "LogLevel",
}


def update_from_args(args, config: Optional[SolverConfig] = None) -> SolverConfig:
    """
    Accepts an argparse Namespace (or dict) with any of these keys:
      time_limit, threads, mip_gap, solution_limit, solver_output,
      cut_all_subtours, depot_degree_constrs, log_dir, log_level
    Keys that are missing or None keep their current value.
    Boolean flags are stored as 0/1 like the rest of the switches.
    """
    config = config if config is not None else SOLVER
    get = args.get if hasattr(args, "get") else (lambda k: getattr(args, k, None))

    overrides = {}
    for arg_name, field_name in _ARG_FIELDS.items():
        value = get(arg_name)
        if value is None:
            continue
        if isinstance(value, bool):
            if not value:
                continue
            value = int(value)
        overrides[field_name] = value

    config.update(**overrides)
    return config


__all__ = [
    "SolverConfig",
    "SOLVER",
    "update_from_args",
]
