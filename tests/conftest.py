import gurobipy as gp
import pytest

from config import SolverConfig


@pytest.fixture
def gurobi_env():
    env = gp.Env(empty=True)
    env.setParam("OutputFlag", 0)
    env.start()
    yield env
    env.dispose()


@pytest.fixture
def quiet_config():
    return SolverConfig(OutputFlag=0, Threads=1)
