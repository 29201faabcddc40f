import csv
import logging

import pytest

from exceptions import ArgumentValidationError, ParseError
from main import main


def write_example(tmp_path):
    path = tmp_path / "images.txt"
    path.write_text("2 2 1\n0 0 0 10 10 10\n50 50 50 5 5 5\n")
    return path


def test_cli_writes_order_file(tmp_path):
    src = write_example(tmp_path)
    out = tmp_path / "order.txt"
    result = main([str(src), str(out), "--log-dir", str(tmp_path / "logs")])
    assert out.read_text().strip() == "2 1"
    assert result.objective == 15


def test_cli_reports(tmp_path):
    src = write_example(tmp_path)
    out = tmp_path / "order.txt"
    costs = tmp_path / "costs.csv"
    steps = tmp_path / "steps.csv"
    main([
        str(src), str(out),
        "--cost-report", str(costs),
        "--transition-report", str(steps),
        "--cut-all-subtours",
        "--threads", "1",
        "--log-dir", str(tmp_path / "logs"),
    ])

    with open(costs, newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["NODE_I", "NODE_J", "COST_I_TO_J", "COST_J_TO_I"]
    assert rows[1] == ["1", "2", "120", "15"]

    with open(steps, newline="") as f:
        rows = list(csv.reader(f))
    assert rows[1:] == [
        ["1", "0", "2", "0", "0"],
        ["2", "2", "1", "15", "15"],
        ["3", "1", "0", "0", "15"],
    ]


@pytest.mark.parametrize("argv", [["", "out.txt"], ["in.txt", "  "]])
def test_blank_arguments_fail_fast(argv):
    with pytest.raises(ArgumentValidationError):
        main(argv)


def test_missing_arguments_exit():
    with pytest.raises(SystemExit):
        main([])


def test_bad_input_aborts_without_output(tmp_path, caplog):
    src = tmp_path / "bad.txt"
    src.write_text("2 2 1\n0 0 0 10 10 10\n")
    out = tmp_path / "order.txt"
    with caplog.at_level(logging.ERROR), pytest.raises(ParseError):
        main([str(src), str(out), "--log-dir", str(tmp_path / "logs")])
    assert not out.exists()
    # logged once, by the failing stage
    errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
    assert len(errors) == 1
    assert "load_images failed" in errors[0].getMessage()
