import logging

import pytest

from exceptions import InvalidInputError, SolverError
from seam_utils.context import LogContextFilter, run_context
from seam_utils.decorators import log_and_time


def make_record():
    return logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)


def test_context_filter_stamps_records():
    filt = LogContextFilter()
    rec = make_record()
    filt.filter(rec)
    assert rec.run_id == "-"
    assert rec.input_name == "-"

    with run_context("abc123", input_name="strips.txt"):
        rec = make_record()
        filt.filter(rec)
        assert rec.run_id == "abc123"
        assert rec.input_name == "strips.txt"

    rec = make_record()
    filt.filter(rec)
    assert rec.run_id == "-"


def test_log_and_time_wraps_foreign_errors():
    @log_and_time("stage", error_cls=SolverError)
    def fails():
        raise KeyError("x")

    with pytest.raises(SolverError) as info:
        fails()
    assert isinstance(info.value.__cause__, KeyError)


def test_log_and_time_keeps_own_errors():
    @log_and_time("stage", error_cls=SolverError)
    def fails():
        raise InvalidInputError("bad")

    with pytest.raises(InvalidInputError):
        fails()


def test_log_and_time_returns_value(caplog):
    @log_and_time("stage")
    def ok():
        return 42

    with caplog.at_level(logging.INFO):
        assert ok() == 42
    assert any("stage done" in r.getMessage() for r in caplog.records)
