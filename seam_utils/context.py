"""
Context utilities to inject run/input IDs into log records.
"""
import logging
from contextvars import ContextVar
from contextlib import contextmanager
from typing import Optional

run_id_var: ContextVar[Optional[str]] = ContextVar("run_id", default=None)
input_name_var: ContextVar[Optional[str]] = ContextVar("input_name", default=None)

def set_context(run_id: Optional[str] = None, input_name: Optional[str] = None) -> None:
    if run_id is not None:
        run_id_var.set(str(run_id))
    if input_name is not None:
        input_name_var.set(str(input_name))

class LogContextFilter(logging.Filter):
    """
    Adds contextvars to LogRecord so formatters can print them.
    """
    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = run_id_var.get() or "-"
        record.input_name = input_name_var.get() or "-"
        return True

@contextmanager
def run_context(run_id: str, input_name: Optional[str] = None):
    prev_run, prev_input = run_id_var.get(), input_name_var.get()
    try:
        set_context(run_id, input_name)
        yield
    finally:
        run_id_var.set(prev_run)
        input_name_var.set(prev_input)
