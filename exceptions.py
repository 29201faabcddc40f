"""
Custom exception hierarchy for clearer error handling.
Every stage of the pipeline raises one of these; the CLI lets them abort the run.
"""
class OrderingError(Exception):
    """Base class for image-ordering errors."""

class ConfigError(OrderingError):
    pass

class ArgumentValidationError(OrderingError):
    pass

class ParseError(OrderingError):
    pass

class InvalidInputError(OrderingError):
    pass

class FormulationError(OrderingError):
    pass

class SolverError(OrderingError):
    pass

class ReportWriteError(OrderingError, OSError):
    pass
