"""Typed failures raised at the accumulator API boundary."""


class IncstatsError(Exception):
    """Base class for all accumulator errors."""


class InvalidArgumentError(IncstatsError, ValueError):
    """Raised for malformed arguments: bad lengths, orders, or weights."""


class NumericallyUndefinedError(IncstatsError, ArithmeticError):
    """Raised when a statistic cannot be defined for the accumulated weight."""


__all__ = ["IncstatsError", "InvalidArgumentError", "NumericallyUndefinedError"]
