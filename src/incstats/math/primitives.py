"""Integer arithmetic primitives used by the moment recurrence."""

import operator

from ..errors import InvalidArgumentError

UINT64_LIMIT = 2**64

# C(i, k) fits an unsigned 64-bit integer for every i <= MAX_ORDER.
MAX_ORDER = 64


def _require_non_negative_int(name: str, value: int) -> int:
    """Validate that ``value`` is a non-negative integer."""
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}.")
    try:
        value = operator.index(value)
    except TypeError:
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}.") from None
    if value < 0:
        raise InvalidArgumentError(f"{name} must be non-negative, got {value}.")
    return value


def power(x: float, y: int) -> float:
    """Raise ``x`` to the non-negative integer power ``y`` by repeated multiplication.

    ``power(x, 0)`` is ``1.0`` for every ``x``, including zero.
    """
    y = _require_non_negative_int("exponent", y)
    result = 1.0
    for _ in range(y):
        result *= x
    return result


def factorial(n: int) -> int:
    """Return ``n!``; ``factorial(0) == factorial(1) == 1``."""
    n = _require_non_negative_int("n", n)
    result = 1
    for i in range(2, n + 1):
        result *= i
    return result


def binomial(n: int, k: int) -> int:
    """Return the binomial coefficient ``C(n, k)`` via the multiplicative recurrence.

    Each step divides whichever of the running numerator term or the running
    result is exactly divisible before multiplying, so intermediates stay close
    to the final value. Results that do not fit an unsigned 64-bit integer are
    rejected rather than wrapped.
    """
    n = _require_non_negative_int("n", n)
    k = _require_non_negative_int("k", k)
    if k > n:
        return 0
    result = 1
    numerator = n
    for j in range(1, min(k, n - k) + 1):
        if numerator % j == 0:
            result *= numerator // j
        elif result % j == 0:
            result = result // j * numerator
        else:
            result = result * numerator // j
        numerator -= 1
    if result >= UINT64_LIMIT:
        raise InvalidArgumentError(
            f"C({n}, {k}) = {result} exceeds the unsigned 64-bit range."
        )
    return result


def validate_order(order: int) -> int:
    """Ensure a moment order lies in ``[0, MAX_ORDER]``."""
    order = _require_non_negative_int("order", order)
    if order > MAX_ORDER:
        raise InvalidArgumentError(
            f"order must not exceed {MAX_ORDER}, got {order}."
        )
    return order


__all__ = ["MAX_ORDER", "binomial", "factorial", "power", "validate_order"]
