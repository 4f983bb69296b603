"""WAD fixed-point arithmetic.

All values are Python ints scaled by WAD (1e18). Nothing in here touches
floating point except ``wad_to_percent``, the final display conversion.
"""

from src.core.constants import WAD, WAD_PERCENT_DIVISOR
from src.core.errors import DivisionByZero


def mul_div_down(x: int, y: int, d: int) -> int:
    """Compute x * y / d, truncating toward zero.

    Args:
        x: First factor
        y: Second factor
        d: Divisor

    Returns:
        Truncated quotient

    Raises:
        DivisionByZero: If d is zero
    """
    if d == 0:
        raise DivisionByZero(f"mul_div_down({x}, {y}, 0)")
    product = x * y
    quotient = abs(product) // abs(d)
    return quotient if (product >= 0) == (d > 0) else -quotient


def mul_wad(a: int, b: int) -> int:
    """Fixed-point multiply: a * b / WAD."""
    return mul_div_down(a, b, WAD)


def div_wad(a: int, b: int) -> int:
    """Fixed-point divide: a * WAD / b.

    Raises:
        DivisionByZero: If b is zero
    """
    if b == 0:
        raise DivisionByZero(f"div_wad({a}, 0)")
    return mul_div_down(a, WAD, b)


def w_taylor_compounded(rate: int, time: int) -> int:
    """
    Approximate e^(rate * time) - 1 with the first three Taylor terms.

    ``rate`` is a WAD-scaled per-second rate and ``time`` a number of seconds,
    so ``rate * time`` is already WAD-scaled. Each higher power is reduced
    back to WAD scale through an explicit division:

        x  = rate * time
        x2 = x * x  / (2 * WAD)
        x3 = x2 * x / (3 * WAD)

    The series is truncated at the cubic term. It tracks true exponential
    compounding closely while rate * time stays well below WAD (realistic
    per-second rates over up to about a year); outside that domain the
    result underestimates e^x - 1 and the caller owns the error.

    Args:
        rate: Per-second rate, WAD-scaled
        time: Elapsed seconds

    Returns:
        Compounded growth minus one, WAD-scaled
    """
    first_term = rate * time
    second_term = mul_div_down(first_term, first_term, 2 * WAD)
    third_term = mul_div_down(second_term, first_term, 3 * WAD)
    return first_term + second_term + third_term


# Name used throughout the accrual engine
compound = w_taylor_compounded


def wad_to_percent(value: int) -> float:
    """Convert a WAD fraction to a plain percentage (0.05 WAD -> 5.0)."""
    return value / WAD_PERCENT_DIVISOR
