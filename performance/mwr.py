"""
Money-weighted return via a Newton-Raphson IRR solver.

The beginning value is an outflow at t=0, every external flow is mirrored
(a deposit into the portfolio is money the investor pays in) and the ending
value is an inflow at t=T. The solver finds the annual rate r for which

    sum(amount_i * (1 + r) ** years_remaining_i) == 0

with T measured in years of 365.25 days. The arithmetic stays in Decimal;
fractional powers of a positive Decimal base are exact to the context
precision.
"""

import decimal
import logging
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from config.constants import (
    DAYS_PER_YEAR,
    MWR_DEFAULT_MAX_ITERATIONS,
    MWR_DEFAULT_TOLERANCE,
    MWR_DERIVATIVE_FLOOR,
    MWR_INITIAL_GUESS,
)
from config.settings import NumericConfig
from data.models.returns import CashFlow
from financial.calculations import NumericInput, numeric_context, to_decimal
from utils.date_utils import DateInput, calendar_days_between

logger = logging.getLogger(__name__)


def _build_flows(cash_flows: Iterable[CashFlow], begin: Decimal, end: Decimal,
                 period_start: DateInput, total_days: int) -> List[Tuple[Decimal, Decimal]]:
    """(amount, years remaining) pairs in investor sign."""
    total = Decimal(total_days)
    flows = [(-begin, total / DAYS_PER_YEAR)]

    for flow in cash_flows:
        days_since_start = Decimal(calendar_days_between(period_start, flow.date))
        flows.append((-flow.amount, (total - days_since_start) / DAYS_PER_YEAR))

    flows.append((end, Decimal('0')))
    return flows


def _evaluate(flows: List[Tuple[Decimal, Decimal]], base: Decimal) -> Tuple[Decimal, Decimal]:
    """Value of the flow polynomial and its derivative at ``base = 1 + r``."""
    f = Decimal('0')
    f_prime = Decimal('0')
    for amount, years in flows:
        f += amount * base ** years
        if years != 0:
            f_prime += amount * years * base ** (years - 1)
    return f, f_prime


def calculate_mwr(cash_flows: Iterable[CashFlow],
                  begin_value: NumericInput,
                  end_value: NumericInput,
                  period_start: DateInput,
                  period_end: DateInput,
                  max_iterations: int = MWR_DEFAULT_MAX_ITERATIONS,
                  tolerance: NumericInput = MWR_DEFAULT_TOLERANCE,
                  config: Optional[NumericConfig] = None) -> Decimal:
    """
    Annualised money-weighted return (IRR) over a period.

    This is a best-effort solver: it never raises for numerical reasons.
    It stops when the derivative vanishes, when two iterates are closer
    than ``tolerance``, or when ``max_iterations`` is used up, and in each
    case returns the best estimate it has.

    Args:
        cash_flows: External flows, positive = deposit into the portfolio
        begin_value: Portfolio value at the period start
        end_value: Portfolio value at the period end
        period_start: First day of the period
        period_end: Last day of the period
        max_iterations: Newton-Raphson iteration budget
        tolerance: Convergence threshold on successive estimates

    Returns:
        Decimal: Annual rate as a fraction; zero for a zero-length period
    """
    total_days = calendar_days_between(period_start, period_end)
    if total_days <= 0:
        logger.debug(f"Zero-length period {period_start} -> {period_end}, returning 0")
        return Decimal('0')

    tol = to_decimal(tolerance)

    with numeric_context(config):
        flows = _build_flows(cash_flows, to_decimal(begin_value), to_decimal(end_value),
                             period_start, total_days)
        r = MWR_INITIAL_GUESS

        try:
            for iteration in range(max_iterations):
                base = 1 + r
                if base <= 0:
                    # Rate fell to -100% or below; pull it back towards zero
                    r = r / 2
                    continue

                f, f_prime = _evaluate(flows, base)

                if abs(f_prime) < MWR_DERIVATIVE_FLOOR:
                    logger.debug(f"MWR derivative vanished at iteration {iteration}, r={r}")
                    return r

                r_new = r - f / f_prime

                if abs(r_new - r) < tol:
                    return r_new

                r = r_new
        except (decimal.Overflow, decimal.InvalidOperation) as e:
            logger.warning(f"MWR solver left the representable range ({e!r}), returning r={r}")
            return r

    logger.warning(f"MWR did not converge in {max_iterations} iterations, returning r={r}")
    return r
