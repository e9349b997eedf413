# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
"""
Parameter sweeps: one mortgage varied along a single parameter.

sweep() builds a family of mortgages that differ from a base mortgage only in
price, deposit, rate or term, schedules each one, and reports the shared axis
ranges a plotting or animation layer needs to draw every frame on the same
scale.

Each schedule depends only on its own mortgage, so the schedules can be
computed in worker processes; results are collected in input order.
"""
from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from enum import Enum

import numpy as np

from mortgage_finances.amortization import Schedule, schedule
from mortgage_finances.mortgage import Mortgage
from mortgage_finances.validation import DomainError, coerce_choice, require_finite

__version__ = "0.1.0"


class SweepVariable(Enum):
    """Mortgage parameters a sweep can vary."""
    PRICE = "price"
    DEPOSIT = "deposit"
    RATE = "rate"
    TERM = "term"

    @classmethod
    def coerce(cls, value: SweepVariable | str) -> SweepVariable:
        return coerce_choice("variable", cls, value)


@dataclass(frozen=True, eq=False)
class SweepResult:
    """
    Output of sweep(); compared and hashed by identity.

    mortgages, schedules and repayments are parallel to values.

    value_range: (min, max) of cumulative payments over every schedule
    time_range: (min, max) of time over every schedule when the term was
        swept, otherwise None (all schedules share one time axis)
    """
    variable: SweepVariable
    values: tuple[float, ...]
    mortgages: tuple[Mortgage, ...]
    schedules: tuple[Schedule, ...]
    value_range: tuple[float, float]
    time_range: tuple[float, float] | None

    @property
    def repayments(self) -> tuple[float, ...]:
        return tuple(s.repayment for s in self.schedules)

    def __len__(self) -> int:
        return len(self.schedules)


def vary(mortgage: Mortgage, variable: SweepVariable | str, value: float) -> Mortgage:
    """Copy of mortgage with one parameter set to value (price keeps its currency)."""
    match SweepVariable.coerce(variable):
        case SweepVariable.PRICE:
            return mortgage.replace(price=value)
        case SweepVariable.DEPOSIT:
            return mortgage.replace(deposit=value)
        case SweepVariable.RATE:
            return mortgage.replace(rate=value)
        case SweepVariable.TERM:
            return mortgage.replace(term=value)


def _series_range(series: Iterable[np.ndarray]) -> tuple[float, float]:
    series = list(series)
    return (
        float(min(np.min(s) for s in series)),
        float(max(np.max(s) for s in series)),
    )


def sweep(
        mortgage: Mortgage,
        variable: SweepVariable | str,
        values: Iterable[float],
        max_workers: int | None = None
) -> SweepResult:
    """
    Schedule a family of mortgages that vary one parameter.

    Args:
        mortgage: Base mortgage; every other parameter is kept
        variable: PRICE, DEPOSIT, RATE or TERM (or its lowercase name)
        values: Values for the swept parameter, in output order
        max_workers: None or 1 computes in this process; a larger number
            uses a process pool of that size

    Returns:
        SweepResult with one mortgage and schedule per value

    Raises:
        DomainError: If variable is not recognized, values is empty,
            max_workers < 1, or any value is invalid for its parameter
            (e.g. a negative term)

    Example:
        >>> base = Mortgage.create(100_000, 0.1, 0.0597, 25)
        >>> result = sweep(base, "rate", [0.01, 0.03, 0.05])
        >>> len(result.schedules)
        3
        >>> result.repayments == tuple(sorted(result.repayments))
        True
    """
    variable = SweepVariable.coerce(variable)
    values = tuple(require_finite(variable.value, v) for v in values)
    if not values:
        raise DomainError("values", values, "a non-empty sequence")
    if max_workers is not None and max_workers < 1:
        raise DomainError("max_workers", max_workers, ">= 1")

    # Built up front so an invalid value fails before any work is scheduled
    mortgages = tuple(vary(mortgage, variable, v) for v in values)

    if max_workers is None or max_workers == 1:
        schedules = tuple(schedule(m) for m in mortgages)
    else:
        with ProcessPoolExecutor(max_workers=max_workers) as pool:
            schedules = tuple(pool.map(schedule, mortgages))

    value_range = _series_range(s.cumulative_payments for s in schedules)
    time_range = None
    if variable is SweepVariable.TERM:
        time_range = _series_range(s.time for s in schedules)

    return SweepResult(
        variable=variable,
        values=values,
        mortgages=mortgages,
        schedules=schedules,
        value_range=value_range,
        time_range=time_range,
    )
