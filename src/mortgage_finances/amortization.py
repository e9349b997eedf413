# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
"""
Amortization engine for fixed-rate level-payment mortgages.

Three operations on a Mortgage:
    repayment(m)         level payment per period
    schedule(m)          balance, cumulative interest and cumulative payments over time
    project(m, metric)   one value of the schedule at a point in time

Plus implied_rate(m, payment), the inverse of repayment() in the annual rate.

Notation:
    d    = periods per year (12 monthly, 1 annually)
    r    = annual rate (decimal)
    i    = period rate = (1 + r)^(1/d) - 1
    n    = term in years
    L    = loan principal = price * (1 - deposit)
"""
from __future__ import annotations

import math
import warnings
from dataclasses import dataclass
from enum import Enum

import numpy as np
from scipy.optimize import brentq

from mortgage_finances.mortgage import Mortgage, period_rate
from mortgage_finances.validation import DomainError, coerce_choice, require_finite

__version__ = "0.1.0"

# Period rates at or below this magnitude use the straight-line limit
ZERO_RATE_TOLERANCE = 1e-12

# Absorbs float noise in term * d, e.g. (7 / 12) * 12 counts as 7 periods
PERIOD_COUNT_TOLERANCE = 1e-9


# =============================================================================
# Schedule container
# =============================================================================

@dataclass(eq=False)
class Schedule:
    """
    Amortization schedule for one mortgage.

    All series are parallel arrays indexed by period; index 0 is the start of
    the loan (t = 0, nothing paid yet).

    - time: years since start, step 1/d
    - loan_outstanding: balance after the payment at each time
    - cumulative_interest: interest paid up to and including each time
    - cumulative_payments: total payments up to and including each time
    - repayment: the level payment P used to build the schedule
    - periods_per_year: d, so that time[k] = k / d

    Arrays are made read-only, including after unpickling; a schedule is
    recomputed, never edited. Schedules compare by identity.
    """
    time: np.ndarray
    loan_outstanding: np.ndarray
    cumulative_interest: np.ndarray
    cumulative_payments: np.ndarray
    repayment: float
    periods_per_year: int = 12

    def __post_init__(self) -> None:
        lengths = {len(a) for a in self.as_tuple()}
        if len(lengths) != 1:
            raise ValueError(f"schedule series must have equal lengths, got {sorted(lengths)}")
        self._freeze()

    def __setstate__(self, state: dict) -> None:
        # unpickling bypasses __post_init__
        self.__dict__.update(state)
        self._freeze()

    def _freeze(self) -> None:
        for a in self.as_tuple():
            a.flags.writeable = False

    def __len__(self) -> int:
        return len(self.time)

    def as_tuple(self) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """(time, loan_outstanding, cumulative_interest, cumulative_payments)"""
        return (self.time, self.loan_outstanding, self.cumulative_interest, self.cumulative_payments)

    @property
    def interest_ratio(self) -> np.ndarray:
        """Cumulative interest / cumulative payments; 0 where nothing has been paid."""
        ratio = np.zeros(len(self))
        np.divide(self.cumulative_interest, self.cumulative_payments,
                  out=ratio, where=self.cumulative_payments != 0)
        return ratio


class Metric(Enum):
    """Series that project() can read."""
    LOAN = "loan"
    INTEREST = "interest"
    PAYMENTS = "payments"
    INTEREST_RATIO = "interest_ratio"

    @classmethod
    def coerce(cls, value: Metric | str) -> Metric:
        return coerce_choice("metric", cls, value)


# =============================================================================
# Repayment solver
# =============================================================================

def repayment(mortgage: Mortgage) -> float:
    """
    Level payment per period that repays the loan over its term.

    Solves L = d * P * a for P, where a is the annuity-in-arrears factor for
    payments made d times a year over n years:

        a = (1 - (1 + r)^-n) / (d * i)
        P = L / (d * a)

    With d = 12 this is the monthly payment; with d = 1 the annual one.

    Args:
        mortgage: Loan to price

    Returns:
        Payment per period (same currency as the mortgage price)

    Warns:
        UserWarning: If term is zero (returns 0.0) or the period rate is
            zero (returns the straight-line payment L / (d * n))

    Example:
        >>> m = Mortgage.create(100_000, 0.1, 0.0597, 25)
        >>> round(repayment(m), 2)
        569.6
    """
    d = mortgage.periods_per_year
    n = mortgage.term
    principal = mortgage.loan_principal
    if n == 0:
        warnings.warn("term is zero, returning zero repayment")
        return 0.0
    i = period_rate(mortgage, d)
    if abs(i) <= ZERO_RATE_TOLERANCE:
        warnings.warn("rate is zero, returning straight-line repayment")
        return principal / (d * n)
    annuity = (1 - (1 + mortgage.rate.value) ** (-n)) / (d * i)
    return principal / (d * annuity)


# =============================================================================
# Schedule generator
# =============================================================================

def period_count(mortgage: Mortgage) -> int:
    """Whole periods in the term; a fractional final period is dropped."""
    return math.floor(mortgage.term * mortgage.periods_per_year + PERIOD_COUNT_TOLERANCE)


def schedule(mortgage: Mortgage) -> Schedule:
    """
    Generate the amortization schedule.

    Each period, interest accrues on the previous balance at the period rate
    and the level payment covers that interest first:

        interest_j      = i * balance_{j-1}
        balance_j       = balance_{j-1} - (P - interest_j)
        cum_interest_j  = cum_interest_{j-1} + interest_j
        cum_payments_j  = cum_payments_{j-1} + P

    The time axis runs 0, 1/d, 2/d, ... up to the last multiple of 1/d not
    beyond the term. For integral term * d the final balance is zero up to
    rounding; it can end fractionally below zero and is left that way.

    Args:
        mortgage: Loan to schedule

    Returns:
        Schedule with period_count(mortgage) + 1 entries
    """
    d = mortgage.periods_per_year
    P = repayment(mortgage)
    interval_rate = period_rate(mortgage, d)

    periods = period_count(mortgage) + 1
    time = np.arange(periods) / d
    loan_outstanding = np.zeros(periods)
    cumulative_interest = np.zeros(periods)
    cumulative_payments = np.zeros(periods)

    loan_outstanding[0] = mortgage.loan_principal

    for j in range(1, periods):
        interest = interval_rate * loan_outstanding[j - 1]
        capital_repaid = P - interest
        loan_outstanding[j] = loan_outstanding[j - 1] - capital_repaid
        cumulative_interest[j] = cumulative_interest[j - 1] + interest
        cumulative_payments[j] = cumulative_payments[j - 1] + P

    return Schedule(
        time=time,
        loan_outstanding=loan_outstanding,
        cumulative_interest=cumulative_interest,
        cumulative_payments=cumulative_payments,
        repayment=P,
        periods_per_year=d,
    )


# =============================================================================
# Point-in-time extraction
# =============================================================================

def schedule_index(sched: Schedule, t: float) -> int:
    """
    Index of the last schedule point at or before t.

    Compares t against the time axis itself, so a t just below a grid point
    selects the previous point. Times past the end clamp to the final entry.

    Raises:
        DomainError: If t < 0 (before the loan starts)
    """
    t = require_finite("t", t)
    if t < 0:
        raise DomainError("t", t, f"[0, {sched.time[-1]}]")
    # count(time <= t) - 1; time[0] = 0 <= t keeps this non-negative
    return int(np.searchsorted(sched.time, t, side="right")) - 1


def project(mortgage: Mortgage, metric: Metric | str, t: float | None = None) -> float:
    """
    Value of one schedule series at time t (years).

    Args:
        mortgage: Loan to project
        metric: LOAN (balance outstanding), INTEREST (cumulative interest),
            PAYMENTS (cumulative payments) or INTEREST_RATIO (cumulative
            interest / cumulative payments, 0.0 before the first payment)
        t: Time in years; defaults to the term

    Returns:
        Series value at the last schedule point at or before t

    Raises:
        DomainError: If metric is not recognized or t < 0
    """
    metric = Metric.coerce(metric)
    sched = schedule(mortgage)
    index = len(sched) - 1 if t is None else schedule_index(sched, t)

    match metric:
        case Metric.LOAN:
            series = sched.loan_outstanding
        case Metric.INTEREST:
            series = sched.cumulative_interest
        case Metric.PAYMENTS:
            series = sched.cumulative_payments
        case Metric.INTEREST_RATIO:
            series = sched.interest_ratio
    return float(series[index])


# =============================================================================
# Implied rate
# =============================================================================

def implied_rate(
        mortgage: Mortgage,
        target_repayment: float,
        lower: float = -0.5,
        upper: float = 10.0,
        tolerance: float = 1e-12,
        max_iterations: int = 100
) -> float:
    """
    Annual rate at which repayment(mortgage) equals target_repayment.

    repayment() increases with the rate, so there is at most one root; it is
    found with Brent's method (scipy.optimize.brentq) on [lower, upper].

    Args:
        mortgage: Loan whose other parameters are held fixed
        target_repayment: Payment per period to match
        lower: Lower bracket for the annual rate
        upper: Upper bracket for the annual rate
        tolerance: Absolute tolerance on the rate
        max_iterations: Iteration cap for brentq

    Returns:
        Annual rate as a decimal

    Raises:
        DomainError: If no rate in [lower, upper] gives target_repayment
    """
    target = require_finite("target_repayment", target_repayment)

    def objective(rate: float) -> float:
        return repayment(mortgage.replace(rate=rate)) - target

    with warnings.catch_warnings():
        # the bracket may straddle zero; straight-line repayments are expected there
        warnings.simplefilter("ignore", UserWarning)
        try:
            return brentq(objective, lower, upper, xtol=tolerance, maxiter=max_iterations)
        except ValueError as e:
            raise DomainError(
                "target_repayment", target, f"repayments for rates in [{lower}, {upper}]",
                message=(
                    f"Could not find a rate giving repayment {target:,.2f} "
                    f"for rates in [{lower}, {upper}]. Original error: {e}"
                ),
            ) from e
