# Requires Python 3.12+
"""
Mortgage Finances: fixed-rate mortgage schedules in typed, convertible currency.

Value model (Currency, Nominal, BoundedPercentage), the Mortgage definition,
the amortization engine and parameter sweeps.
"""

from __future__ import annotations

__version__ = "0.1.0"

# Errors and validation
from mortgage_finances.validation import DomainError

# Value model
from mortgage_finances.currency import (
    DEFAULT_CURRENCY,
    DEFAULT_CURRENCY_SYMBOL,
    Currency,
    Nominal,
    as_nominal,
    convert,
)
from mortgage_finances.percent import (
    PERCENT_MAX,
    PERCENT_MIN,
    BoundedPercentage,
    as_percentage,
)

# Loan definition
from mortgage_finances.mortgage import (
    Frequency,
    Mortgage,
    period_rate,
)

# Amortization engine
from mortgage_finances.amortization import (
    Metric,
    Schedule,
    implied_rate,
    period_count,
    project,
    repayment,
    schedule,
    schedule_index,
)

# Parameter sweeps
from mortgage_finances.sweep import (
    SweepResult,
    SweepVariable,
    sweep,
    vary,
)

__all__ = [
    "__version__",
    # Errors
    "DomainError",
    # Value model
    "DEFAULT_CURRENCY",
    "DEFAULT_CURRENCY_SYMBOL",
    "Currency",
    "Nominal",
    "as_nominal",
    "convert",
    "PERCENT_MAX",
    "PERCENT_MIN",
    "BoundedPercentage",
    "as_percentage",
    # Loan definition
    "Frequency",
    "Mortgage",
    "period_rate",
    # Amortization engine
    "Metric",
    "Schedule",
    "implied_rate",
    "period_count",
    "project",
    "repayment",
    "schedule",
    "schedule_index",
    # Parameter sweeps
    "SweepResult",
    "SweepVariable",
    "sweep",
    "vary",
]
