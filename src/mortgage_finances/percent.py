# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

import numbers
from dataclasses import InitVar, dataclass

from mortgage_finances.validation import DomainError, require_in_range

__version__ = "0.1.0"

# Default bounds: -1000% to 1000%
PERCENT_MIN = -10.0
PERCENT_MAX = 10.0


@dataclass(frozen=True)
class BoundedPercentage:
    """
    A rate or fraction held as a decimal (0.05 for 5%) within [minimum, maximum].

    The bounds are checked once at construction and not stored.

    Raises:
        DomainError: If value > maximum or value < minimum
    """
    value: float
    minimum: InitVar[float] = PERCENT_MIN
    maximum: InitVar[float] = PERCENT_MAX

    def __post_init__(self, minimum: float, maximum: float) -> None:
        object.__setattr__(self, "value", require_in_range("value", self.value, minimum, maximum))

    @classmethod
    def default(cls) -> BoundedPercentage:
        return cls(0.0)

    def __float__(self) -> float:
        return self.value


def as_percentage(
        value: BoundedPercentage | float,
        minimum: float = PERCENT_MIN,
        maximum: float = PERCENT_MAX,
        field: str = "percentage"
) -> BoundedPercentage:
    """
    Coerce value into a BoundedPercentage.

    Existing instances are returned unchanged, without re-checking them
    against minimum/maximum. Real numbers are validated against the bounds.

    Args:
        value: BoundedPercentage or real number (decimal, e.g. 0.1 for 10%)
        minimum: Inclusive lower bound for numeric input
        maximum: Inclusive upper bound for numeric input
        field: Parameter name used in error messages (e.g. "rate")

    Raises:
        DomainError: If value is not numeric or lies outside the bounds
    """
    if isinstance(value, BoundedPercentage):
        return value
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise DomainError(field, value, "a BoundedPercentage or a real number")
    return BoundedPercentage(require_in_range(field, value, minimum, maximum), minimum, maximum)
