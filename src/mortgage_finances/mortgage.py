# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from mortgage_finances.currency import Currency, Nominal, as_nominal
from mortgage_finances.percent import BoundedPercentage, as_percentage
from mortgage_finances.validation import (
    DomainError,
    coerce_choice,
    require_finite,
    require_non_negative,
)

__version__ = "0.1.0"


# =============================================================================
# Repayment Frequency
# =============================================================================

class Frequency(Enum):
    """Repayment frequency."""
    MONTHLY = "monthly"
    ANNUALLY = "annually"

    @property
    def periods_per_year(self) -> int:
        match self:
            case Frequency.MONTHLY:
                return 12
            case Frequency.ANNUALLY:
                return 1

    @classmethod
    def coerce(cls, value: Frequency | str) -> Frequency:
        """Accept a Frequency, its value ("monthly") or its name ("MONTHLY")."""
        return coerce_choice("frequency", cls, value)


# =============================================================================
# Mortgage
# =============================================================================
#
# A Mortgage is an immutable parameter set: price, deposit (fraction of price),
# annual rate, term in years and repayment frequency. Construct it with
# Mortgage.create() when the inputs are plain numbers or strings; the
# dataclass constructor expects typed values and only validates them.
# =============================================================================

@dataclass(frozen=True)
class Mortgage:
    """
    Fixed-rate repayment mortgage.

    Fields:
        price: Purchase price as a Nominal (amount >= 0)
        deposit: Deposit as a fraction of price (0.1 for 10%)
        rate: Annual interest rate as a decimal (0.0597 for 5.97%)
        term: Term in years (>= 0, may be fractional)
        frequency: Repayment frequency
        stamp_duty: Reserved flag; not used by any computation

    Computed properties:
        loan_principal: price * (1 - deposit), the amount borrowed
        periods_per_year: 12 for monthly, 1 for annual repayments

    Raises:
        DomainError: If price is negative, term is negative, or frequency is
            not a Frequency
    """
    price: Nominal
    deposit: BoundedPercentage
    rate: BoundedPercentage
    term: float
    frequency: Frequency = Frequency.MONTHLY
    stamp_duty: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.price, Nominal):
            raise DomainError("price", self.price, "a Nominal; use Mortgage.create for raw numbers")
        for name in ("deposit", "rate"):
            if not isinstance(getattr(self, name), BoundedPercentage):
                raise DomainError(name, getattr(self, name),
                                  "a BoundedPercentage; use Mortgage.create for raw numbers")
        if require_finite("price", self.price.amount) < 0:
            raise DomainError("price", self.price.amount, ">= 0")
        object.__setattr__(self, "term", require_non_negative("term", self.term))
        if not isinstance(self.frequency, Frequency):
            Frequency.coerce(self.frequency)
            raise DomainError("frequency", self.frequency,
                              "a Frequency; use Mortgage.create for strings")

    @classmethod
    def create(
            cls,
            price: Nominal | float,
            deposit: BoundedPercentage | float,
            rate: BoundedPercentage | float,
            term: float,
            frequency: Frequency | str = Frequency.MONTHLY,
            stamp_duty: bool = True
    ) -> Mortgage:
        """
        Build a Mortgage from raw or typed inputs.

        Numbers are coerced explicitly: price into a Nominal in the default
        currency, deposit and rate into BoundedPercentages. Typed values pass
        through unchanged.

        Example:
            >>> m = Mortgage.create(100_000, 0.1, 0.0597, 25)
            >>> m.loan_principal
            90000.0
        """
        return cls(
            price=as_nominal(price, field="price"),
            deposit=as_percentage(deposit, field="deposit"),
            rate=as_percentage(rate, field="rate"),
            term=term,
            frequency=Frequency.coerce(frequency),
            stamp_duty=bool(stamp_duty),
        )

    def replace(self, **changes: object) -> Mortgage:
        """
        Copy with some fields replaced; replacements are coerced as in create().

        A numeric price keeps this mortgage's currency.
        """
        if "price" in changes:
            changes["price"] = as_nominal(changes["price"], self.currency, field="price")
        fields = {
            "price": self.price,
            "deposit": self.deposit,
            "rate": self.rate,
            "term": self.term,
            "frequency": self.frequency,
            "stamp_duty": self.stamp_duty,
        }
        unknown = set(changes) - set(fields)
        if unknown:
            raise DomainError("field", sorted(unknown), sorted(fields))
        fields.update(changes)
        return Mortgage.create(**fields)

    @property
    def price_amount(self) -> float:
        return self.price.amount

    @property
    def currency(self) -> Currency:
        return self.price.currency

    @property
    def loan_principal(self) -> float:
        """Amount borrowed: price * (1 - deposit)."""
        return self.price.amount * (1 - self.deposit.value)

    @property
    def periods_per_year(self) -> int:
        return self.frequency.periods_per_year

    def period_rate(self, periods_per_year: int = 1) -> float:
        return period_rate(self, periods_per_year)


def period_rate(mortgage: Mortgage, periods_per_year: int = 1) -> float:
    """
    Effective interest rate over one 1/d-year period.

    Compounds geometrically from the annual rate:

        i = (1 + rate)^(1/d) - 1

    This is not rate / d; the two differ and only the geometric form makes
    d periods at rate i equal one year at the annual rate.

    Args:
        mortgage: Loan whose annual rate is used
        periods_per_year: d, number of periods per year (default 1 = annual)

    Returns:
        Period rate as a decimal
    """
    if periods_per_year <= 0:
        raise DomainError("periods_per_year", periods_per_year, "> 0")
    # A fractional power of a negative growth factor has no real value
    if mortgage.rate.value <= -1:
        raise DomainError("rate", mortgage.rate.value, "> -1")
    return (1 + mortgage.rate.value) ** (1 / periods_per_year) - 1
