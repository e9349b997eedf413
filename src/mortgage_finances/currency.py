# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
"""
Currencies and monetary values.

A Currency is a symbol plus a table of conversion factors relative to some
common base. A Nominal pairs an amount with a Currency. Converting a Nominal
rescales the amount by the ratio of the two factors and keeps the table, so
converting back recovers the original amount:

    amount' = amount / conversions[from] * conversions[to]

Example:
    >>> gbp = Currency("£", {"£": 1.0, "WON": 1516.67})
    >>> price = Nominal(500_000, gbp)
    >>> round(convert(convert(price, "WON"), "£").amount, 6)
    500000.0
"""
from __future__ import annotations

import numbers
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from mortgage_finances.percent import BoundedPercentage
from mortgage_finances.validation import DomainError, require_member, require_positive

__version__ = "0.1.0"

DEFAULT_CURRENCY_SYMBOL = "£"


# =============================================================================
# Currency
# =============================================================================

@dataclass(frozen=True, init=False)
class Currency:
    """
    A currency symbol and its conversion table.

    Args:
        symbol: Currency identifier, e.g. "£" or "WON"
        conversions: Factor per symbol relative to a common base. Defaults to
            a single entry {symbol: 1}.

    Raises:
        DomainError: If symbol is not a key of conversions, or a factor is
            not a finite positive number
    """
    symbol: str
    # Compared but not hashed; Currency hashes on its symbol.
    conversions: dict[str, float] = field(hash=False)

    def __init__(self, symbol: str, conversions: Mapping[str, float] | None = None) -> None:
        if conversions is None:
            conversions = {symbol: 1.0}
        table = {
            key: require_positive(f"conversions[{key!r}]", factor)
            for key, factor in conversions.items()
        }
        require_member("symbol", symbol, table.keys())
        object.__setattr__(self, "symbol", symbol)
        object.__setattr__(self, "conversions", table)

    def lookup(self) -> Mapping[str, float]:
        """Read-only view of the conversion table."""
        return MappingProxyType(self.conversions)

    def factor(self, symbol: str | None = None) -> float:
        """Conversion factor for symbol (this currency's own by default)."""
        symbol = self.symbol if symbol is None else symbol
        require_member("symbol", symbol, self.conversions.keys())
        return self.conversions[symbol]

    def reexpress(self, target: str) -> Currency:
        """Same conversion table, expressed in the target symbol."""
        require_member("target", target, self.conversions.keys())
        return Currency(target, self.conversions)


DEFAULT_CURRENCY = Currency(DEFAULT_CURRENCY_SYMBOL)


# =============================================================================
# Nominal
# =============================================================================

@dataclass(frozen=True)
class Nominal:
    """
    A monetary amount in a currency.

    The sign of amount is not checked here; consumers such as Mortgage
    validate it for their own use.
    """
    amount: float
    currency: Currency = DEFAULT_CURRENCY

    @property
    def symbol(self) -> str:
        return self.currency.symbol

    def lookup(self) -> Mapping[str, float]:
        return self.currency.lookup()

    def convert(self, target: str) -> Nominal:
        return convert(self, target)

    def _require_same_currency(self, other: Nominal) -> None:
        if other.currency.symbol != self.currency.symbol:
            raise DomainError(
                "currency", other.currency.symbol, [self.currency.symbol],
                message=(
                    f"cannot combine {other.currency.symbol} with "
                    f"{self.currency.symbol}; convert first"
                ),
            )

    def __add__(self, other: object) -> Nominal:
        if not isinstance(other, Nominal):
            return NotImplemented
        self._require_same_currency(other)
        return Nominal(self.amount + other.amount, self.currency)

    def __sub__(self, other: object) -> Nominal:
        if not isinstance(other, Nominal):
            return NotImplemented
        self._require_same_currency(other)
        return Nominal(self.amount - other.amount, self.currency)

    def __mul__(self, other: object) -> Nominal:
        if isinstance(other, (numbers.Real, BoundedPercentage)) and not isinstance(other, bool):
            return Nominal(self.amount * float(other), self.currency)
        return NotImplemented

    __rmul__ = __mul__

    def __neg__(self) -> Nominal:
        return Nominal(-self.amount, self.currency)

    def __float__(self) -> float:
        return float(self.amount)


def convert(nominal: Nominal, target: str) -> Nominal:
    """
    Convert nominal into the target currency symbol.

    Args:
        nominal: Value to convert
        target: Symbol present in the nominal's conversion table

    Returns:
        New Nominal in the target symbol, same conversion table

    Raises:
        DomainError: If target is not in the conversion table
    """
    currency = nominal.currency.reexpress(target)
    table = currency.conversions
    amount = nominal.amount / table[nominal.currency.symbol] * table[target]
    return Nominal(amount, currency)


def as_nominal(
        value: Nominal | float,
        currency: Currency | None = None,
        field: str = "amount"
) -> Nominal:
    """
    Coerce value into a Nominal.

    Nominals pass through untouched (currency is ignored for them). Real
    numbers are wrapped in currency, or the default "£" currency.

    Args:
        value: Nominal or real number
        currency: Currency for numeric input (default "£")
        field: Parameter name used in error messages (e.g. "price")

    Raises:
        DomainError: If value is neither a Nominal nor a real number
    """
    if isinstance(value, Nominal):
        return value
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise DomainError(field, value, "a Nominal or a real number")
    return Nominal(float(value), DEFAULT_CURRENCY if currency is None else currency)
