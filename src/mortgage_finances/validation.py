# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

import math
from collections.abc import Iterable
from enum import Enum

__version__ = "0.1.0"


# =============================================================================
# Errors
# =============================================================================

class DomainError(ValueError):
    """
    An operation was given a value outside its accepted domain.

    Raised for unknown currency symbols, out-of-range percentages, negative
    prices or terms, and unrecognized frequencies, metrics or sweep variables.

    Attributes:
        field: Name of the offending parameter (e.g. "price")
        value: The rejected value
        allowed: Description of the valid set or range, if there is one
    """

    def __init__(self, field: str, value: object, allowed: object | None = None,
                 message: str | None = None) -> None:
        self.field = field
        self.value = value
        self.allowed = allowed
        if message is None:
            message = f"{field} = {value!r} is outside its domain"
            if allowed is not None:
                message += f"; allowed: {allowed}"
        super().__init__(message)


# =============================================================================
# Validation helpers
# =============================================================================

def require_finite(field: str, value: float) -> float:
    """Reject NaN/Inf and non-numeric input; return the value as float."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        try:
            value = float(value)
        except (TypeError, ValueError) as e:
            raise DomainError(field, value, "a real number") from e
    if not math.isfinite(value):
        raise DomainError(field, value, "a finite real number")
    return float(value)


def require_non_negative(field: str, value: float) -> float:
    """Raise DomainError if value < 0."""
    value = require_finite(field, value)
    if value < 0:
        raise DomainError(field, value, ">= 0")
    return value


def require_positive(field: str, value: float) -> float:
    """Raise DomainError if value <= 0."""
    value = require_finite(field, value)
    if value <= 0:
        raise DomainError(field, value, "> 0")
    return value


def require_in_range(
        field: str,
        value: float,
        minimum: float,
        maximum: float
) -> float:
    """
    Check minimum <= value <= maximum (both bounds inclusive).

    The message names whichever bound was violated, so a caller can tell a
    too-large rate from a too-small one without re-checking.

    Args:
        field: Parameter name for the error message
        value: Value to check
        minimum: Inclusive lower bound
        maximum: Inclusive upper bound

    Returns:
        The value as float

    Raises:
        DomainError: If value is non-finite or outside [minimum, maximum]
    """
    value = require_finite(field, value)
    if value > maximum:
        raise DomainError(
            field, value, f"[{minimum}, {maximum}]",
            message=f"{field} = {value} > maximum = {maximum}",
        )
    if value < minimum:
        raise DomainError(
            field, value, f"[{minimum}, {maximum}]",
            message=f"{field} = {value} < minimum = {minimum}",
        )
    return value


def coerce_choice(field: str, enum_cls: type[Enum], value: Enum | str) -> Enum:
    """
    Resolve value to a member of enum_cls.

    Accepts a member, a member's value ("monthly") or a member's name
    ("MONTHLY"). Anything else raises DomainError listing the member values.
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        for member in enum_cls:
            if value in (member.value, member.name):
                return member
    allowed = [member.value for member in enum_cls]
    raise DomainError(field, value, allowed, message=f"{field} = {value!r} not in {allowed}")


def require_member(field: str, value: object, allowed: Iterable[object]) -> object:
    """Raise DomainError listing the allowed set if value is not in it."""
    allowed = list(allowed)
    if value not in allowed:
        raise DomainError(
            field, value, allowed,
            message=f"{field} = {value!r} not in {allowed}",
        )
    return value
