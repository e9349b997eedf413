"""
Unit tests for the repayment solver and its inverse, implied_rate.

Verifies the level-payment identity L = d * P * a for monthly and annual
mortgages, the zero-rate and zero-term edge cases, and that implied_rate
recovers the rate a repayment was computed from.

Version: 0.1.0
Last Updated: 2026-10-17
Status: Active
"""

import unittest

import numpy as np

from mortgage_finances import (
    DomainError,
    Mortgage,
    implied_rate,
    period_rate,
    repayment,
)
from tests.utilities import generate_random_mortgages

DECIMAL_PLACES_FOR_ASSERTIONS: int = 8


def reference_mortgage(**overrides) -> Mortgage:
    params = dict(price=100_000, deposit=0.1, rate=0.0597, term=25)
    params.update(overrides)
    return Mortgage.create(**params)


def present_value(payment: float, i: float, periods: int) -> float:
    """PV of `periods` end-of-period payments at period rate i."""
    return payment * (1 - (1 + i) ** (-periods)) / i


class TestRepayment(unittest.TestCase):

    def test_reference_monthly_repayment(self):
        P = repayment(reference_mortgage())
        self.assertAlmostEqual(P, 569.60, delta=0.05)

    def test_monthly_repayment_discharges_principal(self):
        m = reference_mortgage()
        i = period_rate(m, 12)
        self.assertAlmostEqual(present_value(repayment(m), i, 300), 90_000.0,
                               places=DECIMAL_PLACES_FOR_ASSERTIONS)

    def test_annual_repayment_matches_textbook_annuity(self):
        m = reference_mortgage(frequency="annually")
        r = 0.0597
        expected = 90_000 * r / (1 - (1 + r) ** (-25))
        self.assertAlmostEqual(repayment(m), expected, places=DECIMAL_PLACES_FOR_ASSERTIONS)

    def test_identity_for_random_mortgages(self):
        for m in generate_random_mortgages(50):
            d = m.periods_per_year
            n = int(m.term * d)
            pv = present_value(repayment(m), period_rate(m, d), n)
            self.assertAlmostEqual(pv / m.loan_principal, 1.0, places=10, msg=str(m))

    def test_repayment_increases_with_rate(self):
        rates = [0.0, 0.01, 0.03, 0.05, 0.1]
        with self.assertWarns(UserWarning):
            payments = [repayment(reference_mortgage(rate=r)) for r in rates]
        self.assertTrue(np.all(np.diff(payments) > 0))

    def test_zero_rate_is_straight_line(self):
        with self.assertWarns(UserWarning):
            P = repayment(reference_mortgage(rate=0))
        self.assertAlmostEqual(P, 90_000 / 300, places=DECIMAL_PLACES_FOR_ASSERTIONS)

    def test_near_zero_rate_is_continuous(self):
        with self.assertWarns(UserWarning):
            at_zero = repayment(reference_mortgage(rate=0))
        near_zero = repayment(reference_mortgage(rate=1e-7))
        self.assertAlmostEqual(near_zero, at_zero, delta=0.01)

    def test_zero_term(self):
        with self.assertWarns(UserWarning):
            self.assertEqual(repayment(reference_mortgage(term=0)), 0.0)

    def test_zero_principal(self):
        self.assertEqual(repayment(reference_mortgage(deposit=1.0)), 0.0)

    def test_negative_rate(self):
        P = repayment(reference_mortgage(rate=-0.01))
        self.assertLess(P, 90_000 / 300)
        self.assertGreater(P, 0)


class TestImpliedRate(unittest.TestCase):

    def test_recovers_rate(self):
        for rate in (0.0597, 0.01, 0.12, -0.02):
            m = reference_mortgage(rate=rate)
            found = implied_rate(m, repayment(m))
            self.assertAlmostEqual(found, rate, places=DECIMAL_PLACES_FOR_ASSERTIONS)

    def test_recovers_rate_annual(self):
        m = reference_mortgage(rate=0.045, frequency="annually")
        self.assertAlmostEqual(implied_rate(m, repayment(m)), 0.045,
                               places=DECIMAL_PLACES_FOR_ASSERTIONS)

    def test_straight_line_payment_gives_zero_rate(self):
        found = implied_rate(reference_mortgage(), 300.0)
        self.assertAlmostEqual(found, 0.0, places=DECIMAL_PLACES_FOR_ASSERTIONS)

    def test_unreachable_target(self):
        with self.assertRaises(DomainError) as ctx:
            implied_rate(reference_mortgage(), -1.0)
        self.assertEqual(ctx.exception.field, "target_repayment")
        self.assertIsInstance(ctx.exception.__cause__, ValueError)


if __name__ == "__main__":
    unittest.main()
