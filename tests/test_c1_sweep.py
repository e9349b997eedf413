"""
Unit tests for parameter sweeps.

Verifies that sweep() varies exactly one parameter, keeps input order,
reports shared axis ranges, rejects bad input before doing any work, and
gives the same result in worker processes as in-process.

Version: 0.1.0
Last Updated: 2026-10-17
Status: Active
"""

import unittest

import numpy as np

from mortgage_finances import (
    Currency,
    DomainError,
    Mortgage,
    Nominal,
    SweepVariable,
    repayment,
    sweep,
    vary,
)

RATES = [0.01, 0.03, 0.05]


def reference_mortgage(**overrides) -> Mortgage:
    params = dict(price=100_000, deposit=0.1, rate=0.0597, term=25)
    params.update(overrides)
    return Mortgage.create(**params)


class TestSweep(unittest.TestCase):

    def setUp(self):
        self.base = reference_mortgage()

    def test_rate_sweep(self):
        result = sweep(self.base, "rate", RATES)
        self.assertIs(result.variable, SweepVariable.RATE)
        self.assertEqual(len(result), 3)
        self.assertEqual(result.values, tuple(RATES))
        self.assertEqual([m.rate.value for m in result.mortgages], RATES)
        self.assertEqual(
            list(result.repayments), [repayment(m) for m in result.mortgages])
        self.assertTrue(np.all(np.diff(result.repayments) > 0))
        self.assertEqual(len(set(result.repayments)), 3)

    def test_only_swept_parameter_changes(self):
        result = sweep(self.base, SweepVariable.DEPOSIT, [0.0, 0.2])
        for m, value in zip(result.mortgages, [0.0, 0.2]):
            self.assertEqual(m.deposit.value, value)
            self.assertEqual(m.price, self.base.price)
            self.assertEqual(m.rate, self.base.rate)
            self.assertEqual(m.term, self.base.term)
            self.assertIs(m.frequency, self.base.frequency)
            self.assertEqual(m.stamp_duty, self.base.stamp_duty)

    def test_order_matches_input(self):
        result = sweep(self.base, "rate", [0.05, 0.01, 0.03])
        self.assertEqual([m.rate.value for m in result.mortgages], [0.05, 0.01, 0.03])
        self.assertGreater(result.repayments[0], result.repayments[2])
        self.assertGreater(result.repayments[2], result.repayments[1])

    def test_value_range(self):
        result = sweep(self.base, "rate", RATES)
        payments = np.concatenate([s.cumulative_payments for s in result.schedules])
        self.assertEqual(result.value_range, (float(payments.min()), float(payments.max())))
        self.assertEqual(result.value_range[0], 0.0)
        self.assertIsNone(result.time_range)

    def test_term_sweep_time_range(self):
        result = sweep(self.base, "term", [10, 20, 30])
        self.assertEqual(result.time_range, (0.0, 30.0))
        self.assertEqual([len(s) for s in result.schedules], [121, 241, 361])

    def test_price_sweep_keeps_currency(self):
        won = Currency("WON", {"£": 1.0, "WON": 1516.67})
        base = reference_mortgage(price=Nominal(1e8, won))
        result = sweep(base, "price", [1e8, 2e8])
        for m in result.mortgages:
            self.assertEqual(m.currency, won)
        self.assertAlmostEqual(result.repayments[1], 2 * result.repayments[0], places=6)

    def test_unknown_variable(self):
        with self.assertRaises(DomainError) as ctx:
            sweep(self.base, "frequency", ["annually"])
        self.assertEqual(ctx.exception.field, "variable")
        self.assertIn("term", str(ctx.exception))

    def test_empty_values(self):
        with self.assertRaises(DomainError):
            sweep(self.base, "rate", [])

    def test_invalid_value_fails_whole_sweep(self):
        with self.assertRaises(DomainError):
            sweep(self.base, "term", [10, -5, 20])
        with self.assertRaises(DomainError):
            sweep(self.base, "rate", [0.01, 11.0])

    def test_invalid_max_workers(self):
        with self.assertRaises(DomainError):
            sweep(self.base, "rate", RATES, max_workers=0)

    def test_result_compares_by_identity(self):
        a = sweep(self.base, "rate", RATES)
        b = sweep(self.base, "rate", RATES)
        self.assertEqual(a, a)
        self.assertNotEqual(a, b)
        self.assertEqual(len({a, b}), 2)

    def test_vary(self):
        self.assertEqual(vary(self.base, "term", 15).term, 15.0)
        self.assertEqual(vary(self.base, SweepVariable.PRICE, 5).price_amount, 5.0)


class TestParallelSweep(unittest.TestCase):

    def test_parallel_matches_serial(self):
        base = reference_mortgage()
        values = [0.01, 0.02, 0.03, 0.04, 0.05, 0.06]
        serial = sweep(base, "rate", values)
        parallel = sweep(base, "rate", values, max_workers=2)
        self.assertEqual(parallel.mortgages, serial.mortgages)
        self.assertEqual(parallel.repayments, serial.repayments)
        self.assertEqual(parallel.value_range, serial.value_range)
        for a, b in zip(parallel.schedules, serial.schedules):
            for series_a, series_b in zip(a.as_tuple(), b.as_tuple()):
                np.testing.assert_array_equal(series_a, series_b)
                self.assertFalse(series_a.flags.writeable)
                self.assertFalse(series_b.flags.writeable)


if __name__ == "__main__":
    unittest.main()
