#!/usr/bin/env python3
"""
Tests for revenue, student value and lifetime value calculations.
"""

import unittest
from decimal import Decimal

from school_dashboard.dashboard.calculators import MonthlyRecord, RevenueCalculators


class TestTotalRevenue(unittest.TestCase):

    def test_sums_all_five_components(self):
        record = MonthlyRecord.from_dict({
            'month': 'March', 'year': 2024,
            'pif': 1000, 'downPayments': 500, 'eventRevenue': 200, 'proShopSales': 50, 'mrr': 300
        })
        self.assertEqual(RevenueCalculators.calculate_total_revenue(record), Decimal('2050'))

    def test_cents_do_not_drift(self):
        record = MonthlyRecord.from_dict({
            'month': 'March', 'year': 2024,
            'pif': 0.1, 'down_payments': 0.2, 'event_revenue': '19.99', 'mrr': 1234.56
        })
        self.assertEqual(RevenueCalculators.calculate_total_revenue(record), Decimal('1254.85'))

    def test_empty_record_has_no_revenue(self):
        record = MonthlyRecord(month='January', year=2024)
        self.assertEqual(RevenueCalculators.calculate_total_revenue(record), Decimal('0'))

    def test_does_not_mutate_record(self):
        record = MonthlyRecord(month='March', year=2024, pif=Decimal('10'), mrr=Decimal('5'))
        before = record.to_dict()
        RevenueCalculators.calculate_total_revenue(record)
        self.assertEqual(record.to_dict(), before)


class TestStudentValue(unittest.TestCase):

    def test_average_student_count_rounds_half_up(self):
        self.assertEqual(RevenueCalculators.calculate_average_student_count(100, 95), 98)
        self.assertEqual(RevenueCalculators.calculate_average_student_count(1, 0), 1)
        self.assertEqual(RevenueCalculators.calculate_average_student_count(0, 0), 0)

    def test_zero_students_returns_zero(self):
        self.assertEqual(RevenueCalculators.calculate_student_value(Decimal('2050'), 0), 0)

    def test_revenue_per_student(self):
        self.assertEqual(RevenueCalculators.calculate_student_value(Decimal('2050'), 50), 41)
        self.assertEqual(RevenueCalculators.calculate_student_value(Decimal('2050'), 98), 21)

    def test_exact_value_keeps_precision(self):
        exact = RevenueCalculators.calculate_student_value_exact(Decimal('2050'), 98)
        self.assertGreater(exact, Decimal('20.918'))
        self.assertLess(exact, Decimal('20.919'))


class TestLifetimeValue(unittest.TestCase):

    def test_retention_times_student_value(self):
        self.assertEqual(RevenueCalculators.calculate_lifetime_value(50, 41), 2050)

    def test_rounds_half_up(self):
        self.assertEqual(RevenueCalculators.calculate_lifetime_value(Decimal('7.5'), 3), 23)

    def test_zero_retention(self):
        self.assertEqual(RevenueCalculators.calculate_lifetime_value(0, 41), 0)


if __name__ == '__main__':
    unittest.main()
