#!/usr/bin/env python3
"""
Tests for churn rate and average monthly retention, including the net
growth case where churn goes negative.
"""

import unittest

from school_dashboard.dashboard.calculators import RetentionCalculators


class TestChurnRate(unittest.TestCase):

    def test_students_lost(self):
        # base 110, lost 15 -> 13.6 -> 14
        self.assertEqual(RetentionCalculators.calculate_churn_rate(100, 95, 10), 14)

    def test_net_growth_is_negative(self):
        # base 110, lost -10 -> -9.09 -> -9
        self.assertEqual(RetentionCalculators.calculate_churn_rate(100, 120, 10), -9)

    def test_empty_cohort_returns_zero(self):
        self.assertEqual(RetentionCalculators.calculate_churn_rate(0, 0, 0), 0)
        self.assertEqual(RetentionCalculators.calculate_churn_rate(0, 5, 0), 0)

    def test_no_change(self):
        self.assertEqual(RetentionCalculators.calculate_churn_rate(10, 10, 0), 0)

    def test_everyone_left(self):
        self.assertEqual(RetentionCalculators.calculate_churn_rate(20, 0, 5), 100)


class TestAverageRetention(unittest.TestCase):

    def test_zero_churn_returns_zero(self):
        self.assertEqual(RetentionCalculators.calculate_average_retention(0), 0)

    def test_reciprocal_of_churn(self):
        self.assertEqual(RetentionCalculators.calculate_average_retention(2), 50)
        self.assertEqual(RetentionCalculators.calculate_average_retention(3), 33)

    def test_halves_round_away_from_zero(self):
        self.assertEqual(RetentionCalculators.calculate_average_retention(8), 13)
        self.assertEqual(RetentionCalculators.calculate_average_retention(-8), -13)

    def test_negative_churn_passes_through(self):
        self.assertEqual(RetentionCalculators.calculate_average_retention(-9), -11)


class TestChurnStatus(unittest.TestCase):

    def test_thresholds(self):
        self.assertEqual(RetentionCalculators.classify_churn(4), 'success')
        self.assertEqual(RetentionCalculators.classify_churn(5), 'warning')
        self.assertEqual(RetentionCalculators.classify_churn(9), 'warning')
        self.assertEqual(RetentionCalculators.classify_churn(10), 'danger')

    def test_growth_is_success(self):
        self.assertEqual(RetentionCalculators.classify_churn(-9), 'success')


if __name__ == '__main__':
    unittest.main()
