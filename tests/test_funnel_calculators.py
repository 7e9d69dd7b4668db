#!/usr/bin/env python3
"""
Tests for funnel conversion rates: percentage rounding, status
classification and the three dashboard conversion rates.
"""

import unittest

from school_dashboard.dashboard.calculators import MonthlyRecord, FunnelCalculators, PerformanceMetric


class TestPercentage(unittest.TestCase):
    """calculate_percentage rounds half-up and never divides by zero"""

    def test_zero_total_returns_zero(self):
        self.assertEqual(FunnelCalculators.calculate_percentage(0, 0), 0)
        self.assertEqual(FunnelCalculators.calculate_percentage(5, 0), 0)

    def test_exact_percentages(self):
        self.assertEqual(FunnelCalculators.calculate_percentage(25, 100), 25)
        self.assertEqual(FunnelCalculators.calculate_percentage(20, 40), 50)

    def test_rounds_to_nearest_integer(self):
        self.assertEqual(FunnelCalculators.calculate_percentage(1, 3), 33)
        self.assertEqual(FunnelCalculators.calculate_percentage(2, 3), 67)

    def test_halves_round_up(self):
        self.assertEqual(FunnelCalculators.calculate_percentage(1, 8), 13)
        self.assertEqual(FunnelCalculators.calculate_percentage(1, 200), 1)
        self.assertEqual(FunnelCalculators.calculate_percentage(5, 8), 63)

    def test_returns_int(self):
        self.assertIsInstance(FunnelCalculators.calculate_percentage(1, 3), int)


class TestClassifyStatus(unittest.TestCase):

    def test_at_or_above_target_is_success(self):
        self.assertEqual(FunnelCalculators.classify_status(50, 50), 'success')
        self.assertEqual(FunnelCalculators.classify_status(95, 80), 'success')

    def test_within_ten_percent_is_warning(self):
        self.assertEqual(FunnelCalculators.classify_status(45, 50), 'warning')
        self.assertEqual(FunnelCalculators.classify_status(72, 80), 'warning')
        self.assertEqual(FunnelCalculators.classify_status(79, 80), 'warning')

    def test_below_ninety_percent_is_danger(self):
        self.assertEqual(FunnelCalculators.classify_status(44, 50), 'danger')
        self.assertEqual(FunnelCalculators.classify_status(71, 80), 'danger')
        self.assertEqual(FunnelCalculators.classify_status(0, 80), 'danger')


class TestConversionRates(unittest.TestCase):

    def setUp(self):
        self.record = MonthlyRecord(
            month='March', year=2024,
            leads=40, appointments=20, showed=15, enrollments=12
        )

    def test_funnel_metric_carries_value_target_and_status(self):
        metric = FunnelCalculators.calculate_funnel_metric(15, 20, 80)
        self.assertEqual(metric, PerformanceMetric(value=75, target=80, status='warning'))
        self.assertEqual(metric.to_dict(), {'value': 75, 'target': 80, 'status': 'warning'})

    def test_default_targets(self):
        rates = FunnelCalculators.calculate_conversion_rates(self.record)

        self.assertEqual(rates['appointment_rate'], PerformanceMetric(50, 50, 'success'))
        self.assertEqual(rates['show_rate'], PerformanceMetric(75, 80, 'warning'))
        self.assertEqual(rates['enrollment_rate'], PerformanceMetric(80, 80, 'success'))

    def test_target_override(self):
        rates = FunnelCalculators.calculate_conversion_rates(self.record, {'appointment_rate': 60})

        self.assertEqual(rates['appointment_rate'], PerformanceMetric(50, 60, 'danger'))
        self.assertEqual(rates['show_rate'].target, 80)

    def test_empty_funnel(self):
        rates = FunnelCalculators.calculate_conversion_rates(MonthlyRecord(month='January', year=2024))

        for metric in rates.values():
            self.assertEqual(metric.value, 0)
            self.assertEqual(metric.status, 'danger')


if __name__ == '__main__':
    unittest.main()
