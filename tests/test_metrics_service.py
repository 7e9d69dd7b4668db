#!/usr/bin/env python3
"""
Tests for the MetricsEngine: every KPI derived from one monthly record.
"""

import unittest
from dataclasses import replace
from decimal import Decimal

from school_dashboard.dashboard.calculators import MonthlyRecord, PerformanceMetric
from school_dashboard.dashboard.services.metrics_service import MetricsEngine


def make_record(**overrides):
    values = dict(
        month='March', year=2024,
        leads=40, appointments=20, showed=16, enrollments=10,
        pif=Decimal('1000'), down_payments=Decimal('500'), event_revenue=Decimal('200'),
        pro_shop_sales=Decimal('50'), mrr=Decimal('300'),
        students_start=100, students_end=95
    )
    values.update(overrides)
    return MonthlyRecord(**values)


class TestMetricsEngine(unittest.TestCase):

    def setUp(self):
        self.engine = MetricsEngine()

    def test_typical_month(self):
        metrics = self.engine.calculate(make_record())

        self.assertEqual(metrics.total_revenue, Decimal('2050'))
        self.assertEqual(metrics.churn_rate, 14)
        self.assertEqual(metrics.churn_status, 'danger')
        self.assertEqual(metrics.average_monthly_retention, 7)
        self.assertEqual(metrics.average_student_count, 98)
        self.assertEqual(metrics.student_value, 21)
        # 7.33 months x 20.92 per student, not 7 x 21
        self.assertEqual(metrics.lifetime_value, 153)

    def test_conversion_rates(self):
        rates = self.engine.calculate(make_record()).conversion_rates

        self.assertEqual(rates['appointment_rate'], PerformanceMetric(50, 50, 'success'))
        self.assertEqual(rates['show_rate'], PerformanceMetric(80, 80, 'success'))
        self.assertEqual(rates['enrollment_rate'], PerformanceMetric(63, 80, 'danger'))

    def test_net_growth_gives_negative_retention(self):
        metrics = self.engine.calculate(make_record(students_end=120))

        self.assertEqual(metrics.churn_rate, -9)
        self.assertEqual(metrics.churn_status, 'success')
        self.assertEqual(metrics.average_monthly_retention, -11)
        self.assertEqual(metrics.average_student_count, 110)
        self.assertEqual(metrics.student_value, 19)
        self.assertEqual(metrics.lifetime_value, -205)

    def test_empty_record(self):
        metrics = self.engine.calculate(MonthlyRecord(month='January', year=2024))

        self.assertEqual(metrics.total_revenue, Decimal('0'))
        self.assertEqual(metrics.churn_rate, 0)
        self.assertEqual(metrics.average_monthly_retention, 0)
        self.assertEqual(metrics.average_student_count, 0)
        self.assertEqual(metrics.student_value, 0)
        self.assertEqual(metrics.lifetime_value, 0)
        for metric in metrics.conversion_rates.values():
            self.assertEqual(metric.value, 0)

    def test_same_input_same_output(self):
        record = make_record()
        self.assertEqual(self.engine.calculate(record), self.engine.calculate(record))

    def test_record_is_not_modified(self):
        record = make_record()
        snapshot = replace(record)
        self.engine.calculate(record)
        self.assertEqual(record, snapshot)

    def test_small_churn_keeps_full_precision_downstream(self):
        # lost 3 of 1000 -> churn 0.3%, shown as 0
        metrics = self.engine.calculate(make_record(enrollments=0, students_start=1000, students_end=997))

        self.assertEqual(metrics.churn_rate, 0)
        self.assertEqual(metrics.churn_status, 'success')
        self.assertEqual(metrics.average_monthly_retention, 333)
        self.assertEqual(metrics.average_student_count, 999)
        self.assertEqual(metrics.student_value, 2)
        # 333.33 months x 2.052 per student
        self.assertEqual(metrics.lifetime_value, 684)

    def test_configured_targets(self):
        engine = MetricsEngine({'enrollment_rate': 60})
        rates = engine.calculate(make_record()).conversion_rates

        self.assertEqual(rates['enrollment_rate'], PerformanceMetric(63, 60, 'success'))
        self.assertEqual(rates['appointment_rate'].target, 50)

    def test_to_dict(self):
        result = self.engine.calculate(make_record()).to_dict()

        self.assertEqual(result['total_revenue'], '2050.00')
        self.assertEqual(result['conversion_rates']['show_rate'], {'value': 80, 'target': 80, 'status': 'success'})
        self.assertEqual(result['lifetime_value'], 153)


if __name__ == '__main__':
    unittest.main()
