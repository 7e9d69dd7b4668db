#!/usr/bin/env python3
"""
Tests for CSV/PDF exports and export range selection.
"""

import unittest
from datetime import datetime
from decimal import Decimal

import pytz

from school_dashboard.dashboard.calculators import MonthlyRecord
from school_dashboard.dashboard.services.dashboard_service import (
    InvalidPeriodError,
    select_export_range,
    parse_period_key,
)
from school_dashboard.dashboard.services.record_repository import SchoolSummary
from school_dashboard.dashboard.services.export_service import (
    CSV_HEADERS,
    ADMIN_CSV_HEADERS,
    export_to_csv,
    export_to_pdf,
    build_report_summary,
    build_report_table,
    export_school_summaries_to_csv,
)

NOON_UTC = pytz.utc.localize(datetime(2024, 3, 15, 12, 0, 0))


def make_record(month='March', year=2024, **overrides):
    values = dict(
        leads=40, appointments=20, showed=16, enrollments=10,
        pif=Decimal('1000'), down_payments=Decimal('500'), event_revenue=Decimal('200'),
        pro_shop_sales=Decimal('50'), mrr=Decimal('300'),
        students_start=100, students_end=95
    )
    values.update(overrides)
    return MonthlyRecord(month=month, year=year, **values)


class TestCsvExport(unittest.TestCase):

    def test_header_and_row(self):
        filename, text = export_to_csv([make_record()], now=NOON_UTC)
        lines = text.split('\n')

        self.assertEqual(filename, 'school-data-2024-03-15.csv')
        self.assertEqual(lines[0], ','.join(CSV_HEADERS))
        self.assertEqual(lines[1], 'March,2024,40,20,16,10,1000,500,200,50,300,100,95,2050.00,14.00')
        self.assertEqual(len(lines), 2)

    def test_negative_churn_is_written(self):
        _, text = export_to_csv([make_record(students_end=120)], now=NOON_UTC)
        self.assertTrue(text.split('\n')[1].endswith(',-9.00'))

    def test_empty_export_has_header_only(self):
        _, text = export_to_csv([], now=NOON_UTC)
        self.assertEqual(text, ','.join(CSV_HEADERS))

    def test_filename_uses_display_timezone(self):
        # 02:00 UTC is still the previous evening in New York
        early = pytz.utc.localize(datetime(2024, 3, 15, 2, 0, 0))
        filename, _ = export_to_csv([], now=early)
        self.assertEqual(filename, 'school-data-2024-03-14.csv')


class TestPdfReport(unittest.TestCase):

    def test_summary(self):
        records = [make_record('January'), make_record('February', students_end=120)]
        summary = build_report_summary(records)

        self.assertEqual(summary.total_leads, 80)
        self.assertEqual(summary.total_enrollments, 20)
        self.assertEqual(summary.total_revenue, Decimal('4100'))
        # (14 + -9) / 2
        self.assertEqual(summary.average_churn, Decimal('2.5'))

    def test_empty_summary(self):
        summary = build_report_summary([])

        self.assertEqual(summary.total_leads, 0)
        self.assertEqual(summary.total_revenue, Decimal('0'))
        self.assertEqual(summary.average_churn, Decimal('0'))

    def test_table_rows(self):
        table = build_report_table([make_record()])

        self.assertEqual(table[0], ['Month', 'Leads', 'Enrollments', 'Revenue', 'Churn'])
        self.assertEqual(table[1], ['March 2024', '40', '10', '$2050.00', '14.00%'])

    def test_renders_pdf(self):
        filename, body = export_to_pdf([make_record()], now=NOON_UTC)

        self.assertEqual(filename, 'school-report-2024-03-15.pdf')
        self.assertTrue(body.startswith(b'%PDF'))

    def test_renders_empty_pdf(self):
        _, body = export_to_pdf([], now=NOON_UTC)
        self.assertTrue(body.startswith(b'%PDF'))


class TestAdminCsv(unittest.TestCase):

    def test_school_rows(self):
        summaries = [
            SchoolSummary(id=2, school_name='Alpha Karate', email='alpha@example.com', months_tracked=2,
                          total_leads=80, total_appointments=40, total_enrollments=20,
                          total_revenue=Decimal('4100'), last_entry_date='2024-03-01'),
            SchoolSummary(id=3, school_name='Beta Dojo', email=None, months_tracked=0,
                          total_leads=0, total_appointments=0, total_enrollments=0,
                          total_revenue=Decimal('0'), last_entry_date=None),
        ]

        filename, text = export_school_summaries_to_csv(summaries, now=NOON_UTC)
        lines = text.split('\n')

        self.assertEqual(filename, 'all-schools-report-2024-03-15.csv')
        self.assertEqual(lines[0], ','.join(ADMIN_CSV_HEADERS))
        self.assertEqual(lines[1], 'Alpha Karate,alpha@example.com,2,80,40,20,$4100.00,2024-03-01')
        self.assertEqual(lines[2], 'Beta Dojo,,0,0,0,0,$0.00,N/A')


class TestExportRange(unittest.TestCase):

    def setUp(self):
        self.records = [
            make_record('January', 2025),
            make_record('March', 2024),
            make_record('February', 2024),
            make_record('December', 2024),
        ]

    def periods(self, records):
        return [record.period_key for record in records]

    def test_no_bounds_sorts_chronologically(self):
        self.assertEqual(
            self.periods(select_export_range(self.records)),
            ['February-2024', 'March-2024', 'December-2024', 'January-2025']
        )

    def test_bounds_are_inclusive(self):
        selected = select_export_range(self.records, 'March-2024', 'December-2024')
        self.assertEqual(self.periods(selected), ['March-2024', 'December-2024'])

    def test_compares_by_calendar_not_text(self):
        # 'January-2025' sorts before 'March-2024' as text
        selected = select_export_range(self.records, 'March-2024', None)
        self.assertEqual(self.periods(selected), ['March-2024', 'December-2024', 'January-2025'])

    def test_empty_range(self):
        self.assertEqual(select_export_range(self.records, 'June-2024', 'July-2024'), [])

    def test_invalid_period(self):
        with self.assertRaises(InvalidPeriodError):
            select_export_range(self.records, 'Smarch-2024', None)
        with self.assertRaises(InvalidPeriodError):
            parse_period_key('March2024')

    def test_parse_period_key(self):
        self.assertEqual(parse_period_key('March-2024'), (2024, 2))


if __name__ == '__main__':
    unittest.main()
