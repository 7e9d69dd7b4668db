# Export Service
#
# Serializes monthly records to CSV and to a PDF performance report, and the
# admin school summaries to CSV. Every derived figure comes from the same
# calculators the dashboard uses.

import csv
import io
import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Sequence, Tuple, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from ..calculators import MonthlyRecord, RevenueCalculators, RetentionCalculators, BaseCalculator
from .record_repository import SchoolSummary
from ...utils.timezone_utils import now_in_timezone, format_for_display, date_stamp

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    'Month', 'Year', 'Leads', 'Appointments', 'Showed', 'Enrollments',
    'PIF', 'DownPayments', 'EventRevenue', 'ProShopSales', 'MRR',
    'StudentsStart', 'StudentsEnd', 'TotalRevenue', 'ChurnRate'
]

ADMIN_CSV_HEADERS = [
    'School Name', 'Email', 'Months Tracked', 'Total Leads', 'Appointments',
    'Enrollments', 'Total Revenue', 'Last Entry'
]

REPORT_TITLE = 'School Performance Report'
REPORT_TABLE_HEADERS = ['Month', 'Leads', 'Enrollments', 'Revenue', 'Churn']


@dataclass(frozen=True)
class ReportSummary:
    """Aggregate statistics printed at the top of the PDF report"""
    total_leads: int
    total_enrollments: int
    total_revenue: Decimal
    average_churn: Decimal


def _churn_for(record: MonthlyRecord) -> int:
    return RetentionCalculators.calculate_churn_rate(record.students_start, record.students_end, record.enrollments)


def _write_csv(headers: Sequence[str], rows: List[list]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\n')
    writer.writerow(headers)
    writer.writerows(rows)
    return buffer.getvalue().rstrip('\n')


def build_csv_rows(records: Sequence[MonthlyRecord]) -> List[list]:
    """One row per record in CSV_HEADERS order; revenue and churn to 2 decimals"""
    rows = []
    for record in records:
        total_revenue = RevenueCalculators.calculate_total_revenue(record)
        rows.append([
            record.month, record.year, record.leads, record.appointments, record.showed, record.enrollments,
            record.pif, record.down_payments, record.event_revenue, record.pro_shop_sales, record.mrr,
            record.students_start, record.students_end,
            BaseCalculator.format_money(total_revenue),
            BaseCalculator.format_money(_churn_for(record)),
        ])
    return rows


def export_to_csv(records: Sequence[MonthlyRecord], now: Optional[datetime] = None) -> Tuple[str, str]:
    """
    Serialize records to CSV.

    Returns:
        (filename, csv_text)
    """
    filename = f"school-data-{date_stamp(now)}.csv"
    logger.info(f"Exporting {len(records)} record(s) to {filename}")
    return filename, _write_csv(CSV_HEADERS, build_csv_rows(records))


def build_report_summary(records: Sequence[MonthlyRecord]) -> ReportSummary:
    """
    Sum leads, enrollments and total revenue, and average the churn rate.

    The average churn of an empty selection is 0.
    """
    churn_rates = [_churn_for(record) for record in records]
    return ReportSummary(
        total_leads=sum(record.leads for record in records),
        total_enrollments=sum(record.enrollments for record in records),
        total_revenue=sum((RevenueCalculators.calculate_total_revenue(record) for record in records), Decimal('0')),
        average_churn=BaseCalculator.safe_divide(sum(churn_rates), len(churn_rates)),
    )


def build_report_table(records: Sequence[MonthlyRecord]) -> List[List[str]]:
    """Header plus one row per record for the PDF table"""
    table = [list(REPORT_TABLE_HEADERS)]
    for record in records:
        table.append([
            f"{record.month} {record.year}",
            str(record.leads),
            str(record.enrollments),
            f"${BaseCalculator.format_money(RevenueCalculators.calculate_total_revenue(record))}",
            f"{BaseCalculator.format_money(_churn_for(record))}%",
        ])
    return table


def export_to_pdf(records: Sequence[MonthlyRecord], now: Optional[datetime] = None) -> Tuple[str, bytes]:
    """
    Render the performance report as a PDF.

    Returns:
        (filename, pdf_bytes)
    """
    now = now or now_in_timezone()
    summary = build_report_summary(records)

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, title=REPORT_TITLE)
    styles = getSampleStyleSheet()
    story = [
        Paragraph(REPORT_TITLE, styles['Title']),
        Paragraph(f"Generated: {format_for_display(now)}", styles['Normal']),
        Spacer(1, 12),
        Paragraph('Summary Statistics', styles['Heading2']),
        Paragraph(f"Total Leads: {summary.total_leads}", styles['Normal']),
        Paragraph(f"Total Enrollments: {summary.total_enrollments}", styles['Normal']),
        Paragraph(f"Total Revenue: ${BaseCalculator.format_money(summary.total_revenue)}", styles['Normal']),
        Paragraph(f"Average Churn Rate: {BaseCalculator.format_money(summary.average_churn)}%", styles['Normal']),
        Spacer(1, 12),
    ]

    table = Table(build_report_table(records), repeatRows=1)
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.lightgrey),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('ALIGN', (1, 1), (-1, -1), 'RIGHT'),
    ]))
    story.append(table)

    doc.build(story)
    filename = f"school-report-{date_stamp(now)}.pdf"
    logger.info(f"Rendered {len(records)} record(s) to {filename}")
    return filename, buffer.getvalue()


def export_school_summaries_to_csv(summaries: Sequence[SchoolSummary],
                                   now: Optional[datetime] = None) -> Tuple[str, str]:
    """Admin CSV of all schools; a school without entries shows 'N/A' as last entry"""
    rows = [
        [
            summary.school_name,
            summary.email or '',
            summary.months_tracked,
            summary.total_leads,
            summary.total_appointments,
            summary.total_enrollments,
            f"${BaseCalculator.format_money(summary.total_revenue)}",
            summary.last_entry_date or 'N/A',
        ]
        for summary in summaries
    ]
    filename = f"all-schools-report-{date_stamp(now)}.csv"
    return filename, _write_csv(ADMIN_CSV_HEADERS, rows)
