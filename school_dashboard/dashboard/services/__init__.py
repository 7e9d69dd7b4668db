# Dashboard Services Module
#
# Contains business logic services for dashboard functionality

from .metrics_service import MetricsEngine, DerivedMetrics
from .record_repository import RecordRepository, Account, SchoolSummary
from .dashboard_service import DashboardService, RecordNotFoundError, InvalidPeriodError, select_export_range

__all__ = [
    'MetricsEngine',
    'DerivedMetrics',
    'RecordRepository',
    'Account',
    'SchoolSummary',
    'DashboardService',
    'RecordNotFoundError',
    'InvalidPeriodError',
    'select_export_range'
]
