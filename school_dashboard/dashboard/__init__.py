# Dashboard Module
#
# Metrics engine, goal evaluation, record storage and exports for the
# school performance dashboard.

from .services.dashboard_service import DashboardService
from .services.metrics_service import MetricsEngine, DerivedMetrics

__all__ = [
    'DashboardService',
    'MetricsEngine',
    'DerivedMetrics'
]
