"""Dashboard aggregation module"""

from .engine import (
    DashboardAggregator,
    DashboardSummary,
    SummaryStats,
    FrequencyChart,
    ChartPoint,
    stringify_label,
)

__all__ = [
    'DashboardAggregator',
    'DashboardSummary',
    'SummaryStats',
    'FrequencyChart',
    'ChartPoint',
    'stringify_label',
]
