"""Aggregation engine for submission dashboards"""
import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from pydantic import Field

from src.common.config import EngineConfig, settings
from src.common.records import (
    Record,
    discover_fields,
    ensure_record_batch,
    is_reserved_field,
)
from src.common.models import CamelModel

logger = logging.getLogger(__name__)


class ChartPoint(CamelModel):
    """Single bar of a frequency chart"""
    label: str
    value: int


class FrequencyChart(CamelModel):
    """Frequency distribution of one field"""
    title: str
    type: str = "bar"
    data: List[ChartPoint] = Field(default_factory=list)


class SummaryStats(CamelModel):
    """Headline numbers for a dashboard"""
    total_responses: int = 0
    completion_rate: float = 0.0
    last_updated: datetime


class DashboardSummary(CamelModel):
    """Dashboard data for a batch of submissions"""
    summary: SummaryStats
    charts: List[FrequencyChart] = Field(default_factory=list)
    key_metrics: List[Dict[str, Any]] = Field(default_factory=list)


def stringify_label(value: Any) -> str:
    """Render a value the way a JSON consumer would show it as a key"""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


class DashboardAggregator:
    """Computes summary statistics and frequency charts over a batch"""

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize aggregator

        Args:
            config: Engine configuration, global settings are used if omitted
            clock: Returns the completion timestamp, UTC now by default
        """
        self.config = config or settings.engine
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def aggregate(
        self,
        records: List[Record],
        objectives: Optional[List[Any]] = None
    ) -> DashboardSummary:
        """
        Build dashboard data for a batch

        Args:
            records: Submission records
            objectives: Research objectives, accepted for symmetry with the
                reporting tools and not used here

        Returns:
            DashboardSummary with headline stats and one chart per observed field

        Raises:
            InputShapeError: If records is not a sequence of mappings
        """
        batch = ensure_record_batch(records)
        logger.info(
            f"Aggregating {len(batch)} records "
            f"({len(objectives or [])} objectives, discovery={self.config.field_discovery})"
        )

        charts = []
        for field in self.chart_fields(batch):
            chart = self.build_chart(batch, field)
            if chart is not None:
                charts.append(chart)

        completion_rate = self.completion_rate(batch)

        return DashboardSummary(
            summary=SummaryStats(
                total_responses=len(batch),
                completion_rate=completion_rate,
                last_updated=self.clock()
            ),
            charts=charts,
            key_metrics=[]
        )

    def completion_rate(self, records: List[Record]) -> float:
        """Percentage of records whose status marks them complete"""
        if not records:
            return 0.0

        complete = sum(
            1 for record in records
            if record.get(self.config.status_field) == self.config.complete_status
        )
        return round(100 * complete / len(records), self.config.completion_rate_precision)

    def chart_fields(self, records: List[Record]) -> List[str]:
        """Fields to chart, reserved-prefix fields excluded"""
        fields = discover_fields(records, union=self.config.field_discovery == "union")
        return [
            field for field in fields
            if not is_reserved_field(field, self.config.reserved_prefix)
        ]

    def frequency_distribution(self, records: List[Record], field: str) -> Dict[str, int]:
        """
        Count occurrences of each distinct value of a field

        Returns:
            Label → count, in first-seen order. Null and absent values are skipped.
        """
        frequency: Dict[str, int] = {}
        for record in records:
            value = record.get(field)
            if value is None:
                continue
            label = stringify_label(value)
            frequency[label] = frequency.get(label, 0) + 1
        return frequency

    def build_chart(self, records: List[Record], field: str) -> Optional[FrequencyChart]:
        """Bar chart for one field, None when the field was never filled in"""
        frequency = self.frequency_distribution(records, field)
        if not frequency:
            logger.debug(f"No values observed for field '{field}', skipping chart")
            return None

        return FrequencyChart(
            title=field,
            type="bar",
            data=[ChartPoint(label=label, value=count) for label, count in frequency.items()]
        )
