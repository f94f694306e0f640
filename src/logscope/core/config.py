"""Pipeline configuration."""

from dataclasses import dataclass

from logscope.core.aggregation import DEFAULT_LEGEND_THRESHOLD
from logscope.core.debounce import DEFAULT_DELAY
from logscope.core.models import RECORD_FIELDS


@dataclass(frozen=True)
class PipelineConfig:
    """Fixed parameters for a pipeline's lifetime.

    Attributes:
        page_size: Records per table page.
        top_n: Number of aggregate buckets shown on the chart.
        debounce_delay: Pause, in scheduler time units, before a query
            change is committed.
        legend_threshold: Percentage at or below which a bucket is listed
            in the separate legend.
        aggregate_field: Record field the chart groups by.
    """

    page_size: int = 50
    top_n: int = 10
    debounce_delay: float = DEFAULT_DELAY
    legend_threshold: float = DEFAULT_LEGEND_THRESHOLD
    aggregate_field: str = "country"

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be a positive integer")
        if self.top_n < 1:
            raise ValueError("top_n must be a positive integer")
        if self.debounce_delay < 0:
            raise ValueError("debounce_delay must not be negative")
        if self.aggregate_field not in RECORD_FIELDS:
            raise ValueError(f"unknown aggregate field: {self.aggregate_field!r}")
