"""NDJSON and JSON encoders for records and dashboard views."""

import json
from collections.abc import Iterable
from typing import Any

from logscope.core.models import (
    DashboardView,
    FilteredStats,
    GlobalSummary,
    LegendEntry,
    LogRecord,
    Page,
)


def record_to_dict(record: LogRecord) -> dict[str, str]:
    """Convert a record to its wire representation."""
    return {
        "ip": record.address,
        "timestamp": record.timestamp,
        "country": record.country,
        "org": record.organization,
        "city": record.city,
        "region": record.region,
    }


def encode_records(records: Iterable[LogRecord]) -> str:
    """Encode records to newline-delimited JSON.

    Args:
        records: An iterable of LogRecord objects.

    Returns:
        NDJSON string with one JSON object per line.
        Empty string if no records.
    """
    lines = [json.dumps(record_to_dict(record)) for record in records]

    if not lines:
        return ""

    return "\n".join(lines) + "\n"


def legend_entry_to_dict(entry: LegendEntry) -> dict[str, Any]:
    return {"key": entry.key, "count": entry.count, "percentage": entry.percentage}


def _page_to_dict(page: Page) -> dict[str, Any]:
    return {
        "page": page.page_index,
        "page_size": page.page_size,
        "total_items": page.total_items,
        "total_pages": page.total_pages,
        "items": [record_to_dict(r) for r in page.items],
    }


def filtered_stats_to_dict(stats: FilteredStats) -> dict[str, int]:
    return {
        "total_hits": stats.total_hits,
        "unique_ips": stats.unique_address_count,
        "unique_countries": stats.unique_country_count,
    }


def global_summary_to_dict(summary: GlobalSummary) -> dict[str, Any]:
    return {
        "total_hits": summary.total_hits,
        "unique_users": summary.unique_users,
        "unique_countries": summary.unique_countries,
        "daily": {
            day: {
                "new_hits": stats.new_hits,
                "new_unique_ips": len(stats.new_unique_addresses),
                "new_unique_countries": len(stats.new_unique_countries),
            }
            for day, stats in summary.daily
        },
    }


def view_to_dict(view: DashboardView) -> dict[str, Any]:
    """Convert a dashboard view to a JSON-serializable dict."""
    criteria = view.criteria
    interval = criteria.interval
    date_range = view.date_range
    return {
        "criteria": {
            "query": criteria.query,
            "start": interval.start.isoformat() if interval else None,
            "end": interval.end.isoformat() if interval else None,
            "unique": criteria.dedup_by_address,
        },
        "sort": {"field": view.sort.field, "direction": view.sort.direction},
        "pending": view.pending,
        "stats": filtered_stats_to_dict(view.filtered_stats),
        "global": global_summary_to_dict(view.global_summary),
        "top": [legend_entry_to_dict(e) for e in view.top_buckets],
        "legend": [legend_entry_to_dict(e) for e in view.legend],
        "date_range": (
            {
                "earliest": date_range.earliest.isoformat(),
                "latest": date_range.latest.isoformat(),
            }
            if date_range
            else None
        ),
        "page": _page_to_dict(view.page),
    }


def encode_view(view: DashboardView) -> str:
    """Encode a dashboard view as a JSON document."""
    return json.dumps(view_to_dict(view))
