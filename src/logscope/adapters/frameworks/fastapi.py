"""FastAPI adapter for dashboard endpoints.

Query values are declared as raw strings and run through the same lenient
parsers as the ASGI adapter, so bad values fall back to defaults instead of
being rejected by request validation.
"""

from fastapi import APIRouter, Query, Response
from fastapi.responses import JSONResponse

from logscope.adapters.frameworks.query_params import (
    _parse_criteria_params,
    _parse_page_param,
    _parse_sort_params,
)
from logscope.core.aggregation import with_percentages
from logscope.core.encoding.ndjson import (
    encode_records,
    filtered_stats_to_dict,
    global_summary_to_dict,
    legend_entry_to_dict,
    view_to_dict,
)
from logscope.core.pipeline import LogPipeline


def _params(**values: str | None) -> dict[str, list[str]]:
    """Shape FastAPI query values like ``parse_qs`` output."""
    return {name: [value] for name, value in values.items() if value is not None}


def create_dashboard_router(pipeline: LogPipeline) -> APIRouter:
    """Create a FastAPI router with /records, /view, /stats and /top endpoints.

    Args:
        pipeline: Pipeline computing the derived values.

    Returns:
        APIRouter with the dashboard endpoints configured.
    """
    router = APIRouter()

    @router.get("/records")
    async def get_records(
        q: str | None = Query(default=None),
        start: str | None = Query(default=None),
        end: str | None = Query(default=None),
        unique: str | None = Query(default=None),
        sort: str | None = Query(default=None),
        direction: str | None = Query(default=None),
        page: str | None = Query(default=None),
    ) -> Response:
        """Return one page of records in NDJSON format."""
        params = _params(
            q=q,
            start=start,
            end=end,
            unique=unique,
            sort=sort,
            direction=direction,
            page=page,
        )
        result = pipeline.page(
            _parse_criteria_params(params),
            _parse_sort_params(params),
            _parse_page_param(params),
        )
        return Response(
            content=encode_records(result.items),
            media_type="application/x-ndjson",
            headers={
                "x-total-items": str(result.total_items),
                "x-total-pages": str(result.total_pages),
                "x-page": str(result.page_index),
            },
        )

    @router.get("/view")
    async def get_view(
        q: str | None = Query(default=None),
        start: str | None = Query(default=None),
        end: str | None = Query(default=None),
        unique: str | None = Query(default=None),
        sort: str | None = Query(default=None),
        direction: str | None = Query(default=None),
        page: str | None = Query(default=None),
    ) -> JSONResponse:
        """Return the complete dashboard view as JSON."""
        params = _params(
            q=q,
            start=start,
            end=end,
            unique=unique,
            sort=sort,
            direction=direction,
            page=page,
        )
        view = pipeline.view(
            _parse_criteria_params(params),
            _parse_sort_params(params),
            _parse_page_param(params),
        )
        return JSONResponse(content=view_to_dict(view))

    @router.get("/stats")
    async def get_stats(
        q: str | None = Query(default=None),
        start: str | None = Query(default=None),
        end: str | None = Query(default=None),
        unique: str | None = Query(default=None),
    ) -> JSONResponse:
        """Return filtered and global summary statistics."""
        criteria = _parse_criteria_params(
            _params(q=q, start=start, end=end, unique=unique)
        )
        return JSONResponse(
            content={
                "stats": filtered_stats_to_dict(pipeline.filtered_stats(criteria)),
                "global": global_summary_to_dict(pipeline.global_summary()),
            }
        )

    @router.get("/top")
    async def get_top(
        q: str | None = Query(default=None),
        start: str | None = Query(default=None),
        end: str | None = Query(default=None),
        unique: str | None = Query(default=None),
    ) -> JSONResponse:
        """Return the top aggregate buckets with percentages."""
        criteria = _parse_criteria_params(
            _params(q=q, start=start, end=end, unique=unique)
        )
        total = len(pipeline.filtered(criteria))
        entries = with_percentages(pipeline.top_buckets(criteria), total)
        return JSONResponse(
            content={
                "field": pipeline.config.aggregate_field,
                "total": total,
                "top": [legend_entry_to_dict(e) for e in entries],
            }
        )

    return router
