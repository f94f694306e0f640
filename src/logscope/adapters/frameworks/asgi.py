"""ASGI generic adapter for dashboard endpoints.

This adapter provides a framework-agnostic ASGI application that can be used
with any ASGI server (uvicorn, hypercorn, daphne) without requiring FastAPI
as a dependency.
"""

import json
import logging
from collections.abc import Callable, Coroutine
from typing import Any
from urllib.parse import parse_qs

from logscope.adapters.frameworks.query_params import (
    _parse_criteria_params,
    _parse_page_param,
    _parse_sort_params,
)
from logscope.core.aggregation import with_percentages
from logscope.core.encoding.ndjson import (
    encode_records,
    encode_view,
    filtered_stats_to_dict,
    global_summary_to_dict,
    legend_entry_to_dict,
)
from logscope.core.pipeline import LogPipeline

logger = logging.getLogger(__name__)

# ASGI type aliases
Scope = dict[str, Any]
Receive = Callable[[], Coroutine[Any, Any, dict[str, Any]]]
Send = Callable[[dict[str, Any]], Coroutine[Any, Any, None]]
ASGIApp = Callable[[Scope, Receive, Send], Coroutine[Any, Any, None]]

Headers = list[tuple[bytes, bytes]]


def _parse_query_params(scope: Scope) -> dict[str, list[str]]:
    """Parse query string from ASGI scope into parameter dictionary.

    Args:
        scope: ASGI scope dictionary containing request metadata.

    Returns:
        Dictionary mapping parameter names to lists of values.
        Returns empty dict if query_string is missing or empty.
    """
    query_string = scope.get("query_string", b"").decode(errors="replace")
    return parse_qs(query_string)


async def _send_response(
    send: Send,
    status: int,
    content_type: str,
    body: str,
    extra_headers: Headers | None = None,
) -> None:
    """Send an HTTP response with headers and body.

    Args:
        send: ASGI send callable for writing response.
        status: HTTP status code.
        content_type: Content-Type header value.
        body: Response body as string (will be encoded to bytes).
        extra_headers: Additional raw headers.
    """
    headers = [(b"content-type", content_type.encode())]
    headers.extend(extra_headers or [])
    await send({"type": "http.response.start", "status": status, "headers": headers})
    await send({"type": "http.response.body", "body": body.encode()})


async def _handle_endpoint(
    send: Send,
    endpoint_func: Callable[[], tuple[str, Headers]],
    content_type: str,
    log_message: str,
) -> None:
    """Execute an endpoint function with error handling and send response.

    Args:
        send: ASGI send callable for writing response.
        endpoint_func: Function returning the response body and extra headers.
        content_type: Content-Type header for success response.
        log_message: Message to log on error.
    """
    try:
        body, headers = endpoint_func()
    except Exception:
        logger.exception(log_message)
        error_body = json.dumps({"error": "Internal Server Error"})
        await _send_response(send, 500, "application/json", error_body)
        return
    await _send_response(send, 200, content_type, body, headers)


def create_asgi_app(pipeline: LogPipeline) -> ASGIApp:
    """Create an ASGI app with /records, /view, /stats and /top endpoints.

    All endpoints accept the filter parameters ``q``, ``start``, ``end``
    (``YYYY-MM-DD``) and ``unique``. ``/records`` and ``/view`` also accept
    ``sort``, ``direction`` and ``page``.

    Args:
        pipeline: Pipeline computing the derived values.

    Returns:
        ASGI application callable.
    """

    def records(params: dict[str, list[str]]) -> tuple[str, Headers]:
        page = pipeline.page(
            _parse_criteria_params(params),
            _parse_sort_params(params),
            _parse_page_param(params),
        )
        headers = [
            (b"x-total-items", str(page.total_items).encode()),
            (b"x-total-pages", str(page.total_pages).encode()),
            (b"x-page", str(page.page_index).encode()),
        ]
        return encode_records(page.items), headers

    def view(params: dict[str, list[str]]) -> tuple[str, Headers]:
        result = pipeline.view(
            _parse_criteria_params(params),
            _parse_sort_params(params),
            _parse_page_param(params),
        )
        return encode_view(result), []

    def stats(params: dict[str, list[str]]) -> tuple[str, Headers]:
        criteria = _parse_criteria_params(params)
        body = {
            "stats": filtered_stats_to_dict(pipeline.filtered_stats(criteria)),
            "global": global_summary_to_dict(pipeline.global_summary()),
        }
        return json.dumps(body), []

    def top(params: dict[str, list[str]]) -> tuple[str, Headers]:
        criteria = _parse_criteria_params(params)
        total = len(pipeline.filtered(criteria))
        entries = with_percentages(pipeline.top_buckets(criteria), total)
        body = {
            "field": pipeline.config.aggregate_field,
            "total": total,
            "top": [legend_entry_to_dict(e) for e in entries],
        }
        return json.dumps(body), []

    routes = {
        "/records": (records, "application/x-ndjson"),
        "/view": (view, "application/json"),
        "/stats": (stats, "application/json"),
        "/top": (top, "application/json"),
    }

    async def app(scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return

        route = routes.get(scope["path"])
        if route is None:
            await _send_response(send, 404, "text/plain", "Not Found")
            return

        handler, content_type = route
        params = _parse_query_params(scope)
        await _handle_endpoint(
            send,
            lambda: handler(params),
            content_type,
            f"Error handling {scope['path']} endpoint",
        )

    return app
