"""Example FastAPI application serving a log dashboard.

Run with:
    uvicorn examples.fastapi_example:app --reload

Endpoints:
    /records              - NDJSON page of records (newest first)
    /records?q=<text>     - Records whose country, organization or address match
    /records?sort=city&direction=asc&page=2
    /view                 - Full dashboard document (page, stats, top, legend)
    /stats                - Filtered and global statistics
    /top                  - Top countries with percentages

Data:
    Records and global stats are loaded once at startup from the JSON
    files named by LOGSCOPE_RECORDS and LOGSCOPE_STATS. Missing files
    leave the dashboard empty.
"""

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from logscope.adapters.feeds import Fetcher, refresh
from logscope.adapters.frameworks.fastapi import create_dashboard_router
from logscope.adapters.storage.in_memory import (
    InMemoryRecordStore,
    InMemoryStatsStore,
)
from logscope.core.config import PipelineConfig
from logscope.core.pipeline import LogPipeline

logger = logging.getLogger(__name__)

record_store = InMemoryRecordStore()
stats_store = InMemoryStatsStore()
pipeline = LogPipeline(record_store, stats_store, PipelineConfig(page_size=25))


def _file_fetcher(env_var: str) -> Fetcher:
    def fetch() -> bytes:
        return Path(os.environ[env_var]).read_bytes()

    return fetch


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    records, stats = refresh(
        record_store,
        stats_store,
        _file_fetcher("LOGSCOPE_RECORDS"),
        _file_fetcher("LOGSCOPE_STATS"),
    )
    logger.info(
        "Loaded %d records (%s), stats %s",
        len(records.value),
        records.status.value,
        stats.status.value,
    )
    yield


app = FastAPI(title="Log Dashboard Example", lifespan=lifespan)
app.include_router(create_dashboard_router(pipeline))
