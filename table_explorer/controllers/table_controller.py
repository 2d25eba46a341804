"""
Table Controller

Handles the table listing, table data and table description endpoints.
Store errors propagate to the application's exception handler.
"""

import logging
import time

from table_explorer.models.schemas import (
    TableDataResponse,
    TableDescriptionResponse,
    TableListResponse,
)
from table_explorer.services.table_store_service import TableStoreService

logger = logging.getLogger("table_explorer")


def list_tables(table_store: TableStoreService) -> TableListResponse:
    """Return the names of every table in the store."""
    return TableListResponse(TableNames=table_store.list_tables())


def get_table_data(table_name: str, table_store: TableStoreService) -> TableDataResponse:
    """
    Return every row of ``table_name``.

    Args:
        table_name: Table identifier from the route
        table_store: Table store gateway

    Returns:
        TableDataResponse with the rows and their count
    """
    t0 = time.perf_counter()
    rows = table_store.get_all_rows(table_name)
    logger.info(f"[getdata] table={table_name} rows={len(rows)} in {time.perf_counter() - t0:.2f}s")
    return TableDataResponse(Items=rows, Count=len(rows))


def describe_table(table_name: str, table_store: TableStoreService) -> TableDescriptionResponse:
    return TableDescriptionResponse(Table=table_store.describe_table(table_name))
