"""
Table Routes
"""

from fastapi import APIRouter, Request
from table_explorer.api.dependencies import get_table_store
from table_explorer.controllers.table_controller import describe_table, get_table_data, list_tables
from table_explorer.models.schemas import (
    ErrorResponse,
    TableDataResponse,
    TableDescriptionResponse,
    TableListResponse,
)

router = APIRouter(prefix="/api", responses={500: {"model": ErrorResponse}})


@router.get("/tables", response_model=TableListResponse)
def list_tables_api(request: Request):
    """
    List Tables Endpoint

    Returns every table name known to the store.
    """
    return list_tables(get_table_store(request))


@router.get("/getdata/{tableName}", response_model=TableDataResponse)
def get_table_data_api(request: Request, tableName: str):
    """
    Table Data Endpoint

    Returns every row of the table (full scan, all pages).
    """
    return get_table_data(tableName, get_table_store(request))


@router.get("/describe/{tableName}", response_model=TableDescriptionResponse)
def describe_table_api(request: Request, tableName: str):
    """
    Describe Table Endpoint

    Returns the store's description of the table (key schema, item count).
    """
    return describe_table(tableName, get_table_store(request))
