"""
Data Models for API Request/Response

This module defines Pydantic models for request and response validation.
Field names follow the table store's wire shape (TableNames, Items).
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel


class TableListResponse(BaseModel):
    """
    Response model for GET /api/tables.
    """
    TableNames: List[str]


class TableDataResponse(BaseModel):
    """
    Response model for GET /api/getdata/{tableName}.
    """
    Items: List[Dict[str, Any]]
    Count: int


class TableDescriptionResponse(BaseModel):
    """
    Response model for GET /api/describe/{tableName}.
    """
    Table: Dict[str, Any]


class PromptRequest(BaseModel):
    """
    Request model for POST /api/prompts/{tableName}.
    """
    prompt: str


class PromptResponse(BaseModel):
    """
    Response model for POST /api/prompts/{tableName}.
    """
    response: str


class ErrorResponse(BaseModel):
    """
    Body returned with every 500.
    """
    error: str
    kind: Optional[str] = None


class HealthCheckResponse(BaseModel):
    """
    Response model for the /health API endpoint.
    """
    status: str
    store: dict
    llm: dict
    timestamp: str
