"""
Health Check Routes
"""

from fastapi import APIRouter, Request
from table_explorer.controllers.health_controller import check_health
from table_explorer.models.schemas import HealthCheckResponse

router = APIRouter()


@router.get("/health", response_model=HealthCheckResponse)
def health_check(request: Request):
    """
    Health Check Endpoint

    Verifies that the table store answers and the LLM provider is configured.
    """
    return check_health(getattr(request.app.state, "table_store", None))
