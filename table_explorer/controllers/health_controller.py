"""
Health Check Controller

Handles health check endpoint logic.
"""

import logging
from datetime import datetime
from typing import Optional

from table_explorer.config.settings import settings
from table_explorer.core.errors import TableExplorerError
from table_explorer.models.schemas import HealthCheckResponse
from table_explorer.services.table_store_service import TableStoreService

logger = logging.getLogger("table_explorer")


def check_health(table_store: Optional[TableStoreService]) -> HealthCheckResponse:
    """
    Health Check Controller

    Verifies that the table store answers and the LLM provider is configured.
    """
    store_status = {"connected": False, "message": "", "error": None}
    llm_status = {"configured": False, "message": "", "error": None}

    if table_store is None:
        store_status["message"] = "Table store not initialized"
    else:
        try:
            table_store.ping()
            store_status = {"connected": True, "message": "Table store reachable", "error": None}
        except TableExplorerError as e:
            store_status = {"connected": False, "message": "Table store unreachable", "error": str(e)}
            logger.warning(f"Health Check: table store unreachable - {e}")

    try:
        settings.validate_llm_config()
        llm_status = {
            "configured": True,
            "message": f"{settings.llm_provider} / {settings.LLM_MODEL}",
            "error": None,
        }
    except ValueError as e:
        llm_status = {"configured": False, "message": "LLM not configured", "error": str(e)}

    overall_status = "healthy" if store_status["connected"] and llm_status["configured"] else "unhealthy"

    return HealthCheckResponse(
        status=overall_status,
        store=store_status,
        llm=llm_status,
        timestamp=datetime.now().isoformat()
    )
