"""
API Package - Router Aggregation
"""

from fastapi import APIRouter
from table_explorer.api.routes import health, tables, prompts

# Create main API router
api_router = APIRouter()

# Include all route modules
api_router.include_router(health.router, tags=["health"])
api_router.include_router(tables.router, tags=["tables"])
api_router.include_router(prompts.router, tags=["prompts"])
