"""
FastAPI Application - Table Explorer API

Lists DynamoDB tables, returns their rows, and answers questions about a
table's data with an LLM.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from table_explorer.api import api_router
from table_explorer.config.dynamodb import create_dynamodb_resource
from table_explorer.config.settings import settings
from table_explorer.core.errors import TableExplorerError
from table_explorer.services.llm_service import LLMService
from table_explorer.services.prompt_service import PromptAugmentationService
from table_explorer.services.table_store_service import TableStoreService
from table_explorer.utils.logger import configure_from_settings

logger = configure_from_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown logic:
    - Initialize the table store gateway (DynamoDB)
    - Initialize the LLM service and the prompt augmentation service
    """
    # ========================================================================
    # STARTUP: Initialize all components once
    # ========================================================================

    logger.info("🚀 Starting application...")

    app.state.table_store = None
    app.state.prompt_service = None

    try:
        app.state.table_store = TableStoreService(create_dynamodb_resource())
        logger.info("✅ Table store initialized")
    except Exception as e:
        logger.warning(f"⚠️  Could not initialize table store: {e}")
        logger.warning("   The app will start, but table routes will fail until configuration is fixed.")

    try:
        settings.validate_llm_config()
    except ValueError as e:
        logger.warning(f"⚠️  LLM configuration problem: {e}")
        logger.warning("   Prompt requests will fail until it is fixed.")

    if app.state.table_store is not None:
        app.state.prompt_service = PromptAugmentationService(
            table_store=app.state.table_store,
            llm_service=LLMService(),
        )
        logger.info(
            f"✅ Prompt service initialized (min interval {settings.PROMPT_MIN_INTERVAL_MS}ms)"
        )

    logger.info("✅ Application ready to serve requests")

    yield

    logger.info("👋 Application shutting down")


# ============================================================================
# FASTAPI APPLICATION INITIALIZATION
# ============================================================================

app = FastAPI(
    title="Table Explorer API",
    description="Browse DynamoDB tables and ask an LLM about their data",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TableExplorerError)
async def table_explorer_error_handler(request: Request, exc: TableExplorerError):
    """Every application error becomes a 500 with the raw message and its kind."""
    logger.error(f"{request.method} {request.url.path} failed: {exc.kind}: {exc}")
    return JSONResponse(status_code=500, content={"error": str(exc), "kind": exc.kind})


# Include API routes
app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
