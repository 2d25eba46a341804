"""
Application Runner

Simple script to run the FastAPI application.
Usage: python run.py
"""

import uvicorn

from table_explorer.config.settings import settings

if __name__ == "__main__":
    uvicorn.run("table_explorer.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=True)
